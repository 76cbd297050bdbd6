from __future__ import annotations

import argparse
import logging
import time
from pathlib import Path

import yaml  # type: ignore[import-untyped]

from satin.data_io import read_input_powers, read_laser_table
from satin.models import RunConfig
from satin.pipeline import RunSummary, run
from satin.reporting import build_run_summary_payload, maybe_plot_gain_curves, write_json

logger = logging.getLogger("satin")

EXIT_SUCCESS = 0
EXIT_PARTIAL = 1
EXIT_FAILURE = 2
EXIT_OUTPUT_ERROR = 3


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="satin", description="Gaussian beam gain saturation sweeps for CO2 lasers"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    run_parser = subparsers.add_parser("run", help="Sweep every laser in the laser table")
    run_parser.add_argument("--config", type=Path, help="Path to YAML run config")
    run_parser.add_argument("--pin", type=Path, help="Input power list (default: pin.dat)")
    run_parser.add_argument("--laser", type=Path, help="Laser table (default: laser.dat)")
    run_parser.add_argument(
        "--out", type=Path, help="Report directory (default: working directory)"
    )
    run_parser.add_argument(
        "--summary-json", type=Path, help="Write a per-laser run summary to this JSON file."
    )
    run_parser.add_argument(
        "--plot-dir", type=Path, help="Write gain-curve SVGs here (needs matplotlib)."
    )
    run_parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging.")

    return parser.parse_args(argv)


def _load_config(path: Path | None) -> RunConfig:
    if path is None:
        return RunConfig()
    with path.open("r", encoding="utf-8") as fh:
        payload = yaml.safe_load(fh) or {}
    if not isinstance(payload, dict):
        msg = "Config file root must be a mapping/object."
        raise ValueError(msg)
    return RunConfig.model_validate(payload)


def _apply_overrides(cfg: RunConfig, args: argparse.Namespace) -> RunConfig:
    overrides: dict[str, Path] = {}
    if args.pin is not None:
        overrides["pin_file"] = args.pin
    if args.laser is not None:
        overrides["laser_file"] = args.laser
    if args.out is not None:
        overrides["output_dir"] = args.out
    return cfg.model_copy(update=overrides)


def _exit_code(summary: RunSummary) -> int:
    return {"success": EXIT_SUCCESS, "partial": EXIT_PARTIAL}.get(summary.status, EXIT_FAILURE)


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    if args.command != "run":
        return EXIT_FAILURE

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    start = time.perf_counter()
    try:
        cfg = _apply_overrides(_load_config(args.config), args)
        input_powers = read_input_powers(cfg.pin_file)
        lasers = read_laser_table(cfg.laser_file)
    except (ValueError, OSError, yaml.YAMLError) as exc:
        logger.error("Failed to read input data: %s", exc)
        return EXIT_FAILURE

    if not lasers:
        logger.error("No laser configurations found in %s", cfg.laser_file)
        return EXIT_FAILURE

    output_dir = cfg.output_dir or Path.cwd()
    try:
        output_dir.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        logger.error("Cannot create output directory %s: %s", output_dir, exc)
        return EXIT_FAILURE
    summary = run(input_powers, lasers, output_dir=output_dir, runtime=cfg.runtime)

    for outcome in summary.succeeded:
        logger.info("Wrote %s", outcome.path)

    output_error = False
    if args.plot_dir is not None:
        try:
            for outcome in summary.succeeded:
                maybe_plot_gain_curves(outcome.laser, outcome.results, out_dir=args.plot_dir)
        except OSError as exc:
            logger.error("Failed to write gain-curve plots: %s", exc)
            output_error = True
    if args.summary_json is not None:
        try:
            write_json(args.summary_json, build_run_summary_payload(summary))
        except OSError as exc:
            logger.error("Failed to write run summary: %s", exc)
            output_error = True

    if summary.failed:
        logger.error(
            "%d of %d laser configurations failed", len(summary.failed), len(summary.outcomes)
        )
    logger.info("The time was %.3f seconds", time.perf_counter() - start)
    exit_code = _exit_code(summary)
    # Report failures outrank a missing plot or summary file.
    if output_error and exit_code == EXIT_SUCCESS:
        return EXIT_OUTPUT_ERROR
    return exit_code


if __name__ == "__main__":
    raise SystemExit(main())
