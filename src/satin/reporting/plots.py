from __future__ import annotations

import logging
from collections.abc import Sequence
from importlib import import_module
from pathlib import Path
from typing import Any

from satin.models import GaussianResult, LaserConfig

logger = logging.getLogger(__name__)


def maybe_plot_gain_curves(
    laser: LaserConfig, results: Sequence[GaussianResult], *, out_dir: Path
) -> Path | None:
    """Plot Pout against Pin for every saturation intensity as an SVG.

    Returns ``None`` when matplotlib is not installed.
    """
    try:
        plt: Any = import_module("matplotlib.pyplot")
    except ModuleNotFoundError:
        logger.warning("matplotlib is not installed; skipping plot for %s", laser.output_file)
        return None

    out_dir.mkdir(parents=True, exist_ok=True)
    plot_path = out_dir / f"{Path(laser.output_file).stem}_gain_curves.svg"

    curves: dict[int, list[GaussianResult]] = {}
    for result in results:
        curves.setdefault(result.saturation_intensity, []).append(result)

    fig, ax = plt.subplots(figsize=(8, 4.5))
    for saturation_intensity, rows in sorted(curves.items()):
        rows = sorted(rows, key=lambda row: row.input_power)
        ax.plot(
            [row.input_power for row in rows],
            [row.output_power for row in rows],
            marker="o",
            label=f"{saturation_intensity} W/cm2",
        )
    ax.set_xlabel("Input power (W)")
    ax.set_ylabel("Output power (W)")
    ax.set_title(
        f"{laser.output_file}: {laser.discharge_pressure} kPa, "
        f"gain {laser.small_signal_gain}, CO2 via {laser.carbon_dioxide.value}"
    )
    ax.legend(fontsize="small", ncol=2)
    fig.tight_layout()
    fig.savefig(plot_path, format="svg")
    plt.close(fig)
    return plot_path
