from __future__ import annotations

import logging
import time
from collections.abc import Sequence
from concurrent.futures import Executor, Future, ThreadPoolExecutor
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Literal

from satin.models import GaussianResult, LaserConfig, RuntimeCfg
from satin.reporting.report import render_report, write_report
from satin.sweep import kernel_executor, sweep_configuration

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class LaserOutcome:
    """Per-laser result of a run: the report path on success, the error otherwise."""

    laser: LaserConfig
    path: Path | None = None
    error: BaseException | None = None
    results: tuple[GaussianResult, ...] = ()

    @property
    def ok(self) -> bool:
        return self.error is None and self.path is not None


@dataclass(frozen=True, slots=True)
class RunSummary:
    outcomes: tuple[LaserOutcome, ...]
    elapsed_s: float = 0.0

    @property
    def succeeded(self) -> tuple[LaserOutcome, ...]:
        return tuple(outcome for outcome in self.outcomes if outcome.ok)

    @property
    def failed(self) -> tuple[LaserOutcome, ...]:
        return tuple(outcome for outcome in self.outcomes if not outcome.ok)

    @property
    def status(self) -> Literal["success", "partial", "failure"]:
        if self.outcomes and not self.failed:
            return "success"
        if self.succeeded:
            return "partial"
        return "failure"


def process_laser(
    input_powers: Sequence[int],
    laser: LaserConfig,
    *,
    output_dir: Path,
    runtime: RuntimeCfg | None = None,
    kernel_pool: Executor | None = None,
) -> LaserOutcome:
    """Sweep one laser and persist its report; exceptions propagate to the caller."""
    logger.debug("Processing laser %s", laser)
    started = datetime.now()
    results = sweep_configuration(
        input_powers, laser, runtime=runtime, kernel_pool=kernel_pool
    )
    text = render_report(laser, results, started=started, finished=datetime.now())
    path = write_report(output_dir / laser.output_file, text)
    return LaserOutcome(laser=laser, path=path, results=tuple(results))


@dataclass(slots=True)
class _Submission:
    laser: LaserConfig
    future: Future[LaserOutcome] | None = None
    error: BaseException | None = None


def run(
    input_powers: Sequence[int],
    lasers: Sequence[LaserConfig],
    *,
    output_dir: Path | None = None,
    runtime: RuntimeCfg | None = None,
) -> RunSummary:
    """Process every laser concurrently; one laser's failure never stops the others.

    Every kernel call of the run goes through a single kernel pool, so a
    process pool is spawned once rather than once per sweep.
    """
    runtime = runtime or RuntimeCfg()
    base_dir = (output_dir or Path.cwd()).resolve()
    start = time.perf_counter()

    submissions: list[_Submission] = []
    claimed: set[str] = set()
    with kernel_executor(runtime) as kernel_pool, ThreadPoolExecutor(
        max_workers=runtime.laser_workers, thread_name_prefix="satin-laser"
    ) as pool:
        for laser in lasers:
            if laser.output_file in claimed:
                submissions.append(
                    _Submission(
                        laser=laser,
                        error=ValueError(
                            f"Output file {laser.output_file} is already claimed by "
                            "another laser in this run."
                        ),
                    )
                )
                continue
            claimed.add(laser.output_file)
            future = pool.submit(
                process_laser,
                input_powers,
                laser,
                output_dir=base_dir,
                runtime=runtime,
                kernel_pool=kernel_pool,
            )
            submissions.append(_Submission(laser=laser, future=future))

        outcomes: list[LaserOutcome] = []
        for submission in submissions:
            if submission.future is not None:
                try:
                    outcome = submission.future.result()
                except Exception as exc:
                    outcome = LaserOutcome(laser=submission.laser, error=exc)
            else:
                outcome = LaserOutcome(laser=submission.laser, error=submission.error)

            if outcome.ok:
                logger.debug("Successfully created %s", outcome.path)
            else:
                logger.error("Error processing %s: %s", outcome.laser.output_file, outcome.error)
            outcomes.append(outcome)

    return RunSummary(outcomes=tuple(outcomes), elapsed_s=time.perf_counter() - start)
