from __future__ import annotations

import logging
import multiprocessing
from collections.abc import Sequence
from concurrent.futures import Executor, ProcessPoolExecutor, ThreadPoolExecutor, as_completed

from satin.constants import SATURATION_INTENSITIES
from satin.kernel import compute_output_power
from satin.models import GaussianResult, LaserConfig, RuntimeCfg

logger = logging.getLogger(__name__)


def kernel_executor(runtime: RuntimeCfg | None = None) -> Executor:
    """Build the pool that runs kernel calls; share one per run, not one per sweep."""
    runtime = runtime or RuntimeCfg()
    if runtime.kernel_executor == "process":
        # fork() is unsafe from a multi-threaded caller.
        return ProcessPoolExecutor(
            max_workers=runtime.kernel_workers, mp_context=multiprocessing.get_context("spawn")
        )
    return ThreadPoolExecutor(
        max_workers=runtime.kernel_workers, thread_name_prefix="satin-kernel"
    )


def sweep_saturation(
    input_power: int,
    small_signal_gain: float,
    *,
    executor: Executor | None = None,
) -> list[GaussianResult]:
    """Run the kernel once per saturation intensity on the fixed grid.

    Without ``executor`` a default kernel pool is opened for this call only.
    Results come back in completion order; callers that need a stable order
    sort them.
    """
    if executor is None:
        with kernel_executor() as pool:
            return sweep_saturation(input_power, small_signal_gain, executor=pool)

    futures = {
        executor.submit(
            compute_output_power, input_power, small_signal_gain, saturation_intensity
        ): saturation_intensity
        for saturation_intensity in SATURATION_INTENSITIES
    }
    results: list[GaussianResult] = []
    for future in as_completed(futures):
        results.append(
            GaussianResult(
                input_power=input_power,
                output_power=future.result(),
                saturation_intensity=futures[future],
            )
        )
    return results


def sweep_configuration(
    input_powers: Sequence[int],
    laser: LaserConfig,
    *,
    runtime: RuntimeCfg | None = None,
    kernel_pool: Executor | None = None,
) -> list[GaussianResult]:
    """Sweep every input power for one laser and return rows in report order."""
    runtime = runtime or RuntimeCfg()
    if not input_powers:
        return []
    if kernel_pool is None:
        with kernel_executor(runtime) as pool:
            return sweep_configuration(input_powers, laser, runtime=runtime, kernel_pool=pool)

    logger.debug("Sweeping %d input powers for %s", len(input_powers), laser)
    collected: list[GaussianResult] = []
    with ThreadPoolExecutor(
        max_workers=runtime.power_workers, thread_name_prefix="satin-power"
    ) as pool:
        futures = [
            pool.submit(
                sweep_saturation, input_power, laser.small_signal_gain, executor=kernel_pool
            )
            for input_power in input_powers
        ]
        for future in as_completed(futures):
            collected.extend(future.result())

    return sorted(collected, key=lambda result: result.sort_key)
