"""Gaussian-beam gain saturation sweeps for CO2 laser discharges."""

from satin.kernel import compute_output_power
from satin.models import CarbonDioxideMode, GaussianResult, LaserConfig, RunConfig, RuntimeCfg
from satin.pipeline import LaserOutcome, RunSummary, run
from satin.sweep import kernel_executor, sweep_configuration, sweep_saturation

__all__ = [
    "CarbonDioxideMode",
    "GaussianResult",
    "LaserConfig",
    "LaserOutcome",
    "RunConfig",
    "RunSummary",
    "RuntimeCfg",
    "compute_output_power",
    "kernel_executor",
    "run",
    "sweep_configuration",
    "sweep_saturation",
]
