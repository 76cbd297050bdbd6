from satin.models.config import RunConfig, RuntimeCfg
from satin.models.gaussian import GaussianResult
from satin.models.laser import CarbonDioxideMode, LaserConfig

__all__ = [
    "CarbonDioxideMode",
    "GaussianResult",
    "LaserConfig",
    "RunConfig",
    "RuntimeCfg",
]
