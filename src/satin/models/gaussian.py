from __future__ import annotations

import math

from pydantic import BaseModel, ConfigDict, field_validator


class GaussianResult(BaseModel):
    """Output power of one Gaussian beam at one saturation intensity."""

    model_config = ConfigDict(frozen=True)

    input_power: int
    output_power: float
    saturation_intensity: int

    @field_validator("input_power", "saturation_intensity")
    @classmethod
    def _validate_positive(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("GaussianResult input_power/saturation_intensity must be > 0.")
        return value

    @field_validator("output_power")
    @classmethod
    def _validate_output_power(cls, value: float) -> float:
        if not math.isfinite(value) or value < 0.0:
            raise ValueError("GaussianResult.output_power must be finite and >= 0.")
        return value

    @property
    def log_ratio(self) -> float:
        """ln(Pout / Pin)."""
        return math.log(self.output_power / self.input_power)

    @property
    def delta(self) -> float:
        """Pout - Pin in watts."""
        return self.output_power - self.input_power

    @property
    def sort_key(self) -> tuple[int, int]:
        return (self.input_power, self.saturation_intensity)
