from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class CarbonDioxideMode(str, Enum):
    """How CO2 is supplied to the main discharge."""

    MD = "MD"
    PI = "PI"


class LaserConfig(BaseModel):
    """One gain-medium configuration; drives exactly one report file."""

    model_config = ConfigDict(frozen=True)

    output_file: str = Field(
        pattern=r"^(md|pi)[a-z]{2}\.out$",
        description="Report file name, resolved against the output directory.",
    )
    small_signal_gain: float = Field(description="Small-signal gain of the discharge.")
    discharge_pressure: int = Field(description="Main discharge pressure in kPa.")
    carbon_dioxide: CarbonDioxideMode

    def __str__(self) -> str:
        return (
            f"{self.output_file}  {self.small_signal_gain}  "
            f"{self.discharge_pressure}  {self.carbon_dioxide.value}"
        )
