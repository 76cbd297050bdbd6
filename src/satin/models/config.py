from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator


class RuntimeCfg(BaseModel):
    """Worker pool sizing per nesting level; ``None`` leaves it to the executor."""

    model_config = ConfigDict(frozen=True)

    laser_workers: int | None = None
    power_workers: int | None = None
    kernel_workers: int | None = None
    kernel_executor: Literal["thread", "process"] = Field(
        default="process",
        description=(
            "Executor shared by every kernel call of a run. "
            "'thread' keeps everything in one process but serialises on the GIL."
        ),
    )

    @field_validator("laser_workers", "power_workers", "kernel_workers")
    @classmethod
    def _validate_workers(cls, value: int | None) -> int | None:
        if value is not None and value < 1:
            raise ValueError("RuntimeCfg worker counts must be >= 1.")
        return value


class RunConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    pin_file: Path = Path("pin.dat")
    laser_file: Path = Path("laser.dat")
    output_dir: Path | None = None
    runtime: RuntimeCfg = Field(default_factory=RuntimeCfg)
