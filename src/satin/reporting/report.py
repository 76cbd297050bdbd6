from __future__ import annotations

import logging
import os
import tempfile
from collections.abc import Sequence
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from pathlib import Path

from satin.errors import ReportWriteError
from satin.models import GaussianResult, LaserConfig

logger = logging.getLogger(__name__)

_HEADER = (
    f"{'Pin':<10}{'Pout':<21}{'Sat. Int':<14}{'ln(Pout/Pin)':<15}{'Pout-Pin':<10}\n"
    f"{'(watts)':<10}{'(watts)':<21}{'(watts/cm2)':<14}{'':<15}{'(watts)':<10}\n"
)
_MILLI = Decimal("0.001")


def format_timestamp(moment: datetime) -> str:
    """Render as ``d MMM yyyy HH:mm:ss.SSS``."""
    return f"{moment.day} {moment:%b %Y %H:%M:%S}.{moment.microsecond // 1000:03d}"


def _decimal(value: float) -> Decimal:
    # Shortest repr, so 152.0005 rounds as written rather than as stored.
    return Decimal(repr(value))


def format_row(result: GaussianResult) -> str:
    """Render one table row; values are rounded half-up to three decimals."""
    output_power = _decimal(result.output_power)
    delta = output_power - Decimal(result.input_power)
    return (
        f"{result.input_power:<10}"
        f"{output_power.quantize(_MILLI, ROUND_HALF_UP):<21}"
        f"{result.saturation_intensity:<14}"
        f"{_decimal(result.log_ratio).quantize(_MILLI, ROUND_HALF_UP):>12}"
        f"{delta.quantize(_MILLI, ROUND_HALF_UP):>13}\n"
    )


def render_report(
    laser: LaserConfig,
    results: Sequence[GaussianResult],
    *,
    started: datetime,
    finished: datetime,
) -> str:
    lines = [
        f"Start date: {format_timestamp(started)}\n",
        "\n",
        "Gaussian Beam\n",
        "\n",
        f"Pressure in Main Discharge = {laser.discharge_pressure}kPa\n",
        f"Small-signal Gain = {laser.small_signal_gain}\n",
        f"CO2 via {laser.carbon_dioxide.value}\n",
        "\n",
        _HEADER,
    ]
    lines.extend(format_row(result) for result in results)
    lines.append(f"\nEnd date: {format_timestamp(finished)}\n")
    return "".join(lines)


def write_report(path: Path, text: str) -> Path:
    """Write ``text`` to ``path`` atomically and return the absolute path.

    The content goes to a temporary sibling first; on any failure the
    temporary file is removed and an existing report is left untouched.
    """
    target = path.resolve()
    tmp_name: str | None = None
    try:
        with tempfile.NamedTemporaryFile(
            "w",
            encoding="utf-8",
            dir=target.parent,
            prefix=f".{target.name}.",
            suffix=".tmp",
            delete=False,
        ) as fh:
            tmp_name = fh.name
            fh.write(text)
        os.replace(tmp_name, target)
    except OSError as exc:
        if tmp_name is not None:
            Path(tmp_name).unlink(missing_ok=True)
        raise ReportWriteError(f"Cannot write report {target}: {exc}") from exc
    logger.debug("Wrote %s", target)
    return target
