"""Readers for the input-power list and the laser configuration table."""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from pathlib import Path

from pydantic import ValidationError

from satin.errors import InputDataError, LaserRecordError
from satin.models import CarbonDioxideMode, LaserConfig

logger = logging.getLogger(__name__)

_LASER_RECORD = re.compile(
    r"^(?P<output_file>(?P<prefix>md|pi)[a-z]{2}\.out)\s+"
    r"(?P<gain>\d{2}\.\d)\s+"
    r"(?P<pressure>\d+)\s+"
    r"(?P<mode>[A-Za-z]{2})$",
    re.ASCII,
)
_INTEGER_TOKEN = re.compile(r"-?[0-9]+")


def parse_input_powers(text: str) -> list[int]:
    """Parse whitespace separated positive integers; any bad token fails the whole list."""
    powers: list[int] = []
    for line_no, line in enumerate(text.splitlines(), start=1):
        for token in line.split():
            # ASCII digits only, with an optional leading minus.
            if _INTEGER_TOKEN.fullmatch(token) is None:
                raise InputDataError(f"Line {line_no}: input power {token!r} is not an integer.")
            value = int(token)
            if value <= 0:
                raise InputDataError(f"Line {line_no}: input power must be > 0, got {value}.")
            powers.append(value)
    return powers


def parse_laser_line(line: str) -> LaserConfig:
    """Parse one laser table record, raising ``LaserRecordError`` if it does not match."""
    match = _LASER_RECORD.match(line.strip())
    if match is None:
        raise LaserRecordError(f"Unrecognised laser record: {line.strip()!r}")
    mode = match.group("mode").upper()
    if mode != match.group("prefix").upper():
        raise LaserRecordError(
            f"Gas mode {match.group('mode')!r} does not repeat file prefix "
            f"{match.group('prefix')!r}: {line.strip()!r}"
        )
    try:
        return LaserConfig(
            output_file=match.group("output_file"),
            small_signal_gain=float(match.group("gain")),
            discharge_pressure=int(match.group("pressure")),
            carbon_dioxide=CarbonDioxideMode(mode),
        )
    except ValidationError as exc:
        raise LaserRecordError(f"Invalid laser record {line.strip()!r}: {exc}") from exc


def parse_laser_table(lines: Iterable[str]) -> list[LaserConfig]:
    """Collect every valid laser record, skipping lines that do not match."""
    lasers: list[LaserConfig] = []
    for line_no, line in enumerate(lines, start=1):
        stripped = line.strip()
        if not stripped or stripped.startswith("#"):
            continue
        try:
            lasers.append(parse_laser_line(stripped))
        except LaserRecordError as exc:
            logger.debug("Skipping laser table line %d: %s", line_no, exc)
    return lasers


def _read_text(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except OSError as exc:
        raise InputDataError(f"Cannot read input file {path}: {exc}") from exc


def read_input_powers(path: Path) -> list[int]:
    text = _read_text(path)
    try:
        return parse_input_powers(text)
    except InputDataError as exc:
        raise InputDataError(f"{path}: {exc}") from exc


def read_laser_table(path: Path) -> list[LaserConfig]:
    return parse_laser_table(_read_text(path).splitlines())
