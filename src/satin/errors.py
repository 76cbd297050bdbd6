from __future__ import annotations


class SatinError(Exception):
    """Base class for errors raised by satin."""


class InputDataError(SatinError, ValueError):
    """An input data source is missing, unreadable or malformed."""


class LaserRecordError(InputDataError):
    """A laser table line does not match the record grammar."""


class InvalidInputError(SatinError, ValueError):
    """Kernel arguments outside the physical domain."""


class NumericalError(SatinError, ArithmeticError):
    """The integration produced a non-finite output power."""


class ReportWriteError(SatinError, OSError):
    """A laser report could not be persisted."""
