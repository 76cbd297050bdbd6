from __future__ import annotations

import math

import numpy as np

from satin.constants import AREA, DZ, EXPR, LONGITUDINAL_CORRECTION, RAD2, RADII
from satin.errors import InvalidInputError, NumericalError


def compute_output_power(
    input_power: int, small_signal_gain: float, saturation_intensity: int
) -> float:
    """Integrate a Gaussian beam through the gain medium and return output power in W.

    Every radius sample runs its own sequential chain over the longitudinal
    correction table. The chains are independent, so they advance together as
    one vector with the same element-wise operation order as the scalar form.
    The radial sum is accumulated in increasing radius order, which keeps the
    result bit-reproducible.
    """
    if input_power <= 0:
        raise InvalidInputError(f"input_power must be > 0, got {input_power!r}.")
    if saturation_intensity <= 0:
        raise InvalidInputError(
            f"saturation_intensity must be > 0, got {saturation_intensity!r}."
        )

    gain_factor = saturation_intensity * small_signal_gain / 32000 * DZ
    input_intensity = 2 * input_power / AREA

    # Overflow surfaces as NumericalError below, not as a RuntimeWarning.
    with np.errstate(over="ignore", invalid="ignore", divide="ignore"):
        intensity = input_intensity * np.exp(-2 * RADII**2 / RAD2)
        step = np.empty_like(intensity)
        for correction in LONGITUDINAL_CORRECTION.tolist():
            np.add(intensity, saturation_intensity, out=step)
            np.divide(gain_factor, step, out=step)
            step += 1
            step -= correction
            intensity *= step

    output_power = 0.0
    for radius, value in zip(RADII.tolist(), intensity.tolist()):
        output_power += value * EXPR * radius

    if not math.isfinite(output_power):
        raise NumericalError(
            "Non-finite output power for "
            f"input_power={input_power}, small_signal_gain={small_signal_gain}, "
            f"saturation_intensity={saturation_intensity}."
        )
    return output_power
