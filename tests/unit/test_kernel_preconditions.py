import warnings

import pytest

from satin.errors import InvalidInputError, NumericalError
from satin.kernel import compute_output_power


@pytest.mark.unit
@pytest.mark.parametrize("input_power", [0, -1, -150])
def test_non_positive_input_power_is_rejected(input_power: int) -> None:
    with pytest.raises(InvalidInputError, match="input_power must be > 0"):
        compute_output_power(input_power, 13.5, 25000)


@pytest.mark.unit
@pytest.mark.parametrize("saturation_intensity", [0, -10000])
def test_non_positive_saturation_intensity_is_rejected(saturation_intensity: int) -> None:
    with pytest.raises(InvalidInputError, match="saturation_intensity must be > 0"):
        compute_output_power(150, 13.5, saturation_intensity)


@pytest.mark.unit
def test_invalid_input_is_a_value_error() -> None:
    with pytest.raises(ValueError):
        compute_output_power(0, 13.5, 25000)


@pytest.mark.unit
def test_diverging_gain_raises_numerical_error_without_warnings() -> None:
    with warnings.catch_warnings():
        warnings.simplefilter("error")
        with pytest.raises(NumericalError, match="Non-finite output power"):
            compute_output_power(150, 1e308, 25000)


@pytest.mark.unit
def test_numerical_error_is_an_arithmetic_error() -> None:
    with pytest.raises(ArithmeticError):
        compute_output_power(150, 1e308, 25000)
