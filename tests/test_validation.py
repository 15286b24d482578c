import pytest

from core.nutrition_calc import MacroSplit
from core.validation import (
    InvalidInputError,
    plausibility_warnings,
    validate_biometrics,
    validate_macro_split,
)


@pytest.mark.parametrize("age", [15, 30, 100])
def test_age_bounds_ok(age):
    validate_biometrics(age, 170, 70)


@pytest.mark.parametrize("age", [14, 101, 0])
def test_age_out_of_range(age):
    with pytest.raises(InvalidInputError) as exc:
        validate_biometrics(age, 170, 70)
    assert exc.value.field == "age"


@pytest.mark.parametrize("height, weight, field", [(0, 70, "height_cm"), (170, -1, "weight_kg")])
def test_non_positive_measurements(height, weight, field):
    with pytest.raises(InvalidInputError) as exc:
        validate_biometrics(30, height, weight)
    assert exc.value.field == field


def test_split_must_sum_to_one():
    validate_macro_split(MacroSplit(0.333, 0.333, 0.334))
    with pytest.raises(InvalidInputError):
        validate_macro_split(MacroSplit(0.5, 0.3, 0.3))
    with pytest.raises(InvalidInputError):
        validate_biometrics(30, 170, 70, MacroSplit(1.2, -0.1, -0.1))


def test_plausibility_warnings():
    assert plausibility_warnings(175, 70, 2200) == []
    warnings = plausibility_warnings(90, 350, -100)
    assert len(warnings) == 3
