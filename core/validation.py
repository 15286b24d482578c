"""
core/validation.py
────────────────────────────────────────────────────────────────────────
Upstream checks that keep `NutritionGoalCalculator` on its valid domain.

The calculator never raises, so anything that reaches it must already have
passed `validate_biometrics()`.  Routers translate `InvalidInputError` into
HTTP 422.
"""

from __future__ import annotations

import math

from core.nutrition_calc import MacroSplit

MIN_AGE, MAX_AGE = 15, 100
MACRO_SUM_TOLERANCE = 0.01


class InvalidInputError(ValueError):
    def __init__(self, field: str, reason: str) -> None:
        super().__init__(f"Invalid {field}: {reason}")
        self.field = field
        self.reason = reason


# ──────────────────────────────────────────────────────────────────────
#  Profile inputs
# ──────────────────────────────────────────────────────────────────────
def validate_biometrics(
    age_years: int,
    height_cm: float,
    weight_kg: float,
    split: MacroSplit | None = None,
) -> None:
    if not MIN_AGE <= age_years <= MAX_AGE:
        raise InvalidInputError("age", f"must be between {MIN_AGE} and {MAX_AGE}")
    _require_positive("height_cm", height_cm)
    _require_positive("weight_kg", weight_kg)
    if split is not None:
        validate_macro_split(split)


def validate_macro_split(split: MacroSplit) -> None:
    for name in ("carbs", "protein", "fat"):
        value = getattr(split, name)
        if not 0.0 <= value <= 1.0:
            raise InvalidInputError(name, "fraction must be between 0 and 1")
    if abs(split.total - 1.0) > MACRO_SUM_TOLERANCE:
        raise InvalidInputError(
            "macro_split", f"fractions sum to {split.total:.3f}, expected 1.0"
        )


def _require_positive(name: str, value: float) -> None:
    if not math.isfinite(value) or value <= 0:
        raise InvalidInputError(name, "must be greater than zero")


# ──────────────────────────────────────────────────────────────────────
#  Form-level plausibility checks
# ──────────────────────────────────────────────────────────────────────
def is_valid_weight(weight_kg: float, lo: float = 20, hi: float = 300) -> bool:
    return lo <= weight_kg <= hi


def is_valid_height(height_cm: float, lo: float = 100, hi: float = 250) -> bool:
    return lo <= height_cm <= hi


def is_valid_calories(kcal: float, hi: float = 5000) -> bool:
    return 0 <= kcal <= hi


def plausibility_warnings(
    height_cm: float, weight_kg: float, daily_calorie_goal: float
) -> list[str]:
    """Soft checks surfaced next to the goals; nothing is clamped or rejected."""
    out: list[str] = []
    if not is_valid_height(height_cm):
        out.append(f"height {height_cm:g} cm is outside the usual 100-250 cm range")
    if not is_valid_weight(weight_kg):
        out.append(f"weight {weight_kg:g} kg is outside the usual 20-300 kg range")
    if not is_valid_calories(daily_calorie_goal):
        out.append(f"daily calorie goal {daily_calorie_goal:.0f} kcal is outside 0-5000 kcal")
    return out
