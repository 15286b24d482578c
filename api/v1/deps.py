from __future__ import annotations

from core.nutrition_calc import NutritionGoalCalculator

_calc = NutritionGoalCalculator()


def get_calculator() -> NutritionGoalCalculator:
    """Injected into routes; tests may override it via `app.dependency_overrides`."""
    return _calc
