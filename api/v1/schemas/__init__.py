"""Re-export individual schema modules for easy imports."""

from .user import (
    BiometricsIn,
    GoalsOut,
    ImperialOut,
    ProfileCreate,
    ProfileIn,
    ProfileOut,
)
from .goals import GoalsCalculation, MacroSplitOut
from .weight import WeightHistoryOut, WeightIn, WeightOut, WeightTrend
from .meal import IntakeSummary, MealIn, MealOut, NutrientProgress
from .water import (
    WaterDaySummary,
    WaterDayTotal,
    WaterIn,
    WaterOut,
    WaterWeekSummary,
)

__all__ = [
    "BiometricsIn",
    "GoalsOut",
    "ImperialOut",
    "ProfileCreate",
    "ProfileIn",
    "ProfileOut",
    "GoalsCalculation",
    "MacroSplitOut",
    "WeightHistoryOut",
    "WeightIn",
    "WeightOut",
    "WeightTrend",
    "IntakeSummary",
    "MealIn",
    "MealOut",
    "NutrientProgress",
    "WaterDaySummary",
    "WaterDayTotal",
    "WaterIn",
    "WaterOut",
    "WaterWeekSummary",
]
