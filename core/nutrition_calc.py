"""
core/nutrition_calc.py
────────────────────────────────────────────────────────────────────────
Daily nutrition goals from a biometric profile:

1. BMR  (Mifflin–St Jeor)
2. TDEE (activity multiplier)
3. Daily calorie goal (fixed weight-goal adjustment)
4. Macro gram targets from the calorie goal and a carb/protein/fat split

Everything here is pure arithmetic.  Inputs are assumed to be validated
already (see `core.validation`); nothing in this module raises or rounds.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum

_LOG = logging.getLogger(__name__)


# ──────────────────────────────────────────────────────────────────────
#  Enumerations
# ──────────────────────────────────────────────────────────────────────
class Sex(str, Enum):
    male = "male"
    female = "female"
    unspecified = "unspecified"


class ActivityLevel(str, Enum):
    sedentary = "sedentary"
    light = "light"
    moderate = "moderate"
    active = "active"
    very_active = "very_active"

    @property
    def multiplier(self) -> float:
        return ACTIVITY_MULTIPLIERS[self]


class WeightGoal(str, Enum):
    lose = "lose"
    maintain = "maintain"
    gain = "gain"

    @property
    def calorie_adjustment(self) -> float:
        return CALORIE_ADJUSTMENTS[self]


# ──────────────────────────────────────────────────────────────────────
#  Constants
# ──────────────────────────────────────────────────────────────────────
ACTIVITY_MULTIPLIERS: dict[ActivityLevel, float] = {
    ActivityLevel.sedentary: 1.2,
    ActivityLevel.light: 1.375,
    ActivityLevel.moderate: 1.55,
    ActivityLevel.active: 1.725,
    ActivityLevel.very_active: 1.9,
}

# kcal/day, ~0.5 kg per week either way
CALORIE_ADJUSTMENTS: dict[WeightGoal, float] = {
    WeightGoal.lose: -500.0,
    WeightGoal.maintain: 0.0,
    WeightGoal.gain: 500.0,
}

# g protein per kg bodyweight
PROTEIN_PER_KG: dict[ActivityLevel, float] = {
    ActivityLevel.sedentary: 0.8,
    ActivityLevel.light: 1.0,
    ActivityLevel.moderate: 1.2,
    ActivityLevel.active: 1.6,
    ActivityLevel.very_active: 2.0,
}

KCAL_PER_GRAM_CARB = 4.0
KCAL_PER_GRAM_PROTEIN = 4.0
KCAL_PER_GRAM_FAT = 9.0


# ──────────────────────────────────────────────────────────────────────
#  Value objects
# ──────────────────────────────────────────────────────────────────────
@dataclass(frozen=True)
class MacroSplit:
    """Fractions of daily calories; expected (not enforced) to sum to 1.0."""

    carbs: float = 0.40
    protein: float = 0.30
    fat: float = 0.30

    @property
    def total(self) -> float:
        return self.carbs + self.protein + self.fat


DEFAULT_SPLIT = MacroSplit()

_RECOMMENDED_SPLITS: dict[WeightGoal, MacroSplit] = {
    WeightGoal.lose: MacroSplit(carbs=0.35, protein=0.40, fat=0.25),
    WeightGoal.maintain: MacroSplit(carbs=0.40, protein=0.30, fat=0.30),
    WeightGoal.gain: MacroSplit(carbs=0.45, protein=0.30, fat=0.25),
}


@dataclass(frozen=True)
class BiometricProfile:
    sex: Sex
    age_years: int
    height_cm: float
    weight_kg: float
    activity_level: ActivityLevel = ActivityLevel.moderate
    weight_goal: WeightGoal = WeightGoal.maintain
    macro_split: MacroSplit = field(default_factory=MacroSplit)


@dataclass(frozen=True)
class NutritionGoals:
    bmr: float
    tdee: float
    daily_calorie_goal: float
    carb_goal_grams: float
    protein_goal_grams: float
    fat_goal_grams: float

    def as_dict(self) -> dict[str, float]:
        return {
            "bmr": self.bmr,
            "tdee": self.tdee,
            "daily_calorie_goal": self.daily_calorie_goal,
            "carb_goal_grams": self.carb_goal_grams,
            "protein_goal_grams": self.protein_goal_grams,
            "fat_goal_grams": self.fat_goal_grams,
        }


# ──────────────────────────────────────────────────────────────────────
#  Calculator
# ──────────────────────────────────────────────────────────────────────
class NutritionGoalCalculator:
    """Source-of-truth for kcal + macro goals.  Holds no state."""

    # --------------- BMR / TDEE -------------------------------------
    def compute_bmr(
        self, sex: Sex, weight_kg: float, height_cm: float, age_years: int
    ) -> float:
        base = 10 * weight_kg + 6.25 * height_cm - 5 * age_years
        male = base + 5
        female = base - 161
        if sex == Sex.male:
            return male
        if sex == Sex.female:
            return female
        # unspecified: midpoint of the two equations
        return (male + female) / 2

    def compute_tdee(self, bmr: float, activity_level: ActivityLevel) -> float:
        return bmr * ACTIVITY_MULTIPLIERS[activity_level]

    # --------------- Calories ---------------------------------------
    def compute_daily_calorie_goal(self, tdee: float, weight_goal: WeightGoal) -> float:
        return tdee + CALORIE_ADJUSTMENTS[weight_goal]

    # --------------- Macros -----------------------------------------
    def compute_macro_grams(
        self,
        daily_calorie_goal: float,
        carb_pct: float,
        protein_pct: float,
        fat_pct: float,
    ) -> tuple[float, float, float]:
        carbs_g = daily_calorie_goal * carb_pct / KCAL_PER_GRAM_CARB
        protein_g = daily_calorie_goal * protein_pct / KCAL_PER_GRAM_PROTEIN
        fat_g = daily_calorie_goal * fat_pct / KCAL_PER_GRAM_FAT
        return carbs_g, protein_g, fat_g

    # --------------- public entrypoint --------------------------------
    def calculate_nutrition_goals(self, profile: BiometricProfile) -> NutritionGoals:
        bmr = self.compute_bmr(
            profile.sex, profile.weight_kg, profile.height_cm, profile.age_years
        )
        tdee = self.compute_tdee(bmr, profile.activity_level)
        kcal = self.compute_daily_calorie_goal(tdee, profile.weight_goal)
        split = profile.macro_split
        carbs_g, protein_g, fat_g = self.compute_macro_grams(
            kcal, split.carbs, split.protein, split.fat
        )
        _LOG.debug("goals: bmr=%.2f tdee=%.2f kcal=%.2f", bmr, tdee, kcal)
        return NutritionGoals(
            bmr=bmr,
            tdee=tdee,
            daily_calorie_goal=kcal,
            carb_goal_grams=carbs_g,
            protein_goal_grams=protein_g,
            fat_goal_grams=fat_g,
        )


# ──────────────────────────────────────────────────────────────────────
#  Macro helpers
# ──────────────────────────────────────────────────────────────────────
def recommended_macro_split(weight_goal: WeightGoal) -> MacroSplit:
    return _RECOMMENDED_SPLITS[weight_goal]


def recommended_protein_grams(weight_kg: float, activity_level: ActivityLevel) -> float:
    return weight_kg * PROTEIN_PER_KG[activity_level]


def calories_from_macros(carbs_g: float, protein_g: float, fat_g: float) -> float:
    return (
        carbs_g * KCAL_PER_GRAM_CARB
        + protein_g * KCAL_PER_GRAM_PROTEIN
        + fat_g * KCAL_PER_GRAM_FAT
    )


def normalize_macro_split(carbs: float, protein: float, fat: float) -> MacroSplit:
    """Scale the three parts so they sum to 1.0 (40/30/30 if there is nothing to scale)."""
    total = carbs + protein + fat
    if total <= 0:
        return DEFAULT_SPLIT
    return MacroSplit(carbs=carbs / total, protein=protein / total, fat=fat / total)


# ──────────────────────────────────────────────────────────────────────
#  Module-level shortcuts
# ──────────────────────────────────────────────────────────────────────
_calc = NutritionGoalCalculator()

compute_bmr = _calc.compute_bmr
compute_tdee = _calc.compute_tdee
compute_daily_calorie_goal = _calc.compute_daily_calorie_goal
compute_macro_grams = _calc.compute_macro_grams
calculate_nutrition_goals = _calc.calculate_nutrition_goals
