from __future__ import annotations

from fastapi import APIRouter, Depends

from core.nutrition_calc import (
    BiometricProfile,
    NutritionGoalCalculator,
    WeightGoal,
    recommended_macro_split,
    recommended_protein_grams,
)
from core.validation import plausibility_warnings, validate_biometrics
from api.v1.deps import get_calculator
from api.v1.schemas import BiometricsIn, GoalsCalculation, MacroSplitOut

router = APIRouter()


@router.post("/calculate", response_model=GoalsCalculation)
def calculate_goals(
    body: BiometricsIn,
    calc: NutritionGoalCalculator = Depends(get_calculator),
) -> GoalsCalculation:
    """Compute goals for ad-hoc inputs without storing anything."""
    validate_biometrics(body.age, body.height_cm, body.weight_kg, body.split)
    goals = calc.calculate_nutrition_goals(
        BiometricProfile(
            sex=body.sex,
            age_years=body.age,
            height_cm=body.height_cm,
            weight_kg=body.weight_kg,
            activity_level=body.activity_level,
            weight_goal=body.weight_goal,
            macro_split=body.split,
        )
    )
    return GoalsCalculation(
        **goals.as_dict(),
        recommended_protein_g=recommended_protein_grams(body.weight_kg, body.activity_level),
        warnings=plausibility_warnings(body.height_cm, body.weight_kg, goals.daily_calorie_goal),
    )


@router.get("/recommended-split/{weight_goal}", response_model=MacroSplitOut)
def recommended_split(weight_goal: WeightGoal) -> MacroSplitOut:
    split = recommended_macro_split(weight_goal)
    return MacroSplitOut(carbs=split.carbs, protein=split.protein, fat=split.fat)
