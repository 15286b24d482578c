from __future__ import annotations
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

from core.nutrition_calc import (
    ActivityLevel,
    MacroSplit,
    Sex,
    WeightGoal,
    normalize_macro_split,
)
from core.units import feet_inches_to_cm, pounds_to_kg
from core.validation import MAX_AGE, MIN_AGE, validate_macro_split

_SPLIT_FIELDS = ("carb_percentage", "protein_percentage", "fat_percentage")
_DEFAULT_FRACTIONS = (0.4, 0.3, 0.3)


def _number(value: Any) -> float | None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return float(value)


class BiometricsIn(BaseModel):
    """
    Metric inputs.  Forms that collect imperial units may send `weight_lb`
    and `height_ft` / `height_in` instead of `weight_kg` / `height_cm`;
    they are converted before validation.  With `normalize_split: true`
    the three fractions are rescaled to sum to 1 instead of rejected.
    """

    sex: Sex = Field(Sex.unspecified, description="male, female or unspecified")
    age: int = Field(..., ge=MIN_AGE, le=MAX_AGE)
    height_cm: float = Field(..., gt=0, allow_inf_nan=False)
    weight_kg: float = Field(..., gt=0, allow_inf_nan=False)
    activity_level: ActivityLevel = ActivityLevel.moderate
    weight_goal: WeightGoal = WeightGoal.maintain
    carb_percentage: float = Field(0.4, ge=0, le=1, allow_inf_nan=False)
    protein_percentage: float = Field(0.3, ge=0, le=1, allow_inf_nan=False)
    fat_percentage: float = Field(0.3, ge=0, le=1, allow_inf_nan=False)

    @model_validator(mode="before")
    @classmethod
    def _convert_imperial(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        data = dict(data)

        pounds = _number(data.pop("weight_lb", None))
        if pounds is not None and data.get("weight_kg") is None:
            data["weight_kg"] = pounds_to_kg(pounds)

        feet = _number(data.pop("height_ft", None))
        inches = _number(data.pop("height_in", None))
        if (feet is not None or inches is not None) and data.get("height_cm") is None:
            data["height_cm"] = feet_inches_to_cm(feet or 0, inches or 0.0)

        if data.pop("normalize_split", False) is True:
            parts = [
                _number(data.get(k, d)) for k, d in zip(_SPLIT_FIELDS, _DEFAULT_FRACTIONS)
            ]
            if all(p is not None and p >= 0 for p in parts):
                split = normalize_macro_split(*parts)
                data.update(zip(_SPLIT_FIELDS, (split.carbs, split.protein, split.fat)))
        return data

    @model_validator(mode="after")
    def _split_sums_to_one(self) -> "BiometricsIn":
        validate_macro_split(self.split)
        return self

    @property
    def split(self) -> MacroSplit:
        return MacroSplit(
            carbs=self.carb_percentage,
            protein=self.protein_percentage,
            fat=self.fat_percentage,
        )


class ProfileIn(BiometricsIn):
    name: str | None = None


class ProfileCreate(ProfileIn):
    id: int


class GoalsOut(BaseModel):
    bmr: float
    tdee: float
    daily_calorie_goal: float
    carb_goal_grams: float
    protein_goal_grams: float
    fat_goal_grams: float

    model_config = ConfigDict(from_attributes=True)


class ImperialOut(BaseModel):
    weight_lb: float
    height_ft: int
    height_in: float


class ProfileOut(ProfileCreate):
    goals: GoalsOut
    imperial: ImperialOut
    warnings: list[str] = []
    created_at: datetime
    updated_at: datetime
