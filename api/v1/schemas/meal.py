from __future__ import annotations
from datetime import date, datetime
from typing import Dict, Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

from core.nutrition_calc import calories_from_macros

MealType = Literal["breakfast", "lunch", "dinner", "snack"]


class MealIn(BaseModel):
    meal_type: MealType
    name: str = Field(..., min_length=1)
    # omitted → derived from the macros (4/4/9 kcal per gram)
    calories: float | None = Field(None, ge=0, allow_inf_nan=False)
    carbs_g: float = Field(0.0, ge=0, allow_inf_nan=False)
    protein_g: float = Field(0.0, ge=0, allow_inf_nan=False)
    fat_g: float = Field(0.0, ge=0, allow_inf_nan=False)
    eaten_at: datetime | None = None

    @model_validator(mode="after")
    def _fill_calories(self) -> "MealIn":
        if self.calories is None:
            self.calories = calories_from_macros(self.carbs_g, self.protein_g, self.fat_g)
        return self


class MealOut(MealIn):
    id: int
    user_id: int
    eaten_at: datetime

    model_config = ConfigDict(from_attributes=True)


class NutrientProgress(BaseModel):
    consumed: float
    goal: float
    remaining: float
    fraction: float


class IntakeSummary(BaseModel):
    user_id: int
    start: date
    end: date
    intake: Dict[str, float]          # per-day figures (average for windows > 1 day)
    progress: Dict[str, NutrientProgress]
