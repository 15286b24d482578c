from __future__ import annotations
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

from core.units import pounds_to_kg


class WeightIn(BaseModel):
    weight_kg: float = Field(..., gt=0, allow_inf_nan=False)
    recorded_at: datetime | None = None

    @model_validator(mode="before")
    @classmethod
    def _convert_pounds(cls, data: Any) -> Any:
        if isinstance(data, dict) and data.get("weight_kg") is None:
            pounds = data.get("weight_lb")
            if isinstance(pounds, (int, float)) and not isinstance(pounds, bool):
                data = {**data, "weight_kg": pounds_to_kg(pounds)}
        return data


class WeightOut(BaseModel):
    id: int
    weight_kg: float
    recorded_at: datetime
    change_kg: float | None = None   # vs. the previous weigh-in

    model_config = ConfigDict(from_attributes=True)


class WeightTrend(BaseModel):
    entries: int
    start_kg: float | None
    latest_kg: float | None
    total_change_kg: float | None
    avg_weekly_change_kg: float | None


class WeightHistoryOut(BaseModel):
    entries: list[WeightOut]
    trend: WeightTrend
