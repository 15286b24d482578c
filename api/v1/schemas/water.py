from __future__ import annotations
from datetime import date, datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

WaterUnit = Literal["ml", "oz"]
WaterStatus = Literal["low", "moderate", "good"]


class WaterIn(BaseModel):
    amount: float = Field(..., gt=0, allow_inf_nan=False)
    unit: WaterUnit = "ml"
    recorded_at: datetime | None = None


class WaterOut(BaseModel):
    id: int
    user_id: int
    amount_ml: float
    recorded_at: datetime

    model_config = ConfigDict(from_attributes=True)


class WaterDaySummary(BaseModel):
    user_id: int
    day: date
    total_ml: float
    goal_ml: float
    remaining_ml: float
    fraction: float
    goal_met: bool
    status: WaterStatus
    entries: list[WaterOut] = []


class WaterDayTotal(BaseModel):
    day: date
    total_ml: float


class WaterWeekSummary(BaseModel):
    user_id: int
    start: date
    end: date
    goal_ml: float
    total_ml: float
    average_ml: float          # over days with at least one entry
    streak: int
    days_goal_met: int
    goal_completion_rate: float
    daily: list[WaterDayTotal]
