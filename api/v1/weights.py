from __future__ import annotations

from fastapi import APIRouter, Depends, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from core.nutrition_calc import NutritionGoalCalculator
from core.progress import weight_changes, weight_trend
from services import profiles
from services.db import WeightEntry, get_session
from api.v1.deps import get_calculator
from api.v1.schemas import WeightHistoryOut, WeightIn, WeightOut, WeightTrend

router = APIRouter()


@router.post(
    "/{user_id}/weights",
    response_model=WeightOut,
    status_code=status.HTTP_201_CREATED,
    summary="Record a weigh-in and refresh the profile goals",
)
async def add_weight(
    user_id: int,
    body: WeightIn,
    db: AsyncSession = Depends(get_session),
    calc: NutritionGoalCalculator = Depends(get_calculator),
) -> WeightOut:
    entry = await profiles.record_weight(db, calc, user_id, body.weight_kg, body.recorded_at)
    return WeightOut.model_validate(entry, from_attributes=True)


@router.get(
    "/{user_id}/weights",
    response_model=WeightHistoryOut,
    summary="Weight history (newest first) with the overall trend",
)
async def list_weights(
    user_id: int,
    db: AsyncSession = Depends(get_session),
) -> WeightHistoryOut:
    await profiles.get_profile(db, user_id)
    rows = (
        await db.execute(
            select(WeightEntry)
            .where(WeightEntry.user_id == user_id)
            .order_by(WeightEntry.recorded_at, WeightEntry.id)
        )
    ).scalars().all()

    records = [
        {"id": r.id, "weight_kg": r.weight_kg, "recorded_at": r.recorded_at}
        for r in rows
    ]
    changes = weight_changes(records)
    entries = [
        WeightOut(**rec, change_kg=chg) for rec, chg in zip(records, changes)
    ]
    entries.reverse()
    return WeightHistoryOut(entries=entries, trend=WeightTrend(**weight_trend(records)))
