# api/v1/water.py
from __future__ import annotations
from datetime import date, datetime, time, timedelta, timezone

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from core.progress import daily_water, water_goal_ml, weekly_water
from core.units import fl_oz_to_ml
from services import profiles
from services.db import WaterEntry, get_session
from api.v1.schemas import WaterDaySummary, WaterIn, WaterOut, WaterWeekSummary

router = APIRouter()


def _today() -> date:
    return datetime.now(timezone.utc).date()


async def _water_between(
    db: AsyncSession, user_id: int, start: date, end: date
) -> list[WaterEntry]:
    lo = datetime.combine(start, time.min)
    hi = datetime.combine(end + timedelta(days=1), time.min)
    res = await db.execute(
        select(WaterEntry)
        .where(
            WaterEntry.user_id == user_id,
            WaterEntry.recorded_at >= lo,
            WaterEntry.recorded_at < hi,
        )
        .order_by(WaterEntry.recorded_at)
    )
    return list(res.scalars().all())


def _as_dicts(entries: list[WaterEntry]) -> list[dict]:
    return [{"recorded_at": e.recorded_at, "amount_ml": e.amount_ml} for e in entries]


# ───────────────────────── log ──────────────────────────────
@router.post(
    "/users/{user_id}/water",
    response_model=WaterOut,
    status_code=status.HTTP_201_CREATED,
    summary="Log a drink (ml or fl oz, stored as ml)",
)
async def log_water(
    user_id: int,
    body: WaterIn,
    db: AsyncSession = Depends(get_session),
) -> WaterOut:
    await profiles.get_profile(db, user_id)
    amount_ml = fl_oz_to_ml(body.amount) if body.unit == "oz" else body.amount
    entry = WaterEntry(user_id=user_id, amount_ml=amount_ml)
    if body.recorded_at is not None:
        recorded_at = body.recorded_at
        if recorded_at.tzinfo is not None:
            recorded_at = recorded_at.astimezone(timezone.utc).replace(tzinfo=None)
        entry.recorded_at = recorded_at

    db.add(entry)
    await db.commit()
    return WaterOut.model_validate(entry, from_attributes=True)


@router.get(
    "/users/{user_id}/water",
    response_model=list[WaterOut],
    summary="List the water a user logged on one day",
)
async def list_water(
    user_id: int,
    day: date | None = Query(None, description="defaults to today (UTC)"),
    db: AsyncSession = Depends(get_session),
) -> list[WaterOut]:
    await profiles.get_profile(db, user_id)
    day = day or _today()
    entries = await _water_between(db, user_id, day, day)
    return [WaterOut.model_validate(e, from_attributes=True) for e in entries]


@router.delete(
    "/water/{entry_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a water entry by its ID",
)
async def delete_water(
    entry_id: int,
    db: AsyncSession = Depends(get_session),
) -> Response:
    entry = await db.get(WaterEntry, entry_id)
    if not entry:
        raise HTTPException(status_code=404, detail="Water entry not found")
    await db.delete(entry)
    await db.commit()
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# ───────────────────────── summaries ────────────────────────
@router.get(
    "/users/{user_id}/water/summary",
    response_model=WaterDaySummary,
    summary="Water intake for one day against the weight-based goal",
)
async def water_day_summary(
    user_id: int,
    day: date | None = Query(None, description="defaults to today (UTC)"),
    db: AsyncSession = Depends(get_session),
) -> WaterDaySummary:
    row = await profiles.get_profile(db, user_id)
    day = day or _today()
    entries = await _water_between(db, user_id, day, day)
    summary = daily_water(_as_dicts(entries), day, water_goal_ml(row.weight_kg))
    return WaterDaySummary(
        user_id=user_id,
        entries=[WaterOut.model_validate(e, from_attributes=True) for e in entries],
        **summary,
    )


@router.get(
    "/users/{user_id}/water/summary/weekly",
    response_model=WaterWeekSummary,
    summary="Water totals, streak and goal completion over the 7 days ending on `end`",
)
async def water_week_summary(
    user_id: int,
    end: date | None = Query(None, description="defaults to today (UTC)"),
    db: AsyncSession = Depends(get_session),
) -> WaterWeekSummary:
    row = await profiles.get_profile(db, user_id)
    end = end or _today()
    start = end - timedelta(days=6)
    entries = await _water_between(db, user_id, start, end)
    summary = weekly_water(_as_dicts(entries), end, water_goal_ml(row.weight_kg), days=7)
    return WaterWeekSummary(user_id=user_id, **summary)
