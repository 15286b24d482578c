# api/v1/meals.py
from __future__ import annotations
from datetime import date, datetime, time, timedelta, timezone

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from core.progress import daily_intake, goal_progress, weekly_averages
from services import profiles
from services.db import MealEntry, get_session
from api.v1.schemas import IntakeSummary, MealIn, MealOut

router = APIRouter()


def _today() -> date:
    return datetime.now(timezone.utc).date()


async def _meals_between(
    db: AsyncSession, user_id: int, start: date, end: date
) -> list[MealEntry]:
    lo = datetime.combine(start, time.min)
    hi = datetime.combine(end + timedelta(days=1), time.min)
    res = await db.execute(
        select(MealEntry)
        .where(
            MealEntry.user_id == user_id,
            MealEntry.eaten_at >= lo,
            MealEntry.eaten_at < hi,
        )
        .order_by(MealEntry.eaten_at)
    )
    return list(res.scalars().all())


def _as_dicts(meals: list[MealEntry]) -> list[dict]:
    return [
        {
            "eaten_at": m.eaten_at,
            "calories": m.calories,
            "carbs_g": m.carbs_g,
            "protein_g": m.protein_g,
            "fat_g": m.fat_g,
        }
        for m in meals
    ]


# ───────────────────────── log ──────────────────────────────
@router.post(
    "/users/{user_id}/meals",
    response_model=MealOut,
    status_code=status.HTTP_201_CREATED,
    summary="Log a meal for a user",
)
async def log_meal(
    user_id: int,
    body: MealIn,
    db: AsyncSession = Depends(get_session),
) -> MealOut:
    await profiles.get_profile(db, user_id)
    payload = body.model_dump(exclude_none=True)
    eaten_at = payload.get("eaten_at")
    if eaten_at is not None and eaten_at.tzinfo is not None:
        payload["eaten_at"] = eaten_at.astimezone(timezone.utc).replace(tzinfo=None)

    meal = MealEntry(user_id=user_id, **payload)
    db.add(meal)
    await db.commit()
    return MealOut.model_validate(meal, from_attributes=True)


@router.get(
    "/users/{user_id}/meals",
    response_model=list[MealOut],
    summary="List the meals a user logged on one day",
)
async def list_meals(
    user_id: int,
    day: date | None = Query(None, description="defaults to today (UTC)"),
    db: AsyncSession = Depends(get_session),
) -> list[MealOut]:
    await profiles.get_profile(db, user_id)
    day = day or _today()
    meals = await _meals_between(db, user_id, day, day)
    return [MealOut.model_validate(m, from_attributes=True) for m in meals]


@router.delete(
    "/meals/{meal_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a logged meal by its ID",
)
async def delete_meal(
    meal_id: int,
    db: AsyncSession = Depends(get_session),
) -> Response:
    meal = await db.get(MealEntry, meal_id)
    if not meal:
        raise HTTPException(status_code=404, detail="Meal not found")
    await db.delete(meal)
    await db.commit()
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# ───────────────────────── summaries ────────────────────────
@router.get(
    "/users/{user_id}/summary",
    response_model=IntakeSummary,
    summary="Intake for one day against the profile goals",
)
async def daily_summary(
    user_id: int,
    day: date | None = Query(None, description="defaults to today (UTC)"),
    db: AsyncSession = Depends(get_session),
) -> IntakeSummary:
    row = await profiles.get_profile(db, user_id)
    day = day or _today()
    meals = _as_dicts(await _meals_between(db, user_id, day, day))
    intake = daily_intake(meals, day)
    return IntakeSummary(
        user_id=user_id,
        start=day,
        end=day,
        intake=intake,
        progress=goal_progress(intake, profiles.cached_goals(row)),
    )


@router.get(
    "/users/{user_id}/summary/weekly",
    response_model=IntakeSummary,
    summary="Average daily intake over the 7 days ending on `end`",
)
async def weekly_summary(
    user_id: int,
    end: date | None = Query(None, description="defaults to today (UTC)"),
    db: AsyncSession = Depends(get_session),
) -> IntakeSummary:
    row = await profiles.get_profile(db, user_id)
    end = end or _today()
    start = end - timedelta(days=6)
    meals = _as_dicts(await _meals_between(db, user_id, start, end))
    intake = weekly_averages(meals, end, days=7)
    return IntakeSummary(
        user_id=user_id,
        start=start,
        end=end,
        intake=intake,
        progress=goal_progress(intake, profiles.cached_goals(row)),
    )
