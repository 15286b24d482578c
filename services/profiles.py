"""
services/profiles.py
────────────────────────────────────────────────────────────────────────
Profile persistence + goal refresh.

Every write that touches a biometric input or the macro split goes
through `apply_goals()`, so the cached goals on a row never drift from
its inputs.  The calculator and the session are always passed in.
"""
from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from core.nutrition_calc import (
    ActivityLevel,
    BiometricProfile,
    MacroSplit,
    NutritionGoalCalculator,
    NutritionGoals,
    Sex,
    WeightGoal,
)
from core.validation import validate_biometrics
from services.db import MealEntry, UserProfile, WaterEntry, WeightEntry, _utcnow

_LOG = logging.getLogger(__name__)

_BIOMETRIC_FIELDS = (
    "name",
    "sex",
    "age",
    "height_cm",
    "weight_kg",
    "activity_level",
    "weight_goal",
    "carb_percentage",
    "protein_percentage",
    "fat_percentage",
)


class ProfileNotFoundError(LookupError):
    def __init__(self, user_id: int) -> None:
        super().__init__(f"User profile {user_id} not found")
        self.user_id = user_id


# ───────────────────────── row ⇄ value objects ─────────────────────
def to_biometrics(row: UserProfile) -> BiometricProfile:
    return BiometricProfile(
        sex=Sex(row.sex),
        age_years=row.age,
        height_cm=row.height_cm,
        weight_kg=row.weight_kg,
        activity_level=ActivityLevel(row.activity_level),
        weight_goal=WeightGoal(row.weight_goal),
        macro_split=MacroSplit(
            carbs=row.carb_percentage,
            protein=row.protein_percentage,
            fat=row.fat_percentage,
        ),
    )


def cached_goals(row: UserProfile) -> NutritionGoals:
    return NutritionGoals(
        bmr=row.bmr,
        tdee=row.tdee,
        daily_calorie_goal=row.daily_calorie_goal,
        carb_goal_grams=row.carb_goal_grams,
        protein_goal_grams=row.protein_goal_grams,
        fat_goal_grams=row.fat_goal_grams,
    )


def apply_goals(row: UserProfile, calc: NutritionGoalCalculator) -> NutritionGoals:
    bio = to_biometrics(row)
    validate_biometrics(bio.age_years, bio.height_cm, bio.weight_kg, bio.macro_split)
    goals = calc.calculate_nutrition_goals(bio)
    for key, value in goals.as_dict().items():
        setattr(row, key, value)
    row.updated_at = _utcnow()
    return goals


# ───────────────────────── CRUD ─────────────────────────────────────
async def get_profile(db: AsyncSession, user_id: int) -> UserProfile:
    row = await db.get(UserProfile, user_id)
    if row is None:
        raise ProfileNotFoundError(user_id)
    return row


async def create_profile(
    db: AsyncSession,
    calc: NutritionGoalCalculator,
    user_id: int,
    fields: Dict[str, Any],
) -> UserProfile:
    row = UserProfile(id=user_id, **{k: fields[k] for k in _BIOMETRIC_FIELDS if k in fields})
    apply_goals(row, calc)
    db.add(row)
    # the starting weight opens the history
    db.add(WeightEntry(user_id=user_id, weight_kg=row.weight_kg))
    await db.commit()
    _LOG.info("profile %s created (goal %.0f kcal)", user_id, row.daily_calorie_goal)
    return row


async def update_profile(
    db: AsyncSession,
    calc: NutritionGoalCalculator,
    user_id: int,
    fields: Dict[str, Any],
) -> UserProfile:
    row = await get_profile(db, user_id)
    old_weight = row.weight_kg
    for key in _BIOMETRIC_FIELDS:
        if key in fields:
            setattr(row, key, fields[key])
    apply_goals(row, calc)
    if row.weight_kg != old_weight:
        db.add(WeightEntry(user_id=user_id, weight_kg=row.weight_kg))
    await db.commit()
    _LOG.info("profile %s updated (goal %.0f kcal)", user_id, row.daily_calorie_goal)
    return row


async def record_weight(
    db: AsyncSession,
    calc: NutritionGoalCalculator,
    user_id: int,
    weight_kg: float,
    recorded_at: datetime | None = None,
) -> WeightEntry:
    """Log a weigh-in.  Weight feeds BMR, so the goals are refreshed too."""
    row = await get_profile(db, user_id)
    if recorded_at is None:
        recorded_at = _utcnow()
    elif recorded_at.tzinfo is not None:
        recorded_at = recorded_at.astimezone(timezone.utc).replace(tzinfo=None)
    entry = WeightEntry(user_id=user_id, weight_kg=weight_kg, recorded_at=recorded_at)

    latest = (
        await db.execute(
            select(WeightEntry.recorded_at)
            .where(WeightEntry.user_id == user_id)
            .order_by(WeightEntry.recorded_at.desc())
            .limit(1)
        )
    ).scalar_one_or_none()
    # entries older than the newest one go into the history without touching the profile
    if latest is None or recorded_at >= latest:
        row.weight_kg = weight_kg
        apply_goals(row, calc)

    db.add(entry)
    await db.commit()
    _LOG.info("weight %.1f kg recorded for profile %s", weight_kg, user_id)
    return entry


async def delete_profile(db: AsyncSession, user_id: int) -> None:
    row = await get_profile(db, user_id)
    await db.execute(delete(WeightEntry).where(WeightEntry.user_id == user_id))
    await db.execute(delete(MealEntry).where(MealEntry.user_id == user_id))
    await db.execute(delete(WaterEntry).where(WaterEntry.user_id == user_id))
    await db.delete(row)
    await db.commit()
    _LOG.info("profile %s deleted", user_id)


async def recalculate_all(
    db: AsyncSession,
    calc: NutritionGoalCalculator,
    user_ids: List[int] | None = None,
) -> int:
    q = select(UserProfile)
    if user_ids:
        q = q.where(UserProfile.id.in_(user_ids))
    rows = (await db.execute(q)).scalars().all()
    for row in rows:
        apply_goals(row, calc)
    await db.commit()
    _LOG.info("recalculated goals for %d profile(s)", len(rows))
    return len(rows)
