from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from core.nutrition_calc import NutritionGoalCalculator
from core.units import cm_to_feet_inches, kg_to_pounds
from core.validation import plausibility_warnings
from services import profiles
from services.db import UserProfile, get_session
from api.v1.deps import get_calculator
from api.v1.schemas import GoalsOut, ImperialOut, ProfileCreate, ProfileIn, ProfileOut

router = APIRouter()


# ───────────────────────── helpers ──────────────────────────
def serialize_profile(row: UserProfile) -> ProfileOut:
    feet, inches = cm_to_feet_inches(row.height_cm)
    return ProfileOut(
        id=row.id,
        name=row.name,
        sex=row.sex,
        age=row.age,
        height_cm=row.height_cm,
        weight_kg=row.weight_kg,
        activity_level=row.activity_level,
        weight_goal=row.weight_goal,
        carb_percentage=row.carb_percentage,
        protein_percentage=row.protein_percentage,
        fat_percentage=row.fat_percentage,
        goals=GoalsOut.model_validate(row, from_attributes=True),
        imperial=ImperialOut(
            weight_lb=kg_to_pounds(row.weight_kg), height_ft=feet, height_in=inches
        ),
        warnings=plausibility_warnings(row.height_cm, row.weight_kg, row.daily_calorie_goal),
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


# ───────────────────────── create ──────────────────────────
@router.post(
    "",
    response_model=ProfileOut,
    status_code=status.HTTP_201_CREATED,
)
async def create_user(
    body: ProfileCreate,
    db: AsyncSession = Depends(get_session),
    calc: NutritionGoalCalculator = Depends(get_calculator),
) -> ProfileOut:
    if await db.get(UserProfile, body.id):
        raise HTTPException(status_code=409, detail="User already exists")

    fields = body.model_dump(mode="json", exclude={"id"})
    row = await profiles.create_profile(db, calc, body.id, fields)
    return serialize_profile(row)


# ───────────────────────── fetch one ────────────────────────
@router.get("/{user_id}", response_model=ProfileOut)
async def fetch_user(
    user_id: int,
    db: AsyncSession = Depends(get_session),
) -> ProfileOut:
    row = await profiles.get_profile(db, user_id)
    return serialize_profile(row)


# ───────────────────────── replace ──────────────────────────
@router.put("/{user_id}", response_model=ProfileOut)
async def update_user(
    user_id: int,
    body: ProfileIn,
    db: AsyncSession = Depends(get_session),
    calc: NutritionGoalCalculator = Depends(get_calculator),
) -> ProfileOut:
    row = await profiles.update_profile(db, calc, user_id, body.model_dump(mode="json"))
    return serialize_profile(row)


# ───────────────────────── recalculate ──────────────────────
@router.post("/{user_id}/recalculate", response_model=ProfileOut)
async def recalculate_user(
    user_id: int,
    db: AsyncSession = Depends(get_session),
    calc: NutritionGoalCalculator = Depends(get_calculator),
) -> ProfileOut:
    row = await profiles.get_profile(db, user_id)
    profiles.apply_goals(row, calc)
    await db.commit()
    return serialize_profile(row)


# ───────────────────────── delete ───────────────────────────
@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(
    user_id: int,
    db: AsyncSession = Depends(get_session),
) -> Response:
    await profiles.delete_profile(db, user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
