# api/v1/router.py
from fastapi import APIRouter

from . import goals, meals, users, water, weights

api_router = APIRouter()

api_router.include_router(goals.router, prefix="/goals", tags=["Goals"])
api_router.include_router(users.router, prefix="/users", tags=["Users"])

# weight history lives *under* the user resource
api_router.include_router(
    weights.router,
    prefix="/users",          # results in /users/{user_id}/weights
    tags=["Weights"],
)
api_router.include_router(meals.router, tags=["Meals"])
api_router.include_router(water.router, tags=["Water"])
