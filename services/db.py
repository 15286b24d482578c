"""
services/db.py
────────────────────────────────────────────────────────────────────────
* Async SQLAlchemy v2 setup
* Models for profiles, weight history, logged meals and water
* Session helpers used by routers / scripts
"""
from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import AsyncGenerator, AsyncIterator

from sqlalchemy import DateTime, Float, ForeignKey, Integer, String
from sqlalchemy.ext.asyncio import (
    AsyncAttrs,
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import Mapped, declarative_base, mapped_column

from config import settings

_LOG = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


# ───────── connection helper ────────────────────────────────────────
_ENGINE: AsyncEngine | None = None


def engine() -> AsyncEngine:
    global _ENGINE
    if _ENGINE is None:
        _LOG.info("creating engine for %s", settings.database_url.split("://")[0])
        _ENGINE = create_async_engine(
            settings.database_url, echo=settings.sql_echo, pool_pre_ping=True
        )
    return _ENGINE


async def dispose_engine() -> None:
    global _ENGINE
    if _ENGINE is not None:
        await _ENGINE.dispose()
        _ENGINE = None


# ───────── declarative base ──────────────────────────────────────────
Base = declarative_base(cls=AsyncAttrs)


class UserProfile(Base):
    __tablename__ = "user_profiles"

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str | None] = mapped_column(String)
    sex: Mapped[str] = mapped_column(String, default="unspecified")
    age: Mapped[int] = mapped_column(Integer)
    height_cm: Mapped[float] = mapped_column(Float)
    weight_kg: Mapped[float] = mapped_column(Float)
    activity_level: Mapped[str] = mapped_column(String, default="moderate")
    weight_goal: Mapped[str] = mapped_column(String, default="maintain")

    # macro split, fractions of kcal
    carb_percentage: Mapped[float] = mapped_column(Float, default=0.4)
    protein_percentage: Mapped[float] = mapped_column(Float, default=0.3)
    fat_percentage: Mapped[float] = mapped_column(Float, default=0.3)

    # last computed goals – always derivable from the columns above
    bmr: Mapped[float] = mapped_column(Float, default=0.0)
    tdee: Mapped[float] = mapped_column(Float, default=0.0)
    daily_calorie_goal: Mapped[float] = mapped_column(Float, default=0.0)
    carb_goal_grams: Mapped[float] = mapped_column(Float, default=0.0)
    protein_goal_grams: Mapped[float] = mapped_column(Float, default=0.0)
    fat_goal_grams: Mapped[float] = mapped_column(Float, default=0.0)

    created_at: Mapped[datetime] = mapped_column(DateTime, default=_utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=_utcnow, onupdate=_utcnow)


class WeightEntry(Base):
    __tablename__ = "weight_entries"

    id: Mapped[int] = mapped_column(primary_key=True)
    user_id: Mapped[int] = mapped_column(
        ForeignKey("user_profiles.id", ondelete="CASCADE"), index=True
    )
    weight_kg: Mapped[float] = mapped_column(Float)
    recorded_at: Mapped[datetime] = mapped_column(DateTime, default=_utcnow)


class MealEntry(Base):
    __tablename__ = "meal_entries"

    id: Mapped[int] = mapped_column(primary_key=True)
    user_id: Mapped[int] = mapped_column(
        ForeignKey("user_profiles.id", ondelete="CASCADE"), index=True
    )
    meal_type: Mapped[str] = mapped_column(String)
    name: Mapped[str] = mapped_column(String)
    calories: Mapped[float] = mapped_column(Float)
    carbs_g: Mapped[float] = mapped_column(Float, default=0.0)
    protein_g: Mapped[float] = mapped_column(Float, default=0.0)
    fat_g: Mapped[float] = mapped_column(Float, default=0.0)
    eaten_at: Mapped[datetime] = mapped_column(DateTime, default=_utcnow)


class WaterEntry(Base):
    __tablename__ = "water_entries"

    id: Mapped[int] = mapped_column(primary_key=True)
    user_id: Mapped[int] = mapped_column(
        ForeignKey("user_profiles.id", ondelete="CASCADE"), index=True
    )
    amount_ml: Mapped[float] = mapped_column(Float)
    recorded_at: Mapped[datetime] = mapped_column(DateTime, default=_utcnow)


# ───────── schema bootstrap ──────────────────────────────────────────
async def init_models() -> None:
    async with engine().begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


# ───────── session helpers ───────────────────────────────────────────
def _sessionmaker() -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine(), expire_on_commit=False)


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency."""
    async with _sessionmaker()() as session:
        yield session


@asynccontextmanager
async def session_scope() -> AsyncIterator[AsyncSession]:
    """Same as `get_session()` for scripts (`async with session_scope() as db`)."""
    async with _sessionmaker()() as session:
        yield session
