"""
core/progress.py
────────────────────────────────────────────────────────────────────────
Intake and weight analytics on top of the logged history.

* `daily_intake()`    – totals for one calendar day
* `weekly_averages()` – mean daily intake over a trailing window
* `goal_progress()`   – consumed vs. goal for kcal + the three macros
* `weight_trend()`    – overall and average weekly weight change
* `daily_water()` / `weekly_water()` – hydration against a weight-based goal

Inputs are plain dicts (rows already pulled out of the DB) so this module
stays free of any session handling.
"""

from __future__ import annotations

from datetime import date, timedelta
from typing import Any, Dict, Iterable, List, Optional

import pandas as pd

from core.nutrition_calc import NutritionGoals

NUTRIENTS = ["calories", "carbs_g", "protein_g", "fat_g"]

# nutrient column → attribute on NutritionGoals
_GOAL_FIELDS = {
    "calories": "daily_calorie_goal",
    "carbs_g": "carb_goal_grams",
    "protein_g": "protein_goal_grams",
    "fat_g": "fat_goal_grams",
}


def _meals_frame(meals: Iterable[Dict[str, Any]]) -> pd.DataFrame:
    df = pd.DataFrame(list(meals))
    if df.empty:
        return pd.DataFrame(columns=["date", *NUTRIENTS])
    for col in NUTRIENTS:
        if col not in df.columns:
            df[col] = 0.0
    df[NUTRIENTS] = df[NUTRIENTS].fillna(0.0).astype(float)
    df["date"] = pd.to_datetime(df["eaten_at"]).dt.date
    return df


def _zeros() -> Dict[str, float]:
    return {k: 0.0 for k in NUTRIENTS}


# ─────────────────────────────── intake ─────────────────────────── #
def daily_intake(meals: Iterable[Dict[str, Any]], day: date) -> Dict[str, float]:
    df = _meals_frame(meals)
    todays = df[df["date"] == day]
    if todays.empty:
        return _zeros()
    sums = todays[NUTRIENTS].sum()
    return {k: float(sums[k]) for k in NUTRIENTS}


def weekly_averages(
    meals: Iterable[Dict[str, Any]], end_day: date, days: int = 7
) -> Dict[str, float]:
    """Average per day over `days` days ending on `end_day`; empty days count as 0."""
    start = end_day - timedelta(days=days - 1)
    df = _meals_frame(meals)
    window = df[(df["date"] >= start) & (df["date"] <= end_day)]
    if window.empty:
        return _zeros()

    daily = window.groupby("date")[NUTRIENTS].sum()
    all_days = [start + timedelta(days=i) for i in range(days)]
    daily = daily.reindex(all_days, fill_value=0.0)
    avg = daily.mean()
    return {k: float(avg[k]) for k in NUTRIENTS}


def goal_progress(
    intake: Dict[str, float], goals: NutritionGoals
) -> Dict[str, Dict[str, float]]:
    out: Dict[str, Dict[str, float]] = {}
    for key, attr in _GOAL_FIELDS.items():
        goal = getattr(goals, attr)
        consumed = intake.get(key, 0.0)
        out[key] = {
            "consumed": consumed,
            "goal": goal,
            "remaining": goal - consumed,
            "fraction": consumed / goal if goal > 0 else 0.0,
        }
    return out


# ─────────────────────────────── weight ─────────────────────────── #
def weight_trend(entries: Iterable[Dict[str, Any]]) -> Dict[str, Any]:
    df = pd.DataFrame(list(entries))
    if df.empty:
        return {
            "entries": 0,
            "start_kg": None,
            "latest_kg": None,
            "total_change_kg": None,
            "avg_weekly_change_kg": None,
        }

    df["recorded_at"] = pd.to_datetime(df["recorded_at"])
    df = df.sort_values("recorded_at", kind="stable")
    first, last = df.iloc[0], df.iloc[-1]

    total = float(last["weight_kg"] - first["weight_kg"])
    span_days = (last["recorded_at"] - first["recorded_at"]).days
    weeks = max(1.0, span_days / 7.0)
    return {
        "entries": int(len(df)),
        "start_kg": float(first["weight_kg"]),
        "latest_kg": float(last["weight_kg"]),
        "total_change_kg": total,
        "avg_weekly_change_kg": total / weeks,
    }


def weight_changes(entries: List[Dict[str, Any]]) -> List[float | None]:
    """Change vs. the previous entry, in date order (first entry → None)."""
    if not entries:
        return []
    df = pd.DataFrame(entries)
    df["recorded_at"] = pd.to_datetime(df["recorded_at"])
    diffs = df.sort_values("recorded_at", kind="stable")["weight_kg"].diff()
    return [None if pd.isna(d) else float(d) for d in diffs]


# ─────────────────────────────── water ──────────────────────────── #
WATER_ML_PER_KG = 30.0
DEFAULT_WATER_GOAL_ML = 2000.0
STREAK_FRACTION = 0.9      # a day counts towards the streak at 90 % of goal


def water_goal_ml(weight_kg: Optional[float]) -> float:
    if weight_kg is None or weight_kg <= 0:
        return DEFAULT_WATER_GOAL_ML
    return weight_kg * WATER_ML_PER_KG


def water_status(fraction: float) -> str:
    if fraction < 0.5:
        return "low"
    if fraction < 0.8:
        return "moderate"
    return "good"


def _water_by_day(entries: Iterable[Dict[str, Any]]) -> pd.Series:
    df = pd.DataFrame(list(entries))
    if df.empty:
        return pd.Series(dtype=float)
    df["date"] = pd.to_datetime(df["recorded_at"]).dt.date
    return df.groupby("date")["amount_ml"].sum().astype(float)


def daily_water(
    entries: Iterable[Dict[str, Any]], day: date, goal_ml: float
) -> Dict[str, Any]:
    """Total for `day` with the remaining amount (never negative) and a capped fraction."""
    by_day = _water_by_day(entries)
    total = float(by_day.get(day, 0.0))
    fraction = min(1.0, total / goal_ml) if goal_ml > 0 else 0.0
    return {
        "day": day,
        "total_ml": total,
        "goal_ml": goal_ml,
        "remaining_ml": max(0.0, goal_ml - total),
        "fraction": fraction,
        "goal_met": total >= goal_ml,
        "status": water_status(fraction),
    }


def weekly_water(
    entries: Iterable[Dict[str, Any]], end_day: date, goal_ml: float, days: int = 7
) -> Dict[str, Any]:
    """
    Window of `days` days ending on `end_day`.

    The average and the completion rate only look at days that have at
    least one entry; the streak walks back from `end_day` and stops at the
    first day under 90 % of the goal (or at the window start).
    """
    start = end_day - timedelta(days=days - 1)
    by_day = _water_by_day(entries)
    if not by_day.empty:
        by_day = by_day[(by_day.index >= start) & (by_day.index <= end_day)]

    all_days = [start + timedelta(days=i) for i in range(days)]
    totals = by_day.reindex(all_days, fill_value=0.0)

    logged = len(by_day)
    total = float(by_day.sum()) if logged else 0.0
    met = int((by_day >= goal_ml).sum()) if logged else 0

    streak = 0
    for value in reversed(totals.tolist()):
        if value < goal_ml * STREAK_FRACTION:
            break
        streak += 1

    return {
        "start": start,
        "end": end_day,
        "goal_ml": goal_ml,
        "total_ml": total,
        "average_ml": total / max(1, logged),
        "streak": streak,
        "days_goal_met": met,
        "goal_completion_rate": met / max(1, logged),
        "daily": [
            {"day": d, "total_ml": float(v)} for d, v in zip(all_days, totals.tolist())
        ],
    }
