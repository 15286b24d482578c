from datetime import date, datetime

import pytest

from core.nutrition_calc import NutritionGoals
from core.progress import (
    daily_intake,
    daily_water,
    goal_progress,
    water_goal_ml,
    water_status,
    weekly_averages,
    weekly_water,
    weight_changes,
    weight_trend,
)

MEALS = [
    dict(eaten_at=datetime(2025, 3, 20, 8), calories=400, carbs_g=50, protein_g=20, fat_g=12),
    dict(eaten_at=datetime(2025, 3, 20, 13), calories=700, carbs_g=80, protein_g=40, fat_g=20),
    dict(eaten_at=datetime(2025, 3, 18, 19), calories=700, carbs_g=70, protein_g=30, fat_g=30),
]

GOALS = NutritionGoals(
    bmr=1780,
    tdee=2759.0,
    daily_calorie_goal=2000,
    carb_goal_grams=200,
    protein_goal_grams=150,
    fat_goal_grams=66.7,
)


def test_daily_intake_sums_one_day():
    t = daily_intake(MEALS, date(2025, 3, 20))
    assert t == {"calories": 1100.0, "carbs_g": 130.0, "protein_g": 60.0, "fat_g": 32.0}


def test_daily_intake_empty():
    assert daily_intake([], date(2025, 3, 20))["calories"] == 0.0
    assert daily_intake(MEALS, date(2025, 1, 1))["fat_g"] == 0.0


def test_weekly_average_counts_empty_days():
    avg = weekly_averages(MEALS, date(2025, 3, 20))
    assert avg["calories"] == pytest.approx(1800 / 7)


def test_weekly_window_excludes_older_meals():
    avg = weekly_averages(MEALS, date(2025, 3, 27))
    assert avg["calories"] == pytest.approx(0.0)


def test_goal_progress():
    p = goal_progress({"calories": 2500.0, "carbs_g": 100.0}, GOALS)
    assert p["calories"]["remaining"] == pytest.approx(-500.0)
    assert p["calories"]["fraction"] == pytest.approx(1.25)
    assert p["carbs_g"]["fraction"] == pytest.approx(0.5)
    assert p["protein_g"]["consumed"] == 0.0


def test_goal_progress_zero_goal():
    zero = NutritionGoals(0, 0, 0, 0, 0, 0)
    assert goal_progress({"calories": 100.0}, zero)["calories"]["fraction"] == 0.0


def test_weight_trend():
    entries = [
        {"weight_kg": 80.0, "recorded_at": datetime(2025, 3, 1)},
        {"weight_kg": 78.0, "recorded_at": datetime(2025, 3, 29)},
        {"weight_kg": 79.0, "recorded_at": datetime(2025, 3, 15)},
    ]
    t = weight_trend(entries)
    assert t["entries"] == 3
    assert t["start_kg"] == 80.0 and t["latest_kg"] == 78.0
    assert t["total_change_kg"] == pytest.approx(-2.0)
    assert t["avg_weekly_change_kg"] == pytest.approx(-0.5)
    assert weight_changes(entries) == [None, pytest.approx(-1.0), pytest.approx(-1.0)]


def test_weight_trend_short_span_uses_one_week():
    entries = [
        {"weight_kg": 70.0, "recorded_at": datetime(2025, 3, 1)},
        {"weight_kg": 71.0, "recorded_at": datetime(2025, 3, 3)},
    ]
    assert weight_trend(entries)["avg_weekly_change_kg"] == pytest.approx(1.0)


def test_weight_trend_empty():
    assert weight_trend([])["start_kg"] is None
    assert weight_changes([]) == []


# ── water ───────────────────────────────────────────────────────────
WATER = [
    dict(recorded_at=datetime(2025, 3, 14, 9), amount_ml=2400),
    dict(recorded_at=datetime(2025, 3, 18, 9), amount_ml=1200),
    dict(recorded_at=datetime(2025, 3, 18, 18), amount_ml=1000),
    dict(recorded_at=datetime(2025, 3, 19, 9), amount_ml=2400),
    dict(recorded_at=datetime(2025, 3, 20, 9), amount_ml=2300),
    dict(recorded_at=datetime(2025, 3, 10, 9), amount_ml=5000),   # outside the week
]


def test_water_goal_from_weight():
    assert water_goal_ml(80) == pytest.approx(2400)
    assert water_goal_ml(None) == 2000
    assert water_goal_ml(0) == 2000


@pytest.mark.parametrize(
    "fraction, status", [(0.0, "low"), (0.49, "low"), (0.5, "moderate"), (0.79, "moderate"), (0.8, "good")]
)
def test_water_status(fraction, status):
    assert water_status(fraction) == status


def test_daily_water_remaining_and_fraction():
    d = daily_water(WATER, date(2025, 3, 18), 2400)
    assert d["total_ml"] == pytest.approx(2200)
    assert d["remaining_ml"] == pytest.approx(200)
    assert d["fraction"] == pytest.approx(2200 / 2400)
    assert d["goal_met"] is False
    assert d["status"] == "good"


def test_daily_water_caps_at_goal():
    d = daily_water(WATER, date(2025, 3, 10), 2400)
    assert d["remaining_ml"] == 0.0
    assert d["fraction"] == 1.0
    assert d["goal_met"] is True


def test_daily_water_empty_day():
    d = daily_water([], date(2025, 3, 20), 2000)
    assert d["total_ml"] == 0.0 and d["remaining_ml"] == 2000
    assert d["status"] == "low"


def test_weekly_water():
    w = weekly_water(WATER, date(2025, 3, 20), 2400)
    assert w["start"] == date(2025, 3, 14)
    assert w["total_ml"] == pytest.approx(9300)
    # averaged over the four days that have entries
    assert w["average_ml"] == pytest.approx(9300 / 4)
    # 20th, 19th and 18th are all at >= 90 % of the goal, the 17th is empty
    assert w["streak"] == 3
    assert w["days_goal_met"] == 2
    assert w["goal_completion_rate"] == pytest.approx(0.5)
    assert len(w["daily"]) == 7
    assert w["daily"][0] == {"day": date(2025, 3, 14), "total_ml": 2400.0}
    assert w["daily"][3]["total_ml"] == 0.0


def test_weekly_water_empty():
    w = weekly_water([], date(2025, 3, 20), 2000)
    assert w["total_ml"] == 0.0
    assert w["average_ml"] == 0.0
    assert w["streak"] == 0
    assert w["goal_completion_rate"] == 0.0
