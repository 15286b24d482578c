"""
Meal logging + intake summaries.
"""
import pytest

BASE = "/api/v1"


def _log(client, **kw):
    body = {"meal_type": "lunch", "name": "Chicken Salad", "calories": 500,
            "carbs_g": 20, "protein_g": 40, "fat_g": 18, **kw}
    return client.post(f"{BASE}/users/1/meals", json=body)


def test_log_and_list_meals(client, profile):
    r = _log(client, eaten_at="2025-03-20T12:30:00")
    assert r.status_code == 201
    assert r.json()["user_id"] == 1

    _log(client, eaten_at="2025-03-21T12:30:00")

    day = client.get(f"{BASE}/users/1/meals", params={"day": "2025-03-20"}).json()
    assert len(day) == 1
    assert day[0]["name"] == "Chicken Salad"


def test_log_meal_unknown_user(client):
    assert _log(client).status_code == 404


def test_negative_calories_rejected(client, profile):
    assert _log(client, calories=-10).status_code == 422
    assert _log(client, meal_type="brunch").status_code == 422


def test_delete_meal(client, profile):
    meal_id = _log(client).json()["id"]
    assert client.delete(f"{BASE}/meals/{meal_id}").status_code == 204
    assert client.delete(f"{BASE}/meals/{meal_id}").status_code == 404


def test_daily_summary(client, profile):
    _log(client, eaten_at="2025-03-20T08:00:00", meal_type="breakfast", calories=300,
         carbs_g=40, protein_g=10, fat_g=10)
    _log(client, eaten_at="2025-03-20T12:30:00")

    s = client.get(f"{BASE}/users/1/summary", params={"day": "2025-03-20"}).json()
    assert s["intake"]["calories"] == pytest.approx(800)
    cal = s["progress"]["calories"]
    assert cal["goal"] == pytest.approx(2759.0)
    assert cal["remaining"] == pytest.approx(2759.0 - 800)
    assert s["progress"]["protein_g"]["consumed"] == pytest.approx(50)


def test_weekly_summary(client, profile):
    _log(client, eaten_at="2025-03-14T12:00:00", calories=700)
    _log(client, eaten_at="2025-03-20T12:00:00", calories=700)
    _log(client, eaten_at="2025-03-10T12:00:00", calories=9999)   # outside the window

    s = client.get(f"{BASE}/users/1/summary/weekly", params={"end": "2025-03-20"}).json()
    assert s["start"] == "2025-03-14"
    assert s["intake"]["calories"] == pytest.approx(200)


def test_calories_derived_from_macros(client, profile):
    body = {"meal_type": "snack", "name": "Yoghurt", "carbs_g": 50, "protein_g": 20, "fat_g": 10}
    r = client.post(f"{BASE}/users/1/meals", json=body)
    assert r.status_code == 201
    assert r.json()["calories"] == pytest.approx(370)


def test_explicit_calories_win_over_macros(client, profile):
    assert _log(client, calories=480).json()["calories"] == pytest.approx(480)
