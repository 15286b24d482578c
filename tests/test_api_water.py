"""
Water logging + hydration summaries (goal = 30 ml per kg, 2400 ml for the fixture profile).
"""
import pytest

BASE = "/api/v1"


def _drink(client, amount, **kw):
    return client.post(f"{BASE}/users/1/water", json={"amount": amount, **kw})


def test_log_and_list_water(client, profile):
    r = _drink(client, 500, recorded_at="2025-03-20T09:00:00")
    assert r.status_code == 201
    assert r.json()["amount_ml"] == pytest.approx(500)

    oz = _drink(client, 8, unit="oz", recorded_at="2025-03-20T11:00:00").json()
    assert oz["amount_ml"] == pytest.approx(236.588)

    _drink(client, 300, recorded_at="2025-03-21T09:00:00")
    day = client.get(f"{BASE}/users/1/water", params={"day": "2025-03-20"}).json()
    assert [e["amount_ml"] for e in day] == [pytest.approx(500), pytest.approx(236.588)]


def test_water_input_rejected(client, profile):
    assert _drink(client, 0).status_code == 422
    assert _drink(client, 250, unit="cups").status_code == 422


def test_water_unknown_user(client):
    assert _drink(client, 250).status_code == 404
    assert client.get(f"{BASE}/users/9/water/summary").status_code == 404


def test_delete_water(client, profile):
    entry_id = _drink(client, 250).json()["id"]
    assert client.delete(f"{BASE}/water/{entry_id}").status_code == 204
    assert client.delete(f"{BASE}/water/{entry_id}").status_code == 404


def test_daily_water_summary(client, profile):
    _drink(client, 1500, recorded_at="2025-03-20T09:00:00")
    _drink(client, 300, recorded_at="2025-03-20T15:00:00")

    s = client.get(f"{BASE}/users/1/water/summary", params={"day": "2025-03-20"}).json()
    assert s["goal_ml"] == pytest.approx(2400)
    assert s["total_ml"] == pytest.approx(1800)
    assert s["remaining_ml"] == pytest.approx(600)
    assert s["fraction"] == pytest.approx(0.75)
    assert s["status"] == "moderate"
    assert s["goal_met"] is False
    assert len(s["entries"]) == 2


def test_daily_water_summary_over_goal(client, profile):
    _drink(client, 3000, recorded_at="2025-03-20T09:00:00")
    s = client.get(f"{BASE}/users/1/water/summary", params={"day": "2025-03-20"}).json()
    assert s["remaining_ml"] == 0.0
    assert s["fraction"] == 1.0
    assert s["status"] == "good"


def test_water_goal_follows_weight(client, profile):
    client.post(f"{BASE}/users/1/weights", json={"weight_kg": 70})
    s = client.get(f"{BASE}/users/1/water/summary").json()
    assert s["goal_ml"] == pytest.approx(2100)


def test_weekly_water_summary(client, profile):
    for ts, ml in [
        ("2025-03-14T09:00:00", 2400),
        ("2025-03-18T09:00:00", 2200),
        ("2025-03-19T09:00:00", 2400),
        ("2025-03-20T09:00:00", 2300),
        ("2025-03-10T09:00:00", 5000),    # outside the window
    ]:
        _drink(client, ml, recorded_at=ts)

    s = client.get(f"{BASE}/users/1/water/summary/weekly", params={"end": "2025-03-20"}).json()
    assert s["start"] == "2025-03-14"
    assert s["total_ml"] == pytest.approx(9300)
    assert s["average_ml"] == pytest.approx(2325)
    assert s["streak"] == 3
    assert s["days_goal_met"] == 2
    assert s["goal_completion_rate"] == pytest.approx(0.5)
    assert [d["day"] for d in s["daily"]][-1] == "2025-03-20"


def test_deleting_profile_removes_water(client, profile):
    _drink(client, 500, recorded_at="2025-03-20T09:00:00")
    assert client.delete(f"{BASE}/users/1").status_code == 204

    r = client.post(f"{BASE}/users", json={"id": 1, "age": 30, "height_cm": 170, "weight_kg": 70})
    assert r.status_code == 201
    assert client.get(f"{BASE}/users/1/water", params={"day": "2025-03-20"}).json() == []
