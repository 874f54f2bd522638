import json
import threading
from datetime import date, timedelta

import pytest
from fastapi.testclient import TestClient
from pydantic import ValidationError

from mealbox.api import api_run
from mealbox.infra import Dish_Repository, Profile_Repository, Schedule_Repository
from mealbox.utilities.validators import DurationInput, PlanOpenInput


@pytest.fixture
def client(tmp_path, monkeypatch):
    """API client backed by temporary catalog / profile / schedule files."""
    dishes = [
        {"id": f"d{i}", "name": f"Plat {i}", "category": "Plat", "origin": "Française",
         "cookingTime": "30 min", "calories": 350 + i * 20}
        for i in range(10)
    ]
    dishes.append({"id": "d99", "name": "Poulet aux arachides", "category": "Plat", "origin": "Sénégalaise"})
    (tmp_path / "dishes.json").write_text(json.dumps(dishes), encoding="utf-8")
    profiles = {"u1": {"origin": "Sénégalaise", "allergies": "arachide", "mainObjective": "perte de poids"}}
    (tmp_path / "profiles.json").write_text(json.dumps(profiles), encoding="utf-8")

    monkeypatch.setattr(Dish_Repository, "DISHES_FILE", tmp_path / "dishes.json")
    monkeypatch.setattr(Profile_Repository, "PROFILES_FILE", tmp_path / "profiles.json")
    monkeypatch.setattr(Schedule_Repository, "SCHEDULE_FILE", tmp_path / "schedule.json")
    api_run.reset_sessions()
    with TestClient(api_run.app) as c:
        yield c
    api_run.reset_sessions()


def test_box_has_four_weeks_without_allergens(client):
    resp = client.get("/api/box", params={"user_id": "u1"})
    assert resp.status_code == 200
    boxes = resp.json()["boxes"]
    assert len(boxes) == 4
    names = {m["name"] for b in boxes for d in b["days"] for m in d["meals"]}
    assert "Poulet aux arachides" not in names
    assert boxes[0]["title"] == "Légèreté & Équilibre"


def test_box_is_stable_within_session(client):
    first = client.get("/api/box", params={"user_id": "u1"}).json()
    second = client.get("/api/box", params={"user_id": "u1"}).json()
    assert first == second


def test_full_plan_flow(client):
    client.get("/api/box", params={"user_id": "u1"})
    resp = client.post("/api/plan", json={"user_id": "u1", "week": 2, "duration": 7})
    assert resp.status_code == 200
    assert len(resp.json()["entries"]) == 28

    resp = client.post("/api/plan/duration", json={"user_id": "u1", "duration": 3})
    entries = resp.json()["entries"]
    assert len(entries) == 12

    target = entries[1]
    swapped = client.post("/api/plan/swap", json={"user_id": "u1", "entry_id": target["id"],
                                                  "day_index": target["dayIndex"]}).json()
    assert swapped["id"] == target["id"]
    assert swapped["name"] != target["name"]

    resp = client.post("/api/plan/toggle", json={"user_id": "u1", "entry_id": entries[0]["id"], "day_index": 1})
    assert resp.json()["entries"][0]["enabled"] is False

    start = date.today() + timedelta(days=1)
    report = client.post("/api/plan/commit", json={"user_id": "u1", "start_date": start.isoformat()}).json()
    assert (report["succeeded"], report["failed"], report["total"]) == (11, 0, 11)

    schedule = client.get("/api/schedule", params={"user_id": "u1", "start": start.isoformat()}).json()
    assert schedule["count"] == 11
    assert {i["kind"] for i in schedule["items"]} == {"scheduled"}
    assert swapped["name"] in {i["payload"]["name"] for i in schedule["items"]}

    again = client.post("/api/plan/commit", json={"user_id": "u1", "start_date": start.isoformat()})
    assert again.status_code == 409

    events = client.get("/api/events", params={"user_id": "u1"}).json()["events"]
    assert any(e["type"] == "plan.committed" and e["succeeded"] == 11 for e in events)


def test_invalid_inputs_are_rejected(client):
    client.get("/api/box", params={"user_id": "u1"})
    assert client.post("/api/plan", json={"user_id": "u1", "week": 1, "duration": 5}).status_code == 422
    assert client.post("/api/plan", json={"user_id": "u1", "week": 9, "duration": 3}).status_code == 422
    client.post("/api/plan", json={"user_id": "u1", "week": 1, "duration": 3})
    past = (date.today() - timedelta(days=2)).isoformat()
    assert client.post("/api/plan/commit", json={"user_id": "u1", "start_date": past}).status_code == 422


def test_plan_without_session_is_404(client):
    resp = client.post("/api/plan/duration", json={"user_id": "nobody", "duration": 3})
    assert resp.status_code == 404


def test_unknown_entry_is_404(client):
    client.post("/api/plan", json={"user_id": "u1", "week": 1, "duration": 3})
    resp = client.post("/api/plan/swap", json={"user_id": "u1", "entry_id": "w1d6tlunch", "day_index": 6})
    assert resp.status_code == 404


def test_cold_start_user_gets_a_box(client):
    resp = client.get("/api/box", params={"user_id": "stranger"})
    assert resp.status_code == 200
    assert len(resp.json()["boxes"]) == 4


def test_box_day_view(client):
    resp = client.get("/api/box/1/day/2", params={"user_id": "u1"})
    assert resp.status_code == 200
    data = resp.json()
    assert data["label"] == "Mardi"
    assert [i["kind"] for i in data["items"]] == ["box"] * 4
    assert data["total_calories"] == sum(i["payload"]["calories"] for i in data["items"])
    assert client.get("/api/box/1/day/8", params={"user_id": "u1"}).status_code == 404


def test_pdf_export(client):
    resp = client.get("/api/box/1/pdf", params={"user_id": "u1"})
    assert resp.status_code == 200
    assert resp.headers["content-type"] == "application/pdf"
    assert resp.content.startswith(b"%PDF")
    assert client.get("/api/box/6/pdf", params={"user_id": "u1"}).status_code == 404


def test_concurrent_first_requests_share_one_session(client):
    sessions = []
    threads = [threading.Thread(target=lambda: sessions.append(api_run._get_session("u1", create=True)))
               for _ in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert len(sessions) == 4
    assert all(s is sessions[0] for s in sessions)


def test_duration_outside_allowed_values_is_rejected():
    with pytest.raises(ValidationError):
        DurationInput(user_id="u1", duration=4)
    assert PlanOpenInput(user_id="u1").duration == 7
