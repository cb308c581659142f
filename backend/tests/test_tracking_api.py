from datetime import datetime, timedelta, timezone
from fastapi.testclient import TestClient
from liftlog.main import app
import uuid

client = TestClient(app)

def auth_headers():
    email = f"u_{uuid.uuid4().hex[:10]}@ex.com"
    pwd = "StrongPassw0rd!"
    client.post("/auth/register", json={"email": email, "name": "Tracker", "password": pwd})
    r = client.post("/auth/login", json={"email": email, "password": pwd})
    return {"Authorization": f"Bearer {r.json()['access_token']}"}

# --- movements ---

def test_movements_seeded_on_first_list():
    H = auth_headers()
    r = client.get("/movements", headers=H)
    assert r.status_code == 200
    names = [m["name"] for m in r.json()]
    assert len(names) == 12
    assert names == sorted(names)
    pull_up = next(m for m in r.json() if m["name"] == "Pull Up")
    assert pull_up["is_body_weight"] is True
    # listing again does not seed twice
    assert len(client.get("/movements", headers=H).json()) == 12

def test_create_and_delete_movement():
    H = auth_headers()
    r = client.post("/movements", headers=H, json={"name": "  Hip Thrust  "})
    assert r.status_code == 201
    created = r.json()
    assert created["name"] == "Hip Thrust"
    assert created["is_body_weight"] is False

    assert client.post("/movements", headers=H, json={"name": "   "}).status_code == 422

    assert client.delete(f"/movements/{created['id']}", headers=H).status_code == 204
    assert client.delete(f"/movements/{created['id']}", headers=H).status_code == 404

def test_movement_with_history_cannot_be_deleted():
    H = auth_headers()
    mid = client.post("/movements", headers=H, json={"name": "Front Squat"}).json()["id"]
    client.post("/workouts", headers=H)
    client.post("/workouts/current/sets", headers=H, json={"movement_id": mid, "weight": 95, "reps": 5})

    r = client.delete(f"/movements/{mid}", headers=H)
    assert r.status_code == 409
    assert r.json()["detail"] == "Cannot delete movement with existing history"

def test_other_users_movement_is_404():
    H, other = auth_headers(), auth_headers()
    mid = client.post("/movements", headers=other, json={"name": "Nordic Curl"}).json()["id"]
    assert client.delete(f"/movements/{mid}", headers=H).status_code == 404

# --- body weight ---

def test_weight_entries_use_current_unit():
    H = auth_headers()
    assert client.get("/weights/latest", headers=H).json() is None

    r = client.post("/weights", headers=H, json={"weight": 180, "note": " after breakfast "})
    assert r.status_code == 201
    assert r.json()["unit"] == "lbs"
    assert r.json()["note"] == "after breakfast"

    client.put("/settings/weight-unit", headers=H, json={"unit": "kg"})
    assert client.get("/weights/latest", headers=H).json() == {"weight": 81.6, "unit": "kg"}

    r = client.post("/weights", headers=H, json={"weight": 80, "recorded_at": "2020-01-01T08:00:00Z"})
    assert r.json()["unit"] == "kg"
    # latest is by recorded_at, not insertion order
    assert client.get("/weights/latest", headers=H).json() == {"weight": 81.6, "unit": "kg"}

    history = client.get("/weights", headers=H).json()
    assert [e["unit"] for e in history] == ["lbs", "kg"]

def test_weight_validation_and_delete():
    H, other = auth_headers(), auth_headers()
    assert client.post("/weights", headers=H, json={"weight": 0}).status_code == 422
    assert client.post("/weights", headers=H, json={"weight": 2001}).status_code == 422

    entry_id = client.post("/weights", headers=H, json={"weight": 150}).json()["id"]
    assert client.delete(f"/weights/{entry_id}", headers=other).status_code == 404
    assert client.delete(f"/weights/{entry_id}", headers=H).status_code == 204
    assert client.get("/weights", headers=H).json() == []

# --- nutrition ---

def test_daily_nutrition_totals():
    H = auth_headers()
    entries = [
        {"food": "Oats", "calories": 300, "protein": 20, "meal_type": "BREAKFAST",
         "recorded_at": "2026-01-15T08:00:00Z"},
        {"food": "Steak", "calories": 500, "protein": 30, "carbs": 40, "fat": 10, "meal_type": "DINNER",
         "recorded_at": "2026-01-15T23:30:00Z"},
        {"food": "Cookie", "calories": 150, "meal_type": "SNACK",
         "recorded_at": "2026-01-16T00:10:00Z"},
    ]
    for e in entries:
        assert client.post("/nutrition", headers=H, json=e).status_code == 201

    r = client.get("/nutrition/daily", headers=H, params={"date": "2026-01-15"})
    assert r.status_code == 200
    body = r.json()
    assert [e["food"] for e in body["entries"]] == ["Oats", "Steak"]
    assert body["totals"] == {"calories": 800, "protein": 50, "carbs": 40, "fat": 10}

    assert len(client.get("/nutrition", headers=H).json()) == 3

def test_nutrition_validation_and_delete():
    H = auth_headers()
    assert client.post("/nutrition", headers=H, json={"food": " ", "calories": 100, "meal_type": "LUNCH"}).status_code == 422
    assert client.post("/nutrition", headers=H, json={"food": "Soup", "calories": 100, "meal_type": "BRUNCH"}).status_code == 422
    assert client.get("/nutrition/daily", headers=H).status_code == 422

    entry_id = client.post("/nutrition", headers=H, json={"food": "Soup", "calories": 100, "meal_type": "LUNCH"}).json()["id"]
    assert client.delete(f"/nutrition/{entry_id}", headers=H).status_code == 204
    assert client.delete(f"/nutrition/{entry_id}", headers=H).status_code == 404

def test_goal_upsert():
    H = auth_headers()
    assert client.get("/nutrition/goal", headers=H).json() is None

    r = client.put("/nutrition/goal", headers=H, json={"calories": 2500, "protein": 180})
    assert r.status_code == 200
    first = r.json()
    assert first["calories"] == 2500
    assert first["carbs"] is None

    r = client.put("/nutrition/goal", headers=H, json={"calories": 2200, "protein": 170, "carbs": 200, "fat": 70})
    assert r.json()["id"] == first["id"]
    assert client.get("/nutrition/goal", headers=H).json()["calories"] == 2200

# --- foods ---

def test_food_search_ranks_custom_first():
    from seed_foods import default_rows, seed
    seed(default_rows())

    H, other = auth_headers(), auth_headers()
    r = client.post("/foods", headers=H, json={
        "name": "Chicken Curry", "category": "Meals",
        "calories": 450, "protein": 35, "carbs": 30, "fat": 18,
    })
    assert r.status_code == 201
    assert r.json()["is_custom"] is True

    results = client.get("/foods/search", headers=H, params={"q": "chicken"}).json()
    assert [f["name"] for f in results[:2]] == ["Chicken Curry", "Chicken Breast"]

    # custom foods are private
    results = client.get("/foods/search", headers=other, params={"q": "chicken"}).json()
    assert [f["name"] for f in results] == ["Chicken Breast"]

    # category matches too
    names = {f["name"] for f in client.get("/foods/search", headers=H, params={"q": "DAIRY"}).json()}
    assert {"Greek Yogurt", "Milk", "Cheddar Cheese"} <= names

    assert client.get("/foods/search", headers=H, params={"q": "   "}).json() == []
    assert client.get("/foods/search", headers=H).status_code == 422

def test_custom_food_crud():
    H, other = auth_headers(), auth_headers()
    food = client.post("/foods", headers=H, json={
        "name": "Protein Bar", "category": "Snacks",
        "calories": 210, "protein": 20, "carbs": 22, "fat": 7, "serving_size": "1 bar",
    }).json()

    assert [f["id"] for f in client.get("/foods/custom", headers=H).json()] == [food["id"]]
    assert client.get(f"/foods/{food['id']}", headers=H).json()["serving_size"] == "1 bar"
    assert client.get(f"/foods/{food['id']}", headers=other).status_code == 404
    assert client.delete(f"/foods/{food['id']}", headers=other).status_code == 404

    assert client.delete(f"/foods/{food['id']}", headers=H).status_code == 204
    assert client.get("/foods/custom", headers=H).json() == []

    bad = {"name": "Air", "category": "Other", "calories": 0, "protein": 0, "carbs": 0, "fat": 0}
    assert client.post("/foods", headers=H, json=bad).status_code == 422

def test_offset_timestamps_are_bucketed_by_utc_day():
    H = auth_headers()
    # 23:30 in UTC-5 is 04:30 the next day in UTC
    r = client.post("/nutrition", headers=H, json={
        "food": "Late Pizza", "calories": 200, "meal_type": "SNACK",
        "recorded_at": "2026-03-01T23:30:00-05:00",
    })
    assert r.status_code == 201
    assert datetime.fromisoformat(r.json()["recorded_at"].replace("Z", "+00:00")) == \
        datetime(2026, 3, 2, 4, 30, tzinfo=timezone.utc)

    day = lambda d: client.get("/nutrition/daily", headers=H, params={"date": d}).json()["totals"]["calories"]
    assert day("2026-03-02") == 200
    assert day("2026-03-01") == 0

    listed = client.get("/nutrition", headers=H).json()[0]["recorded_at"]
    assert datetime.fromisoformat(listed.replace("Z", "+00:00")).utcoffset() == timedelta(0)

def test_weight_recorded_at_is_returned_in_utc():
    H = auth_headers()
    r = client.post("/weights", headers=H, json={"weight": 170, "recorded_at": "2026-03-01T10:00:00+02:00"})
    assert r.status_code == 201
    stored = datetime.fromisoformat(r.json()["recorded_at"].replace("Z", "+00:00"))
    assert stored == datetime(2026, 3, 1, 8, 0, tzinfo=timezone.utc)

    listed = client.get("/weights", headers=H).json()[0]["recorded_at"]
    assert datetime.fromisoformat(listed.replace("Z", "+00:00")) == stored
