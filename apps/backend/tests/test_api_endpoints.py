def lesson_payload(subject_id, user_id, start, end, campus_id=1):
    return {
        "subject_id": subject_id,
        "user_id": user_id,
        "campus_id": campus_id,
        "start_time": start,
        "end_time": end,
    }

def test_health_check(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"

def test_add_and_list_lessons(client):
    response = client.post("/api/lessons/", json=lesson_payload(1, 10, "2026-10-19T08:30:00", "2026-10-19T09:00:00"))
    assert response.status_code == 200
    data = response.json()
    assert data["created"] is True
    assert data["week"] == "2026-W43"

    response = client.get("/api/lessons/", params={"start_time": "2026-10-21T12:00:00"})
    assert response.status_code == 200
    weeks = response.json()
    assert len(weeks) == 1
    assert weeks[0]["week"] == "2026-W43"
    assert weeks[0]["monday"] == "2026-10-19"
    plans = weeks[0]["plans"]
    assert [p["period"] for p in plans] == ["08:00-09:30", "09:30-11:00"]
    assert plans[0]["mon"][0]["id"] == data["id"]
    assert plans[0]["mon"][0]["teacher_name"] == "Alice"
    assert plans[1]["mon"] == []

def test_conflicting_lesson_returns_409(client):
    client.post("/api/lessons/", json=lesson_payload(1, 10, "2026-10-19T08:30:00", "2026-10-19T09:00:00"))

    response = client.post("/api/lessons/", json=lesson_payload(1, 11, "2026-10-19T08:45:00", "2026-10-19T09:15:00"))
    assert response.status_code == 409
    assert "Alice" in response.json()["detail"]

    response = client.post("/api/lessons/", json=lesson_payload(2, 10, "2026-10-19T08:45:00", "2026-10-19T09:15:00"))
    assert response.status_code == 409
    assert "Math" in response.json()["detail"]

def test_inverted_window_rejected(client):
    response = client.post("/api/lessons/", json=lesson_payload(1, 10, "2026-10-19T09:00:00", "2026-10-19T08:00:00"))
    assert response.status_code == 422

def test_update_lesson(client):
    created = client.post("/api/lessons/", json=lesson_payload(1, 10, "2026-10-19T08:30:00", "2026-10-19T09:00:00")).json()

    response = client.put(f"/api/lessons/{created['id']}", json=lesson_payload(1, 10, "2026-10-27T08:30:00", "2026-10-27T09:00:00"))
    assert response.status_code == 200
    assert response.json()["week"] == "2026-W44"

def test_update_missing_lesson_returns_404(client):
    response = client.put("/api/lessons/999", json=lesson_payload(1, 10, "2026-10-19T08:30:00", "2026-10-19T09:00:00"))
    assert response.status_code == 404

def test_delete_lessons(client):
    created = client.post("/api/lessons/", json=lesson_payload(1, 10, "2026-10-19T08:30:00", "2026-10-19T09:00:00")).json()

    response = client.delete("/api/lessons/", params={"ids": ""})
    assert response.status_code == 400

    response = client.delete("/api/lessons/", params={"ids": f"{created['id']},{created['id'] + 1},{created['id'] + 2}"})
    assert response.status_code == 409
    assert len(client.get("/api/lessons/").json()) == 1 # rolled back

    response = client.delete("/api/lessons/", params={"ids": str(created["id"])})
    assert response.status_code == 200
    assert client.get("/api/lessons/").json() == []

def test_timetable_pdf(client):
    client.post("/api/lessons/", json=lesson_payload(1, 10, "2026-10-19T08:30:00", "2026-10-19T09:00:00"))

    response = client.get("/api/lessons/pdf")
    assert response.status_code == 200
    assert response.headers["content-type"] == "application/pdf"
    assert response.content.startswith(b"%PDF")

def test_period_catalog(client):
    response = client.get("/api/catalog/periods")
    assert response.status_code == 200
    assert [p["name"] for p in response.json()] == ["08:00-09:30", "09:30-11:00"]

    response = client.post("/api/catalog/periods", json={"name": "11:00-12:30"})
    assert response.status_code == 200

    names = [p["name"] for p in client.get("/api/catalog/periods").json()]
    assert names == ["08:00-09:30", "09:30-11:00", "11:00-12:30"]

def test_subjects_and_teachers(client):
    response = client.post("/api/catalog/subjects", json={"name": "Chemistry"})
    assert response.status_code == 200
    assert response.json()["name"] == "Chemistry"

    response = client.post("/api/catalog/teachers", json={"name": "Carol"})
    assert response.status_code == 200

    assert "Chemistry" in [s["name"] for s in client.get("/api/catalog/subjects").json()]
    assert [t["name"] for t in client.get("/api/catalog/teachers").json()] == ["Alice", "Bob", "Carol"]

def test_mixed_timezone_window_rejected(client):
    response = client.post("/api/lessons/", json=lesson_payload(1, 10, "2026-10-19T08:30:00Z", "2026-10-19T09:00:00"))
    assert response.status_code == 422

def test_delete_oversized_id_rejected(client):
    response = client.delete("/api/lessons/", params={"ids": "99999999999999999999"})
    assert response.status_code == 400
