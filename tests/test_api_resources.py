"""
HTTP tests for the resource routes
"""

from datetime import datetime, timedelta, timezone

from campus_events.utils.clock import utcnow


def future_iso(days=5):
    return (datetime.now(timezone.utc) + timedelta(days=days)).isoformat()


def test_health_is_public(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["data"]["database"] == "ok"


def test_resource_routes_require_token(client):
    response = client.get("/api/events")

    assert response.status_code == 401
    body = response.json()
    assert body["success"] is False
    assert body["message"] == "Access token is required"
    assert "timestamp" in body


def test_college_to_student_round_trip(client, headers):
    college = client.post("/api/colleges", headers=headers, json={
        "name": "Lakeside College",
        "address": "7 Lake Shore Drive, Lakeside",
    })
    assert college.status_code == 201
    college_id = college.json()["data"]["id"]

    created = client.post("/api/students", headers=headers, json={
        "name": "Kiran Rao",
        "email": "kiran@lakeside.edu",
        "college_id": college_id,
        "department": "Mathematics",
    })
    assert created.status_code == 201

    fetched = client.get(f"/api/students/{created.json()['data']['id']}", headers=headers)
    assert fetched.status_code == 200
    assert fetched.json()["data"]["college_id"] == college_id

    listed = client.get("/api/students", headers=headers, params={"college_id": college_id})
    assert listed.status_code == 200
    assert [s["email"] for s in listed.json()["data"]] == ["kiran@lakeside.edu"]


def test_college_name_required(client, headers):
    response = client.post("/api/colleges", headers=headers, json={"address": "Somewhere far away"})

    assert response.status_code == 400
    assert response.json()["errors"] == [{"field": "name", "message": "Field required"}]


def test_create_event_in_past_rejected(client, headers, college):
    response = client.post("/api/events", headers=headers, json={
        "title": "Retro Night",
        "description": "Looking back at the good old days",
        "date": (datetime.now(timezone.utc) - timedelta(days=1)).isoformat(),
        "location": "Hall B",
        "max_attendees": 50,
        "college_id": college.id,
    })

    assert response.status_code == 400
    assert response.json()["errors"][0]["field"] == "date"


def test_event_crud(client, headers, college):
    created = client.post("/api/events", headers=headers, json={
        "title": "AI Seminar",
        "description": "Talks on applied machine learning",
        "date": future_iso(),
        "location": "Seminar Room 2",
        "max_attendees": 2,
        "college_id": college.id,
        "event_type": "seminar",
    })
    assert created.status_code == 201
    event_id = created.json()["data"]["id"]

    detail = client.get(f"/api/events/{event_id}", headers=headers).json()["data"]
    assert detail["available_spots"] == 2
    assert detail["is_full"] is False

    updated = client.put(f"/api/events/{event_id}", headers=headers, json={"location": "Main Auditorium"})
    assert updated.json()["data"]["location"] == "Main Auditorium"

    assert client.put(f"/api/events/{event_id}", headers=headers, json={}).status_code == 400

    nulled = client.put(f"/api/events/{event_id}", headers=headers, json={"title": None})
    assert nulled.status_code == 400
    assert nulled.json()["errors"] == [{"field": "title", "message": "may not be null"}]
    assert client.get(f"/api/events/{event_id}", headers=headers).json()["data"]["title"] == "AI Seminar"

    assert client.delete(f"/api/events/{event_id}", headers=headers).status_code == 200
    assert client.get(f"/api/events/{event_id}", headers=headers).status_code == 404


def test_event_for_unknown_college(client, headers):
    response = client.post("/api/events", headers=headers, json={
        "title": "Ghost Event",
        "description": "Hosted by a college that does not exist",
        "date": future_iso(),
        "location": "Nowhere",
        "max_attendees": 10,
        "college_id": "00000000-0000-4000-8000-000000000000",
    })

    assert response.status_code == 404
    assert response.json()["message"] == "College not found"


def test_duplicate_registration_conflict(client, headers, student, event):
    payload = {"student_id": student.id, "event_id": event.id}

    first = client.post("/api/registrations", headers=headers, json=payload)
    assert first.status_code == 201
    assert first.json()["data"]["status"] == "confirmed"

    second = client.post("/api/registrations", headers=headers, json=payload)
    assert second.status_code == 409
    assert second.json()["message"] == "Student is already registered for this event"


def test_registration_update_and_delete(client, headers, student, event):
    registration_id = client.post("/api/registrations", headers=headers, json={
        "student_id": student.id, "event_id": event.id,
    }).json()["data"]["id"]

    cancelled = client.put(f"/api/registrations/{registration_id}", headers=headers, json={"status": "cancelled"})
    assert cancelled.json()["data"]["status"] == "cancelled"

    assert client.delete(f"/api/registrations/{registration_id}", headers=headers).status_code == 200
    assert client.delete(f"/api/registrations/{registration_id}", headers=headers).status_code == 404


def test_attendance_mark_and_update(client, headers, student, event):
    check_in = utcnow().replace(microsecond=0)
    created = client.post("/api/attendance", headers=headers, json={
        "student_id": student.id,
        "event_id": event.id,
        "status": "present",
        "check_in_time": check_in.isoformat(),
    })
    assert created.status_code == 201
    record_id = created.json()["data"]["id"]

    too_early = client.put(f"/api/attendance/{record_id}", headers=headers, json={
        "check_out_time": (check_in - timedelta(minutes=10)).isoformat(),
    })
    assert too_early.status_code == 400

    done = client.put(f"/api/attendance/{record_id}", headers=headers, json={
        "check_out_time": (check_in + timedelta(minutes=45)).isoformat(),
    })
    assert done.status_code == 200
    assert done.json()["data"]["duration_minutes"] == 45

    again = client.post("/api/attendance", headers=headers, json={
        "student_id": student.id, "event_id": event.id, "status": "present",
    })
    assert again.status_code == 409
    assert again.json()["message"] == "Student already checked in for this event"


def test_feedback_submission(client, headers, student, event):
    bad = client.post("/api/feedback", headers=headers, json={
        "student_id": student.id, "event_id": event.id, "rating": 6,
    })
    assert bad.status_code == 400

    ok = client.post("/api/feedback", headers=headers, json={
        "student_id": student.id, "event_id": event.id, "rating": 5, "comments": "Loved it",
    })
    assert ok.status_code == 201

    again = client.post("/api/feedback", headers=headers, json={
        "student_id": student.id, "event_id": event.id, "rating": 4,
    })
    assert again.status_code == 409

    listed = client.get("/api/feedback", headers=headers, params={"min_rating": 5})
    assert len(listed.json()["data"]) == 1


def test_reports_routes(client, headers, student, event):
    client.post("/api/registrations", headers=headers, json={"student_id": student.id, "event_id": event.id})
    client.post("/api/attendance", headers=headers, json={
        "student_id": student.id, "event_id": event.id, "status": "present",
    })

    attendance = client.get(f"/api/reports/attendance/{event.id}", headers=headers).json()["data"]
    assert attendance["attendance_percentage"] == 100.0

    top = client.get("/api/reports/top-students", headers=headers).json()["data"]
    assert top[0]["student_id"] == student.id

    filtered = client.get("/api/reports/filter", headers=headers, params={"type": "competition"}).json()["data"]
    assert [e["id"] for e in filtered] == [event.id]

    assert client.get("/api/reports/filter", headers=headers, params={"type": "party"}).status_code == 400
    assert client.get("/api/reports/top-students", headers=headers, params={"limit": 0}).status_code == 400
    assert client.get("/api/reports/dashboard", headers=headers).status_code == 200
    assert client.get(f"/api/reports/students/{student.id}/performance", headers=headers).status_code == 200


def test_report_export(client, headers, event):
    response = client.get("/api/reports/export/event-popularity.xlsx", headers=headers)

    assert response.status_code == 200
    assert response.headers["content-type"].startswith(
        "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
    )
    assert client.get("/api/reports/export/unknown.xlsx", headers=headers).status_code == 404
