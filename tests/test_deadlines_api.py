import pytest

from conftest import iso_in, make_deadline


def test_create_deadline_defaults(client, auth_headers):
    deadline = make_deadline(client, auth_headers, title="  Renew trademark  ", tags=["ip", " ", "renewal "])
    assert deadline["title"] == "Renew trademark"
    assert deadline["status"] == "upcoming"
    assert deadline["priority"] == "medium"
    assert deadline["tags"] == ["ip", "renewal"]
    assert deadline["notes"] == []
    assert deadline["days_remaining"] == 10


def test_days_remaining_for_deadline_due_in_a_day(client, auth_headers):
    deadline = make_deadline(client, auth_headers, due_date=iso_in(hours=24))
    assert deadline["days_remaining"] == 1


def test_offset_aware_due_date_is_stored_as_utc(client, auth_headers):
    deadline = make_deadline(client, auth_headers, due_date="2030-06-01T12:00:00+02:00")
    assert deadline["due_date"] == "2030-06-01T10:00:00"


def test_create_rejects_unknown_category(client, auth_headers):
    r = client.post("/api/deadlines/", json={
        "title": "x", "due_date": iso_in(days=1), "category": "astrology"
    }, headers=auth_headers)
    assert r.status_code == 400
    assert r.json()["errors"][0]["field"] == "category"


def test_nested_fields_round_trip(client, auth_headers):
    deadline = make_deadline(
        client, auth_headers,
        cost={"amount": 250, "currency": "EUR"},
        reminder_settings={"days_before": [7, 1]},
        is_recurring=True,
        recurring_pattern={"frequency": "annually", "interval": 1, "end_date": "2030-01-01T00:00:00Z"},
    )
    assert deadline["cost"] == {"amount": 250.0, "currency": "EUR"}
    assert deadline["reminder_settings"]["days_before"] == [7, 1]
    assert deadline["recurring_pattern"]["end_date"] == "2030-01-01T00:00:00"


def test_list_filters_and_paginates(client, auth_headers):
    first = make_deadline(client, auth_headers, title="First", due_date=iso_in(days=1))
    second = make_deadline(client, auth_headers, title="Second", due_date=iso_in(days=2))
    make_deadline(client, auth_headers, title="Third", due_date=iso_in(days=3))
    make_deadline(client, auth_headers, title="Finished", due_date=iso_in(days=4))
    # Move the last one out of the upcoming set
    listed = client.get("/api/deadlines/", headers=auth_headers).json()["data"]["deadlines"]
    client.put(f"/api/deadlines/{listed[-1]['id']}", json={"status": "completed"}, headers=auth_headers)

    r = client.get("/api/deadlines/?status=upcoming&page=2&limit=1", headers=auth_headers)
    assert r.status_code == 200
    data = r.json()["data"]
    assert [d["id"] for d in data["deadlines"]] == [second["id"]]
    assert data["pagination"] == {"current": 2, "pages": 3, "total": 3}

    r = client.get("/api/deadlines/?status=upcoming&page=9&limit=1", headers=auth_headers)
    data = r.json()["data"]
    assert data["deadlines"] == []
    assert data["pagination"]["total"] == 3

    r = client.get("/api/deadlines/?sort=-due_date&limit=1", headers=auth_headers)
    assert r.json()["data"]["deadlines"][0]["title"] == "Finished"
    assert first["id"] != second["id"]


def test_list_rejects_invalid_pagination(client, auth_headers):
    r = client.get("/api/deadlines/?page=0&limit=500", headers=auth_headers)
    assert r.status_code == 400
    fields = {e["field"] for e in r.json()["errors"]}
    assert fields == {"page", "limit"}


def test_deadlines_are_private_to_their_owner(client, auth_headers, other_headers):
    deadline = make_deadline(client, auth_headers)

    assert client.get(f"/api/deadlines/{deadline['id']}", headers=other_headers).status_code == 404
    assert client.put(
        f"/api/deadlines/{deadline['id']}", json={"title": "Hijacked"}, headers=other_headers
    ).status_code == 404
    assert client.delete(f"/api/deadlines/{deadline['id']}", headers=other_headers).status_code == 404
    assert client.get("/api/deadlines/", headers=other_headers).json()["data"]["pagination"]["total"] == 0


def test_update_appends_notes_and_sets_completion_date(client, auth_headers):
    deadline = make_deadline(client, auth_headers)
    url = f"/api/deadlines/{deadline['id']}"

    client.put(url, json={"notes": "Sent to accountant"}, headers=auth_headers)
    r = client.put(url, json={"notes": "Filed", "status": "completed", "actual_hours": 3}, headers=auth_headers)
    assert r.status_code == 200
    updated = r.json()["data"]["deadline"]

    assert [n["content"] for n in updated["notes"]] == ["Sent to accountant", "Filed"]
    assert updated["notes"][0]["author"] == "Ada Lovelace"
    assert updated["status"] == "completed"
    assert updated["completion_date"] is not None
    assert updated["actual_hours"] == 3
    # Untouched fields survive a partial update
    assert updated["title"] == deadline["title"]


@pytest.mark.parametrize("field", ["title", "due_date", "priority", "status", "category", "tags", "is_recurring"])
def test_update_rejects_null_for_required_fields(client, auth_headers, field):
    deadline = make_deadline(client, auth_headers)
    url = f"/api/deadlines/{deadline['id']}"

    r = client.put(url, json={field: None}, headers=auth_headers)
    assert r.status_code == 400
    assert r.json()["errors"][0]["field"] == field

    # The record is untouched and still readable
    assert client.get(url, headers=auth_headers).status_code == 200
    assert client.get("/api/deadlines/", headers=auth_headers).status_code == 200


def test_update_can_clear_optional_fields(client, auth_headers):
    deadline = make_deadline(client, auth_headers, description="Draft", cost={"amount": 250})
    r = client.put(
        f"/api/deadlines/{deadline['id']}",
        json={"description": None, "cost": None},
        headers=auth_headers,
    )
    assert r.status_code == 200
    updated = r.json()["data"]["deadline"]
    assert updated["description"] is None
    assert updated["cost"] is None


def test_upcoming_and_overdue_views(client, auth_headers):
    soon = make_deadline(client, auth_headers, title="Soon", due_date=iso_in(days=1))
    make_deadline(client, auth_headers, title="Later", due_date=iso_in(days=5))
    late = make_deadline(client, auth_headers, title="Late", due_date=iso_in(days=-2))

    upcoming = client.get("/api/deadlines/upcoming?limit=2", headers=auth_headers).json()["data"]["deadlines"]
    assert [d["title"] for d in upcoming] == ["Late", "Soon"]

    # Stored status only changes once recomputed
    assert client.get("/api/deadlines/overdue", headers=auth_headers).json()["data"]["deadlines"] == []

    r = client.post("/api/deadlines/refresh-status", headers=auth_headers)
    assert r.json()["data"] == {"updated": 1}

    overdue = client.get("/api/deadlines/overdue", headers=auth_headers).json()["data"]["deadlines"]
    assert [d["id"] for d in overdue] == [late["id"]]
    upcoming = client.get("/api/deadlines/upcoming", headers=auth_headers).json()["data"]["deadlines"]
    assert upcoming[0]["id"] == soon["id"]


def test_delete_deadline(client, auth_headers):
    deadline = make_deadline(client, auth_headers)
    r = client.delete(f"/api/deadlines/{deadline['id']}", headers=auth_headers)
    assert r.json() == {"success": True, "message": "Deadline deleted successfully"}
    assert client.get(f"/api/deadlines/{deadline['id']}", headers=auth_headers).status_code == 404
