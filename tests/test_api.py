"""HTTP tests for the calendar API.

Drives the real app factory and service over an in-memory repository.
Run with: pytest tests/test_api.py -v
"""

from fastapi.testclient import TestClient

from main import create_app
from service_events import EventService


def _create(client, **fields):
    body = {"user_id": "u1", "event": "standup", "date": "2025-09-29"}
    body.update(fields)
    return client.post("/api/v1/create_event", json=body)


class TestScenario:
    def test_create_list_delete_round(self, client):
        resp = _create(client)
        assert resp.status_code == 200
        assert resp.json()["result"] == "Event created successfully"
        event_id = resp.json()["id"]
        assert event_id

        resp = client.get("/api/v1/events_for_day", params={"user_id": "u1", "date": "2025-09-29"})
        assert resp.status_code == 200
        assert resp.json() == {
            "events": [{"user_id": "u1", "event_id": event_id, "event": "standup", "date": "2025-09-29"}]
        }

        resp = client.post("/api/v1/delete_event", json={"id": event_id})
        assert resp.status_code == 200
        assert resp.json() == {"result": "Event deleted successfully"}

        resp = client.post("/api/v1/delete_event", json={"id": event_id})
        assert resp.status_code == 404
        assert resp.json()["error"] == "not_found"


class TestCreate:
    def test_empty_user_id_is_400_with_details(self, client):
        resp = _create(client, user_id="")
        assert resp.status_code == 400
        assert resp.json() == {
            "error": "validation_error",
            "message": "validation error: user_id - can't be empty",
            "details": {"user_id": "can't be empty"},
        }

    def test_bad_date_names_date_field(self, client):
        resp = _create(client, date="29.09.2025")
        assert resp.status_code == 400
        assert resp.json()["details"] == {"date": "format must be YYYY-MM-DD"}

    def test_malformed_json_is_request_body_error(self, client):
        resp = client.post(
            "/api/v1/create_event",
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )
        assert resp.status_code == 400
        assert resp.json()["details"] == {"request_body": "invalid JSON format"}

    def test_wrong_field_type_is_request_body_error(self, client):
        resp = _create(client, user_id=42)
        assert resp.status_code == 400
        assert resp.json()["details"] == {"request_body": "invalid JSON format"}

    def test_storage_failure_is_503_without_details(self, client, memory_repo):
        memory_repo.fail = "error creating event: connection refused"
        resp = _create(client)
        assert resp.status_code == 503
        body = resp.json()
        assert body["error"] == "business_error"
        assert body["message"] == "business error: error creating event: connection refused"
        assert "details" not in body


class TestUpdate:
    def test_updates_existing_event(self, client, memory_repo):
        event_id = _create(client).json()["id"]

        resp = client.post(
            "/api/v1/update_event",
            json={"user_id": "u1", "event_id": event_id, "event": "retro", "date": "2025-09-30"},
        )

        assert resp.status_code == 200
        assert resp.json() == {"result": "Event updated successfully"}
        assert memory_repo.rows[event_id].event == "retro"

    def test_unknown_event_is_404(self, client):
        resp = client.post(
            "/api/v1/update_event",
            json={"user_id": "u1", "event_id": "missing", "event": "retro", "date": "2025-09-30"},
        )
        assert resp.status_code == 404
        assert resp.json()["message"] == "event with id missing not found"

    def test_missing_event_id_is_400(self, client):
        resp = client.post("/api/v1/update_event", json={"user_id": "u1", "date": "2025-09-30"})
        assert resp.status_code == 400
        assert resp.json()["details"] == {"event_id": "event id can't be empty"}


class TestDelete:
    def test_accepts_event_id_key(self, client):
        event_id = _create(client).json()["id"]
        resp = client.post("/api/v1/delete_event", json={"event_id": event_id})
        assert resp.status_code == 200

    def test_empty_body_object_is_400(self, client):
        resp = client.post("/api/v1/delete_event", json={})
        assert resp.status_code == 400
        assert resp.json()["details"] == {"event_id": "event id can't be empty"}


class TestLists:
    def test_week_window(self, client):
        _create(client, event="first", date="2025-01-01")
        _create(client, event="last", date="2025-01-07")
        _create(client, event="outside", date="2025-01-08")
        _create(client, user_id="u2", event="someone else", date="2025-01-02")

        resp = client.get("/api/v1/events_for_week", params={"user_id": "u1", "date": "2025-01-01"})

        assert resp.status_code == 200
        assert [e["event"] for e in resp.json()["events"]] == ["first", "last"]

    def test_month_window(self, client):
        _create(client, event="in", date="2025-01-31")
        _create(client, event="out", date="2025-02-01")

        resp = client.get("/api/v1/events_for_month", params={"user_id": "u1", "date": "2025-01-01"})

        assert [e["event"] for e in resp.json()["events"]] == ["in"]

    def test_no_events_is_empty_list(self, client):
        resp = client.get("/api/v1/events_for_day", params={"user_id": "u1", "date": "2025-09-29"})
        assert resp.status_code == 200
        assert resp.json() == {"events": []}

    def test_missing_query_params_are_400(self, client):
        resp = client.get("/api/v1/events_for_month")
        assert resp.status_code == 400
        assert resp.json()["details"] == {"user_id": "can't be empty"}

    def test_bad_date_is_400(self, client):
        resp = client.get("/api/v1/events_for_day", params={"user_id": "u1", "date": "2025/09/29"})
        assert resp.status_code == 400
        assert resp.json()["details"] == {"date": "format must be YYYY-MM-DD"}


class TestLastCalendarDays:
    def test_day_list_on_9999_12_31(self, client):
        _create(client, event="last day", date="9999-12-31")

        resp = client.get("/api/v1/events_for_day", params={"user_id": "u1", "date": "9999-12-31"})

        assert resp.status_code == 200
        assert [e["event"] for e in resp.json()["events"]] == ["last day"]

    def test_week_list_running_past_9999(self, client):
        _create(client, event="last day", date="9999-12-31")

        resp = client.get("/api/v1/events_for_week", params={"user_id": "u1", "date": "9999-12-30"})

        assert resp.status_code == 200
        assert [e["event"] for e in resp.json()["events"]] == ["last day"]

    def test_month_list_from_9999_12_15(self, client):
        _create(client, event="mid december", date="9999-12-20")
        _create(client, event="last day", date="9999-12-31")

        resp = client.get("/api/v1/events_for_month", params={"user_id": "u1", "date": "9999-12-15"})

        assert resp.status_code == 200
        assert [e["event"] for e in resp.json()["events"]] == ["mid december", "last day"]


class TestFaultContainment:
    def test_unexpected_exception_is_generic_500(self, memory_repo):
        def explode(user_id, day):
            raise RuntimeError("secret internal detail")

        memory_repo.get_events_for_day = explode
        client = TestClient(create_app(EventService(memory_repo)))

        resp = client.get("/api/v1/events_for_day", params={"user_id": "u1", "date": "2025-09-29"})

        assert resp.status_code == 500
        assert resp.json() == {
            "error": "internal_server_error",
            "message": "An unexpected error occurred",
        }

    def test_app_keeps_serving_after_fault(self, memory_repo):
        calls = []

        def flaky(user_id, day):
            calls.append(day)
            if len(calls) == 1:
                raise RuntimeError("boom")
            return []

        memory_repo.get_events_for_day = flaky
        client = TestClient(create_app(EventService(memory_repo)))
        params = {"user_id": "u1", "date": "2025-09-29"}

        assert client.get("/api/v1/events_for_day", params=params).status_code == 500
        assert client.get("/api/v1/events_for_day", params=params).status_code == 200


class TestHealth:
    def test_ok(self, client):
        resp = client.get("/health")
        assert resp.status_code == 200
        assert resp.json() == {"ok": True}

    def test_database_down_is_503(self, client, memory_repo):
        memory_repo.fail = "database ping failed: connection refused"
        resp = client.get("/health")
        assert resp.status_code == 503
