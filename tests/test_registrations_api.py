from datetime import datetime, timezone

import pytest

BASE = "/api/v1/registrations"
USER_ONE = {"X-User-Id": "U1", "X-User-Roles": "USER"}
USER_TWO = {"X-User-Id": "U2", "X-User-Roles": "USER"}
ADMIN = {"X-User-Id": "admin-1", "X-User-Roles": "ROLE_ADMIN"}


def _create(client, headers=USER_ONE, event_id="E1", user_id="U1"):
    return client.post(f"{BASE}/", json={"event_id": event_id, "user_id": user_id}, headers=headers)


class TestRegistrationsApi:

    def test_create_returns_201_and_body(self, client):
        response = _create(client)

        assert response.status_code == 201
        body = response.json()
        assert body["status"] == "CONFIRMED"
        assert body["check_in"] is None
        assert body["event_id"] == "E1"
        assert body["user_id"] == "U1"
        assert body["id"]
        assert "X-Process-Time" in response.headers

    def test_duplicate_create_is_409(self, client):
        _create(client)

        response = _create(client)

        assert response.status_code == 409
        body = response.json()
        assert body["status"] == 409
        assert body["error"] == "Conflict"
        assert "already registered" in body["message"]
        assert body["timestamp"]

    def test_create_for_someone_else_is_403(self, client):
        response = _create(client, headers=USER_TWO)

        assert response.status_code == 403
        assert response.json()["error"] == "Forbidden"

    def test_get_unknown_is_404(self, client):
        response = client.get(f"{BASE}/missing", headers=ADMIN)

        assert response.status_code == 404
        assert "missing" in response.json()["message"]

    def test_missing_identity_header_is_rejected(self, client):
        response = client.get(f"{BASE}/", headers={"X-User-Roles": "ADMIN"})

        assert response.status_code == 422

    def test_missing_roles_header_means_no_roles(self, client):
        registration_id = _create(client).json()["id"]

        own = client.get(f"{BASE}/{registration_id}", headers={"X-User-Id": "U1"})
        listing = client.get(f"{BASE}/", headers={"X-User-Id": "U1"})

        assert own.status_code == 200
        assert listing.status_code == 403

    def test_list_all_is_admin_only(self, client):
        _create(client)

        assert client.get(f"{BASE}/", headers=USER_ONE).status_code == 403
        response = client.get(f"{BASE}/", headers=ADMIN)
        assert response.status_code == 200
        assert len(response.json()) == 1

    def test_list_by_user(self, client):
        _create(client)
        _create(client, headers=USER_TWO, user_id="U2")

        response = client.get(f"{BASE}/users/U1", headers=USER_ONE)

        assert response.status_code == 200
        assert [r["user_id"] for r in response.json()] == ["U1"]
        assert client.get(f"{BASE}/users/U1", headers=USER_TWO).status_code == 403

    def test_check_in_cancel_flow(self, client):
        registration_id = _create(client).json()["id"]

        checked_in = client.patch(f"{BASE}/{registration_id}/check-in", headers=USER_ONE)
        assert checked_in.status_code == 200
        assert checked_in.json()["status"] == "CHECKED_IN"
        assert checked_in.json()["check_in"] is not None

        assert client.patch(f"{BASE}/{registration_id}/cancel", headers=USER_ONE).status_code == 409
        assert client.patch(f"{BASE}/{registration_id}/check-in", headers=ADMIN).status_code == 409

    def test_cancel_twice(self, client):
        registration_id = _create(client).json()["id"]

        first = client.patch(f"{BASE}/{registration_id}/cancel", headers=USER_ONE)
        second = client.patch(f"{BASE}/{registration_id}/cancel", headers=USER_ONE)

        assert first.status_code == 200
        assert first.json()["status"] == "CANCELED"
        assert second.status_code == 409

    def test_update_replaces_fields(self, client):
        registration_id = _create(client).json()["id"]

        response = client.put(
            f"{BASE}/{registration_id}",
            json={"status": "CHECKED_IN", "check_in": "2025-05-01T10:00:00Z"},
            headers=ADMIN,
        )

        assert response.status_code == 200
        assert response.json()["status"] == "CHECKED_IN"
        assert response.json()["check_in"].startswith("2025-05-01T10:00:00")

    def test_update_rejects_unknown_status(self, client):
        registration_id = _create(client).json()["id"]

        response = client.put(f"{BASE}/{registration_id}", json={"status": "LOST"}, headers=USER_ONE)

        assert response.status_code == 422

    def test_delete_is_logical(self, client):
        registration_id = _create(client).json()["id"]

        response = client.delete(f"{BASE}/{registration_id}", headers=USER_ONE)
        assert response.status_code == 204

        fetched = client.get(f"{BASE}/{registration_id}", headers=USER_ONE)
        assert fetched.status_code == 200
        assert fetched.json()["status"] == "DELETED"
        assert fetched.json()["deleted_at"] is not None
        assert client.get(f"{BASE}/users/U1", headers=USER_ONE).json() == []
        assert client.get(f"{BASE}/", headers=ADMIN).json() == []

    @pytest.mark.parametrize(
        "method, suffix",
        [("get", ""), ("patch", "/check-in"), ("patch", "/cancel"), ("delete", "")],
    )
    def test_stranger_gets_403(self, client, method, suffix):
        registration_id = _create(client).json()["id"]

        response = getattr(client, method)(f"{BASE}/{registration_id}{suffix}", headers=USER_TWO)

        assert response.status_code == 403


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_root(client):
    assert client.get("/").json()["status"] == "running"


def _parse(value):
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


def test_offset_check_in_survives_a_round_trip(client):
    registration_id = _create(client).json()["id"]

    updated = client.put(
        f"{BASE}/{registration_id}",
        json={"status": "CHECKED_IN", "check_in": "2025-05-01T10:00:00+02:00"},
        headers=USER_ONE,
    )
    fetched = client.get(f"{BASE}/{registration_id}", headers=USER_ONE)

    expected = datetime(2025, 5, 1, 8, 0, tzinfo=timezone.utc)
    assert updated.status_code == 200
    assert _parse(updated.json()["check_in"]) == expected
    assert _parse(fetched.json()["check_in"]) == expected
    assert _parse(fetched.json()["created_at"]).tzinfo is not None


def test_cors_preflight_allows_gateway_headers(client):
    response = client.options(
        f"{BASE}/",
        headers={
            "Origin": "http://localhost:3000",
            "Access-Control-Request-Method": "GET",
            "Access-Control-Request-Headers": "X-User-Id, X-User-Roles",
        },
    )

    assert response.status_code == 200
    allowed = response.headers["access-control-allow-headers"].lower()
    assert "x-user-id" in allowed
    assert "x-user-roles" in allowed
