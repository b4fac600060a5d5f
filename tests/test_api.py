from __future__ import annotations

import pytest

from ip_attendance import create_app

ADMIN = {"Authorization": "secret"}


@pytest.fixture
def client(monkeypatch, container):
    monkeypatch.setenv("APP_ENV", "testing")
    app = create_app(container)
    return app.test_client()


def _mark(client, ip, student_id="U002", name="Alan"):
    return client.post(
        "/api/attendance/mark",
        json={"student_id": student_id, "student_name": name},
        headers={"X-Forwarded-For": ip},
    )


def test_private_address_scenario(client):
    resp = client.post(
        "/api/attendance/mark",
        json={"student_id": "U001", "student_name": "Ada"},
        environ_base={"REMOTE_ADDR": "10.0.0.5"},
    )

    assert resp.status_code == 200
    body = resp.get_json()
    assert body["status"] == "Absent"
    assert body["reason"] == "private_ip"
    assert body["clientIp"] == "10.0.0.5"
    assert body["isPrivate"] is True


def test_match_then_already_marked(client):
    resp = client.post("/api/set-expected-ip", json={"student_id": "U002", "expected_ip": "203.0.113.9"}, headers=ADMIN)
    assert resp.status_code == 200

    first = _mark(client, "203.0.113.9").get_json()
    second = _mark(client, "203.0.113.9").get_json()

    assert first["status"] == "Present"
    assert first["reason"] == "ip_matched"
    assert first["expectedIp"] == "203.0.113.9"
    assert second["alreadyMarked"] is True
    assert second["reason"] == "ip_matched"
    assert second["clientIp"] == "203.0.113.9"
    assert second["message"].startswith("Already marked present today")

    records = client.get("/api/attendance/records", headers=ADMIN).get_json()
    assert [(r["id"], r["status"]) for r in records] == [("U002", "Present")]


def test_missing_fields_is_400(client):
    resp = client.post("/api/attendance/mark", json={"student_id": "U001"})

    assert resp.status_code == 400
    assert resp.get_json()["success"] is False


def test_unresolvable_address_is_400(client):
    resp = client.post(
        "/api/attendance/mark",
        json={"student_id": "U001", "student_name": "Ada"},
        environ_base={"REMOTE_ADDR": ""},
    )

    assert resp.status_code == 400
    assert resp.get_json()["message"] == "Could not determine your IP address."


def test_document_store_failure_is_500(client, container, monkeypatch):
    from ip_attendance.core.exceptions import DocumentStoreFailure

    def boom(record):
        raise DocumentStoreFailure("disk full")

    monkeypatch.setattr(container.document_store, "append", boom)

    resp = _mark(client, "198.51.100.4")

    assert resp.status_code == 500
    assert resp.get_json()["message"] == "Server error saving attendance to database."


def test_admin_routes_require_token(client):
    assert client.get("/api/attendance/records").status_code == 401
    assert client.get("/api/attendance/records", headers={"Authorization": "wrong"}).status_code == 401
    assert client.post("/api/set-expected-ip", json={"student_id": "U1", "expected_ip": "1.1.1.1"}).status_code == 401
    assert client.get("/api/attendance/download?token=nope").status_code == 401


def test_set_expected_ip_validation(client):
    resp = client.post("/api/set-expected-ip", json={"student_id": "U002"}, headers=ADMIN)

    assert resp.status_code == 400


def test_expected_ip_lookup_ignores_default(client):
    client.post("/api/set-expected-ip", json={"student_id": "U002", "expected_ip": "203.0.113.9"}, headers=ADMIN)

    assert client.get("/api/expected-ip/U002").get_json()["expectedIp"] == "203.0.113.9"
    assert client.get("/api/expected-ip/U404").get_json()["expectedIp"] is None


def test_my_ip(client):
    body = client.get("/api/my-ip", headers={"X-Forwarded-For": "203.0.113.9, 10.0.0.1"}).get_json()

    assert body == {
        "success": True,
        "clientIp": "203.0.113.9",
        "isPrivate": False,
        "possibleProxy": True,
        "note": "You are on a public network",
    }


def test_download(client):
    assert client.get("/api/attendance/download?token=secret").status_code == 404

    _mark(client, "198.51.100.4")
    resp = client.get("/api/attendance/download?token=secret")

    assert resp.status_code == 200
    assert resp.data[:2] == b"PK"


def test_records_fall_back_to_database(client, container):
    _mark(client, "198.51.100.4", student_id="U007", name="Hopper")
    container.tabular_store.path.write_bytes(b"broken")

    records = client.get("/api/attendance/records", headers=ADMIN).get_json()

    assert [(r["id"], r["name"], r["ip"], r["status"]) for r in records] == [("U007", "Hopper", "198.51.100.4", "Absent")]


def test_unknown_route_is_json_404(client):
    resp = client.get("/api/nope")

    assert resp.status_code == 404
    assert resp.get_json()["message"] == "Route not found"
