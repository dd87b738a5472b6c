from __future__ import annotations

import pytest

from src.timecard.timecard.main import create_app


@pytest.fixture
def client(monkeypatch, container):
    monkeypatch.setenv("APP_ENV", "testing")
    app = create_app(container=container)
    return app.test_client()


def _login(client, email, password):
    return client.post("/login", json={"email": email, "password": password})


def test_login_and_me(client):
    resp = _login(client, "yamada@example.com", "user123")
    assert resp.status_code == 200
    assert resp.get_json()["user"]["employee_id"] == "EMP001"

    me = client.get("/me").get_json()
    assert me["name"] == "Taro Yamada"
    assert "password_hash" not in me


def test_bad_login_is_401(client):
    resp = _login(client, "yamada@example.com", "nope")
    assert resp.status_code == 401
    assert resp.get_json()["success"] is False


def test_requires_login(client):
    assert client.get("/attendance").status_code == 401


def test_admin_routes_forbidden_for_employee(client):
    _login(client, "yamada@example.com", "user123")
    assert client.get("/admin/approvals").status_code == 403


def test_preview(client):
    _login(client, "yamada@example.com", "user123")
    resp = client.post(
        "/attendance/preview",
        json={"work_spans": [{"start_time": "21:00", "end_time": "03:00"}], "breaks": [{"start": "00:00", "end": "01:00"}]},
    )
    data = resp.get_json()
    assert (data["work_minutes"], data["overtime_minutes"], data["night_minutes"]) == (360, 0, 300)
    assert data["work_time"] == "6h"


def test_bad_time_is_400(client):
    _login(client, "yamada@example.com", "user123")
    resp = client.put("/attendance/2025-06-02", json={"work_spans": [{"start_time": "9", "end_time": "18:00"}]})
    assert resp.status_code == 400


def test_submit_approve_and_summary_flow(client):
    _login(client, "yamada@example.com", "user123")
    resp = client.put(
        "/attendance/2025-06-02",
        json={
            "work_spans": [{"start_time": "09:00", "end_time": "18:00"}],
            "breaks": [{"start": "12:00", "end": "13:00"}],
            "submit": True,
        },
    )
    assert resp.status_code == 200
    record_id = resp.get_json()["record_id"]

    month = client.get("/attendance?month=2025-06").get_json()
    assert month["previous"] == "2025-05"
    assert month["records"][0]["status"] == "pending"

    client.post("/logout")
    _login(client, "admin@example.com", "admin123")
    pending = client.get("/admin/approvals").get_json()
    assert [r["record_id"] for r in pending] == [record_id]

    assert client.post(f"/admin/approvals/{record_id}/approve").status_code == 200
    again = client.post(f"/admin/approvals/{record_id}/remand")
    assert again.status_code == 409

    summary = client.get("/admin/employees/2/summary?month=2025-06").get_json()
    assert summary["total_work_min"] == 480
    assert summary["estimated_salary"] == 12000
    assert summary["records"][0]["status"] == "approved"

    dashboard = client.get("/admin/dashboard?month=2025-06").get_json()
    assert dashboard["total_records"] == 1

    csv_resp = client.get("/admin/employees/2/export.csv?month=2025-06")
    assert csv_resp.mimetype == "text/csv"
    body = csv_resp.data
    assert body.startswith(b"\xef\xbb\xbf")
    text = body.decode("utf-8-sig")
    assert text.splitlines()[0].startswith('"date","employee_id","name"')
    assert '"2025-06-02","EMP001","Taro Yamada","09:00","18:00","1h","8h"' in text


def test_missing_record_is_404(client):
    _login(client, "admin@example.com", "admin123")
    assert client.post("/admin/approvals/999/approve").status_code == 404
