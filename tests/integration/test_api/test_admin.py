"""Integration tests for admin API."""
import pytest

from campusvibe.db.models import Event


@pytest.mark.integration
class TestAdminEvents:
    """Test moderation endpoints."""

    def test_requires_admin(self, client):
        assert client.get("/api/v1/admin/events").status_code == 401
        assert client.get("/api/v1/admin/stats").status_code == 401

    def test_user_token_not_admin(self, client):
        from campusvibe.core.security import create_user_token

        client.cookies.set("admin_token", create_user_token("student-1"))
        assert client.get("/api/v1/admin/events").status_code == 403

    def test_list_with_filter(self, admin_client, make_event):
        make_event(title="Approved")
        make_event(title="Waiting", status="pending", created_by="u-7")

        data = admin_client.get("/api/v1/admin/events", params={"status": "pending"}).json()
        assert [e["title"] for e in data] == ["Waiting"]
        assert data[0]["created_by"] == "u-7"

        assert len(admin_client.get("/api/v1/admin/events").json()) == 2

    def test_search(self, admin_client, make_event):
        make_event(title="Chess Club")
        make_event(title="Drama Club")
        data = admin_client.get("/api/v1/admin/events", params={"search": "chess"}).json()
        assert [e["title"] for e in data] == ["Chess Club"]

    def test_invalid_status_filter(self, admin_client):
        assert admin_client.get("/api/v1/admin/events", params={"status": "archived"}).status_code == 422

    def test_approve_makes_event_public(self, admin_client, make_event):
        event = make_event(status="pending")
        assert admin_client.get(f"/api/v1/events/{event.id}").status_code == 404

        response = admin_client.post(f"/api/v1/admin/events/{event.id}/status", json={"status": "approved"})
        assert response.status_code == 200
        assert response.json()["success"] is True
        assert admin_client.get(f"/api/v1/events/{event.id}").status_code == 200

    def test_reject(self, admin_client, event, db_session):
        admin_client.post(f"/api/v1/admin/events/{event.id}/status", json={"status": "rejected"})
        db_session.refresh(event)
        assert event.status == "rejected"

    def test_status_unknown_event(self, admin_client):
        response = admin_client.post("/api/v1/admin/events/9999/status", json={"status": "approved"})
        assert response.status_code == 404

    def test_bulk_status(self, admin_client, make_event):
        ids = [make_event(status="pending").id for _ in range(3)]
        response = admin_client.post("/api/v1/admin/events/status", json={"event_ids": ids, "status": "approved"})
        assert response.status_code == 200
        assert response.json()["message"] == "3 event(s) approved"

    def test_delete(self, admin_client, event, db_session):
        response = admin_client.delete(f"/api/v1/admin/events/{event.id}")
        assert response.status_code == 200
        assert db_session.query(Event).count() == 0
        assert admin_client.delete(f"/api/v1/admin/events/{event.id}").status_code == 404

    def test_stats(self, admin_client, make_event, add_checkins):
        event = make_event()
        make_event(status="pending")
        add_checkins(event.id, ["lit"])

        data = admin_client.get("/api/v1/admin/stats").json()
        assert data["total_events"] == 2
        assert data["pending_events"] == 1
        assert data["total_checkins"] == 1
