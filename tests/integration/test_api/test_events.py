"""Integration tests for the event catalogue, vibe, RSVP and venue API."""
from datetime import datetime, timedelta, timezone

import pytest

from campusvibe.db.models import Event


def event_payload(**overrides):
    start = datetime.now(timezone.utc) + timedelta(days=1)
    payload = {
        "title": "Robotics Expo",
        "start_time": start.isoformat(),
        "end_time": (start + timedelta(hours=3)).isoformat(),
        "venue_name": "SMME",
        "tags": ["Tech", "tech", " robots "],
    }
    payload.update(overrides)
    return payload


@pytest.mark.integration
class TestEventCatalogue:
    """Test listing and fetching events."""

    def test_list(self, client, make_event, add_checkins):
        event = make_event()
        make_event(title="Hidden", status="pending")
        add_checkins(event.id, ["chill", "chill"])

        response = client.get("/api/v1/events")

        assert response.status_code == 200
        data = response.json()
        assert [e["title"] for e in data] == ["Spring Music Night"]
        assert data[0]["checkin_count"] == 2
        assert data[0]["sentiment"] == "neu"

    def test_list_by_tag(self, client, make_event):
        make_event(title="Gig", tags=["music"])
        make_event(title="Hackathon", tags=["tech"])
        data = client.get("/api/v1/events?tag=TECH").json()
        assert [e["title"] for e in data] == ["Hackathon"]

    def test_detail(self, client, event):
        response = client.get(f"/api/v1/events/{event.id}")
        assert response.status_code == 200
        assert response.json()["venue_name"] == "SINES"

    def test_detail_pending_hidden(self, client, make_event):
        event = make_event(status="pending")
        response = client.get(f"/api/v1/events/{event.id}")
        assert response.status_code == 404
        assert response.json()["success"] is False


@pytest.mark.integration
class TestSubmitEvent:
    """Test POST /events."""

    def test_submit_pending(self, client, user_headers, user_id, db_session):
        response = client.post("/api/v1/events", json=event_payload(), headers=user_headers)

        assert response.status_code == 201
        assert response.json()["status"] == "pending"

        event = db_session.query(Event).one()
        assert event.created_by == user_id
        assert event.tags == ["tech", "robots"]
        assert event.venue_lat is not None

    def test_submitted_event_not_listed(self, client, user_headers):
        client.post("/api/v1/events", json=event_payload(), headers=user_headers)
        assert client.get("/api/v1/events").json() == []

    def test_requires_login(self, client):
        response = client.post("/api/v1/events", json=event_payload())
        assert response.status_code == 401
        assert response.json()["error"]["message"] == "Please login first!"

    def test_end_before_start(self, client, user_headers):
        start = datetime.now(timezone.utc) + timedelta(days=1)
        payload = event_payload(end_time=(start - timedelta(hours=1)).isoformat(), start_time=start.isoformat())
        response = client.post("/api/v1/events", json=payload, headers=user_headers)
        assert response.status_code == 400
        assert "End time must be after start time" in response.json()["detail"]

    def test_submitted_radius_ignored(self, admin_client, user_headers):
        response = admin_client.post("/api/v1/events", json=event_payload(radius_meters=10000), headers=user_headers)
        event_id = response.json()["event_id"]
        admin_client.post(f"/api/v1/admin/events/{event_id}/status", json={"status": "approved"})

        response = admin_client.post(
            f"/api/v1/events/{event_id}/geofence",
            json={"position": {"lat": 33.6000, "lng": 72.9000}},
            headers=user_headers,
        )
        data = response.json()
        assert data["accepted"] is False
        assert data["radius_m"] == 500
        assert "radius_meters" not in admin_client.get(f"/api/v1/events/{event_id}").json()

    def test_html_title_rejected_when_empty(self, client, user_headers):
        response = client.post("/api/v1/events", json=event_payload(title="<b></b>"), headers=user_headers)
        assert response.status_code == 422


@pytest.mark.integration
class TestVibeEndpoints:
    """Test event vibe, venue vibe and the heatmap."""

    def test_event_vibe(self, client, event, add_checkins):
        add_checkins(event.id, ["lit", "lit", "vibing"])
        data = client.get(f"/api/v1/events/{event.id}/vibe").json()

        assert data["label"] == "lit"
        assert data["source"] == "sentiment"
        assert data["coarse"] == "pos"
        assert data["emoji"] is not None
        assert data["sentiment_counts"]["vibing"] == 1

    def test_event_vibe_rsvp_fallback(self, client, event, add_rsvps):
        add_rsvps(event.id, 30)
        data = client.get(f"/api/v1/events/{event.id}/vibe").json()
        assert data["label"] == "medium"
        assert data["source"] == "rsvp"
        assert data["emoji"] is None

    def test_venue_vibe(self, client, event, add_checkins):
        add_checkins(event.id, ["dead"])
        response = client.get("/api/v1/venues/vibe", params={"name": "SINES"})
        assert response.status_code == 200
        assert response.json()["label"] == "dead"

    def test_venue_vibe_unknown(self, client):
        response = client.get("/api/v1/venues/vibe", params={"name": "Nowhere"})
        assert response.status_code == 404

    def test_heatmap(self, client, event, add_checkins):
        add_checkins(event.id, ["vibing"])
        data = client.get("/api/v1/heatmap").json()
        assert len(data) == 1
        assert data[0]["event_id"] == event.id
        assert data[0]["coarse"] == "pos"

    def test_venue_suggestions(self, client):
        data = client.get("/api/v1/venues", params={"q": "sines"}).json()
        assert "SINES" in [v["name"] for v in data]
        assert "keywords" not in data[0]


@pytest.mark.integration
class TestRsvpEndpoint:
    """Test RSVP endpoints."""

    def test_toggle(self, client, event, user_headers):
        url = f"/api/v1/events/{event.id}/rsvp"
        assert client.post(url, headers=user_headers).json() == {"event_id": event.id, "going": True, "rsvp_count": 1}
        assert client.post(url, headers=user_headers).json()["going"] is False

    def test_explicit_state(self, client, event, user_headers):
        url = f"/api/v1/events/{event.id}/rsvp"
        client.post(url, json={"going": True}, headers=user_headers)
        data = client.post(url, json={"going": True}, headers=user_headers).json()
        assert data["rsvp_count"] == 1
        assert client.get(url, headers=user_headers).json()["going"] is True

    def test_anonymous(self, client, event):
        response = client.post(f"/api/v1/events/{event.id}/rsvp")
        assert response.status_code == 401
        assert response.json()["error"]["message"] == "Please login to RSVP!"

    def test_counts_feed_event_list(self, client, event, user_headers):
        client.post(f"/api/v1/events/{event.id}/rsvp", headers=user_headers)
        assert client.get("/api/v1/events").json()[0]["rsvp_count"] == 1
