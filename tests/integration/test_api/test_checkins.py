"""Integration tests for the geofence and check-in API."""
import pytest

from campusvibe.core.security import create_user_token

NEARBY = {"lat": 33.6420, "lng": 72.9900}
ACROSS_TOWN = {"lat": 33.6000, "lng": 72.9000}


@pytest.mark.integration
class TestGeofenceEndpoint:
    """Test POST /events/{id}/geofence."""

    def test_accept(self, client, event, user_headers):
        response = client.post(f"/api/v1/events/{event.id}/geofence", json={"position": NEARBY}, headers=user_headers)

        assert response.status_code == 200
        data = response.json()
        assert data["accepted"] is True
        assert data["message"] == f"Distance: {data['rounded_distance']}m"
        assert 60 < data["distance_m"] < 80

    def test_reject_still_200(self, client, event, user_headers):
        response = client.post(f"/api/v1/events/{event.id}/geofence", json={"position": ACROSS_TOWN}, headers=user_headers)

        assert response.status_code == 200
        data = response.json()
        assert data["accepted"] is False
        assert data["message"] == f"Too far! ({data['rounded_distance']}m away)"

    def test_anonymous(self, client, event):
        response = client.post(f"/api/v1/events/{event.id}/geofence", json={"position": NEARBY})

        assert response.status_code == 401
        assert response.json() == {
            "success": False,
            "error": {"code": "authentication_required", "message": "Please login to Check In!"},
        }

    def test_permission_denied(self, client, event, user_headers):
        response = client.post(
            f"/api/v1/events/{event.id}/geofence",
            json={"position": None, "error": "permission_denied"},
            headers=user_headers,
        )
        assert response.status_code == 422
        assert response.json()["error"]["code"] == "location_unavailable"

    def test_timeout(self, client, event, user_headers):
        response = client.post(f"/api/v1/events/{event.id}/geofence", json={"error": "timeout"}, headers=user_headers)
        assert response.status_code == 422
        assert response.json()["error"]["code"] == "location_timeout"

    def test_venue_without_location(self, client, make_event, user_headers):
        event = make_event(venue_lat=None, venue_lng=None)
        response = client.post(f"/api/v1/events/{event.id}/geofence", json={"position": NEARBY}, headers=user_headers)
        assert response.status_code == 409
        assert response.json()["error"]["message"] == "Check-in unavailable for this venue."

    def test_position_and_error_together(self, client, event, user_headers):
        response = client.post(
            f"/api/v1/events/{event.id}/geofence",
            json={"position": NEARBY, "error": "timeout"},
            headers=user_headers,
        )
        assert response.status_code == 422

    def test_latitude_out_of_range(self, client, event, user_headers):
        response = client.post(
            f"/api/v1/events/{event.id}/geofence",
            json={"position": {"lat": 91, "lng": 0}},
            headers=user_headers,
        )
        assert response.status_code == 422


@pytest.mark.integration
class TestCheckinEndpoint:
    """Test POST /events/{id}/checkins."""

    def test_accept_then_already_checked_in(self, client, event, user_headers):
        url = f"/api/v1/events/{event.id}/checkins"

        first = client.post(url, json={"position": NEARBY, "sentiment": "lit"}, headers=user_headers)
        assert first.status_code == 200
        assert first.json()["status"] == "checked_in"
        assert first.json()["checkin_count"] == 1

        second = client.post(url, json={"position": NEARBY, "sentiment": "dead"}, headers=user_headers)
        assert second.status_code == 200
        data = second.json()
        assert data["status"] == "already_checked_in"
        assert data["sentiment"] == "lit"
        assert data["checkin_id"] == first.json()["checkin_id"]
        assert data["message"] == "Already checked in"

    def test_rejected_when_far(self, client, event, user_headers):
        response = client.post(
            f"/api/v1/events/{event.id}/checkins",
            json={"position": ACROSS_TOWN, "sentiment": "lit"},
            headers=user_headers,
        )

        assert response.status_code == 403
        error = response.json()["error"]
        assert error["code"] == "too_far"
        assert error["distance_m"] > 5_000
        assert error["message"].startswith("Too far! (")

        status = client.get(f"/api/v1/events/{event.id}/checkins/me", headers=user_headers).json()
        assert status["checked_in"] is False

    def test_coarse_sentiment_accepted(self, client, event, user_headers):
        response = client.post(
            f"/api/v1/events/{event.id}/checkins",
            json={"position": NEARBY, "sentiment": "neu"},
            headers=user_headers,
        )
        assert response.json()["sentiment"] == "meh"

    def test_unknown_sentiment(self, client, event, user_headers):
        response = client.post(
            f"/api/v1/events/{event.id}/checkins",
            json={"position": NEARBY, "sentiment": "ecstatic"},
            headers=user_headers,
        )
        assert response.status_code == 422

    def test_message_sanitized(self, client, event, user_headers, db_session):
        from campusvibe.db.models import Checkin

        client.post(
            f"/api/v1/events/{event.id}/checkins",
            json={"position": NEARBY, "sentiment": "lit", "message": "<b>so</b>   loud"},
            headers=user_headers,
        )
        assert db_session.query(Checkin).one().message == "so loud"

    def test_anonymous(self, client, event):
        response = client.post(f"/api/v1/events/{event.id}/checkins", json={"position": NEARBY, "sentiment": "lit"})
        assert response.status_code == 401

    def test_invalid_token(self, client, event):
        response = client.post(
            f"/api/v1/events/{event.id}/checkins",
            json={"position": NEARBY, "sentiment": "lit"},
            headers={"Authorization": "Bearer garbage"},
        )
        assert response.status_code == 401
        assert response.json()["detail"] == "Invalid token"

    def test_unknown_event(self, client, user_headers):
        response = client.post("/api/v1/events/9999/checkins", json={"position": NEARBY, "sentiment": "lit"}, headers=user_headers)
        assert response.status_code == 404
        assert response.json()["error"]["code"] == "event_not_found"

    def test_users_counted_separately(self, client, event, user_headers):
        url = f"/api/v1/events/{event.id}/checkins"
        client.post(url, json={"position": NEARBY, "sentiment": "lit"}, headers=user_headers)
        other = {"Authorization": f"Bearer {create_user_token('student-99')}"}
        response = client.post(url, json={"position": NEARBY, "sentiment": "chill"}, headers=other)
        assert response.json()["checkin_count"] == 2


@pytest.mark.integration
class TestCheckinStatusEndpoint:
    """Test GET /events/{id}/checkins/me."""

    def test_after_checkin(self, client, event, user_headers):
        client.post(f"/api/v1/events/{event.id}/checkins", json={"position": NEARBY, "sentiment": "vibing"}, headers=user_headers)
        data = client.get(f"/api/v1/events/{event.id}/checkins/me", headers=user_headers).json()
        assert data == {"event_id": event.id, "checked_in": True, "sentiment": "vibing", "checkin_count": 1}

    def test_anonymous(self, client, event):
        response = client.get(f"/api/v1/events/{event.id}/checkins/me")
        assert response.status_code == 200
        assert response.json()["checked_in"] is False
