"""Unit tests for event service."""
from datetime import datetime, timedelta, timezone
from zoneinfo import ZoneInfo

import pytest

from campusvibe.core.constants import EventStatus
from campusvibe.core.exceptions import EventNotFound
from campusvibe.db.models import Checkin, Event, Rsvp
from campusvibe.services.event import (
    create_event,
    delete_event,
    get_event,
    get_stats,
    ingest_event,
    list_events,
    list_events_for_moderation,
    set_event_status,
)

TZ = ZoneInfo("Asia/Karachi")


def future(hours=24):
    return datetime.now(timezone.utc) + timedelta(hours=hours)


@pytest.mark.unit
class TestCreateEvent:
    """Test event creation."""

    def test_defaults(self, db_session):
        event = create_event(db_session, "Career Fair", future())
        assert event.id is not None
        assert event.status == EventStatus.PENDING.value
        assert event.tags == []
        assert event.venue is None

    def test_end_before_start(self, db_session):
        with pytest.raises(ValueError, match="End time must be after start time"):
            create_event(db_session, "Backwards", future(5), end_time=future(4))

    def test_half_coordinates(self, db_session):
        with pytest.raises(ValueError, match="Both venue_lat and venue_lng"):
            create_event(db_session, "Half", future(), venue_lat=33.6)

    def test_venue_directory_fills_coordinates(self, db_session):
        event = create_event(db_session, "Seminar", future(), venue_name="seecs")
        assert event.venue_name == "SEECS"
        assert event.venue_lat == pytest.approx(33.6433)
        assert event.venue_lng == pytest.approx(72.9916)

    def test_explicit_coordinates_win(self, db_session):
        event = create_event(db_session, "Seminar", future(), venue_name="SEECS", venue_lat=1.0, venue_lng=2.0)
        assert (event.venue_lat, event.venue_lng) == (1.0, 2.0)

    def test_unknown_venue_has_no_location(self, db_session):
        event = create_event(db_session, "Picnic", future(), venue_name="Somewhere Lawn")
        assert event.venue is None
        assert event.venue_name == "Somewhere Lawn"


@pytest.mark.unit
class TestIngestEvent:
    """Test automation ingest."""

    def test_official_auto_approved(self, db_session):
        event, duplicate = ingest_event(db_session, title="Convocation", start_time=future(), is_official=True)
        assert not duplicate
        assert event.status == EventStatus.APPROVED.value
        assert event.created_by is None

    def test_unofficial_pending(self, db_session):
        event, _ = ingest_event(db_session, title="Club Mixer", start_time=future(), source="feed")
        assert event.status == EventStatus.PENDING.value
        assert event.source == "feed"

    def test_deduplicated_by_external_id(self, db_session):
        first, _ = ingest_event(db_session, title="Gala", start_time=future(), external_id="ext-1")
        second, duplicate = ingest_event(db_session, title="Gala (updated)", start_time=future(), external_id="ext-1")
        assert duplicate
        assert second.id == first.id
        assert db_session.query(Event).count() == 1


@pytest.mark.unit
class TestListEvents:
    """Test the public catalogue."""

    def test_only_approved_upcoming(self, make_event, db_session):
        now = datetime.now(timezone.utc)
        make_event(title="Now")
        make_event(title="Pending", status="pending")
        make_event(title="Over", start_time=now - timedelta(days=3), end_time=now - timedelta(days=2))

        titles = [e["title"] for e in list_events(db_session, TZ)]
        assert titles == ["Now"]

        all_titles = {e["title"] for e in list_events(db_session, TZ, upcoming_only=False)}
        assert all_titles == {"Now", "Over"}

    def test_counts_and_sentiment(self, make_event, db_session, add_checkins, add_rsvps):
        event = make_event()
        add_checkins(event.id, ["vibing", "vibing", "dead"])
        add_rsvps(event.id, 4)

        [item] = list_events(db_session, TZ)
        assert item["checkin_count"] == 3
        assert item["rsvp_count"] == 4
        assert item["sentiment"] == "pos"

    def test_no_checkins_no_sentiment(self, make_event, db_session):
        make_event()
        assert list_events(db_session, TZ)[0]["sentiment"] is None

    def test_tag_filter(self, make_event, db_session):
        make_event(title="Gig", tags=["music"])
        make_event(title="Talk", tags=["tech"])
        assert [e["title"] for e in list_events(db_session, TZ, tag="tech")] == ["Talk"]

    def test_times_in_display_timezone(self, make_event, db_session):
        make_event()
        assert list_events(db_session, TZ)[0]["start_time"].endswith("+05:00")


@pytest.mark.unit
class TestGetEvent:
    """Test event detail."""

    def test_approved(self, event, db_session, add_checkins):
        add_checkins(event.id, ["meh"])
        detail = get_event(db_session, event.id, TZ)
        assert detail["id"] == event.id
        assert detail["sentiment"] == "neu"

    def test_pending_hidden(self, make_event, db_session):
        event = make_event(status="pending")
        with pytest.raises(EventNotFound):
            get_event(db_session, event.id, TZ)


@pytest.mark.unit
class TestModeration:
    """Test moderation helpers."""

    def test_filter_and_search(self, make_event, db_session):
        make_event(title="Robotics Expo", status="pending", created_by="u-1")
        make_event(title="Poetry Night", status="pending")
        make_event(title="Robotics Finals")

        pending = list_events_for_moderation(db_session, TZ, status=EventStatus.PENDING)
        assert {e["title"] for e in pending} == {"Robotics Expo", "Poetry Night"}

        found = list_events_for_moderation(db_session, TZ, search="robotics")
        assert {e["title"] for e in found} == {"Robotics Expo", "Robotics Finals"}

        [expo] = list_events_for_moderation(db_session, TZ, status="pending", search="expo")
        assert expo["created_by"] == "u-1"

    def test_set_status(self, make_event, db_session):
        first = make_event(status="pending")
        second = make_event(status="pending")

        assert set_event_status(db_session, [first.id, second.id, 9999], EventStatus.APPROVED) == 2
        db_session.refresh(first)
        assert first.status == "approved"

    def test_set_status_unknown(self, db_session):
        with pytest.raises(ValueError, match="Event not found"):
            set_event_status(db_session, [9999], "rejected")

    def test_delete_cascades(self, event, db_session, add_checkins, add_rsvps):
        add_checkins(event.id, ["lit"])
        add_rsvps(event.id, 2)

        assert delete_event(db_session, event.id) is True
        assert db_session.query(Checkin).count() == 0
        assert db_session.query(Rsvp).count() == 0
        assert delete_event(db_session, event.id) is False

    def test_stats(self, make_event, db_session, add_checkins, add_rsvps):
        approved = make_event()
        make_event(status="pending")
        add_checkins(approved.id, ["lit", "meh"])
        add_rsvps(approved.id, 3)

        stats = get_stats(db_session)
        assert stats["total_events"] == 2
        assert stats["pending_events"] == 1
        assert stats["approved_events"] == 1
        assert stats["total_checkins"] == 2
        assert stats["total_rsvps"] == 3
        assert stats["checkins_this_week"] == 2
