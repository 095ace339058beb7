from .chat import (
    approve_topic_request,
    create_thread,
    delete_message,
    list_messages,
    list_threads,
    list_topic_requests,
    post_message,
    reject_topic_request,
    request_topic,
    set_thread_active,
)
from .checkin import check_in, get_checkin_status, record_checkin
from .event import (
    create_event,
    delete_event,
    get_event,
    get_stats,
    ingest_event,
    list_events,
    list_events_for_moderation,
    set_event_status,
)
from .geofence import acquire_position, check_event_geofence, validate_geofence
from .rsvp import get_rsvp_status, set_rsvp, toggle_rsvp
from .student_tone import rewrite_student_tone
from .venues import find_venue, find_venue_coordinates, get_venue_suggestions
from .vibe import aggregate, aggregate_event, aggregate_venue, get_hotspots

__all__ = [
    # chat
    "approve_topic_request",
    "create_thread",
    "delete_message",
    "list_messages",
    "list_threads",
    "list_topic_requests",
    "post_message",
    "reject_topic_request",
    "request_topic",
    "set_thread_active",
    # checkin
    "check_in",
    "get_checkin_status",
    "record_checkin",
    # events
    "create_event",
    "delete_event",
    "get_event",
    "get_stats",
    "ingest_event",
    "list_events",
    "list_events_for_moderation",
    "set_event_status",
    # geofence
    "acquire_position",
    "check_event_geofence",
    "validate_geofence",
    # rsvp
    "get_rsvp_status",
    "set_rsvp",
    "toggle_rsvp",
    # student tone
    "rewrite_student_tone",
    # venues
    "find_venue",
    "find_venue_coordinates",
    "get_venue_suggestions",
    # vibe
    "aggregate",
    "aggregate_event",
    "aggregate_venue",
    "get_hotspots",
]
