"""Application constants.

This module contains magic strings and numbers used throughout the application.
Centralizing these values makes them easier to maintain and modify.
"""
import enum


class Sentiment(str, enum.Enum):
    """Crowd vibe a user reports when checking in.

    Declaration order is the tie-break priority for the aggregator:
    the earliest member wins when two sentiments are equally common.
    """

    LIT = "lit"
    VIBING = "vibing"
    CHILL = "chill"
    MEH = "meh"
    DEAD = "dead"


class CoarseSentiment(str, enum.Enum):
    """Three-level sentiment shown on event cards."""

    POS = "pos"
    NEU = "neu"
    NEG = "neg"


class EventStatus(str, enum.Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class RsvpStatus(str, enum.Enum):
    GOING = "going"
    INTERESTED = "interested"


class TopicRequestStatus(str, enum.Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class Intensity(str, enum.Enum):
    """Fallback heatmap buckets used before anyone has checked in."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


# Sentiment <-> coarse sentiment
# Several fine values collapse onto one coarse value, so the reverse
# direction picks one representative per coarse value.
SENTIMENT_TO_COARSE = {
    Sentiment.LIT: CoarseSentiment.POS,
    Sentiment.VIBING: CoarseSentiment.POS,
    Sentiment.CHILL: CoarseSentiment.NEU,
    Sentiment.MEH: CoarseSentiment.NEU,
    Sentiment.DEAD: CoarseSentiment.NEG,
}
COARSE_TO_SENTIMENT = {
    CoarseSentiment.POS: Sentiment.LIT,
    CoarseSentiment.NEU: Sentiment.MEH,
    CoarseSentiment.NEG: Sentiment.DEAD,
}

# Emoji shown next to a check-in, by sentiment
SENTIMENT_EMOJI = {
    Sentiment.LIT: "\U0001F525",
    Sentiment.VIBING: "\U0001F60E",
    Sentiment.CHILL: "☕",
    Sentiment.MEH: "\U0001F610",
    Sentiment.DEAD: "\U0001F634",
}

# Geofence
# Mean Earth radius used by the haversine distance (meters)
EARTH_RADIUS_M = 6_371_000
DEFAULT_GEOFENCE_RADIUS_M = 500
DEFAULT_GEOLOCATION_TIMEOUT_SECONDS = 10.0

# RSVP-count thresholds for the fallback intensity (strictly greater than)
INTENSITY_HIGH_RSVP_THRESHOLD = 50
INTENSITY_MEDIUM_RSVP_THRESHOLD = 20

# Length limits for user-supplied text
MAX_EVENT_TITLE_LENGTH = 200
MAX_CHECKIN_MESSAGE_LENGTH = 280
MAX_VENUE_NAME_LENGTH = 120
MAX_THREAD_TITLE_LENGTH = 60
MAX_THREAD_DESCRIPTION_LENGTH = 300
MAX_CHAT_MESSAGE_LENGTH = 1000

# Topic rooms
DEFAULT_THREAD_EMOJI = "💬"
DEFAULT_THREAD_COLOR = "bg-nust-blue"
REQUESTED_THREAD_EMOJI = "✨"
REQUESTED_THREAD_COLOR = "bg-green-500"
CHAT_PAGE_SIZE = 200

# JWT Token Configuration
# Token expiration time in minutes (8 hours)
ACCESS_TOKEN_EXPIRE_MINUTES = 480
