"""Crowd vibe aggregation.

The vibe of an event is the most common sentiment among its check-ins.
Before anyone has checked in (or when nobody tagged a sentiment), the RSVP
count stands in, bucketed into high / medium / low intensity.

Everything here is recomputed from the stored rows on every call; there is
no cached aggregate to keep in sync with new check-ins.
"""
from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Mapping, Optional, Union
from sqlalchemy import func
from sqlalchemy.orm import Session

from campusvibe.core.config import settings
from campusvibe.core.constants import (
    COARSE_TO_SENTIMENT,
    SENTIMENT_TO_COARSE,
    CoarseSentiment,
    EventStatus,
    Intensity,
    Sentiment,
)
from campusvibe.core.logging_config import get_logger
from campusvibe.core.utils import is_happening
from campusvibe.db.models import Checkin, Event, Rsvp
from campusvibe.services.utils import count_rsvps, get_approved_event

logger = get_logger(__name__)

SOURCE_SENTIMENT = "sentiment"
SOURCE_RSVP = "rsvp"

# Lower rank wins ties
SENTIMENT_RANK = {sentiment: rank for rank, sentiment in enumerate(Sentiment)}


def normalize_sentiment(value: Union[Sentiment, CoarseSentiment, str]) -> Sentiment:
    """
    Accept a sentiment in either vocabulary and return the canonical one.

    Raises:
        ValueError: If the value belongs to neither vocabulary
    """
    if isinstance(value, Sentiment):
        return value
    if isinstance(value, CoarseSentiment):
        return COARSE_TO_SENTIMENT[value]

    normalized = str(value).strip().lower()
    try:
        return Sentiment(normalized)
    except ValueError:
        pass
    try:
        return COARSE_TO_SENTIMENT[CoarseSentiment(normalized)]
    except ValueError:
        raise ValueError(f"Unknown sentiment: {value!r}")


def to_coarse(sentiment: Union[Sentiment, str]) -> CoarseSentiment:
    return SENTIMENT_TO_COARSE[normalize_sentiment(sentiment)]


def from_coarse(coarse: Union[CoarseSentiment, str]) -> Sentiment:
    return COARSE_TO_SENTIMENT[CoarseSentiment(coarse)]


def rsvp_intensity(rsvp_count: int) -> Intensity:
    """Bucket an RSVP count using the configured thresholds."""
    if rsvp_count > settings.INTENSITY_HIGH_RSVP_THRESHOLD:
        return Intensity.HIGH
    if rsvp_count > settings.INTENSITY_MEDIUM_RSVP_THRESHOLD:
        return Intensity.MEDIUM
    return Intensity.LOW


def dominant_sentiment(counts: Mapping[Sentiment, int]) -> Optional[Sentiment]:
    """
    Most common sentiment; ties go to the sentiment declared first in
    ``Sentiment`` (lit, vibing, chill, meh, dead).
    """
    present = [s for s, n in counts.items() if n > 0]
    if not present:
        return None
    return min(present, key=lambda s: (-counts[s], SENTIMENT_RANK[s]))


@dataclass(frozen=True)
class VibeAggregate:
    """Display intensity of an event or venue."""

    label: str
    source: str
    checkin_count: int
    rsvp_count: int
    sentiment_counts: Dict[str, int] = field(default_factory=dict)

    @property
    def coarse(self) -> Optional[str]:
        """pos/neu/neg for sentiment labels; None for RSVP buckets."""
        if self.source != SOURCE_SENTIMENT:
            return None
        return to_coarse(self.label).value


def _count_sentiments(values: Iterable[Optional[str]]) -> Counter:
    counts: Counter = Counter()
    for value in values:
        if value is None:
            continue
        try:
            counts[normalize_sentiment(value)] += 1
        except ValueError:
            logger.warning("unknown_sentiment_skipped", sentiment=value)
    return counts


def aggregate_counts(sentiment_counts: Mapping[Sentiment, int], checkin_count: int, rsvp_count: int) -> VibeAggregate:
    """Aggregate from pre-counted sentiments (used by the bulk heatmap query)."""
    counts = {s.value: sentiment_counts.get(s, 0) for s in Sentiment}
    winner = dominant_sentiment(sentiment_counts)
    if winner is not None:
        return VibeAggregate(winner.value, SOURCE_SENTIMENT, checkin_count, rsvp_count, counts)
    return VibeAggregate(rsvp_intensity(rsvp_count).value, SOURCE_RSVP, checkin_count, rsvp_count, counts)


def aggregate(sentiments: Iterable[Optional[Union[Sentiment, str]]], rsvp_count: int = 0) -> VibeAggregate:
    """
    Aggregate the sentiments of a set of check-ins.

    Args:
        sentiments: One entry per check-in; None for check-ins without a sentiment
        rsvp_count: RSVPs for the event, used when no sentiment is available

    Returns:
        VibeAggregate whose label is the dominant sentiment, or an
        Intensity value when the check-ins carry no sentiment at all
    """
    sentiments = list(sentiments)
    return aggregate_counts(_count_sentiments(sentiments), len(sentiments), rsvp_count)


def aggregate_stored(raw_counts: Mapping[Optional[str], int], rsvp_count: int) -> VibeAggregate:
    """Aggregate from per-value counts of stored sentiment strings (None included)."""
    counts: Counter = Counter()
    for value, n in raw_counts.items():
        counts.update(_count_sentiments([value] * n))
    return aggregate_counts(counts, sum(raw_counts.values()), rsvp_count)


def aggregate_event(db: Session, event_id: int) -> VibeAggregate:
    """Current crowd vibe of an approved event."""
    get_approved_event(db, event_id)
    sentiments = [s for (s,) in db.query(Checkin.sentiment).filter(Checkin.event_id == event_id).all()]
    return aggregate(sentiments, count_rsvps(db, event_id))


def aggregate_venue(db: Session, venue_name: str) -> VibeAggregate:
    """
    Crowd vibe of a venue across all its approved events.

    Raises:
        ValueError: If no approved event is held at the venue
    """
    event_ids = [
        event_id for (event_id,) in db.query(Event.id).filter(
            func.lower(Event.venue_name) == venue_name.strip().lower(),
            Event.status == EventStatus.APPROVED.value
        ).all()
    ]
    if not event_ids:
        raise ValueError("No events at this venue")

    sentiments = [
        s for (s,) in db.query(Checkin.sentiment).filter(Checkin.event_id.in_(event_ids)).all()
    ]
    rsvp_count = db.query(Rsvp).filter(Rsvp.event_id.in_(event_ids)).count()
    return aggregate(sentiments, rsvp_count)


def get_sentiment_counts_bulk(db: Session, event_ids: List[int]) -> Dict[int, Counter]:
    """Sentiment counts per event in a single grouped query."""
    rows = db.query(
        Checkin.event_id,
        Checkin.sentiment,
        func.count()
    ).filter(Checkin.event_id.in_(event_ids)).group_by(Checkin.event_id, Checkin.sentiment).all()

    result: Dict[int, Counter] = {}
    for event_id, sentiment, count in rows:
        bucket = result.setdefault(event_id, Counter())
        bucket[sentiment] += count
    return result


def get_hotspots(db: Session, live_only: bool = True) -> List[Dict]:
    """
    Heatmap entries for approved events with a venue location.

    Args:
        db: Database session
        live_only: Only include events happening now

    Returns:
        List of dicts with event, location and crowd vibe fields
    """
    events = db.query(Event).filter(
        Event.status == EventStatus.APPROVED.value,
        Event.venue_lat.isnot(None),
        Event.venue_lng.isnot(None)
    ).order_by(Event.start_time).all()
    if live_only:
        events = [e for e in events if is_happening(e.start_time, e.end_time)]
    if not events:
        return []

    event_ids = [e.id for e in events]
    sentiment_counts = get_sentiment_counts_bulk(db, event_ids)
    rsvp_counts = dict(
        db.query(Rsvp.event_id, func.count()).filter(Rsvp.event_id.in_(event_ids)).group_by(Rsvp.event_id).all()
    )

    hotspots = []
    for event in events:
        vibe = aggregate_stored(sentiment_counts.get(event.id, Counter()), rsvp_counts.get(event.id, 0))
        hotspots.append({
            "event_id": event.id,
            "title": event.title,
            "venue_name": event.venue_name,
            "lat": event.venue_lat,
            "lng": event.venue_lng,
            "label": vibe.label,
            "source": vibe.source,
            "coarse": vibe.coarse,
            "checkin_count": vibe.checkin_count,
            "rsvp_count": vibe.rsvp_count,
        })
    return hotspots
