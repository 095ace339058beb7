"""Campus venue directory lookups."""
from typing import List, Optional

from campusvibe.core.geo import GeoPoint
from campusvibe.data.campus_venues import CAMPUS_VENUES, Venue


def find_venue(query: Optional[str]) -> Optional[Venue]:
    """Exact, case-insensitive match on a venue's name or id."""
    if not query:
        return None
    normalized = query.strip().lower()
    if not normalized:
        return None

    for venue in CAMPUS_VENUES:
        if venue.name.lower() == normalized or venue.id == normalized:
            return venue
    return None


def find_venue_coordinates(query: Optional[str]) -> Optional[GeoPoint]:
    venue = find_venue(query)
    if venue is None:
        return None
    return GeoPoint(venue.lat, venue.lng)


def get_venue_suggestions(query: Optional[str]) -> List[Venue]:
    """
    Venues whose name or one of whose keywords contains the query.

    An empty query returns the whole directory (used to fill a dropdown).
    """
    normalized = (query or "").strip().lower()
    if not normalized:
        return list(CAMPUS_VENUES)

    return [
        venue for venue in CAMPUS_VENUES
        if normalized in venue.name.lower()
        or any(normalized in keyword for keyword in venue.keywords)
    ]
