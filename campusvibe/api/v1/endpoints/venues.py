"""Venue directory, venue vibe and heatmap endpoints."""
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query, Request
from sqlalchemy.orm import Session

from campusvibe.api.deps import get_db
from campusvibe.api.v1.endpoints.events import vibe_payload
from campusvibe.schemas import Hotspot, VenueSuggestion, VibeResponse
from campusvibe.core.rate_limit import limiter, RATE_LIMITS
from campusvibe.services.venues import get_venue_suggestions
from campusvibe.services.vibe import aggregate_venue, get_hotspots

router = APIRouter()


@router.get("/venues", response_model=List[VenueSuggestion])
async def venue_suggestions_endpoint(q: Optional[str] = None):
    """Campus venues matching ``q``; the whole directory when ``q`` is empty."""
    return [venue._asdict() for venue in get_venue_suggestions(q)]


@router.get("/venues/vibe", response_model=VibeResponse)
@limiter.limit(RATE_LIMITS["vibe"])
async def venue_vibe_endpoint(
    request: Request,
    name: str = Query(..., min_length=1),
    db: Session = Depends(get_db)
):
    """Crowd vibe of a venue across all of its approved events."""
    try:
        return vibe_payload(aggregate_venue(db, name))
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.get("/heatmap", response_model=List[Hotspot])
@limiter.limit(RATE_LIMITS["vibe"])
async def heatmap_endpoint(request: Request, live: bool = True, db: Session = Depends(get_db)):
    """
    Map hotspots for approved events that have a venue location.

    Query params:
        live: Only events happening right now (default true)
    """
    return get_hotspots(db, live_only=live)
