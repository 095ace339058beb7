"""Webhook endpoints for event-ingest automations."""
from typing import Optional
from fastapi import APIRouter, Depends, Header, HTTPException, Request, Response, status
from sqlalchemy.orm import Session

from campusvibe.api.deps import get_db
from campusvibe.schemas import EventIngest, IngestResponse
from campusvibe.core.rate_limit import limiter, RATE_LIMITS
from campusvibe.core.security import verify_ingest_secret
from campusvibe.core.logging_config import get_logger
from campusvibe.services.event import ingest_event

logger = get_logger(__name__)
router = APIRouter()


@router.post("/ingest-event", response_model=IngestResponse, status_code=status.HTTP_201_CREATED)
@limiter.limit(RATE_LIMITS["ingest"])
async def ingest_event_endpoint(
    request: Request,
    response: Response,
    event: EventIngest,
    x_api_secret: Optional[str] = Header(None),
    db: Session = Depends(get_db)
):
    """
    Create an event from an automation (society feed, scraper).

    Authenticated with the shared ``x-api-secret`` header. Events are
    deduplicated by ``external_id``; a repeat answers 200 with the existing
    event. Official events skip the moderation queue.

    Raises:
        HTTPException: 401 on a wrong secret, 500 when no secret is configured,
            400 if the times or coordinates are inconsistent
    """
    try:
        authorized = verify_ingest_secret(x_api_secret)
    except RuntimeError as e:
        logger.error("ingest_secret_missing")
        raise HTTPException(status_code=500, detail=str(e))
    if not authorized:
        logger.warning("ingest_unauthorized")
        raise HTTPException(status_code=401, detail="Unauthorized")

    try:
        created, duplicate = ingest_event(db, **event.model_dump())
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    if duplicate:
        response.status_code = status.HTTP_200_OK
    return IngestResponse(event_id=created.id, status=created.status, duplicate=duplicate)
