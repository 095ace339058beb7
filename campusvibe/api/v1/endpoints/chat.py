"""Topic room endpoints for students."""
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query, Request, status
from sqlalchemy.orm import Session

from campusvibe.api.deps import get_db, get_optional_user_id, TIMEZONE
from campusvibe.schemas import (
    MessageCreate,
    MessageResponse,
    ThreadResponse,
    TopicRequestCreate,
    TopicRequestResponse,
)
from campusvibe.core.constants import CHAT_PAGE_SIZE
from campusvibe.core.rate_limit import limiter, RATE_LIMITS
from campusvibe.services.chat import (
    get_active_thread,
    list_messages,
    list_threads,
    post_message,
    request_topic,
    serialize_message,
    serialize_thread,
    serialize_topic_request,
)

router = APIRouter()


@router.get("/threads", response_model=List[ThreadResponse])
@limiter.limit(RATE_LIMITS["chat_read"])
async def list_threads_endpoint(request: Request, db: Session = Depends(get_db)):
    return list_threads(db)


@router.get("/threads/{thread_id}", response_model=ThreadResponse)
@limiter.limit(RATE_LIMITS["chat_read"])
async def get_thread_endpoint(request: Request, thread_id: int, db: Session = Depends(get_db)):
    return serialize_thread(get_active_thread(db, thread_id))


@router.get("/threads/{thread_id}/messages", response_model=List[MessageResponse])
@limiter.limit(RATE_LIMITS["chat_read"])
async def list_messages_endpoint(
    request: Request,
    thread_id: int,
    after: Optional[int] = Query(None, ge=0),
    limit: int = Query(CHAT_PAGE_SIZE, ge=1, le=CHAT_PAGE_SIZE),
    db: Session = Depends(get_db)
):
    """
    Room history, oldest first.

    Query params:
        after: Only messages with a larger id (catching up after a reconnect)
        limit: Page size
    """
    return list_messages(db, thread_id, TIMEZONE, after_id=after, limit=limit)


@router.post("/threads/{thread_id}/messages", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
@limiter.limit(RATE_LIMITS["chat_post"])
async def post_message_endpoint(
    request: Request,
    thread_id: int,
    message: MessageCreate,
    user_id: Optional[str] = Depends(get_optional_user_id),
    db: Session = Depends(get_db)
):
    """
    Post to a room. Other members receive it through the room's SSE stream.

    Raises:
        HTTPException: 400 if the message is blank after sanitizing
    """
    try:
        created = post_message(db, thread_id, user_id, message.content)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return serialize_message(created, TIMEZONE)


@router.post("/topic-requests", response_model=TopicRequestResponse, status_code=status.HTTP_201_CREATED)
@limiter.limit(RATE_LIMITS["topic_request"])
async def request_topic_endpoint(
    request: Request,
    topic: TopicRequestCreate,
    user_id: Optional[str] = Depends(get_optional_user_id),
    db: Session = Depends(get_db)
):
    """Ask the moderators to open a new room."""
    created = request_topic(db, user_id, topic.topic_title, topic.reason)
    return serialize_topic_request(created, TIMEZONE)
