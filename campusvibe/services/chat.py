"""Topic room business logic: rooms, messages and topic requests."""
from typing import Dict, List, Optional
from zoneinfo import ZoneInfo
from sqlalchemy.orm import Session

from campusvibe.core.constants import (
    CHAT_PAGE_SIZE,
    DEFAULT_THREAD_COLOR,
    DEFAULT_THREAD_EMOJI,
    REQUESTED_THREAD_COLOR,
    REQUESTED_THREAD_EMOJI,
    TopicRequestStatus,
)
from campusvibe.core.exceptions import AuthenticationRequired, ThreadNotFound
from campusvibe.core.logging_config import get_logger
from campusvibe.core.sanitization import sanitize_chat_message
from campusvibe.core.utils import to_timezone
from campusvibe.db.models import Message, Thread, TopicRequest

logger = get_logger(__name__)


class TopicRequestDecided(ValueError):
    """The topic request was already approved or rejected."""


def serialize_thread(thread: Thread) -> Dict:
    return {
        "id": thread.id,
        "title": thread.title,
        "description": thread.description,
        "emoji": thread.emoji,
        "color_theme": thread.color_theme,
        "is_active": thread.is_active,
    }


def serialize_message(message: Message, tz: ZoneInfo) -> Dict:
    return {
        "id": message.id,
        "thread_id": message.thread_id,
        "user_id": message.user_id,
        "content": message.content,
        "created_at": to_timezone(message.created_at, tz).isoformat(),
    }


def serialize_topic_request(request: TopicRequest, tz: ZoneInfo) -> Dict:
    return {
        "id": request.id,
        "user_id": request.user_id,
        "topic_title": request.topic_title,
        "reason": request.reason,
        "status": request.status,
        "created_at": to_timezone(request.created_at, tz).isoformat(),
    }


def get_active_thread(db: Session, thread_id: int) -> Thread:
    """
    Get a room students can see and post in.

    Hidden rooms are reported exactly like a missing one.

    Raises:
        ThreadNotFound: If the room does not exist or is hidden
    """
    thread = db.query(Thread).filter(Thread.id == thread_id, Thread.is_active.is_(True)).first()
    if thread is None:
        raise ThreadNotFound()
    return thread


def list_threads(db: Session, include_hidden: bool = False) -> List[Dict]:
    """Rooms in the order they were opened; hidden ones only for moderators."""
    query = db.query(Thread)
    if not include_hidden:
        query = query.filter(Thread.is_active.is_(True))
    return [serialize_thread(t) for t in query.order_by(Thread.created_at.asc(), Thread.id.asc()).all()]


def create_thread(
    db: Session,
    title: str,
    description: Optional[str] = None,
    emoji: Optional[str] = None,
    color_theme: Optional[str] = None,
) -> Thread:
    thread = Thread(
        title=title,
        description=description,
        emoji=emoji or DEFAULT_THREAD_EMOJI,
        color_theme=color_theme or DEFAULT_THREAD_COLOR,
        is_active=True,
    )
    db.add(thread)
    db.commit()
    db.refresh(thread)
    logger.info("thread_created", thread_id=thread.id)
    return thread


def set_thread_active(db: Session, thread_id: int, is_active: bool) -> Thread:
    """
    Show or hide a room. Hidden rooms keep their history.

    Raises:
        ValueError: If the room does not exist
    """
    thread = db.query(Thread).filter(Thread.id == thread_id).first()
    if thread is None:
        raise ValueError("Thread not found")

    thread.is_active = is_active
    db.commit()
    logger.info("thread_visibility_changed", thread_id=thread_id, is_active=is_active)
    return thread


def list_messages(
    db: Session,
    thread_id: int,
    tz: ZoneInfo,
    after_id: Optional[int] = None,
    limit: int = CHAT_PAGE_SIZE,
) -> List[Dict]:
    """
    Messages of a room, oldest first.

    Without ``after_id`` this is the latest ``limit`` messages; with it, the
    first ``limit`` messages newer than that id, which is how the live
    stream catches up.

    Raises:
        ThreadNotFound: If the room does not exist or is hidden
    """
    get_active_thread(db, thread_id)

    query = db.query(Message).filter(Message.thread_id == thread_id)
    if after_id is not None:
        messages = query.filter(Message.id > after_id).order_by(Message.id.asc()).limit(limit).all()
    else:
        messages = list(reversed(query.order_by(Message.id.desc()).limit(limit).all()))
    return [serialize_message(m, tz) for m in messages]


def post_message(db: Session, thread_id: int, user_id: Optional[str], content: str) -> Message:
    """
    Post a message to a room.

    Raises:
        AuthenticationRequired: If user_id is None
        ValueError: If the message is blank or not acceptable text
        ThreadNotFound: If the room does not exist or is hidden
    """
    if user_id is None:
        raise AuthenticationRequired("Please Log In to chat!")
    content = sanitize_chat_message(content)
    get_active_thread(db, thread_id)

    message = Message(thread_id=thread_id, user_id=user_id, content=content)
    db.add(message)
    db.commit()
    db.refresh(message)

    logger.info("chat_message_posted", thread_id=thread_id, message_id=message.id, user_id=user_id)
    return message


def delete_message(db: Session, message_id: int) -> bool:
    """Remove a message (moderators only)."""
    message = db.query(Message).filter(Message.id == message_id).first()
    if not message:
        return False

    thread_id = message.thread_id
    db.delete(message)
    db.commit()
    logger.info("chat_message_deleted", message_id=message_id, thread_id=thread_id)
    return True


def request_topic(db: Session, user_id: Optional[str], topic_title: str, reason: Optional[str] = None) -> TopicRequest:
    """
    Ask the moderators to open a new room.

    Raises:
        AuthenticationRequired: If user_id is None
    """
    if user_id is None:
        raise AuthenticationRequired("Who are you? Log in first.")

    request = TopicRequest(user_id=user_id, topic_title=topic_title, reason=reason)
    db.add(request)
    db.commit()
    db.refresh(request)

    logger.info("topic_requested", request_id=request.id, user_id=user_id)
    return request


def list_topic_requests(db: Session, tz: ZoneInfo, status: Optional[TopicRequestStatus] = None) -> List[Dict]:
    """Topic requests for moderators, newest first."""
    query = db.query(TopicRequest)
    if status is not None:
        query = query.filter(TopicRequest.status == TopicRequestStatus(status).value)
    requests = query.order_by(TopicRequest.created_at.desc(), TopicRequest.id.desc()).all()
    return [serialize_topic_request(r, tz) for r in requests]


def _pending_topic_request(db: Session, request_id: int) -> TopicRequest:
    request = db.query(TopicRequest).filter(TopicRequest.id == request_id).first()
    if request is None:
        raise ValueError("Topic request not found")
    if request.status != TopicRequestStatus.PENDING.value:
        raise TopicRequestDecided(f"Topic request already {request.status}")
    return request


def approve_topic_request(db: Session, request_id: int) -> Thread:
    """
    Open a room for a pending request and mark the request approved.

    Both changes are committed together.

    Raises:
        ValueError: If the request does not exist
        TopicRequestDecided: If the request was already approved or rejected
    """
    request = _pending_topic_request(db, request_id)
    reason = request.reason or "Let's discuss!"

    thread = Thread(
        title=request.topic_title,
        description=f"Community-requested topic: {reason}",
        emoji=REQUESTED_THREAD_EMOJI,
        color_theme=REQUESTED_THREAD_COLOR,
        is_active=True,
    )
    db.add(thread)
    request.status = TopicRequestStatus.APPROVED.value
    db.commit()
    db.refresh(thread)

    logger.info("topic_request_approved", request_id=request_id, thread_id=thread.id)
    return thread


def reject_topic_request(db: Session, request_id: int) -> TopicRequest:
    """
    Raises:
        ValueError: If the request does not exist
        TopicRequestDecided: If the request was already approved or rejected
    """
    request = _pending_topic_request(db, request_id)
    request.status = TopicRequestStatus.REJECTED.value
    db.commit()

    logger.info("topic_request_rejected", request_id=request_id)
    return request
