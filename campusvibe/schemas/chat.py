"""Topic room schemas."""
from typing import Optional
from pydantic import BaseModel, Field, field_validator

from campusvibe.core.constants import (
    MAX_CHAT_MESSAGE_LENGTH,
    MAX_THREAD_DESCRIPTION_LENGTH,
    MAX_THREAD_TITLE_LENGTH,
    TopicRequestStatus,
)
from campusvibe.core.sanitization import sanitize_chat_message, sanitize_text, sanitize_thread_title


class ThreadResponse(BaseModel):
    id: int
    title: str
    description: Optional[str] = None
    emoji: str
    color_theme: str
    is_active: bool


class ThreadCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=MAX_THREAD_TITLE_LENGTH)
    description: Optional[str] = Field(None, max_length=MAX_THREAD_DESCRIPTION_LENGTH)
    emoji: Optional[str] = Field(None, max_length=16)
    color_theme: Optional[str] = Field(None, max_length=32, pattern=r"^[a-z0-9-]+$")

    @field_validator('title')
    @classmethod
    def sanitize_title_field(cls, v: str) -> str:
        return sanitize_thread_title(v)

    @field_validator('description')
    @classmethod
    def sanitize_description_field(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        return sanitize_text(v, max_length=MAX_THREAD_DESCRIPTION_LENGTH) or None


class ThreadVisibilityUpdate(BaseModel):
    is_active: bool


class MessageCreate(BaseModel):
    content: str = Field(..., min_length=1, max_length=MAX_CHAT_MESSAGE_LENGTH)

    @field_validator('content')
    @classmethod
    def sanitize_content_field(cls, v: str) -> str:
        return sanitize_chat_message(v)


class MessageResponse(BaseModel):
    id: int
    thread_id: int
    user_id: str
    content: str
    created_at: str


class TopicRequestCreate(BaseModel):
    topic_title: str = Field(..., min_length=1, max_length=MAX_THREAD_TITLE_LENGTH)
    reason: Optional[str] = Field(None, max_length=500)

    @field_validator('topic_title')
    @classmethod
    def sanitize_title_field(cls, v: str) -> str:
        return sanitize_thread_title(v)

    @field_validator('reason')
    @classmethod
    def sanitize_reason_field(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        return sanitize_text(v, max_length=500) or None


class TopicRequestResponse(BaseModel):
    id: int
    user_id: str
    topic_title: str
    reason: Optional[str] = None
    status: TopicRequestStatus
    created_at: str
