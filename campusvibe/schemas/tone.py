"""Student-tone rewrite schemas."""
from typing import Optional
from pydantic import BaseModel, Field


class ToneRequest(BaseModel):
    title: Optional[str] = Field(None, max_length=500)
    summary: Optional[str] = Field(None, max_length=5000)


class ToneResponse(BaseModel):
    title: Optional[str] = None
    summary: Optional[str] = None
