"""Common response schemas."""
from pydantic import BaseModel
from typing import Optional


class SuccessResponse(BaseModel):
    """Standard success response."""
    success: bool = True
    message: Optional[str] = None


class ErrorDetail(BaseModel):
    """Error detail structure."""
    code: str
    message: str
    # Set for too_far, so clients can show the distance without parsing
    distance_m: Optional[float] = None


class ErrorResponse(BaseModel):
    """Standard error response for domain errors."""
    success: bool = False
    error: ErrorDetail
