"""Student-tone rewrite for the news moderation screen."""
import httpx
from fastapi import APIRouter, Depends, HTTPException, Request

from campusvibe.api.deps import get_http_client, verify_admin_token
from campusvibe.schemas import ToneRequest, ToneResponse
from campusvibe.core.rate_limit import limiter, RATE_LIMITS
from campusvibe.services.student_tone import rewrite_student_tone

router = APIRouter(dependencies=[Depends(verify_admin_token)])


@router.post("/student-tone", response_model=ToneResponse)
@limiter.limit(RATE_LIMITS["student_tone"])
async def student_tone_endpoint(
    request: Request,
    payload: ToneRequest,
    http: httpx.AsyncClient = Depends(get_http_client),
) -> ToneResponse:
    """
    Rewrite a news title and summary the way students talk.

    Raises:
        HTTPException: 400 if both title and summary are empty
        ToneRewriteFailed: 500 when the model is not configured or fails
    """
    try:
        rewrite = await rewrite_student_tone(payload.title, payload.summary, http=http)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return ToneResponse(**rewrite)
