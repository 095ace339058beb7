"""Main API router for v1."""
from fastapi import APIRouter

from campusvibe.api.v1.endpoints import admin, auth, chat, events, sse, tone, venues, webhooks

api_router = APIRouter(prefix="/api/v1")

# Include all endpoint routers
api_router.include_router(auth.router, prefix="/auth", tags=["Authentication"])
api_router.include_router(events.router, prefix="/events", tags=["Events"])
api_router.include_router(venues.router, tags=["Venues"])
api_router.include_router(chat.router, prefix="/chat", tags=["Chat"])
api_router.include_router(admin.router, prefix="/admin", tags=["Admin"])
api_router.include_router(webhooks.router, prefix="/webhooks", tags=["Webhooks"])
api_router.include_router(tone.router, tags=["News"])
api_router.include_router(sse.router, tags=["SSE"])
