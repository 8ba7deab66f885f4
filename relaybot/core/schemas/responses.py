"""Shared response schemas for API endpoints."""

from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """Standard API error response."""

    success: bool = False
    error: str
    details: dict | None = None


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = "healthy"
    service: str = "relaybot"
    chat_state: str
    queued: int = 0
