"""Core schemas for API responses."""

from relaybot.core.schemas.responses import ErrorResponse, HealthResponse

__all__ = ["ErrorResponse", "HealthResponse"]
