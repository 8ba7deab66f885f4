"""Custom exceptions for the application."""


class ApiException(Exception):
    """Base exception for all API errors."""

    def __init__(
        self,
        status_code: int,
        message: str,
        details: dict | None = None,
    ) -> None:
        self.status_code = status_code
        self.message = message
        self.details = details or {}
        super().__init__(message)


class UnauthorizedError(ApiException):
    """Unauthorized access exception."""

    def __init__(self, message: str = "Invalid credentials") -> None:
        super().__init__(401, message)


class BadRequestError(ApiException):
    """Malformed request exception."""

    def __init__(self, message: str, details: dict | None = None) -> None:
        super().__init__(400, message, details)


class SignatureVerificationError(UnauthorizedError):
    """Webhook signature verification failed."""

    def __init__(self, source: str = "webhook") -> None:
        super().__init__(f"Invalid {source} signature")


class EventDecodeError(BadRequestError):
    """Webhook body could not be decoded into the declared event type."""

    def __init__(self, event_type: str, reason: str) -> None:
        super().__init__(
            f"Malformed {event_type} event",
            {"event": event_type, "reason": reason},
        )
        self.event_type = event_type


class ShortenerError(Exception):
    """Link shortening service failed or answered unexpectedly."""

    def __init__(self, url: str, reason: str) -> None:
        super().__init__(f"Could not shorten {url}: {reason}")
        self.url = url
        self.reason = reason


class ChatConnectionError(ConnectionError):
    """The IRC connection is unavailable for writing."""
