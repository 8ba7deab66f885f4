"""Decode raw webhook bodies into typed events."""

from typing import Optional

from pydantic import ValidationError

from relaybot.core.exceptions import EventDecodeError
from relaybot.core.logging import get_logger
from relaybot.services.github.schemas import (
    Event,
    IssuesEvent,
    PullRequestEvent,
    RepositoryEvent,
)

logger = get_logger("github.decoder")

EVENT_TYPES: dict[str, type[Event]] = {
    "pull_request": PullRequestEvent,
    "issues": IssuesEvent,
    "repository": RepositoryEvent,
}


def decode_event(event_type: Optional[str], body: bytes) -> Optional[Event]:
    """Parse a webhook body according to its ``X-GitHub-Event`` marker.

    Returns None for event types the relay does not handle.

    Raises:
        EventDecodeError: If the body does not match the declared event type
    """
    model = EVENT_TYPES.get(event_type or "")
    if model is None:
        logger.info(f"Ignoring unhandled event type: {event_type}")
        return None

    try:
        return model.model_validate_json(body)
    except ValidationError as e:
        logger.error(f"Failed to decode {event_type} event: {e.error_count()} errors")
        raise EventDecodeError(event_type, str(e)) from e
