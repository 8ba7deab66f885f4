"""Shared library utilities."""

from relaybot.core.logging import configure_logging, get_logger
from relaybot.core.security import require_hub_signature, sign_payload, verify_hub_signature

__all__ = [
    "configure_logging",
    "get_logger",
    "require_hub_signature",
    "sign_payload",
    "verify_hub_signature",
]
