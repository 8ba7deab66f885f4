"""Webhook signature verification."""

import binascii
import hashlib
import hmac
from typing import Optional

from relaybot.core.exceptions import SignatureVerificationError
from relaybot.core.logging import get_logger

logger = get_logger("security")

SIGNATURE_ALGORITHM = "sha1"


def sign_payload(payload: bytes, secret: bytes) -> str:
    """Build the ``X-Hub-Signature`` header value for a payload."""
    digest = hmac.new(secret, payload, hashlib.sha1).hexdigest()
    return f"{SIGNATURE_ALGORITHM}={digest}"


def verify_hub_signature(payload: bytes, signature: Optional[str], secret: bytes) -> bool:
    """Verify a GitHub webhook signature using HMAC-SHA1.

    Args:
        payload: Raw request body bytes, before any JSON parsing
        signature: X-Hub-Signature header value (``sha1=<hexdigest>``)
        secret: Shared webhook secret

    Returns:
        True if valid, False otherwise (including missing or malformed headers)
    """
    if not signature:
        logger.debug("Missing signature header")
        return False

    algorithm, sep, hexdigest = signature.partition("=")
    if not sep or algorithm.strip().lower() != SIGNATURE_ALGORITHM:
        logger.debug(f"Unsupported signature algorithm: {algorithm!r}")
        return False

    try:
        received = binascii.unhexlify(hexdigest.strip())
    except (binascii.Error, ValueError):
        logger.debug("Signature digest is not valid hex")
        return False

    expected = hmac.new(secret, payload, hashlib.sha1).digest()
    return hmac.compare_digest(expected, received)


def require_hub_signature(payload: bytes, signature: Optional[str], secret: bytes) -> None:
    """Verify GitHub signature or raise exception.

    Raises:
        SignatureVerificationError: If signature is invalid
    """
    if not verify_hub_signature(payload, signature, secret):
        logger.warning("Invalid GitHub webhook signature")
        raise SignatureVerificationError("GitHub webhook")
