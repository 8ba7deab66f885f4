"""Tests for webhook signature verification."""

import hashlib
import hmac

import pytest

from relaybot.core.exceptions import SignatureVerificationError
from relaybot.core.security import require_hub_signature, sign_payload, verify_hub_signature

SECRET = b"s3cret"
BODY = b'{"action": "opened", "number": 7}'


def _flip_bit(data: bytes, bit: int) -> bytes:
    mutated = bytearray(data)
    mutated[bit // 8] ^= 1 << (bit % 8)
    return bytes(mutated)


class TestVerifyHubSignature:
    """Tests for verify_hub_signature function."""

    def test_valid_signature(self):
        """Accept the HMAC-SHA1 of the body under the shared secret."""
        digest = hmac.new(SECRET, BODY, hashlib.sha1).hexdigest()

        assert verify_hub_signature(BODY, f"sha1={digest}", SECRET) is True

    def test_sign_payload_round_trip(self):
        """sign_payload builds a header that verifies."""
        assert verify_hub_signature(BODY, sign_payload(BODY, SECRET), SECRET) is True

    def test_uppercase_hex_digest(self):
        """Hex decoding is case-insensitive."""
        algo, digest = sign_payload(BODY, SECRET).split("=")

        assert verify_hub_signature(BODY, f"{algo}={digest.upper()}", SECRET) is True

    @pytest.mark.parametrize("bit", [0, 7, 42, len(BODY) * 8 - 1])
    def test_body_bit_flip_fails(self, bit):
        """Any single-bit change to the body invalidates the signature."""
        signature = sign_payload(BODY, SECRET)

        assert verify_hub_signature(_flip_bit(BODY, bit), signature, SECRET) is False

    @pytest.mark.parametrize("bit", [0, 13, 80, 159])
    def test_digest_bit_flip_fails(self, bit):
        """Any single-bit change to the digest invalidates the signature."""
        digest = hmac.new(SECRET, BODY, hashlib.sha1).digest()
        signature = f"sha1={_flip_bit(digest, bit).hex()}"

        assert verify_hub_signature(BODY, signature, SECRET) is False

    def test_wrong_secret(self):
        """Reject signatures made with another secret."""
        assert verify_hub_signature(BODY, sign_payload(BODY, b"other"), SECRET) is False

    @pytest.mark.parametrize(
        "signature",
        [None, "", "sha1", "sha1=", "sha1=not-hex", "md5=abcdef", "sha256=" + "0" * 64, "sha1=abc"],
    )
    def test_malformed_header_fails_closed(self, signature):
        """Missing or malformed headers never verify."""
        assert verify_hub_signature(BODY, signature, SECRET) is False

    def test_sha256_of_same_body_rejected(self):
        """Only the sha1 algorithm is accepted."""
        digest = hmac.new(SECRET, BODY, hashlib.sha256).hexdigest()

        assert verify_hub_signature(BODY, f"sha256={digest}", SECRET) is False


class TestRequireHubSignature:
    """Tests for require_hub_signature function."""

    def test_valid_does_not_raise(self):
        require_hub_signature(BODY, sign_payload(BODY, SECRET), SECRET)

    def test_invalid_raises(self):
        """Raise a 401 API error on mismatch."""
        with pytest.raises(SignatureVerificationError) as exc_info:
            require_hub_signature(BODY, "sha1=" + "0" * 40, SECRET)

        assert exc_info.value.status_code == 401
