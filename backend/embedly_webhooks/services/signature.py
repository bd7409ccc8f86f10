import hashlib
import hmac
import logging
from typing import Optional, Union

from embedly_webhooks.core.errors import ConfigurationError

logger = logging.getLogger(__name__)

Payload = Union[str, bytes]


def _payload_bytes(payload: Payload) -> bytes:
    # str bodies are hashed as UTF-8, bytes exactly as received
    if isinstance(payload, bytes):
        return payload
    return payload.encode("utf-8")


def _is_blank(value: object) -> bool:
    if isinstance(value, bytes):
        return not value.strip()
    if isinstance(value, str):
        return not value.strip()
    return True


def compute_signature(secret: str, payload: Payload) -> str:
    """
    HMAC-SHA256 of the raw payload, as lowercase hex.
    """
    return hmac.new(
        secret.encode("utf-8"), _payload_bytes(payload), hashlib.sha256
    ).hexdigest()


class SignatureVerifier:
    """Checks that a payload was signed with the shared webhook secret."""

    def __init__(self, secret: Optional[str]):
        if not isinstance(secret, str) or not secret.strip():
            raise ConfigurationError("Webhook secret must not be empty")
        self._secret = secret

    def compute_signature(self, payload: Payload) -> str:
        return compute_signature(self._secret, payload)

    def validate(self, payload: Optional[Payload], signature: Optional[str]) -> bool:
        """
        Return True when ``signature`` matches the HMAC of ``payload``.

        Never raises: blank input on either side, or a signature that is not
        a string, is simply invalid. Hex case in the supplied signature is
        ignored.
        """
        if _is_blank(payload):
            logger.debug("Rejecting webhook with empty payload")
            return False
        if not isinstance(signature, str) or _is_blank(signature):
            logger.debug("Rejecting webhook with empty signature")
            return False

        try:
            expected = self.compute_signature(payload).encode("ascii")
        except UnicodeEncodeError:
            logger.warning("Rejecting webhook payload that is not valid UTF-8 text")
            return False
        received = signature.lower().encode("utf-8", "replace")
        if not hmac.compare_digest(expected, received):
            logger.warning("Webhook signature mismatch")
            return False
        return True
