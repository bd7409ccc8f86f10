"""
Exception taxonomy for webhook processing.

Verification and parse failures are expected at the processor boundary and
are turned into failure results there. Handler failures propagate out of the
dispatcher so a caller can signal the provider to redeliver.
"""

from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping, Optional


class EmbedlyError(Exception):
    """Base class for all SDK errors."""

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        context: Optional[Mapping[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.context = MappingProxyType(dict(context or {}))


class ConfigurationError(EmbedlyError):
    def __init__(self, message: str, **context: Any):
        super().__init__(message, "CONFIGURATION_ERROR", context)


class WebhookValidationType(str, Enum):
    SIGNATURE = "signature"
    TIMESTAMP = "timestamp"
    PAYLOAD = "payload"


class WebhookValidationError(EmbedlyError):
    validation_type = WebhookValidationType.SIGNATURE

    def __init__(self, message: str):
        super().__init__(
            message,
            "WEBHOOK_VALIDATION_ERROR",
            {"validation_type": self.validation_type.value},
        )


class AuthenticationError(WebhookValidationError):
    """Signature missing, malformed or not matching the payload."""

    validation_type = WebhookValidationType.SIGNATURE

    def __init__(self, message: str = "Invalid webhook signature"):
        super().__init__(message)


class MalformedPayloadError(WebhookValidationError):
    """Verified payload could not be decoded into an envelope.

    The underlying decode error is available as ``__cause__``.
    """

    validation_type = WebhookValidationType.PAYLOAD

    def __init__(self, message: str = "Failed to parse webhook event"):
        super().__init__(message)


class HandlerError(EmbedlyError):
    """A registered handler failed while processing an event."""

    def __init__(
        self,
        message: str,
        event_type: Optional[str] = None,
        event_id: Optional[str] = None,
    ):
        super().__init__(
            message,
            "WEBHOOK_HANDLER_ERROR",
            {"event_type": event_type, "event_id": event_id},
        )
        self.event_type = event_type
        self.event_id = event_id
