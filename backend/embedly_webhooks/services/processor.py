import asyncio
import logging
from typing import Optional

from embedly_webhooks.core.errors import (
    AuthenticationError,
    HandlerError,
    MalformedPayloadError,
)
from embedly_webhooks.schemas.envelope import WebhookProcessResult
from embedly_webhooks.services.dispatcher import Dispatcher, HandlerSet
from embedly_webhooks.services.parser import EventParser
from embedly_webhooks.services.signature import Payload, SignatureVerifier

logger = logging.getLogger(__name__)

UNEXPECTED_ERROR = "An unexpected error occurred while processing the webhook"


class WebhookProcessor:
    """
    Entry point for an HTTP endpoint: verify, parse, dispatch.

    ``process`` always returns a WebhookProcessResult, handler failures
    included. Callers that need handler exceptions (to make the provider
    redeliver) should use ``parser`` and ``dispatcher`` directly.
    """

    def __init__(self, parser: EventParser, dispatcher: Dispatcher):
        self.parser = parser
        self.dispatcher = dispatcher

    @classmethod
    def create(cls, secret: str, handler_set: HandlerSet) -> "WebhookProcessor":
        """Build a processor from a secret; raises ConfigurationError if blank."""
        parser = EventParser(SignatureVerifier(secret))
        return cls(parser=parser, dispatcher=Dispatcher(handler_set))

    async def process(
        self,
        payload: Optional[Payload],
        signature: Optional[str],
        cancel: Optional[asyncio.Event] = None,
    ) -> WebhookProcessResult:
        try:
            envelope = self.parser.parse_event(payload, signature)
        except (AuthenticationError, MalformedPayloadError) as exc:
            logger.warning(f"Rejected webhook: {exc}")
            return WebhookProcessResult.failed(str(exc))
        except Exception:
            logger.exception("Unexpected error parsing webhook")
            return WebhookProcessResult.failed(UNEXPECTED_ERROR)

        try:
            await self.dispatcher.dispatch(envelope, cancel)
        except HandlerError as exc:
            logger.warning(f"Webhook handler failed for event {envelope.id}: {exc}")
            return WebhookProcessResult.failed(str(exc) or "Webhook handler failed")
        except Exception:
            logger.exception(f"Unexpected error dispatching event {envelope.id}")
            return WebhookProcessResult.failed(UNEXPECTED_ERROR)

        logger.info(f"Successfully processed webhook event: {envelope.id}")
        return WebhookProcessResult.succeeded(envelope.id, envelope.event_type)

    def validate_webhook(
        self, payload: Optional[Payload], signature: Optional[str]
    ) -> bool:
        """Signature check only, for gating a request before other work."""
        try:
            return self.parser.verifier.validate(payload, signature)
        except Exception:
            logger.exception("Error validating webhook signature")
            return False
