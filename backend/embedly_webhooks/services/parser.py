import logging
from typing import Optional, TypeVar

from pydantic import ValidationError

from embedly_webhooks.core.errors import AuthenticationError, MalformedPayloadError
from embedly_webhooks.schemas.envelope import WebhookEnvelope
from embedly_webhooks.services.signature import Payload, SignatureVerifier

logger = logging.getLogger(__name__)

T = TypeVar("T")


class EventParser:
    """Turns a signed raw payload into a WebhookEnvelope.

    The signature is always checked against the raw bytes before any JSON
    decoding happens.
    """

    def __init__(self, verifier: SignatureVerifier):
        self.verifier = verifier

    def parse_event(
        self, payload: Optional[Payload], signature: Optional[str]
    ) -> WebhookEnvelope:
        if not self.verifier.validate(payload, signature):
            raise AuthenticationError()

        try:
            envelope = WebhookEnvelope.model_validate_json(payload)
        except ValidationError as exc:
            logger.warning(f"Verified webhook payload could not be parsed: {exc}")
            raise MalformedPayloadError() from exc

        logger.debug(
            f"Parsed webhook event id={envelope.id} type={envelope.event_type}"
        )
        return envelope

    def parse_event_data(
        self, payload: Optional[Payload], signature: Optional[str], shape: type[T]
    ) -> Optional[T]:
        """
        Parse the event and decode its ``data`` as ``shape``.

        Signature and parse failures raise as in ``parse_event``; a ``data``
        value that does not fit ``shape`` returns None.
        """
        return self.parse_event(payload, signature).get_data(shape)
