"""
Event-type routing for verified webhook envelopes.

Handlers are collected with a HandlerSetBuilder and frozen into a HandlerSet.
Once built, the table is never mutated, so concurrent dispatches read it
without locking.

Dispatcher.dispatch lets handler failures propagate (as HandlerError) so a
caller can answer the provider with an error and get the event redelivered.
WebhookProcessor.process is the never-raising alternative.
"""

import asyncio
import logging
from enum import Enum
from types import MappingProxyType
from typing import Awaitable, Callable, Mapping, Optional

from embedly_webhooks.core.errors import HandlerError
from embedly_webhooks.schemas.envelope import WebhookEnvelope

logger = logging.getLogger(__name__)

WebhookEventHandler = Callable[[WebhookEnvelope, asyncio.Event], Awaitable[None]]


class DispatchOutcome(str, Enum):
    COMPLETED = "completed"
    UNKNOWN_HANDLED = "unknown_handled"


class HandlerSet:
    """Immutable mapping of event type to handler."""

    def __init__(
        self,
        handlers: Mapping[str, WebhookEventHandler],
        unknown_handler: Optional[WebhookEventHandler] = None,
    ):
        self._handlers = MappingProxyType(dict(handlers))
        self._unknown_handler = unknown_handler

    def get(self, event_type: str) -> Optional[WebhookEventHandler]:
        return self._handlers.get(event_type)

    @property
    def unknown_handler(self) -> Optional[WebhookEventHandler]:
        return self._unknown_handler

    @property
    def event_types(self) -> list[str]:
        return sorted(self._handlers)

    def __contains__(self, event_type: object) -> bool:
        return event_type in self._handlers

    def __len__(self) -> int:
        return len(self._handlers)


class HandlerSetBuilder:
    """
    Collects registrations for a HandlerSet.

    Keys are exact, case-sensitive event types. Registering the same type
    twice replaces the earlier handler.

    Usage::

        builder = HandlerSetBuilder()
        builder.on("customer.created", handle_customer_created)

        @builder.handler("wallet.created")
        async def handle_wallet_created(envelope, cancel):
            ...

        handler_set = builder.build()
    """

    def __init__(self) -> None:
        self._handlers: dict[str, WebhookEventHandler] = {}
        self._unknown_handler: Optional[WebhookEventHandler] = None

    def on(self, event_type: str, handler: WebhookEventHandler) -> "HandlerSetBuilder":
        if not isinstance(event_type, str) or not event_type:
            raise ValueError("event_type must be a non-empty string")
        if not callable(handler):
            raise TypeError(f"handler for '{event_type}' is not callable")
        if event_type in self._handlers:
            logger.debug(f"Replacing handler for event type {event_type}")
        self._handlers[event_type] = handler
        return self

    def handler(
        self, event_type: str
    ) -> Callable[[WebhookEventHandler], WebhookEventHandler]:
        """Decorator form of ``on``."""

        def decorator(fn: WebhookEventHandler) -> WebhookEventHandler:
            self.on(event_type, fn)
            return fn

        return decorator

    def on_unknown(self, handler: WebhookEventHandler) -> "HandlerSetBuilder":
        if not callable(handler):
            raise TypeError("unknown-event handler is not callable")
        self._unknown_handler = handler
        return self

    def build(self) -> HandlerSet:
        return HandlerSet(self._handlers, self._unknown_handler)


class Dispatcher:
    def __init__(self, handler_set: HandlerSet):
        self.handler_set = handler_set

    async def dispatch(
        self, envelope: WebhookEnvelope, cancel: Optional[asyncio.Event] = None
    ) -> DispatchOutcome:
        """
        Run the handler registered for ``envelope.event_type``.

        Unregistered types are logged and treated as success. Any exception
        from a handler is re-raised as HandlerError, chained to the original.
        """
        if cancel is None:
            cancel = asyncio.Event()

        logger.info(
            f"Processing webhook event: {envelope.event_type} with ID: {envelope.id}"
        )
        handler = self.handler_set.get(envelope.event_type)

        if handler is None:
            logger.warning(
                f"Received unknown webhook event type: {envelope.event_type}"
            )
            if self.handler_set.unknown_handler is not None:
                await self._run(self.handler_set.unknown_handler, envelope, cancel)
            return DispatchOutcome.UNKNOWN_HANDLED

        await self._run(handler, envelope, cancel)
        logger.info(f"Successfully processed webhook event: {envelope.event_type}")
        return DispatchOutcome.COMPLETED

    async def _run(
        self,
        handler: WebhookEventHandler,
        envelope: WebhookEnvelope,
        cancel: asyncio.Event,
    ) -> None:
        try:
            await handler(envelope, cancel)
        except HandlerError:
            logger.exception(f"Error processing webhook event: {envelope.event_type}")
            raise
        except Exception as exc:
            logger.exception(
                f"Error processing webhook event: {envelope.event_type}: {exc}"
            )
            raise HandlerError(
                f"Handler for '{envelope.event_type}' failed: {exc}",
                event_type=envelope.event_type,
                event_id=envelope.id,
            ) from exc
