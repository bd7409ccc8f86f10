import asyncio
import contextlib
import logging
from datetime import UTC, datetime
from functools import lru_cache

from fastapi import Depends, FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from embedly_webhooks.core.config import get_settings
from embedly_webhooks.handlers import EmbedlyWebhookHandlers
from embedly_webhooks.middleware.body_size import BodySizeLimitMiddleware
from embedly_webhooks.schemas.host import (
    SignatureCheckRequest,
    SignatureCheckResponse,
    WebhookErrorResponse,
    WebhookResponse,
)
from embedly_webhooks.services.processor import WebhookProcessor

settings = get_settings()
logging.basicConfig(level=settings.log_level)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Embedly Webhook Receiver",
    description="Example host for verifying and dispatching Embedly webhooks",
    version="1.0.0",
)

app.add_middleware(BodySizeLimitMiddleware, max_size=settings.max_payload_size)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.origins,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"],
    allow_credentials=True,
)


# ---------- dependency ----------
@lru_cache
def get_webhook_processor() -> WebhookProcessor:
    handlers = EmbedlyWebhookHandlers()
    return WebhookProcessor.create(get_settings().webhook_secret, handlers.handler_set)


def _json(model, status_code: int = status.HTTP_200_OK) -> JSONResponse:
    return JSONResponse(
        status_code=status_code, content=model.model_dump(mode="json", by_alias=True)
    )


def _failure(error: str, status_code: int) -> JSONResponse:
    return _json(
        WebhookErrorResponse(error=error, processed_at=datetime.now(UTC)),
        status_code,
    )


DISCONNECT_POLL_INTERVAL = 0.5


async def _watch_disconnect(request: Request, cancel: asyncio.Event) -> None:
    """Set ``cancel`` once the client goes away."""
    while not cancel.is_set():
        if await request.is_disconnected():
            logger.info("Webhook client disconnected, cancelling handler")
            cancel.set()
            return
        await asyncio.sleep(DISCONNECT_POLL_INTERVAL)


@app.get("/health", include_in_schema=False)
async def health(processor: WebhookProcessor = Depends(get_webhook_processor)):
    return {
        "status": "ok",
        "handledEvents": processor.dispatcher.handler_set.event_types,
    }


# ---------- webhooks ----------
@app.post("/api/webhooks/embedly", tags=["webhooks"])
async def receive_webhook(
    request: Request,
    processor: WebhookProcessor = Depends(get_webhook_processor),
):
    # raw bytes: the signature covers the body exactly as sent
    raw = await request.body()
    # chunked bodies carry no Content-Length for the middleware to check
    if len(raw) > get_settings().max_payload_size:
        logger.warning(f"Rejected webhook payload of {len(raw)} bytes")
        return JSONResponse(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            content={"detail": "Payload too large"},
        )
    if not raw:
        logger.warning("Received empty webhook payload")
        return _failure("Empty payload", status.HTTP_400_BAD_REQUEST)

    signature = request.headers.get(get_settings().signature_header)
    if not signature:
        logger.warning("Missing webhook signature")
        return _failure("Missing signature", status.HTTP_400_BAD_REQUEST)

    if not processor.validate_webhook(raw, signature):
        return _failure("Invalid signature", status.HTTP_401_UNAUTHORIZED)

    cancel = asyncio.Event()
    watcher = asyncio.create_task(_watch_disconnect(request, cancel))
    try:
        result = await processor.process(raw, signature, cancel)
    finally:
        watcher.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await watcher

    if not result.success:
        logger.warning(f"Webhook processing failed: {result.error}")
        return _failure(result.error, status.HTTP_400_BAD_REQUEST)

    logger.info(f"Webhook processed successfully: {result.event_type} {result.event_id}")
    return _json(
        WebhookResponse(
            event_type=result.event_type,
            event_id=result.event_id,
            processed_at=datetime.now(UTC),
        )
    )


@app.post("/api/webhooks/test-signature", tags=["webhooks"])
def check_signature(
    data: SignatureCheckRequest,
    processor: WebhookProcessor = Depends(get_webhook_processor),
):
    now = datetime.now(UTC)
    if not data.payload or not data.signature:
        return _json(
            SignatureCheckResponse(
                is_valid=False,
                message="Payload and signature are required",
                timestamp=now,
            ),
            status.HTTP_400_BAD_REQUEST,
        )

    is_valid = processor.validate_webhook(data.payload, data.signature)
    logger.info(f"Signature validation test: {is_valid}")
    return _json(
        SignatureCheckResponse(
            is_valid=is_valid,
            message="Valid signature" if is_valid else "Invalid signature",
            timestamp=now,
        )
    )
