import json
import os

import pytest

# Set test environment variables before the app reads its settings
os.environ.update(
    {
        "WEBHOOK_SECRET": "s3cret",
        "ALLOWED_ORIGINS": "http://localhost:3000",
        "MAX_PAYLOAD_SIZE": "4096",
    }
)

from fastapi.testclient import TestClient

from embedly_webhooks.core.config import get_settings
from embedly_webhooks.services.dispatcher import HandlerSetBuilder
from embedly_webhooks.services.processor import WebhookProcessor
from embedly_webhooks.services.signature import compute_signature

SECRET = "s3cret"


def sign(payload, secret: str = SECRET) -> str:
    return compute_signature(secret, payload)


@pytest.fixture
def secret() -> str:
    return SECRET


@pytest.fixture
def customer_payload() -> str:
    return json.dumps(
        {
            "id": "evt_12345",
            "event": "customer.created",
            "timestamp": "2024-01-15T10:30:00+00:00",
            "data": {
                "customerId": "cust_12345",
                "firstName": "John",
                "lastName": "Doe",
                "email": "john.doe@example.com",
            },
            "metadata": {"source": "api", "version": "1.0"},
        }
    )


@pytest.fixture
def calls() -> list:
    return []


@pytest.fixture
def processor(calls) -> WebhookProcessor:
    builder = HandlerSetBuilder()

    @builder.handler("customer.created")
    async def on_customer_created(envelope, cancel):
        calls.append(envelope)

    @builder.handler("payment.failed")
    async def on_payment_failed(envelope, cancel):
        raise RuntimeError("ledger unavailable")

    return WebhookProcessor.create(SECRET, builder.build())


@pytest.fixture
def settings():
    return get_settings()


@pytest.fixture
def app():
    from embedly_webhooks.main import app

    return app


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
