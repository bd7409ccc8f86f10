import asyncio

import pytest

from embedly_webhooks.core.errors import HandlerError
from embedly_webhooks.schemas.envelope import WebhookEnvelope
from embedly_webhooks.services.dispatcher import (
    Dispatcher,
    DispatchOutcome,
    HandlerSetBuilder,
)


def _envelope(event_type: str = "customer.created", event_id: str = "evt_1"):
    return WebhookEnvelope(id=event_id, event=event_type, data={"customerId": "c1"})


async def test_registered_handler_runs_exactly_once():
    seen = []

    async def on_created(envelope, cancel):
        seen.append(envelope.id)

    dispatcher = Dispatcher(HandlerSetBuilder().on("customer.created", on_created).build())
    outcome = await dispatcher.dispatch(_envelope())

    assert outcome is DispatchOutcome.COMPLETED
    assert seen == ["evt_1"]


async def test_only_matching_handler_runs():
    seen = []
    builder = HandlerSetBuilder()

    @builder.handler("customer.created")
    async def on_created(envelope, cancel):
        seen.append("created")

    @builder.handler("customer.updated")
    async def on_updated(envelope, cancel):
        seen.append("updated")

    await Dispatcher(builder.build()).dispatch(_envelope("customer.updated"))
    assert seen == ["updated"]


async def test_unknown_event_type_is_a_no_op_success(caplog):
    seen = []

    async def on_created(envelope, cancel):
        seen.append(envelope)

    dispatcher = Dispatcher(HandlerSetBuilder().on("customer.created", on_created).build())
    outcome = await dispatcher.dispatch(_envelope("brand.new.event"))

    assert outcome is DispatchOutcome.UNKNOWN_HANDLED
    assert seen == []
    assert "unknown webhook event type: brand.new.event" in caplog.text


async def test_matching_is_exact_and_case_sensitive():
    seen = []

    async def on_created(envelope, cancel):
        seen.append(envelope)

    dispatcher = Dispatcher(HandlerSetBuilder().on("customer.created", on_created).build())

    for event_type in ["Customer.Created", "customer", "customer.created.v2", "customer.*"]:
        assert await dispatcher.dispatch(_envelope(event_type)) is DispatchOutcome.UNKNOWN_HANDLED
    assert seen == []


async def test_unknown_handler_receives_unmatched_events():
    unmatched = []

    async def fallback(envelope, cancel):
        unmatched.append(envelope.event_type)

    dispatcher = Dispatcher(HandlerSetBuilder().on_unknown(fallback).build())
    outcome = await dispatcher.dispatch(_envelope("checkout.expired"))

    assert outcome is DispatchOutcome.UNKNOWN_HANDLED
    assert unmatched == ["checkout.expired"]


async def test_last_registration_wins():
    seen = []

    async def first(envelope, cancel):
        seen.append("first")

    async def second(envelope, cancel):
        seen.append("second")

    handler_set = (
        HandlerSetBuilder()
        .on("customer.created", first)
        .on("customer.created", second)
        .build()
    )
    await Dispatcher(handler_set).dispatch(_envelope())

    assert seen == ["second"]
    assert len(handler_set) == 1


async def test_handler_exception_propagates_as_handler_error():
    async def broken(envelope, cancel):
        raise RuntimeError("database down")

    dispatcher = Dispatcher(HandlerSetBuilder().on("customer.created", broken).build())

    with pytest.raises(HandlerError) as exc_info:
        await dispatcher.dispatch(_envelope(event_id="evt_42"))

    err = exc_info.value
    assert isinstance(err.__cause__, RuntimeError)
    assert err.event_type == "customer.created"
    assert err.event_id == "evt_42"
    assert "database down" in str(err)


async def test_handler_error_raised_by_handler_is_not_rewrapped():
    original = HandlerError("retry later", event_type="customer.created")

    async def refuses(envelope, cancel):
        raise original

    dispatcher = Dispatcher(HandlerSetBuilder().on("customer.created", refuses).build())

    with pytest.raises(HandlerError) as exc_info:
        await dispatcher.dispatch(_envelope())
    assert exc_info.value is original


async def test_unknown_handler_failure_propagates():
    async def fallback(envelope, cancel):
        raise ValueError("nope")

    dispatcher = Dispatcher(HandlerSetBuilder().on_unknown(fallback).build())
    with pytest.raises(HandlerError):
        await dispatcher.dispatch(_envelope("anything.else"))


async def test_cancellation_signal_reaches_handler():
    received = []

    async def on_created(envelope, cancel):
        received.append(cancel)

    dispatcher = Dispatcher(HandlerSetBuilder().on("customer.created", on_created).build())

    cancel = asyncio.Event()
    cancel.set()
    await dispatcher.dispatch(_envelope(), cancel)
    await dispatcher.dispatch(_envelope())

    assert received[0] is cancel
    assert isinstance(received[1], asyncio.Event)
    assert not received[1].is_set()


async def test_handler_observing_cancel_stops_early():
    steps = []

    async def long_running(envelope, cancel):
        for i in range(10):
            if cancel.is_set():
                return
            steps.append(i)
            if i == 2:
                cancel.set()
            await asyncio.sleep(0)

    dispatcher = Dispatcher(HandlerSetBuilder().on("customer.created", long_running).build())
    await dispatcher.dispatch(_envelope(), asyncio.Event())

    assert steps == [0, 1, 2]


async def test_concurrent_dispatches_share_handler_set():
    seen = []

    async def on_created(envelope, cancel):
        await asyncio.sleep(0)
        seen.append(envelope.id)

    dispatcher = Dispatcher(HandlerSetBuilder().on("customer.created", on_created).build())
    await asyncio.gather(*(dispatcher.dispatch(_envelope(event_id=f"evt_{i}")) for i in range(20)))

    assert sorted(seen) == sorted(f"evt_{i}" for i in range(20))


def test_built_set_is_unaffected_by_later_registrations():
    async def handler(envelope, cancel):
        pass

    builder = HandlerSetBuilder().on("customer.created", handler)
    handler_set = builder.build()
    builder.on("wallet.created", handler)

    assert "wallet.created" not in handler_set
    assert handler_set.event_types == ["customer.created"]


def test_handler_set_table_is_read_only():
    async def handler(envelope, cancel):
        pass

    handler_set = HandlerSetBuilder().on("customer.created", handler).build()
    with pytest.raises(TypeError):
        handler_set._handlers["wallet.created"] = handler


@pytest.mark.parametrize("event_type", ["", None, 42])
def test_rejects_invalid_event_type(event_type):
    async def handler(envelope, cancel):
        pass

    with pytest.raises(ValueError):
        HandlerSetBuilder().on(event_type, handler)


def test_rejects_non_callable_handler():
    with pytest.raises(TypeError):
        HandlerSetBuilder().on("customer.created", "not a function")
    with pytest.raises(TypeError):
        HandlerSetBuilder().on_unknown(None)
