"""WebhookDispatcher のユニットテスト"""

from typing import Any

import pytest
from wordgate.dispatcher import WebhookDispatcher
from wordgate.events import OrderPaidData, WebhookEvent, WebhookEventType
from wordgate.exceptions import DecodeError, WebhookErrorCodes


def make_event(event_type: str, data: Any) -> WebhookEvent:
    return WebhookEvent(event_type=event_type, app_id=1, data=data, timestamp=1734315480)


ORDER_PAID = make_event(
    "order.paid",
    {"wordgate_order_no": "ORDER123", "amount": 9900, "currency": "USD"},
)


async def test_dispatch_parses_registered_type() -> None:
    """既知の種別は既定モデルにデコードされてハンドラに渡ること。"""
    dispatcher = WebhookDispatcher()
    received: list[Any] = []

    @dispatcher.on(WebhookEventType.ORDER_PAID)
    async def on_paid(event: WebhookEvent, data: OrderPaidData) -> None:
        received.append(data)

    assert await dispatcher.dispatch(ORDER_PAID) is True
    assert isinstance(received[0], OrderPaidData)
    assert received[0].wordgate_order_no == "ORDER123"


async def test_dispatch_with_explicit_data_type() -> None:
    dispatcher = WebhookDispatcher()
    received: list[Any] = []

    async def handler(event: WebhookEvent, data: dict) -> None:
        received.append(data)

    dispatcher.register("order.paid", handler, data_type=dict)
    await dispatcher.dispatch(ORDER_PAID)
    assert received == [ORDER_PAID.data]


async def test_dispatch_unknown_type_passes_raw_data() -> None:
    """既定モデルのない種別には未加工の data が渡ること。"""
    dispatcher = WebhookDispatcher()
    received: list[Any] = []

    async def handler(event: WebhookEvent, data: Any) -> None:
        received.append(data)

    dispatcher.register("membership.activated", handler)
    await dispatcher.dispatch(make_event("membership.activated", {"tier_code": "PREMIUM"}))
    assert received == [{"tier_code": "PREMIUM"}]


async def test_dispatch_unhandled_without_fallback() -> None:
    dispatcher = WebhookDispatcher()
    assert await dispatcher.dispatch(ORDER_PAID) is False


async def test_dispatch_unhandled_uses_fallback() -> None:
    received: list[WebhookEvent] = []

    async def fallback(event: WebhookEvent) -> None:
        received.append(event)

    dispatcher = WebhookDispatcher(fallback=fallback)
    assert await dispatcher.dispatch(ORDER_PAID) is False
    assert received == [ORDER_PAID]


async def test_dispatch_payload_mismatch() -> None:
    """data が登録型に合わない場合は DecodeError が伝播しハンドラは呼ばれないこと。"""
    dispatcher = WebhookDispatcher()
    called = False

    async def handler(event: WebhookEvent, data: OrderPaidData) -> None:
        nonlocal called
        called = True

    dispatcher.register("order.paid", handler)
    with pytest.raises(DecodeError) as exc_info:
        await dispatcher.dispatch(make_event("order.paid", {"reason": "x"}))
    assert exc_info.value.code == WebhookErrorCodes.PAYLOAD_TYPE_MISMATCH
    assert called is False


async def test_register_duplicate_raises() -> None:
    dispatcher = WebhookDispatcher()

    async def handler(event: WebhookEvent, data: Any) -> None: ...

    dispatcher.register("order.paid", handler)
    with pytest.raises(ValueError):
        dispatcher.register("order.paid", handler)


async def test_unregister() -> None:
    dispatcher = WebhookDispatcher()

    async def handler(event: WebhookEvent, data: Any) -> None: ...

    dispatcher.register("order.paid", handler)
    assert dispatcher.handles("order.paid")
    dispatcher.unregister("order.paid")
    assert not dispatcher.handles("order.paid")
    assert await dispatcher.dispatch(ORDER_PAID) is False
