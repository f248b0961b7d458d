"""Webhook イベントエンベロープとイベントデータモデル（pydantic BaseModel）

エンベロープは即時にデコードし、data は event_type に応じて呼び出し側が
parse_data() で型を指定するまで未解釈のまま保持する。
"""

from __future__ import annotations

from datetime import datetime
from enum import StrEnum
from typing import Any, TypeVar

from pydantic import BaseModel, ConfigDict, Field, StrictInt, TypeAdapter, ValidationError

from .exceptions import DecodeError, WebhookErrorCodes

T = TypeVar("T")


class WebhookEventType(StrEnum):
    """既知の webhook イベント種別。

    WebhookEvent.event_type は任意の文字列を受け付ける。
    """

    ORDER_PAID = "order.paid"
    ORDER_CANCELLED = "order.cancelled"
    SUBSCRIPTION_CREATED = "subscription.created"
    SUBSCRIPTION_UPDATED = "subscription.updated"
    SUBSCRIPTION_CANCELLED = "subscription.cancelled"
    SUBSCRIPTION_RENEWED = "subscription.renewed"


class _EventData(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")


class OrderPaidData(_EventData):
    """order.paid のデータ。"""

    wordgate_order_no: str
    amount: int
    currency: str
    is_paid: bool = False
    paid_at: datetime | None = None
    app_id: int = 0


class OrderCancelledData(_EventData):
    """order.cancelled のデータ。"""

    wordgate_order_no: str
    amount: int = 0
    currency: str = ""
    cancelled_at: datetime | None = None
    app_id: int = 0
    reason: str = ""


class SubscriptionCreatedData(_EventData):
    """subscription.created のデータ。"""

    subscription_id: str
    wordgate_order_no: str = ""
    status: str
    billing_cycle: str = ""
    next_billing_date: datetime | None = None
    amount: int = 0
    currency: str = ""
    created_at: datetime
    app_id: int = 0


class SubscriptionUpdatedData(_EventData):
    """subscription.updated のデータ。"""

    subscription_id: str
    wordgate_order_no: str = ""
    status: str
    billing_cycle: str = ""
    next_billing_date: datetime | None = None
    amount: int = 0
    currency: str = ""
    updated_at: datetime
    app_id: int = 0
    changes: list[str] = Field(default_factory=list)


EVENT_DATA_TYPES: dict[str, type[BaseModel]] = {
    WebhookEventType.ORDER_PAID: OrderPaidData,
    WebhookEventType.ORDER_CANCELLED: OrderCancelledData,
    WebhookEventType.SUBSCRIPTION_CREATED: SubscriptionCreatedData,
    WebhookEventType.SUBSCRIPTION_UPDATED: SubscriptionUpdatedData,
}


class WebhookEvent(BaseModel):
    """Webhook イベントエンベロープ。"""

    model_config = ConfigDict(frozen=True)

    event_type: str = Field(min_length=1)
    app_id: StrictInt = Field(ge=0, lt=2**64)
    data: Any = None
    timestamp: StrictInt

    def parse_data(self, target: type[T]) -> T:
        """data を指定した型にデコードする。

        target には pydantic モデル・dataclass・TypedDict など
        pydantic が検証できる任意の型を指定できる。

        Raises:
            DecodeError: data が target の形に合わない場合 (PAYLOAD_TYPE_MISMATCH)
        """
        if self.data is None:
            raise DecodeError(
                code=WebhookErrorCodes.PAYLOAD_TYPE_MISMATCH,
                message=f"event {self.event_type!r} has no data",
            )
        try:
            return TypeAdapter(target).validate_python(self.data)
        except ValidationError as e:
            name = getattr(target, "__name__", repr(target))
            raise DecodeError(
                code=WebhookErrorCodes.PAYLOAD_TYPE_MISMATCH,
                message=f"cannot decode {self.event_type!r} data as {name}: {e}",
                cause=e,
            ) from e

    def parse_known_data(self) -> BaseModel | None:
        """既知のイベント種別なら対応するモデルにデコードする。未知の種別は None。"""
        target = EVENT_DATA_TYPES.get(self.event_type)
        if target is None:
            return None
        return self.parse_data(target)


def decode_event(raw: bytes | str) -> WebhookEvent:
    """JSON ボディからエンベロープをデコードする。

    Raises:
        DecodeError: JSON が不正、または必須フィールドが欠けている場合 (ENVELOPE_MALFORMED)
    """
    try:
        return WebhookEvent.model_validate_json(raw)
    except ValidationError as e:
        raise DecodeError(
            code=WebhookErrorCodes.ENVELOPE_MALFORMED,
            message=f"invalid webhook envelope: {e}",
            cause=e,
        ) from e
