"""注文 API のデータモデル"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class OrderItem:
    """注文明細（リクエスト）。"""

    item_code: str
    quantity: int = 1
    item_type: str = ""

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"item_code": self.item_code, "quantity": self.quantity}
        if self.item_type:
            data["item_type"] = self.item_type
        return data


@dataclass
class OrderCustomer:
    """注文者情報。provider は email / phone / wechat など。"""

    provider: str
    uid: str


@dataclass
class CreateOrderRequest:
    """注文作成リクエスト。"""

    items: list[OrderItem]
    customer: OrderCustomer
    coupon_code: str = ""
    client_ip: str = ""
    address_id: int = 0
    notify_url: str = ""  # webhook の送信先
    redirect_url: str = ""

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "items": [item.to_dict() for item in self.items],
            "customer": {"provider": self.customer.provider, "uid": self.customer.uid},
        }
        for key in ("coupon_code", "client_ip", "address_id", "notify_url", "redirect_url"):
            value = getattr(self, key)
            if value:
                data[key] = value
        return data


@dataclass
class OrderResponse:
    """注文作成レスポンス。金額はセント単位。"""

    order_no: str
    amount: int
    currency: str
    is_paid: bool = False
    paid_at: str | None = None
    pay_url: str = ""
    redirect_url: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> OrderResponse:
        return cls(
            order_no=data["order_no"],
            amount=data.get("amount", 0),
            currency=data.get("currency", ""),
            is_paid=data.get("is_paid", False),
            paid_at=data.get("paid_at"),
            pay_url=data.get("pay_url", ""),
            redirect_url=data.get("redirect_url", ""),
        )


@dataclass
class OrderItemInfo:
    """注文明細（レスポンス）。"""

    item_id: int
    item_name: str
    quantity: int
    unit_price: int
    subtotal: int
    item_type: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> OrderItemInfo:
        return cls(
            item_id=data.get("item_id", 0),
            item_name=data.get("item_name", ""),
            quantity=data.get("quantity", 0),
            unit_price=data.get("unit_price", 0),
            subtotal=data.get("subtotal", 0),
            item_type=data.get("item_type", ""),
        )


@dataclass
class OrderDetail:
    """注文詳細。"""

    id: int
    order_no: str
    user_id: int
    amount: int
    currency: str
    is_paid: bool
    created_at: str = ""
    paid_at: str | None = None
    coupon_code: str = ""
    discount_amount: int = 0
    items: list[OrderItemInfo] = field(default_factory=list)
    pay_url: str = ""
    notify_url: str = ""
    redirect_url: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> OrderDetail:
        """API レスポンス辞書から OrderDetail を生成する。"""
        return cls(
            id=data.get("id", 0),
            order_no=data["order_no"],
            user_id=data.get("user_id", 0),
            amount=data.get("amount", 0),
            currency=data.get("currency", ""),
            is_paid=data.get("is_paid", False),
            created_at=data.get("created_at", ""),
            paid_at=data.get("paid_at"),
            coupon_code=data.get("coupon_code", ""),
            discount_amount=data.get("discount_amount", 0),
            items=[OrderItemInfo.from_dict(i) for i in data.get("items") or []],
            pay_url=data.get("pay_url", ""),
            notify_url=data.get("notify_url", ""),
            redirect_url=data.get("redirect_url", ""),
        )
