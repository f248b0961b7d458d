"""WordGateClient 抽象基底クラス"""

from __future__ import annotations

from abc import ABC, abstractmethod

from .models import CreateOrderRequest, OrderDetail, OrderResponse


class WordGateClient(ABC):
    """WordGate API クライアント抽象基底クラス。"""

    @abstractmethod
    async def create_order(self, request: CreateOrderRequest) -> OrderResponse:
        """注文を作成する。"""
        ...

    @abstractmethod
    async def get_order(self, order_no: str) -> OrderDetail:
        """注文番号から注文詳細を取得する。"""
        ...
