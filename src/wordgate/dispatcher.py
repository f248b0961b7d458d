"""event_type ごとの webhook ハンドラ振り分け"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Awaitable, Callable

import structlog

from .events import EVENT_DATA_TYPES, WebhookEvent

WebhookHandler = Callable[[WebhookEvent, Any], Awaitable[None]]
FallbackHandler = Callable[[WebhookEvent], Awaitable[None]]

logger = structlog.stdlib.get_logger(__name__)


@dataclass(frozen=True)
class _Route:
    handler: WebhookHandler
    data_type: type | None


class WebhookDispatcher:
    """イベント種別ごとにハンドラを 1 つ登録し、デコード済みデータで呼び出す。

    ハンドラは (event, data) を受け取る。data は登録時に指定した型、
    省略時は EVENT_DATA_TYPES の既定モデル、どちらも無ければ未加工の data。
    """

    def __init__(self, fallback: FallbackHandler | None = None) -> None:
        self._routes: dict[str, _Route] = {}
        self._fallback = fallback

    def register(
        self,
        event_type: str,
        handler: WebhookHandler,
        data_type: type | None = None,
    ) -> None:
        """ハンドラを登録する。

        Raises:
            ValueError: 同じ event_type に登録済みの場合
        """
        if event_type in self._routes:
            raise ValueError(f"handler already registered for {event_type!r}")
        self._routes[event_type] = _Route(
            handler=handler,
            data_type=data_type or EVENT_DATA_TYPES.get(event_type),
        )

    def on(
        self, event_type: str, data_type: type | None = None
    ) -> Callable[[WebhookHandler], WebhookHandler]:
        """register() のデコレータ版。"""

        def decorator(handler: WebhookHandler) -> WebhookHandler:
            self.register(event_type, handler, data_type)
            return handler

        return decorator

    def unregister(self, event_type: str) -> None:
        self._routes.pop(event_type, None)

    def handles(self, event_type: str) -> bool:
        return event_type in self._routes

    async def dispatch(self, event: WebhookEvent) -> bool:
        """イベントをハンドラに渡す。登録ハンドラで処理した場合は True。

        Raises:
            DecodeError: data が登録された型に合わない場合 (PAYLOAD_TYPE_MISMATCH)
        """
        route = self._routes.get(event.event_type)
        if route is None:
            if self._fallback is not None:
                await self._fallback(event)
            else:
                logger.info(
                    "webhook_event_unhandled",
                    event_type=event.event_type,
                    app_id=event.app_id,
                )
            return False

        data = event.data if route.data_type is None else event.parse_data(route.data_type)
        await route.handler(event, data)
        return True
