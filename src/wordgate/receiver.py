"""Webhook 受信処理（署名検証 → デコード → ディスパッチ）"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass

import structlog

from .config import WordGateConfig
from .dispatcher import WebhookDispatcher
from .events import WebhookEvent, decode_event
from .exceptions import DecodeError, VerificationError, WebhookError, WebhookErrorCodes
from .signature import DEFAULT_MAX_AGE_SECONDS, SIGNATURE_HEADER, verify

logger = structlog.stdlib.get_logger(__name__)


@dataclass(frozen=True)
class WebhookResult:
    """1 リクエスト分の処理結果。status_code はそのまま HTTP レスポンスに使う。"""

    status_code: int
    event: WebhookEvent | None = None
    error: WebhookError | None = None

    @property
    def accepted(self) -> bool:
        return self.status_code == 200


class WebhookReceiver:
    """WordGate からの webhook リクエストを処理する。

    検証失敗やデコード失敗は例外ではなく WebhookResult として返す。
    ハンドラ内で発生した例外はそのまま伝播する。
    """

    def __init__(
        self,
        secret: bytes | str,
        dispatcher: WebhookDispatcher,
        max_age_seconds: int = DEFAULT_MAX_AGE_SECONDS,
        header_name: str = SIGNATURE_HEADER,
    ) -> None:
        if not secret:
            raise WebhookError(
                code=WebhookErrorCodes.INVALID_CONFIGURATION,
                message="webhook secret must not be empty",
            )
        self._secret = secret
        self._dispatcher = dispatcher
        self._max_age_seconds = max_age_seconds
        self._header_name = header_name.lower()

    @classmethod
    def from_config(
        cls, config: WordGateConfig, dispatcher: WebhookDispatcher
    ) -> WebhookReceiver:
        return cls(
            secret=config.webhook.secret,
            dispatcher=dispatcher,
            max_age_seconds=config.webhook.max_age_seconds,
            header_name=config.webhook.header_name,
        )

    def _find_header(self, headers: Mapping[str, str]) -> str | None:
        for name, value in headers.items():
            if name.lower() == self._header_name:
                return value
        return None

    async def handle(self, body: bytes, headers: Mapping[str, str]) -> WebhookResult:
        """リクエストボディとヘッダーを検証し、イベントをディスパッチする。

        ステータス: 200 受理 / 400 ヘッダー・ボディ不正 / 401 署名不一致 / 408 期限切れ
        """
        header_value = self._find_header(headers)
        try:
            if header_value is None:
                raise VerificationError(
                    code=WebhookErrorCodes.MALFORMED_HEADER,
                    message=f"missing {self._header_name} header",
                )
            verify(header_value, body, self._secret, self._max_age_seconds)
        except VerificationError as e:
            logger.warning("webhook_rejected", code=e.code, status_code=e.status_code)
            return WebhookResult(status_code=e.status_code, error=e)

        try:
            event = decode_event(body)
        except DecodeError as e:
            logger.warning("webhook_rejected", code=e.code, status_code=400)
            return WebhookResult(status_code=400, error=e)

        try:
            handled = await self._dispatcher.dispatch(event)
        except DecodeError as e:
            logger.warning(
                "webhook_rejected",
                code=e.code,
                status_code=400,
                event_type=event.event_type,
            )
            return WebhookResult(status_code=400, event=event, error=e)

        logger.info(
            "webhook_accepted",
            event_type=event.event_type,
            app_id=event.app_id,
            handled=handled,
        )
        return WebhookResult(status_code=200, event=event)
