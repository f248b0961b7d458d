"""WordGate API HTTP クライアント実装"""

from __future__ import annotations

from typing import Any, Callable, TypeVar
from urllib.parse import quote

import httpx

from .client import WordGateClient
from .config import WordGateConfig
from .exceptions import APIError, APIErrorCodes
from .models import CreateOrderRequest, OrderDetail, OrderResponse

T = TypeVar("T")


class HttpWordGateClient(WordGateClient):
    """httpx を使った WordGate API クライアント。

    全リクエストに X-App-Code / X-App-Secret を付与し、
    ``{code, data, msg}`` 形式のレスポンスから data を取り出す。
    """

    def __init__(self, config: WordGateConfig) -> None:
        self._config = config
        self._headers = {
            "X-App-Code": config.app_code,
            "X-App-Secret": config.app_secret,
        }

    def _make_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self._config.base_url,
            headers=self._headers,
            timeout=self._config.timeout_seconds,
        )

    def _handle_error(self, resp: httpx.Response, context: str) -> None:
        if resp.status_code == 200:
            return
        try:
            body = resp.json()
        except ValueError:
            body = None
        if isinstance(body, dict) and body.get("message"):
            raise APIError(
                code=APIErrorCodes.API_ERROR,
                message=f"{context}: {body['message']}",
                api_code=body.get("code", resp.status_code),
            )
        if resp.status_code == 404:
            raise APIError(
                code=APIErrorCodes.NOT_FOUND,
                message=f"{context}: not found",
                api_code=404,
            )
        raise APIError(
            code=APIErrorCodes.HTTP_ERROR,
            message=f"{context}: HTTP {resp.status_code}: {resp.text}",
            api_code=resp.status_code,
        )

    def _unwrap(self, resp: httpx.Response, context: str) -> Any:
        try:
            envelope = resp.json()
        except ValueError as e:
            raise APIError(
                code=APIErrorCodes.HTTP_ERROR,
                message=f"{context}: failed to parse API response",
                cause=e,
            ) from e
        if not isinstance(envelope, dict):
            raise APIError(
                code=APIErrorCodes.HTTP_ERROR,
                message=f"{context}: unexpected API response",
            )
        code = envelope.get("code", 0)
        if code != 0:
            raise APIError(
                code=APIErrorCodes.API_ERROR,
                message=f"{context}: {envelope.get('msg', '')}",
                api_code=code,
            )
        return envelope.get("data")

    async def request_json(
        self,
        method: str,
        path: str,
        body: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
    ) -> Any:
        """認証付きリクエストを送り、API エンベロープの data を返す。

        Raises:
            APIError: HTTP エラー、API エラーコード、通信エラーの場合
        """
        context = f"{method} {path}"
        try:
            async with self._make_client() as client:
                resp = await client.request(method, path, json=body, params=params)
        except httpx.HTTPError as e:
            raise APIError(
                code=APIErrorCodes.HTTP_ERROR,
                message=f"{context}: {e}",
                cause=e,
            ) from e
        self._handle_error(resp, context)
        return self._unwrap(resp, context)

    async def create_order(self, request: CreateOrderRequest) -> OrderResponse:
        data = await self.request_json("POST", "/app/orders/create", body=request.to_dict())
        return _decode(OrderResponse.from_dict, data, "create_order")

    async def get_order(self, order_no: str) -> OrderDetail:
        data = await self.request_json("GET", f"/app/orders/{quote(order_no, safe='')}")
        return _decode(OrderDetail.from_dict, data, f"get_order({order_no})")


def _decode(from_dict: Callable[[dict[str, Any]], T], data: Any, context: str) -> T:
    if not isinstance(data, dict):
        raise APIError(
            code=APIErrorCodes.HTTP_ERROR,
            message=f"{context}: response has no data object",
        )
    try:
        return from_dict(data)
    except (AttributeError, KeyError, TypeError, ValueError) as e:
        raise APIError(
            code=APIErrorCodes.HTTP_ERROR,
            message=f"{context}: unexpected response data: {e!r}",
            cause=e,
        ) from e
