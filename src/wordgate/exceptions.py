"""wordgate SDK の例外型定義"""

from __future__ import annotations


class WordGateError(Exception):
    """wordgate SDK のエラー基底クラス。"""

    def __init__(
        self,
        code: str,
        message: str,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        if cause is not None:
            self.__cause__ = cause

    def __str__(self) -> str:
        return f"{self.code}: {super().__str__()}"


class WebhookError(WordGateError):
    """Webhook の署名・デコード処理のエラー。"""


class VerificationError(WebhookError):
    """署名ヘッダーの検証に失敗したことを表すエラー。"""

    @property
    def status_code(self) -> int:
        """受信側が返すべき HTTP ステータスコード。"""
        return _VERIFICATION_STATUS.get(self.code, 400)


class DecodeError(WebhookError):
    """イベントエンベロープまたはペイロードのデコードエラー。"""


class APIError(WordGateError):
    """WordGate API が返したエラー。

    api_code はレスポンスボディの code（取得できない場合は HTTP ステータス）。
    """

    def __init__(
        self,
        code: str,
        message: str,
        api_code: int = 0,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(code, message, cause)
        self.api_code = api_code


class ConfigError(WordGateError):
    """設定読み込みのエラー。"""


class WebhookErrorCodes:
    """WebhookError のエラーコード定数。"""

    MALFORMED_HEADER: str = "MALFORMED_HEADER"
    EXPIRED: str = "EXPIRED"
    SIGNATURE_MISMATCH: str = "SIGNATURE_MISMATCH"
    ENVELOPE_MALFORMED: str = "ENVELOPE_MALFORMED"
    PAYLOAD_TYPE_MISMATCH: str = "PAYLOAD_TYPE_MISMATCH"
    INVALID_CONFIGURATION: str = "INVALID_CONFIGURATION"


class APIErrorCodes:
    """APIError のエラーコード定数。"""

    API_ERROR: str = "API_ERROR"
    HTTP_ERROR: str = "HTTP_ERROR"
    NOT_FOUND: str = "NOT_FOUND"


class ConfigErrorCodes:
    """ConfigError のエラーコード定数。"""

    READ_FILE: str = "READ_FILE_ERROR"
    PARSE_YAML: str = "PARSE_YAML_ERROR"
    VALIDATION: str = "VALIDATION_ERROR"


_VERIFICATION_STATUS: dict[str, int] = {
    WebhookErrorCodes.MALFORMED_HEADER: 400,
    WebhookErrorCodes.SIGNATURE_MISMATCH: 401,
    WebhookErrorCodes.EXPIRED: 408,
}
