"""例外型のユニットテスト"""

from wordgate.exceptions import (
    APIError,
    APIErrorCodes,
    DecodeError,
    VerificationError,
    WebhookError,
    WebhookErrorCodes,
    WordGateError,
)


def test_error_str_includes_code() -> None:
    """文字列表現にコードが含まれること。"""
    error = WebhookError(code="EXPIRED", message="too old")
    assert str(error) == "EXPIRED: too old"


def test_error_with_cause() -> None:
    cause = ValueError("root cause")
    error = DecodeError(code=WebhookErrorCodes.ENVELOPE_MALFORMED, message="bad", cause=cause)
    assert error.__cause__ is cause


def test_error_hierarchy() -> None:
    error = VerificationError(code=WebhookErrorCodes.EXPIRED, message="x")
    assert isinstance(error, WebhookError)
    assert isinstance(error, WordGateError)
    assert isinstance(APIError(code=APIErrorCodes.HTTP_ERROR, message="x"), WordGateError)


def test_verification_status_codes() -> None:
    """検証エラーコードごとの HTTP ステータス。"""
    cases = {
        WebhookErrorCodes.MALFORMED_HEADER: 400,
        WebhookErrorCodes.SIGNATURE_MISMATCH: 401,
        WebhookErrorCodes.EXPIRED: 408,
    }
    for code, status in cases.items():
        assert VerificationError(code=code, message="x").status_code == status


def test_api_error_code() -> None:
    error = APIError(code=APIErrorCodes.API_ERROR, message="invalid app", api_code=1001)
    assert error.api_code == 1001
    assert str(error) == "API_ERROR: invalid app"


def test_error_codes_constants() -> None:
    assert WebhookErrorCodes.MALFORMED_HEADER == "MALFORMED_HEADER"
    assert WebhookErrorCodes.EXPIRED == "EXPIRED"
    assert WebhookErrorCodes.SIGNATURE_MISMATCH == "SIGNATURE_MISMATCH"
    assert WebhookErrorCodes.ENVELOPE_MALFORMED == "ENVELOPE_MALFORMED"
    assert WebhookErrorCodes.PAYLOAD_TYPE_MISMATCH == "PAYLOAD_TYPE_MISMATCH"
    assert WebhookErrorCodes.INVALID_CONFIGURATION == "INVALID_CONFIGURATION"
