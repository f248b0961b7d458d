"""Webhook 署名の生成と検証。

ヘッダー形式::

    X-Webhook-Signature: t=<unix_seconds>,sha256=<hex>

署名対象は ``"<unix_seconds>." + <受信したボディのバイト列>``。ボディは正規化しないため、
送信側と受信側はワイヤ上のバイト列そのものを署名・検証する必要がある。
"""

from __future__ import annotations

import hashlib
import hmac
import re
import time
from dataclasses import dataclass

from .exceptions import VerificationError, WebhookError, WebhookErrorCodes

SIGNATURE_HEADER = "X-Webhook-Signature"
DEFAULT_MAX_AGE_SECONDS = 300

_TIMESTAMP_PREFIX = "t="
_SIGNATURE_PREFIX = "sha256="
_DIGITS = re.compile(r"[0-9]{1,19}")
_MAX_TIMESTAMP = 2**63 - 1


def _secret_bytes(secret: bytes | str) -> bytes:
    key = secret.encode() if isinstance(secret, str) else secret
    if not key:
        raise WebhookError(
            code=WebhookErrorCodes.INVALID_CONFIGURATION,
            message="webhook secret must not be empty",
        )
    return key


def sign(timestamp: int, body: bytes, secret: bytes | str) -> str:
    """タイムスタンプとボディの HMAC-SHA256 署名（小文字 16 進）を生成する。

    Raises:
        WebhookError: secret が空の場合 (INVALID_CONFIGURATION)
    """
    message = str(timestamp).encode() + b"." + body
    return hmac.new(_secret_bytes(secret), message, hashlib.sha256).hexdigest()


def build_header(timestamp: int, body: bytes, secret: bytes | str) -> str:
    """``t=<timestamp>,sha256=<signature>`` 形式のヘッダー値を生成する。"""
    return SignedHeader(timestamp, sign(timestamp, body, secret)).to_header()


@dataclass(frozen=True)
class SignedHeader:
    """パース済みの署名ヘッダー。"""

    timestamp: int
    signature: str

    @classmethod
    def parse(cls, header_value: str) -> SignedHeader:
        """ヘッダー値をパースする。

        Raises:
            VerificationError: 形式が不正な場合 (MALFORMED_HEADER)
        """
        parts = header_value.split(",")
        if len(parts) != 2:
            raise _malformed(f"expected 2 fields, got {len(parts)}")

        timestamp: int | None = None
        signature: str | None = None
        for part in parts:
            if part.startswith(_TIMESTAMP_PREFIX):
                value = part[len(_TIMESTAMP_PREFIX) :]
                if timestamp is not None or not _DIGITS.fullmatch(value):
                    raise _malformed("invalid timestamp field")
                timestamp = int(value)
            elif part.startswith(_SIGNATURE_PREFIX):
                if signature is not None:
                    raise _malformed("duplicate signature field")
                signature = part[len(_SIGNATURE_PREFIX) :]
            else:
                raise _malformed("unrecognized field")

        if timestamp is None or not 0 < timestamp <= _MAX_TIMESTAMP:
            raise _malformed("missing or out-of-range timestamp")
        if not signature:
            raise _malformed("missing signature")
        return cls(timestamp=timestamp, signature=signature)

    def to_header(self) -> str:
        return f"{_TIMESTAMP_PREFIX}{self.timestamp},{_SIGNATURE_PREFIX}{self.signature}"


def _malformed(reason: str) -> VerificationError:
    return VerificationError(
        code=WebhookErrorCodes.MALFORMED_HEADER,
        message=f"malformed signature header: {reason}",
    )


def verify(
    header_value: str,
    body: bytes,
    secret: bytes | str,
    max_age_seconds: int = DEFAULT_MAX_AGE_SECONDS,
    now: int | None = None,
) -> SignedHeader:
    """署名ヘッダーを検証し、パース済みヘッダーを返す。

    検証順序: パース → 鮮度 → 再計算 → 定数時間比較。
    未来方向のタイムスタンプも max_age_seconds を超えれば期限切れとして扱う。

    Args:
        header_value: 受信した X-Webhook-Signature ヘッダー値
        body: 受信したボディ（未加工のバイト列）
        secret: 共有シークレット
        max_age_seconds: 許容する経過秒数
        now: 現在時刻の Unix 秒（省略時は time.time()）

    Raises:
        WebhookError: secret が空の場合 (INVALID_CONFIGURATION)
        VerificationError: MALFORMED_HEADER / EXPIRED / SIGNATURE_MISMATCH
    """
    key = _secret_bytes(secret)
    header = SignedHeader.parse(header_value)

    current = int(time.time()) if now is None else now
    age = current - header.timestamp
    if age > max_age_seconds or -age > max_age_seconds:
        raise VerificationError(
            code=WebhookErrorCodes.EXPIRED,
            message=f"signature timestamp outside {max_age_seconds}s window (age={age}s)",
        )

    expected = sign(header.timestamp, body, key)
    if not hmac.compare_digest(expected.encode(), header.signature.encode()):
        raise VerificationError(
            code=WebhookErrorCodes.SIGNATURE_MISMATCH,
            message="signature mismatch",
        )
    return header


def verify_signature(
    header_value: str,
    body: bytes,
    secret: bytes | str,
    max_age_seconds: int = DEFAULT_MAX_AGE_SECONDS,
    now: int | None = None,
) -> bool:
    """署名ヘッダーを検証し、受理できる場合に True を返す。"""
    try:
        verify(header_value, body, secret, max_age_seconds, now)
    except VerificationError:
        return False
    return True
