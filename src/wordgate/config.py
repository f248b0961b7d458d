"""SDK 設定（pydantic BaseModel）と YAML 読み込み"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, Field, ValidationError

from .exceptions import ConfigError, ConfigErrorCodes
from .signature import DEFAULT_MAX_AGE_SECONDS, SIGNATURE_HEADER


class WebhookSection(BaseModel):
    """Webhook 受信設定。"""

    secret: str = Field(default="", repr=False)
    max_age_seconds: int = Field(default=DEFAULT_MAX_AGE_SECONDS, gt=0)
    header_name: str = SIGNATURE_HEADER


class LogSection(BaseModel):
    """ログ設定。"""

    level: str = "INFO"
    format: Literal["json", "text"] = "json"


class WordGateConfig(BaseModel):
    """WordGate SDK 設定全体。"""

    app_code: str
    app_secret: str = Field(repr=False)
    base_url: str
    timeout_seconds: float = Field(default=30.0, gt=0)
    webhook: WebhookSection = Field(default_factory=WebhookSection)
    log: LogSection = Field(default_factory=LogSection)


def _read_yaml(path: Path) -> dict[str, Any]:
    """YAML ファイルを読み込む。"""
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(
            code=ConfigErrorCodes.READ_FILE,
            message=f"Failed to read config file: {path}",
            cause=e,
        ) from e
    try:
        data = yaml.safe_load(text) or {}
    except yaml.YAMLError as e:
        raise ConfigError(
            code=ConfigErrorCodes.PARSE_YAML,
            message=f"Failed to parse YAML: {path}",
            cause=e,
        ) from e
    if not isinstance(data, dict):
        raise ConfigError(
            code=ConfigErrorCodes.PARSE_YAML,
            message=f"Config root must be a mapping: {path}",
        )
    return data


def load_config(path: Path) -> WordGateConfig:
    """YAML 設定ファイルを読み込んで WordGateConfig を返す。"""
    data = _read_yaml(path)
    try:
        return WordGateConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(
            code=ConfigErrorCodes.VALIDATION,
            message=f"Config validation failed: {e}",
            cause=e,
        ) from e
