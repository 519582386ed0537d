"""クライアント設定（pydantic BaseModel）と YAML 読み込み"""

from __future__ import annotations

import dataclasses
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, Field, ValidationError

from .context import Context
from .exceptions import ToggleError, ToggleErrorCodes


class LogSection(BaseModel):
    """ログ設定。"""

    level: str = "INFO"
    format: Literal["json", "text"] = "json"


class ToggleConfig(BaseModel):
    """トグル評価クライアントの設定。"""

    app_name: str
    environment: str = "default"
    log: LogSection = Field(default_factory=LogSection)

    def enrich(self, context: Context) -> Context:
        """app_name と environment が未設定なら設定値で補ったコンテキストを返す。

        渡されたコンテキストは変更しない。
        """
        return dataclasses.replace(
            context,
            app_name=context.app_name or self.app_name,
            environment=context.environment or self.environment,
        )


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    # override 優先。リストは置換する。
    result: dict[str, Any] = dict(base)
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ToggleError(
            code=ToggleErrorCodes.READ_FILE,
            message=f"Failed to read config file: {path}",
            cause=e,
        ) from e
    try:
        data = yaml.safe_load(text) or {}
    except yaml.YAMLError as e:
        raise ToggleError(
            code=ToggleErrorCodes.PARSE_YAML,
            message=f"Failed to parse YAML: {path}",
            cause=e,
        ) from e
    if not isinstance(data, dict):
        raise ToggleError(
            code=ToggleErrorCodes.PARSE_YAML,
            message=f"Config root must be a mapping: {path}",
        )
    return data


def load_config(base_path: Path, env_path: Path | None = None) -> ToggleConfig:
    """設定ファイルを読み込んで ToggleConfig を返す。

    base_path: ベース設定ファイルパス（必須）
    env_path: 環境別設定ファイルパス（オプション）。存在する場合はベースにマージ。
    """
    data = _read_yaml(base_path)
    if env_path is not None and env_path.exists():
        data = _deep_merge(data, _read_yaml(env_path))
    try:
        return ToggleConfig.model_validate(data)
    except ValidationError as e:
        raise ToggleError(
            code=ToggleErrorCodes.VALIDATION,
            message=f"Config validation failed: {e}",
            cause=e,
        ) from e
