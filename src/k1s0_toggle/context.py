"""評価コンテキストとフィールド解決"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

# 定義上のフィールド名 -> Context の属性名
_WELL_KNOWN_FIELDS: dict[str, str] = {
    "userId": "user_id",
    "sessionId": "session_id",
    "remoteAddress": "remote_address",
    "environment": "environment",
    "appName": "app_name",
    "currentTime": "current_time",
}


@dataclass(frozen=True)
class Context:
    """評価ごとに呼び出し側が渡す読み取り専用コンテキスト。"""

    user_id: str | None = None
    session_id: str | None = None
    remote_address: str | None = None
    environment: str | None = None
    app_name: str | None = None
    current_time: datetime | str | None = None
    properties: Mapping[str, Any] = field(default_factory=dict)


def _is_present(value: Any) -> bool:
    return value is not None and value != ""


def resolve_context_value(context: Context, field_name: str) -> Any | None:
    """フィールド名をコンテキスト値に解決する。

    既知フィールドを先に参照し、無ければ properties を参照する。
    None と空文字列は未設定として扱う。
    """
    attr = _WELL_KNOWN_FIELDS.get(field_name)
    if attr is not None:
        value = getattr(context, attr)
        if _is_present(value):
            return value
    value = context.properties.get(field_name)
    if _is_present(value):
        return value
    return None
