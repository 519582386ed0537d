"""toggle ライブラリの例外型定義"""

from __future__ import annotations


class ToggleError(Exception):
    """toggle ライブラリのエラー基底クラス。

    定義のパースと設定読み込みのみが送出する。評価処理は送出しない。
    """

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


class ToggleErrorCodes:
    """ToggleError のエラーコード定数。"""

    INVALID_DEFINITION: str = "INVALID_DEFINITION"
    READ_FILE: str = "READ_FILE_ERROR"
    PARSE_YAML: str = "PARSE_YAML_ERROR"
    VALIDATION: str = "VALIDATION_ERROR"
