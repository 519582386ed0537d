"""組み込みストラテジーの登録"""

from __future__ import annotations

from collections.abc import Iterable

from .strategy import Strategy


class DefaultStrategy(Strategy):
    """常に有効なストラテジー。"""

    def __init__(self) -> None:
        super().__init__("default", True)


class UnknownStrategy(Strategy):
    """未登録のストラテジー名に対して使う常に無効なストラテジー。"""

    def __init__(self) -> None:
        super().__init__("unknown", False)


def default_strategies() -> list[Strategy]:
    """組み込みストラテジーの一覧を返す。"""
    return [DefaultStrategy()]


def find_strategy(strategies: Iterable[Strategy], name: str) -> Strategy:
    """名前でストラテジーを探す。見つからなければ UnknownStrategy。"""
    for strategy in strategies:
        if strategy.name == name:
            return strategy
    return UnknownStrategy()
