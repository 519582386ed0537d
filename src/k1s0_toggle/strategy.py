"""ストラテジー基底クラス"""

from __future__ import annotations

import random
from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from .constraints import check_constraint
from .context import Context
from .models import Constraint, DisabledResult, EnabledResult, StrategyResult, Variant, VariantDefinition
from .variant import RandomSource, select_variant_definition


class Strategy:
    """全ストラテジー共通の評価手順を持つ基底クラス。

    具象ストラテジーは is_enabled のみをオーバーライドする。
    制約チェックとバリアント割り当てはこのクラスが担う。
    """

    def __init__(
        self,
        name: str,
        return_value: bool = False,
        random_source: RandomSource | None = None,
    ) -> None:
        """
        Args:
            name: ストラテジー名。空文字列の場合は "unknown"。
            return_value: is_enabled の既定の戻り値
            random_source: スティッキネス値が無い場合の乱数源（0.0 以上 1.0 未満）
        """
        self.name = name or "unknown"
        self._return_value = return_value
        self._random_source = random_source or random.random

    def check_constraint(self, constraint: Constraint, context: Context) -> bool:
        """制約 1 件を評価する。"""
        return check_constraint(constraint, context)

    def check_constraints(
        self,
        context: Context,
        constraints: Iterable[Constraint | None] | None,
    ) -> bool:
        """全制約の AND を取る。None の要素は不一致として扱う。"""
        if constraints is None:
            return True
        for constraint in constraints:
            if constraint is None or not self.check_constraint(constraint, context):
                return False
        return True

    def is_enabled(self, parameters: Mapping[str, Any], context: Context) -> bool:
        """ストラテジー固有の有効判定。"""
        return self._return_value

    def is_enabled_with_constraints(
        self,
        parameters: Mapping[str, Any],
        context: Context,
        constraints: Iterable[Constraint | None] | None,
    ) -> bool:
        """制約が一致した場合に限り is_enabled を呼ぶ。"""
        return self.check_constraints(context, constraints) and self.is_enabled(
            parameters, context
        )

    def get_result(
        self,
        parameters: Mapping[str, Any] | None,
        context: Context,
        constraints: Iterable[Constraint | None] | None,
        variants: Sequence[VariantDefinition] | None = None,
    ) -> StrategyResult:
        """有効判定とバリアント割り当てを行う。

        Args:
            parameters: ストラテジーパラメータ（None は空）。"groupId" をバリアント選択のグループに使う。
            context: 評価コンテキスト
            constraints: 制約の列（None は制約なし）
            variants: ストラテジーに設定されたバリアント定義

        Returns:
            EnabledResult または DisabledResult
        """
        parameters = parameters or {}
        enabled = self.is_enabled_with_constraints(parameters, context, constraints)
        if not enabled:
            return DisabledResult()

        if variants:
            group_id = parameters.get("groupId")
            definition = select_variant_definition(
                "" if group_id is None else str(group_id),
                variants,
                context,
                self._random_source,
            )
            if definition is not None:
                return EnabledResult(
                    variant=Variant(
                        name=definition.name,
                        enabled=True,
                        payload=definition.payload,
                    )
                )
        return EnabledResult()
