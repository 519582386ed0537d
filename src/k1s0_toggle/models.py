"""トグル定義と評価結果のデータモデル"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any


class Operator(str, Enum):
    """制約演算子。"""

    IN = "IN"
    NOT_IN = "NOT_IN"
    STR_STARTS_WITH = "STR_STARTS_WITH"
    STR_ENDS_WITH = "STR_ENDS_WITH"
    STR_CONTAINS = "STR_CONTAINS"
    NUM_EQ = "NUM_EQ"
    NUM_GT = "NUM_GT"
    NUM_GTE = "NUM_GTE"
    NUM_LT = "NUM_LT"
    NUM_LTE = "NUM_LTE"
    DATE_AFTER = "DATE_AFTER"
    DATE_BEFORE = "DATE_BEFORE"
    SEMVER_EQ = "SEMVER_EQ"
    SEMVER_GT = "SEMVER_GT"
    SEMVER_LT = "SEMVER_LT"


@dataclass(frozen=True)
class TextValue:
    """文字列として受け取った制約値。"""

    value: str


@dataclass(frozen=True)
class NumberValue:
    """数値として受け取った制約値。"""

    value: float


@dataclass(frozen=True)
class DateValue:
    """日時として受け取った制約値。"""

    value: datetime


ConstraintValue = TextValue | NumberValue | DateValue


def constraint_value(raw: Any) -> ConstraintValue | None:
    """生のスカラー値を ConstraintValue に包む。型変換は行わない。"""
    if raw is None:
        return None
    if isinstance(raw, (TextValue, NumberValue, DateValue)):
        return raw
    if isinstance(raw, datetime):
        return DateValue(raw)
    if isinstance(raw, bool):
        return TextValue(str(raw).lower())
    if isinstance(raw, (int, float)):
        return NumberValue(float(raw))
    return TextValue(str(raw))


@dataclass(frozen=True)
class Constraint:
    """ストラテジーの有効化を制限するルール 1 件。

    operator が Operator に存在しない文字列の場合、その制約は常に不一致となる。
    """

    context_name: str
    operator: Operator | str
    values: tuple[str, ...] = ()
    inverted: bool = False
    value: ConstraintValue | None = None
    case_insensitive: bool = False


@dataclass(frozen=True)
class Segment:
    """再利用可能な制約グループ。"""

    id: int
    constraints: tuple[Constraint, ...] = ()


@dataclass(frozen=True)
class Override:
    """コンテキスト値によるバリアント強制指定。"""

    context_name: str
    values: tuple[str, ...] = ()


@dataclass(frozen=True)
class VariantPayload:
    """バリアントに付随するペイロード。"""

    type: str
    value: str


@dataclass(frozen=True)
class VariantDefinition:
    """バリアント定義。weight 0 のバリアントはオーバーライド経由でのみ選ばれる。"""

    name: str
    weight: int
    stickiness: str = "default"
    overrides: tuple[Override, ...] = ()
    payload: VariantPayload | None = None


@dataclass(frozen=True)
class Variant:
    """評価結果のバリアント。"""

    name: str
    enabled: bool
    payload: VariantPayload | None = None
    feature_enabled: bool | None = None


@dataclass(frozen=True)
class EnabledResult:
    """ストラテジーが有効と判定された結果。"""

    variant: Variant | None = None

    @property
    def enabled(self) -> bool:
        return True


@dataclass(frozen=True)
class DisabledResult:
    """ストラテジーが無効と判定された結果。"""

    @property
    def enabled(self) -> bool:
        return False


StrategyResult = EnabledResult | DisabledResult


@dataclass
class StrategyDefinition:
    """トグルに設定されたストラテジー 1 件。"""

    name: str
    parameters: dict[str, Any] = field(default_factory=dict)
    constraints: list[Constraint] = field(default_factory=list)
    segments: list[int] = field(default_factory=list)
    variants: list[VariantDefinition] = field(default_factory=list)


@dataclass
class FeatureToggle:
    """フィーチャートグル定義。"""

    name: str
    enabled: bool = False
    strategies: list[StrategyDefinition] = field(default_factory=list)
    variants: list[VariantDefinition] = field(default_factory=list)
