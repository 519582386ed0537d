"""トグル定義ペイロードのパース（pydantic BaseModel）

取得元から受け取った camelCase の JSON 互換 dict を検証し、ドメインモデルに変換する。
"""

from __future__ import annotations

from typing import Any, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic.alias_generators import to_camel

from .exceptions import ToggleError, ToggleErrorCodes
from .models import (
    Constraint,
    FeatureToggle,
    Operator,
    Override,
    Segment,
    StrategyDefinition,
    VariantDefinition,
    VariantPayload,
    constraint_value,
)


class _Payload(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ConstraintPayload(_Payload):
    """制約ペイロード。"""

    context_name: str
    operator: str
    inverted: bool = False
    values: list[str] | None = None
    value: str | int | float | None = None
    case_insensitive: bool = False

    def to_domain(self) -> Constraint:
        try:
            operator: Operator | str = Operator(self.operator)
        except ValueError:
            # 未知の演算子は評価時に不一致となる
            operator = self.operator
        return Constraint(
            context_name=self.context_name,
            operator=operator,
            values=tuple(self.values or ()),
            inverted=self.inverted,
            value=constraint_value(self.value),
            case_insensitive=self.case_insensitive,
        )


class OverridePayload(_Payload):
    """オーバーライドペイロード。"""

    context_name: str
    values: list[str] = Field(default_factory=list)

    def to_domain(self) -> Override:
        return Override(context_name=self.context_name, values=tuple(self.values))


class VariantPayloadModel(_Payload):
    """バリアントペイロード。"""

    type: str
    value: str

    def to_domain(self) -> VariantPayload:
        return VariantPayload(type=self.type, value=self.value)


class VariantDefinitionPayload(_Payload):
    """バリアント定義ペイロード。"""

    name: str
    weight: int = Field(ge=0)
    stickiness: str = "default"
    overrides: list[OverridePayload] | None = None
    payload: VariantPayloadModel | None = None

    def to_domain(self) -> VariantDefinition:
        return VariantDefinition(
            name=self.name,
            weight=self.weight,
            stickiness=self.stickiness,
            overrides=tuple(o.to_domain() for o in self.overrides or ()),
            payload=self.payload.to_domain() if self.payload else None,
        )


class StrategyPayload(_Payload):
    """ストラテジーペイロード。"""

    name: str
    parameters: dict[str, Any] = Field(default_factory=dict)
    constraints: list[ConstraintPayload] | None = None
    segments: list[int] | None = None
    variants: list[VariantDefinitionPayload] | None = None

    def to_domain(self) -> StrategyDefinition:
        return StrategyDefinition(
            name=self.name,
            parameters=dict(self.parameters),
            constraints=[c.to_domain() for c in self.constraints or ()],
            segments=list(self.segments or ()),
            variants=[v.to_domain() for v in self.variants or ()],
        )


class SegmentPayload(_Payload):
    """セグメントペイロード。"""

    id: int
    constraints: list[ConstraintPayload] = Field(default_factory=list)

    def to_domain(self) -> Segment:
        return Segment(id=self.id, constraints=tuple(c.to_domain() for c in self.constraints))


class FeaturePayload(_Payload):
    """フィーチャートグルペイロード。"""

    name: str
    enabled: bool = False
    strategies: list[StrategyPayload] = Field(default_factory=list)
    variants: list[VariantDefinitionPayload] | None = None

    def to_domain(self) -> FeatureToggle:
        return FeatureToggle(
            name=self.name,
            enabled=self.enabled,
            strategies=[s.to_domain() for s in self.strategies],
            variants=[v.to_domain() for v in self.variants or ()],
        )


_P = TypeVar("_P", bound=_Payload)


def _validate(model: type[_P], data: Any) -> _P:
    try:
        return model.model_validate(data)
    except ValidationError as e:
        raise ToggleError(
            code=ToggleErrorCodes.INVALID_DEFINITION,
            message=f"Invalid {model.__name__}: {e}",
            cause=e,
        ) from e


def parse_feature(data: Any) -> FeatureToggle:
    """フィーチャートグル定義をパースする。

    Raises:
        ToggleError: 定義が不正な場合（INVALID_DEFINITION）
    """
    return _validate(FeaturePayload, data).to_domain()


def parse_strategy(data: Any) -> StrategyDefinition:
    """ストラテジー定義をパースする。"""
    return _validate(StrategyPayload, data).to_domain()


def parse_segment(data: Any) -> Segment:
    """セグメント定義をパースする。"""
    return _validate(SegmentPayload, data).to_domain()
