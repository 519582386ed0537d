"""バリアント選択

オーバーライド一致を最優先とし、それ以外はスティッキネス値のハッシュで
重み付きバケットを決める。同じ (シード値, group_id, バリアント集合) なら
プロセスをまたいでも同じバリアントが選ばれる。
"""

from __future__ import annotations

import logging
import random
from collections.abc import Callable, Sequence

from .context import Context, resolve_context_value
from .hashing import VARIANT_HASH_SEED, normalized_value
from .models import FeatureToggle, Override, Variant, VariantDefinition

logger = logging.getLogger(__name__)

RandomSource = Callable[[], float]

STICKINESS_SELECTORS: tuple[str, ...] = ("user_id", "session_id", "remote_address")


def default_variant() -> Variant:
    """無効時に返すバリアントを生成する。"""
    return Variant(name="disabled", enabled=False, feature_enabled=False)


def _random_seed(random_source: RandomSource) -> str:
    seed = str(round(random_source() * 100000))
    logger.debug("No stickiness value in context, using random seed")
    return seed


def get_seed(
    context: Context,
    stickiness: str = "default",
    random_source: RandomSource = random.random,
) -> str:
    """スティッキネス設定からハッシュ対象の値を決める。

    "default" の場合は userId, sessionId, remoteAddress の順に最初の空でない
    文字列を使う。値が得られなければ random_source によるランダム値となり、
    その評価は呼び出しごとに結果が変わり得る。
    """
    if stickiness != "default":
        value = resolve_context_value(context, stickiness)
        return str(value) if value is not None else _random_seed(random_source)
    for attr in STICKINESS_SELECTORS:
        value = getattr(context, attr)
        if isinstance(value, str) and value != "":
            return value
    return _random_seed(random_source)


def _override_matches(context: Context, override: Override) -> bool:
    context_value = resolve_context_value(context, override.context_name)
    return any(value == context_value for value in override.values)


def find_override(
    variants: Sequence[VariantDefinition], context: Context
) -> VariantDefinition | None:
    """コンテキストに一致するオーバーライドを持つ最初のバリアントを返す。"""
    for variant in variants:
        if any(_override_matches(context, o) for o in variant.overrides):
            return variant
    return None


def select_variant_definition(
    group_id: str,
    variants: Sequence[VariantDefinition],
    context: Context,
    random_source: RandomSource = random.random,
) -> VariantDefinition | None:
    """バリアント定義を 1 件選ぶ。重みの合計が 0 以下なら None。"""
    total_weight = sum(v.weight for v in variants)
    if total_weight <= 0:
        return None

    override = find_override(variants, context)
    if override is not None:
        return override

    seed = get_seed(context, variants[0].stickiness, random_source)
    target = normalized_value(seed, group_id, total_weight, VARIANT_HASH_SEED)

    counter = 0
    for variant in variants:
        if variant.weight == 0:
            continue
        counter += variant.weight
        if counter >= target:
            return variant
    return None


def select_variant(
    feature: FeatureToggle,
    context: Context,
    random_source: RandomSource = random.random,
) -> VariantDefinition | None:
    """トグル直下のバリアントをトグル名をグループとして選ぶ。"""
    return select_variant_definition(feature.name, feature.variants, context, random_source)
