"""セグメント参照の展開"""

from __future__ import annotations

from collections.abc import Iterator, Mapping

from .models import Constraint, Segment, StrategyDefinition


def resolve_constraints(
    strategy: StrategyDefinition,
    segments: Mapping[int, Segment],
) -> Iterator[Constraint | None]:
    """ストラテジー自身の制約に続けて、参照セグメントの制約を順に返す。

    存在しないセグメント ID には None を返す。Strategy.check_constraints は
    None を不一致として扱うため、未解決のセグメントを持つストラテジーは無効になる。
    """
    yield from strategy.constraints
    for segment_id in strategy.segments:
        segment = segments.get(segment_id)
        if segment is None:
            yield None
        else:
            yield from segment.constraints
