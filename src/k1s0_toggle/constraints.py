"""制約評価

演算子ごとのマッチャーを静的テーブルで引き、反転は最後に 1 回だけ適用する。
型不一致・パース失敗・未知の演算子はすべて False（fail closed）。
"""

from __future__ import annotations

import logging
import math
import operator as op
import re
from collections.abc import Callable, Iterable
from datetime import datetime, timezone
from functools import partial
from typing import Any

from semver import Version

from .context import Context, resolve_context_value
from .models import Constraint, ConstraintValue, DateValue, NumberValue, Operator, TextValue

logger = logging.getLogger(__name__)

# JavaScript の Number() が受け付ける10進表記
_NUMERIC_TEXT = re.compile(r"\s*[+-]?(?:(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|Infinity)\s*")
_SEMVER_PREFIX = re.compile(r"^[=v]")

Matcher = Callable[[Constraint, Context], bool]


def clean_values(values: Iterable[Any]) -> list[str]:
    """前後の空白を除去し、空になった値と文字列以外の値を捨てる。"""
    cleaned = (v.strip() for v in values if isinstance(v, str))
    return [v for v in cleaned if v]


def _unwrap(value: ConstraintValue | Any) -> Any:
    if isinstance(value, (TextValue, NumberValue, DateValue)):
        return value.value
    return value


def _to_number(value: Any) -> float | None:
    raw = _unwrap(value)
    if raw is None or isinstance(raw, datetime):
        return None
    if isinstance(raw, str) and _NUMERIC_TEXT.fullmatch(raw) is None:
        return None
    try:
        number = float(raw)
    except (TypeError, ValueError):
        return None
    if math.isnan(number):
        return None
    return number


def _to_datetime(value: Any) -> datetime | None:
    raw = _unwrap(value)
    parsed: datetime | None
    if isinstance(raw, datetime):
        parsed = raw
    elif isinstance(raw, str):
        try:
            parsed = datetime.fromisoformat(raw.strip())
        except ValueError:
            return None
    elif isinstance(raw, (int, float)) and not isinstance(raw, bool):
        # 数値はエポックミリ秒
        try:
            parsed = datetime.fromtimestamp(raw / 1000, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None
    else:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _is_strict_semver(version: Any) -> bool:
    """正規形そのままの semver 文字列か判定する。"""
    if not isinstance(version, str):
        return False
    try:
        parsed = Version.parse(version)
    except (TypeError, ValueError):
        return False
    return parsed.build is None and str(parsed) == version


def _in_operator(constraint: Constraint, context: Context) -> bool:
    values = clean_values(constraint.values)
    context_value = resolve_context_value(context, constraint.context_name)
    return any(v == context_value for v in values)


def _not_in_operator(constraint: Constraint, context: Context) -> bool:
    return not _in_operator(constraint, context)


def _string_operator(
    relation: Callable[[str, str], bool],
    constraint: Constraint,
    context: Context,
) -> bool:
    values = clean_values(constraint.values)
    context_value = resolve_context_value(context, constraint.context_name)
    if not isinstance(context_value, str):
        return False
    if constraint.case_insensitive:
        values = [v.lower() for v in values]
        context_value = context_value.lower()
    return any(relation(context_value, v) for v in values)


def _number_operator(
    compare: Callable[[float, float], bool],
    constraint: Constraint,
    context: Context,
) -> bool:
    value = _to_number(constraint.value)
    context_value = _to_number(resolve_context_value(context, constraint.context_name))
    if value is None or context_value is None:
        return False
    return compare(context_value, value)


def _date_operator(
    compare: Callable[[datetime, datetime], bool],
    constraint: Constraint,
    context: Context,
) -> bool:
    value = _to_datetime(constraint.value)
    if context.current_time:
        current_time = _to_datetime(context.current_time)
    else:
        current_time = datetime.now(timezone.utc)
    if value is None or current_time is None:
        return False
    return compare(current_time, value)


def _semver_operator(
    compare: Callable[[int, int], bool],
    constraint: Constraint,
    context: Context,
) -> bool:
    context_value = resolve_context_value(context, constraint.context_name)
    if not _is_strict_semver(context_value):
        return False
    target = _unwrap(constraint.value)
    if not isinstance(target, str):
        return False
    try:
        version = Version.parse(context_value)
        other = Version.parse(_SEMVER_PREFIX.sub("", target.strip(), count=1))
        result = version.compare(other)
    except (TypeError, ValueError) as e:
        logger.debug(
            "Semver comparison failed",
            extra={"context_value": context_value, "value": target, "error": str(e)},
        )
        return False
    return compare(result, 0)


_OPERATORS: dict[Operator, Matcher] = {
    Operator.IN: _in_operator,
    Operator.NOT_IN: _not_in_operator,
    Operator.STR_STARTS_WITH: partial(_string_operator, str.startswith),
    Operator.STR_ENDS_WITH: partial(_string_operator, str.endswith),
    Operator.STR_CONTAINS: partial(_string_operator, op.contains),
    Operator.NUM_EQ: partial(_number_operator, op.eq),
    Operator.NUM_GT: partial(_number_operator, op.gt),
    Operator.NUM_GTE: partial(_number_operator, op.ge),
    Operator.NUM_LT: partial(_number_operator, op.lt),
    Operator.NUM_LTE: partial(_number_operator, op.le),
    Operator.DATE_AFTER: partial(_date_operator, op.gt),
    Operator.DATE_BEFORE: partial(_date_operator, op.lt),
    Operator.SEMVER_EQ: partial(_semver_operator, op.eq),
    Operator.SEMVER_GT: partial(_semver_operator, op.gt),
    Operator.SEMVER_LT: partial(_semver_operator, op.lt),
}


def _as_operator(raw: Operator | str) -> Operator | None:
    if isinstance(raw, Operator):
        return raw
    try:
        return Operator(raw)
    except ValueError:
        return None


def get_matcher(operator: Operator | str) -> Matcher | None:
    """演算子に対応するマッチャーを返す。未知の演算子なら None。"""
    known = _as_operator(operator)
    if known is None:
        return None
    return _OPERATORS.get(known)


def check_constraint(constraint: Constraint, context: Context) -> bool:
    """制約 1 件を評価する。例外は送出しない。"""
    matcher = get_matcher(constraint.operator)
    if matcher is None:
        logger.debug("Unknown constraint operator", extra={"operator": str(constraint.operator)})
        return False
    matched = matcher(constraint, context)
    if constraint.inverted:
        return not matched
    return matched
