"""k1s0 toggle library."""

from .config import LogSection, ToggleConfig, load_config
from .constraints import check_constraint, clean_values
from .context import Context, resolve_context_value
from .exceptions import ToggleError, ToggleErrorCodes
from .hashing import VARIANT_HASH_SEED, normalized_value
from .logger import new_logger
from .models import (
    Constraint,
    ConstraintValue,
    DateValue,
    DisabledResult,
    EnabledResult,
    FeatureToggle,
    NumberValue,
    Operator,
    Override,
    Segment,
    StrategyDefinition,
    StrategyResult,
    TextValue,
    Variant,
    VariantDefinition,
    VariantPayload,
    constraint_value,
)
from .registry import DefaultStrategy, UnknownStrategy, default_strategies, find_strategy
from .segments import resolve_constraints
from .strategy import Strategy
from .transport import parse_feature, parse_segment, parse_strategy
from .variant import default_variant, select_variant, select_variant_definition

__all__ = [
    "Constraint",
    "ConstraintValue",
    "Context",
    "DateValue",
    "DefaultStrategy",
    "DisabledResult",
    "EnabledResult",
    "FeatureToggle",
    "LogSection",
    "NumberValue",
    "Operator",
    "Override",
    "Segment",
    "Strategy",
    "StrategyDefinition",
    "StrategyResult",
    "TextValue",
    "ToggleConfig",
    "ToggleError",
    "ToggleErrorCodes",
    "UnknownStrategy",
    "VARIANT_HASH_SEED",
    "Variant",
    "VariantDefinition",
    "VariantPayload",
    "check_constraint",
    "clean_values",
    "constraint_value",
    "default_strategies",
    "default_variant",
    "find_strategy",
    "load_config",
    "new_logger",
    "normalized_value",
    "parse_feature",
    "parse_segment",
    "parse_strategy",
    "resolve_constraints",
    "resolve_context_value",
    "select_variant",
    "select_variant_definition",
]
