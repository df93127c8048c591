"""Structured error detail payloads for RPC failure responses."""

from .bad_request import BadRequest, FieldViolation
from .config import ErrorDetailsSettings, get_settings
from .debug_info import (
    DebugInfo,
    StackFrame,
    StackTracer,
    TracedError,
    build_debug_info,
    with_stack,
)
from .errors import ErrorDetailsError, RuleRegistryError
from .rules import (
    DEFAULT_RULES,
    INVALID_RULE,
    Invalid,
    Max,
    Min,
    Numeric,
    OneOf,
    Required,
    Rule,
    RuleFormatter,
    RuleRegistry,
    Threshold,
)

__all__ = [
    "BadRequest",
    "DEFAULT_RULES",
    "DebugInfo",
    "ErrorDetailsError",
    "ErrorDetailsSettings",
    "FieldViolation",
    "INVALID_RULE",
    "Invalid",
    "Max",
    "Min",
    "Numeric",
    "OneOf",
    "Required",
    "Rule",
    "RuleFormatter",
    "RuleRegistry",
    "RuleRegistryError",
    "StackFrame",
    "StackTracer",
    "Threshold",
    "TracedError",
    "build_debug_info",
    "get_settings",
    "with_stack",
]
