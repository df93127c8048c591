"""Rule formatters that render field violation descriptions.

A rule is a short name such as ``required`` or ``max`` identifying a
validation failure category. Each rule maps to a formatter that renders a
stable, user-facing description from a field name and the rule's string
parameters.

The rendered text is part of the external error contract. Two outputs are
kept exactly as clients already receive them:

- ``max`` renders ``character)`` for singular and plural counts alike.
- ``min`` with a count of ``"1"`` renders without the closing parenthesis.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator, Mapping, Sequence
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import ClassVar, Literal

from .errors import RuleRegistryError

RuleFormatter = Callable[[str, Sequence[str]], str]

INVALID_RULE = "invalid"


def _required(field: str, params: Sequence[str]) -> str:
    return f"{field} can't be blank"


def _max(field: str, params: Sequence[str]) -> str:
    count = params[0]
    if count == "1":
        return f"{field} is too long (maximum is {count} character)"
    return f"{field} is too long (maximum is {count} character)"


def _min(field: str, params: Sequence[str]) -> str:
    count = params[0]
    if count == "1":
        return f"{field} is too short (minimum is {count} characters"
    return f"{field} is too short (minimum is {count} characters)"


def _numeric(field: str, params: Sequence[str]) -> str:
    return f"{field} is not a number"


def _comparison(phrase: str) -> RuleFormatter:
    """Build a formatter for a threshold comparison such as ``greater than``."""

    def _format(field: str, params: Sequence[str]) -> str:
        threshold = params[0]
        return f"{field} must be {phrase} {threshold}"

    return _format


def _oneof(field: str, params: Sequence[str]) -> str:
    options = params[0].split(" ")
    return f"{field} is not included in the list [{' '.join(options)}]"


def _invalid(field: str, params: Sequence[str]) -> str:
    return f"{field} is invalid"


class RuleRegistry(Mapping[str, RuleFormatter]):
    """Read-only table mapping rule names to formatters.

    The table is fixed when the registry is built. It must contain the
    ``invalid`` sentinel, which ``lookup`` returns for any unknown rule.
    """

    def __init__(self, formatters: Mapping[str, RuleFormatter]) -> None:
        """Build a registry from a mapping of rule name to formatter.

        Args:
            formatters: Rule name to formatter mapping. Copied on construction.

        Raises:
            RuleRegistryError: If the ``invalid`` sentinel is missing or a
                formatter is not callable.
        """
        if INVALID_RULE not in formatters:
            raise RuleRegistryError(
                f"Rule registry must define the '{INVALID_RULE}' fallback rule"
            )
        for name, formatter in formatters.items():
            if not callable(formatter):
                raise RuleRegistryError(
                    f"Formatter for rule '{name}' must be callable, "
                    f"got {type(formatter).__name__}"
                )
        self._formatters: Mapping[str, RuleFormatter] = MappingProxyType(
            dict(formatters)
        )

    def __getitem__(self, rule: str) -> RuleFormatter:
        return self._formatters[rule]

    def __iter__(self) -> Iterator[str]:
        return iter(self._formatters)

    def __len__(self) -> int:
        return len(self._formatters)

    def __repr__(self) -> str:
        return f"RuleRegistry(rules={self.rules!r})"

    @property
    def rules(self) -> list[str]:
        """Sorted names of all registered rules."""
        return sorted(self._formatters)

    def lookup(self, rule: str) -> RuleFormatter:
        """Return the formatter for ``rule``, or the ``invalid`` formatter."""
        formatter = self._formatters.get(rule)
        if formatter is None:
            return self._formatters[INVALID_RULE]
        return formatter

    def extend(self, formatters: Mapping[str, RuleFormatter]) -> RuleRegistry:
        """Return a new registry with extra or overriding formatters.

        Args:
            formatters: Formatters added on top of this registry's table.

        Returns:
            A new registry. This registry is left unchanged.
        """
        return RuleRegistry({**self._formatters, **formatters})


DEFAULT_RULES = RuleRegistry(
    {
        "required": _required,
        "max": _max,
        "min": _min,
        "numeric": _numeric,
        "gt": _comparison("greater than"),
        "gte": _comparison("greater than or equal to"),
        "eq": _comparison("equal to"),
        "lt": _comparison("less than"),
        "lte": _comparison("less than or equal to"),
        "oneof": _oneof,
        INVALID_RULE: _invalid,
    }
)


# ============================================================================
# TYPED RULES
# ============================================================================


@dataclass(frozen=True)
class Required:
    """The field was left blank."""

    name: ClassVar[str] = "required"

    def params(self) -> tuple[str, ...]:
        return ()


@dataclass(frozen=True)
class Numeric:
    """The field is not a number."""

    name: ClassVar[str] = "numeric"

    def params(self) -> tuple[str, ...]:
        return ()


@dataclass(frozen=True)
class Invalid:
    """Generic invalid value."""

    name: ClassVar[str] = INVALID_RULE

    def params(self) -> tuple[str, ...]:
        return ()


@dataclass(frozen=True)
class Max:
    """The field exceeds a maximum length."""

    count: int | str
    name: ClassVar[str] = "max"

    def params(self) -> tuple[str, ...]:
        return (str(self.count),)


@dataclass(frozen=True)
class Min:
    """The field is shorter than a minimum length."""

    count: int | str
    name: ClassVar[str] = "min"

    def params(self) -> tuple[str, ...]:
        return (str(self.count),)


ThresholdOp = Literal["gt", "gte", "eq", "lt", "lte"]
_THRESHOLD_OPS: frozenset[str] = frozenset({"gt", "gte", "eq", "lt", "lte"})


@dataclass(frozen=True)
class Threshold:
    """The field fails a comparison against a threshold value."""

    op: ThresholdOp
    value: int | float | str

    def __post_init__(self) -> None:
        if self.op not in _THRESHOLD_OPS:
            raise ValueError(
                f"Threshold op must be one of {sorted(_THRESHOLD_OPS)}, got '{self.op}'"
            )

    @property
    def name(self) -> str:
        return self.op

    def params(self) -> tuple[str, ...]:
        return (str(self.value),)


@dataclass(frozen=True)
class OneOf:
    """The field is not one of the allowed options."""

    options: Sequence[str] = field(default_factory=tuple)
    name: ClassVar[str] = "oneof"

    def __post_init__(self) -> None:
        # A bare string is the space-separated form the ``oneof`` rule takes.
        options = self.options
        if isinstance(options, str):
            options = options.split(" ")
        object.__setattr__(self, "options", tuple(options))

    def params(self) -> tuple[str, ...]:
        return (" ".join(self.options),)


Rule = Required | Numeric | Invalid | Max | Min | Threshold | OneOf
