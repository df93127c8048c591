"""Build ``google.rpc.BadRequest`` payloads from field violations."""

from __future__ import annotations

import logging
from collections.abc import Iterator

from google.rpc import error_details_pb2

from .rules import DEFAULT_RULES, INVALID_RULE, Rule, RuleRegistry

logger = logging.getLogger(__name__)


class FieldViolation:
    """A single bad request field paired with a rendered description."""

    __slots__ = ("_field", "_description")

    def __init__(self, field: str, description: str) -> None:
        """Create a violation with caller-supplied description text.

        Args:
            field: Path of the offending request field.
            description: Human-readable description, stored verbatim.
        """
        self._field = field
        self._description = description

    @classmethod
    def from_rule(
        cls,
        field: str,
        rule: str,
        *params: str,
        registry: RuleRegistry = DEFAULT_RULES,
    ) -> FieldViolation:
        """Create a violation whose description is rendered from a rule.

        Unknown rules render the generic ``invalid`` description. A rule
        called with params its formatter cannot use (too few, or the wrong
        type) degrades the same way instead of raising.

        Args:
            field: Path of the offending request field.
            rule: Rule name, e.g. ``required`` or ``max``.
            *params: String parameters consumed by the rule's formatter.
            registry: Rule table used for the lookup.

        Returns:
            Field violation with the rendered description.
        """
        if rule not in registry:
            logger.debug(
                "error_details.rule.unknown rule=%r field=%r fallback=%s",
                rule,
                field,
                INVALID_RULE,
            )
        formatter = registry.lookup(rule)
        try:
            description = formatter(field, params)
        except (IndexError, KeyError, TypeError, AttributeError, ValueError) as exc:
            logger.warning(
                "error_details.rule.format_failed rule=%r field=%r params=%r error=%s",
                rule,
                field,
                params,
                type(exc).__name__,
            )
            description = registry.lookup(INVALID_RULE)(field, ())
        return cls(field, description)

    @classmethod
    def from_typed_rule(
        cls,
        field: str,
        rule: Rule,
        *,
        registry: RuleRegistry = DEFAULT_RULES,
    ) -> FieldViolation:
        """Create a violation from a typed rule value such as ``Max(64)``."""
        return cls.from_rule(field, rule.name, *rule.params(), registry=registry)

    @property
    def field(self) -> str:
        return self._field

    @property
    def description(self) -> str:
        return self._description

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FieldViolation):
            return NotImplemented
        return (self._field, self._description) == (other._field, other._description)

    def __hash__(self) -> int:
        return hash((self._field, self._description))

    def __repr__(self) -> str:
        return f"FieldViolation(field={self._field!r}, description={self._description!r})"

    def serialize(self) -> error_details_pb2.BadRequest.FieldViolation:
        """Convert to the protobuf field violation message."""
        return error_details_pb2.BadRequest.FieldViolation(
            field=self._field,
            description=self._description,
        )


class BadRequest:
    """Ordered collection of field violations for one rejected request.

    Violations keep the order they were reported in. The collection only
    grows; ``with_field_violations`` appends in place and is not
    synchronized, so one request should build its own instance.
    """

    def __init__(self, *violations: FieldViolation) -> None:
        self._violations: list[FieldViolation] = list(violations)

    def with_field_violations(self, *violations: FieldViolation) -> BadRequest:
        """Append violations and return this same instance for chaining."""
        self._violations.extend(violations)
        return self

    @property
    def field_violations(self) -> tuple[FieldViolation, ...]:
        """Read-only snapshot of the violations in report order."""
        return tuple(self._violations)

    def __iter__(self) -> Iterator[FieldViolation]:
        return iter(tuple(self._violations))

    def __len__(self) -> int:
        return len(self._violations)

    def __bool__(self) -> bool:
        return bool(self._violations)

    def __repr__(self) -> str:
        return f"BadRequest(field_violations={self._violations!r})"

    def serialize(self) -> error_details_pb2.BadRequest:
        """Convert to the protobuf ``BadRequest`` message, preserving order."""
        return error_details_pb2.BadRequest(
            field_violations=[violation.serialize() for violation in self._violations],
        )
