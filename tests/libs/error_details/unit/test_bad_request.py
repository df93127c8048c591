"""Tests for FieldViolation and BadRequest construction and serialization."""

import logging

import pytest
from google.rpc import error_details_pb2

from error_details.bad_request import BadRequest, FieldViolation
from error_details.rules import DEFAULT_RULES, Max, Min, OneOf, Required, Threshold


def test_from_rule_required():
    fv = FieldViolation.from_rule("email", "required")
    assert fv.field == "email"
    assert fv.description == "email can't be blank"


def test_from_rule_threshold():
    fv = FieldViolation.from_rule("age", "gt", "18")
    assert fv.description == "age must be greater than 18"


def test_from_rule_oneof_renders_list():
    fv = FieldViolation.from_rule("role", "oneof", "admin user guest")
    assert fv.field == "role"
    assert "[admin user guest]" in fv.description
    assert fv.description == "role is not included in the list [admin user guest]"


@pytest.mark.parametrize("rule", ["unknown", "email", "uuid4"])
def test_from_rule_unknown_matches_invalid(rule):
    """Unknown rules produce exactly the 'invalid' rule text."""
    assert (
        FieldViolation.from_rule("token", rule).description
        == FieldViolation.from_rule("token", "invalid").description
        == "token is invalid"
    )


def test_from_rule_unknown_logs_fallback(caplog):
    with caplog.at_level(logging.DEBUG, logger="error_details.bad_request"):
        FieldViolation.from_rule("token", "unknown")
    assert "error_details.rule.unknown" in caplog.text


@pytest.mark.parametrize("rule", ["max", "min", "gt", "oneof"])
def test_from_rule_missing_params_degrades_to_invalid(rule, caplog):
    """A rule called without its param never raises."""
    with caplog.at_level(logging.WARNING, logger="error_details.bad_request"):
        fv = FieldViolation.from_rule("name", rule)
    assert fv.description == "name is invalid"
    assert "error_details.rule.format_failed" in caplog.text


def test_from_rule_uses_given_registry():
    registry = DEFAULT_RULES.extend(
        {"email": lambda field, params: f"{field} is not a valid email address"}
    )
    fv = FieldViolation.from_rule("contact", "email", registry=registry)
    assert fv.description == "contact is not a valid email address"


@pytest.mark.parametrize(
    ("rule", "rule_name", "params"),
    [
        (Required(), "required", ()),
        (Max(1), "max", ("1",)),
        (Min(1), "min", ("1",)),
        (Threshold("lte", 99), "lte", ("99",)),
        (OneOf(["admin", "user"]), "oneof", ("admin user",)),
    ],
)
def test_from_typed_rule_matches_string_rule(rule, rule_name, params):
    typed = FieldViolation.from_typed_rule("field", rule)
    assert typed == FieldViolation.from_rule("field", rule_name, *params)


def test_literal_description_is_stored_verbatim():
    fv = FieldViolation("password", "password must contain a digit")
    assert fv.description == "password must contain a digit"


def test_field_violation_is_immutable():
    fv = FieldViolation("email", "email can't be blank")
    with pytest.raises(AttributeError):
        fv.field = "other"  # type: ignore[misc]


def test_field_violation_serialize():
    msg = FieldViolation("email", "email can't be blank").serialize()
    assert isinstance(msg, error_details_pb2.BadRequest.FieldViolation)
    assert msg.field == "email"
    assert msg.description == "email can't be blank"


def test_bad_request_serialize_preserves_append_order():
    fv1 = FieldViolation.from_rule("email", "required")
    fv2 = FieldViolation.from_rule("age", "gt", "18")
    fv3 = FieldViolation.from_rule("role", "oneof", "admin user guest")

    msg = BadRequest(fv1, fv2).with_field_violations(fv3).serialize()

    assert isinstance(msg, error_details_pb2.BadRequest)
    assert [v.field for v in msg.field_violations] == ["email", "age", "role"]
    assert [v.description for v in msg.field_violations] == [
        fv1.description,
        fv2.description,
        fv3.description,
    ]


def test_with_field_violations_chaining_matches_direct_construction():
    a = FieldViolation("a", "a is invalid")
    b = FieldViolation("b", "b is invalid")
    c = FieldViolation("c", "c is invalid")

    chained = BadRequest().with_field_violations(a).with_field_violations(b, c)
    direct = BadRequest(a, b, c)

    assert chained.serialize() == direct.serialize()


def test_with_field_violations_mutates_and_returns_same_instance():
    bad_request = BadRequest()
    returned = bad_request.with_field_violations(FieldViolation("a", "a is invalid"))

    assert returned is bad_request
    assert len(bad_request) == 1


def test_empty_bad_request_serializes_with_zero_entries():
    bad_request = BadRequest()
    msg = bad_request.serialize()

    assert not bad_request
    assert len(msg.field_violations) == 0
    assert list(msg.field_violations) == []


def test_field_violations_view_is_a_snapshot():
    bad_request = BadRequest(FieldViolation("a", "a is invalid"))
    view = bad_request.field_violations
    bad_request.with_field_violations(FieldViolation("b", "b is invalid"))

    assert len(view) == 1
    assert [fv.field for fv in bad_request] == ["a", "b"]


def test_from_rule_non_string_param_degrades_to_invalid(caplog):
    """A non-str param reaching a string-only formatter never raises."""
    with caplog.at_level(logging.WARNING, logger="error_details.bad_request"):
        fv = FieldViolation.from_rule("role", "oneof", 3)  # type: ignore[arg-type]
    assert fv.description == "role is invalid"
    assert "error=AttributeError" in caplog.text


def test_from_rule_failing_custom_formatter_degrades_to_invalid():
    registry = DEFAULT_RULES.extend(
        {"country": lambda field, params: f"{field} must be in {dict()[params[0]]}"}
    )
    fv = FieldViolation.from_rule("country", "country", "eu", registry=registry)
    assert fv.description == "country is invalid"


def test_from_typed_rule_oneof_accepts_space_separated_string():
    fv = FieldViolation.from_typed_rule("role", OneOf("admin user guest"))
    assert fv.description == "role is not included in the list [admin user guest]"
