import pytest
from pydantic import ValidationError

from common.validation_kernel.config import KernelConfig
from common.validation_kernel.evaluator import FormValidator, validate_field, validate_form
from common.validation_kernel.models import FieldRule


def test_first_failing_check_wins():
    result = validate_form({"name": ""}, {"name": FieldRule(required=True, min_length=3, label="Nom")})
    assert result.errors == {"name": "Nom est requis"}
    assert result.is_valid is False


def test_valid_fields_are_absent_from_result():
    rules = {
        "name": FieldRule(required=True, min_length=3, label="Nom"),
        "email": FieldRule(email=True),
    }
    result = validate_form({"name": "Awa Diop", "email": "awa.diop@example.sn"}, rules)
    assert result.is_valid is True
    assert result.errors == {}
    assert "name" not in result


def test_label_defaults_to_field_name():
    result = validate_form({}, {"city": FieldRule(required=True)})
    assert result.error_for("city") == "city est requis"


def test_min_length_fails_on_empty_optional_value():
    result = validate_form({"code": ""}, {"code": FieldRule(min_length=3, label="Code")})
    assert result.errors["code"] == "Code doit contenir au moins 3 caractères"


def test_max_length():
    rules = {"code": FieldRule(max_length=3, label="Code")}
    assert validate_form({"code": "abcd"}, rules).errors["code"] == "Code ne doit pas dépasser 3 caractères"
    assert validate_form({"code": "abc"}, rules).is_valid


def test_email_is_only_checked_when_present():
    rules = {"email": FieldRule(email=True)}
    assert validate_form({"email": ""}, rules).is_valid
    assert validate_form({}, rules).is_valid
    assert validate_form({"email": "not-an-email"}, rules).errors["email"] == "Email invalide"


def test_phone_uses_configured_format():
    rules = {"phone": FieldRule(phone=True)}
    assert validate_form({"phone": "771234567"}, rules).is_valid
    assert validate_form({"phone": "+221771234567"}, rules).errors["phone"] == "Numéro de téléphone invalide"

    international = KernelConfig(phone_format="international")
    assert validate_form({"phone": "+221771234567"}, rules, config=international).is_valid


def test_range_messages():
    rules = {"discount": FieldRule(min=0, max=100, label="Remise")}
    assert validate_form({"discount": 150}, rules).errors["discount"] == "Remise doit être entre 0 et 100"
    assert validate_form({"discount": "abc"}, rules).errors["discount"] == "Remise doit être un nombre"
    assert validate_form({"discount": "50"}, rules).is_valid
    # A blank input reads as 0.
    assert validate_form({"discount": ""}, rules).is_valid

    open_ended = {"qty": FieldRule(min=10)}
    assert validate_form({"qty": 5}, open_ended).errors["qty"] == "qty doit être entre 10 et ∞"


def test_positive_accepts_zero_and_rejects_negatives():
    rules = {"price": FieldRule(positive=True, label="Prix")}
    assert validate_form({"price": 0}, rules).is_valid
    assert validate_form({"price": "12.5"}, rules).is_valid
    assert validate_form({"price": -5}, rules).errors["price"] == "Prix doit être positif"
    assert validate_form({"price": "abc"}, rules).errors["price"] == "Prix doit être un nombre"


def test_custom_check_sees_whole_record():
    seen = {}

    def check(value, record):
        seen.update(record)
        return "trop bas" if value < record["floor"] else None

    rules = {"amount": FieldRule(custom=check)}
    result = validate_form({"amount": 5, "floor": 10}, rules)
    assert result.errors == {"amount": "trop bas"}
    assert seen == {"amount": 5, "floor": 10}


def test_custom_runs_after_builtin_checks():
    calls = []

    def check(value, record):
        calls.append(value)
        return "custom"

    rules = {"name": FieldRule(required=True, custom=check)}
    assert validate_form({"name": "  "}, rules).errors["name"] == "name est requis"
    assert calls == []


def test_validation_is_idempotent():
    rules = {"name": FieldRule(required=True, min_length=3), "email": FieldRule(email=True)}
    data = {"name": "ab", "email": "x@"}
    first = validate_form(data, rules)
    second = validate_form(data, rules)
    assert first == second
    assert data == {"name": "ab", "email": "x@"}


def test_valid_record_has_no_errors_on_every_run():
    rules = {"name": FieldRule(required=True, min_length=3), "email": FieldRule(email=True)}
    data = {"name": "Awa Diop", "email": "awa.diop@example.sn"}
    for _ in range(3):
        result = validate_form(data, rules)
        assert result.errors == {}
        assert result.is_valid


def test_validate_field_returns_single_message():
    assert validate_field("name", "", FieldRule(required=True, label="Nom")) == "Nom est requis"
    assert validate_field("name", "Moussa", FieldRule(required=True)) is None


def test_validator_with_explicit_check_list_runs_only_those():
    validator = FormValidator(checks=[])
    assert validator.validate({}, {"name": FieldRule(required=True)}).is_valid


def test_malformed_rule_fails_at_construction():
    with pytest.raises(ValidationError):
        FieldRule(custom="not callable")
    with pytest.raises(ValidationError):
        FieldRule(min_length="three")


def test_rules_are_immutable():
    rule = FieldRule(required=True)
    with pytest.raises(ValidationError):
        rule.required = False
