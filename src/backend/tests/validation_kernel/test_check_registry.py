import pytest

from common.validation_kernel.registry import CheckRegistry, registry
from common.validation_kernel.rule import FieldCheck


def test_builtin_checks_run_in_fixed_order():
    assert list(registry.ids()) == [
        "FIELD-REQUIRED",
        "FIELD-MIN-LENGTH",
        "FIELD-MAX-LENGTH",
        "FIELD-EMAIL",
        "FIELD-PHONE",
        "FIELD-RANGE",
        "FIELD-POSITIVE",
        "FIELD-CUSTOM",
    ]
    assert [check.check_id for check in registry.create_all()] == list(registry.ids())


def _check_class(check_id, priority):
    class _Check(FieldCheck):
        def applies(self, rule, value):
            return True

        def validate(self, value, rule, ctx):
            return None

    _Check.check_id = check_id
    _Check.priority = priority
    return _Check


def test_registry_rejects_duplicate_ids_and_priorities():
    reg = CheckRegistry()
    reg.register(_check_class("A", 1))
    with pytest.raises(ValueError):
        reg.register(_check_class("A", 2))
    with pytest.raises(ValueError):
        reg.register(_check_class("B", 1))


def test_registry_rejects_missing_id():
    with pytest.raises(ValueError):
        CheckRegistry().register(_check_class("", 1))
