from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping, Optional

from .config import KernelConfig
from .context import FieldContext
from .models import FieldRule, ValidationResult
from .registry import registry
from .rule import FieldCheck

logger = logging.getLogger(__name__)


class FormValidator:
    def __init__(self, checks: Optional[Iterable[FieldCheck]] = None, config: Optional[KernelConfig] = None):
        self._checks = list(checks) if checks is not None else registry.create_all()
        self._config = config or KernelConfig()

    def validate_field(
        self,
        field: str,
        value: Any,
        rule: FieldRule,
        record: Optional[Mapping[str, Any]] = None,
    ) -> Optional[str]:
        """First failing check's message for one field, or None."""
        ctx = FieldContext(
            field=field,
            label=rule.display_label(field),
            record=record if record is not None else {field: value},
            config=self._config,
        )
        for check in self._checks:
            if not check.applies(rule, value):
                continue
            message = check.validate(value, rule, ctx)
            if message:
                logger.debug("Field %s failed %s: %s", field, check.check_id, message)
                return message
        return None

    def validate(self, data: Mapping[str, Any], rules: Mapping[str, FieldRule]) -> ValidationResult:
        errors: dict[str, str] = {}
        for field, rule in rules.items():
            message = self.validate_field(field, data.get(field), rule, data)
            if message:
                errors[field] = message
        return ValidationResult(errors=errors)


def validate_form(
    data: Mapping[str, Any],
    rules: Mapping[str, FieldRule],
    config: Optional[KernelConfig] = None,
) -> ValidationResult:
    """Validate a record against a rule set; only failing fields appear in the result."""
    return FormValidator(config=config).validate(data, rules)


def validate_field(
    field: str,
    value: Any,
    rule: FieldRule,
    record: Optional[Mapping[str, Any]] = None,
    config: Optional[KernelConfig] = None,
) -> Optional[str]:
    return FormValidator(config=config).validate_field(field, value, rule, record)
