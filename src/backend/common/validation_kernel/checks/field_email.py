from __future__ import annotations

from typing import Any, Optional

from ..context import FieldContext
from ..formats import is_valid_email
from ..models import FieldRule
from ..registry import register_check
from ..rule import FieldCheck


@register_check
class FIELD_EMAIL(FieldCheck):
    check_id = "FIELD-EMAIL"
    priority = 40

    def applies(self, rule: FieldRule, value: Any) -> bool:
        # Empty optional emails are left to `required`.
        return rule.email and bool(value)

    def validate(self, value: Any, rule: FieldRule, ctx: FieldContext) -> Optional[str]:
        if not is_valid_email(value):
            return "Email invalide"
        return None
