from __future__ import annotations

from typing import Any, Optional

from ..context import FieldContext
from ..formats import is_valid_phone
from ..models import FieldRule
from ..registry import register_check
from ..rule import FieldCheck


@register_check
class FIELD_PHONE(FieldCheck):
    check_id = "FIELD-PHONE"
    priority = 50

    def applies(self, rule: FieldRule, value: Any) -> bool:
        return rule.phone and bool(value)

    def validate(self, value: Any, rule: FieldRule, ctx: FieldContext) -> Optional[str]:
        if not is_valid_phone(value, ctx.config.phone_format):
            return "Numéro de téléphone invalide"
        return None
