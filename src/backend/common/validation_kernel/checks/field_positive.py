from __future__ import annotations

from typing import Any, Optional

from ..context import FieldContext, read_number
from ..models import FieldRule
from ..registry import register_check
from ..rule import FieldCheck


@register_check
class FIELD_POSITIVE(FieldCheck):
    check_id = "FIELD-POSITIVE"
    priority = 70

    def applies(self, rule: FieldRule, value: Any) -> bool:
        return rule.positive and bool(value)

    def validate(self, value: Any, rule: FieldRule, ctx: FieldContext) -> Optional[str]:
        number = read_number(value)
        if number is None:
            return f"{ctx.label} doit être un nombre"
        # Zero is accepted; only negatives fail.
        if number < 0:
            return f"{ctx.label} doit être positif"
        return None
