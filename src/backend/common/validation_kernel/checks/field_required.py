from __future__ import annotations

from typing import Any, Optional

from ..context import FieldContext
from ..models import FieldRule
from ..registry import register_check
from ..rule import FieldCheck


def is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return value.strip() == ""
    return False


@register_check
class FIELD_REQUIRED(FieldCheck):
    check_id = "FIELD-REQUIRED"
    priority = 10

    def applies(self, rule: FieldRule, value: Any) -> bool:
        return rule.required

    def validate(self, value: Any, rule: FieldRule, ctx: FieldContext) -> Optional[str]:
        if is_blank(value):
            return f"{ctx.label} est requis"
        return None
