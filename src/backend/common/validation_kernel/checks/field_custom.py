from __future__ import annotations

from typing import Any, Optional

from ..context import FieldContext
from ..models import FieldRule
from ..registry import register_check
from ..rule import FieldCheck


@register_check
class FIELD_CUSTOM(FieldCheck):
    check_id = "FIELD-CUSTOM"
    priority = 80

    def applies(self, rule: FieldRule, value: Any) -> bool:
        return rule.custom is not None

    def validate(self, value: Any, rule: FieldRule, ctx: FieldContext) -> Optional[str]:
        message = rule.custom(value, ctx.record)
        return message or None
