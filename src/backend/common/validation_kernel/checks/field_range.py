from __future__ import annotations

from decimal import Decimal
from typing import Any, Optional

from ..context import FieldContext, read_number
from ..models import FieldRule
from ..registry import register_check
from ..rule import FieldCheck


def _bound(value: Optional[Decimal], open_end: str) -> str:
    return open_end if value is None else str(value)


@register_check
class FIELD_RANGE(FieldCheck):
    check_id = "FIELD-RANGE"
    priority = 60

    def applies(self, rule: FieldRule, value: Any) -> bool:
        return rule.min is not None or rule.max is not None

    def validate(self, value: Any, rule: FieldRule, ctx: FieldContext) -> Optional[str]:
        number = read_number(value)
        if number is None:
            return f"{ctx.label} doit être un nombre"
        too_low = rule.min is not None and number < rule.min
        too_high = rule.max is not None and number > rule.max
        if too_low or too_high:
            return f"{ctx.label} doit être entre {_bound(rule.min, '-∞')} et {_bound(rule.max, '∞')}"
        return None
