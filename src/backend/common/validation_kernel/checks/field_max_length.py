from __future__ import annotations

from collections.abc import Sized
from typing import Any, Optional

from ..context import FieldContext
from ..models import FieldRule
from ..registry import register_check
from ..rule import FieldCheck


@register_check
class FIELD_MAX_LENGTH(FieldCheck):
    check_id = "FIELD-MAX-LENGTH"
    priority = 30

    def applies(self, rule: FieldRule, value: Any) -> bool:
        return bool(rule.max_length)

    def validate(self, value: Any, rule: FieldRule, ctx: FieldContext) -> Optional[str]:
        if value and isinstance(value, Sized) and len(value) > rule.max_length:
            return f"{ctx.label} ne doit pas dépasser {rule.max_length} caractères"
        return None
