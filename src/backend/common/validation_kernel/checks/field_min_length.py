from __future__ import annotations

from collections.abc import Sized
from typing import Any, Optional

from ..context import FieldContext
from ..models import FieldRule
from ..registry import register_check
from ..rule import FieldCheck


@register_check
class FIELD_MIN_LENGTH(FieldCheck):
    check_id = "FIELD-MIN-LENGTH"
    priority = 20

    def applies(self, rule: FieldRule, value: Any) -> bool:
        return bool(rule.min_length)

    def validate(self, value: Any, rule: FieldRule, ctx: FieldContext) -> Optional[str]:
        # An empty optional value still fails: a minimum length implies content.
        if not value or (isinstance(value, Sized) and len(value) < rule.min_length):
            return f"{ctx.label} doit contenir au moins {rule.min_length} caractères"
        return None
