from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from typing import Any, Mapping, Optional

from .config import KernelConfig


@dataclass(frozen=True)
class FieldContext:
    field: str
    label: str
    record: Mapping[str, Any] = field(default_factory=dict)
    config: KernelConfig = field(default_factory=KernelConfig)


def read_number(value: Any) -> Optional[Decimal]:
    """Numeric reading of a form value, `None` when it is not a number.

    Follows what browsers do with form input: a blank string reads as 0 while
    `None` and free text are not numbers. Infinite values are accepted.
    """
    if value is None:
        return None
    if isinstance(value, bool):
        return Decimal(int(value))
    if isinstance(value, Decimal):
        return None if value.is_nan() else value
    if isinstance(value, int):
        return Decimal(value)
    if isinstance(value, float):
        if value != value:
            return None
        return Decimal(repr(value)) if abs(value) != float("inf") else Decimal(value)
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return Decimal(0)
        try:
            number = Decimal(text)
        except InvalidOperation:
            return None
        return None if number.is_nan() else number
    return None
