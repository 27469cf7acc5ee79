from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Optional

from .context import FieldContext
from .models import FieldRule


class FieldCheck(ABC):
    """One step of the per-field check chain.

    Subclasses declare a unique `check_id` and a `priority`; lower priorities
    run first and the first check returning a message ends the chain.
    """

    check_id: str
    priority: int

    def __init__(self):
        if not getattr(self, "check_id", None):
            raise ValueError("FieldCheck must define check_id")
        if getattr(self, "priority", None) is None:
            raise ValueError(f"FieldCheck {self.check_id} must define priority")

    @abstractmethod
    def applies(self, rule: FieldRule, value: Any) -> bool:  # pragma: no cover
        raise NotImplementedError

    @abstractmethod
    def validate(self, value: Any, rule: FieldRule, ctx: FieldContext) -> Optional[str]:  # pragma: no cover
        raise NotImplementedError
