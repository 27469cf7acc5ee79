from __future__ import annotations

from typing import Dict, Iterable, Type

from .rule import FieldCheck


class CheckRegistry:
    def __init__(self):
        self._checks: Dict[str, Type[FieldCheck]] = {}

    def register(self, check_cls: Type[FieldCheck]) -> None:
        check_id = getattr(check_cls, "check_id", None)
        if not check_id:
            raise ValueError("Check class missing check_id")
        if check_id in self._checks:
            raise ValueError(f"Duplicate check_id registered: {check_id}")
        priority = getattr(check_cls, "priority", None)
        if priority is None:
            raise ValueError(f"Check class {check_id} missing priority")
        for other in self._checks.values():
            if other.priority == priority:
                raise ValueError(f"Checks {other.check_id} and {check_id} share priority {priority}")
        self._checks[check_id] = check_cls

    def create_all(self) -> list[FieldCheck]:
        """Instantiate every check in evaluation order."""
        ordered = sorted(self._checks.values(), key=lambda cls: cls.priority)
        return [cls() for cls in ordered]

    def get(self, check_id: str) -> Type[FieldCheck]:
        return self._checks[check_id]

    def ids(self) -> Iterable[str]:
        return [cls.check_id for cls in sorted(self._checks.values(), key=lambda cls: cls.priority)]


registry = CheckRegistry()


def register_check(check_cls: Type[FieldCheck]) -> Type[FieldCheck]:
    registry.register(check_cls)
    return check_cls
