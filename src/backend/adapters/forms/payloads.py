from __future__ import annotations

from decimal import Decimal
from typing import Any, Mapping

from pydantic import ValidationError

from common.validation_kernel.money import ZERO, coerce_decimal, quantize


class FormPayloadError(ValueError):
    """A form payload that cannot be turned into a model; `errors` maps field -> message."""

    def __init__(self, errors: dict[str, str]):
        self.errors = dict(errors)
        detail = "; ".join(f"{field}: {message}" for field, message in self.errors.items())
        super().__init__(f"Invalid form payload ({detail})")


def pick(payload: Mapping[str, Any], *keys: str, default: Any = None) -> Any:
    """First present key among snake_case / camelCase spellings."""
    for key in keys:
        if key in payload and payload[key] is not None:
            return payload[key]
    return default


def amount_or_zero(value: Any) -> Decimal:
    # Emptied or unreadable amount inputs read as 0 in the forms.
    amount = coerce_decimal(value)
    return quantize(amount) if amount is not None else ZERO


def require_mapping(payload: Any, what: str) -> Mapping[str, Any]:
    if not isinstance(payload, Mapping):
        raise FormPayloadError({what: "Doit être un objet JSON"})
    return payload


def errors_from_validation(exc: ValidationError, prefix: str = "") -> dict[str, str]:
    out: dict[str, str] = {}
    for err in exc.errors():
        loc = ".".join(str(part) for part in err.get("loc", ()))
        key = ".".join(part for part in (prefix, loc) if part) or "__root__"
        message = str(err.get("msg", "Valeur invalide"))
        if message.startswith("Value error, "):
            message = message[len("Value error, "):]
        out.setdefault(key, message)
    return out
