from __future__ import annotations

import os
from decimal import Decimal, InvalidOperation
from typing import Literal, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field


class KernelConfig(BaseModel):
    """Tunables shared by the evaluator and the document validators."""

    model_config = ConfigDict(frozen=True)

    # Entries are balanced when |debit - credit| is strictly below this.
    balance_tolerance: Decimal = Field(default=Decimal("0.01"), gt=0)
    # Which phone pattern `FieldRule(phone=True)` enforces.
    phone_format: Literal["senegal", "international"] = "senegal"
    default_tax_rate: Decimal = Field(default=Decimal("18"), ge=0, le=100)
    currency_symbol: str = "FCFA"


def get_kernel_config() -> KernelConfig:
    """
    Load kernel configuration from environment variables (and a local .env).

    Reads:
      KERNEL_BALANCE_TOLERANCE, KERNEL_PHONE_FORMAT,
      KERNEL_DEFAULT_TAX_RATE, KERNEL_CURRENCY_SYMBOL
    Unset variables keep their defaults.
    """
    load_dotenv()
    defaults = KernelConfig()

    phone_format = _optional_env("KERNEL_PHONE_FORMAT")
    if phone_format is not None:
        phone_format = phone_format.lower()
        if phone_format not in ("senegal", "international"):
            raise ValueError("KERNEL_PHONE_FORMAT must be 'senegal' or 'international'.")

    return KernelConfig(
        balance_tolerance=_decimal_env("KERNEL_BALANCE_TOLERANCE", defaults.balance_tolerance),
        phone_format=phone_format or defaults.phone_format,
        default_tax_rate=_decimal_env("KERNEL_DEFAULT_TAX_RATE", defaults.default_tax_rate),
        currency_symbol=_optional_env("KERNEL_CURRENCY_SYMBOL") or defaults.currency_symbol,
    )


def _optional_env(name: str) -> Optional[str]:
    value = os.getenv(name, "").strip()
    return value or None


def _decimal_env(name: str, default: Decimal) -> Decimal:
    raw = _optional_env(name)
    if raw is None:
        return default
    try:
        value = Decimal(raw)
    except InvalidOperation as exc:
        raise ValueError(f"{name} must be a decimal number, got {raw!r}") from exc
    if not value.is_finite():
        raise ValueError(f"{name} must be a finite decimal number, got {raw!r}")
    return value
