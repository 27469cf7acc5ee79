from __future__ import annotations

import logging
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, Field, ValidationError

from common.validation_kernel.models import InvoiceLine
from common.validation_kernel.money import InvoiceTotals, calculate_invoice_total
from .payloads import FormPayloadError, amount_or_zero, errors_from_validation, pick, require_mapping

logger = logging.getLogger(__name__)


class InvoiceDraft(BaseModel):
    lines: list[InvoiceLine] = Field(default_factory=list)
    discount: Decimal = Decimal("0")
    tax_rate: Decimal = Decimal("0")

    def totals(self) -> InvoiceTotals:
        return calculate_invoice_total(self.lines, self.discount, self.tax_rate)


def invoice_line_from_payload(payload: Any, index: int = 0) -> InvoiceLine:
    prefix = f"lines.{index}"
    line = require_mapping(payload, prefix)
    try:
        return InvoiceLine(
            description=str(pick(line, "description", default="")),
            quantity=pick(line, "quantity", default=1),
            unit_price=amount_or_zero(pick(line, "unit_price", "unitPrice", "price")),
        )
    except ValidationError as exc:
        raise FormPayloadError(errors_from_validation(exc, prefix)) from exc


def invoice_draft_from_payload(payload: Any, default_tax_rate: Any = 0) -> InvoiceDraft:
    """
    Build an invoice draft from a form payload.

    Accepts `items` or `lines`, `discount` / `discountPct` and `tax_rate` /
    `taxRate` / `vatRate`. A missing tax rate falls back to `default_tax_rate`.
    """
    data = require_mapping(payload, "invoice")
    raw_lines = pick(data, "lines", "items", default=[])
    if not isinstance(raw_lines, list):
        raise FormPayloadError({"lines": "Doit être une liste"})

    errors: dict[str, str] = {}
    lines: list[InvoiceLine] = []
    for index, raw in enumerate(raw_lines):
        try:
            lines.append(invoice_line_from_payload(raw, index))
        except FormPayloadError as exc:
            errors.update(exc.errors)

    discount = amount_or_zero(pick(data, "discount", "discount_pct", "discountPct", default=0))
    tax_rate = amount_or_zero(pick(data, "tax_rate", "taxRate", "vat_rate", "vatRate", default=default_tax_rate))
    if not Decimal(0) <= discount <= Decimal(100):
        errors["discount"] = "La remise doit être entre 0 et 100"
    if not Decimal(0) <= tax_rate <= Decimal(100):
        errors["tax_rate"] = "Le taux de TVA doit être entre 0 et 100"

    if errors:
        logger.warning("Rejected invoice payload: %s", errors)
        raise FormPayloadError(errors)
    return InvoiceDraft(lines=lines, discount=discount, tax_rate=tax_rate)
