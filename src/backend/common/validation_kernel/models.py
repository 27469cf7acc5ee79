from __future__ import annotations

import datetime as dt
from decimal import Decimal
from enum import Enum
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, computed_field, model_validator

from .money import ZERO, multiply

CustomCheck = Callable[[Any, Mapping[str, Any]], Optional[str]]


class EntryStatus(str, Enum):
    DRAFT = "draft"
    VALIDATED = "validated"
    CANCELLED = "cancelled"


class AccountType(str, Enum):
    ASSET = "asset"
    LIABILITY = "liability"
    EQUITY = "equity"
    REVENUE = "revenue"
    EXPENSE = "expense"


class LineSide(str, Enum):
    DEBIT = "debit"
    CREDIT = "credit"

    @property
    def opposite(self) -> "LineSide":
        return LineSide.CREDIT if self is LineSide.DEBIT else LineSide.DEBIT


class FieldRule(BaseModel):
    """Declarative checks attached to one named field.

    Checks run in a fixed order and the first failure wins; see
    `evaluator.validate_form`.
    """

    model_config = ConfigDict(frozen=True)

    required: bool = False
    min_length: Optional[int] = None
    max_length: Optional[int] = None
    min: Optional[Decimal] = None
    max: Optional[Decimal] = None
    email: bool = False
    phone: bool = False
    positive: bool = False
    # Receives the field value and the whole record, for cross-field checks.
    custom: Optional[CustomCheck] = None
    label: Optional[str] = None

    def display_label(self, field: str) -> str:
        return self.label or field


class ValidationResult(BaseModel):
    errors: Dict[str, str] = Field(default_factory=dict)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def is_valid(self) -> bool:
        return not self.errors

    def error_for(self, field: str) -> Optional[str]:
        return self.errors.get(field)

    def __contains__(self, field: object) -> bool:
        return field in self.errors


class InvoiceLine(BaseModel):
    model_config = ConfigDict(frozen=True)

    description: str = ""
    quantity: int = Field(default=1, gt=0)
    unit_price: Decimal = Field(default=ZERO, ge=0)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def total(self) -> Decimal:
        return multiply(self.unit_price, self.quantity)


class AccountingEntryLine(BaseModel):
    model_config = ConfigDict(frozen=True)

    account_code: str = ""
    account_name: str = ""
    description: str = ""
    debit: Decimal = ZERO
    credit: Decimal = ZERO

    @model_validator(mode="after")
    def _single_sided(self) -> "AccountingEntryLine":
        if self.debit != 0 and self.credit != 0:
            raise ValueError("Une ligne ne peut pas avoir à la fois débit et crédit")
        return self

    def amount(self, side: LineSide) -> Decimal:
        return self.debit if side is LineSide.DEBIT else self.credit


class AccountingEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    date: Optional[dt.date] = None
    reference: str = ""
    description: str = ""
    journal: str = "general"
    status: EntryStatus = EntryStatus.DRAFT
    lines: Tuple[AccountingEntryLine, ...] = ()

    def header(self) -> Dict[str, Any]:
        return {
            "date": self.date,
            "reference": self.reference,
            "description": self.description,
            "journal": self.journal,
        }


class Account(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    account_number: str
    name: str
    type: AccountType
    account_class: int = Field(alias="class")

    def as_record(self) -> Dict[str, Any]:
        return {
            "account_number": self.account_number,
            "name": self.name,
            "type": self.type.value,
            "account_class": self.account_class,
        }


class EntryTotals(BaseModel):
    total_debit: Decimal = ZERO
    total_credit: Decimal = ZERO
    difference: Decimal = ZERO
    is_balanced: bool = True


class TransitionVerdict(BaseModel):
    current: EntryStatus
    target: EntryStatus
    allowed: bool
    reasons: List[str] = Field(default_factory=list)


class EntryValidationReport(BaseModel):
    header: ValidationResult = Field(default_factory=ValidationResult)
    lines: ValidationResult = Field(default_factory=ValidationResult)
    totals: EntryTotals = Field(default_factory=EntryTotals)
    can_validate: bool = False
    reasons: List[str] = Field(default_factory=list)
