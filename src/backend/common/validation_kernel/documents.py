"""Document-level validation: invoice lines, accounting entries and their status flow.

Field-level problems are reported as messages; cross-field problems (an
unbalanced entry, an entry without lines) only block the `draft -> validated`
transition, so drafts may stay inconsistent while they are being edited.
"""

from __future__ import annotations

import logging
import math
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Union

from .config import KernelConfig
from .evaluator import validate_form
from .models import (
    Account,
    AccountingEntry,
    AccountingEntryLine,
    EntryStatus,
    EntryTotals,
    EntryValidationReport,
    InvoiceLine,
    LineSide,
    TransitionVerdict,
    ValidationResult,
)
from .money import ZERO, coerce_decimal, quantize
from .rule_sets import ACCOUNT_RULES, ACCOUNTING_ENTRY_RULES
from .syscohada import account_class_number

logger = logging.getLogger(__name__)

LineLike = Union[AccountingEntryLine, Mapping[str, Any]]

_INVOICE_LINE_FIELDS = ("description", "quantity", "unit_price")

_ALLOWED_TRANSITIONS = {
    EntryStatus.DRAFT: (EntryStatus.VALIDATED, EntryStatus.CANCELLED),
    EntryStatus.VALIDATED: (),
    EntryStatus.CANCELLED: (),
}


class EntryTransitionError(ValueError):
    """Raised when an accounting entry cannot move to the requested status."""

    def __init__(self, verdict: TransitionVerdict):
        self.verdict = verdict
        detail = "; ".join(verdict.reasons)
        super().__init__(
            f"Transition {verdict.current.value} -> {verdict.target.value} refusée: {detail}"
        )

    @property
    def reasons(self) -> List[str]:
        return list(self.verdict.reasons)


def _line_amount(line: LineLike, side: LineSide) -> Decimal:
    if isinstance(line, AccountingEntryLine):
        return line.amount(side)
    value = line.get(side.value) if isinstance(line, Mapping) else getattr(line, side.value, None)
    amount = coerce_decimal(value)
    return quantize(amount) if amount is not None else ZERO


def calculate_entry_totals(
    lines: Iterable[LineLike],
    tolerance: Optional[Decimal] = None,
) -> EntryTotals:
    """Sum both sides of an entry; missing or non-numeric amounts count as 0."""
    if tolerance is None:
        tolerance = KernelConfig().balance_tolerance
    total_debit = ZERO
    total_credit = ZERO
    for line in lines:
        total_debit += _line_amount(line, LineSide.DEBIT)
        total_credit += _line_amount(line, LineSide.CREDIT)
    difference = quantize(total_debit - total_credit)
    return EntryTotals(
        total_debit=quantize(total_debit),
        total_credit=quantize(total_credit),
        difference=difference,
        is_balanced=abs(difference) < tolerance,
    )


def is_entry_balanced(lines: Iterable[LineLike], tolerance: Optional[Decimal] = None) -> bool:
    return calculate_entry_totals(lines, tolerance).is_balanced


def set_line_amount(line: AccountingEntryLine, side: Union[LineSide, str], value: Any) -> AccountingEntryLine:
    """Return a copy of `line` with `side` set to `value`.

    Setting a non-zero amount clears the opposite side in the same update, so
    a line never carries both a debit and a credit. Unreadable input counts
    as 0, like an emptied form field.
    """
    side = LineSide(side)
    amount = coerce_decimal(value)
    amount = quantize(amount) if amount is not None else ZERO
    opposite = ZERO if amount != 0 else line.amount(side.opposite)
    return line.model_copy(update={side.value: amount, side.opposite.value: opposite})


def update_invoice_line(line: InvoiceLine, field: str, value: Any) -> InvoiceLine:
    """Return a new invoice line with one field changed and its total recomputed.

    Raises ValueError for unknown fields and pydantic's ValidationError for
    values the line cannot hold (e.g. a zero quantity).
    """
    if field not in _INVOICE_LINE_FIELDS:
        raise ValueError(f"Unknown invoice line field: {field}")
    data = line.model_dump(include=set(_INVOICE_LINE_FIELDS))
    data[field] = value
    return InvoiceLine.model_validate(data)


def is_valid_amount(
    amount: Any,
    *,
    min: Union[int, float, Decimal] = 0,
    max: Union[int, float, Decimal] = math.inf,
    allow_negative: bool = False,
) -> bool:
    if isinstance(amount, bool) or not isinstance(amount, (int, float, Decimal)):
        return False
    if isinstance(amount, Decimal):
        if amount.is_nan():
            return False
    elif isinstance(amount, float) and math.isnan(amount):
        return False
    if not allow_negative and amount < 0:
        return False
    return min <= amount <= max


def is_valid_quantity(quantity: Any) -> bool:
    if isinstance(quantity, bool):
        return False
    if isinstance(quantity, float):
        return quantity.is_integer() and quantity > 0
    return isinstance(quantity, int) and quantity > 0


def _line_code(line: LineLike) -> Any:
    if isinstance(line, AccountingEntryLine):
        return line.account_code
    if isinstance(line, Mapping):
        return line.get("account_code")
    return getattr(line, "account_code", None)


def _is_two_sided(line: LineLike) -> bool:
    return _line_amount(line, LineSide.DEBIT) != 0 and _line_amount(line, LineSide.CREDIT) != 0


def validate_entry_lines(lines: Iterable[LineLike]) -> ValidationResult:
    """Per-line diagnostics keyed `lines.<index>.<field>`.

    These are informational; only balance, two-sided lines and line count
    guard the transition.
    """
    errors: Dict[str, str] = {}
    for index, line in enumerate(lines):
        prefix = f"lines.{index}"
        code = _line_code(line)
        if not code:
            errors[f"{prefix}.account_code"] = "Le compte est requis"
        elif account_class_number(str(code)) is None:
            errors[f"{prefix}.account_code"] = "Code compte SYSCOHADA invalide"

        debit = _line_amount(line, LineSide.DEBIT)
        credit = _line_amount(line, LineSide.CREDIT)
        if debit < 0:
            errors[f"{prefix}.debit"] = "Le débit ne peut pas être négatif"
        if credit < 0:
            errors[f"{prefix}.credit"] = "Le crédit ne peut pas être négatif"
        if debit != 0 and credit != 0:
            errors[f"{prefix}.amount"] = "Une ligne ne peut pas avoir à la fois un débit et un crédit"
        elif debit == 0 and credit == 0:
            errors[f"{prefix}.amount"] = "Une ligne doit avoir soit un débit soit un crédit"
    return ValidationResult(errors=errors)


def _validation_blockers(
    header: ValidationResult,
    lines: Sequence[LineLike],
    totals: EntryTotals,
) -> List[str]:
    reasons: List[str] = list(header.errors.values())
    if not lines:
        reasons.append("L'écriture doit contenir au moins une ligne")
    if any(_is_two_sided(line) for line in lines):
        reasons.append("Une ligne ne peut pas avoir à la fois un débit et un crédit")
    if not totals.is_balanced:
        reasons.append(f"L'écriture n'est pas équilibrée (différence: {totals.difference})")
    return reasons


def check_transition(
    entry: AccountingEntry,
    target: Union[EntryStatus, str],
    config: Optional[KernelConfig] = None,
) -> TransitionVerdict:
    """Decide whether `entry` may move to `target` without changing it."""
    config = config or KernelConfig()
    target = EntryStatus(target)
    current = entry.status

    if target not in _ALLOWED_TRANSITIONS[current]:
        reason = (
            f"Statut {current.value} définitif"
            if not _ALLOWED_TRANSITIONS[current]
            else f"Transition {current.value} -> {target.value} non autorisée"
        )
        return TransitionVerdict(current=current, target=target, allowed=False, reasons=[reason])

    reasons: List[str] = []
    if target is EntryStatus.VALIDATED:
        header = validate_form(entry.header(), ACCOUNTING_ENTRY_RULES, config=config)
        totals = calculate_entry_totals(entry.lines, config.balance_tolerance)
        reasons = _validation_blockers(header, entry.lines, totals)
    return TransitionVerdict(current=current, target=target, allowed=not reasons, reasons=reasons)


def transition_entry(
    entry: AccountingEntry,
    target: Union[EntryStatus, str],
    config: Optional[KernelConfig] = None,
) -> AccountingEntry:
    """Return a copy of `entry` with its new status, or raise EntryTransitionError."""
    verdict = check_transition(entry, target, config)
    if not verdict.allowed:
        logger.warning(
            "Rejected transition for entry %s (%s -> %s): %s",
            entry.reference or "<no reference>",
            verdict.current.value,
            verdict.target.value,
            "; ".join(verdict.reasons),
        )
        raise EntryTransitionError(verdict)
    return entry.model_copy(update={"status": verdict.target})


def validate_entry_draft(
    header: Mapping[str, Any],
    lines: Iterable[LineLike],
    status: EntryStatus = EntryStatus.DRAFT,
    config: Optional[KernelConfig] = None,
) -> EntryValidationReport:
    """Report on an entry as it is being edited.

    Lines may be raw form mappings, including two-sided ones; those are
    reported and block validation instead of being rejected.
    """
    config = config or KernelConfig()
    lines = list(lines)
    header_result = validate_form(header, ACCOUNTING_ENTRY_RULES, config=config)
    totals = calculate_entry_totals(lines, config.balance_tolerance)
    reasons = _validation_blockers(header_result, lines, totals)
    return EntryValidationReport(
        header=header_result,
        lines=validate_entry_lines(lines),
        totals=totals,
        can_validate=status is EntryStatus.DRAFT and not reasons,
        reasons=reasons,
    )


def validate_accounting_entry(
    entry: AccountingEntry,
    config: Optional[KernelConfig] = None,
) -> EntryValidationReport:
    return validate_entry_draft(entry.header(), entry.lines, entry.status, config)


def account_record(account: Union[Account, Mapping[str, Any]]) -> Dict[str, Any]:
    """Snake_case record for `ACCOUNT_RULES`; a raw `class` key is read as `account_class`."""
    if isinstance(account, Account):
        return account.as_record()
    record = dict(account)
    if "class" in record and record.get("account_class") is None:
        record["account_class"] = record.pop("class")
    return record


def validate_account(
    account: Union[Account, Mapping[str, Any]],
    config: Optional[KernelConfig] = None,
) -> ValidationResult:
    return validate_form(account_record(account), ACCOUNT_RULES, config=config)
