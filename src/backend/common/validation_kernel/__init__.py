"""Validation and monetary computation kernel for SYSCOHADA bookkeeping documents.

This package contains only domain logic:
- Form records are validated against declarative rule sets.
- Money is fixed-point `Decimal`, rounded half-up to 2 places after each step.
- Accounting entries move `draft -> validated | cancelled` under a balance guard.
No persistence or HTTP lives here.
"""

from .config import KernelConfig, get_kernel_config
from .documents import (
    EntryTransitionError,
    account_record,
    calculate_entry_totals,
    check_transition,
    is_entry_balanced,
    is_valid_amount,
    is_valid_quantity,
    set_line_amount,
    transition_entry,
    update_invoice_line,
    validate_account,
    validate_accounting_entry,
    validate_entry_draft,
    validate_entry_lines,
)
from .evaluator import FormValidator, validate_field, validate_form
from .models import (
    Account,
    AccountingEntry,
    AccountingEntryLine,
    AccountType,
    EntryStatus,
    EntryTotals,
    EntryValidationReport,
    FieldRule,
    InvoiceLine,
    LineSide,
    TransitionVerdict,
    ValidationResult,
)
from .money import InvoiceTotals, calculate_invoice_total
from .rule_sets import RULE_SETS, get_rule_set

# Import built-in checks so they self-register with the global registry.
from . import checks as _builtin_checks  # noqa: F401
