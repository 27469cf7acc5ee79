import os
import sys


# Ensure `src/backend` is on sys.path so imports like `import common...` work.
BACKEND_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), "../.."))
if BACKEND_DIR not in sys.path:
    sys.path.insert(0, BACKEND_DIR)

from datetime import date
from decimal import Decimal

import pytest

from common.validation_kernel.models import AccountingEntry, AccountingEntryLine, EntryStatus


@pytest.fixture
def entry_date() -> date:
    return date(2024, 3, 31)


@pytest.fixture
def make_line():
    def _make(code: str = "411", *, debit=0, credit=0, name: str = "") -> AccountingEntryLine:
        return AccountingEntryLine(
            account_code=code,
            account_name=name,
            debit=Decimal(str(debit)),
            credit=Decimal(str(credit)),
        )

    return _make


@pytest.fixture
def make_entry(entry_date, make_line):
    def _make(
        *,
        lines=None,
        status: EntryStatus = EntryStatus.DRAFT,
        reference: str = "VE-2024-001",
        description: str = "Vente de marchandises",
        journal: str = "sales",
        on=entry_date,
    ) -> AccountingEntry:
        if lines is None:
            lines = [make_line("411", debit=100), make_line("701", credit=100)]
        return AccountingEntry(
            date=on,
            reference=reference,
            description=description,
            journal=journal,
            status=status,
            lines=tuple(lines),
        )

    return _make
