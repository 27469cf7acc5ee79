from datetime import date
from decimal import Decimal

import pytest

from adapters.forms import (
    FormPayloadError,
    entry_draft_from_payload,
    entry_from_payload,
    entry_line_from_payload,
    invoice_draft_from_payload,
)
from adapters.forms.payloads import amount_or_zero
from common.validation_kernel.models import EntryStatus


def test_entry_payload_accepts_camel_case_and_string_amounts():
    entry = entry_from_payload(
        {
            "date": "2024-03-31",
            "reference": "AC-001",
            "description": "Achat fournitures",
            "journal": "purchases",
            "lines": [
                {"accountCode": "605", "accountName": "Fournitures", "debit": "59.97"},
                {"account_code": "401", "credit": 59.97, "debit": ""},
            ],
        }
    )
    assert entry.date == date(2024, 3, 31)
    assert entry.status == EntryStatus.DRAFT
    assert entry.lines[0].account_code == "605"
    assert entry.lines[0].debit == Decimal("59.97")
    assert entry.lines[1].credit == Decimal("59.97")
    assert entry.lines[1].debit == Decimal("0")


def test_missing_amounts_default_to_zero():
    line = entry_line_from_payload({"account_code": "411"})
    assert line.debit == Decimal("0")
    assert line.credit == Decimal("0")


def test_two_sided_line_is_rejected_with_line_key():
    with pytest.raises(FormPayloadError) as excinfo:
        entry_line_from_payload({"account_code": "411", "debit": 10, "credit": 5}, index=2)
    assert excinfo.value.errors == {
        "lines.2.amount": "Une ligne ne peut pas avoir à la fois débit et crédit"
    }


def test_entry_payload_collects_errors():
    with pytest.raises(FormPayloadError) as excinfo:
        entry_from_payload(
            {
                "reference": "AC-002",
                "lines": [{"account_code": "411", "debit": 1, "credit": 1}, "not a line"],
            }
        )
    assert set(excinfo.value.errors) == {"lines.0.amount", "lines.1"}


def test_entry_payload_rejects_bad_shapes():
    with pytest.raises(FormPayloadError):
        entry_from_payload(["not", "an", "object"])
    with pytest.raises(FormPayloadError) as excinfo:
        entry_from_payload({"lines": {"debit": 1}})
    assert excinfo.value.errors == {"lines": "Doit être une liste"}
    with pytest.raises(FormPayloadError) as excinfo:
        entry_from_payload({"date": "31/03/2024", "lines": []})
    assert "date" in excinfo.value.errors
    with pytest.raises(FormPayloadError) as excinfo:
        entry_from_payload({"status": "posted", "lines": []})
    assert "status" in excinfo.value.errors


def test_invoice_draft_totals():
    draft = invoice_draft_from_payload(
        {"items": [{"description": "Ciment", "quantity": 2, "unitPrice": 100}], "discountPct": 10, "taxRate": 18}
    )
    totals = draft.totals()
    assert totals.subtotal == Decimal("200.00")
    assert totals.total == Decimal("212.40")
    assert draft.lines[0].total == Decimal("200.00")


def test_invoice_draft_uses_default_tax_rate():
    draft = invoice_draft_from_payload({"lines": [{"quantity": 1, "unit_price": "100"}]}, default_tax_rate=18)
    assert draft.tax_rate == Decimal("18")
    assert draft.totals().total == Decimal("118.00")


def test_invoice_payload_errors():
    with pytest.raises(FormPayloadError) as excinfo:
        invoice_draft_from_payload({"lines": [{"quantity": 0, "unit_price": 10}], "discount": 150})
    assert set(excinfo.value.errors) == {"lines.0.quantity", "discount"}


def test_oversized_amount_reads_as_zero():
    assert amount_or_zero("1" + "0" * 30) == Decimal("0")
    assert amount_or_zero(1e30) == Decimal("0")
    line = entry_line_from_payload({"account_code": "411", "debit": "1" + "0" * 30, "credit": 5})
    assert line.debit == Decimal("0")
    assert line.credit == Decimal("5.00")


def test_entry_draft_keeps_two_sided_lines():
    draft = entry_draft_from_payload(
        {
            "date": "2024-03-31",
            "reference": "OD-003",
            "description": "Correction",
            "lines": [{"accountCode": "411", "debit": "10", "credit": 5}],
        }
    )
    assert draft.entry.date == date(2024, 3, 31)
    assert draft.entry.journal == "general"
    assert draft.entry.lines == ()
    assert draft.lines == [
        {
            "account_code": "411",
            "account_name": "",
            "description": "",
            "debit": Decimal("10.00"),
            "credit": Decimal("5.00"),
        }
    ]
    report = draft.report()
    assert report.lines.errors == {
        "lines.0.amount": "Une ligne ne peut pas avoir à la fois un débit et un crédit"
    }
    assert report.can_validate is False


def test_entry_draft_rejects_bad_header_and_shapes():
    with pytest.raises(FormPayloadError) as excinfo:
        entry_draft_from_payload({"date": "not a date", "status": "archived", "lines": [42]})
    assert set(excinfo.value.errors) == {"date", "status", "lines.0"}
    with pytest.raises(FormPayloadError) as excinfo:
        entry_draft_from_payload({"lines": "x"})
    assert excinfo.value.errors == {"lines": "Doit être une liste"}
