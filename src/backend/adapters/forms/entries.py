from __future__ import annotations

import logging
from typing import Any, Optional

from pydantic import BaseModel, Field, ValidationError

from common.validation_kernel.config import KernelConfig
from common.validation_kernel.documents import validate_entry_draft
from common.validation_kernel.models import AccountingEntry, AccountingEntryLine, EntryValidationReport
from .payloads import FormPayloadError, amount_or_zero, errors_from_validation, pick, require_mapping

logger = logging.getLogger(__name__)


class EntryDraft(BaseModel):
    """An entry as typed in the form: a checked header and raw, normalised lines."""

    entry: AccountingEntry
    lines: list[dict[str, Any]] = Field(default_factory=list)

    def report(self, config: Optional[KernelConfig] = None) -> EntryValidationReport:
        return validate_entry_draft(self.entry.header(), self.lines, self.entry.status, config)


def _line_fields(line: dict[str, Any]) -> dict[str, Any]:
    return {
        "account_code": str(pick(line, "account_code", "accountCode", "account", default="")).strip(),
        "account_name": str(pick(line, "account_name", "accountName", default="")),
        "description": str(pick(line, "description", default="")),
        "debit": amount_or_zero(line.get("debit")),
        "credit": amount_or_zero(line.get("credit")),
    }


def _raw_lines(data: dict[str, Any]) -> list[Any]:
    raw_lines = data.get("lines") or []
    if not isinstance(raw_lines, list):
        raise FormPayloadError({"lines": "Doit être une liste"})
    return raw_lines


def _entry_header(data: dict[str, Any]) -> dict[str, Any]:
    header = {
        "date": pick(data, "date", default=None) or None,
        "reference": str(pick(data, "reference", default="")),
        "description": str(pick(data, "description", default="")),
        "journal": str(pick(data, "journal", default="general")),
    }
    status = pick(data, "status", default=None)
    if status is not None:
        header["status"] = status
    return header


def entry_line_from_payload(payload: Any, index: int = 0) -> AccountingEntryLine:
    """
    Build one accounting entry line from a form payload.

    Accepts:
    - {"account_code": "411", "debit": 100, "credit": 0}
    - {"accountCode": "411", "accountName": "Clients", "debit": "100.00"}
    Missing or unreadable amounts read as 0.
    """
    prefix = f"lines.{index}"
    line = require_mapping(payload, prefix)
    try:
        return AccountingEntryLine(**_line_fields(line))
    except ValidationError as exc:
        errors = errors_from_validation(exc, prefix)
        # Model-level failures carry an empty location; report them on the line.
        if prefix in errors:
            errors[f"{prefix}.amount"] = errors.pop(prefix)
        raise FormPayloadError(errors) from exc


def entry_from_payload(payload: Any) -> AccountingEntry:
    """Build an `AccountingEntry` from a form payload, collecting every line error."""
    data = require_mapping(payload, "entry")
    raw_lines = _raw_lines(data)

    errors: dict[str, str] = {}
    lines: list[AccountingEntryLine] = []
    for index, raw in enumerate(raw_lines):
        try:
            lines.append(entry_line_from_payload(raw, index))
        except FormPayloadError as exc:
            errors.update(exc.errors)

    header = _entry_header(data)
    if not errors:
        try:
            return AccountingEntry(**header, lines=tuple(lines))
        except ValidationError as exc:
            errors.update(errors_from_validation(exc))

    logger.warning("Rejected accounting entry payload %s: %s", header["reference"] or "<no reference>", errors)
    raise FormPayloadError(errors)


def entry_draft_from_payload(payload: Any) -> EntryDraft:
    """
    Read an entry still being edited.

    Unlike `entry_from_payload`, a line carrying both a debit and a credit is
    kept so the report can flag it; only malformed payloads are rejected.
    """
    data = require_mapping(payload, "entry")
    errors: dict[str, str] = {}
    lines: list[dict[str, Any]] = []
    for index, raw in enumerate(_raw_lines(data)):
        try:
            lines.append(_line_fields(require_mapping(raw, f"lines.{index}")))
        except FormPayloadError as exc:
            errors.update(exc.errors)

    header = _entry_header(data)
    try:
        entry = AccountingEntry(**header)
    except ValidationError as exc:
        errors.update(errors_from_validation(exc))
    if errors:
        logger.warning("Rejected accounting entry draft %s: %s", header["reference"] or "<no reference>", errors)
        raise FormPayloadError(errors)
    return EntryDraft(entry=entry, lines=lines)
