"""Adapters turning raw form payloads (JSON objects, no I/O) into kernel models."""

from .entries import EntryDraft, entry_draft_from_payload, entry_from_payload, entry_line_from_payload
from .invoices import InvoiceDraft, invoice_draft_from_payload, invoice_line_from_payload
from .payloads import FormPayloadError

__all__ = [
    "EntryDraft",
    "FormPayloadError",
    "InvoiceDraft",
    "entry_draft_from_payload",
    "entry_from_payload",
    "entry_line_from_payload",
    "invoice_draft_from_payload",
    "invoice_line_from_payload",
]
