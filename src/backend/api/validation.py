from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Body, HTTPException, Query

from adapters.forms import FormPayloadError, entry_draft_from_payload, entry_from_payload, invoice_draft_from_payload
from common.validation_kernel import (
    EntryStatus,
    EntryTransitionError,
    get_kernel_config,
    get_rule_set,
    transition_entry,
    validate_account,
    validate_form,
)
from common.validation_kernel.money import format_currency


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/validation", tags=["validation"])


def _payload_error(exc: FormPayloadError) -> HTTPException:
    return HTTPException(status_code=422, detail={"message": "Données invalides", "errors": exc.errors})


@router.post("/forms/{rule_set}")
def validate_record(rule_set: str, record: dict[str, Any] = Body(...)):
    try:
        rules = get_rule_set(rule_set)
    except KeyError:
        raise HTTPException(status_code=404, detail=f"Unknown rule set: {rule_set}")
    config = get_kernel_config()
    if rule_set == "account":
        result = validate_account(record, config=config)
    else:
        result = validate_form(record, rules, config=config)
    if not result.is_valid:
        logger.debug("Record rejected by %s rules: %s", rule_set, result.errors)
    return result.model_dump()


@router.post("/invoices/totals")
def invoice_totals(payload: dict[str, Any] = Body(...)):
    config = get_kernel_config()
    try:
        draft = invoice_draft_from_payload(payload, default_tax_rate=config.default_tax_rate)
    except FormPayloadError as exc:
        raise _payload_error(exc)
    totals = draft.totals()
    body = totals.model_dump(mode="json")
    body["display"] = {
        name: format_currency(amount, config.currency_symbol) for name, amount in totals.model_dump().items()
    }
    return body


@router.post("/accounting-entries")
def accounting_entry_report(payload: dict[str, Any] = Body(...)):
    try:
        draft = entry_draft_from_payload(payload)
    except FormPayloadError as exc:
        raise _payload_error(exc)
    return draft.report(config=get_kernel_config()).model_dump(mode="json")


@router.post("/accounting-entries/transition")
def accounting_entry_transition(
    target: EntryStatus = Query(...),
    payload: dict[str, Any] = Body(...),
):
    try:
        entry = entry_from_payload(payload)
    except FormPayloadError as exc:
        raise _payload_error(exc)
    try:
        updated = transition_entry(entry, target, config=get_kernel_config())
    except EntryTransitionError as exc:
        raise HTTPException(
            status_code=422,
            detail={"message": "Transition refusée", "reasons": exc.reasons},
        )
    return updated.model_dump(mode="json")
