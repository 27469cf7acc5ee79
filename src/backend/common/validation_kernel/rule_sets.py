"""Rule sets declared once per document type.

Records use snake_case field names. Rule sets are read-only mappings; build a
new mapping (e.g. `{**INVOICE_RULES, "extra": FieldRule(...)}`) to extend one.
"""

from __future__ import annotations

import datetime as dt
from types import MappingProxyType
from typing import Any, Mapping, Optional

from .checksums import is_valid_ean13, is_valid_iban
from .context import read_number
from .formats import (
    is_valid_currency,
    is_valid_fiscal_year,
    is_valid_ninea,
    is_valid_rc,
    is_valid_syscohada_code,
)
from .models import AccountType, FieldRule
from .syscohada import account_class_number

RuleSet = Mapping[str, FieldRule]

CUSTOMER_TYPES = ("individual", "company")
JOURNALS = ("general", "sales", "purchases", "bank", "cash", "operations")


def _as_date(value: Any) -> Optional[dt.date]:
    if isinstance(value, dt.datetime):
        return value.date()
    if isinstance(value, dt.date):
        return value
    if isinstance(value, str):
        try:
            return dt.date.fromisoformat(value.strip())
        except ValueError:
            return None
    return None


def _due_after_issue(value: Any, record: Mapping[str, Any]) -> Optional[str]:
    due, issued = _as_date(value), _as_date(record.get("date"))
    if due is None or issued is None:
        return None
    if due < issued:
        return "La date d'échéance doit être postérieure à la date de facture"
    return None


def _selling_not_below_purchase(value: Any, record: Mapping[str, Any]) -> Optional[str]:
    selling, purchase = read_number(value), read_number(record.get("purchase_price"))
    if selling is None or purchase is None:
        return None
    if selling < purchase:
        return "Le prix de vente doit être supérieur au prix d'achat"
    return None


def _optional_ean13(value: Any, record: Mapping[str, Any]) -> Optional[str]:
    if value and not is_valid_ean13(value):
        return "Code barres EAN-13 invalide"
    return None


def _one_of(allowed: tuple[str, ...], message: str):
    def check(value: Any, record: Mapping[str, Any]) -> Optional[str]:
        if value and value not in allowed:
            return message
        return None

    return check


def _syscohada_code(value: Any, record: Mapping[str, Any]) -> Optional[str]:
    if value and not is_valid_syscohada_code(value):
        return "Code compte SYSCOHADA invalide (classe 1-8, jusqu'à 7 chiffres)"
    return None


def _class_matches_number(value: Any, record: Mapping[str, Any]) -> Optional[str]:
    expected = account_class_number(record.get("account_number"))
    number = read_number(value)
    if expected is None or number is None:
        return None
    if number != expected:
        return f"La classe doit correspondre au premier chiffre du numéro de compte ({expected})"
    return None


def _iban(value: Any, record: Mapping[str, Any]) -> Optional[str]:
    if value and not is_valid_iban(value):
        return "IBAN invalide"
    return None


def _currency(value: Any, record: Mapping[str, Any]) -> Optional[str]:
    if value and not is_valid_currency(value):
        return "Devise non supportée"
    return None


def _ninea(value: Any, record: Mapping[str, Any]) -> Optional[str]:
    if value and not is_valid_ninea(value):
        return "NINEA invalide (7 chiffres)"
    return None


def _rc(value: Any, record: Mapping[str, Any]) -> Optional[str]:
    if value and not is_valid_rc(value):
        return "Numéro RC invalide (format SN-XXX-AAAA-X-XXXXX)"
    return None


def _fiscal_year(value: Any, record: Mapping[str, Any]) -> Optional[str]:
    if value and not is_valid_fiscal_year(str(value)):
        return "Exercice invalide (AAAA, entre 2000 et 2100)"
    return None


INVOICE_RULES: RuleSet = MappingProxyType(
    {
        "number": FieldRule(required=True, label="Numéro de facture"),
        "date": FieldRule(required=True, label="Date"),
        "due_date": FieldRule(required=True, label="Date d'échéance", custom=_due_after_issue),
        "discount": FieldRule(min=0, max=100, label="Remise"),
        "tax_rate": FieldRule(min=0, max=100, label="Taux de TVA"),
    }
)

CUSTOMER_RULES: RuleSet = MappingProxyType(
    {
        "name": FieldRule(required=True, min_length=3, label="Nom"),
        "email": FieldRule(email=True, label="Email"),
        "phone": FieldRule(required=True, phone=True, label="Téléphone"),
        "address": FieldRule(required=True, label="Adresse"),
        "city": FieldRule(required=True, label="Ville"),
        "type": FieldRule(
            required=True,
            label="Type",
            custom=_one_of(CUSTOMER_TYPES, "Type de client invalide"),
        ),
    }
)

PRODUCT_RULES: RuleSet = MappingProxyType(
    {
        "reference": FieldRule(required=True, label="Référence"),
        "name": FieldRule(required=True, min_length=3, label="Nom du produit"),
        "category": FieldRule(required=True, label="Catégorie"),
        "unit": FieldRule(required=True, label="Unité"),
        "purchase_price": FieldRule(required=True, positive=True, label="Prix d'achat"),
        "selling_price": FieldRule(
            required=True,
            positive=True,
            label="Prix de vente",
            custom=_selling_not_below_purchase,
        ),
        "min_stock": FieldRule(required=True, positive=True, label="Stock minimum"),
        "barcode": FieldRule(label="Code barres", custom=_optional_ean13),
    }
)

ACCOUNTING_ENTRY_RULES: RuleSet = MappingProxyType(
    {
        "date": FieldRule(required=True, label="Date"),
        "reference": FieldRule(required=True, label="Référence"),
        "description": FieldRule(required=True, label="Description"),
        "journal": FieldRule(
            required=True,
            label="Journal",
            custom=_one_of(JOURNALS, "Journal inconnu"),
        ),
    }
)

ACCOUNT_RULES: RuleSet = MappingProxyType(
    {
        "account_number": FieldRule(required=True, label="Numéro de compte", custom=_syscohada_code),
        "name": FieldRule(required=True, min_length=3, max_length=200, label="Libellé"),
        "type": FieldRule(
            required=True,
            label="Type",
            custom=_one_of(tuple(t.value for t in AccountType), "Type de compte invalide"),
        ),
        "account_class": FieldRule(
            required=True,
            min=1,
            max=8,
            label="Classe",
            custom=_class_matches_number,
        ),
    }
)

BANK_ACCOUNT_RULES: RuleSet = MappingProxyType(
    {
        "bank_name": FieldRule(required=True, label="Banque"),
        "account_name": FieldRule(required=True, label="Intitulé du compte"),
        "iban": FieldRule(required=True, label="IBAN", custom=_iban),
        "currency": FieldRule(label="Devise", custom=_currency),
    }
)

COMPANY_RULES: RuleSet = MappingProxyType(
    {
        "name": FieldRule(required=True, min_length=3, label="Raison sociale"),
        "email": FieldRule(email=True, label="Email"),
        "phone": FieldRule(phone=True, label="Téléphone"),
        "ninea": FieldRule(label="NINEA", custom=_ninea),
        "rc": FieldRule(label="RC", custom=_rc),
        "fiscal_year": FieldRule(label="Exercice", custom=_fiscal_year),
    }
)

RULE_SETS: Mapping[str, RuleSet] = MappingProxyType(
    {
        "invoice": INVOICE_RULES,
        "customer": CUSTOMER_RULES,
        "product": PRODUCT_RULES,
        "accounting_entry": ACCOUNTING_ENTRY_RULES,
        "account": ACCOUNT_RULES,
        "bank_account": BANK_ACCOUNT_RULES,
        "company": COMPANY_RULES,
    }
)


def get_rule_set(name: str) -> RuleSet:
    return RULE_SETS[name]
