from __future__ import annotations

import re
from datetime import date
from typing import Any, Literal

PhoneFormat = Literal["senegal", "international"]

EMAIL_RE = re.compile(r"^\w+(?:[.-]\w+)*@\w+(?:[.-]\w+)*\.\w{2,3}$", re.ASCII)
# Unprefixed mobile numbers: Orange (77/78), Expresso (70), Free (76), Promobile (75).
SENEGAL_PHONE_RE = re.compile(r"^(77|78|70|76|75)\d{7}$", re.ASCII)
INTERNATIONAL_PHONE_RE = re.compile(r"^\+?[1-9]\d{1,14}$", re.ASCII)
SYSCOHADA_CODE_RE = re.compile(r"^[1-8]\d{0,6}$", re.ASCII)
FISCAL_YEAR_RE = re.compile(r"^\d{4}$", re.ASCII)
ACCOUNTING_PERIOD_RE = re.compile(r"^\d{4}-(0[1-9]|1[0-2])$", re.ASCII)
NINEA_RE = re.compile(r"^\d{7}$", re.ASCII)
RC_RE = re.compile(r"^SN-[A-Z]{3}-\d{4}-[A-Z]-\d{5}$", re.ASCII)
CHECK_NUMBER_RE = re.compile(r"^\d{7,}$", re.ASCII)
POSTAL_CODE_RE = re.compile(r"^\d{5}$", re.ASCII)

FISCAL_YEAR_MIN = 2000
FISCAL_YEAR_MAX = 2100

# Rates in common use across WAEMU member states.
VAT_RATES = (0, 5, 10, 18, 20)
CURRENCIES = ("XOF", "EUR", "USD", "GBP", "XAF", "MAD")
POSTAL_CODE_COUNTRIES = ("SN", "FR")


def _matches(pattern: re.Pattern[str], value: Any) -> bool:
    return isinstance(value, str) and pattern.fullmatch(value) is not None


def is_valid_email(email: Any) -> bool:
    return _matches(EMAIL_RE, email)


def is_valid_senegal_phone(phone: Any) -> bool:
    return _matches(SENEGAL_PHONE_RE, phone)


def is_valid_international_phone(phone: Any) -> bool:
    return _matches(INTERNATIONAL_PHONE_RE, phone)


def is_valid_phone(phone: Any, phone_format: PhoneFormat = "senegal") -> bool:
    if phone_format == "international":
        return is_valid_international_phone(phone)
    return is_valid_senegal_phone(phone)


def is_valid_syscohada_code(code: Any) -> bool:
    return _matches(SYSCOHADA_CODE_RE, code)


def is_valid_fiscal_year(fiscal_year: Any) -> bool:
    if not _matches(FISCAL_YEAR_RE, fiscal_year):
        return False
    return FISCAL_YEAR_MIN <= int(fiscal_year) <= FISCAL_YEAR_MAX


def is_valid_accounting_period(period: Any) -> bool:
    return _matches(ACCOUNTING_PERIOD_RE, period)


def is_valid_ninea(ninea: Any) -> bool:
    return _matches(NINEA_RE, ninea)


def is_valid_rc(rc: Any) -> bool:
    return _matches(RC_RE, rc)


def is_valid_check_number(check_number: Any) -> bool:
    return _matches(CHECK_NUMBER_RE, check_number)


def is_valid_date(value: Any) -> bool:
    """ISO calendar date (YYYY-MM-DD) or a `date` instance."""
    if isinstance(value, date):
        return True
    if not isinstance(value, str):
        return False
    try:
        date.fromisoformat(value.strip())
    except ValueError:
        return False
    return True


def is_valid_vat_rate(rate: Any) -> bool:
    if isinstance(rate, bool):
        return False
    return rate in VAT_RATES


def is_valid_currency(currency: Any) -> bool:
    return isinstance(currency, str) and currency.upper() in CURRENCIES


def is_valid_postal_code(postal_code: Any, country: str = "SN") -> bool:
    if country not in POSTAL_CODE_COUNTRIES:
        return False
    return _matches(POSTAL_CODE_RE, postal_code)
