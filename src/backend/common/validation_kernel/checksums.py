from __future__ import annotations

import re
from typing import Any

IBAN_MIN_LENGTH = 15
IBAN_MAX_LENGTH = 34

_IBAN_RE = re.compile(r"^[A-Z]{2}\d{2}[A-Z0-9]+$", re.ASCII)
_WHITESPACE_RE = re.compile(r"\s")
_EAN13_RE = re.compile(r"^\d{13}$", re.ASCII)
_EAN13_PREFIX_RE = re.compile(r"^\d{12}$", re.ASCII)
_DIGITS_RE = re.compile(r"^[0-9]+$")
_ALNUM_RE = re.compile(r"^[A-Z0-9]+$")
_COUNTRY_RE = re.compile(r"^[A-Z]{2}$")

# Nine-digit blocks always fit in a signed 32-bit integer.
_MOD97_BLOCK = 9


def _letters_to_digits(value: str) -> str:
    # A=10 ... Z=35
    return "".join(str(ord(ch) - 55) if ch.isalpha() else ch for ch in value)


def mod97(digits: str) -> int:
    """Reduce a decimal digit string modulo 97 without big-integer arithmetic.

    The string is consumed in 9-digit blocks: each block is reduced and its
    remainder is prepended to what is left, until at most two digits remain.
    """
    if not _DIGITS_RE.fullmatch(digits or ""):
        raise ValueError(f"mod97 expects a non-empty digit string, got {digits!r}")
    remainder = digits
    while len(remainder) > 2:
        block = remainder[:_MOD97_BLOCK]
        remainder = str(int(block) % 97) + remainder[len(block):]
    return int(remainder) % 97


def normalize_iban(iban: str) -> str:
    return _WHITESPACE_RE.sub("", iban).upper()


def is_valid_iban(iban: Any) -> bool:
    if not isinstance(iban, str) or not iban:
        return False
    cleaned = normalize_iban(iban)
    if not _IBAN_RE.fullmatch(cleaned):
        return False
    if len(cleaned) < IBAN_MIN_LENGTH or len(cleaned) > IBAN_MAX_LENGTH:
        return False

    rearranged = cleaned[4:] + cleaned[:4]
    return mod97(_letters_to_digits(rearranged)) == 1


def compute_iban_check_digits(country: str, bban: str) -> str:
    """Return the two ISO 7064 check digits for `country` + `bban`."""
    country = country.upper()
    bban = normalize_iban(bban)
    if not _COUNTRY_RE.fullmatch(country):
        raise ValueError(f"Country code must be two letters, got {country!r}")
    if not _ALNUM_RE.fullmatch(bban):
        raise ValueError(f"BBAN must be alphanumeric, got {bban!r}")
    remainder = mod97(_letters_to_digits(bban + country + "00"))
    return f"{98 - remainder:02d}"


def compute_ean13_check_digit(prefix: str) -> int:
    if not isinstance(prefix, str) or not _EAN13_PREFIX_RE.fullmatch(prefix):
        raise ValueError(f"EAN-13 prefix must be exactly 12 digits, got {prefix!r}")
    total = 0
    for i, ch in enumerate(prefix):
        digit = int(ch)
        total += digit if i % 2 == 0 else digit * 3
    return (10 - total % 10) % 10


def is_valid_ean13(barcode: Any) -> bool:
    if not isinstance(barcode, str) or not _EAN13_RE.fullmatch(barcode):
        return False
    return compute_ean13_check_digit(barcode[:12]) == int(barcode[12])
