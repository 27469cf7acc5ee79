"""SYSCOHADA chart of accounts helpers.

Account codes are digit strings whose first digit is one of the eight classes
and whose first two digits identify the main account (e.g. 41 "Clients").
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal, Optional

from .formats import is_valid_syscohada_code

NaturalBalance = Literal["debit", "credit"]


@dataclass(frozen=True)
class SyscohadaClass:
    number: int
    name: str
    description: str
    # Conventional account type; "mixed" where the sub-account decides.
    type: str


SYSCOHADA_CLASSES: dict[int, SyscohadaClass] = {
    1: SyscohadaClass(1, "COMPTES DE RESSOURCES DURABLES", "Capital, emprunts et dettes assimilées", "liability"),
    2: SyscohadaClass(
        2, "COMPTES D'ACTIF IMMOBILISE", "Immobilisations incorporelles, corporelles et financières", "asset"
    ),
    3: SyscohadaClass(3, "COMPTES DE STOCKS", "Marchandises, matières premières, produits", "asset"),
    4: SyscohadaClass(4, "COMPTES DE TIERS", "Fournisseurs, clients, personnel, organismes sociaux", "mixed"),
    5: SyscohadaClass(5, "COMPTES DE TRESORERIE", "Banques, établissements financiers, caisse", "asset"),
    6: SyscohadaClass(6, "COMPTES DE CHARGES", "Charges d'exploitation, financières, exceptionnelles", "expense"),
    7: SyscohadaClass(7, "COMPTES DE PRODUITS", "Ventes, production, produits financiers", "revenue"),
    8: SyscohadaClass(
        8,
        "COMPTES DES AUTRES CHARGES ET DES AUTRES PRODUITS",
        "Dotations, reprises, autres charges et produits",
        "mixed",
    ),
}

SYSCOHADA_MAIN_ACCOUNTS: dict[int, str] = {
    10: "Capital",
    11: "Réserves",
    12: "Report à nouveau",
    13: "Résultat net de l'exercice",
    16: "Emprunts et dettes assimilées",
    18: "Dettes liées à des participations",
    20: "Charges immobilisées",
    21: "Immobilisations incorporelles",
    22: "Terrains",
    23: "Bâtiments, installations techniques et agencements",
    24: "Matériel",
    26: "Titres de participation",
    27: "Autres immobilisations financières",
    28: "Amortissements",
    29: "Provisions pour dépréciation des immobilisations",
    31: "Marchandises",
    32: "Matières premières et fournitures liées",
    33: "Autres approvisionnements",
    35: "Produits finis",
    36: "Produits intermédiaires et résiduels",
    37: "Stocks de marchandises et de matières consommables",
    38: "Achats stockés",
    39: "Dépréciations des stocks",
    40: "Fournisseurs et comptes rattachés",
    41: "Clients et comptes rattachés",
    42: "Personnel",
    43: "Organismes sociaux",
    44: "État et collectivités publiques",
    46: "Débiteurs et créditeurs divers",
    47: "Comptes transitoires ou d'attente",
    48: "Créances et dettes hors activités ordinaires",
    49: "Dépréciations et provisions pour dépréciation",
    50: "Titres de placement",
    51: "Banques, établissements financiers et assimilés",
    52: "Instruments de trésorerie",
    53: "Caisse",
    54: "Régies d'avances et accréditifs",
    59: "Dépréciations et provisions pour dépréciation",
    60: "Achats et variations de stocks",
    61: "Transports",
    62: "Services extérieurs A",
    63: "Services extérieurs B",
    64: "Impôts et taxes",
    65: "Autres charges",
    66: "Charges de personnel",
    67: "Frais financiers et charges assimilées",
    68: "Dotations aux amortissements",
    69: "Dotations aux provisions",
    70: "Ventes",
    71: "Subventions d'exploitation",
    72: "Production immobilisée",
    73: "Variations des stocks de biens et de services produits",
    75: "Autres produits",
    77: "Revenus financiers et produits assimilés",
    78: "Reprises d'amortissements",
    79: "Reprises de provisions",
    81: "Valeurs comptables des cessions d'immobilisations",
    82: "Produits des cessions d'immobilisations",
    83: "Charges hors activités ordinaires",
    84: "Produits hors activités ordinaires",
    85: "Dotations hors activités ordinaires",
    86: "Reprises hors activités ordinaires",
    87: "Participation des travailleurs",
    88: "Subventions d'équilibre",
    89: "Impôts sur le résultat",
}

VAT_ACCOUNTS = {
    "tva_collectee": "443",
    "tva_deductible": "445",
    "tva_a_payer": "444",
}

# Class 4 sub-accounts with a credit natural balance (suppliers, social bodies, State, HAO debts).
_CREDIT_THIRD_PARTY_SUBCLASSES = (40, 43, 44, 48)
# Class 8 sub-accounts that behave as charges.
_CLASS_8_CHARGE_SUBCLASSES = (81, 83, 85, 87, 89)

_BALANCE_SHEET_CATEGORIES = {
    1: "Capitaux propres et passif",
    2: "Actif immobilisé",
    3: "Actif circulant - Stocks",
    4: "Actif circulant - Créances / Passif - Dettes",
    5: "Trésorerie",
}


def account_class_number(account_code: Any) -> Optional[int]:
    """Class digit (1-8) of a SYSCOHADA account code, `None` when the code is invalid."""
    if not is_valid_syscohada_code(account_code):
        return None
    return int(account_code[0])


def _subclass(account_code: str) -> Optional[int]:
    if len(account_code) < 2:
        return None
    return int(account_code[:2])


def get_account_class(account_code: str) -> Optional[SyscohadaClass]:
    number = account_class_number(account_code)
    if number is None:
        return None
    return SYSCOHADA_CLASSES[number]


def get_natural_balance(account_code: str) -> Optional[NaturalBalance]:
    number = account_class_number(account_code)
    if number is None:
        return None
    if number in (1, 7):
        return "credit"
    if number in (2, 3, 5, 6):
        return "debit"
    subclass = _subclass(account_code)
    if number == 4:
        return "credit" if subclass in _CREDIT_THIRD_PARTY_SUBCLASSES else "debit"
    # Class 8: charges are debit, products are credit.
    return "debit" if subclass in _CLASS_8_CHARGE_SUBCLASSES else "credit"


def get_main_account_label(account_code: str) -> Optional[str]:
    if not is_valid_syscohada_code(account_code):
        return None
    subclass = _subclass(account_code)
    if subclass is None:
        return None
    return SYSCOHADA_MAIN_ACCOUNTS.get(subclass)


def is_balance_sheet_account(account_code: str) -> bool:
    return account_class_number(account_code) in (1, 2, 3, 4, 5)


def is_income_statement_account(account_code: str) -> bool:
    return account_class_number(account_code) in (6, 7, 8)


def get_balance_sheet_category(account_code: str) -> Optional[str]:
    number = account_class_number(account_code)
    if number is None:
        return None
    return _BALANCE_SHEET_CATEGORIES.get(number)


def get_income_statement_category(account_code: str) -> Optional[str]:
    number = account_class_number(account_code)
    if number == 6:
        return "Charges"
    if number == 7:
        return "Produits"
    if number == 8:
        return "Charges" if _subclass(account_code) in _CLASS_8_CHARGE_SUBCLASSES else "Produits"
    return None


def format_account_code(code: Optional[str]) -> str:
    """Group digits the way printed SYSCOHADA charts do: "4011000" -> "40 11 000"."""
    if not code:
        return ""
    code = code.strip()
    if not code.isascii() or not code.isdigit():
        return code
    if len(code) <= 2:
        return code
    if len(code) <= 4:
        return f"{code[:2]} {code[2:]}"
    return f"{code[:2]} {code[2:4]} {code[4:]}"
