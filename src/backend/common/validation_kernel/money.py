"""Fixed-precision currency arithmetic.

Amounts are `Decimal`s quantized to `DECIMAL_PLACES` fraction digits with
ROUND_HALF_UP after every operation, so chained operations never accumulate
binary floating-point drift. Floats are accepted at the boundary and converted
through their shortest `repr` ("0.1" rather than 0.1000000000000000055...).
"""

from __future__ import annotations

import re
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation, localcontext
from typing import Any, Iterable, Mapping, Optional

from pydantic import BaseModel

DECIMAL_PLACES = 2
CENT = Decimal(1).scaleb(-DECIMAL_PLACES)
ZERO = Decimal("0.00")
HUNDRED = Decimal("100")
DEFAULT_CURRENCY_SYMBOL = "FCFA"
# Amounts and factors must stay below 10**MAX_INTEGER_DIGITS; larger inputs are not read as numbers.
MAX_INTEGER_DIGITS = 15

_CURRENCY_NOISE_RE = re.compile(r"\s")


class InvoiceTotals(BaseModel):
    subtotal: Decimal = ZERO
    discount_amount: Decimal = ZERO
    taxable_amount: Decimal = ZERO
    tax_amount: Decimal = ZERO
    total: Decimal = ZERO


def coerce_decimal(value: Any) -> Optional[Decimal]:
    """Best-effort numeric read; `None` when the value is not a finite number
    or is too large to be an amount (see `MAX_INTEGER_DIGITS`)."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, int):
        result = Decimal(value)
    elif isinstance(value, float):
        result = Decimal(repr(value))
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            result = Decimal(text)
        except InvalidOperation:
            return None
    else:
        return None
    if not result.is_finite():
        return None
    if result and result.adjusted() >= MAX_INTEGER_DIGITS:
        return None
    return result


def quantize(value: Decimal) -> Decimal:
    """Round to the cent; raises ValueError for NaN and infinities."""
    if not value.is_finite():
        raise ValueError(f"Not a finite amount: {value!r}")
    with localcontext() as ctx:
        # Enough precision for every integer digit plus the cents.
        ctx.prec = max(ctx.prec, value.adjusted() + DECIMAL_PLACES + 2)
        return value.quantize(CENT, rounding=ROUND_HALF_UP)


def to_money(value: Any) -> Decimal:
    """Convert a numeric input to a 2-decimal amount.

    Raises ValueError for inputs that are not numbers; form-level code should
    validate before calling (see `documents.is_valid_amount`).
    """
    amount = coerce_decimal(value)
    if amount is None:
        raise ValueError(f"Not a monetary amount: {value!r}")
    return quantize(amount)


def to_minor_units(value: Any) -> int:
    """Amount in minor units (cents), e.g. 12.34 -> 1234."""
    return int(to_money(value).scaleb(DECIMAL_PLACES))


def from_minor_units(units: int) -> Decimal:
    return quantize(Decimal(units).scaleb(-DECIMAL_PLACES))


def add(a: Any, b: Any) -> Decimal:
    return quantize(to_money(a) + to_money(b))


def subtract(a: Any, b: Any) -> Decimal:
    return quantize(to_money(a) - to_money(b))


def multiply(amount: Any, factor: Any) -> Decimal:
    factor_d = coerce_decimal(factor)
    if factor_d is None:
        raise ValueError(f"Not a numeric factor: {factor!r}")
    return quantize(to_money(amount) * factor_d)


def divide(amount: Any, divisor: Any) -> Decimal:
    divisor_d = coerce_decimal(divisor)
    if divisor_d is None:
        raise ValueError(f"Not a numeric divisor: {divisor!r}")
    if divisor_d == 0:
        return ZERO
    return quantize(to_money(amount) / divisor_d)


def calculate_percentage(amount: Any, percentage: Any) -> Decimal:
    pct = coerce_decimal(percentage)
    if pct is None:
        raise ValueError(f"Not a numeric percentage: {percentage!r}")
    return quantize(to_money(amount) * pct / HUNDRED)


def apply_discount(amount: Any, discount_pct: Any) -> Decimal:
    return subtract(amount, calculate_percentage(amount, discount_pct))


def calculate_tax(amount: Any, tax_rate: Any) -> Decimal:
    return calculate_percentage(amount, tax_rate)


def add_tax(amount: Any, tax_rate: Any) -> Decimal:
    """HT -> TTC."""
    return add(amount, calculate_tax(amount, tax_rate))


def remove_tax(amount: Any, tax_rate: Any) -> Decimal:
    """TTC -> HT. Inverse of `add_tax` within one cent."""
    rate = coerce_decimal(tax_rate)
    if rate is None:
        raise ValueError(f"Not a numeric tax rate: {tax_rate!r}")
    divisor = 1 + rate / HUNDRED
    if divisor == 0:
        return ZERO
    return quantize(to_money(amount) / divisor)


def _item_value(item: Any, *names: str) -> Any:
    for name in names:
        if isinstance(item, Mapping):
            if name in item:
                return item[name]
        elif hasattr(item, name):
            return getattr(item, name)
    return None


def line_amount(item: Any) -> Decimal:
    """quantity x unit price for one item, rounded; missing values count as 0."""
    quantity = coerce_decimal(_item_value(item, "quantity")) or Decimal(0)
    price = coerce_decimal(_item_value(item, "unit_price", "unitPrice", "price")) or Decimal(0)
    return multiply(price, quantity)


def calculate_total(items: Iterable[Any]) -> Decimal:
    total = ZERO
    for item in items or ():
        total = add(total, line_amount(item))
    return total


def calculate_subtotal(items: Iterable[Any]) -> Decimal:
    return calculate_total(items)


def calculate_invoice_total(items: Iterable[Any], discount_pct: Any = 0, tax_rate: Any = 0) -> InvoiceTotals:
    """Derive invoice amounts.

    The order is a business rule: the discount applies to the subtotal and tax
    is computed on the discounted (taxable) base.
    """
    subtotal = calculate_subtotal(items)
    discount_amount = calculate_percentage(subtotal, discount_pct)
    taxable_amount = subtract(subtotal, discount_amount)
    tax_amount = calculate_tax(taxable_amount, tax_rate)
    total = add(taxable_amount, tax_amount)
    return InvoiceTotals(
        subtotal=subtotal,
        discount_amount=discount_amount,
        taxable_amount=taxable_amount,
        tax_amount=tax_amount,
        total=total,
    )


def calculate_profit_margin(cost: Any, selling: Any) -> Decimal:
    """Margin as a percentage of the selling price; 0 when selling is 0."""
    selling_m = to_money(selling)
    if selling_m == 0:
        return ZERO
    profit = subtract(selling_m, cost)
    return quantize(profit / selling_m * HUNDRED)


def calculate_markup(cost: Any, selling: Any) -> Decimal:
    """Markup as a percentage of cost; 0 when cost is 0."""
    cost_m = to_money(cost)
    if cost_m == 0:
        return ZERO
    profit = subtract(selling, cost_m)
    return quantize(profit / cost_m * HUNDRED)


def round_amount(amount: Any, nearest: Any = 5) -> Decimal:
    """Round to the nearest multiple of `nearest` (e.g. 5 or 100 FCFA)."""
    step = coerce_decimal(nearest)
    if step is None or step == 0:
        raise ValueError(f"Rounding step must be a non-zero number: {nearest!r}")
    multiple = (to_money(amount) / step).quantize(Decimal(1), rounding=ROUND_HALF_UP)
    return quantize(multiple * step)


def convert_currency(amount: Any, exchange_rate: Any) -> Decimal:
    return multiply(amount, exchange_rate)


def calculate_change(total: Any, paid: Any) -> Decimal:
    """Money to hand back; never negative."""
    return max(ZERO, subtract(paid, total))


def compare_amounts(a: Any, b: Any) -> int:
    a_m, b_m = to_money(a), to_money(b)
    if a_m < b_m:
        return -1
    if a_m > b_m:
        return 1
    return 0


def is_positive_amount(amount: Any) -> bool:
    value = coerce_decimal(amount)
    return value is not None and value > 0


def is_zero_amount(amount: Any) -> bool:
    value = coerce_decimal(amount)
    return value is not None and value == 0


def min_amount(amounts: Iterable[Any]) -> Decimal:
    values = [to_money(a) for a in amounts or ()]
    return min(values) if values else ZERO


def max_amount(amounts: Iterable[Any]) -> Decimal:
    values = [to_money(a) for a in amounts or ()]
    return max(values) if values else ZERO


def average_amount(amounts: Iterable[Any]) -> Decimal:
    values = list(amounts or ())
    if not values:
        return ZERO
    total = ZERO
    for value in values:
        total = add(total, value)
    return divide(total, len(values))


def parse_currency(value: Any, symbol: str = DEFAULT_CURRENCY_SYMBOL) -> Decimal:
    """Read a displayed amount such as "1 234,50 FCFA"; 0 when unreadable."""
    if value is None or value == "":
        return ZERO
    text = str(value)
    if symbol:
        text = text.replace(symbol, "")
    text = _CURRENCY_NOISE_RE.sub("", text).replace(",", ".", 1)
    amount = coerce_decimal(text)
    if amount is None:
        return ZERO
    return quantize(amount)


def format_currency(amount: Any, symbol: str = DEFAULT_CURRENCY_SYMBOL) -> str:
    """fr-FR display: space-grouped thousands, comma decimals, trailing symbol."""
    value = coerce_decimal(amount)
    if value is None:
        return f"0 {symbol}"
    grouped = f"{quantize(value):,.{DECIMAL_PLACES}f}"
    formatted = grouped.replace(",", " ").replace(".", ",")
    return f"{formatted} {symbol}"


def format_compact_currency(amount: Any, symbol: str = DEFAULT_CURRENCY_SYMBOL) -> str:
    value = coerce_decimal(amount)
    if value is None:
        return f"0 {symbol}"
    magnitude = abs(value)
    for threshold, suffix in ((Decimal("1e9"), "B"), (Decimal("1e6"), "M"), (Decimal("1e3"), "K")):
        if magnitude >= threshold:
            scaled = (value / threshold).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP)
            return f"{scaled}{suffix} {symbol}"
    return format_currency(value, symbol)
