from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Optional

CENTS = Decimal("0.01")
ZERO = Decimal("0")


def to_decimal(value: object) -> Decimal:
    if value is None or isinstance(value, bool):
        return ZERO
    if isinstance(value, Decimal):
        number = value
    elif isinstance(value, (int, float, str)):
        try:
            number = Decimal(str(value).strip())
        except InvalidOperation:
            return ZERO
    else:
        return ZERO
    if not number.is_finite():
        return ZERO
    return number


def cents_to_amount(value: object) -> Decimal:
    return to_decimal(value) / 100


def amount_to_cents(value: object) -> int:
    return int((to_decimal(value) * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def round_currency(value: object) -> Decimal:
    return to_decimal(value).quantize(CENTS, rounding=ROUND_HALF_UP)


def currency_float(value: object) -> float:
    return float(round_currency(value))


def format_brl(cents: Optional[int]) -> Optional[str]:
    if cents is None:
        return None
    amount = round_currency(cents_to_amount(cents))
    # 1,234.56 -> 1.234,56
    formatted = f"{abs(amount):,.2f}".translate(str.maketrans({",": ".", ".": ","}))
    sign = "-" if amount < 0 else ""
    return f"{sign}R$ {formatted}"
