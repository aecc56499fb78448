"""Currency helpers; all amounts carry two decimal places"""
from decimal import Decimal, InvalidOperation, ROUND_DOWN, ROUND_HALF_UP
import math

CENT = Decimal("0.01")


def _to_decimal(value: float) -> Decimal:
    return Decimal(str(value))


def calculate_payout(stake: float, multiplier: float) -> float:
    """floor(stake * multiplier * 100) / 100 without binary float drift"""
    product = _to_decimal(stake) * _to_decimal(multiplier)
    return float(product.quantize(CENT, rounding=ROUND_DOWN))


def round_currency(value: float) -> float:
    return float(_to_decimal(value).quantize(CENT, rounding=ROUND_HALF_UP))


def is_currency_amount(value) -> bool:
    """True for finite numbers with at most two decimal places"""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    if not math.isfinite(value):
        return False
    amount = _to_decimal(value)
    try:
        return amount == amount.quantize(CENT)
    except InvalidOperation:
        # Too many digits to carry cents
        return False
