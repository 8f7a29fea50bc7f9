"""Decimal arithmetic utilities for dollar amounts.

Cash balances, prices and totals carry 2 decimal places; average cost basis
carries 4. Rounding is always HALF_UP. No float anywhere past the oracle
boundary.
"""

from decimal import ROUND_HALF_UP, Decimal

CENT = Decimal("0.01")
COST_BASIS_STEP = Decimal("0.0001")
ZERO = Decimal("0")


def to_decimal(value: object) -> Decimal:
    """Convert an API/JSON number to Decimal via str() so 0.1 stays 0.1."""
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool) or not isinstance(value, (int, float, str)):
        raise TypeError(f"Cannot convert {type(value).__name__} to Decimal")
    return Decimal(str(value))


def quantize_money(amount: Decimal) -> Decimal:
    """Round to cents: Decimal('10.005') -> Decimal('10.01')."""
    return amount.quantize(CENT, rounding=ROUND_HALF_UP)


def quantize_cost(amount: Decimal) -> Decimal:
    """Round a per-share cost to 4 decimal places."""
    return amount.quantize(COST_BASIS_STEP, rounding=ROUND_HALF_UP)


def money_to_display(amount: Decimal) -> str:
    """Format for display: Decimal('6500') -> '$6,500.00', Decimal('-12') -> '-$12.00'."""
    rounded = quantize_money(amount)
    if rounded < 0:
        return f"-${-rounded:,.2f}"
    return f"${rounded:,.2f}"
