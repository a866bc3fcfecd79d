"""Money helpers - amounts are handled as integer cents"""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP


def to_cents(value) -> int:
    """
    Convert an upstream decimal amount (euros) to integer cents.

    Uses the string form so 19.99 does not become 1998.
    """
    if value is None or value == "":
        return 0
    try:
        amount = Decimal(str(value)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    except InvalidOperation as e:
        raise ValueError(f"Invalid amount: {value!r}") from e
    return int(amount * 100)


def percent_of(amount_cents: int, percent: int) -> int:
    """Percentage of an amount, rounded half-up to the cent"""
    return (amount_cents * percent + 50) // 100


def ratio_percentage(part: int, total: int) -> int:
    """Share of `part` in `total` as a whole percentage (0 when either is 0)"""
    if part == 0 or total == 0:
        return 0
    return (part * 200 + total) // (total * 2)
