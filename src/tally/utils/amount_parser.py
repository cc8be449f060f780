"""Amount parsing utilities."""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
import re

CENTS = Decimal("0.01")


def parse_amount(amount_str: str) -> Decimal:
    """Parse an amount string into a Decimal.

    Handles various formats:
    - "123.45"
    - "$123.45"
    - "R$ 123.45"
    - "1,234.56"

    Ledger amounts are unsigned; the entry kind carries the sign.

    Args:
        amount_str: Amount string

    Returns:
        Decimal amount

    Raises:
        ValueError: If amount string cannot be parsed
    """
    if not amount_str or not amount_str.strip():
        raise ValueError("Empty amount string")

    amount_str = amount_str.strip()

    # Remove currency symbols
    amount_str = re.sub(r"R\$|[$€£¥]", "", amount_str)

    amount_str = amount_str.replace(",", "").strip()

    try:
        return Decimal(amount_str)
    except InvalidOperation as e:
        raise ValueError(f"Could not parse amount '{amount_str}': {e}")


def to_money(amount: Decimal) -> Decimal:
    """Round an amount to two decimal places (half-up)."""
    return amount.quantize(CENTS, rounding=ROUND_HALF_UP)
