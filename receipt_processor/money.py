""" Exact decimal helpers for receipt amounts """
import re
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from receipt_processor.errors import ParseError

AMOUNT_PATTERN = re.compile(r"^[+-]?(\d+(\.\d*)?|\.\d+)$", re.ASCII)
CENT = Decimal("0.01")


def parse_amount(value: str) -> Decimal:
    """ Parses a plain decimal literal such as "12.25" into a Decimal """
    if not value or not value.strip():
        raise ParseError(value, "amount cannot be empty")
    text = value.strip()
    if not AMOUNT_PATTERN.match(text):
        raise ParseError(value, "not a decimal number")
    try:
        return Decimal(text)
    except InvalidOperation:
        raise ParseError(value, "not a decimal number")


def round_to_cent(amount: Decimal) -> Decimal:
    """
    Rounds an amount to the nearest cent, ties away from zero.

    The arithmetic stays in Decimal so values like 0.1 + 0.2 compare equal
    to 0.3 once rounded. Amounts with more digits than the decimal context
    can hold at cent precision raise ParseError.
    """
    try:
        return amount.quantize(CENT, rounding=ROUND_HALF_UP)
    except InvalidOperation:
        raise ParseError(str(amount), "amount out of range")
