""" Loyalty points rules """
import logging
import math
from decimal import Decimal
from typing import Iterable, Sequence

from receipt_processor.datetimes import is_time_in_range
from receipt_processor.errors import ParseError
from receipt_processor.models import Item, Receipt
from receipt_processor.money import parse_amount

logger = logging.getLogger(__name__)

POINTS_RETAILER_NAME_ALPHANUM_CHARACTER = 1
POINTS_TOTAL_HAS_NO_CENTS = 50
POINTS_TOTAL_IS_MULTIPLE_OF_QUARTERS = 25
POINTS_ITEMS_COUNT = 5
POINTS_ITEM_DESCRIPTION = Decimal("0.2")
POINTS_ODD_PURCHASE_DAY = 6
POINTS_VALID_PURCHASE_HOUR = 10
REWARD_ITEM_DESCRIPTION_LENGTH_FACTOR = 3
REWARD_TIME_START = "14:00"
REWARD_TIME_END = "16:00"
QUARTER = Decimal("0.25")


def score_retailer(retailer_name: str) -> int:
    """ 1 point for every letter or digit in the retailer name """
    return sum(int(c.isalnum()) * POINTS_RETAILER_NAME_ALPHANUM_CHARACTER for c in retailer_name)


def score_total(total: str) -> int:
    """ 25 points for a multiple of 0.25, plus 50 more for a whole dollar amount """
    try:
        parsed_total = parse_amount(total)
    except ParseError as e:
        logger.warning("Skipping total points: %s", e)
        return 0
    points = 0
    if parsed_total % QUARTER == 0:
        points += POINTS_TOTAL_IS_MULTIPLE_OF_QUARTERS
    if parsed_total % 1 == 0:
        points += POINTS_TOTAL_HAS_NO_CENTS
    return points


def score_item_pairs(items: Sequence[Item]) -> int:
    return (len(items) // 2) * POINTS_ITEMS_COUNT


def score_item_descriptions(items: Iterable[Item]) -> int:
    """
    For each item whose trimmed description length is a multiple of 3,
    the price times 0.2 rounded up to the nearest point.
    """
    points = 0
    for item in items:
        if len(item.short_description.strip()) % REWARD_ITEM_DESCRIPTION_LENGTH_FACTOR != 0:
            continue
        try:
            price = parse_amount(item.price)
        except ParseError as e:
            logger.warning("Skipping description points for %r: %s", item.short_description, e)
            continue
        points += math.ceil(price * POINTS_ITEM_DESCRIPTION)
    return points


def score_purchase_date(date: str) -> int:
    """ 6 points if the day in the canonical purchase date is odd """
    try:
        day = int(date.split("-")[2])
    except (IndexError, ValueError):
        logger.warning("Skipping purchase date points: malformed date %r", date)
        return 0
    return POINTS_ODD_PURCHASE_DAY if day % 2 != 0 else 0


def score_purchase_time(time: str) -> int:
    """ 10 points if the purchase time is after 14:00 and before 16:00 """
    try:
        in_window = is_time_in_range(time, REWARD_TIME_START, REWARD_TIME_END)
    except ParseError as e:
        logger.warning("Skipping purchase time points: %s", e)
        return 0
    return POINTS_VALID_PURCHASE_HOUR if in_window else 0


def calculate_points(receipt: Receipt) -> int:
    """
    Calculates points earned from each component of the receipt.

    The receipt is expected to be validated and normalized already. A rule
    that cannot read its input contributes no points instead of failing the
    whole calculation.
    """
    points = 0
    points += score_retailer(receipt.retailer)
    points += score_total(receipt.total)
    points += score_item_pairs(receipt.items)
    points += score_item_descriptions(receipt.items)
    points += score_purchase_date(receipt.purchase_date)
    points += score_purchase_time(receipt.purchase_time)
    return points
