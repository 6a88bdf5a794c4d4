""" Receipt validation rules """
import logging
from decimal import Decimal

from receipt_processor.datetimes import normalize_date, normalize_time
from receipt_processor.errors import ParseError, ValidationError
from receipt_processor.models import Item, Receipt
from receipt_processor.money import parse_amount, round_to_cent

logger = logging.getLogger(__name__)


def validate_retailer_name(retailer_name: str):
    """ Validates if retailer name contains at least 1 non-whitespace character """
    if not retailer_name or not retailer_name.strip():
        raise ValidationError("Error: receipt retailer cannot be empty")


def validate_purchase_date(date: str):
    try:
        normalize_date(date)
    except ParseError as e:
        raise ValidationError(f"Error: invalid receipt purchase date ({date})") from e


def validate_purchase_time(time: str):
    try:
        normalize_time(time)
    except ParseError as e:
        raise ValidationError(f"Error: invalid receipt purchase time ({time})") from e


def validate_item(item: Item) -> Decimal:
    """ Validates an item's description and price, returning the price rounded to the cent """
    if not item.short_description or not item.short_description.strip():
        raise ValidationError("Error: item description cannot be empty")
    if not item.price or not item.price.strip():
        raise ValidationError("Error: item price cannot be empty")
    try:
        price = parse_amount(item.price)
        rounded_price = round_to_cent(price)
    except ParseError as e:
        raise ValidationError(f"Error: invalid item price ({item.price})") from e
    if price <= 0:
        raise ValidationError(f"Error: item price must be greater than zero ({item.price})")
    return rounded_price


def validate_total(total: str, items_total: Decimal):
    """ Validates that the receipt total matches the sum of its item prices to the cent """
    try:
        rounded_total = round_to_cent(parse_amount(total))
        rounded_items_total = round_to_cent(items_total)
    except ParseError as e:
        raise ValidationError(f"Error: invalid receipt total ({total})") from e
    if rounded_total != rounded_items_total:
        raise ValidationError(
            f"Error: receipt total ({total}) does not match sum of item prices ({rounded_items_total})"
        )


def validate_receipt(receipt: Receipt):
    """
    Checks a receipt before it is normalized, scored or stored.

    Rules are applied in a fixed order and the first failure is raised, so
    the same receipt always yields the same message:

    1. retailer is not blank
    2. purchase date parses
    3. purchase time parses
    4. there is at least one item
    5. each item has a description and a positive price
    6. the total matches the sum of the item prices, both rounded to the cent

    Raises:
        ValidationError: describing the first rule that failed.
    """
    validate_retailer_name(receipt.retailer)
    validate_purchase_date(receipt.purchase_date)
    validate_purchase_time(receipt.purchase_time)

    if len(receipt.items) < 1:  # check if the items list is empty
        raise ValidationError("Error: receipt items list is empty")
    items_total = sum((validate_item(item) for item in receipt.items), Decimal(0))

    validate_total(receipt.total, items_total)
    logger.debug("Receipt from %s passed validation", receipt.retailer)
