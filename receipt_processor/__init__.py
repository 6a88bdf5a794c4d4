""" Receipt processing and loyalty points engine """

from receipt_processor.errors import NotFoundError, ParseError, ValidationError
from receipt_processor.models import Item, Receipt, receipt_from_json
from receipt_processor.points import calculate_points
from receipt_processor.service import ReceiptService
from receipt_processor.store import ReceiptStore
from receipt_processor.validation import validate_receipt

__all__ = [
    "Item",
    "NotFoundError",
    "ParseError",
    "Receipt",
    "ReceiptService",
    "ReceiptStore",
    "ValidationError",
    "calculate_points",
    "receipt_from_json",
    "validate_receipt",
]
