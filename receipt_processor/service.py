""" Receipt processing operations exposed to the HTTP layer """
import dataclasses
import logging
import re
from typing import List, Optional
from uuid import uuid4

from receipt_processor.datetimes import normalize_date, normalize_time
from receipt_processor.errors import NotFoundError, ValidationError
from receipt_processor.models import Receipt
from receipt_processor.points import calculate_points
from receipt_processor.store import ReceiptStore
from receipt_processor.validation import validate_receipt

logger = logging.getLogger(__name__)

WHITESPACE_RUN = re.compile(r"\s+")


def clean_item_descriptions(receipt: Receipt) -> Receipt:
    """ Trims item descriptions and collapses inner whitespace runs to one space """
    items = tuple(
        dataclasses.replace(item, short_description=WHITESPACE_RUN.sub(" ", item.short_description.strip()))
        for item in receipt.items
    )
    return dataclasses.replace(receipt, items=items)


def normalize_receipt(receipt: Receipt) -> Receipt:
    """ Returns a copy of a validated receipt with canonical date, time and descriptions """
    cleaned = clean_item_descriptions(receipt)
    return dataclasses.replace(
        cleaned,
        purchase_date=normalize_date(cleaned.purchase_date),
        purchase_time=normalize_time(cleaned.purchase_time),
    )


class ReceiptService:
    """
    Processes receipts and answers lookups against a ReceiptStore.

    Processing runs validation, normalization, id assignment and scoring
    before the single insert into the store, so a rejected receipt never
    touches the store.
    """

    def __init__(self, store: Optional[ReceiptStore] = None):
        self.store = store if store is not None else ReceiptStore()

    def process_receipt(self, receipt: Receipt) -> str:
        """
        Validates, normalizes, scores and stores a receipt.

        Returns:
            The newly generated receipt id.

        Raises:
            ValidationError: if the receipt is rejected.
        """
        try:
            validate_receipt(receipt)
        except ValidationError as e:
            logger.info("Rejected receipt from %r: %s", receipt.retailer, e)
            raise
        normalized = normalize_receipt(receipt)
        receipt_id = str(uuid4())
        stored = dataclasses.replace(normalized, id=receipt_id, points=calculate_points(normalized))
        self.store.insert(stored)
        logger.info("Processed receipt %s from %r for %d points", receipt_id, stored.retailer, stored.points)
        return receipt_id

    def get_receipt(self, receipt_id: str) -> Receipt:
        receipt = self.store.get(receipt_id)
        if receipt is None:
            raise NotFoundError(receipt_id)
        return receipt

    def get_points(self, receipt_id: str) -> int:
        """ Returns the points of a stored receipt; unknown ids raise NotFoundError, never 0 """
        return self.get_receipt(receipt_id).points

    def list_receipts(self) -> List[Receipt]:
        return self.store.list_all()
