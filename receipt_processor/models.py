""" Receipt and item values plus their JSON shape """
from dataclasses import dataclass, field
from typing import Any

from receipt_processor.errors import ValidationError

required_receipt_attributes = ["retailer", "purchaseDate", "purchaseTime", "items", "total"]
required_item_attributes = ["shortDescription", "price"]


@dataclass(frozen=True)
class Item:
    short_description: str
    price: str

    def to_json(self) -> dict:
        return {"shortDescription": self.short_description, "price": self.price}


@dataclass(frozen=True)
class Receipt:
    """
    A purchase receipt.

    Values are immutable: normalization and scoring build new instances with
    ``dataclasses.replace`` rather than editing fields in place. ``id`` and
    ``points`` are empty until the receipt has been processed.
    """

    retailer: str
    purchase_date: str
    purchase_time: str
    items: tuple[Item, ...] = field(default_factory=tuple)
    total: str = ""
    id: str = ""
    points: int = 0

    def to_json(self) -> dict:
        return {
            "id": self.id,
            "retailer": self.retailer,
            "purchaseDate": self.purchase_date,
            "purchaseTime": self.purchase_time,
            "items": [item.to_json() for item in self.items],
            "total": self.total,
            "points": self.points,
        }


def _validate_item_json(item: Any) -> Item:
    if not isinstance(item, dict):
        raise ValidationError("Error: invalid receipt item format")
    for name in item:
        if name not in required_item_attributes:
            raise ValidationError(f"Error: unrecognized item field ({name})")
    for attribute in required_item_attributes:
        if not isinstance(item.get(attribute), str):
            raise ValidationError("Error: invalid receipt item format")
    return Item(short_description=item["shortDescription"], price=item["price"])


def receipt_from_json(payload: Any) -> Receipt:
    """
    Validates the structure of a decoded JSON receipt and builds a Receipt.

    Only the shape is checked here (field names and types); the receipt
    content is checked by ``validate_receipt``. ``id`` and ``points`` are
    assigned by the server and are rejected like any other unknown field.
    """
    if not isinstance(payload, dict):
        raise ValidationError("Error: invalid receipt json")
    for name in payload:
        if name not in required_receipt_attributes:
            raise ValidationError(f"Error: unrecognized receipt field ({name})")

    for attribute in required_receipt_attributes:
        if attribute not in payload:  # check if attribute is missing
            raise ValidationError(f"Error: missing {attribute} in receipt")
        if attribute != "items" and not isinstance(payload[attribute], str):  # check attribute type
            raise ValidationError(f"Error: invalid {attribute} format")

    if not isinstance(payload["items"], list):
        raise ValidationError("Error: invalid receipt items list format")
    items = tuple(_validate_item_json(item) for item in payload["items"])

    return Receipt(
        retailer=payload["retailer"],
        purchase_date=payload["purchaseDate"],
        purchase_time=payload["purchaseTime"],
        items=items,
        total=payload["total"],
    )
