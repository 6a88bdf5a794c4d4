import pytest

from receipt_processor.errors import ValidationError
from receipt_processor.models import Item, Receipt, receipt_from_json


def test_receipt_from_json():
    receipt = receipt_from_json({
        "retailer": "Walgreens",
        "purchaseDate": "2022-01-02",
        "purchaseTime": "08:13",
        "total": "2.65",
        "items": [
            {"shortDescription": "Pepsi - 12-oz", "price": "1.25"},
            {"shortDescription": "Dasani", "price": "1.40"}
        ]
    })
    assert receipt == Receipt(
        retailer="Walgreens",
        purchase_date="2022-01-02",
        purchase_time="08:13",
        items=(Item("Pepsi - 12-oz", "1.25"), Item("Dasani", "1.40")),
        total="2.65",
    )


def test_receipt_from_json_allows_empty_items():
    receipt = receipt_from_json({
        "retailer": "Target", "purchaseDate": "2022-01-02", "purchaseTime": "13:13", "total": "0", "items": []
    })
    assert receipt.items == ()


def test_receipt_from_json_rejects_bad_shapes(simple_receipt_skeleton):
    with pytest.raises(ValidationError, match="invalid receipt json"):
        receipt_from_json(None)
    simple_receipt_skeleton["retailer"] = 42
    with pytest.raises(ValidationError, match=r"invalid retailer format"):
        receipt_from_json(simple_receipt_skeleton)


def test_to_json_uses_wire_field_names():
    receipt = Receipt("Target", "2022-01-02", "13:13", (Item("Pepsi - 12-oz", "1.25"),), "1.25", "abc", 31)
    assert receipt.to_json() == {
        "id": "abc",
        "retailer": "Target",
        "purchaseDate": "2022-01-02",
        "purchaseTime": "13:13",
        "items": [{"shortDescription": "Pepsi - 12-oz", "price": "1.25"}],
        "total": "1.25",
        "points": 31,
    }
