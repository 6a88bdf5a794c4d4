import dataclasses
import logging
import uuid

import pytest

from receipt_processor.errors import NotFoundError, ValidationError
from receipt_processor.models import Item
from receipt_processor.service import clean_item_descriptions, normalize_receipt


def test_process_receipt_stores_normalized_scored_receipt(service, store, target_receipt):
    receipt = dataclasses.replace(target_receipt, purchase_date="Jan 1, 2022", purchase_time="01:01:30 PM")
    receipt_id = service.process_receipt(receipt)

    assert uuid.UUID(receipt_id).version == 4
    stored = store.get(receipt_id)
    assert stored.id == receipt_id
    assert stored.points == 28
    assert stored.purchase_date == "2022-01-01"
    assert stored.purchase_time == "13:01"
    assert stored.items[-1].short_description == "Klarbrunn 12-PK 12 FL OZ"


def test_process_receipt_does_not_modify_input(service, target_receipt):
    before = dataclasses.replace(target_receipt)
    service.process_receipt(target_receipt)
    assert target_receipt == before
    assert target_receipt.id == ""


def test_rejected_receipt_never_reaches_store(service, store, target_receipt, caplog):
    receipt = dataclasses.replace(target_receipt, total="35.36")
    with caplog.at_level(logging.INFO, logger="receipt_processor"):
        with pytest.raises(ValidationError):
            service.process_receipt(receipt)
    assert len(store) == 0
    assert "Rejected receipt" in caplog.text


def test_get_receipt_and_points(service, target_receipt):
    receipt_id = service.process_receipt(target_receipt)
    assert service.get_receipt(receipt_id).id == receipt_id
    assert service.get_points(receipt_id) == 28


def test_unknown_id_is_not_found(service):
    with pytest.raises(NotFoundError) as exc_info:
        service.get_points("nope")
    assert exc_info.value.receipt_id == "nope"
    assert str(exc_info.value) == "Error: receipt id not found (nope)"
    with pytest.raises(NotFoundError):
        service.get_receipt("nope")


def test_list_receipts(service, target_receipt):
    assert service.list_receipts() == []
    ids = {service.process_receipt(target_receipt) for _ in range(3)}
    assert {receipt.id for receipt in service.list_receipts()} == ids


def test_clean_item_descriptions(target_receipt):
    receipt = dataclasses.replace(target_receipt, items=(Item("  Emils \t Cheese\n\nPizza ", "12.25"),))
    assert clean_item_descriptions(receipt).items == (Item("Emils Cheese Pizza", "12.25"),)


def test_normalize_receipt_keeps_other_fields(target_receipt):
    normalized = normalize_receipt(target_receipt)
    assert normalized.retailer == target_receipt.retailer
    assert normalized.total == target_receipt.total
    assert normalized.points == 0


def test_oversized_amounts_are_rejected_without_storing(service, store, target_receipt):
    for huge in ["1" * 30 + ".00", "9" * 27 + ".999"]:
        receipt = dataclasses.replace(target_receipt, items=(Item("Yacht", huge),), total=huge)
        with pytest.raises(ValidationError):
            service.process_receipt(receipt)
    assert len(store) == 0
