import pytest

from receipt_processor.app import create_app
from receipt_processor.models import Item, Receipt
from receipt_processor.service import ReceiptService
from receipt_processor.store import ReceiptStore


@pytest.fixture
def store():
    return ReceiptStore()


@pytest.fixture
def service(store):
    return ReceiptService(store)


@pytest.fixture
def app(service):
    app = create_app(service)
    app.config['DEBUG'] = True
    app.config['TESTING'] = True
    return app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def simple_receipt_skeleton():
    return {
        "retailer": "Target",
        "purchaseDate": "2022-01-02",
        "purchaseTime": "13:13",
        "total": "1.25",
        "items": [
            {"shortDescription": "Pepsi - 12-oz", "price": "1.25"}
        ]
    }


@pytest.fixture
def target_receipt():
    return Receipt(
        retailer="Target",
        purchase_date="2022-01-01",
        purchase_time="13:01",
        items=(
            Item("Mountain Dew 12PK", "6.49"),
            Item("Emils Cheese Pizza", "12.25"),
            Item("Knorr Creamy Chicken", "1.26"),
            Item("Doritos Nacho Cheese", "3.35"),
            Item("   Klarbrunn 12-PK 12 FL OZ  ", "12.00"),
        ),
        total="35.35",
    )
