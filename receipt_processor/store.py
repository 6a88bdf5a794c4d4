""" In-memory receipt storage """
import threading
from typing import Dict, List, Optional

from receipt_processor.models import Receipt


class ReceiptStore:
    """
    Thread-safe mapping of receipt id to receipt.

    Receipts are frozen dataclasses, so handing them out on read never
    exposes stored state to mutation. The lock only guards the dict itself.
    """

    def __init__(self):
        self._receipts: Dict[str, Receipt] = {}
        self._lock = threading.Lock()

    def insert(self, receipt: Receipt):
        """ Stores a receipt under its id, replacing any receipt with the same id """
        with self._lock:
            self._receipts[receipt.id] = receipt

    def get(self, receipt_id: str) -> Optional[Receipt]:
        with self._lock:
            return self._receipts.get(receipt_id)

    def list_all(self) -> List[Receipt]:
        with self._lock:
            return list(self._receipts.values())

    def clear(self):
        with self._lock:
            self._receipts.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._receipts)
