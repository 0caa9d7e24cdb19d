"""Client-side shopping cart.

The cart is advisory: it remembers what the user intends to buy and the price
seen when the product was added, but checkout only sends product ids and
quantities. The server recomputes prices and stock when the order is placed.
"""

import json
import logging
import os
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, Field, ValidationError

logger = logging.getLogger(__name__)


class CartLine(BaseModel):
    product_id: int = Field(..., gt=0)
    product_name: str
    price: Decimal = Field(..., ge=0)
    quantity: int = Field(..., gt=0)

    @property
    def line_total(self) -> Decimal:
        return self.price * self.quantity


class CartStorage:
    """Persistence adapter for cart lines."""

    def load(self) -> List[dict]:
        raise NotImplementedError

    def save(self, lines: List[dict]) -> None:
        raise NotImplementedError


class MemoryCartStorage(CartStorage):

    def __init__(self, lines: Optional[List[dict]] = None):
        self.lines = list(lines or [])

    def load(self) -> List[dict]:
        return list(self.lines)

    def save(self, lines: List[dict]) -> None:
        self.lines = list(lines)


class JsonFileCartStorage(CartStorage):
    """Stores the cart as a JSON list in a local file."""

    def __init__(self, path: str):
        self.path = os.path.expanduser(path)

    def load(self) -> List[dict]:
        if not os.path.exists(self.path):
            return []
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning(f"Ignoring unreadable cart file {self.path}: {e}")
            return []
        return data if isinstance(data, list) else []

    def save(self, lines: List[dict]) -> None:
        directory = os.path.dirname(self.path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        tmp_path = f"{self.path}.tmp"
        with open(tmp_path, "w", encoding="utf-8") as f:
            json.dump(lines, f, indent=2)
        os.replace(tmp_path, self.path)


class Cart:
    """Ordered cart lines, persisted through a ``CartStorage`` after every change."""

    def __init__(self, storage: Optional[CartStorage] = None):
        self.storage = storage or MemoryCartStorage()
        self.lines: List[CartLine] = self._load_lines()

    def _load_lines(self) -> List[CartLine]:
        lines = []
        for row in self.storage.load():
            try:
                lines.append(CartLine.model_validate(row))
            except ValidationError as e:
                logger.warning(f"Skipping invalid cart line {row!r}: {e.error_count()} error(s)")
        return lines

    def _find(self, product_id: int) -> Optional[CartLine]:
        for line in self.lines:
            if line.product_id == product_id:
                return line
        return None

    def _save(self):
        self.storage.save([line.model_dump(mode="json") for line in self.lines])

    def add(self, product_id: int, product_name: str, price, quantity: int = 1) -> CartLine:
        """Add a product, or bump its quantity when it is already in the cart."""
        if quantity <= 0:
            raise ValueError("quantity must be positive")

        line = self._find(product_id)
        if line:
            line.quantity += quantity
        else:
            line = CartLine(
                product_id=product_id,
                product_name=product_name,
                price=Decimal(str(price)),
                quantity=quantity,
            )
            self.lines.append(line)

        self._save()
        return line

    def remove(self, product_id: int) -> bool:
        before = len(self.lines)
        self.lines = [line for line in self.lines if line.product_id != product_id]
        removed = len(self.lines) != before
        self._save()
        return removed

    def update_quantity(self, product_id: int, change: int) -> Optional[CartLine]:
        """Adjust a line by ``change``; the line is dropped once it reaches zero."""
        line = self._find(product_id)
        if line is None:
            return None

        line.quantity += change
        if line.quantity <= 0:
            self.remove(product_id)
            return None

        self._save()
        return line

    def clear(self):
        self.lines = []
        self._save()

    @property
    def total(self) -> Decimal:
        return sum((line.line_total for line in self.lines), Decimal("0"))

    @property
    def count(self) -> int:
        return sum(line.quantity for line in self.lines)

    def is_empty(self) -> bool:
        return not self.lines

    def to_order_items(self) -> List[dict]:
        return [
            {"product_id": line.product_id, "quantity": line.quantity}
            for line in self.lines
        ]
