from __future__ import annotations

from typing import Dict, Iterator, Optional, Tuple

from store.models import CartLine, Product


class Cart:
    """
    Cart lines keyed by product id, kept in insertion order.

    Quantities never drop below 1: lowering a quantity under 1 is ignored,
    removal has to go through remove().
    """

    def __init__(self) -> None:
        self._lines: Dict[str, CartLine] = {}

    def __len__(self) -> int:
        return len(self._lines)

    def __iter__(self) -> Iterator[CartLine]:
        return iter(self._lines.values())

    def __contains__(self, product_id: object) -> bool:
        return product_id in self._lines

    @property
    def lines(self) -> Tuple[CartLine, ...]:
        return tuple(self._lines.values())

    @property
    def total(self) -> float:
        return sum(line.line_total for line in self._lines.values())

    @property
    def item_count(self) -> int:
        return sum(line.quantity for line in self._lines.values())

    def get(self, product_id: str) -> Optional[CartLine]:
        return self._lines.get(product_id)

    def add(self, product: Product, quantity: int = 1) -> None:
        """Add product to the cart; if already present, increment its quantity."""
        if quantity < 1:
            return
        existing = self._lines.get(product.id)
        if existing:
            self._lines[product.id] = CartLine(
                existing.product, existing.quantity + quantity
            )
        else:
            self._lines[product.id] = CartLine(product, quantity)

    def remove(self, product_id: str) -> None:
        self._lines.pop(product_id, None)

    def update_quantity(self, product_id: str, quantity: int) -> None:
        """Set the quantity of an existing line. Quantities below 1 are ignored."""
        if quantity < 1:
            return
        existing = self._lines.get(product_id)
        if existing is None:
            return
        self._lines[product_id] = CartLine(existing.product, quantity)

    def clear(self) -> None:
        self._lines.clear()
