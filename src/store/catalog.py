from __future__ import annotations

from typing import List, Literal, Optional, Sequence

from store.fixtures import FALLBACK_PRODUCTS
from store.models import Product
from store.remote import RemoteStore
from utils.logger import get_logger

_logger = get_logger(__name__)

ALL_CATEGORIES = "All"


class Catalog:
    """
    In-memory product list.

    load() prefers the backend, seeds it with the fixtures when it is empty,
    and falls back to the fixtures (without writing) when it cannot be reached.
    """

    def __init__(
        self, remote: RemoteStore, fixtures: Sequence[Product] = FALLBACK_PRODUCTS
    ) -> None:
        self._remote = remote
        self._fixtures = list(fixtures)
        self.products: List[Product] = []
        self.source: Optional[Literal["remote", "seeded", "fixtures"]] = None

    async def load(self) -> List[Product]:
        products = await self._remote.fetch_products()
        if not self._remote.online:
            _logger.warning("Backend unreachable, using fallback catalog.")
            return self._use(self._fixtures, "fixtures")

        if products:
            return self._use(products, "remote")

        _logger.info(f"Backend catalog is empty, seeding {len(self._fixtures)} products...")
        seeded = await self._remote.seed_products(self._fixtures)
        if not self._remote.online or not seeded:
            _logger.warning("Seeding failed, using fallback catalog.")
            return self._use(self._fixtures, "fixtures")
        return self._use(seeded, "seeded")

    def _use(self, products: Sequence[Product], source) -> List[Product]:
        self.products = list(products)
        self.source = source
        _logger.debug(f"Catalog holds {len(self.products)} products ({source}).")
        return self.products

    def get(self, product_id: str) -> Optional[Product]:
        for product in self.products:
            if product.id == product_id:
                return product
        return None

    def categories(self) -> List[str]:
        """'All' followed by each distinct category, in first-seen order."""
        seen: List[str] = []
        for product in self.products:
            if product.category not in seen:
                seen.append(product.category)
        return [ALL_CATEGORIES, *seen]

    def filter(self, category: str = ALL_CATEGORIES, query: str = "") -> List[Product]:
        """Products in category (or any, for 'All') whose name contains query, case-insensitive."""
        needle = (query or "").strip().lower()
        return [
            p
            for p in self.products
            if (category == ALL_CATEGORIES or p.category == category)
            and needle in p.name.lower()
        ]
