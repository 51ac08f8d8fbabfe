# src/store/remote.py
from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence
from urllib.parse import quote

import httpx

from store.models import CartLine, Order, OrderStatus, Product, SyncState
from utils.logger import get_logger

_logger = get_logger(__name__)


def _to_int(val, default: int = 0) -> int:
    try:
        return int(val)
    except (TypeError, ValueError):
        return default


def _to_float(val, default: float = 0.0) -> float:
    try:
        return float(val)
    except (TypeError, ValueError):
        return default


# ---------------------------
# JSON <-> models
# ---------------------------


def product_to_json(product: Product) -> Dict[str, Any]:
    return {
        "id": product.id,
        "name": product.name,
        "price": product.price,
        "category": product.category,
        "description": product.description,
        "image": product.image,
        "rating": product.rating,
        "stock": product.stock,
        "features": list(product.features),
    }


def product_from_json(data: Dict[str, Any]) -> Product:
    """Build a Product from a backend document; unknown keys (_id, __v) are ignored."""
    return Product(
        id=str(data["id"]),
        name=str(data.get("name", "")),
        price=_to_float(data.get("price")),
        category=str(data.get("category", "")),
        description=str(data.get("description", "")),
        image=str(data.get("image", "")),
        rating=_to_float(data.get("rating")),
        stock=max(_to_int(data.get("stock")), 0),
        features=tuple(str(f) for f in data.get("features") or ()),
    )


def order_to_json(order: Order) -> Dict[str, Any]:
    return {
        "id": order.id,
        "customerName": order.customer_name,
        "customerEmail": order.customer_email,
        "items": [
            {**product_to_json(line.product), "quantity": line.quantity}
            for line in order.items
        ],
        "total": order.total,
        "date": order.date,
        "status": order.status.value,
    }


def order_from_json(data: Dict[str, Any]) -> Order:
    """
    Build a CONFIRMED Order from a backend document.
    Stored order items only carry id/name/price/quantity/image; the remaining
    product fields fall back to their defaults.
    """
    items = []
    for item in data.get("items") or ():
        qty = _to_int(item.get("quantity"), 1)
        # stored items may omit the product id
        product = product_from_json({**item, "id": item.get("id", "")})
        items.append(CartLine(product, max(qty, 1)))
    try:
        status = OrderStatus(data.get("status", OrderStatus.PLACED.value))
    except ValueError:
        status = OrderStatus.PLACED
    return Order(
        id=str(data["id"]),
        customer_name=str(data.get("customerName", "")),
        customer_email=str(data.get("customerEmail", "")),
        items=tuple(items),
        total=_to_float(data.get("total")),
        date=str(data.get("date", "")),
        status=status,
        sync=SyncState.CONFIRMED,
    )


# ---------------------------
# Remote facade
# ---------------------------


class RemoteStore:
    """
    Best-effort access to the storefront REST backend.

    No call raises: transport errors, non-2xx answers and malformed payloads
    are logged and degrade to an empty list (reads) or False (writes).
    Malformed documents inside a list are skipped one by one.
    `online` tells whether the most recent call reached the backend.
    """

    def __init__(
        self,
        base_url: str,
        timeout: Optional[float] = 5.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.online = False
        self._client = httpx.AsyncClient(
            base_url=self.base_url, timeout=timeout, transport=transport
        )

    async def __aenter__(self) -> "RemoteStore":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _request(self, method: str, path: str, payload: Any = None) -> Any:
        try:
            resp = await self._client.request(method, path, json=payload)
            resp.raise_for_status()
            data = resp.json()
        except (httpx.HTTPError, ValueError) as exc:
            self.online = False
            _logger.warning(f"{method} {path} failed: {exc!r}")
            return None
        self.online = True
        return data

    async def _get_list(self, path: str, parse) -> list:
        data = await self._request("GET", path)
        if data is None:
            return []
        return self._parse_list(path, data, parse)

    def _parse_list(self, path: str, data: Any, parse) -> list:
        if not isinstance(data, list):
            self.online = False
            _logger.warning(f"{path} returned {type(data).__name__}, expected a list")
            return []
        parsed = []
        for idx, doc in enumerate(data):
            try:
                parsed.append(parse(doc))
            except (KeyError, TypeError, AttributeError) as exc:
                _logger.warning(f"{path} skipped malformed document #{idx}: {exc!r}")
        return parsed

    async def fetch_products(self) -> List[Product]:
        return await self._get_list("/products", product_from_json)

    async def seed_products(self, products: Sequence[Product]) -> List[Product]:
        """Replace the backend catalog with products; return the persisted set."""
        payload = [product_to_json(p) for p in products]
        data = await self._request("POST", "/products/seed", payload)
        if data is None:
            return []
        return self._parse_list("/products/seed", data, product_from_json)

    async def create_order(self, order: Order) -> bool:
        """Send a client-built order. True if the backend acknowledged it."""
        data = await self._request("POST", "/orders", order_to_json(order))
        return data is not None

    async def fetch_orders(self) -> List[Order]:
        return await self._get_list("/orders", order_from_json)

    async def fetch_orders_for(self, email: str) -> List[Order]:
        return await self._get_list(
            f"/orders/user/{quote(email, safe='@')}", order_from_json
        )
