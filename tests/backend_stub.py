# in-memory stand-in for the storefront REST backend, served through httpx.MockTransport
import json
from typing import Optional, Set, Tuple
from urllib.parse import unquote

import httpx

from store.remote import RemoteStore

BASE_URL = "http://store.test/api"


class FakeBackend:
    def __init__(self, products=None, orders=None):
        self.products = list(products or [])
        self.orders = list(orders or [])  # newest first, like the real backend
        self.down = False
        self.fail_status: Optional[int] = None
        self.fail_routes: Set[Tuple[str, str]] = set()
        self.requests = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        path = request.url.path.removeprefix("/api")
        self.requests.append((request.method, path))

        if self.down:
            raise httpx.ConnectError("connection refused", request=request)
        if self.fail_status:
            return httpx.Response(self.fail_status, json={"message": "boom"})
        if (request.method, path) in self.fail_routes:
            return httpx.Response(500, json={"message": "boom"})

        if request.method == "GET" and path == "/products":
            return httpx.Response(200, json=self.products)
        if request.method == "POST" and path == "/products/seed":
            docs = json.loads(request.content)
            self.products = [
                {**doc, "_id": f"64f0{i:04d}", "__v": 0} for i, doc in enumerate(docs)
            ]
            return httpx.Response(200, json=self.products)
        if request.method == "POST" and path == "/orders":
            doc = json.loads(request.content)
            self.orders.insert(0, doc)
            return httpx.Response(201, json={**doc, "_id": "64f1", "__v": 0})
        if request.method == "GET" and path == "/orders":
            return httpx.Response(200, json=self.orders)
        if request.method == "GET" and path.startswith("/orders/user/"):
            email = unquote(path.removeprefix("/orders/user/"))
            return httpx.Response(
                200, json=[o for o in self.orders if o["customerEmail"] == email]
            )
        return httpx.Response(404, json={"message": "not found"})

    def calls(self, method: str, path: str) -> int:
        return self.requests.count((method, path))

    def remote(self) -> RemoteStore:
        return RemoteStore(BASE_URL, transport=httpx.MockTransport(self.handler))


def order_doc(order_id: str, email: str, status: str = "Placed", total: float = 105.0):
    return {
        "_id": "64f2",
        "id": order_id,
        "customerName": email.split("@")[0],
        "customerEmail": email,
        "items": [{"id": "1", "name": "Widget", "price": 100, "quantity": 1}],
        "total": total,
        "date": "Oct 19, 3:04 PM",
        "status": status,
        "__v": 0,
    }
