import random
import re
import unittest
from datetime import datetime

from backend_stub import FakeBackend, order_doc
from store.cart import Cart
from store.models import CustomerIdentity, OrderStatus, Product, Role, SyncState
from store.orders import (
    OrderBook,
    OrderIdGenerator,
    progress,
    sales_summary,
    step_index,
)

HEADPHONES = Product(id="1", name="Headphones", price=12500, category="Electronics")
SNEAKERS = Product(id="2", name="Sneakers", price=4500, category="Fashion")
WHEN = datetime(2026, 10, 19, 15, 4)


class ScriptedIds(OrderIdGenerator):
    def __init__(self, ids):
        super().__init__()
        self._script = iter(ids)

    def draw(self) -> str:
        return next(self._script)


class OrderIdTestCase(unittest.TestCase):
    def test_shape(self):
        gen = OrderIdGenerator(random.Random(7))
        for _ in range(200):
            self.assertRegex(gen.draw(), r"^ORD-[1-9]\d{3}-[A-Z]$")

    def test_redraws_taken_ids(self):
        gen = ScriptedIds(["ORD-1000-A", "ORD-1000-A", "ORD-2000-B"])
        self.assertEqual(gen.generate({"ORD-1000-A"}), "ORD-2000-B")


class OrderBookTestCase(unittest.IsolatedAsyncioTestCase):
    async def asyncSetUp(self):
        self.backend = FakeBackend()
        self.remote = self.backend.remote()
        self.book = OrderBook(self.remote, OrderIdGenerator(random.Random(1)))
        self.cart = Cart()

    async def asyncTearDown(self):
        await self.remote.aclose()

    def fill_cart(self):
        self.cart.add(HEADPHONES, 1)
        self.cart.add(SNEAKERS, 2)

    # ---------- place_order ----------

    async def test_place_order_on_empty_cart_does_nothing(self):
        self.assertIsNone(self.book.place_order(self.cart, "Ann", "ann@example.com"))
        self.assertEqual(self.book.history, [])

    async def test_place_order_totals_and_clears_cart(self):
        self.fill_cart()
        self.assertEqual(self.cart.total, 21500)

        order = self.book.place_order(self.cart, "Ann", "ann@example.com", WHEN)

        self.assertAlmostEqual(order.total, 22575.00, places=2)
        self.assertEqual(order.status, OrderStatus.PLACED)
        self.assertIs(order.sync, SyncState.PENDING)
        self.assertEqual(order.date, "Oct 19, 3:04 PM")
        self.assertTrue(re.fullmatch(r"ORD-\d{4}-[A-Z]", order.id))
        self.assertEqual(len(self.cart), 0)
        self.assertEqual(order.item_count, 3)

    async def test_new_orders_go_to_the_head(self):
        self.cart.add(HEADPHONES)
        first = self.book.place_order(self.cart, "Ann", "ann@example.com")
        self.cart.add(SNEAKERS)
        second = self.book.place_order(self.cart, "Bob", "bob@example.com")

        self.assertEqual([o.id for o in self.book.history], [second.id, first.id])
        self.assertNotEqual(first.id, second.id)

    async def test_order_items_do_not_follow_the_cart(self):
        self.cart.add(HEADPHONES, 1)
        order = self.book.place_order(self.cart, "Ann", "ann@example.com")
        self.cart.add(HEADPHONES, 5)
        self.assertEqual(order.items[0].quantity, 1)

    # ---------- persist ----------

    async def test_persist_confirms_order(self):
        self.fill_cart()
        order = self.book.place_order(self.cart, "Ann", "ann@example.com")

        self.assertTrue(await self.book.persist(order))

        self.assertIs(self.book.get(order.id).sync, SyncState.CONFIRMED)
        self.assertEqual(self.book.pending, [])
        sent = self.backend.orders[0]
        self.assertEqual(sent["id"], order.id)
        self.assertEqual(sent["customerEmail"], "ann@example.com")
        self.assertEqual(sent["total"], 22575.0)
        self.assertEqual([i["quantity"] for i in sent["items"]], [1, 2])

    async def test_failed_persist_keeps_pending_order(self):
        self.backend.down = True
        self.fill_cart()
        order = self.book.place_order(self.cart, "Ann", "ann@example.com")

        self.assertFalse(await self.book.persist(order))

        self.assertEqual(self.book.history, [order])
        self.assertEqual(self.book.pending, [order])
        self.assertEqual(self.backend.calls("POST", "/orders"), 1)

    # ---------- refresh & projections ----------

    async def test_refresh_as_admin_loads_everything(self):
        self.backend.orders = [
            order_doc("ORD-2222-B", "bob@example.com", "Shipped"),
            order_doc("ORD-1111-A", "ann@example.com"),
        ]
        self.assertTrue(await self.book.refresh(Role.ADMIN, None))
        self.assertEqual([o.id for o in self.book.history], ["ORD-2222-B", "ORD-1111-A"])
        self.assertEqual(self.book.history[0].status, OrderStatus.SHIPPED)
        self.assertEqual(self.book.confirmed, self.book.history)

    async def test_refresh_tolerates_items_without_product_id(self):
        legacy = order_doc("ORD-2222-B", "bob@example.com")
        legacy["items"] = [{"name": "Widget", "price": 100, "quantity": 1}]
        self.backend.orders = [legacy, order_doc("ORD-1111-A", "ann@example.com")]

        self.assertTrue(await self.book.refresh(Role.ADMIN, None))
        self.assertTrue(self.remote.online)
        self.assertEqual([o.id for o in self.book.history], ["ORD-2222-B", "ORD-1111-A"])

    async def test_refresh_as_customer_loads_own_orders(self):
        self.backend.orders = [
            order_doc("ORD-2222-B", "bob@example.com"),
            order_doc("ORD-1111-A", "ann@example.com"),
        ]
        ann = CustomerIdentity("Ann", "ann@example.com")
        self.assertTrue(await self.book.refresh(Role.CUSTOMER, ann))
        self.assertEqual([o.id for o in self.book.history], ["ORD-1111-A"])
        self.assertEqual(self.backend.calls("GET", "/orders/user/ann@example.com"), 1)

    async def test_refresh_without_identity_skips_backend(self):
        self.assertFalse(await self.book.refresh(Role.CUSTOMER, None))
        self.assertFalse(await self.book.refresh(Role.GUEST, None))
        self.assertEqual(self.backend.requests, [])

    async def test_refresh_keeps_unsent_orders_on_top(self):
        self.backend.down = True
        self.cart.add(HEADPHONES)
        local = self.book.place_order(self.cart, "Ann", "ann@example.com")
        await self.book.persist(local)

        self.backend.down = False
        self.backend.orders = [order_doc("ORD-1111-A", "ann@example.com")]
        await self.book.refresh(Role.CUSTOMER, CustomerIdentity("Ann", "ann@example.com"))

        self.assertEqual([o.id for o in self.book.history], [local.id, "ORD-1111-A"])
        self.assertEqual(self.book.pending, [local])

    async def test_failed_refresh_keeps_history(self):
        self.cart.add(HEADPHONES)
        order = self.book.place_order(self.cart, "Ann", "ann@example.com")
        self.backend.fail_status = 500
        self.assertFalse(await self.book.refresh(Role.ADMIN, None))
        self.assertEqual(self.book.history, [order])

    async def test_fetched_ids_are_not_reused(self):
        self.backend.orders = [order_doc("ORD-1000-A", "ann@example.com")]
        book = OrderBook(self.remote, ScriptedIds(["ORD-1000-A", "ORD-3000-C"]))
        await book.refresh(Role.ADMIN, None)
        self.cart.add(HEADPHONES)
        order = book.place_order(self.cart, "Ann", "ann@example.com")
        self.assertEqual(order.id, "ORD-3000-C")

    async def test_customer_projection_and_clear(self):
        for name in ("ann", "bob", "ann"):
            self.cart.add(HEADPHONES)
            self.book.place_order(self.cart, name, f"{name}@example.com")

        self.assertEqual(len(self.book.for_customer("ann@example.com")), 2)
        self.assertEqual(
            self.book.latest_for("ann@example.com"), self.book.history[0]
        )
        self.assertIsNone(self.book.latest_for("zed@example.com"))

        self.book.clear()
        self.assertEqual(self.book.history, [])


class TrackingAndReportTestCase(unittest.TestCase):
    def test_step_index_and_progress(self):
        self.assertEqual(step_index(OrderStatus.PLACED), 0)
        self.assertEqual(step_index("Shipped"), 2)
        self.assertEqual(step_index(OrderStatus.DELIVERED), 4)
        self.assertEqual(step_index("Lost"), -1)

        self.assertEqual(progress(OrderStatus.PLACED), 0.0)
        self.assertEqual(progress(OrderStatus.SHIPPED), 0.5)
        self.assertEqual(progress(OrderStatus.DELIVERED), 1.0)
        self.assertEqual(progress("Lost"), 0.0)

    def test_sales_summary(self):
        from store.remote import order_from_json

        orders = [
            order_from_json(order_doc("ORD-1", "ann@example.com", "Placed", 100.0)),
            order_from_json(order_doc("ORD-2", "ann@example.com", "Processing", 50.0)),
            order_from_json(order_doc("ORD-3", "bob@example.com", "Delivered", 25.5)),
        ]
        summary = sales_summary(orders)
        self.assertEqual(summary["total_sales"], 175.5)
        self.assertEqual(summary["total_orders"], 3)
        self.assertEqual(summary["unique_customers"], 2)
        self.assertEqual(summary["pending_orders"], 2)

        self.assertEqual(
            sales_summary([]),
            {"total_sales": 0, "total_orders": 0, "unique_customers": 0, "pending_orders": 0},
        )


if __name__ == "__main__":
    unittest.main()
