# src/store/orders.py
from __future__ import annotations

import dataclasses
import random
import string
from datetime import datetime
from typing import Dict, Iterable, List, Optional, Set, Tuple

from store.cart import Cart
from store.models import CustomerIdentity, Order, OrderStatus, Role, SyncState
from store.remote import RemoteStore
from utils.logger import get_logger
from utils.pure import format_order_date

_logger = get_logger(__name__)

TAX_RATE = 0.05

STATUS_STEPS: Tuple[Tuple[OrderStatus, str], ...] = (
    (OrderStatus.PLACED, "Order Placed"),
    (OrderStatus.PROCESSING, "Processing"),
    (OrderStatus.SHIPPED, "Shipped"),
    (OrderStatus.OUT_FOR_DELIVERY, "Out for Delivery"),
    (OrderStatus.DELIVERED, "Delivered"),
)


# ---------------------------
# Order ids
# ---------------------------


class OrderIdGenerator:
    """
    Generates ids shaped ORD-<4 digits>-<uppercase letter>.

    The shape is fixed by the backend and the customer-facing screens, so
    uniqueness comes from redrawing against the ids seen during the session.
    """

    def __init__(self, rng: Optional[random.Random] = None) -> None:
        self._rng = rng or random.Random()

    def draw(self) -> str:
        digits = self._rng.randint(1000, 9999)
        letter = self._rng.choice(string.ascii_uppercase)
        return f"ORD-{digits}-{letter}"

    def generate(self, taken: Set[str]) -> str:
        while True:
            candidate = self.draw()
            if candidate not in taken:
                return candidate


# ---------------------------
# Order book
# ---------------------------


class OrderBook:
    """
    Local order history, newest first.

    Customer and admin views are projections over the same list. Orders are
    recorded optimistically as PENDING and become CONFIRMED once the backend
    acknowledges them; a failed write is logged and never rolled back.
    """

    def __init__(
        self, remote: RemoteStore, id_generator: Optional[OrderIdGenerator] = None
    ) -> None:
        self._remote = remote
        self._ids = id_generator or OrderIdGenerator()
        self._orders: List[Order] = []
        self._known_ids: Set[str] = set()

    @property
    def history(self) -> List[Order]:
        return list(self._orders)

    @property
    def pending(self) -> List[Order]:
        return [o for o in self._orders if o.sync is SyncState.PENDING]

    @property
    def confirmed(self) -> List[Order]:
        return [o for o in self._orders if o.sync is SyncState.CONFIRMED]

    def get(self, order_id: str) -> Optional[Order]:
        for order in self._orders:
            if order.id == order_id:
                return order
        return None

    def for_customer(self, email: str) -> List[Order]:
        return [o for o in self._orders if o.customer_email == email]

    def latest_for(self, email: str) -> Optional[Order]:
        orders = self.for_customer(email)
        return orders[0] if orders else None

    def clear(self) -> None:
        """Forget the local history (remote data is untouched)."""
        self._orders.clear()

    def place_order(
        self,
        cart: Cart,
        customer_name: str,
        customer_email: str,
        when: Optional[datetime] = None,
    ) -> Optional[Order]:
        """
        Turn the cart into a PENDING order at the head of the history and
        empty the cart. Returns None (and changes nothing) if the cart is empty.
        """
        if not len(cart):
            return None

        order = Order(
            id=self._ids.generate(self._known_ids),
            customer_name=customer_name,
            customer_email=customer_email,
            items=cart.lines,
            total=round(cart.total * (1 + TAX_RATE), 2),
            date=format_order_date(when or datetime.now()),
            status=OrderStatus.PLACED,
            sync=SyncState.PENDING,
        )
        self._known_ids.add(order.id)
        self._orders.insert(0, order)
        cart.clear()
        _logger.info(f"Order {order.id} placed locally, total {order.total:.2f}")
        return order

    async def persist(self, order: Order) -> bool:
        """Send the order to the backend once; mark it CONFIRMED on success."""
        if not await self._remote.create_order(order):
            _logger.error(f"Order {order.id} was not saved to the backend; kept locally.")
            return False
        self._replace(dataclasses.replace(order, sync=SyncState.CONFIRMED))
        _logger.info(f"Order {order.id} confirmed by the backend.")
        return True

    async def refresh(self, role: Role, identity: Optional[CustomerIdentity]) -> bool:
        """
        Reload history from the backend for the current viewer.
        Admins get every order, customers their own; anyone else nothing.
        Local PENDING orders missing from the answer stay at the head.
        """
        if role is Role.ADMIN:
            fetched = await self._remote.fetch_orders()
        elif identity is not None:
            fetched = await self._remote.fetch_orders_for(identity.email)
        else:
            return False

        if not self._remote.online:
            _logger.warning("Could not fetch orders, keeping local history.")
            return False

        fetched_ids = {o.id for o in fetched}
        unsent = [o for o in self.pending if o.id not in fetched_ids]
        self._orders = unsent + list(fetched)
        self._known_ids.update(fetched_ids)
        return True

    def _replace(self, order: Order) -> None:
        for idx, existing in enumerate(self._orders):
            if existing.id == order.id:
                self._orders[idx] = order
                return


# ---------------------------
# Tracking & reports
# ---------------------------


def step_index(status) -> int:
    """Position of status in the delivery progression, -1 if unknown."""
    for idx, (step, _) in enumerate(STATUS_STEPS):
        if step == status:
            return idx
    return -1


def progress(status) -> float:
    idx = step_index(status)
    if idx < 0:
        return 0.0
    return min(1.0, idx / (len(STATUS_STEPS) - 1))


def sales_summary(orders: Iterable[Order]) -> Dict[str, float]:
    """
    Headline numbers for the admin dashboard.
    Pending means Placed or Processing, not the sync state.
    """
    orders = list(orders)
    total_sales = sum(o.total for o in orders)
    unique_customers = len({o.customer_email for o in orders})
    pending_orders = sum(
        1
        for o in orders
        if o.status in (OrderStatus.PLACED, OrderStatus.PROCESSING)
    )
    return {
        "total_sales": total_sales,
        "total_orders": len(orders),
        "unique_customers": unique_customers,
        "pending_orders": pending_orders,
    }
