from __future__ import annotations

import asyncio
from datetime import datetime
from typing import List, Optional, Set

from store.auth import (
    CredentialVerifier,
    IncompleteLoginError,
    InvalidCredentialsError,
    LoginRequiredError,
)
from store.cart import Cart
from store.catalog import Catalog
from store.models import CustomerIdentity, Order, Role
from store.orders import OrderBook
from store.remote import RemoteStore
from utils.logger import get_logger

_logger = get_logger(__name__)


class StoreSession:
    """
    State of the one active storefront session, owned by the app and handed
    to whatever needs it.

    Fields:
      - role: Role.GUEST | Role.CUSTOMER | Role.ADMIN
      - identity: signed-in customer (name, email), or None
      - cart, orders, catalog: the session's cart, order book and product list
    """

    def __init__(
        self,
        remote: RemoteStore,
        verifier: CredentialVerifier,
        default_role: Role = Role.CUSTOMER,
        catalog: Optional[Catalog] = None,
        orders: Optional[OrderBook] = None,
    ) -> None:
        self.remote = remote
        self.default_role = default_role
        self.role: Role = default_role
        self.identity: Optional[CustomerIdentity] = None

        self.cart = Cart()
        self.catalog = catalog or Catalog(remote)
        self.orders = orders or OrderBook(remote)

        self._verifier = verifier
        self._writes: Set[asyncio.Task] = set()

    @property
    def is_admin(self) -> bool:
        return self.role is Role.ADMIN

    @property
    def is_authenticated(self) -> bool:
        return self.identity is not None

    @property
    def visible_orders(self) -> List[Order]:
        """Admins see every order, a signed-in customer their own, nobody else any."""
        if self.is_admin:
            return self.orders.history
        if self.identity is not None:
            return self.orders.for_customer(self.identity.email)
        return []

    # ---------------------------
    # Roles & identity
    # ---------------------------

    def elevate_to_admin(self, passcode: str) -> None:
        """Switch to the admin role if the passcode verifies, else raise."""
        if not self._verifier.verify(passcode):
            _logger.warning("Rejected admin passcode.")
            raise InvalidCredentialsError()
        self.role = Role.ADMIN
        _logger.info("Admin access granted.")

    def login_customer(self, name: str, email: str, password: str) -> CustomerIdentity:
        """
        Sign a customer in. The password is required but never checked; a
        blank name falls back to the local part of the email.
        """
        name, email = (name or "").strip(), (email or "").strip()
        if not email or not password:
            raise IncompleteLoginError()
        self.identity = CustomerIdentity(name=name or email.split("@")[0], email=email)
        self.role = Role.CUSTOMER
        _logger.info(f"Customer {email} signed in.")
        return self.identity

    def logout(self) -> None:
        """Drop identity and the locally held order history; back to the default role."""
        if self.identity:
            _logger.info(f"Customer {self.identity.email} signed out.")
        self.identity = None
        self.orders.clear()
        self.role = self.default_role

    # ---------------------------
    # Catalog & orders
    # ---------------------------

    async def load_catalog(self):
        return await self.catalog.load()

    async def refresh_orders(self) -> bool:
        return await self.orders.refresh(self.role, self.identity)

    async def checkout(self, when: Optional[datetime] = None) -> Optional[Order]:
        """
        Place an order for the signed-in customer and send it in the background.
        Returns the PENDING order, or None if the cart was empty.
        """
        if self.identity is None:
            raise LoginRequiredError()
        order = self.orders.place_order(
            self.cart, self.identity.name, self.identity.email, when
        )
        if order is None:
            return None
        task = asyncio.create_task(self.orders.persist(order))
        self._writes.add(task)
        task.add_done_callback(self._writes.discard)
        return order

    async def flush(self) -> None:
        """Wait for every background write started so far."""
        if self._writes:
            await asyncio.gather(*list(self._writes))

    async def close(self) -> None:
        await self.flush()
        await self.remote.aclose()
