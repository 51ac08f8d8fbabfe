import unittest
from datetime import datetime

from backend_stub import FakeBackend, order_doc
from store.auth import (
    IncompleteLoginError,
    InvalidCredentialsError,
    LoginRequiredError,
    PasscodeVerifier,
)
from store.models import Product, Role, SyncState
from utils.state import StoreSession

PASSCODE = "200230"
HEADPHONES = Product(id="1", name="Headphones", price=12500, category="Electronics")
SNEAKERS = Product(id="2", name="Sneakers", price=4500, category="Fashion")


class AllowList:
    """Verifier stub: accepts any secret in the given set."""

    def __init__(self, *secrets):
        self.secrets = set(secrets)
        self.calls = []

    def verify(self, secret: str) -> bool:
        self.calls.append(secret)
        return secret in self.secrets


class PasscodeVerifierTestCase(unittest.TestCase):
    def test_exact_match_only(self):
        verifier = PasscodeVerifier(PASSCODE)
        self.assertTrue(verifier.verify("200230"))
        for attempt in ("", "200231", " 200230", "200230 ", "20023", "2002300"):
            self.assertFalse(verifier.verify(attempt), attempt)


class StoreSessionTestCase(unittest.IsolatedAsyncioTestCase):
    async def asyncSetUp(self):
        self.backend = FakeBackend()
        self.session = StoreSession(self.backend.remote(), PasscodeVerifier(PASSCODE))

    async def asyncTearDown(self):
        await self.session.close()

    # ---------- roles ----------

    async def test_defaults_to_customer_without_identity(self):
        self.assertIs(self.session.role, Role.CUSTOMER)
        self.assertFalse(self.session.is_authenticated)
        self.assertEqual(self.session.visible_orders, [])

    async def test_guest_default_is_configurable(self):
        session = StoreSession(
            self.backend.remote(), AllowList(), default_role=Role.GUEST
        )
        self.assertIs(session.role, Role.GUEST)
        await session.close()

    async def test_admin_elevation(self):
        with self.assertRaises(InvalidCredentialsError) as ctx:
            self.session.elevate_to_admin("123456")
        self.assertIn("Invalid credentials", str(ctx.exception))
        self.assertIs(self.session.role, Role.CUSTOMER)

        self.session.elevate_to_admin(PASSCODE)
        self.assertTrue(self.session.is_admin)

    async def test_elevation_goes_through_the_verifier(self):
        verifier = AllowList("open-sesame")
        session = StoreSession(self.backend.remote(), verifier)
        session.elevate_to_admin("open-sesame")
        self.assertEqual(verifier.calls, ["open-sesame"])
        self.assertIs(session.role, Role.ADMIN)
        await session.close()

    # ---------- customer login ----------

    async def test_login_accepts_any_password(self):
        identity = self.session.login_customer("Ann", "ann@example.com", "whatever")
        self.assertEqual(identity.name, "Ann")
        self.assertEqual(self.session.identity.email, "ann@example.com")
        self.assertIs(self.session.role, Role.CUSTOMER)

    async def test_login_name_falls_back_to_email(self):
        identity = self.session.login_customer("  ", "bob@example.com", "pw")
        self.assertEqual(identity.name, "bob")

    async def test_login_requires_email_and_password(self):
        with self.assertRaises(IncompleteLoginError):
            self.session.login_customer("Ann", "", "pw")
        with self.assertRaises(IncompleteLoginError):
            self.session.login_customer("Ann", "ann@example.com", "")
        self.assertIsNone(self.session.identity)

    async def test_logout_clears_identity_and_local_orders(self):
        self.session.login_customer("Ann", "ann@example.com", "pw")
        self.session.cart.add(HEADPHONES)
        await self.session.checkout()
        await self.session.flush()

        self.session.logout()

        self.assertIsNone(self.session.identity)
        self.assertEqual(self.session.orders.history, [])
        # remote data is untouched
        self.assertEqual(len(self.backend.orders), 1)

    async def test_admin_logout_returns_to_default_role(self):
        self.session.elevate_to_admin(PASSCODE)
        self.session.logout()
        self.assertIs(self.session.role, Role.CUSTOMER)

    async def test_logout_returns_to_guest_default(self):
        session = StoreSession(
            self.backend.remote(), PasscodeVerifier(PASSCODE), default_role=Role.GUEST
        )
        session.login_customer("Ann", "ann@example.com", "pw")
        self.assertIs(session.role, Role.CUSTOMER)
        session.logout()
        self.assertIs(session.role, Role.GUEST)

        session.elevate_to_admin(PASSCODE)
        session.logout()
        self.assertIs(session.role, Role.GUEST)
        await session.close()

    # ---------- checkout ----------

    async def test_checkout_requires_identity(self):
        self.session.cart.add(HEADPHONES)
        with self.assertRaises(LoginRequiredError):
            await self.session.checkout()
        self.assertEqual(len(self.session.cart), 1)

    async def test_checkout_with_empty_cart(self):
        self.session.login_customer("Ann", "ann@example.com", "pw")
        self.assertIsNone(await self.session.checkout())
        await self.session.flush()
        self.assertEqual(self.backend.requests, [])

    async def test_checkout_is_optimistic_then_confirmed(self):
        self.session.login_customer("Ann", "ann@example.com", "pw")
        self.session.cart.add(HEADPHONES, 1)
        self.session.cart.add(SNEAKERS, 2)

        order = await self.session.checkout(datetime(2026, 10, 19, 9, 30))

        # recorded locally before the write lands
        self.assertIs(order.sync, SyncState.PENDING)
        self.assertEqual(self.session.visible_orders[0].id, order.id)
        self.assertEqual(len(self.session.cart), 0)
        self.assertEqual(order.total, 22575.0)
        self.assertEqual(order.customer_name, "Ann")

        await self.session.flush()
        self.assertIs(self.session.orders.get(order.id).sync, SyncState.CONFIRMED)
        self.assertEqual(self.backend.orders[0]["id"], order.id)

    async def test_checkout_survives_backend_outage(self):
        self.backend.down = True
        self.session.login_customer("Ann", "ann@example.com", "pw")
        self.session.cart.add(SNEAKERS)

        order = await self.session.checkout()
        await self.session.flush()

        self.assertEqual(self.session.orders.pending, [order])
        self.assertEqual(self.session.visible_orders, [order])

    # ---------- order visibility ----------

    async def test_visible_orders_per_role(self):
        self.backend.orders = [
            order_doc("ORD-2222-B", "bob@example.com"),
            order_doc("ORD-1111-A", "ann@example.com"),
        ]
        self.session.elevate_to_admin(PASSCODE)
        await self.session.refresh_orders()
        self.assertEqual(len(self.session.visible_orders), 2)

        self.session.logout()
        self.session.login_customer("Ann", "ann@example.com", "pw")
        await self.session.refresh_orders()
        self.assertEqual(
            [o.id for o in self.session.visible_orders], ["ORD-1111-A"]
        )

    async def test_load_catalog(self):
        products = await self.session.load_catalog()
        self.assertEqual(self.session.catalog.source, "seeded")
        self.assertEqual(products, self.session.catalog.products)


if __name__ == "__main__":
    unittest.main()
