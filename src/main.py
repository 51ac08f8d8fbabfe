from textual import on, work
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.widgets import LoadingIndicator

from store.auth import PasscodeVerifier
from store.chat import ShopAssistant
from store.remote import RemoteStore
from utils.config import Settings, load_settings
from utils.logger import get_logger
from utils.messages import (
    ModeSwitchedMessage,
    QuitRequestedMessage,
    UserLoginMessage,
    UserLogoutMessage,
)
from utils.state import StoreSession
from views.scr_admin import AdminDashboardScreen
from views.scr_assistant import AssistantScreen
from views.scr_cart import CartScreen
from views.scr_my_orders import MyOrdersScreen
from views.scr_shop import ShopScreen

_logger = get_logger(__name__)


class StorefrontApp(App):
    BINDINGS = [
        Binding("ctrl+t", "switch_light", "Toggle Theme", show=True),
    ]

    MODES = {
        "shop": ShopScreen,
        "cart": CartScreen,
        "my_orders": MyOrdersScreen,
        "assistant": AssistantScreen,
        "admin": AdminDashboardScreen,
    }

    ADMIN_MODES = {
        "admin": "Admin Dashboard",
        "shop": "Shop",
        "assistant": "Yellow Bot",
    }
    CUSTOMER_MODES = {
        "shop": "Shop",
        "cart": "Cart",
        "my_orders": "My Orders",
        "assistant": "Yellow Bot",
    }

    CSS_PATH = "views/styles/store.tcss"

    state: StoreSession
    assistant: ShopAssistant

    def __init__(self, settings: Settings | None = None):
        super().__init__()
        self.settings = settings or load_settings()
        self.state = StoreSession(
            RemoteStore(self.settings.api_url, timeout=self.settings.api_timeout),
            PasscodeVerifier(self.settings.admin_passcode),
            default_role=self.settings.default_role,
        )
        self.assistant = ShopAssistant(
            self.settings.chat_api_key, model=self.settings.chat_model
        )

    @property
    def menu_modes(self) -> dict:
        return self.ADMIN_MODES if self.state.is_admin else self.CUSTOMER_MODES

    @property
    def home_mode(self) -> str:
        return "admin" if self.state.is_admin else "shop"

    def compose(self) -> ComposeResult:
        yield LoadingIndicator()

    async def on_mount(self) -> None:
        self.main_flow()

    def action_switch_light(self):
        if self.theme == "textual-dark":
            self.theme = "solarized-light"
        else:
            self.theme = "textual-dark"
        self.notify(f"Theme changed to {self.theme}")

    async def go_to(self, mode: str) -> None:
        if mode not in self.menu_modes:
            self.notify("That page is not available.", severity="warning")
            return
        self.post_message(ModeSwitchedMessage(self.current_mode, mode))
        await self.switch_mode(mode)

    @on(UserLoginMessage)
    @work
    async def handle_user_login(self):
        await self.state.refresh_orders()
        # customers stay where they signed in (e.g. mid-checkout)
        if self.state.is_admin or self.current_mode not in self.menu_modes:
            await self.go_to(self.home_mode)

    @on(UserLogoutMessage)
    @work
    async def handle_user_logout(self):
        self.state.logout()
        self.notify("Signed out.")
        await self.go_to(self.home_mode)

    @on(QuitRequestedMessage)
    @work
    async def handle_quit(self):
        await self.state.close()
        self.exit()

    @work
    async def main_flow(self):
        await self.state.load_catalog()
        if self.state.catalog.source == "fixtures":
            _logger.warning("Running with the offline catalog.")
        await self.state.refresh_orders()
        await self.go_to(self.home_mode)


def run() -> None:
    StorefrontApp().run()


if __name__ == "__main__":
    run()
