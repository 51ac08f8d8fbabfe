from textual import on
from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical
from textual.events import Key
from textual.widgets import Button, Input, Label, TabbedContent, TabPane

from store.auth import StoreError
from utils.messages import UserLoginMessage
from views.base_screen import BaseScreen


class AccountScreen(BaseScreen):
    """
    Customer sign-in and merchant (admin) access.
    Dismisses with True once either succeeds, False when cancelled.
    """

    BINDINGS = [("escape", "cancel", "Back")]

    def __init__(self):
        super().__init__()
        self.configure(header_sub_title="Account", show_sidebar=False)

    def compose(self) -> ComposeResult:
        yield from super().compose()
        with TabbedContent(id="super-tab-account"):
            with TabPane("Customer", id="tab-customer"):
                with Vertical(id="div-login"):
                    yield Label("Name (optional)")
                    yield Input(placeholder="Jane Doe", id="input-login-name")
                    yield Label("Email")
                    yield Input(placeholder="user@example.com", id="input-login-email")
                    yield Label("Password")
                    yield Input(
                        placeholder="*********", password=True, id="input-login-pwd"
                    )
                    with Horizontal(id="div-login-btns"):
                        yield Button("Back", id="btn-back")
                        yield Button("Sign in", id="btn-login", variant="primary")

            with TabPane("Merchant", id="tab-merchant"):
                with Vertical(id="div-admin"):
                    yield Label("Restricted area. Authorized personnel only.")
                    yield Label("Security Passcode")
                    yield Input(
                        placeholder="******", password=True, id="input-admin-code"
                    )
                    with Horizontal(id="div-admin-btns"):
                        yield Button("Access Dashboard", id="btn-admin", variant="warning")

    def on_mount(self):
        self.query_one("#input-login-email").focus()

    def on_key(self, event: Key) -> None:
        if event.key != "enter":
            return
        if self.focused == self.query_one("#input-login-pwd"):
            self.handle_login_submit()
        elif self.focused == self.query_one("#input-admin-code"):
            self.handle_admin_submit()

    def action_cancel(self) -> None:
        self.dismiss(False)

    @on(Button.Pressed, "#btn-back")
    def handle_back(self) -> None:
        self.dismiss(False)

    @on(Button.Pressed, "#btn-login")
    def handle_login_submit(self) -> None:
        name = self.query_one("#input-login-name", Input).value
        email = self.query_one("#input-login-email", Input).value
        pwd = self.query_one("#input-login-pwd", Input).value

        try:
            identity = self.app.state.login_customer(name, email, pwd)
        except StoreError as e:
            self.notify(str(e), severity="error")
            return

        self.notify(f"Welcome back, {identity.name}!")
        self.app.post_message(UserLoginMessage())
        self.dismiss(True)

    @on(Button.Pressed, "#btn-admin")
    def handle_admin_submit(self) -> None:
        code_input = self.query_one("#input-admin-code", Input)
        try:
            self.app.state.elevate_to_admin(code_input.value)
        except StoreError as e:
            self.notify(str(e), severity="error")
            code_input.value = ""
            code_input.focus()
            code_input.add_class("-invalid")
            return

        self.notify("Admin access granted.")
        self.app.post_message(UserLoginMessage())
        self.dismiss(True)
