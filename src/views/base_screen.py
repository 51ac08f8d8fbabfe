import asyncio

from textual import on, work
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Container
from textual.events import ScreenResume
from textual.screen import Screen
from textual.widgets import Button, Footer, Header, Label, ListItem, ListView, Markdown

from store.models import Role
from utils.messages import UserLogoutMessage
from utils.pure import generate_markdown_table
from views.modal_dialog import DialogModal, QuitDialogModal


class Sidebar(Container):
    def __init__(self) -> None:
        super().__init__()
        self._render_lock = asyncio.Lock()

    def compose(self) -> ComposeResult:
        yield Label("Account", id="label-info-1")
        yield Markdown("", id="md-userinfo")
        yield Button("Sign in", id="btn-signin", variant="primary")
        yield Button("Log out", id="btn-logout", variant="error")
        yield Label("Menu", id="label-info-2")
        yield ListView(id="list-menu")

    async def on_mount(self):
        await self.render_info()

    async def render_info(self) -> None:
        """Rebuild account table and menu for the current role."""
        async with self._render_lock:
            await self._render_info()

    async def _render_info(self) -> None:
        state = self.app.state
        if state.is_admin:
            rows = [["Role", "Admin"]]
        elif state.identity:
            rows = [
                ["Name", state.identity.name],
                ["Email", state.identity.email],
                ["Role", "Customer"],
            ]
        else:
            rows = [["Role", "Guest" if state.role is Role.GUEST else "Visitor"]]
        rows.append(["Cart", f"{state.cart.item_count} item(s)"])
        if not state.remote.online:
            rows.append(["Backend", "offline"])
        await self.query_one(Markdown).update(
            generate_markdown_table(["", ""], rows, ["l", "l"])
        )

        signed_in = state.is_admin or state.is_authenticated
        self.query_one("#btn-signin").display = not signed_in
        self.query_one("#btn-logout").display = signed_in

        list_menu: ListView = self.query_one("#list-menu")
        await list_menu.clear()
        await list_menu.extend(
            [ListItem(Label(v), name=k) for k, v in self.app.menu_modes.items()]
        )
        self.highlight_item(self.app.current_mode)

    async def on_list_view_selected(self, event: ListView.Selected):
        selected_mode = event.item.name
        if self.app.current_mode != selected_mode:
            await self.app.go_to(selected_mode)

    @on(Button.Pressed, "#btn-signin")
    @work()
    async def handle_signin(self):
        from views.scr_account import AccountScreen

        await self.app.push_screen_wait(AccountScreen())

    @on(Button.Pressed, "#btn-logout")
    @work()
    async def handle_logout(self):
        if not await self.app.push_screen_wait(
            DialogModal(
                "Are you sure you want to log out?",
                primary_text="Yes",
                secondary_text="No",
                tone="warning",
            )
        ):
            return

        self.post_message(UserLogoutMessage())

    def highlight_item(self, mode_str: str):
        list_menu = self.query_one("#list-menu")
        for item in list_menu.children:
            item.highlighted = item.name == mode_str


class BaseScreen(Screen):
    """
    Inherited by all screens, contains common elements like
    headers, footers, sidebar, and keybindings.
    """

    BINDINGS = [
        Binding("ctrl+z", "quit", "Quit App", show=True),
    ]

    def __init__(self):
        super().__init__()

        self.configure()

    def configure(
        self,
        header_sub_title: str = "",
        show_sidebar: bool = True,
    ) -> None:
        """
        set the header title and whether the sidebar is shown;
        screens registered as a mode take their menu label as subtitle
        """
        self.app.title = "Yellow Mart"
        self.sub_title = header_sub_title
        labels = {**self.app.CUSTOMER_MODES, **self.app.ADMIN_MODES}
        for k, v in self.app.MODES.items():
            if isinstance(self, v) and k in labels:
                self.sub_title = labels[k]

        self._show_sidebar = show_sidebar

    def compose(self) -> ComposeResult:
        if self._show_sidebar:
            yield Sidebar()
        yield Header()
        yield Footer(show_command_palette=False)

    @on(ScreenResume)
    async def refresh_sidebar(self):
        for sidebar in self.query(Sidebar):
            await sidebar.render_info()

    @work()
    async def action_quit(self):
        await self.app.push_screen_wait(QuitDialogModal())
