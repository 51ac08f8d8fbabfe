from textual import on, work
from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical
from textual.events import ScreenResume
from textual.widgets import Button, DataTable, Markdown

from store.orders import sales_summary
from utils.messages import ModeSwitchedMessage, NewOrderMessage
from utils.pure import format_money, status_label
from views.base_screen import BaseScreen


class AdminDashboardScreen(BaseScreen):
    """
    Merchant overview: headline numbers plus every order, newest first.
    """

    def compose(self) -> ComposeResult:
        yield from super().compose()
        with Vertical():
            yield Markdown("", id="md-summary")
            yield DataTable(id="table-all-orders")
        with Horizontal(id="hort-admin-control"):
            yield Button("Refresh", id="btn-refresh", variant="primary")

    def on_mount(self) -> None:
        table = self.query_one(DataTable)
        table.cursor_type = "row"
        table.zebra_stripes = True
        table.add_columns("Order ID", "Customer", "Email", "Date", "Status", "Total")

    @on(NewOrderMessage)
    @on(ScreenResume)
    @on(ModeSwitchedMessage)
    async def handle_show(self) -> None:
        await self.render_dashboard()

    @on(Button.Pressed, "#btn-refresh")
    @work(exclusive=True)
    async def handle_reload(self) -> None:
        if not await self.app.state.refresh_orders():
            self.notify("Could not reach the store.", severity="warning")
        await self.render_dashboard()

    async def render_dashboard(self) -> None:
        state = self.app.state
        if not state.is_admin:
            await self.query_one("#md-summary", Markdown).update(
                "### Restricted area. Authorized personnel only."
            )
            self.query_one(DataTable).clear()
            return

        orders = state.visible_orders
        summary = sales_summary(orders)
        md = (
            "### Dashboard Overview\n\n"
            f"- Total Revenue: {format_money(summary['total_sales'])}\n"
            f"- Total Orders: {summary['total_orders']}\n"
            f"- Customers: {summary['unique_customers']}\n"
            f"- Pending Orders: {summary['pending_orders']}\n"
        )
        if not state.remote.online:
            md += "\n_Store backend is offline; showing local data only._\n"
        await self.query_one("#md-summary", Markdown).update(md)

        table = self.query_one(DataTable)
        table.clear()
        if not orders:
            return
        for o in orders:
            table.add_row(
                o.id,
                o.customer_name,
                o.customer_email,
                o.date,
                status_label(o.status),
                format_money(o.total),
            )
