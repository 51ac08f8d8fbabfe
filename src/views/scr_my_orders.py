from typing import Optional

from textual import on, work
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.events import ScreenResume
from textual.widgets import Button, DataTable, Label, MarkdownViewer, ProgressBar

from store.models import Order, SyncState
from store.orders import STATUS_STEPS, progress, step_index
from utils.messages import ModeSwitchedMessage, NewOrderMessage
from utils.pure import format_money, generate_markdown_table, status_label
from views.base_screen import BaseScreen


def order_markdown(order: Order) -> str:
    sync = "saved" if order.sync is SyncState.CONFIRMED else "not yet saved to the store"
    header = (
        f"### Order #{order.id}\n"
        f"Placed: {order.date}  \n"
        f"Status: **{status_label(order.status)}** ({sync})\n\n"
    )
    rows = [
        [line.name, line.quantity, format_money(line.price), format_money(line.line_total)]
        for line in order.items
    ]
    table = generate_markdown_table(
        ["Product", "Qty", "Unit Price", "Line Total"], rows, ["l", "r", "r", "r"]
    )
    return header + table + f"\n\n**Total:** {format_money(order.total)}"


class MyOrdersScreen(BaseScreen):
    """
    Customer dashboard: delivery tracking for the latest order,
    then the full history (newest first) with a detail pane.
    """

    BINDINGS = [
        Binding("enter", "noop", "View Order Detail", show=True, key_display="⏎"),
    ]

    def compose(self) -> ComposeResult:
        yield from super().compose()
        with Vertical():
            yield Label("", id="label-tracking")
            yield ProgressBar(total=100, show_eta=False, id="bar-tracking")
            yield Label("", id="label-steps")
            yield MarkdownViewer(id="md-order-detail", show_table_of_contents=False)
            yield DataTable(id="table-orders")
        with Horizontal(id="hort-table-control"):
            yield Button("Refresh", id="btn-refresh")

    def on_mount(self) -> None:
        table = self.query_one(DataTable)
        table.cursor_type = "row"
        table.zebra_stripes = True
        table.add_columns("Order ID", "Date", "Items", "Status", "Total", "Saved")

    @on(ScreenResume)
    @on(ModeSwitchedMessage)
    @on(NewOrderMessage)
    def handle_show(self) -> None:
        self.render_orders()

    @on(Button.Pressed, "#btn-refresh")
    @work(exclusive=True, group="orders")
    async def handle_refresh(self) -> None:
        if not await self.app.state.refresh_orders():
            self.notify("Could not reach the store, showing local orders.", severity="warning")
        self.render_orders()

    @on(DataTable.RowHighlighted)
    def handle_row_highlight(self, event: DataTable.RowHighlighted) -> None:
        order = self.app.state.orders.get(event.row_key.value)
        self._render_detail(order)

    def render_orders(self) -> None:
        state = self.app.state
        table = self.query_one(DataTable)
        table.clear()

        if state.identity is None:
            self._render_tracking(None)
            self._render_detail(None, "### Sign in to track your orders.")
            return

        orders = state.visible_orders
        for o in orders:
            table.add_row(
                o.id,
                o.date,
                o.item_count,
                status_label(o.status),
                format_money(o.total),
                "yes" if o.sync is SyncState.CONFIRMED else "pending",
                key=o.id,
            )

        latest = state.orders.latest_for(state.identity.email)
        self._render_tracking(latest)
        self._render_detail(latest)

    def _render_tracking(self, order: Optional[Order]) -> None:
        bar = self.query_one("#bar-tracking", ProgressBar)
        tracking = self.query_one("#label-tracking", Label)
        steps = self.query_one("#label-steps", Label)
        idx = step_index(order.status) if order else -1
        if order is None or idx < 0:
            tracking.update("No active order.")
            bar.update(progress=0)
            steps.update("")
            return

        tracking.update(f"Tracking order #{order.id}: {STATUS_STEPS[idx][1]}")
        bar.update(progress=progress(order.status) * 100)
        steps.update(
            "  >  ".join(
                f"[b]{label}[/b]" if i <= idx else label
                for i, (_, label) in enumerate(STATUS_STEPS)
            )
        )

    def _render_detail(self, order: Optional[Order], empty: str = "") -> None:
        md = order_markdown(order) if order else (empty or "### No orders yet.")
        self.query_one("#md-order-detail", MarkdownViewer).document.update(md)
