from textual import events, on
from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical
from textual.screen import ModalScreen
from textual.widgets import Button, Label, MarkdownViewer

from store.orders import TAX_RATE
from utils.pure import format_money, generate_markdown_table


class CheckoutModal(ModalScreen[bool]):
    """
    Order review before placing it: every line, tax and grand total.
    Return True to place the order, False to go back.
    """

    def compose(self) -> ComposeResult:
        with Vertical():
            yield MarkdownViewer("", show_table_of_contents=False)
            yield Label("", id="label-ship-to")
            with Horizontal():
                yield Button("Go Back", id="btn-quit")
                yield Button("Place Order", id="btn-submit", variant="primary")

    async def on_mount(self):
        state = self.app.state
        cart = state.cart
        headers = ["Product", "Unit Price", "Quantity", "Line Total"]
        rows = [
            [
                line.name,
                format_money(line.price),
                line.quantity,
                format_money(line.line_total),
            ]
            for line in cart
        ]
        md = "### Order Summary\n\n" + generate_markdown_table(
            headers, rows, ["l", "r", "c", "r"]
        )
        md += (
            f"\n\n**Subtotal:** {format_money(cart.total)}  \n"
            f"**Tax ({TAX_RATE:.0%}):** {format_money(cart.total * TAX_RATE)}  \n"
            f"**Total:** {format_money(cart.total * (1 + TAX_RATE))}"
        )
        await self.query_one(MarkdownViewer).document.update(md)
        if state.identity:
            self.query_one("#label-ship-to", Label).content = (
                f"Ordering as {state.identity.name} <{state.identity.email}>"
            )
        self.query_one("#btn-submit").focus()

    def on_key(self, event: events.Key) -> None:
        if event.key == "escape":
            self.dismiss(False)

    @on(Button.Pressed, "#btn-submit")
    def handle_submit(self):
        self.dismiss(True)

    @on(Button.Pressed, "#btn-quit")
    def handle_quit(self):
        self.dismiss(False)
