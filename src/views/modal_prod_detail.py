from textual import events, on
from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical
from textual.reactive import reactive
from textual.screen import ModalScreen
from textual.validation import Number
from textual.widgets import Button, Input, Label, MarkdownViewer

from store.models import Product
from utils.pure import format_money, generate_markdown_table


class ProdDetailModal(ModalScreen[bool]):
    """
    product detail, plus quantity picker
    Returns True if the cart changed, False if not
    """

    order_qty = reactive(1)

    def __init__(self, product_id: str) -> None:
        super().__init__()
        self._product_id = product_id
        self._prod: Product | None = None
        self._in_cart = False

    def compose(self) -> ComposeResult:
        with Horizontal(id="hort-prod-detail"):
            yield MarkdownViewer("", show_table_of_contents=False)
            with Vertical():
                yield Label("Quantity")
                with Horizontal():
                    yield Button("-", id="btn-sub-qty")
                    yield Input(value="1", id="input-order-qty", type="integer")
                    yield Button("+", id="btn-add-qty")
                with Horizontal():
                    yield Button("Go Back", id="btn-quit")
                    yield Button("Add to Cart", id="btn-addcart", variant="primary")

    async def on_mount(self):
        state = self.app.state
        self._prod = state.catalog.get(self._product_id)
        if self._prod is None:
            self.notify("Product not found.", severity="error")
            self.dismiss(False)
            return
        prod = self._prod

        rows = [
            ["Category", prod.category],
            ["Price", format_money(prod.price)],
            ["Rating", f"{prod.rating:.1f} / 5"],
            ["In Stock", prod.stock],
        ]
        md = (
            f"### {prod.name}\n\n{prod.description}\n\n"
            + generate_markdown_table(["Attribute", "Value"], rows, ["l", "l"])
        )
        if prod.features:
            md += "\n\n**Features**\n\n" + "\n".join(f"- {f}" for f in prod.features)
        await self.query_one(MarkdownViewer).document.update(md)

        if prod.stock < 1:
            order_btn = self.query_one("#btn-addcart", Button)
            order_btn.label = "Out of Stock"
            order_btn.disabled = True
            order_btn.variant = "warning"

        self.query_one("#input-order-qty").validators = [
            Number(minimum=1, maximum=max(prod.stock, 1))
        ]

        line = state.cart.get(prod.id)
        if line:
            self._in_cart = True
            self.order_qty = line.quantity
            self.query_one("#btn-addcart", Button).label = "Update Cart"

        self.query_one("#input-order-qty").focus()

    def on_key(self, event: events.Key) -> None:
        if event.key == "escape":
            self.dismiss(False)

    def on_input_changed(self, message: Input.Changed) -> None:
        if (
            message.input.id == "input-order-qty"
            and message.input.is_valid
            and message.value
            and self.focused == message.input
        ):
            self.order_qty = int(message.value)

    def watch_order_qty(self, qty: int):
        if self._prod is None:
            return
        self.query_one("#btn-sub-qty").disabled = qty <= 1
        self.query_one("#btn-add-qty").disabled = qty >= self._prod.stock
        self.query_one("#input-order-qty", Input).value = str(qty)

    @on(Button.Pressed, "#btn-add-qty")
    def handle_add_qty(self):
        self.order_qty += 1

    @on(Button.Pressed, "#btn-sub-qty")
    def handle_sub_qty(self):
        if self.order_qty > 1:
            self.order_qty -= 1

    @on(Button.Pressed, "#btn-quit")
    def handle_quit(self):
        self.dismiss(False)

    @on(Button.Pressed, "#btn-addcart")
    def handle_addcart(self):
        cart = self.app.state.cart
        if self._in_cart:
            cart.update_quantity(self._prod.id, self.order_qty)
            self.app.notify("Updated cart item quantity.")
        else:
            cart.add(self._prod, self.order_qty)
            self.app.notify(f"{self._prod.name} added to cart.")
        self.dismiss(True)
