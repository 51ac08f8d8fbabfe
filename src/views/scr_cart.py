from textual import on, work
from textual.app import ComposeResult
from textual.containers import Container, Horizontal, HorizontalGroup, VerticalScroll
from textual.events import ScreenResume
from textual.message import Message
from textual.widgets import Button, Label, Markdown, Rule

from store.auth import StoreError
from store.models import CartLine
from store.orders import TAX_RATE
from utils.messages import CartChangedMessage, ModeSwitchedMessage, NewOrderMessage
from utils.pure import format_money, generate_markdown_table
from views.base_screen import BaseScreen
from views.modal_checkout import CheckoutModal
from views.modal_dialog import DialogModal
from views.modal_prod_detail import ProdDetailModal


class CartLineActionEditMessage(Message):
    bubble = True


class CartLineActionRemoveMessage(Message):
    bubble = True


class CartLineActionLabel(Label):
    def action_edit(self):
        self.post_message(CartLineActionEditMessage())

    def action_remove(self):
        self.post_message(CartLineActionRemoveMessage())


class CartLineWidget(HorizontalGroup):
    def __init__(self, line: CartLine):
        super().__init__()
        self.line = line

    def compose(self):
        with Container(id="div-cart-item-group"):
            with Container(id="div-item"):
                yield Label(self.line.name, id="label-item-name")
                yield Label(f"x{self.line.quantity}", id="label-item-qty")
                yield Label(format_money(self.line.line_total), id="label-item-price")
            with Container(id="div-actions"):
                yield CartLineActionLabel(
                    content="[@click=edit()]Edit[/]", id="link-item-edit"
                )
                yield CartLineActionLabel(
                    content="[@click=remove()]Remove[/]", id="link-item-remove"
                )

    @on(CartLineActionEditMessage)
    @work()
    async def handle_edit_item(self):
        if await self.app.push_screen_wait(ProdDetailModal(self.line.id)):
            self.post_message(CartChangedMessage())

    @on(CartLineActionRemoveMessage)
    @work()
    async def handle_remove_item(self):
        remove_confirmed = await self.app.push_screen_wait(
            DialogModal(
                f"Remove {self.line.name} from cart?",
                primary_text="Yes",
                secondary_text="No",
                tone="warning",
            )
        )

        if remove_confirmed:
            self.app.state.cart.remove(self.line.id)
            self.post_message(CartChangedMessage())
            self.notify("Item removed from cart.", severity="information")


class CartScreen(BaseScreen):
    """
    cart lines, order summary and checkout
    """

    def __init__(self) -> None:
        super().__init__()

    def compose(self) -> ComposeResult:
        yield from super().compose()
        yield VerticalScroll(id="vertscroll-content")
        yield Markdown("", id="md-cart-summary")
        yield Rule(line_style="dashed")
        with Horizontal(id="hort-buttons"):
            yield Button("Clear Cart", id="btn-clear-cart")
            yield Button("Checkout", id="btn-checkout", variant="primary")

    @on(CartChangedMessage)
    @on(ModeSwitchedMessage)
    @on(ScreenResume)
    @work(exclusive=True)  # one rebuild at a time
    async def handle_cart_change(self):
        cart = self.app.state.cart

        content = self.query_one("#vertscroll-content")
        if [c.line for c in content.children] != list(cart.lines):
            await content.remove_children()
            await content.mount_all([CartLineWidget(line) for line in cart.lines])
        content.set_class(not len(cart), "no-items")

        await self.query_one("#md-cart-summary", Markdown).update(
            self.summary_markdown()
        )
        self.query_one("#btn-checkout", Button).label = (
            "Place Order" if self.app.state.is_authenticated else "Login to Checkout"
        )

    def summary_markdown(self) -> str:
        cart = self.app.state.cart
        if not len(cart):
            return "### Your cart is empty\n\nBrowse the shop and add something you like."
        subtotal = cart.total
        rows = [
            ["Subtotal", format_money(subtotal)],
            ["Shipping", "Free"],
            [f"Tax ({TAX_RATE:.0%})", format_money(subtotal * TAX_RATE)],
            ["**Total**", f"**{format_money(subtotal * (1 + TAX_RATE))}**"],
        ]
        return "### Order Summary\n\n" + generate_markdown_table(
            ["", ""], rows, ["l", "r"]
        )

    @on(Button.Pressed, "#btn-clear-cart")
    @work()
    async def handle_clear_cart(self) -> None:
        if not len(self.app.state.cart):
            self.app.notify("Cart is empty.", severity="warning")
            return

        if await self.app.push_screen_wait(
            DialogModal(
                "Do you really want to remove all items from cart?",
                primary_text="Yes",
                secondary_text="No",
                tone="error",
            )
        ):
            self.app.state.cart.clear()
            self.post_message(CartChangedMessage())

    @on(Button.Pressed, "#btn-checkout")
    @work()
    async def handle_checkout(self) -> None:
        state = self.app.state
        if not len(state.cart):
            self.app.notify("Cart is empty.", severity="warning")
            return

        if not state.is_authenticated:
            from views.scr_account import AccountScreen

            if not await self.app.push_screen_wait(AccountScreen()):
                return
            if not state.is_authenticated:
                self.app.notify("Sign in as a customer to checkout.", severity="warning")
                return

        if not await self.app.push_screen_wait(CheckoutModal()):
            return

        try:
            order = await state.checkout()
        except StoreError as e:
            self.notify(str(e), severity="error")
            return
        if order is None:
            self.app.notify("Cart is empty.", severity="warning")
            return

        self.notify(f"Order placed. Your order ID is {order.id}.")
        self.app.post_message(NewOrderMessage(order.id))
        self.post_message(CartChangedMessage())
        await self.app.go_to("my_orders")
