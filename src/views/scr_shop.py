from textual import events, on
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal
from textual.events import ScreenResume
from textual.widgets import DataTable, Input, Label, Select

from store.catalog import ALL_CATEGORIES
from utils.messages import CartChangedMessage
from utils.pure import format_money
from views.base_screen import BaseScreen
from views.modal_prod_detail import ProdDetailModal


class ShopScreen(BaseScreen):
    """
    Product list with name search and a category filter.
    """

    # only here to be displayed in footer
    BINDINGS = [
        Binding("fn+shift+1", "noop", "View Product", show=True, key_display="⏎"),
    ]

    def __init__(self):
        super().__init__()

    def compose(self) -> ComposeResult:
        yield from super().compose()
        with Horizontal(id="hort-shop-filters"):
            yield Input(id="input-search", placeholder="Search products...")
            yield Select(
                [(ALL_CATEGORIES, ALL_CATEGORIES)],
                id="select-category",
                allow_blank=False,
                value=ALL_CATEGORIES,
            )
        yield DataTable(id="table-products")
        yield Label("", id="label-result-cnt")

    def on_mount(self):
        table = self.query_one(DataTable)
        table.cursor_type = "row"
        table.zebra_stripes = True
        table.add_columns("ID", "Name", "Category", "Price", "Rating", "Stock")
        self.query_one("#input-search").focus()

    @on(ScreenResume)
    def handle_resume(self) -> None:
        # catalog may have been (re)loaded since the last visit
        categories = self.app.state.catalog.categories()
        select = self.query_one("#select-category", Select)
        current = select.value if select.value in categories else ALL_CATEGORIES
        select.set_options((c, c) for c in categories)
        select.value = current
        self.update_results()

    @on(Input.Changed, "#input-search")
    @on(Select.Changed, "#select-category")
    def update_results(self) -> None:
        category = self.query_one("#select-category", Select).value
        if category is Select.BLANK:
            category = ALL_CATEGORIES
        query = self.query_one("#input-search", Input).value
        products = self.app.state.catalog.filter(category, query)

        table = self.query_one(DataTable)
        table.clear()
        for p in products:
            stock = str(p.stock) if p.stock > 0 else "Out of stock"
            table.add_row(
                p.id, p.name, p.category, format_money(p.price), f"{p.rating:.1f}", stock
            )

        if products:
            self.query_one("#label-result-cnt", Label).content = f"{len(products)} product(s)"
        else:
            self.query_one("#label-result-cnt", Label).content = (
                "No products found. Try adjusting your search or filter."
            )

    async def on_key(self, event: events.Key) -> None:
        table = self.query_one(DataTable)
        if event.key == "enter" and self.focused == table and table.row_count:
            product_id = table.get_row_at(table.cursor_row)[0]
            self.open_product(product_id)

    def open_product(self, product_id: str) -> None:
        def after(changed: bool | None) -> None:
            if changed:
                self.app.post_message(CartChangedMessage())

        self.app.push_screen(ProdDetailModal(product_id), after)
