from textual import on, work
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal
from textual.events import ScreenResume
from textual.widgets import Button, DataTable, Input, Label

from api.models import Product
from utils import cart as cart_ops
from utils.messages import CartChangedMessage
from utils.pure import format_money, short_id
from utils.router import PRODUCTS
from views.base_screen import BaseScreen


class MarketplaceScreen(BaseScreen):
    """
    Product catalogue for buyers and sellers. Enter adds the highlighted
    product to the cart.
    """

    # footer hints only, enter is handled by DataTable.RowSelected
    BINDINGS = [
        Binding("enter", "noop", "Add to Cart", show=True, key_display="⏎"),
    ]

    def __init__(self):
        super().__init__()
        self._shown: list[Product] = []

    def compose(self) -> ComposeResult:
        yield from super().compose()
        yield Input(id="input-filter", placeholder="Filter by name or location...")
        yield DataTable(id="table-products")
        with Horizontal(id="hort-market-footer"):
            yield Label("Cart Empty", id="label-cart-summary")
            yield Button("Refresh", id="btn-refresh")

    def on_mount(self):
        table = self.query_one(DataTable)
        table.cursor_type = "row"
        table.zebra_stripes = True
        table.add_columns("ID", "Product", "Price", "Seller", "Location")
        self.render_products()

    @on(ScreenResume)
    @on(Button.Pressed, "#btn-refresh")
    @work(exclusive=True)
    async def handle_refresh(self) -> None:
        await self.app.state.refresh(PRODUCTS)
        self.render_products()

    @on(Input.Changed, "#input-filter")
    def handle_filter(self) -> None:
        self.render_products()

    def render_products(self) -> None:
        query = self.query_one("#input-filter", Input).value.strip().lower()
        products = [
            p
            for p in self.app.state.products
            if not query or query in p.name.lower() or query in p.location.lower()
        ]

        table = self.query_one(DataTable)
        table.clear()
        for p in products:
            table.add_row(
                short_id(p.id),
                p.name,
                format_money(p.price),
                p.seller_name or "-",
                p.location or "-",
            )
        self._shown = products
        self.render_cart_summary()

    def render_cart_summary(self) -> None:
        cart = self.app.state.cart
        label = self.query_one("#label-cart-summary", Label)
        if not cart:
            label.update("Cart Empty")
        else:
            label.update(
                f"Cart: {cart_ops.item_count(cart)} item(s), "
                f"{format_money(cart_ops.cart_total(cart))}"
            )

    @on(DataTable.RowSelected)
    def handle_add_to_cart(self, event: DataTable.RowSelected) -> None:
        if event.cursor_row >= len(self._shown):
            return
        product = self._shown[event.cursor_row]
        self.app.state.add_to_cart(product)
        self.render_cart_summary()
        self.notify(f"Added {product.name} to cart.")

    def action_noop(self) -> None:
        pass
