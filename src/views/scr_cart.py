from textual import on, work
from textual.app import ComposeResult
from textual.containers import Horizontal
from textual.events import ScreenResume
from textual.widgets import Button, DataTable, Label, Rule

from utils import cart as cart_ops
from utils.messages import CartChangedMessage
from utils.pure import format_money
from views.base_screen import BaseScreen
from views.modal_checkout import CheckoutModal
from views.modal_dialog import ConfirmDialogModal


class CartScreen(BaseScreen):
    """
    Active cart: one row per product, quantities merged.
    """

    def __init__(self) -> None:
        super().__init__()

    def compose(self) -> ComposeResult:
        yield from super().compose()
        yield DataTable(id="table-cart")
        yield Label("Total: ₦0", id="label-cart-total")
        yield Rule(line_style="dashed")
        with Horizontal(id="hort-buttons"):
            yield Button("Clear Cart", id="btn-clear-cart")
            yield Button("Remove Item", id="btn-remove-item")
            yield Button("Pay & Buy Now", id="btn-checkout", variant="success")

    def on_mount(self):
        table = self.query_one(DataTable)
        table.cursor_type = "row"
        table.zebra_stripes = True
        table.add_columns("Product", "Unit Price", "Qty", "Subtotal")
        self.handle_cart_change()

    @on(CartChangedMessage)
    @on(ScreenResume)
    def handle_cart_change(self) -> None:
        cart = self.app.state.cart
        table = self.query_one(DataTable)
        table.clear()
        for line in cart:
            table.add_row(
                line.name,
                format_money(line.price),
                line.quantity,
                format_money(cart_ops.line_total(line)),
                key=line.product_id,
            )

        if not cart:
            table.add_class("no-items")
            self.query_one("#label-cart-total", Label).update("Cart Empty")
        else:
            table.remove_class("no-items")
            self.query_one("#label-cart-total", Label).update(
                f"Total ({cart_ops.item_count(cart)} items): "
                f"{format_money(cart_ops.cart_total(cart))}"
            )

    @on(Button.Pressed, "#btn-remove-item")
    @work()
    async def handle_remove_item(self) -> None:
        table = self.query_one(DataTable)
        if not self.app.state.cart or table.row_count == 0:
            self.notify("Cart is empty.", severity="warning")
            return

        row_key, _ = table.coordinate_to_cell_key(table.cursor_coordinate)
        line = next(
            (ln for ln in self.app.state.cart if ln.product_id == row_key.value), None
        )
        if line is None:
            return
        if await self.app.push_screen_wait(
            ConfirmDialogModal(f"Remove {line.name} from cart?")
        ):
            self.app.state.remove_from_cart(line.product_id)
            self.post_message(CartChangedMessage())
            self.notify("Item removed from cart.")

    @on(Button.Pressed, "#btn-clear-cart")
    @work()
    async def handle_clear_cart(self) -> None:
        if not self.app.state.cart:
            self.notify("Cart is empty.", severity="warning")
            return

        if await self.app.push_screen_wait(
            ConfirmDialogModal(
                "Do you really want to remove all items from cart?", tone="error"
            )
        ):
            self.app.state.clear_cart()
            self.post_message(CartChangedMessage())

    @on(Button.Pressed, "#btn-checkout")
    @work()
    async def handle_checkout(self) -> None:
        if not self.app.state.cart:
            self.notify("Cart is empty.", severity="warning")
            return

        await self.app.push_screen_wait(CheckoutModal())
        self.post_message(CartChangedMessage())
