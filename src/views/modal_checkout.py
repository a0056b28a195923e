from typing import Optional

from textual import on, work
from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical
from textual.screen import ModalScreen
from textual.widgets import Button, MarkdownViewer

from api.errors import ApiError
from utils import cart as cart_ops
from utils.pure import format_money, generate_markdown_table, short_id
from views.modal_dialog import ConfirmDialogModal


class CheckoutModal(ModalScreen[Optional[str]]):
    """
    Order summary plus confirmation. Dismisses with the new order id, or
    None if the user backed out or the order was rejected (cart kept).
    """

    BINDINGS = [("escape", "go_back", "Go Back")]

    def compose(self) -> ComposeResult:
        with Vertical():
            yield MarkdownViewer("", show_table_of_contents=False)
            with Horizontal():
                yield Button("Go Back", id="btn-quit")
                yield Button("Place Order", id="btn-submit", variant="primary")

    async def on_mount(self):
        cart = self.app.state.cart
        rows = [
            [
                line.name,
                format_money(line.price),
                line.quantity,
                format_money(cart_ops.line_total(line)),
            ]
            for line in cart
        ]
        md = "### Order Summary\n\n" + generate_markdown_table(
            ["Product", "Unit Price", "Quantity", "Subtotal"],
            rows,
            ["l", "r", "c", "r"],
        )
        md += f"\n\n**Total:** {format_money(cart_ops.cart_total(cart))}"
        await self.query_one(MarkdownViewer).document.update(md)
        self.query_one("#btn-submit").focus()

    @on(Button.Pressed, "#btn-submit")
    @work(exclusive=True)
    async def handle_submit(self):
        if not await self.app.push_screen_wait(
            ConfirmDialogModal("Place order? This cannot be undone.", tone="positive")
        ):
            return

        submit = self.query_one("#btn-submit", Button)
        submit.disabled = True
        try:
            order = await self.app.state.checkout()
        except ApiError as e:
            # cart is untouched, user can retry
            self.notify(e.user_message, severity="error")
            submit.disabled = False
            return

        self.notify(f"Order placed! Order #{short_id(order.id)}.")
        self.dismiss(order.id)

    @on(Button.Pressed, "#btn-quit")
    def action_go_back(self):
        # the order may already be accepted server side
        if self.query_one("#btn-submit", Button).disabled:
            self.notify("Placing order, please wait...", severity="warning")
            return
        self.dismiss(None)
