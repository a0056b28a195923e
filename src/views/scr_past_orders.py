from typing import List, Optional

from textual import on, work
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.events import ScreenResume
from textual.widgets import Button, DataTable, MarkdownViewer

from api.models import Order
from utils.pure import format_money, generate_markdown_table, short_id
from utils.router import ORDERS
from views.base_screen import BaseScreen


class PastOrdersScreen(BaseScreen):
    """
    Order history for the logged-in user.

    Layout:
    - Markdown detail view at the top, showing the highlighted order.
    - Orders table below, as returned by the backend.
    """

    BINDINGS = [
        Binding("r", "refresh", "Refresh", show=True),
    ]

    def __init__(self) -> None:
        super().__init__()
        self._orders: List[Order] = []

    def compose(self) -> ComposeResult:
        yield from super().compose()
        with Vertical():
            yield MarkdownViewer(id="md-order-detail", show_table_of_contents=False)
            yield DataTable(id="table-orders")
        with Horizontal(id="hort-table-control"):
            yield Button("Refresh", id="btn-refresh")

    def on_mount(self) -> None:
        table = self.query_one(DataTable)
        table.cursor_type = "row"
        table.zebra_stripes = True
        table.add_columns("Order", "Status", "Items", "Total")
        self._render_orders()

    @on(Button.Pressed, "#btn-refresh")
    @on(ScreenResume)
    def action_refresh(self) -> None:
        self._load_orders()

    @work(exclusive=True, group="orders")
    async def _load_orders(self) -> None:
        await self.app.state.refresh(ORDERS)
        self._render_orders()

    def _render_orders(self) -> None:
        self._orders = list(self.app.state.orders)
        table = self.query_one(DataTable)
        table.clear()
        for o in self._orders:
            table.add_row(
                f"#{short_id(o.id)}",
                o.status.value.upper(),
                sum(i.quantity for i in o.items),
                format_money(o.total_price),
            )
        if self._orders:
            table.cursor_coordinate = (0, 0)
            self._render_detail(self._orders[0])
        else:
            self._render_detail(None)

    @on(DataTable.RowHighlighted)
    def handle_row_highlight(self, event: DataTable.RowHighlighted) -> None:
        if 0 <= event.cursor_row < len(self._orders):
            self._render_detail(self._orders[event.cursor_row])

    def _render_detail(self, order: Optional[Order]) -> None:
        viewer = self.query_one("#md-order-detail", MarkdownViewer)
        if order is None:
            viewer.document.update("### No orders yet.")
            return

        header = f"### Order #{short_id(order.id)}\nStatus: {order.status.value}\n\n"
        rows = [
            [
                item.name or item.product_id,
                item.quantity,
                format_money(item.price),
                format_money(item.price * item.quantity),
            ]
            for item in order.items
        ]
        table = generate_markdown_table(
            ["Product", "Qty", "Unit Price", "Line Total"], rows, ["l", "r", "r", "r"]
        )
        footer = f"\n\n**Total:** {format_money(order.total_price)}"
        viewer.document.update(header + table + footer)
