from __future__ import annotations

import math

from textual import on, work
from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical
from textual.events import ScreenResume
from textual.validation import Number
from textual.widgets import Button, DataTable, Input, Label

from api.errors import ApiError
from utils.pure import format_money, short_id
from utils.router import PRODUCTS
from views.base_screen import BaseScreen


class SellerInventoryScreen(BaseScreen):
    """
    Sellers see the products they listed and can upload new ones.
    """

    def __init__(self) -> None:
        super().__init__()

    def compose(self) -> ComposeResult:
        yield from super().compose()
        with Vertical():
            yield DataTable(id="table-inventory")
            with Horizontal(id="hort-upload"):
                with Vertical():
                    yield Label("Product Name")
                    yield Input(placeholder="Bag of rice", id="input-name")
                with Vertical():
                    yield Label("Price (₦)")
                    yield Input(
                        placeholder="1500",
                        id="input-price",
                        type="number",
                        validators=[Number(minimum=0.0)],
                    )
                with Vertical():
                    yield Label("Location")
                    yield Input(placeholder="Ikeja, Lagos", id="input-location")
                with Vertical():
                    yield Label("Image URL (optional)")
                    yield Input(placeholder="https://...", id="input-image")
            yield Button("Upload Product", id="btn-upload", variant="success")

    def on_mount(self) -> None:
        table = self.query_one(DataTable)
        table.cursor_type = "row"
        table.zebra_stripes = True
        table.add_columns("ID", "Product", "Price", "Location")
        self.render_inventory()

    @on(ScreenResume)
    @work(exclusive=True)
    async def handle_refresh(self) -> None:
        await self.app.state.refresh(PRODUCTS)
        self.render_inventory()

    def render_inventory(self) -> None:
        table = self.query_one(DataTable)
        table.clear()
        for p in self.app.state.my_products():
            table.add_row(short_id(p.id), p.name, format_money(p.price), p.location)

    @on(Button.Pressed, "#btn-upload")
    @work(exclusive=True, group="upload")
    async def handle_upload(self) -> None:
        name_input = self.query_one("#input-name", Input)
        price_input = self.query_one("#input-price", Input)
        location = self.query_one("#input-location", Input).value.strip()
        image = self.query_one("#input-image", Input).value.strip() or None

        name = name_input.value.strip()
        if not name:
            name_input.focus()
            name_input.add_class("-invalid")
            self.notify("Product name is required.", severity="error")
            return

        try:
            price = float(price_input.value)
        except ValueError:
            price = -1
        if not math.isfinite(price) or price < 0:
            price_input.focus()
            price_input.add_class("-invalid")
            self.notify("Price must be a non-negative number.", severity="error")
            return

        try:
            product = await self.app.state.upload_product(name, price, location, image)
        except ApiError as e:
            self.notify_error(e)
            return

        for input_id in ("#input-name", "#input-price", "#input-location", "#input-image"):
            self.query_one(input_id, Input).value = ""
        self.render_inventory()
        self.notify(f"{product.name} is now listed.")
