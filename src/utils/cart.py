"""
Cart reducer. A cart is an immutable tuple of CartLine, one line per
product id, every quantity >= 1. Nothing here touches the network or disk;
a restart loses the cart.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Tuple, Union

from api.models import CartLine, Product

Cart = Tuple[CartLine, ...]

EMPTY_CART: Cart = ()


@dataclass(frozen=True)
class AddItem:
    product: Product


@dataclass(frozen=True)
class RemoveItem:
    product_id: str


@dataclass(frozen=True)
class ClearCart:
    pass


CartAction = Union[AddItem, RemoveItem, ClearCart]


def add_item(cart: Cart, product: Product) -> Cart:
    """Merge by product id: bump quantity if present, else append a new line."""
    for i, line in enumerate(cart):
        if line.product_id == product.id:
            bumped = replace(line, quantity=line.quantity + 1)
            return cart[:i] + (bumped,) + cart[i + 1 :]
    return cart + (CartLine(product.id, product.name, product.price, 1),)


def remove_item(cart: Cart, product_id: str) -> Cart:
    return tuple(line for line in cart if line.product_id != product_id)


def clear(_cart: Cart = EMPTY_CART) -> Cart:
    return EMPTY_CART


def reduce_cart(cart: Cart, action: CartAction) -> Cart:
    if isinstance(action, AddItem):
        return add_item(cart, action.product)
    if isinstance(action, RemoveItem):
        return remove_item(cart, action.product_id)
    if isinstance(action, ClearCart):
        return clear(cart)
    raise TypeError(f"unknown cart action {action!r}")


def line_total(line: CartLine) -> float:
    return line.price * line.quantity


def cart_total(cart: Cart) -> float:
    return sum(line_total(line) for line in cart)


def item_count(cart: Cart) -> int:
    return sum(line.quantity for line in cart)
