# provide dataclass models, parsed from the backend's JSON

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional, Tuple

from api.errors import MalformedResponseError


class Role(str, Enum):
    BUYER = "buyer"
    SELLER = "seller"
    RIDER = "rider"
    ADMIN = "admin"
    USER = "user"  # older drafts: can both buy and sell

    @classmethod
    def parse(cls, value: Any) -> Role:
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise MalformedResponseError(f"unknown role {value!r}") from None


class OrderStatus(str, Enum):
    PLACED = "placed"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    REJECTED = "rejected"

    @classmethod
    def parse(cls, value: Any) -> OrderStatus:
        if value is None or value == "":
            return cls.PLACED
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise MalformedResponseError(f"unknown order status {value!r}") from None


def _as_dict(data: Any, what: str) -> Dict[str, Any]:
    if not isinstance(data, dict):
        raise MalformedResponseError(f"{what} is not an object")
    return data


def _get_id(data: Dict[str, Any], *keys: str) -> str:
    """First present id among keys (mongo sends `_id`, others `id`)."""
    for k in keys:
        val = data.get(k)
        if isinstance(val, dict):
            # populated reference, e.g. {"seller": {"_id": ..., "name": ...}}
            val = val.get("_id", val.get("id"))
        if val is not None and val != "":
            return str(val)
    raise MalformedResponseError(f"missing id ({'/'.join(keys)})")


def _get_number(data: Dict[str, Any], key: str, default: Optional[float] = None) -> float:
    val = data.get(key, default)
    if isinstance(val, bool) or not isinstance(val, (int, float)):
        try:
            val = float(val)
        except (TypeError, ValueError):
            raise MalformedResponseError(f"{key} is not a number") from None
    return val


@dataclass(frozen=True)
class Session:
    id: str
    name: str
    email: str
    role: Role
    token: Optional[str] = None
    wallet_balance: Optional[float] = None

    @classmethod
    def from_json(cls, user: Any, token: Optional[str] = None) -> Session:
        user = _as_dict(user, "user")
        wallet = user.get("walletBalance")
        return cls(
            id=_get_id(user, "id", "_id"),
            name=str(user.get("name") or ""),
            email=str(user.get("email") or ""),
            role=Role.parse(user.get("role")),
            token=token or None,
            wallet_balance=None if wallet is None else _get_number(user, "walletBalance"),
        )

    def to_json(self) -> Dict[str, Any]:
        """The `user` object as the backend sends it, without the token."""
        data: Dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "role": self.role.value,
        }
        if self.wallet_balance is not None:
            data["walletBalance"] = self.wallet_balance
        return data


@dataclass(frozen=True)
class Product:
    id: str
    name: str
    price: float
    seller_id: str
    seller_name: str
    location: str
    image_data: Optional[str] = None

    @classmethod
    def from_json(cls, data: Any) -> Product:
        data = _as_dict(data, "product")
        price = _get_number(data, "price")
        if price < 0:
            raise MalformedResponseError("negative price")
        seller = data.get("seller")
        seller_name = data.get("sellerName")
        if not seller_name and isinstance(seller, dict):
            seller_name = seller.get("name")
        try:
            seller_id = _get_id(data, "sellerId", "seller")
        except MalformedResponseError:
            seller_id = ""
        return cls(
            id=_get_id(data, "id", "_id"),
            name=str(data.get("name") or ""),
            price=price,
            seller_id=seller_id,
            seller_name=str(seller_name or ""),
            location=str(data.get("location") or ""),
            image_data=data.get("image") or data.get("imageData") or None,
        )


@dataclass(frozen=True)
class CartLine:
    product_id: str
    name: str
    price: float
    quantity: int = 1


@dataclass(frozen=True)
class OrderItem:
    product_id: str
    name: str
    price: float
    quantity: int

    @classmethod
    def from_json(cls, data: Any) -> OrderItem:
        data = _as_dict(data, "order item")
        qty = data.get("quantity", data.get("qty", 1))
        try:
            qty = int(qty)
        except (TypeError, ValueError):
            raise MalformedResponseError("item quantity is not an integer") from None
        return cls(
            product_id=_get_id(data, "productId", "product", "id", "_id"),
            name=str(data.get("name") or ""),
            price=_get_number(data, "price", 0),
            quantity=qty,
        )


@dataclass(frozen=True)
class Order:
    id: str
    buyer_id: str
    items: Tuple[OrderItem, ...]
    total_price: float
    status: OrderStatus = OrderStatus.PLACED

    @classmethod
    def from_json(cls, data: Any) -> Order:
        data = _as_dict(data, "order")
        raw_items = data.get("items") or []
        if not isinstance(raw_items, list):
            raise MalformedResponseError("order items is not a list")
        items = tuple(OrderItem.from_json(i) for i in raw_items)

        # older drafts post/return `totalAmount`
        if "totalPrice" in data:
            total = _get_number(data, "totalPrice")
        elif "totalAmount" in data:
            total = _get_number(data, "totalAmount")
        else:
            total = sum(i.price * i.quantity for i in items)

        try:
            buyer_id = _get_id(data, "buyerId", "buyer")
        except MalformedResponseError:
            buyer_id = ""
        return cls(
            id=_get_id(data, "id", "_id"),
            buyer_id=buyer_id,
            items=items,
            total_price=total,
            status=OrderStatus.parse(data.get("status")),
        )


@dataclass(frozen=True)
class Job:
    """
    Rider-facing projection of an order. Not stored anywhere on its own.
    """

    order_id: str
    product_name: str
    item_count: int
    payout: float
    pickup: str
    dropoff: str
    status: OrderStatus = OrderStatus.PLACED

    @classmethod
    def from_json(cls, data: Any, default_payout: float = 2500) -> Job:
        data = _as_dict(data, "job")
        order_id = _get_id(data, "orderId", "id", "_id")

        items = data.get("items") or []
        if not isinstance(items, list):
            raise MalformedResponseError("job items is not a list")
        product_name = data.get("productName")
        if not product_name and items and isinstance(items[0], dict):
            product_name = items[0].get("name")
            if len(items) > 1:
                product_name = f"{product_name} +{len(items) - 1} more"

        payout = data.get("payout")
        return cls(
            order_id=order_id,
            product_name=str(product_name or ""),
            item_count=len(items),
            payout=default_payout if payout is None else _get_number(data, "payout"),
            pickup=_describe(data.get("pickup", data.get("pickupLocation"))),
            dropoff=_describe(data.get("dropoff", data.get("dropoffLocation"))),
            status=OrderStatus.parse(data.get("status")),
        )


def _describe(place: Any) -> str:
    """pickup / dropoff may come as a plain string or as {address: ...}"""
    if place is None:
        return ""
    if isinstance(place, dict):
        return str(place.get("address") or place.get("name") or "")
    return str(place)
