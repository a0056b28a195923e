# async wrappers over the SwiftLogi REST API
from __future__ import annotations

from typing import Any, List, Optional, Sequence

import httpx

from api.errors import (
    ConnectionFailedError,
    InvalidRequestError,
    MalformedResponseError,
    RequestRejectedError,
)
from api.models import CartLine, Job, Order, OrderStatus, Product, Role, Session
from utils.logger import get_logger

_logger = get_logger(__name__)

DEFAULT_API_URL = "https://swiftlogi-backend.onrender.com/api"

# job status -> endpoint suffix, anything else goes to /status
_JOB_ACTIONS = {
    OrderStatus.SHIPPED: "accept",
    OrderStatus.DELIVERED: "deliver",
}


class MarketplaceClient:
    """
    Thin typed layer over the backend. Every method either returns parsed
    models or raises an `ApiError` subclass; nothing is retried.

    The token, once set, is sent as a bearer header on every request.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_API_URL,
        token: Optional[str] = None,
        timeout: Optional[float] = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        rider_payout: float = 2500,
    ) -> None:
        self.rider_payout = rider_payout
        self._http = httpx.AsyncClient(
            base_url=base_url,
            timeout=timeout,
            transport=transport,
            headers={"Accept": "application/json"},
        )
        self.token = token

    @property
    def token(self) -> Optional[str]:
        return self._token

    @token.setter
    def token(self, value: Optional[str]) -> None:
        self._token = value or None
        if self._token:
            self._http.headers["Authorization"] = f"Bearer {self._token}"
        else:
            self._http.headers.pop("Authorization", None)

    async def aclose(self) -> None:
        await self._http.aclose()

    async def _request(self, method: str, path: str, payload: Any = None) -> Any:
        _logger.debug(f"{method} {path}")
        try:
            request = self._http.build_request(method, path, json=payload)
        except (TypeError, ValueError) as e:
            # json encoding refuses NaN / inf and unknown types
            _logger.warning(f"{method} {path} not sent: {e}")
            raise InvalidRequestError(str(e)) from e

        try:
            resp = await self._http.send(request)
        except httpx.DecodingError as e:
            _logger.warning(f"{method} {path} undecodable body: {e!r}")
            raise MalformedResponseError(f"{path}: {e}") from e
        except httpx.RequestError as e:
            _logger.warning(f"{method} {path} failed: {e!r}")
            raise ConnectionFailedError() from e

        body = None
        if resp.content:
            try:
                body = resp.json()
            except ValueError:
                if resp.is_success:
                    raise MalformedResponseError(f"{path}: body is not JSON") from None

        if not resp.is_success:
            message = body.get("error") if isinstance(body, dict) else None
            _logger.info(f"{method} {path} -> {resp.status_code} {message or ''}")
            raise RequestRejectedError(resp.status_code, message)
        return body

    async def _get_list(self, path: str) -> List[Any]:
        body = await self._request("GET", path)
        if not isinstance(body, list):
            raise MalformedResponseError(f"{path}: expected a list")
        return body

    # ---------------------------
    # Auth & Registration
    # ---------------------------

    async def register(
        self, name: str, email: str, password: str, role: Role
    ) -> Optional[Session]:
        """
        Create an account. Returns the new user's session (without a token)
        when the server echoes the user back, otherwise None.
        """
        body = await self._request(
            "POST",
            "/register",
            {"name": name, "email": email, "password": password, "role": role.value},
        )
        if isinstance(body, dict) and body.get("user"):
            return Session.from_json(body["user"])
        return None

    async def login(self, email: str, password: str) -> Session:
        body = await self._request(
            "POST", "/login", {"email": email, "password": password}
        )
        if not isinstance(body, dict) or "user" not in body:
            raise MalformedResponseError("/login: missing user")
        return Session.from_json(body["user"], token=body.get("token"))

    # ---------------------------
    # Products
    # ---------------------------

    async def list_products(self) -> List[Product]:
        return [Product.from_json(p) for p in await self._get_list("/products")]

    async def create_product(
        self,
        name: str,
        price: float,
        location: str,
        seller_id: str,
        seller_name: str,
        image: Optional[str] = None,
    ) -> Product:
        payload = {
            "name": name,
            "price": price,
            "location": location,
            "seller": seller_id,
            "sellerName": seller_name,
        }
        if image:
            payload["image"] = image
        body = await self._request("POST", "/products", payload)
        if isinstance(body, dict) and isinstance(body.get("product"), dict):
            body = body["product"]
        return Product.from_json(body)

    # ---------------------------
    # Orders & Jobs
    # ---------------------------

    async def list_orders(self, user_id: Optional[str] = None) -> List[Order]:
        path = f"/user/orders/{user_id}" if user_id else "/user/orders"
        return [Order.from_json(o) for o in await self._get_list(path)]

    async def create_order(self, cart: Sequence[CartLine], buyer_id: str) -> Order:
        items = [
            {
                "productId": line.product_id,
                "name": line.name,
                "price": line.price,
                "quantity": line.quantity,
            }
            for line in cart
        ]
        total = sum(line.price * line.quantity for line in cart)
        body = await self._request(
            "POST",
            "/orders",
            {"buyerId": buyer_id, "items": items, "totalPrice": total},
        )
        if isinstance(body, dict) and isinstance(body.get("order"), dict):
            body = body["order"]
        return Order.from_json(body)

    async def list_jobs(self) -> List[Job]:
        return [
            Job.from_json(j, default_payout=self.rider_payout)
            for j in await self._get_list("/jobs")
        ]

    async def update_job_status(
        self, order_id: str, status: OrderStatus, rider_id: Optional[str] = None
    ) -> None:
        action = _JOB_ACTIONS.get(status, "status")
        payload: dict[str, Any] = {"status": status.value}
        if rider_id:
            payload["riderId"] = rider_id
        await self._request("POST", f"/jobs/{order_id}/{action}", payload)
