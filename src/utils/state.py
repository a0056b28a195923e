from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from api.client import MarketplaceClient
from api.errors import ApiError, EmptyCartError
from api.models import Job, Order, OrderStatus, Product, Role, Session
from store.session_store import SessionStore
from utils import cart as cart_ops
from utils import router
from utils.logger import get_logger
from utils.router import JOBS, ORDERS, PRODUCTS, ViewState

_logger = get_logger(__name__)


@dataclass
class GlobalState:
    """
    Centralized application state shared by screens.

    Fields:
      - client / store: injected, the state never builds its own
      - session: logged-in user, None while unauthenticated
      - view: where the role router currently has us
      - cart: in-memory only, lost on restart
      - products / orders / jobs: last fetched collections, empty until fetched
    """

    client: MarketplaceClient
    store: SessionStore

    session: Optional[Session] = None
    view: ViewState = ViewState.UNAUTHENTICATED
    cart: cart_ops.Cart = cart_ops.EMPTY_CART

    products: List[Product] = field(default_factory=list)
    orders: List[Order] = field(default_factory=list)
    jobs: List[Job] = field(default_factory=list)

    # bumped per refresh; a response is applied only if still the latest
    _generations: Dict[str, int] = field(
        default_factory=lambda: {c: 0 for c in router.COLLECTIONS},
        init=False,
        repr=False,
    )

    @property
    def uid(self) -> Optional[str]:
        return self.session.id if self.session else None

    @property
    def role(self) -> Optional[Role]:
        return self.session.role if self.session else None

    # ---------------------------
    # Session lifecycle
    # ---------------------------

    async def restore(self) -> bool:
        """Hydrate the session from local storage. True if one was found."""
        session = await self.store.load()
        if session is None:
            return False
        self._set_session(session)
        _logger.info(f"Restored session for {session.email} ({session.role.value})")
        return True

    async def login(self, email: str, password: str) -> Session:
        """
        Authenticate against the backend. Only a confirmed login is persisted;
        on failure the error propagates and we stay unauthenticated.
        """
        session = await self.client.login(email, password)
        await self.store.save(session)
        self._set_session(session)
        _logger.info(f"Logged in as {session.email} ({session.role.value})")
        return session

    async def register(
        self, name: str, email: str, password: str, role: Role
    ) -> Optional[Session]:
        """Create an account. Does not log in, the user signs in afterwards."""
        return await self.client.register(name, email, password, role)

    async def logout(self) -> None:
        await self.store.clear()
        self.client.token = None
        self.session = None
        self.view = ViewState.UNAUTHENTICATED
        self.cart = cart_ops.clear(self.cart)
        self.products, self.orders, self.jobs = [], [], []
        # anything still in flight belongs to the old session
        for name in self._generations:
            self._generations[name] += 1
        _logger.info("Logged out")

    def _set_session(self, session: Session) -> None:
        self.session = session
        self.client.token = session.token
        self.view = ViewState.LOADING

    async def enter_dashboard(self) -> ViewState:
        """
        Loading -> role view. Fetches the role's collections in parallel and
        settles on the view once they resolve (or fail, leaving them empty).
        """
        if self.session is None:
            self.view = ViewState.UNAUTHENTICATED
            return self.view
        self.view = ViewState.LOADING
        await self.refresh(*router.collections_for_role(self.session.role))
        self.view = router.view_for_role(self.session.role)
        return self.view

    # ---------------------------
    # Collections
    # ---------------------------

    async def refresh(self, *collections: str) -> None:
        """Re-fetch the named collections concurrently. Never raises ApiError."""
        await asyncio.gather(*(self._refresh_one(c) for c in collections))

    async def _refresh_after_write(self, owner: Optional[Session], *collections: str):
        # the write may have outlived the session that issued it
        if self.session is not owner:
            _logger.debug(f"Session changed during write, not refreshing {collections}")
            return
        await self.refresh(*collections)

    async def _refresh_one(self, collection: str) -> None:
        self._generations[collection] += 1
        generation = self._generations[collection]
        owner = self.session
        try:
            items = await self._fetch(collection)
        except ApiError as e:
            _logger.error(f"Fetching {collection} failed: {e!r}")
            items = []

        if generation != self._generations[collection] or self.session is not owner:
            _logger.debug(f"Dropping stale {collection} response (gen {generation})")
            return
        setattr(self, collection, items)

    async def _fetch(self, collection: str) -> list:
        if collection == PRODUCTS:
            return await self.client.list_products()
        if collection == ORDERS:
            return await self.client.list_orders(self.uid)
        if collection == JOBS:
            return await self.client.list_jobs()
        raise ValueError(f"unknown collection {collection!r}")

    def my_products(self) -> List[Product]:
        """Seller inventory: products listed by the logged-in user."""
        return [p for p in self.products if p.seller_id == self.uid]

    # ---------------------------
    # Cart & checkout
    # ---------------------------

    def add_to_cart(self, product: Product) -> None:
        self.cart = cart_ops.reduce_cart(self.cart, cart_ops.AddItem(product))

    def remove_from_cart(self, product_id: str) -> None:
        self.cart = cart_ops.reduce_cart(self.cart, cart_ops.RemoveItem(product_id))

    def clear_cart(self) -> None:
        self.cart = cart_ops.reduce_cart(self.cart, cart_ops.ClearCart())

    async def checkout(self) -> Order:
        """
        Submit the cart as one order. The cart is cleared only after the
        server acknowledges the order; on any error it is left untouched.
        """
        if self.session is None:
            raise RuntimeError("checkout requires a session")
        if not self.cart:
            raise EmptyCartError()

        owner = self.session
        order = await self.client.create_order(self.cart, owner.id)
        _logger.info(f"Order {order.id} placed, total {order.total_price}")
        if self.session is owner:
            self.cart = cart_ops.clear(self.cart)
        await self._refresh_after_write(owner, ORDERS)
        return order

    # ---------------------------
    # Seller & rider actions
    # ---------------------------

    async def upload_product(
        self, name: str, price: float, location: str, image: Optional[str] = None
    ) -> Product:
        if self.session is None:
            raise RuntimeError("upload requires a session")
        owner = self.session
        product = await self.client.create_product(
            name, price, location, owner.id, owner.name, image
        )
        await self._refresh_after_write(owner, PRODUCTS)
        return product

    async def update_job(self, order_id: str, status: OrderStatus) -> None:
        owner = self.session
        await self.client.update_job_status(order_id, status, self.uid)
        await self._refresh_after_write(owner, JOBS, ORDERS)
