"""
Role -> view dispatch. The only place in the app that branches on Role;
screens ask this module which view, menu and collections apply.
"""

from enum import Enum
from typing import Dict, Tuple

from api.models import Role


class ViewState(str, Enum):
    UNAUTHENTICATED = "unauthenticated"
    LOADING = "loading"
    BUYER = "buyer"
    SELLER = "seller"
    RIDER = "rider"


PRODUCTS = "products"
ORDERS = "orders"
JOBS = "jobs"
COLLECTIONS = (PRODUCTS, ORDERS, JOBS)

_VIEW_FOR_ROLE: Dict[Role, ViewState] = {
    Role.BUYER: ViewState.BUYER,
    Role.USER: ViewState.BUYER,
    Role.SELLER: ViewState.SELLER,
    Role.ADMIN: ViewState.SELLER,
    Role.RIDER: ViewState.RIDER,
}
assert set(_VIEW_FOR_ROLE) == set(Role), "every role needs a view"

# mode name -> menu label, first entry is the landing screen
VIEW_MODES: Dict[ViewState, Dict[str, str]] = {
    ViewState.BUYER: {
        "marketplace": "Marketplace",
        "cart": "Cart",
        "orders": "My Orders",
    },
    ViewState.SELLER: {
        "marketplace": "Marketplace",
        "inventory": "My Products",
        "cart": "Cart",
        "orders": "My Orders",
    },
    ViewState.RIDER: {
        "jobs": "Available Jobs",
    },
}


def view_for_role(role: Role) -> ViewState:
    return _VIEW_FOR_ROLE[role]


def collections_for_role(role: Role) -> Tuple[str, ...]:
    """Collections fetched (in parallel) whenever an authenticated view is entered."""
    if view_for_role(role) is ViewState.RIDER:
        return PRODUCTS, ORDERS, JOBS
    return PRODUCTS, ORDERS


def modes_for_view(view: ViewState) -> Dict[str, str]:
    return VIEW_MODES.get(view, {})


def default_mode(view: ViewState) -> str:
    modes = modes_for_view(view)
    if not modes:
        raise ValueError(f"no screens for view {view.value}")
    return next(iter(modes))
