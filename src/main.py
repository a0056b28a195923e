from typing import Optional

from textual import on, work
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.widgets import LoadingIndicator

from api.client import MarketplaceClient
from store.session_store import SessionStore
from utils import router
from utils.config import Settings, load_settings
from utils.logger import get_logger
from utils.messages import QuitRequestedMessage, UserLogoutMessage
from utils.router import ViewState
from utils.state import GlobalState
from views.scr_cart import CartScreen
from views.scr_login import LoginScreen
from views.scr_marketplace import MarketplaceScreen
from views.scr_past_orders import PastOrdersScreen
from views.scr_rider_feed import RiderFeedScreen
from views.scr_seller_inventory import SellerInventoryScreen

_logger = get_logger(__name__)


class SwiftLogiApp(App):
    BINDINGS = [
        Binding("ctrl+t", "switch_light", "Toggle Theme", show=True),
    ]

    # every mode named in router.VIEW_MODES must be here
    MODES = {
        "marketplace": MarketplaceScreen,
        "cart": CartScreen,
        "orders": PastOrdersScreen,
        "inventory": SellerInventoryScreen,
        "jobs": RiderFeedScreen,
    }

    CSS = """
    Sidebar {
        dock: left;
        width: 30;
        padding: 0 1;
        border-right: solid $primary;
    }
    #div-login, #div-reg {
        width: 60;
        height: auto;
    }
    DialogModal {
        align: center middle;
    }
    #div-dialog {
        width: 50;
        height: auto;
        border: thick $primary;
        background: $surface;
        padding: 1 2;
    }
    CheckoutModal Vertical {
        width: 80%;
        height: 80%;
        border: thick $primary;
        background: $surface;
    }
    #hort-buttons, #hort-job-actions, #hort-market-footer, #hort-table-control {
        height: auto;
    }
    .hidden {
        display: none;
    }
    """

    state: GlobalState

    def __init__(self, settings: Optional[Settings] = None, state: Optional[GlobalState] = None):
        super().__init__()
        settings = settings or load_settings()
        self.state = state or GlobalState(
            client=MarketplaceClient(
                settings.api_url,
                timeout=settings.request_timeout,
                rider_payout=settings.rider_payout,
            ),
            store=SessionStore(settings.storage_path),
        )

    def compose(self) -> ComposeResult:
        yield LoadingIndicator()

    async def on_mount(self) -> None:
        self.main_flow()

    async def on_unmount(self) -> None:
        await self.state.client.aclose()

    def action_switch_light(self):
        if self.theme == "textual-dark":
            self.theme = "solarized-light"
        else:
            self.theme = "textual-dark"
        self.notify(f"Theme changed to {self.theme}")

    @on(UserLogoutMessage)
    @work
    async def handle_user_logout(self):
        await self.state.logout()
        self.notify("Logout successful.")
        self.main_flow()

    @on(QuitRequestedMessage)
    def handle_quit(self):
        # the session stays persisted, next start resumes it
        self.exit()

    @work(exclusive=True, group="main-flow")
    async def main_flow(self):
        if not await self.state.restore():
            await self.push_screen_wait(LoginScreen())

        view = await self.state.enter_dashboard()
        if view is ViewState.UNAUTHENTICATED:
            _logger.warning("Login screen closed without a session")
            return

        mode = router.default_mode(view)
        _logger.info(f"Entering {view.value} view ({mode})")
        await self.switch_mode(mode)


def run() -> None:
    SwiftLogiApp().run()


if __name__ == "__main__":
    run()
