import os
import tempfile
import unittest

from textual.app import App
from textual.widgets import Button

from api.client import MarketplaceClient
from fake_backend import API_URL, FakeBackend
from store.session_store import SessionStore
from utils.state import GlobalState
from views.modal_checkout import CheckoutModal


class _HostApp(App):
    def __init__(self, state: GlobalState):
        super().__init__()
        self.state = state


class CheckoutModalTestCase(unittest.IsolatedAsyncioTestCase):
    def setUp(self):
        self.temp_dir = tempfile.TemporaryDirectory()
        self.db_path = os.path.join(self.temp_dir.name, "storage.sqlite")

    def tearDown(self):
        self.temp_dir.cleanup()

    async def test_escape_ignored_while_order_is_being_placed(self):
        client = MarketplaceClient(API_URL, transport=FakeBackend().transport())
        self.addAsyncCleanup(client.aclose)
        app = _HostApp(GlobalState(client=client, store=SessionStore(self.db_path)))

        async with app.run_test() as pilot:
            modal = CheckoutModal()
            await app.push_screen(modal)
            await pilot.pause()

            # submit disabled == checkout in flight
            modal.query_one("#btn-submit", Button).disabled = True
            await pilot.press("escape")
            await pilot.pause()
            self.assertIs(app.screen, modal)

            modal.query_one("#btn-submit", Button).disabled = False
            await pilot.press("escape")
            await pilot.pause()
            self.assertIsNot(app.screen, modal)


if __name__ == "__main__":
    unittest.main()
