from textual import on, work
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Container
from textual.events import ScreenResume
from textual.screen import Screen
from textual.widgets import Button, Footer, Header, Label, ListItem, ListView, Markdown

from api.errors import ApiError
from utils import router
from utils.messages import UserLogoutMessage
from utils.pure import format_money, generate_markdown_table
from views.modal_dialog import ConfirmDialogModal, QuitDialogModal


class Sidebar(Container):
    def compose(self) -> ComposeResult:
        yield Label("User Info", id="label-info-1")
        yield Markdown("", id="md-userinfo")
        yield Button("Log out", id="btn-logout", variant="error")
        yield Label("Menu", id="label-info-2")
        yield ListView(id="list-menu")

    def on_mount(self):
        self.render_session()

    @work(exclusive=True)
    async def render_session(self):
        """
        user table and menu, rebuilt on every resume since the same mode
        screen survives a logout / login as someone else
        """
        session = self.app.state.session
        if session is None:
            return

        rows = [
            ["Name", session.name],
            ["Email", session.email],
            ["Role", session.role.value.title()],
        ]
        if session.wallet_balance is not None:
            rows.append(["Wallet", format_money(session.wallet_balance)])
        await self.query_one(Markdown).update(
            generate_markdown_table(None, rows, ["l", "l"])
        )

        list_menu: ListView = self.query_one("#list-menu")
        await list_menu.clear()
        await list_menu.extend(
            [
                ListItem(Label(label), name=mode)
                for mode, label in router.modes_for_view(self.app.state.view).items()
            ]
        )
        self.highlight_item(self.app.current_mode)

    async def on_list_view_selected(self, event: ListView.Selected):
        selected_mode = event.item.name
        if self.app.current_mode != selected_mode:
            await self.app.switch_mode(selected_mode)
        self.highlight_item(self.app.current_mode)

    @on(Button.Pressed, "#btn-logout")
    @work()
    async def handle_logout(self):
        if await self.app.push_screen_wait(
            ConfirmDialogModal("Are you sure you want to log out?")
        ):
            self.post_message(UserLogoutMessage())

    def highlight_item(self, mode_str: str):
        for item in self.query_one("#list-menu").children:
            item.highlighted = item.name == mode_str


class BaseScreen(Screen):
    """
    Inherited by all screens, contains common elements like
    headers, footers, sidebar, and keybindings.
    """

    BINDINGS = [
        Binding("ctrl+z", "quit", "Quit App", show=True),
    ]

    def __init__(self):
        super().__init__()
        self.configure()

    def configure(
        self,
        header_sub_title: str = "SwiftLogi",
        show_sidebar: bool = True,
    ) -> None:
        """
        configure behavior of the base screen
        """
        self.app.title = "SwiftLogi"
        self.sub_title = header_sub_title
        for view_modes in router.VIEW_MODES.values():
            for mode, label in view_modes.items():
                if isinstance(self, self.app.MODES.get(mode, ())):
                    self.sub_title = label

        self._show_sidebar = show_sidebar

    def compose(self) -> ComposeResult:
        if self._show_sidebar:
            yield Sidebar()
        yield Header()
        yield Footer(show_command_palette=False)

    @on(ScreenResume)
    async def handle_screen_resume(self) -> None:
        if self._show_sidebar:
            self.query_one(Sidebar).render_session()

    def notify_error(self, error: ApiError) -> None:
        self.notify(error.user_message, severity="error")

    @work()
    async def action_quit(self):
        await self.app.push_screen_wait(QuitDialogModal())
