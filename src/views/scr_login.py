from textual import on, work
from textual.app import ComposeResult
from textual.containers import Container, Horizontal, Vertical
from textual.widgets import Button, Input, Label, Select, TabbedContent, TabPane

from api.errors import ApiError
from api.models import Role
from views.base_screen import BaseScreen
from views.modal_dialog import DialogModal, QuitDialogModal

# roles a new account can pick; admin accounts are made on the backend
SIGNUP_ROLES = [
    ("Buyer", Role.BUYER),
    ("Seller", Role.SELLER),
    ("Rider (Deliveries)", Role.RIDER),
]


class LoginScreen(BaseScreen):
    """
    Dismissed once the app state holds a confirmed session.
    """

    def __init__(self):
        super().__init__()
        self.configure(header_sub_title="Login", show_sidebar=False)

    def compose(self) -> ComposeResult:
        yield from super().compose()
        with TabbedContent(id="super-tab-loginscr"):
            with TabPane("Login", id="tab-login"):
                with Vertical(id="div-login"):
                    yield Label("Email")
                    yield Input(placeholder="user@example.com", id="input-login-email")
                    yield Label("Password")
                    yield Input(
                        placeholder="*********", password=True, id="input-login-pwd"
                    )
                    with Horizontal(id="div-login-btns"):
                        yield Button("Quit", id="btn-quit")
                        yield Button("Sign In", id="btn-login", variant="primary")

            with TabPane("Sign up", id="tab-signup"):
                with Vertical(id="div-reg"):
                    yield Label("Full Name")
                    yield Input(placeholder="Jane Doe", id="input-reg-name")
                    yield Label("Email")
                    yield Input(placeholder="user@example.com", id="input-reg-email")
                    yield Label("Password")
                    yield Input(
                        placeholder="*********", password=True, id="input-reg-pwd"
                    )
                    yield Label("Role")
                    yield Select(
                        SIGNUP_ROLES,
                        value=Role.BUYER,
                        allow_blank=False,
                        id="select-reg-role",
                    )
                    with Container(id="div-reg-btns"):
                        yield Button("Create Account", id="btn-reg", variant="primary")

    def on_mount(self):
        self.query_one("#input-login-email").focus()

    @on(Input.Submitted, "#input-login-pwd")
    def handle_login_enter(self) -> None:
        self.handle_login_submit()

    @on(Input.Submitted, "#input-reg-pwd")
    def handle_reg_enter(self) -> None:
        self.handle_registration_submit()

    @on(Button.Pressed, "#btn-login")
    @work(exclusive=True)
    async def handle_login_submit(self) -> None:
        email = self.query_one("#input-login-email", Input).value.strip()
        pwd = self.query_one("#input-login-pwd", Input).value

        if not email or not pwd:
            self.notify("Email or password cannot be empty!", severity="error")
            return

        self.notify("Connecting...", timeout=2)
        try:
            session = await self.app.state.login(email, pwd)
        except ApiError as e:
            self.notify_error(e)
            input_login_pwd = self.query_one("#input-login-pwd", Input)
            input_login_pwd.value = ""
            input_login_pwd.focus()
            input_login_pwd.add_class("-invalid")
            return

        self.notify(f"Welcome, {session.name or session.email}!")
        self.dismiss()

    @on(Button.Pressed, "#btn-reg")
    @work(exclusive=True)
    async def handle_registration_submit(self) -> None:
        name = self.query_one("#input-reg-name", Input).value.strip()
        email = self.query_one("#input-reg-email", Input).value.strip()
        pwd = self.query_one("#input-reg-pwd", Input).value
        role = self.query_one("#select-reg-role", Select).value

        if not name or not email or not pwd:
            self.notify("Make sure all inputs are filled.", severity="error")
            return

        try:
            await self.app.state.register(name, email, pwd, role)
        except ApiError as e:
            self.notify_error(e)
            return

        await self.app.push_screen_wait(
            DialogModal("Account ready! Please sign in.", tone="positive")
        )

        # back to login with the new credentials filled in
        self.get_child_by_type(TabbedContent).active = "tab-login"
        self.query_one("#input-login-email", Input).value = email
        input_login_pwd = self.query_one("#input-login-pwd", Input)
        input_login_pwd.value = pwd
        input_login_pwd.focus()

    @on(Button.Pressed, "#btn-quit")
    def handle_quit_(self) -> None:
        self.app.push_screen(QuitDialogModal())
