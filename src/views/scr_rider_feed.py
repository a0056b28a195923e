from typing import List, Optional

from textual import on, work
from textual.app import ComposeResult
from textual.containers import Horizontal
from textual.events import ScreenResume
from textual.widgets import Button, DataTable, Label

from api.errors import ApiError
from api.models import Job, OrderStatus
from utils.pure import format_money, short_id
from utils.router import JOBS
from views.base_screen import BaseScreen
from views.modal_dialog import ConfirmDialogModal

# button id -> (status to send, confirmation caption)
JOB_ACTIONS = {
    "btn-accept": (OrderStatus.SHIPPED, "Accept this delivery?"),
    "btn-deliver": (OrderStatus.DELIVERED, "Mark this delivery as completed?"),
    "btn-reject": (OrderStatus.REJECTED, "Reject this job?"),
}


class RiderFeedScreen(BaseScreen):
    """
    Delivery jobs available to riders.
    """

    def __init__(self) -> None:
        super().__init__()
        self._jobs: List[Job] = []

    def compose(self) -> ComposeResult:
        yield from super().compose()
        yield Label("Available Jobs", id="label-jobs")
        yield DataTable(id="table-jobs")
        with Horizontal(id="hort-job-actions"):
            yield Button("Refresh", id="btn-refresh")
            yield Button("Reject", id="btn-reject", variant="error")
            yield Button("Delivered", id="btn-deliver", variant="primary")
            yield Button("Accept", id="btn-accept", variant="success")

    def on_mount(self) -> None:
        table = self.query_one(DataTable)
        table.cursor_type = "row"
        table.zebra_stripes = True
        table.add_columns("ID", "Delivery", "Items", "Payout", "Pickup", "Dropoff", "Status")
        self.render_jobs()

    @on(ScreenResume)
    @on(Button.Pressed, "#btn-refresh")
    @work(exclusive=True)
    async def handle_refresh(self) -> None:
        await self.app.state.refresh(JOBS)
        self.render_jobs()

    def render_jobs(self) -> None:
        self._jobs = list(self.app.state.jobs)
        table = self.query_one(DataTable)
        table.clear()
        for j in self._jobs:
            table.add_row(
                short_id(j.order_id),
                j.product_name or "-",
                j.item_count,
                format_money(j.payout),
                j.pickup or "-",
                j.dropoff or "-",
                j.status.value.upper(),
            )
        self.query_one("#label-jobs", Label).update(
            f"Available Jobs ({len(self._jobs)})"
        )

    def _selected_job(self) -> Optional[Job]:
        table = self.query_one(DataTable)
        if 0 <= table.cursor_row < len(self._jobs):
            return self._jobs[table.cursor_row]
        return None

    @on(Button.Pressed, "#btn-accept")
    @on(Button.Pressed, "#btn-deliver")
    @on(Button.Pressed, "#btn-reject")
    @work(exclusive=True, group="job-action")
    async def handle_job_action(self, event: Button.Pressed) -> None:
        job = self._selected_job()
        if job is None:
            self.notify("No job selected.", severity="warning")
            return

        status, caption = JOB_ACTIONS[event.button.id]
        if not await self.app.push_screen_wait(ConfirmDialogModal(caption)):
            return

        try:
            await self.app.state.update_job(job.order_id, status)
        except ApiError as e:
            self.notify_error(e)
            return

        self.render_jobs()
        self.notify(f"Job #{short_id(job.order_id)} is now {status.value}.")
