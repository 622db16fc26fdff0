"""Detail pane for the selected project: header, task form and task rows."""

from textual import on
from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical, VerticalScroll
from textual.widgets import Button, Input, Select, Static

from projectdesk.models import Task, TaskPriority
from projectdesk.state import ProjectDetailState
from projectdesk.ui.dialogs import ConfirmDialog
from projectdesk.utils.ui.formatters import format_completed, format_date, priority_class

PLACEHOLDER = "Select a project or create a new one to get started"

PRIORITY_OPTIONS = [(p.value.capitalize(), p.value) for p in TaskPriority]

UNCHECKED = "☐"
CHECKED = "☑"


class ToggleButton(Button):
    def __init__(self, task: Task):
        super().__init__(CHECKED if task.is_completed else UNCHECKED, classes="task-toggle")
        self.model = task


class DeleteButton(Button):
    def __init__(self, task: Task):
        super().__init__("Delete", variant="error", classes="task-delete")
        self.model = task


class TaskRow(Horizontal):
    """A single task with its completion toggle, badge and delete control."""

    def __init__(self, task: Task):
        super().__init__(classes="task-row")
        self.model = task
        if task.is_completed:
            self.add_class("completed")

    def compose(self) -> ComposeResult:
        task = self.model
        yield ToggleButton(task)
        with Vertical(classes="task-body"):
            yield Static(task.title, classes="task-title", markup=False)
            if task.description:
                yield Static(task.description, classes="task-description", markup=False)
            meta = []
            if task.due_date:
                meta.append(f"Due {format_date(task.due_date)}")
            if task.completed_at:
                meta.append(format_completed(task.completed_at))
            if meta:
                yield Static("  ".join(meta), classes="task-meta")
        yield Static(
            task.priority.value,
            classes=f"priority-badge {priority_class(task.priority)}",
        )
        yield DeleteButton(task)


class Placeholder(Static):
    def __init__(self):
        super().__init__(PLACEHOLDER, id="detail-placeholder")


class ProjectDetailPane(Vertical):
    """Right-hand pane bound to one ProjectDetailState."""

    def __init__(self, state: ProjectDetailState, **kwargs):
        super().__init__(**kwargs)
        self.state = state
        self._unsubscribe = None
        self._rendered_tasks: tuple | None = None

    def compose(self) -> ComposeResult:
        with Vertical(id="detail-header"):
            yield Static("", id="detail-name", markup=False)
            yield Static("", id="detail-description", markup=False)
        with Horizontal(id="tasks-header"):
            yield Static("[b]Tasks[/b]", id="tasks-title")
            yield Button("+ Add Task", id="task-new")
        with Vertical(id="task-form"):
            yield Input(placeholder="Task title", id="task-title")
            yield Input(placeholder="Description (optional)", id="task-description")
            with Horizontal(classes="form-row"):
                yield Select(
                    PRIORITY_OPTIONS,
                    value=TaskPriority.MEDIUM.value,
                    allow_blank=False,
                    id="task-priority",
                )
                yield Input(placeholder="Due date (YYYY-MM-DD)", id="task-due-date")
            with Horizontal(classes="form-buttons"):
                yield Button("Create Task", variant="primary", id="task-create")
                yield Button("Cancel", id="task-cancel")
        yield VerticalScroll(id="task-list")

    def on_mount(self) -> None:
        self._unsubscribe = self.state.subscribe(self._schedule_refresh)
        self.display = False
        self.run_worker(self.state.load(), group="detail-load")

    def on_unmount(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    def _schedule_refresh(self) -> None:
        if self.is_mounted:
            self.call_later(self.refresh_view)

    async def refresh_view(self) -> None:
        project = self.state.project
        # Nothing is rendered until the project row is known
        self.display = project is not None
        if project is None:
            return

        self.query_one("#detail-name", Static).update(project.name)
        description = self.query_one("#detail-description", Static)
        description.update(project.description or "")
        description.display = bool(project.description)

        form = self.state.form
        self.query_one("#task-form").display = self.state.form_open
        self.query_one("#task-new", Button).display = not self.state.form_open
        self.query_one("#task-create", Button).disabled = self.state.submitting
        for widget_id, value in (
            ("#task-title", form.title),
            ("#task-description", form.description),
            ("#task-due-date", form.due_date),
        ):
            field = self.query_one(widget_id, Input)
            if field.value != value:
                field.value = value
        priority = self.query_one("#task-priority", Select)
        if priority.value != form.priority:
            priority.value = form.priority

        key = tuple(
            (t.id, t.title, t.description, t.status, t.priority, t.due_date, t.completed_at)
            for t in self.state.tasks
        )
        if key == self._rendered_tasks:
            return
        self._rendered_tasks = key

        task_list = self.query_one("#task-list", VerticalScroll)
        await task_list.remove_children()
        if self.state.tasks:
            await task_list.mount_all(TaskRow(task) for task in self.state.tasks)
        else:
            await task_list.mount(Static("No tasks yet", classes="empty"))

    @on(Button.Pressed, "#task-new")
    def open_form(self) -> None:
        self.state.open_form()
        self.query_one("#task-title", Input).focus()

    @on(Button.Pressed, "#task-cancel")
    def cancel_form(self) -> None:
        self.state.cancel_form()

    @on(Input.Changed, "#task-title")
    def title_changed(self, event: Input.Changed) -> None:
        self.state.form.title = event.value

    @on(Input.Changed, "#task-description")
    def description_changed(self, event: Input.Changed) -> None:
        self.state.form.description = event.value

    @on(Input.Changed, "#task-due-date")
    def due_date_changed(self, event: Input.Changed) -> None:
        self.state.form.due_date = event.value

    @on(Select.Changed, "#task-priority")
    def priority_changed(self, event: Select.Changed) -> None:
        self.state.form.priority = str(event.value)

    @on(Button.Pressed, "#task-create")
    @on(Input.Submitted, "#task-title")
    @on(Input.Submitted, "#task-description")
    @on(Input.Submitted, "#task-due-date")
    def submit(self) -> None:
        self.run_worker(self.state.submit_task(), group="task-create")

    @on(Button.Pressed, ".task-toggle")
    def toggle(self, event: Button.Pressed) -> None:
        if isinstance(event.button, ToggleButton):
            self.run_worker(self.state.toggle_task(event.button.model))

    @on(Button.Pressed, ".task-delete")
    def delete(self, event: Button.Pressed) -> None:
        if isinstance(event.button, DeleteButton):
            self.run_worker(self._delete(event.button.model.id))

    async def _delete(self, task_id: str) -> None:
        await self.state.delete_task(task_id, confirm=self._confirm)

    async def _confirm(self, message: str) -> bool:
        return bool(await self.app.push_screen_wait(ConfirmDialog(message)))
