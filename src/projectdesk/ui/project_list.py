"""Project list pane: the user's projects and the create-project form."""

from textual import on
from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical
from textual.widgets import Button, Input, Label, ListItem, ListView, Static

from projectdesk.models import Project
from projectdesk.state import AppStore, ProjectListState
from projectdesk.utils.ui.formatters import truncate


class ProjectItem(ListItem):
    """One project: name plus a single-line description when present."""

    def __init__(self, project: Project, selected: bool = False):
        super().__init__(classes="selected" if selected else "")
        self.project = project

    def compose(self) -> ComposeResult:
        yield Label(self.project.name, classes="project-name", markup=False)
        if self.project.description:
            yield Label(
                truncate(self.project.description),
                classes="project-description",
                markup=False,
            )


class ProjectListPane(Vertical):
    """Left-hand pane. Re-renders whenever the app store or form state changes."""

    def __init__(self, store: AppStore, state: ProjectListState, **kwargs):
        super().__init__(**kwargs)
        self.store = store
        self.state = state
        self._unsubscribe = []
        self._rendered: tuple | None = None

    def compose(self) -> ComposeResult:
        with Horizontal(id="projects-header"):
            yield Static("[b]Projects[/b]", id="projects-title")
            yield Button("+ New", id="project-new")
        with Vertical(id="project-form"):
            yield Input(placeholder="Project name", id="project-name")
            yield Input(placeholder="Description (optional)", id="project-description")
            with Horizontal(classes="form-buttons"):
                yield Button("Create", variant="primary", id="project-create")
                yield Button("Cancel", id="project-cancel")
        yield ListView(id="project-list")

    def on_mount(self) -> None:
        self._unsubscribe = [
            self.store.subscribe(self._schedule_refresh),
            self.state.subscribe(self._schedule_refresh),
        ]
        self.call_later(self.refresh_view)

    def on_unmount(self) -> None:
        for unsubscribe in self._unsubscribe:
            unsubscribe()
        self._unsubscribe = []

    def _schedule_refresh(self) -> None:
        if self.is_mounted:
            self.call_later(self.refresh_view)

    async def refresh_view(self) -> None:
        form = self.query_one("#project-form")
        form.display = self.state.form_open
        self.query_one("#project-new", Button).display = not self.state.form_open
        self.query_one("#project-create", Button).disabled = self.state.submitting

        name_input = self.query_one("#project-name", Input)
        if name_input.value != self.state.name:
            name_input.value = self.state.name
        description_input = self.query_one("#project-description", Input)
        if description_input.value != self.state.description:
            description_input.value = self.state.description

        key = (
            tuple((p.id, p.name, p.description) for p in self.store.projects),
            self.store.selected_project_id,
        )
        if key == self._rendered:
            return
        self._rendered = key

        list_view = self.query_one("#project-list", ListView)
        await list_view.clear()
        await list_view.extend(
            ProjectItem(p, selected=p.id == self.store.selected_project_id)
            for p in self.store.projects
        )

    @on(Button.Pressed, "#project-new")
    def open_form(self) -> None:
        self.state.open_form()
        self.query_one("#project-name", Input).focus()

    @on(Button.Pressed, "#project-cancel")
    def cancel_form(self) -> None:
        self.state.cancel_form()

    @on(Input.Changed, "#project-name")
    def name_changed(self, event: Input.Changed) -> None:
        self.state.name = event.value

    @on(Input.Changed, "#project-description")
    def description_changed(self, event: Input.Changed) -> None:
        self.state.description = event.value

    @on(Button.Pressed, "#project-create")
    @on(Input.Submitted, "#project-name")
    @on(Input.Submitted, "#project-description")
    def submit(self) -> None:
        self.run_worker(self.state.submit(), group="project-create")

    @on(ListView.Selected, "#project-list")
    def project_selected(self, event: ListView.Selected) -> None:
        if isinstance(event.item, ProjectItem):
            self.run_worker(self.state.select(event.item.project.id))
