"""Framework-independent view state for projectdesk.

The stores here hold what the views render and perform the backend calls
behind each user action. They know nothing about Textual; the UI subscribes
to them and re-renders on change.
"""

from .app_store import AppPhase, AppStore
from .events import Notifier
from .project_detail import ProjectDetailState, TaskForm
from .project_list import ProjectListState

__all__ = [
    "AppPhase",
    "AppStore",
    "Notifier",
    "ProjectDetailState",
    "ProjectListState",
    "TaskForm",
]
