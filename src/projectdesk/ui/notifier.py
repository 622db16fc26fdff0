"""Toast notifications backed by Textual's `App.notify`."""

from textual.app import App


class TextualNotifier:
    """Adapts the stores' notifier interface to Textual toasts."""

    def __init__(self, app: App, timeout: float = 4):
        self.app = app
        self.timeout = timeout

    def success(self, message: str) -> None:
        self.app.notify(message, severity="information", timeout=self.timeout, markup=False)

    def warning(self, message: str) -> None:
        self.app.notify(message, severity="warning", timeout=self.timeout, markup=False)

    def error(self, message: str) -> None:
        self.app.notify(
            message, title="Error", severity="error", timeout=self.timeout, markup=False
        )
