from textual.app import ComposeResult
from textual.containers import Horizontal
from textual.reactive import reactive
from textual.widgets import Static


class TitleBar(Static):
    """Title bar showing the app title, the page source and a status indicator"""

    connection_error: bool = reactive(False)

    def __init__(self, source_label: str = "", **kwargs):
        super().__init__(**kwargs)
        self.source_label = source_label

    def compose(self) -> ComposeResult:
        with Horizontal(id="title-bar-container"):
            yield Static("Paginated List", id="title")
            with Horizontal(id="status-container"):
                yield Static("●", id="connected-indicator")
                yield Static(f"source: {self.source_label}", id="source-info")

    def watch_connection_error(self, connection_error: bool) -> None:
        """Turn the indicator red while the last fetch has failed."""
        try:
            indicator = self.query_one("#connected-indicator", Static)
            indicator.set_class(connection_error, "error")
        except Exception:
            # Indicator not mounted yet
            pass
