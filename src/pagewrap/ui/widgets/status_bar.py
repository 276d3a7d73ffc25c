"""Status bar widget for displaying pagination progress."""

from textual.widgets import Static

from pagewrap.controller import ControllerState, UNKNOWN_TOTAL_COUNT
from pagewrap.ui.utils import format_progress_text


class StatusBar(Static):
    """Widget for displaying how much of the list has been loaded."""

    def __init__(self, initial_text: str = "Waiting for first page", **kwargs):
        super().__init__(initial_text, **kwargs)
        self._current_text = initial_text

    def update_text(self, text: str) -> None:
        """Update the current text and display."""
        self._current_text = text
        self.update(text)

    def get_text(self) -> str:
        """Get the current text."""
        return self._current_text

    def show_state(self, state: ControllerState) -> None:
        """Summarize a controller state."""
        if state.total_count == 0:
            self.update_text("No items")
        elif not state.items and state.total_count == UNKNOWN_TOTAL_COUNT and not state.has_error:
            self.update_text("Loading first page..." if state.is_loading else "Waiting for first page")
        else:
            self.update_text(
                format_progress_text(
                    len(state.items), state.total_count, state.current_page_number, has_error=state.has_error
                )
            )
