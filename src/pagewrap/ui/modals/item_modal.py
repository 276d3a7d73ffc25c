"""Detail modal for a selected list item."""

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.screen import ModalScreen
from textual.widgets import Button, Label, Static

from pagewrap.ui.utils import format_file_size


# UI Element IDs
class ItemDetailModalIDs:
    """Constants for UI element IDs."""

    ITEM_MODAL = "item-modal"
    MODAL_TITLE = "modal-title"
    DETAILS_CONTAINER = "details-container"
    BUTTON_CONTAINER = "button-container"
    CLOSE_BUTTON = "close-btn"


class ItemDetailModal(ModalScreen):
    """Modal screen showing the details of one list item."""

    BINDINGS = [
        Binding("escape", "dismiss", "Close"),
    ]

    def __init__(self, item, index: int) -> None:
        """Initialize the detail modal.

        Args:
            item: The selected item
            index: Position of the item in the list
        """
        super().__init__()
        self.item = item
        self.item_index = index

    def compose(self) -> ComposeResult:
        """Create the layout for the detail modal."""
        with Vertical(id=ItemDetailModalIDs.ITEM_MODAL):
            yield Static(f"Item #{self.item_index + 1}", id=ItemDetailModalIDs.MODAL_TITLE)

            with Vertical(id=ItemDetailModalIDs.DETAILS_CONTAINER):
                for name, value in self._detail_rows():
                    yield Label(f"{name}: {value}", classes="detail-row", markup=False)

            with Horizontal(id=ItemDetailModalIDs.BUTTON_CONTAINER):
                yield Button("Close", variant="primary", id=ItemDetailModalIDs.CLOSE_BUTTON)

    def _detail_rows(self) -> list[tuple[str, str]]:
        """Turn the item into (label, value) rows."""
        if not isinstance(self.item, dict):
            return [("Value", str(self.item))]

        rows = []
        for name, value in self.item.items():
            if name == "size" and isinstance(value, int):
                value = format_file_size(value)
            rows.append((name.capitalize(), str(value)))
        return rows

    def action_dismiss(self) -> None:
        """Dismiss the modal."""
        self.dismiss(None)

    def on_button_pressed(self, event: Button.Pressed) -> None:
        """Handle button presses."""
        if event.button.id == ItemDetailModalIDs.CLOSE_BUTTON:
            self.action_dismiss()
