from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Container
from textual.screen import Screen
from textual.widgets import Footer, ListView

from pagewrap.controller import PaginationController
from pagewrap.ui.modals.item_modal import ItemDetailModal
from pagewrap.ui.widgets.paginated_list import PaginatedList
from pagewrap.ui.widgets.status_bar import StatusBar
from pagewrap.ui.widgets.title_bar import TitleBar


class MainScreen(Screen):
    """Main screen displaying the paginated list of a page source."""

    BINDINGS = [
        Binding("q", "quit", "Quit"),
        Binding("h", "help", "Help", show=False),
    ]

    def __init__(self, source, **kwargs):
        """Initialize the main screen.

        Args:
            source: Page source providing ``fetch_page`` and the page accessors.
        """
        super().__init__(**kwargs)
        self.source = source
        self.controller = PaginationController(
            fetch_page=source.fetch_page,
            is_error=source.is_error,
            get_total_count=source.get_total_count,
            get_items=source.get_items,
        )
        self._unsubscribe = None

    def compose(self) -> ComposeResult:
        """Create the layout for the main screen."""
        with Container(id="main-container"):
            yield TitleBar(getattr(self.source, "label", ""), id="title-bar")
            with Container(id="content-container"):
                yield PaginatedList(self.controller, id="paginated-list")
            yield StatusBar(id="status-bar")
            yield Footer(id="main-footer", show_command_palette=False)

    def on_mount(self) -> None:
        """Called when the screen is mounted. Set initial focus."""
        self._unsubscribe = self.controller.subscribe(self._update_status)
        self._update_status()
        try:
            self.query_one("#paginated-list-view", ListView).focus()
        except Exception:
            self.query_one("#paginated-list", PaginatedList).focus()

    def on_unmount(self) -> None:
        if self._unsubscribe:
            self._unsubscribe()

    def on_paginated_list_item_selected(self, message: PaginatedList.ItemSelected) -> None:
        """Show the details of the selected item"""
        self.app.push_screen(ItemDetailModal(message.item, message.index))

    def _update_status(self) -> None:
        """Mirror the controller state in the status and title bars"""
        state = self.controller.state
        try:
            self.query_one("#status-bar", StatusBar).show_state(state)
            self.query_one("#title-bar", TitleBar).connection_error = state.has_error
        except Exception:
            # Bars not mounted yet
            pass

    def action_help(self) -> None:
        """Show help information"""
        self.notify(
            "Help: Use arrows to scroll, 'enter' to open an item, 'r' to refresh, 'q' to quit.",
            severity="information",
        )
