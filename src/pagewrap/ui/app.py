"""Main pagewrap application."""

from textual.app import App
from textual.binding import Binding

from pagewrap.ui.screens.main_screen import MainScreen


class PagewrapApp(App):
    """Terminal app browsing a page source through a paginated list."""

    TITLE = "Paginated List"
    CSS_PATH = "app.tcss"

    BINDINGS = [
        Binding("ctrl+q", "quit", "Quit", priority=True),
    ]

    def __init__(self, source, theme_name: str = "textual-dark", **kwargs):
        """Initialize the app.

        Args:
            source: Page source providing ``fetch_page`` and the page accessors.
            theme_name: Name of a built-in Textual theme.
        """
        super().__init__(**kwargs)
        self.source = source
        self.theme_name = theme_name

    def on_mount(self) -> None:
        """Called when app starts."""
        self.theme = self.theme_name
        self.push_screen(MainScreen(self.source))
