from collections.abc import Callable

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Vertical
from textual.message import Message
from textual.widget import Widget
from textual.widgets import Label, ListItem, ListView, LoadingIndicator, Static

from pagewrap.controller import PaginationController, SlotKind
from pagewrap.ui.constants import EMPTY_LIST_TEXT, ERROR_SLOT_TEXT, LAYOUT_RETRY_LIMIT, SCROLL_THRESHOLD_ITEMS
from pagewrap.ui.utils import format_item_text


def default_item_builder(item, index: int) -> Widget:
    return Label(format_item_text(item), classes="item-text")


def default_loading_builder() -> Widget:
    return LoadingIndicator(classes="slot-loading")


def default_error_builder(page, existing_item_count: int) -> Widget:
    return Label(ERROR_SLOT_TEXT, classes="slot-error")


def default_empty_builder(page) -> Widget:
    return Static(EMPTY_LIST_TEXT, classes="empty-text")


class ItemSlot(ListItem):
    """Slot holding a loaded item"""

    def __init__(self, item, index: int, content: Widget):
        super().__init__(content)
        self.item = item
        self.slot_index = index


class LoadingSlot(ListItem):
    """Trailing slot shown while the next page loads"""


class ErrorSlot(ListItem):
    """Trailing slot shown when the last fetch failed"""


class PaginatedList(Static):
    """List widget that loads its items page by page from a PaginationController."""

    DEFAULT_CSS = """
    PaginatedList {
        height: 1fr;
    }
    PaginatedList #paginated-list-container {
        height: 1fr;
    }
    PaginatedList #paginated-list-view {
        height: 1fr;
    }
    PaginatedList LoadingSlot LoadingIndicator {
        height: 1;
    }
    """

    BINDINGS = [
        Binding("r", "refresh", "Refresh"),
    ]

    class ItemSelected(Message):
        """Message sent when a loaded item is selected."""

        def __init__(self, item, index: int) -> None:
            super().__init__()
            self.item = item
            self.index = index

    def __init__(
        self,
        controller: PaginationController,
        *,
        item_builder: Callable[..., Widget] = default_item_builder,
        loading_builder: Callable[[], Widget] = default_loading_builder,
        error_builder: Callable[..., Widget] = default_error_builder,
        empty_builder: Callable[..., Widget] = default_empty_builder,
        **kwargs,
    ):
        """Initialize the paginated list.

        Args:
            controller: Controller owning the items. Disposed when this widget unmounts.
            item_builder: Builds the content of an item slot from ``(item, index)``.
            loading_builder: Builds the content of the loading slot.
            error_builder: Builds the content of the error slot from ``(last_page, item_count)``.
            empty_builder: Builds the view shown when the list is known to be empty, from ``last_page``.
        """
        super().__init__(**kwargs)
        self.controller = controller
        self._item_builder = item_builder
        self._loading_builder = loading_builder
        self._error_builder = error_builder
        self._empty_builder = empty_builder
        self._rendered_items = 0
        self._trailing: ListItem | None = None
        self._layout_retries = 0
        self._unsubscribe: Callable[[], None] | None = None

    def compose(self) -> ComposeResult:
        with Vertical(id="paginated-list-container"):
            yield Vertical(id="paginated-list-empty")
            yield ListView(id="paginated-list-view")

    def on_mount(self) -> None:
        """Subscribe to the controller and render the first slots."""
        self._unsubscribe = self.controller.subscribe(self._on_controller_changed)
        list_view = self.query_one("#paginated-list-view", ListView)
        self.watch(list_view, "scroll_y", self._on_list_scrolled, init=False)
        self.controller.initialize()
        self._render_slots()

    def on_unmount(self) -> None:
        if self._unsubscribe:
            self._unsubscribe()
            self._unsubscribe = None
        self.controller.dispose()

    # Event handlers
    def on_list_view_selected(self, event: ListView.Selected) -> None:
        """Handle item selection"""
        if isinstance(event.item, ItemSlot):
            self.post_message(self.ItemSelected(event.item.item, event.item.slot_index))

    def on_list_view_highlighted(self, event: ListView.Highlighted) -> None:
        self.call_after_refresh(self._request_visible_slots)

    def on_resize(self, event) -> None:
        self.call_after_refresh(self._request_visible_slots)

    # Action methods
    def action_refresh(self) -> None:
        """Discard loaded items and load again from the first page"""
        self.controller.reset()

    # Private methods
    def _on_controller_changed(self) -> None:
        if self.is_mounted:
            self._render_slots()

    def _on_list_scrolled(self, scroll_y: float) -> None:
        self._layout_retries = 0
        self.call_after_refresh(self._request_visible_slots)

    def _render_slots(self) -> None:
        """Bring the list in line with the controller state."""
        list_view = self.query_one("#paginated-list-view", ListView)
        empty_view = self.query_one("#paginated-list-empty", Vertical)
        controller = self.controller

        if controller.is_empty:
            self._clear_slots(list_view)
            empty_view.remove_children()
            empty_view.mount(self._empty_builder(controller.last_page))
            empty_view.display = True
            list_view.display = False
            return

        empty_view.display = False
        list_view.display = True

        items = controller.items
        if len(items) < self._rendered_items:
            # Items only shrink on reset
            self._clear_slots(list_view)

        if self._trailing is not None:
            self._trailing.remove()
            self._trailing = None

        new_slots = [
            ItemSlot(items[index], index, self._item_builder(items[index], index))
            for index in range(self._rendered_items, len(items))
        ]
        if new_slots:
            list_view.extend(new_slots)
        self._rendered_items = len(items)

        if controller.renderable_count() > len(items):
            if controller.slot_kind(len(items)) is SlotKind.ERROR:
                self._trailing = ErrorSlot(self._error_builder(controller.last_page, len(items)))
            else:
                self._trailing = LoadingSlot(self._loading_builder())
            list_view.append(self._trailing)

        self._layout_retries = 0
        self.call_after_refresh(self._request_visible_slots)

    def _clear_slots(self, list_view: ListView) -> None:
        list_view.clear()
        self._rendered_items = 0
        self._trailing = None

    def _request_visible_slots(self) -> None:
        """Tell the controller when the trailing slot is about to be shown."""
        if not self.is_mounted or self.controller.is_empty or self._trailing is None:
            return

        trailing_index = len(self.controller.items)
        if trailing_index >= self.controller.renderable_count():
            return

        # Offset of the slot inside the list's scrollable content
        region = self._trailing.virtual_region
        if not region.height:
            # Slot not laid out yet
            if self._layout_retries < LAYOUT_RETRY_LIMIT:
                self._layout_retries += 1
                self.call_after_refresh(self._request_visible_slots)
            return

        list_view = self.query_one("#paginated-list-view", ListView)
        window = list_view.scrollable_content_region.at_offset(list_view.scroll_offset)
        if region.y < window.bottom + SCROLL_THRESHOLD_ITEMS:
            self.controller.on_slot_requested(trailing_index)
