"""Incremental page loading state for paginated lists."""

import asyncio
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar

from loguru import logger

PageT = TypeVar("PageT")
ItemT = TypeVar("ItemT")

# Total count used before the first page arrives: "assume at least one item"
UNKNOWN_TOTAL_COUNT = 1


class SlotKind(Enum):
    """What a renderable slot should display."""

    ITEM = "item"
    LOADING = "loading"
    ERROR = "error"


@dataclass(frozen=True)
class ControllerState(Generic[PageT, ItemT]):
    """Immutable snapshot of a controller's state."""

    items: tuple[ItemT, ...]
    current_page_number: int
    total_count: int
    is_loading: bool
    has_error: bool
    last_page: PageT | None


class PaginationController(Generic[PageT, ItemT]):
    """Tracks loaded items and fetches the next page when the list needs it.

    The controller never raises data errors. A page that ``is_error`` flags (or a
    fetch or page accessor that raises) sets ``has_error`` and is left for the
    presentation layer to render. Only one fetch is ever in flight.
    """

    def __init__(
        self,
        fetch_page: Callable[[int], Awaitable[PageT]],
        is_error: Callable[[PageT], bool],
        get_total_count: Callable[[PageT], int],
        get_items: Callable[[PageT], Sequence[ItemT]],
        initial_page: PageT | None = None,
        initial_page_number: int = 0,
    ):
        """Initialize the controller.

        Args:
            fetch_page: Async callable returning the page for a page number.
            is_error: Returns True if a page represents a failed fetch.
            get_total_count: Returns the best-known total item count for a page.
            get_items: Returns the items carried by a page.
            initial_page: Optional page to seed the list with, skipping the first fetch.
            initial_page_number: Page number of ``initial_page``. Must be 0 without one.
        """
        if initial_page_number < 0:
            raise ValueError(f"initial_page_number must be >= 0, got {initial_page_number}")
        if initial_page is None and initial_page_number != 0:
            raise ValueError("Initial page number given, but no initial page was provided")

        self._fetch_page = fetch_page
        self._is_error = is_error
        self._get_total_count = get_total_count
        self._get_items = get_items
        self._initial_page = initial_page
        self._initial_page_number = initial_page_number

        self._items: list[ItemT] = []
        self._current_page_number = initial_page_number
        self._total_count = UNKNOWN_TOTAL_COUNT
        self._is_loading = False
        self._has_error = False
        self._last_page: PageT | None = None
        self._last_error: Exception | None = None

        self._listeners: list[Callable[[], None]] = []
        self._active = True
        self._initialized = False
        # Bumped by reset() so completions of older fetches can be dropped
        self._generation = 0
        self._pending: asyncio.Task | None = None

    # Read-only state

    @property
    def items(self) -> tuple[ItemT, ...]:
        return tuple(self._items)

    @property
    def current_page_number(self) -> int:
        return self._current_page_number

    @property
    def total_count(self) -> int:
        return self._total_count

    @property
    def is_loading(self) -> bool:
        return self._is_loading

    @property
    def has_error(self) -> bool:
        return self._has_error

    @property
    def last_page(self) -> PageT | None:
        return self._last_page

    @property
    def last_error(self) -> Exception | None:
        """Exception raised by the most recent failed fetch, if it raised."""
        return self._last_error

    @property
    def is_empty(self) -> bool:
        """True once a page has reported that there are no items at all."""
        return self._total_count == 0

    @property
    def active(self) -> bool:
        return self._active

    @property
    def state(self) -> ControllerState[PageT, ItemT]:
        return ControllerState(
            items=tuple(self._items),
            current_page_number=self._current_page_number,
            total_count=self._total_count,
            is_loading=self._is_loading,
            has_error=self._has_error,
            last_page=self._last_page,
        )

    # Change notification

    def subscribe(self, listener: Callable[[], None]) -> Callable[[], None]:
        """Register a change listener and return a function that removes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def dispose(self) -> None:
        """Stop notifying listeners. A fetch in flight still completes silently."""
        self._active = False
        self._listeners.clear()

    def _notify(self) -> None:
        if not self._active:
            return
        for listener in list(self._listeners):
            listener()

    # Lifecycle

    def initialize(self) -> None:
        """Seed state from the initial page, if one was given. Later calls do nothing."""
        if self._initialized:
            return
        self._initialized = True

        page = self._initial_page
        if page is None:
            return

        try:
            failed, items, total_count = self._read_page(page)
        except Exception as e:
            logger.exception("Reading the initial page raised")
            self._last_error = e
            self._has_error = True
        else:
            if failed:
                logger.warning("Initial page was flagged as an error")
                self._flag_error(page)
            else:
                self._ingest(page, items, total_count)
        self._notify()

    def reset(self) -> None:
        """Drop all loaded data and start again from the initial page number."""
        logger.debug(f"Resetting pagination ({len(self._items)} items discarded)")
        self._generation += 1
        self._pending = None
        self._items.clear()
        self._current_page_number = self._initial_page_number
        self._total_count = UNKNOWN_TOTAL_COUNT
        self._is_loading = False
        self._has_error = False
        self._last_page = None
        self._last_error = None
        self._notify()

    # Slots

    def renderable_count(self) -> int:
        """Number of slots to render: the items plus one loading/error slot while incomplete."""
        if len(self._items) >= self._total_count:
            return len(self._items)
        return len(self._items) + 1

    def slot_kind(self, index: int) -> SlotKind:
        """Decide what the slot at ``index`` shows."""
        if not 0 <= index < self.renderable_count():
            raise IndexError(f"Slot index {index} out of range (0..{self.renderable_count() - 1})")
        if index < len(self._items):
            return SlotKind.ITEM
        if self._has_error:
            return SlotKind.ERROR
        return SlotKind.LOADING

    def on_slot_requested(self, index: int) -> None:
        """Called by the presentation layer for each slot about to be shown."""
        if index < len(self._items) or index >= self.renderable_count():
            return
        if self._has_error:
            # The error slot is rendered by the caller; only reset() retries
            return
        self.request_next_page()

    # Fetching

    def request_next_page(self) -> asyncio.Task:
        """Start fetching the next page unless a fetch is already in flight.

        Must be called from a running event loop. Returns the task of the fetch in
        flight, which is the existing one when a fetch was already outstanding.
        """
        if self._is_loading:
            return self._pending

        loop = asyncio.get_running_loop()
        self._is_loading = True
        self._current_page_number += 1
        page_number = self._current_page_number
        logger.debug(f"Requesting page {page_number}")

        self._pending = loop.create_task(self._load_page(page_number, self._generation))
        return self._pending

    async def _load_page(self, page_number: int, generation: int) -> None:
        """Fetch one page and fold the result into the state."""
        try:
            page = await self._fetch_page(page_number)
            if generation != self._generation:
                logger.debug(f"Dropping page {page_number} fetched before a reset")
                return
            failed, items, total_count = self._read_page(page)
        except Exception as e:
            if generation != self._generation:
                logger.debug(f"Dropping failure of page {page_number} fetched before a reset")
                return
            logger.exception(f"Fetching page {page_number} raised")
            self._last_error = e
            self._has_error = True
        else:
            if failed:
                logger.warning(f"Page {page_number} was flagged as an error")
                self._flag_error(page)
            else:
                self._ingest(page, items, total_count)
                logger.debug(f"Loaded page {page_number}: {len(self._items)} of {self._total_count} items")
        finally:
            # A fetch started before reset() must not clear the loading flag of the current one
            if generation == self._generation:
                self._finish_loading()

    def _read_page(self, page: PageT) -> tuple[bool, list[ItemT], int | None]:
        """Run the page accessors before any state is touched."""
        if self._is_error(page):
            return True, [], None
        return False, list(self._get_items(page)), self._get_total_count(page)

    def _finish_loading(self) -> None:
        self._is_loading = False
        self._pending = None
        self._notify()

    def _ingest(self, page: PageT, items: list[ItemT], total_count: int) -> None:
        self._items.extend(items)
        self._total_count = total_count
        self._has_error = False
        self._last_error = None
        self._last_page = page

    def _flag_error(self, page: PageT) -> None:
        self._has_error = True
        self._last_error = None
        self._last_page = page
