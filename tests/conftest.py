"""Pytest configuration and shared fixtures."""

import asyncio
from dataclasses import dataclass, field
from pathlib import Path

import pytest


@dataclass
class FakePage:
    total: int
    items: list = field(default_factory=list)
    failed: bool = False


class FakeSource:
    """Numbered items served page by page; records every requested page number."""

    def __init__(self, total: int = 40, page_size: int = 10):
        self.total = total
        self.page_size = page_size
        self.calls: list[int] = []
        self.failing_pages: set[int] = set()
        self.raising_pages: set[int] = set()
        self.hold = False
        self.waiting: list[asyncio.Event] = []
        self.label = "fake"

    async def fetch_page(self, page_number: int) -> FakePage:
        self.calls.append(page_number)
        if self.hold:
            event = asyncio.Event()
            self.waiting.append(event)
            await event.wait()
        if page_number in self.raising_pages:
            raise RuntimeError(f"connection reset on page {page_number}")
        if page_number in self.failing_pages:
            return FakePage(total=0, failed=True)
        start = (page_number - 1) * self.page_size
        end = min(start + self.page_size, self.total)
        return FakePage(total=self.total, items=[f"item-{i}" for i in range(start, end)])

    def release(self) -> None:
        """Let every held fetch complete."""
        for event in self.waiting:
            event.set()

    @staticmethod
    def is_error(page: FakePage) -> bool:
        return page.failed

    @staticmethod
    def get_total_count(page: FakePage) -> int:
        return page.total

    @staticmethod
    def get_items(page: FakePage) -> list:
        return page.items


@pytest.fixture
def fake_source() -> FakeSource:
    return FakeSource()


@pytest.fixture
def make_source():
    return FakeSource


@pytest.fixture
def make_controller():
    from pagewrap.controller import PaginationController

    def factory(source: FakeSource, **kwargs) -> PaginationController:
        return PaginationController(
            fetch_page=source.fetch_page,
            is_error=source.is_error,
            get_total_count=source.get_total_count,
            get_items=source.get_items,
            **kwargs,
        )

    return factory


@pytest.fixture
def page_factory():
    return FakePage


@pytest.fixture
def temp_config_path(tmp_path: Path) -> Path:
    return tmp_path / "pagewrap.config"
