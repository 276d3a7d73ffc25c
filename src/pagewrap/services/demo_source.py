"""In-memory shopping list source used by the demo app."""

import asyncio
import random
from dataclasses import dataclass

from loguru import logger

FOODS = [
    "Apples", "Bananas", "Bread", "Butter", "Carrots", "Cheddar", "Chicken", "Coffee",
    "Cornflakes", "Cucumber", "Eggs", "Flour", "Garlic", "Grapes", "Honey", "Jam",
    "Kale", "Lemons", "Lentils", "Milk", "Mushrooms", "Oats", "Olive oil", "Onions",
    "Oranges", "Pasta", "Peanut butter", "Pears", "Peppers", "Potatoes", "Rice", "Salmon",
    "Spinach", "Sugar", "Tea", "Tofu", "Tomatoes", "Tuna", "Yoghurt", "Zucchini",
]  # fmt: skip


@dataclass
class FoodPage:
    """One page of foods. ``foods`` is None when the fetch failed."""

    total_count: int
    foods: list[str] | None


class DemoFoodSource:
    """Serves ``FOODS`` page by page with optional latency and random failures."""

    def __init__(
        self,
        page_size: int = 10,
        latency: float = 0.5,
        error_rate: float = 0.0,
        foods: list[str] | None = None,
        rng: random.Random | None = None,
    ):
        self.page_size = page_size
        self.latency = latency
        self.error_rate = error_rate
        self.foods = list(FOODS if foods is None else foods)
        self._rng = rng or random.Random()

    @property
    def label(self) -> str:
        return f"demo ({len(self.foods)} foods)"

    async def fetch_page(self, page_number: int) -> FoodPage:
        """Return page ``page_number`` (1-based)."""
        if self.latency:
            await asyncio.sleep(self.latency)

        if self.error_rate and self._rng.random() < self.error_rate:
            logger.info(f"Simulating a network failure for page {page_number}")
            return FoodPage(0, None)

        start = (page_number - 1) * self.page_size
        return FoodPage(len(self.foods), self.foods[start : start + self.page_size])

    # Accessors for PaginationController

    @staticmethod
    def is_error(page: FoodPage) -> bool:
        return page.foods is None

    @staticmethod
    def get_total_count(page: FoodPage) -> int:
        return page.total_count

    @staticmethod
    def get_items(page: FoodPage) -> list[str]:
        return page.foods or []
