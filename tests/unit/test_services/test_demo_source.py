"""Tests for DemoFoodSource."""

import asyncio
import random

from pagewrap.services.demo_source import FOODS, DemoFoodSource, FoodPage


def test_pages_are_sliced_by_page_number():
    source = DemoFoodSource(page_size=10, latency=0)

    first = asyncio.run(source.fetch_page(1))
    last = asyncio.run(source.fetch_page(4))

    assert first.total_count == len(FOODS) == 40
    assert first.foods == FOODS[:10]
    assert last.foods == FOODS[30:40]
    assert DemoFoodSource.is_error(first) is False


def test_page_past_the_end_is_empty():
    source = DemoFoodSource(page_size=10, latency=0)

    page = asyncio.run(source.fetch_page(5))

    assert page.foods == []
    assert DemoFoodSource.get_items(page) == []


def test_error_rate_produces_error_pages():
    source = DemoFoodSource(latency=0, error_rate=1.0, rng=random.Random(7))

    page = asyncio.run(source.fetch_page(1))

    assert page == FoodPage(0, None)
    assert DemoFoodSource.is_error(page) is True
    assert DemoFoodSource.get_items(page) == []


def test_custom_food_list():
    source = DemoFoodSource(page_size=2, latency=0, foods=["Figs", "Dates", "Plums"])

    page = asyncio.run(source.fetch_page(2))

    assert DemoFoodSource.get_total_count(page) == 3
    assert page.foods == ["Plums"]
    assert source.label == "demo (3 foods)"
