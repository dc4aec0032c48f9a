"""Ingredient usage derived from order history."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime, timedelta

from awaken.schemas.customization import ChocolateChoice, MilkChoice, ShotCount, SyrupChoice
from awaken.schemas.inventory import DateRangeFilter, InventoryStats
from awaken.schemas.order import Order, OrderItem
from awaken.utils.time import local_day_start, local_midnight, local_now

WEEK_DAYS: int = 7
THREE_MONTHS_DAYS: int = 90


def date_range_start(date_range: DateRangeFilter | str, now: datetime | None = None) -> datetime:
    """Return the inclusive local start of ``date_range``.

    ``today``, ``month`` and ``year`` start at a local calendar boundary;
    ``week`` and ``threeMonths`` are trailing windows ending at ``now``.
    """
    current = local_now(now)
    date_range = DateRangeFilter(date_range)

    if date_range == DateRangeFilter.TODAY:
        return local_midnight(current)
    if date_range == DateRangeFilter.WEEK:
        return current - timedelta(days=WEEK_DAYS)
    if date_range == DateRangeFilter.MONTH:
        return local_day_start(current.year, current.month, 1)
    if date_range == DateRangeFilter.THREE_MONTHS:
        return current - timedelta(days=THREE_MONTHS_DAYS)
    return local_day_start(current.year, 1, 1)


def filter_orders_by_date_range(
    orders: Iterable[Order],
    date_range: DateRangeFilter | str,
    *,
    now: datetime | None = None,
) -> list[Order]:
    """Keep the orders created at or after the start of ``date_range``."""
    start = date_range_start(date_range, now)
    return [order for order in orders if order.created_at >= start]


def _add(counts: dict[str, int], key: str, amount: int) -> None:
    counts[key] = counts.get(key, 0) + amount


def _tally_item(stats: InventoryStats, item: OrderItem) -> None:
    quantity = item.quantity
    _add(stats.drink_counts, item.drink_name, quantity)

    milk = item.first_customization("milk")
    if isinstance(milk, MilkChoice):
        if milk.milk == "whole":
            stats.milk.whole += quantity
        elif milk.milk == "oat":
            stats.milk.oat += quantity

    shots = item.first_customization("shots")
    if isinstance(shots, ShotCount) and shots.count > 0:
        stats.shots.total += shots.count * quantity
        _add(stats.shots.by_drink, item.drink_name, shots.count * quantity)

    chocolate = item.first_customization("chocolate")
    if isinstance(chocolate, ChocolateChoice):
        if chocolate.chocolate == "regular":
            stats.chocolate.regular += quantity
        elif chocolate.chocolate == "white":
            stats.chocolate.white += quantity

    syrup = item.first_customization("syrup")
    if isinstance(syrup, SyrupChoice) and syrup.flavor:
        _add(stats.syrups, syrup.flavor, quantity)

    if "chai" in item.drink_name.lower():
        if item.has_customization("dirty"):
            stats.other.dirty_chai += quantity
        else:
            stats.other.regular_chai += quantity

    if item.has_customization("cream"):
        stats.other.with_cream += quantity


def calculate_inventory_stats(orders: Iterable[Order]) -> InventoryStats:
    """Aggregate drink counts and ingredient usage over ``orders``.

    Every order counts regardless of status; the result does not depend on
    the order of ``orders``.
    """
    stats = InventoryStats()
    for order in orders:
        stats.total_orders += 1
        for item in order.items:
            _tally_item(stats, item)
    return stats


def format_date_range(date_range: DateRangeFilter | str, *, now: datetime | None = None) -> str:
    """Return a short human label for ``date_range`` relative to ``now``."""
    current = local_now(now)
    date_range = DateRangeFilter(date_range)
    today_label = f"{current:%b} {current.day}, {current.year}"

    if date_range == DateRangeFilter.TODAY:
        return today_label
    if date_range == DateRangeFilter.MONTH:
        return f"{current:%B} {current.year}"
    if date_range == DateRangeFilter.YEAR:
        return str(current.year)

    days = WEEK_DAYS if date_range == DateRangeFilter.WEEK else THREE_MONTHS_DAYS
    start = current - timedelta(days=days)
    return f"{start:%b} {start.day} - {today_label}"
