"""Inventory statistics schemas."""

from enum import Enum

from pydantic import BaseModel, Field


class DateRangeFilter(str, Enum):
    """Windows the inventory screen can report on."""

    TODAY = "today"
    WEEK = "week"
    MONTH = "month"
    THREE_MONTHS = "threeMonths"
    YEAR = "year"


class MilkUsage(BaseModel):
    whole: int = 0
    oat: int = 0


class ShotUsage(BaseModel):
    total: int = 0
    by_drink: dict[str, int] = Field(default_factory=dict)


class ChocolateUsage(BaseModel):
    regular: int = 0
    white: int = 0


class OtherUsage(BaseModel):
    regular_chai: int = 0
    dirty_chai: int = 0
    with_cream: int = 0


class InventoryStats(BaseModel):
    """Ingredient consumption derived from a set of orders."""

    total_orders: int = 0
    drink_counts: dict[str, int] = Field(default_factory=dict)
    milk: MilkUsage = Field(default_factory=MilkUsage)
    shots: ShotUsage = Field(default_factory=ShotUsage)
    chocolate: ChocolateUsage = Field(default_factory=ChocolateUsage)
    syrups: dict[str, int] = Field(default_factory=dict)
    other: OtherUsage = Field(default_factory=OtherUsage)
