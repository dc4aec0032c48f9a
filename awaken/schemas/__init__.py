"""Schema exports."""

from awaken.schemas.cart import CartLine
from awaken.schemas.customization import (
    ChocolateChoice,
    CreamFlag,
    Customization,
    DirtyFlag,
    MilkChoice,
    ShotCount,
    SizeChoice,
    SyrupChoice,
    decode_option,
    decode_options,
)
from awaken.schemas.drink import Drink, DrinkCategory, DrinkOption, DrinkOptionType
from awaken.schemas.inventory import DateRangeFilter, InventoryStats
from awaken.schemas.label import LabelFormat
from awaken.schemas.order import Order, OrderItem, OrderStatus
from awaken.schemas.settings import AppSettings, CoffeeCartConfig, MigrationRecord, UserPreferences
from awaken.schemas.syrup import Syrup, SyrupCreate, SyrupStatus

__all__ = [
    "AppSettings",
    "CartLine",
    "ChocolateChoice",
    "CoffeeCartConfig",
    "CreamFlag",
    "Customization",
    "DateRangeFilter",
    "DirtyFlag",
    "Drink",
    "DrinkCategory",
    "DrinkOption",
    "DrinkOptionType",
    "InventoryStats",
    "LabelFormat",
    "MigrationRecord",
    "MilkChoice",
    "Order",
    "OrderItem",
    "OrderStatus",
    "ShotCount",
    "SizeChoice",
    "Syrup",
    "SyrupChoice",
    "SyrupCreate",
    "SyrupStatus",
    "UserPreferences",
    "decode_option",
    "decode_options",
]
