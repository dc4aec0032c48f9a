"""Default menu, syrups and settings used to seed an empty store."""

from __future__ import annotations

from datetime import datetime

from awaken.core.config import settings
from awaken.schemas.drink import Drink, DrinkCategory, DrinkOption, DrinkOptionType
from awaken.schemas.settings import AppSettings, CoffeeCartConfig, UserPreferences
from awaken.services.migration_service import CURRENT_SCHEMA_VERSION
from awaken.utils.time import utc_now

# (slug, name, category, description) - every drink is served free of charge.
_MENU: list[tuple[str, str, DrinkCategory, str]] = [
    ("mocha", "Classic Mocha", DrinkCategory.MOCHA,
     "Rich chocolate blended with smooth espresso"),
    ("chai", "Spiced Chai Latte", DrinkCategory.CHAI_LATTE,
     "Warming blend of chai spices with steamed milk"),
    ("latte", "Classic Latte", DrinkCategory.LATTE,
     "Smooth espresso with steamed milk"),
    ("hotchoc", "Rich Hot Chocolate", DrinkCategory.HOT_CHOCOLATE,
     "Creamy hot chocolate made with real cocoa"),
    ("americano", "Classic Americano", DrinkCategory.AMERICANO,
     "Bold espresso with hot water"),
    ("italiansoda", "Sparkling Italian Soda", DrinkCategory.ITALIAN_SODA,
     "Carbonated soda with fruity flavors and a splash of cream"),
]

_SIZES: list[tuple[str, str]] = [("small", "12 oz cup"), ("medium", "16 oz cup"), ("large", "20 oz cup")]
_MILKS: list[tuple[str, str]] = [("whole", "Creamy whole milk"), ("almond", "Smooth almond milk"), ("oat", "Rich oat milk")]

DEFAULT_SYRUP_NAMES: list[str] = ["Vanilla", "Caramel", "Hazelnut"]


def _standard_options(slug: str) -> list[DrinkOption]:
    options: list[DrinkOption] = [
        DrinkOption(
            id=f"opt-{slug}-size-{size}",
            name=size.capitalize(),
            type=DrinkOptionType.SIZE,
            description=description,
        )
        for size, description in _SIZES
    ]
    options.extend(
        DrinkOption(
            id=f"opt-{slug}-milk-{milk}",
            name=f"{milk.capitalize()} Milk",
            type=DrinkOptionType.MILK,
            description=description,
        )
        for milk, description in _MILKS
    )
    return options


def build_default_drinks() -> list[Drink]:
    """Return one free drink per category with size and milk options."""
    return [
        Drink(
            id=f"drink-{slug}-001",
            name=name,
            category=category,
            base_price=0,
            description=description,
            options=_standard_options(slug),
        )
        for slug, name, category, description in _MENU
    ]


def build_default_settings(now: datetime | None = None) -> AppSettings:
    """Return settings at the current schema version built from static config."""
    return AppSettings(
        version=settings.app_version,
        schema_version=CURRENT_SCHEMA_VERSION,
        last_updated=now or utc_now(),
        migration_history=[],
        user_preferences=UserPreferences(
            font_size=settings.default_font_size,
            high_contrast_mode=settings.default_high_contrast,
            voice_announcements=settings.default_voice_announcements,
            haptic_feedback=settings.default_haptic_feedback,
        ),
        cart_config=CoffeeCartConfig(
            name=settings.cart_name,
            is_open=settings.cart_open,
            menu=build_default_drinks(),
            default_prep_time=settings.default_prep_time_minutes,
            tax_rate_basis_points=settings.tax_rate_basis_points,
            currency_symbol=settings.currency_symbol,
        ),
    )
