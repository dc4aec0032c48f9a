"""Drink menu schemas."""

from enum import Enum

from pydantic import Field

from awaken.schemas.base import StoredModel


class DrinkCategory(str, Enum):
    """Menu categories."""

    MOCHA = "mocha"
    CHAI_LATTE = "chai-latte"
    LATTE = "latte"
    HOT_CHOCOLATE = "hot-chocolate"
    AMERICANO = "americano"
    ITALIAN_SODA = "italian-soda"


class DrinkOptionType(str, Enum):
    """Customization option groups."""

    SIZE = "size"
    MILK = "milk"
    EXTRAS = "extras"


class DrinkOption(StoredModel):
    """Customization option, also used as the snapshot stored on order items."""

    id: str
    name: str
    additional_cost: int = Field(default=0, ge=0)
    type: DrinkOptionType
    is_available: bool = True
    description: str | None = None


class Drink(StoredModel):
    """Menu drink with its available options."""

    id: str
    name: str
    category: DrinkCategory
    base_price: int = Field(ge=0)
    options: list[DrinkOption] = Field(default_factory=list)
    is_available: bool = True
    description: str | None = None
    image_url: str | None = None
