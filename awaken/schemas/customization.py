"""Drink customizations as a tagged union.

Order items persist their options as generic ``{id, name, ...}`` snapshots whose
ids encode the customization (``milk-oat``, ``shots-2``, ``syrup-Vanilla``,
``dirty``...). Those ids are decoded once into the variants below, and every
consumer works with the variants instead of re-parsing id strings.
"""

from __future__ import annotations

import re
from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field

from awaken.schemas.drink import DrinkOption, DrinkOptionType

_SHOTS_PATTERN = re.compile(r"shots-(\d+)")


class SizeChoice(BaseModel):
    kind: Literal["size"] = "size"
    size: str

    def to_option(self) -> DrinkOption:
        return DrinkOption(id=f"size-{self.size}", name=self.size, type=DrinkOptionType.SIZE)


class MilkChoice(BaseModel):
    kind: Literal["milk"] = "milk"
    milk: str

    def to_option(self) -> DrinkOption:
        return DrinkOption(
            id=f"milk-{self.milk}",
            name=f"{self.milk[:1].upper()}{self.milk[1:]} milk",
            type=DrinkOptionType.MILK,
        )


class ShotCount(BaseModel):
    kind: Literal["shots"] = "shots"
    count: int = Field(ge=0)

    def to_option(self) -> DrinkOption:
        suffix = "" if self.count == 1 else "s"
        return DrinkOption(id=f"shots-{self.count}", name=f"{self.count} shot{suffix}", type=DrinkOptionType.EXTRAS)


class ChocolateChoice(BaseModel):
    kind: Literal["chocolate"] = "chocolate"
    chocolate: str

    def to_option(self) -> DrinkOption:
        name = "White chocolate" if self.chocolate == "white" else "Chocolate"
        return DrinkOption(id=f"chocolate-{self.chocolate}", name=name, type=DrinkOptionType.EXTRAS)


class SyrupChoice(BaseModel):
    kind: Literal["syrup"] = "syrup"
    flavor: str

    def to_option(self) -> DrinkOption:
        return DrinkOption(id=f"syrup-{self.flavor}", name=f"{self.flavor} syrup", type=DrinkOptionType.EXTRAS)


class DirtyFlag(BaseModel):
    """Espresso added to a chai."""

    kind: Literal["dirty"] = "dirty"

    def to_option(self) -> DrinkOption:
        return DrinkOption(id="dirty", name="Dirty", type=DrinkOptionType.EXTRAS)


class CreamFlag(BaseModel):
    """Cream added to an Italian soda."""

    kind: Literal["cream"] = "cream"

    def to_option(self) -> DrinkOption:
        return DrinkOption(id="cream", name="With cream", type=DrinkOptionType.EXTRAS)


Customization = Annotated[
    Union[SizeChoice, MilkChoice, ShotCount, ChocolateChoice, SyrupChoice, DirtyFlag, CreamFlag],
    Field(discriminator="kind"),
]


def decode_option(option: DrinkOption) -> Customization | None:
    """Return the customization encoded in an option id, or None when unrecognized."""
    option_id = option.id
    if option_id == "dirty":
        return DirtyFlag()
    if option_id == "cream":
        return CreamFlag()
    if option_id.startswith("size-"):
        return SizeChoice(size=option_id[len("size-"):])
    if option_id.startswith("milk-"):
        return MilkChoice(milk=option_id[len("milk-"):])
    if option_id.startswith("shots-"):
        match = _SHOTS_PATTERN.match(option_id)
        return ShotCount(count=int(match.group(1)) if match else 0)
    if option_id.startswith("chocolate-"):
        return ChocolateChoice(chocolate=option_id[len("chocolate-"):])
    if option_id.startswith("syrup-"):
        return SyrupChoice(flavor=option_id[len("syrup-"):])
    return None


def decode_options(options: list[DrinkOption]) -> list[Customization]:
    """Decode every recognized option, keeping their original order."""
    decoded: list[Customization] = []
    for option in options:
        customization = decode_option(option)
        if customization is not None:
            decoded.append(customization)
    return decoded
