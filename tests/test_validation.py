"""Validation rule tests."""

from datetime import datetime, timezone

import pytest

from awaken.schemas.drink import Drink, DrinkCategory, DrinkOption, DrinkOptionType
from awaken.schemas.syrup import Syrup
from awaken.utils.validation import (
    sanitize_phone_number,
    validate_customer_info,
    validate_date,
    validate_drink,
    validate_drink_option,
    validate_order,
    validate_order_item,
    validate_price,
    validate_syrup,
)

NOW = datetime(2026, 10, 19, 9, 30, tzinfo=timezone.utc)


def _option(**overrides) -> dict:
    option = {
        "id": "milk-oat",
        "name": "Oat milk",
        "additionalCost": 0,
        "type": "milk",
        "isAvailable": True,
    }
    option.update(overrides)
    return option


def _item(**overrides) -> dict:
    item = {
        "id": "line-1",
        "drinkId": "drink-latte-001",
        "drinkName": "Classic Latte",
        "quantity": 1,
        "selectedOptions": [_option()],
        "totalPrice": 0,
    }
    item.update(overrides)
    return item


def _order(**overrides) -> dict:
    order = {
        "id": "order-1",
        "customerName": "Margaret",
        "items": [_item()],
        "totalAmount": 0,
        "status": "pending",
        "createdAt": NOW,
        "updatedAt": NOW,
    }
    order.update(overrides)
    return order


@pytest.mark.parametrize("price", [0, 450, 100_000, 250.0])
def test_validate_price_accepts_whole_cents_in_range(price) -> None:
    assert validate_price(price).success is True


def test_validate_price_rejects_out_of_range() -> None:
    assert validate_price(100_001).errors == ["Price must be between $0 and $1,000"]
    assert validate_price(-1).errors == ["Price cannot be negative"]


def test_validate_price_rejects_fractional_cents() -> None:
    result = validate_price(49.5)

    assert result.success is False
    assert result.errors == ["Price must be a whole number (no fractional cents)"]


@pytest.mark.parametrize("price", ["450", None, True, float("nan")])
def test_validate_price_rejects_non_numbers(price) -> None:
    assert validate_price(price).errors == ["Price must be a valid number"]


def test_validate_customer_info() -> None:
    assert validate_customer_info("Margaret").success is True
    assert validate_customer_info("Margaret", "(555) 123-4567").success is True
    assert validate_customer_info("   ").errors == ["Customer name is required"]
    assert validate_customer_info(None).errors == ["Customer name is required"]
    assert validate_customer_info("x" * 101).errors == ["Customer name must be 100 characters or less"]
    assert validate_customer_info("x" * 100).success is True
    assert validate_customer_info("Margaret", "call me").errors == ["Phone number must contain at least one digit"]


def test_validate_customer_info_collects_every_error() -> None:
    result = validate_customer_info("", "n/a")

    assert result.errors == ["Customer name is required", "Phone number must contain at least one digit"]


def test_sanitize_phone_number() -> None:
    assert sanitize_phone_number("(555) 123-4567") == "5551234567"
    assert sanitize_phone_number(None) == ""
    assert sanitize_phone_number(5551234567) == ""


def test_validate_date_window() -> None:
    assert validate_date(NOW).success is True
    assert validate_date("2026-10-19T09:30:00Z").success is True
    assert validate_date(datetime(2019, 12, 31)).errors == ["Order date must be between 2020 and 2030"]
    assert validate_date(datetime(2031, 1, 1)).errors == ["Order date must be between 2020 and 2030"]
    assert validate_date("yesterday").errors == ["Order date is invalid"]


def test_validate_drink_option() -> None:
    assert validate_drink_option(_option()) is True
    assert validate_drink_option(_option(type="topping")) is False
    assert validate_drink_option(_option(additionalCost=-5)) is False
    assert validate_drink_option(_option(isAvailable="yes")) is False
    assert validate_drink_option("milk-oat") is False


def test_validate_drink_accepts_models_and_mappings() -> None:
    drink = Drink(
        id="drink-latte-001",
        name="Classic Latte",
        category=DrinkCategory.LATTE,
        base_price=0,
        options=[DrinkOption(id="opt-latte-milk-oat", name="Oat Milk", type=DrinkOptionType.MILK)],
    )

    assert validate_drink(drink) is True
    assert validate_drink(drink.to_storage()) is True
    assert validate_drink(dict(drink.to_storage(), category="tea")) is False
    assert validate_drink(dict(drink.to_storage(), basePrice=100_001)) is False
    assert validate_drink(dict(drink.to_storage(), options=[_option(type="topping")])) is False


def test_validate_order_item() -> None:
    assert validate_order_item(_item()) is True
    assert validate_order_item(_item(quantity=0)) is False
    assert validate_order_item(_item(quantity=1.5)) is False
    assert validate_order_item(_item(totalPrice=12.5)) is False
    assert validate_order_item(_item(selectedOptions="milk-oat")) is False


def test_validate_order() -> None:
    assert validate_order(_order()) is True
    assert validate_order(_order(customerPhone="555-0100", assignedBarista="Emma")) is True
    assert validate_order(_order(items=[])) is False
    assert validate_order(_order(status="shipped")) is False
    assert validate_order(_order(customerName=" ")) is False
    assert validate_order(_order(createdAt="2026-10-19T09:30:00Z")) is False
    assert validate_order(_order(createdAt=datetime(2019, 6, 1, tzinfo=timezone.utc))) is False
    assert validate_order(_order(totalAmount=100_001)) is False
    assert validate_order(_order(estimatedCompletionTime=datetime(2035, 1, 1, tzinfo=timezone.utc))) is False


def test_validate_syrup() -> None:
    syrup = Syrup(id="syrup-1", name="Vanilla", created_at=NOW, updated_at=NOW)

    assert validate_syrup(syrup) is True
    assert validate_syrup(dict(syrup.model_dump(by_alias=True), status="gone")) is False
    assert validate_syrup(dict(syrup.model_dump(by_alias=True), name="  ")) is False
