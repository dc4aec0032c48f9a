"""Runtime validation for data crossing the storage boundary.

Validators never raise. ``validate_customer_info``, ``validate_price`` and
``validate_date`` return a ``ValidationResult`` listing every problem found;
the structural guards (``validate_drink``, ``validate_order``...) return a
plain bool and stop at the first failure.

Structural guards accept either a schema instance or a raw mapping using the
persisted camelCase keys.
"""

from __future__ import annotations

import math
import re
from collections.abc import Mapping
from datetime import datetime
from typing import Any

from pydantic import BaseModel

from awaken.utils.time import parse_iso_datetime

MIN_PRICE_CENTS: int = 0
MAX_PRICE_CENTS: int = 100_000
MAX_CUSTOMER_NAME_LENGTH: int = 100
MIN_ORDER_YEAR: int = 2020
MAX_ORDER_YEAR: int = 2030

DRINK_CATEGORIES: list[str] = ["mocha", "chai-latte", "latte", "hot-chocolate", "americano", "italian-soda"]
DRINK_OPTION_TYPES: list[str] = ["size", "milk", "extras"]
ORDER_STATUSES: list[str] = ["pending", "in-progress", "ready", "completed", "cancelled"]
SYRUP_STATUSES: list[str] = ["available", "soldOut"]

_NON_DIGITS = re.compile(r"\D")


class ValidationResult(BaseModel):
    """Outcome of a validation with human-readable messages."""

    success: bool
    errors: list[str]


def _result(errors: list[str]) -> ValidationResult:
    return ValidationResult(success=not errors, errors=errors)


def _as_mapping(value: Any) -> dict[str, Any] | None:
    if isinstance(value, BaseModel):
        return value.model_dump(by_alias=True)
    if isinstance(value, Mapping):
        return dict(value)
    return None


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _is_optional_str(value: Any) -> bool:
    return value is None or isinstance(value, str)


def _is_whole(value: int | float) -> bool:
    return isinstance(value, int) or value.is_integer()


# ---------------------------------------------------------------------------
# Field rules
# ---------------------------------------------------------------------------


def sanitize_phone_number(phone: Any) -> str:
    """Strip everything but digits; anything that is not a string gives ''."""
    if not phone or not isinstance(phone, str):
        return ""
    return _NON_DIGITS.sub("", phone)


def validate_customer_info(name: Any, phone: Any = None) -> ValidationResult:
    """Name is required (1-100 chars trimmed); phone is optional but needs a digit."""
    errors: list[str] = []

    if not name or not isinstance(name, str):
        errors.append("Customer name is required")
    else:
        trimmed_name = name.strip()
        if not trimmed_name:
            errors.append("Customer name is required")
        elif len(trimmed_name) > MAX_CUSTOMER_NAME_LENGTH:
            errors.append(f"Customer name must be {MAX_CUSTOMER_NAME_LENGTH} characters or less")

    if phone and isinstance(phone, str):
        if phone.strip() and not sanitize_phone_number(phone):
            errors.append("Phone number must contain at least one digit")

    return _result(errors)


def validate_price(price: Any) -> ValidationResult:
    """Validate a price in cents: whole number between 0 and 100000."""
    if not _is_number(price) or (isinstance(price, float) and math.isnan(price)):
        return _result(["Price must be a valid number"])

    errors: list[str] = []
    if not _is_whole(price):
        errors.append("Price must be a whole number (no fractional cents)")
    if price < MIN_PRICE_CENTS:
        errors.append("Price cannot be negative")
    if price > MAX_PRICE_CENTS:
        errors.append("Price must be between $0 and $1,000")
    return _result(errors)


def validate_date(value: Any) -> ValidationResult:
    """Validate a timestamp and keep it inside the 2020-2030 sanity window."""
    if isinstance(value, str):
        value = parse_iso_datetime(value)
    if not isinstance(value, datetime):
        return _result(["Order date is invalid"])

    errors: list[str] = []
    if not MIN_ORDER_YEAR <= value.year <= MAX_ORDER_YEAR:
        errors.append(f"Order date must be between {MIN_ORDER_YEAR} and {MAX_ORDER_YEAR}")
    return _result(errors)


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------


def is_valid_drink_category(value: Any) -> bool:
    return isinstance(value, str) and value in DRINK_CATEGORIES


def is_valid_drink_option_type(value: Any) -> bool:
    return isinstance(value, str) and value in DRINK_OPTION_TYPES


def is_valid_order_status(value: Any) -> bool:
    return isinstance(value, str) and value in ORDER_STATUSES


def is_valid_syrup_status(value: Any) -> bool:
    return isinstance(value, str) and value in SYRUP_STATUSES


# ---------------------------------------------------------------------------
# Structural guards
# ---------------------------------------------------------------------------


def validate_drink_option(option: Any) -> bool:
    """Return True when ``option`` is a well-formed drink option."""
    data = _as_mapping(option)
    if data is None:
        return False

    if not isinstance(data.get("id"), str) or not isinstance(data.get("name"), str):
        return False
    if not _is_number(data.get("additionalCost")):
        return False
    if not is_valid_drink_option_type(data.get("type")):
        return False
    if not isinstance(data.get("isAvailable"), bool):
        return False
    if not validate_price(data["additionalCost"]).success:
        return False
    return _is_optional_str(data.get("description"))


def validate_drink(drink: Any) -> bool:
    """Return True when ``drink`` and all of its options are well-formed."""
    data = _as_mapping(drink)
    if data is None:
        return False

    if not isinstance(data.get("id"), str) or not isinstance(data.get("name"), str):
        return False
    if not is_valid_drink_category(data.get("category")):
        return False
    if not _is_number(data.get("basePrice")):
        return False
    if not isinstance(data.get("options"), list):
        return False
    if not isinstance(data.get("isAvailable"), bool):
        return False
    if not validate_price(data["basePrice"]).success:
        return False
    if not all(validate_drink_option(option) for option in data["options"]):
        return False
    return _is_optional_str(data.get("description")) and _is_optional_str(data.get("imageUrl"))


def validate_order_item(item: Any) -> bool:
    """Return True when ``item`` is a well-formed order line."""
    data = _as_mapping(item)
    if data is None:
        return False

    for key in ("id", "drinkId", "drinkName"):
        if not isinstance(data.get(key), str):
            return False
    quantity = data.get("quantity")
    if not _is_number(quantity) or not isinstance(data.get("selectedOptions"), list):
        return False
    if not _is_number(data.get("totalPrice")):
        return False
    if not _is_whole(quantity) or quantity < 1:
        return False
    if not validate_price(data["totalPrice"]).success:
        return False
    if not all(validate_drink_option(option) for option in data["selectedOptions"]):
        return False
    return _is_optional_str(data.get("notes"))


def validate_order(order: Any) -> bool:
    """Return True when ``order`` is well-formed, non-empty and dated sanely."""
    data = _as_mapping(order)
    if data is None:
        return False

    if not isinstance(data.get("id"), str) or not isinstance(data.get("customerName"), str):
        return False
    items = data.get("items")
    if not isinstance(items, list) or not _is_number(data.get("totalAmount")):
        return False
    if not is_valid_order_status(data.get("status")):
        return False
    if not isinstance(data.get("createdAt"), datetime) or not isinstance(data.get("updatedAt"), datetime):
        return False

    phone = data.get("customerPhone")
    if not _is_optional_str(phone):
        return False
    if not validate_customer_info(data["customerName"], phone).success:
        return False

    if not items or not all(validate_order_item(item) for item in items):
        return False
    if not validate_price(data["totalAmount"]).success:
        return False
    if not validate_date(data["createdAt"]).success or not validate_date(data["updatedAt"]).success:
        return False

    if not _is_optional_str(data.get("assignedBarista")) or not _is_optional_str(data.get("notes")):
        return False
    estimated = data.get("estimatedCompletionTime")
    if estimated is not None:
        if not isinstance(estimated, datetime) or not validate_date(estimated).success:
            return False
    return True


def validate_syrup(syrup: Any) -> bool:
    """Return True when ``syrup`` is a well-formed syrup record."""
    data = _as_mapping(syrup)
    if data is None:
        return False

    if not isinstance(data.get("id"), str) or not isinstance(data.get("name"), str):
        return False
    if not data["name"].strip():
        return False
    if not is_valid_syrup_status(data.get("status")):
        return False
    created_at = data.get("createdAt")
    updated_at = data.get("updatedAt")
    return isinstance(created_at, datetime) and isinstance(updated_at, datetime)
