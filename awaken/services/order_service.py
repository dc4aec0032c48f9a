"""Order domain logic: cart totals, order creation and status updates."""

from __future__ import annotations

import logging
import random
from collections.abc import Sequence
from datetime import datetime, timedelta
from uuid import uuid4

from awaken.core.config import settings
from awaken.schemas.cart import CartLine
from awaken.schemas.customization import SizeChoice
from awaken.schemas.drink import DrinkOption
from awaken.schemas.order import Order, OrderItem, OrderStatus
from awaken.services.order_status import can_transition, set_status
from awaken.services.storage_service import StorageError, StorageService
from awaken.utils.time import utc_now
from awaken.utils.validation import validate_customer_info

logger = logging.getLogger(__name__)

BASIS_POINTS_DENOMINATOR: int = 10_000


class OrderValidationError(Exception):
    """Raised when an order cannot be built from the cart and customer details."""

    def __init__(self, errors: list[str]) -> None:
        super().__init__("; ".join(errors))
        self.errors = errors


class OrderNotFoundError(Exception):
    """Raised when no stored order has the requested id."""


class InvalidStatusTransitionError(Exception):
    """Raised when the requested status change is not allowed."""


def calculate_subtotal(lines: Sequence[CartLine]) -> int:
    return sum(line.total_price for line in lines)


def calculate_tax(subtotal: int, tax_rate_basis_points: int | None = None) -> int:
    """Return tax in cents, rounding half up."""
    rate = settings.tax_rate_basis_points if tax_rate_basis_points is None else tax_rate_basis_points
    return (subtotal * rate + BASIS_POINTS_DENOMINATOR // 2) // BASIS_POINTS_DENOMINATOR


def calculate_total(lines: Sequence[CartLine], tax_rate_basis_points: int | None = None) -> int:
    subtotal = calculate_subtotal(lines)
    return subtotal + calculate_tax(subtotal, tax_rate_basis_points)


def build_selected_options(line: CartLine) -> list[DrinkOption]:
    """Snapshot the size and every customization of a cart line as options."""
    options = [SizeChoice(size=line.size).to_option()]
    options.extend(customization.to_option() for customization in line.customizations)
    return options


def build_order_item(line: CartLine) -> OrderItem:
    return OrderItem(
        id=line.id,
        drink_id=line.drink_id,
        drink_name=line.drink_name,
        quantity=line.quantity,
        selected_options=build_selected_options(line),
        total_price=line.total_price,
    )


def create_order(
    storage: StorageService,
    lines: Sequence[CartLine],
    *,
    customer_name: str,
    customer_phone: str | None = None,
    now: datetime | None = None,
    barista: str | None = None,
) -> Order:
    """Build a pending order from the cart and append it to the history.

    A failed write is logged and the order is still returned.
    """
    errors: list[str] = []
    if not lines:
        errors.append("Cart is empty")
    elif sum(line.quantity for line in lines) > settings.max_items_per_order:
        errors.append(f"Orders are limited to {settings.max_items_per_order} drinks")
    errors.extend(validate_customer_info(customer_name, customer_phone).errors)
    if errors:
        raise OrderValidationError(errors)

    created_at = now or utc_now()
    phone = customer_phone.strip() if customer_phone else None
    order = Order(
        id=f"order-{uuid4().hex[:12]}",
        customer_name=customer_name.strip(),
        customer_phone=phone or None,
        items=[build_order_item(line) for line in lines],
        total_amount=calculate_total(lines),
        status=OrderStatus.PENDING,
        created_at=created_at,
        updated_at=created_at,
        assigned_barista=barista or (random.choice(settings.baristas) if settings.baristas else None),
        estimated_completion_time=created_at + timedelta(minutes=settings.default_prep_time_minutes),
    )

    try:
        storage.add_order(order)
    except StorageError:
        logger.exception("[ORDERS] Failed to save order %s", order.id)
    else:
        logger.info("[ORDERS] Created order %s for %s", order.id, order.customer_name)
    return order


def update_order_status(
    storage: StorageService,
    order_id: str,
    status: OrderStatus | str,
    *,
    now: datetime | None = None,
) -> Order:
    """Move a stored order to ``status`` and persist the history."""
    for order in storage.get_orders():
        if order.id != order_id:
            continue
        if not can_transition(order.status, status):
            target = status.value if isinstance(status, OrderStatus) else status
            raise InvalidStatusTransitionError(f"Cannot move order {order_id} from {order.status.value} to {target}")
        updated = set_status(order, status, now)
        storage.replace_order(updated)
        logger.info("[ORDERS] Order %s is now %s", order_id, updated.status.value)
        return updated

    raise OrderNotFoundError(f"Order {order_id} not found")
