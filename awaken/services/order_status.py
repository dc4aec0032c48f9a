"""Order status transition helpers."""

from __future__ import annotations

from datetime import datetime

from awaken.schemas.order import Order, OrderStatus
from awaken.utils.time import utc_now

ALLOWED_TRANSITIONS: dict[OrderStatus, set[OrderStatus]] = {
    OrderStatus.PENDING: {OrderStatus.IN_PROGRESS, OrderStatus.CANCELLED},
    OrderStatus.IN_PROGRESS: {OrderStatus.READY, OrderStatus.CANCELLED},
    OrderStatus.READY: {OrderStatus.COMPLETED, OrderStatus.CANCELLED},
    OrderStatus.COMPLETED: set(),
    OrderStatus.CANCELLED: set(),
}

_FORWARD: dict[OrderStatus, OrderStatus] = {
    OrderStatus.PENDING: OrderStatus.IN_PROGRESS,
    OrderStatus.IN_PROGRESS: OrderStatus.READY,
    OrderStatus.READY: OrderStatus.COMPLETED,
}


def can_transition(current: OrderStatus | str, new: OrderStatus | str) -> bool:
    """Return whether order can move from current to new status."""
    try:
        current_status = OrderStatus(current)
        new_status = OrderStatus(new)
    except ValueError:
        return False
    return new_status in ALLOWED_TRANSITIONS[current_status]


def next_status(current: OrderStatus | str) -> OrderStatus | None:
    """Return the next forward status, or None for terminal states."""
    return _FORWARD.get(OrderStatus(current))


def set_status(order: Order, new_status: OrderStatus | str, now: datetime | None = None) -> Order:
    """Return a copy of ``order`` with the new status and a fresh ``updated_at``."""
    return order.model_copy(update={"status": OrderStatus(new_status), "updated_at": now or utc_now()})
