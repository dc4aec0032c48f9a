"""Order schemas."""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import Field, PrivateAttr, field_validator

from awaken.schemas.base import StoredModel
from awaken.schemas.customization import Customization, decode_options
from awaken.schemas.drink import DrinkOption
from awaken.utils.time import ensure_aware


class OrderStatus(str, Enum):
    """Order lifecycle states."""

    PENDING = "pending"
    IN_PROGRESS = "in-progress"
    READY = "ready"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class OrderItem(StoredModel):
    """Snapshot of one ordered drink with the options chosen at order time."""

    id: str
    drink_id: str
    drink_name: str
    quantity: int = Field(ge=1)
    selected_options: list[DrinkOption] = Field(default_factory=list)
    total_price: int = Field(ge=0)
    notes: str | None = None

    _customizations: list[Customization] = PrivateAttr(default_factory=list)

    def model_post_init(self, __context: Any) -> None:
        self._customizations = decode_options(self.selected_options)

    @property
    def customizations(self) -> list[Customization]:
        """Customizations decoded from ``selected_options``."""
        return list(self._customizations)

    def first_customization(self, kind: str) -> Customization | None:
        """Return the first customization of ``kind``, if any."""
        for customization in self._customizations:
            if customization.kind == kind:
                return customization
        return None

    def has_customization(self, kind: str) -> bool:
        return self.first_customization(kind) is not None


class Order(StoredModel):
    """Customer order; history is append-only and only the status changes."""

    id: str
    customer_name: str
    customer_phone: str | None = None
    items: list[OrderItem] = Field(min_length=1)
    total_amount: int = Field(ge=0)
    status: OrderStatus = OrderStatus.PENDING
    created_at: datetime
    updated_at: datetime
    assigned_barista: str | None = None
    notes: str | None = None
    estimated_completion_time: datetime | None = None

    @field_validator("created_at", "updated_at", "estimated_completion_time")
    @classmethod
    def _timestamps_are_aware(cls, value: datetime | None) -> datetime | None:
        if value is None:
            return None
        return ensure_aware(value)
