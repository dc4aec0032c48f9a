"""Syrup inventory schemas."""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, field_validator

from awaken.schemas.base import StoredModel
from awaken.utils.time import ensure_aware


class SyrupStatus(str, Enum):
    """Whether a syrup can currently be ordered."""

    AVAILABLE = "available"
    SOLD_OUT = "soldOut"


class SyrupCreate(BaseModel):
    """Payload for adding a syrup."""

    name: str
    status: SyrupStatus = SyrupStatus.AVAILABLE


class Syrup(StoredModel):
    """Admin-managed syrup flavor."""

    id: str
    name: str
    status: SyrupStatus = SyrupStatus.AVAILABLE
    created_at: datetime
    updated_at: datetime

    @field_validator("created_at", "updated_at")
    @classmethod
    def _timestamps_are_aware(cls, value: datetime) -> datetime:
        return ensure_aware(value)
