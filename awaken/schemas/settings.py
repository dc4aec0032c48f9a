"""Persisted application settings schemas."""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import Field, field_validator

from awaken.schemas.base import StoredModel
from awaken.schemas.drink import Drink
from awaken.utils.time import ensure_aware

FontSize = Literal["small", "medium", "large", "extra-large"]
ThemeName = Literal["DEFAULT", "DARK", "HIGH_CONTRAST", "LARGE_TEXT"]


class UserPreferences(StoredModel):
    """Accessibility and session preferences."""

    font_size: FontSize = "large"
    high_contrast_mode: bool = False
    theme: ThemeName | None = None
    preferred_payment_method: str | None = None
    voice_announcements: bool = True
    haptic_feedback: bool = True
    is_admin_session: bool | None = None


class CoffeeCartConfig(StoredModel):
    """Operational configuration of the cart."""

    name: str
    is_open: bool = True
    menu: list[Drink] = Field(default_factory=list)
    default_prep_time: int = Field(default=5, ge=0)
    tax_rate_basis_points: int = Field(default=0, ge=0)
    currency_symbol: str = "$"


class MigrationRecord(StoredModel):
    """Write-once audit entry for one attempted schema migration step."""

    from_version: int
    to_version: int
    timestamp: datetime
    success: bool
    error: str | None = None

    @field_validator("timestamp")
    @classmethod
    def _timestamp_is_aware(cls, value: datetime) -> datetime:
        return ensure_aware(value)


class AppSettings(StoredModel):
    """User preferences plus cart configuration, versioned for migrations."""

    user_preferences: UserPreferences = Field(default_factory=UserPreferences)
    cart_config: CoffeeCartConfig
    version: str
    last_updated: datetime | None = None
    schema_version: int | None = None
    migration_history: list[MigrationRecord] | None = None

    @field_validator("last_updated")
    @classmethod
    def _last_updated_is_aware(cls, value: datetime | None) -> datetime | None:
        if value is None:
            return None
        return ensure_aware(value)

    @property
    def effective_schema_version(self) -> int:
        """Stored schema version; a missing value means version 1."""
        return self.schema_version if self.schema_version is not None else 1
