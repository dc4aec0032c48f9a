"""Schema migrations for the persisted settings blob.

Settings are stored as one JSON object carrying ``schemaVersion`` (absent means
version 1) and an append-only ``migrationHistory``. Upgrades run one version
at a time; each step is a pure function over a deep copy of the blob. A failing
step is recorded in the history and stops the chain, leaving the blob as it
was after the last successful step.
"""

from __future__ import annotations

import copy
import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from awaken.schemas.settings import MigrationRecord
from awaken.utils.time import utc_now

logger = logging.getLogger(__name__)

SettingsBlob = dict[str, Any]

CURRENT_SCHEMA_VERSION: int = 3
DEFAULT_SCHEMA_VERSION: int = 1


@dataclass(frozen=True)
class Migration:
    """One upgrade step from ``from_version`` to ``to_version``."""

    from_version: int
    to_version: int
    name: str
    apply: Callable[[SettingsBlob], SettingsBlob]


@dataclass
class MigrationResult:
    """Settings after migration plus a summary of what ran."""

    settings: SettingsBlob
    from_version: int
    to_version: int
    success: bool = True
    applied: list[str] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)

    @property
    def changed(self) -> bool:
        """True when at least one step ran or failed and history grew."""
        return bool(self.applied or self.errors)


def _derive_theme(blob: SettingsBlob) -> SettingsBlob:
    preferences = dict(blob.get("userPreferences") or {})
    if preferences.get("theme") is None:
        preferences["theme"] = "HIGH_CONTRAST" if preferences.get("highContrastMode") else "DEFAULT"
    preferences.setdefault("isAdminSession", False)
    blob["userPreferences"] = preferences
    return blob


def _tax_rate_to_basis_points(blob: SettingsBlob) -> SettingsBlob:
    cart_config = dict(blob.get("cartConfig") or {})
    rate = cart_config.pop("taxRate", None)
    if "taxRateBasisPoints" not in cart_config:
        if rate is not None and not isinstance(rate, (int, float)):
            raise ValueError(f"taxRate must be numeric, got {rate!r}")
        cart_config["taxRateBasisPoints"] = round((rate or 0) * 10_000)
    blob["cartConfig"] = cart_config
    return blob


MIGRATIONS: list[Migration] = [
    Migration(from_version=1, to_version=2, name="derive-theme", apply=_derive_theme),
    Migration(from_version=2, to_version=3, name="tax-rate-basis-points", apply=_tax_rate_to_basis_points),
]


def stored_schema_version(blob: SettingsBlob) -> int:
    """Return the blob's schema version, treating a missing value as version 1."""
    version = blob.get("schemaVersion")
    if isinstance(version, int) and not isinstance(version, bool):
        return version
    return DEFAULT_SCHEMA_VERSION


def _record(from_version: int, to_version: int, now: datetime, error: str | None = None) -> dict[str, Any]:
    return MigrationRecord(
        from_version=from_version,
        to_version=to_version,
        timestamp=now,
        success=error is None,
        error=error,
    ).to_storage()


def _with_record(blob: SettingsBlob, record: dict[str, Any]) -> SettingsBlob:
    history = list(blob.get("migrationHistory") or [])
    history.append(record)
    blob["migrationHistory"] = history
    return blob


def migration_path(
    from_version: int,
    target_version: int,
    migrations: Sequence[Migration] = MIGRATIONS,
) -> list[Migration]:
    """Return the registered steps between two versions, in ascending order."""
    return sorted(
        (m for m in migrations if m.from_version >= from_version and m.to_version <= target_version),
        key=lambda m: m.from_version,
    )


def migrate_settings(
    blob: SettingsBlob,
    *,
    migrations: Sequence[Migration] = MIGRATIONS,
    target_version: int = CURRENT_SCHEMA_VERSION,
    now: Callable[[], datetime] = utc_now,
) -> MigrationResult:
    """Upgrade a raw settings blob to ``target_version`` one step at a time."""
    start_version = stored_schema_version(blob)
    current: SettingsBlob = copy.deepcopy(blob)
    result = MigrationResult(settings=current, from_version=start_version, to_version=start_version)

    if start_version >= target_version:
        if start_version > target_version:
            logger.warning(
                "[MIGRATION] Stored schema v%s is newer than target v%s; leaving settings untouched.",
                start_version,
                target_version,
            )
        return result

    steps = {m.from_version: m for m in migration_path(start_version, target_version, migrations)}
    version = start_version
    while version < target_version:
        step = steps.get(version)
        if step is None:
            error = f"No migration registered from v{version}"
        else:
            try:
                candidate = step.apply(copy.deepcopy(current))
                if not isinstance(candidate, dict):
                    raise TypeError(f"migration {step.name} returned {type(candidate).__name__}")
            except Exception as exc:
                error = f"Migration failed: {step.name} - {exc}"
                logger.exception("[MIGRATION] %s", error)
            else:
                candidate["schemaVersion"] = step.to_version
                current = _with_record(candidate, _record(version, step.to_version, now()))
                result.applied.append(step.name)
                logger.info("[MIGRATION] Applied %s (v%s -> v%s)", step.name, version, step.to_version)
                version = step.to_version
                continue

        failed_to = step.to_version if step is not None else version + 1
        current = _with_record(current, _record(version, failed_to, now(), error=error))
        result.errors.append(error)
        result.success = False
        if step is None:
            logger.error("[MIGRATION] %s", error)
        break

    result.settings = current
    result.to_version = version
    return result
