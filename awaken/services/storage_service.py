"""Key-value persistence for drinks, orders, syrups and settings.

Every collection is stored as one JSON document in the ``storage_entries``
table. Reads never raise: a missing key, a store failure or undecodable JSON
is logged and the caller gets a safe default. Writes raise ``StorageError``
so callers can log and continue.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable, Sequence
from datetime import datetime
from typing import Any, TypeVar
from uuid import uuid4

from pydantic import BaseModel, ValidationError
from sqlalchemy import delete
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from awaken.db.seed_menu import build_default_settings
from awaken.models.storage_entry import StorageEntry
from awaken.schemas.drink import Drink
from awaken.schemas.order import Order
from awaken.schemas.settings import AppSettings
from awaken.schemas.syrup import Syrup, SyrupCreate, SyrupStatus
from awaken.services.migration_service import MigrationResult, migrate_settings
from awaken.utils.time import parse_iso_datetime, utc_now
from awaken.utils.validation import validate_drink, validate_order

logger = logging.getLogger(__name__)

DRINKS_KEY: str = "@app:drinks"
ORDERS_KEY: str = "@app:orders"
SETTINGS_KEY: str = "@app:settings"
SYRUPS_KEY: str = "@app:syrups"
SETTING_KEY_PREFIX: str = "@app:setting:"

DATE_KEYS: frozenset[str] = frozenset(
    {"createdAt", "updatedAt", "estimatedCompletionTime", "lastUpdated", "timestamp"}
)

ModelT = TypeVar("ModelT", bound=BaseModel)


class StorageError(Exception):
    """Raised when a value cannot be serialized or written to the store."""


class SyrupNameError(ValueError):
    """Raised when a syrup name is blank or already taken."""


def _revive_dates(obj: dict[str, Any]) -> dict[str, Any]:
    """JSON object hook turning ISO strings under known date keys into datetimes."""
    for key in DATE_KEYS.intersection(obj):
        value = obj[key]
        if isinstance(value, str):
            parsed = parse_iso_datetime(value)
            if parsed is not None:
                obj[key] = parsed
    return obj


def _to_json_ready(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json", by_alias=True, exclude_none=True)
    if isinstance(value, (list, tuple)):
        return [_to_json_ready(item) for item in value]
    return value


def _json_default(value: Any) -> Any:
    if isinstance(value, datetime):
        return value.isoformat()
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def _repeats_last_failure(stored: dict[str, Any], result: MigrationResult) -> bool:
    """True when a migration run only failed again the way the stored history already records."""
    if result.applied or not result.errors:
        return False
    history = stored.get("migrationHistory")
    if not isinstance(history, list) or not history or not isinstance(history[-1], dict):
        return False
    last = history[-1]
    return (
        last.get("success") is False
        and last.get("fromVersion") == result.to_version
        and last.get("error") == result.errors[-1]
    )


class StorageService:
    """Typed access to the namespaced collections of the embedded store."""

    def __init__(self, session_factory: Callable[[], Session]) -> None:
        self._session_factory = session_factory

    # -- raw access -------------------------------------------------------

    def _read_raw(self, key: str) -> Any | None:
        """Return the decoded value under ``key``; None if absent. May raise."""
        with self._session_factory() as session:
            entry: StorageEntry | None = session.get(StorageEntry, key)
            if entry is None:
                return None
            return json.loads(entry.value, object_hook=_revive_dates)

    def _read(self, key: str) -> Any | None:
        try:
            return self._read_raw(key)
        except (SQLAlchemyError, ValueError):
            logger.exception("[STORAGE] Failed to read %s", key)
            return None

    def _write(self, key: str, value: Any) -> None:
        try:
            payload = json.dumps(_to_json_ready(value), default=_json_default)
        except (TypeError, ValueError) as exc:
            raise StorageError(f"Cannot serialize value for {key}: {exc}") from exc

        try:
            with self._session_factory() as session:
                entry: StorageEntry | None = session.get(StorageEntry, key)
                if entry is None:
                    session.add(StorageEntry(key=key, value=payload))
                else:
                    entry.value = payload
                session.commit()
        except SQLAlchemyError as exc:
            logger.exception("[STORAGE] Failed to write %s", key)
            raise StorageError(f"Cannot write {key}: {exc}") from exc

    def _read_collection(self, key: str, model: type[ModelT]) -> list[ModelT]:
        raw = self._read(key)
        if raw is None:
            return []
        if not isinstance(raw, list):
            logger.warning("[STORAGE] Expected a list under %s, got %s", key, type(raw).__name__)
            return []

        records: list[ModelT] = []
        for index, item in enumerate(raw):
            try:
                records.append(model.model_validate(item))
            except ValidationError as exc:
                logger.warning("[STORAGE] Skipping malformed record %s[%s]: %s", key, index, exc.errors()[:1])
        return records

    def read_raw_collection(self, key: str) -> list[Any]:
        """Return the undecoded records of a collection, for cleanup passes."""
        raw = self._read(key)
        return raw if isinstance(raw, list) else []

    def write_raw_collection(self, key: str, records: Sequence[Any]) -> None:
        self._write(key, list(records))

    # -- drinks -----------------------------------------------------------

    def get_drinks(self) -> list[Drink]:
        return self._read_collection(DRINKS_KEY, Drink)

    def save_drinks(self, drinks: Sequence[Drink]) -> None:
        self._write(DRINKS_KEY, list(drinks))

    # -- orders -----------------------------------------------------------

    def get_orders(self) -> list[Order]:
        return self._read_collection(ORDERS_KEY, Order)

    def save_orders(self, orders: Sequence[Order]) -> None:
        self._write(ORDERS_KEY, list(orders))

    def add_order(self, order: Order) -> None:
        """Append one order to the history, leaving every stored record as it is."""
        records = self.read_raw_collection(ORDERS_KEY)
        records.append(order)
        self._write(ORDERS_KEY, records)

    def replace_order(self, order: Order) -> bool:
        """Overwrite the stored record with ``order.id``; other records stay untouched."""
        records = self.read_raw_collection(ORDERS_KEY)
        for index, record in enumerate(records):
            if isinstance(record, dict) and record.get("id") == order.id:
                records[index] = order
                self._write(ORDERS_KEY, records)
                return True

        logger.warning("[STORAGE] Cannot replace unknown order %s", order.id)
        return False

    # -- syrups -----------------------------------------------------------

    def get_syrups(self) -> list[Syrup]:
        return self._read_collection(SYRUPS_KEY, Syrup)

    def save_syrups(self, syrups: Sequence[Syrup]) -> None:
        self._write(SYRUPS_KEY, list(syrups))

    def add_syrup(self, payload: SyrupCreate, *, now: datetime | None = None) -> Syrup:
        """Create a syrup; names must be non-blank and unique ignoring case."""
        name = payload.name.strip()
        if not name:
            raise SyrupNameError("Syrup name is required")

        syrups = self.get_syrups()
        if any(existing.name.strip().lower() == name.lower() for existing in syrups):
            raise SyrupNameError(f'A syrup named "{name}" already exists')

        timestamp = now or utc_now()
        syrup = Syrup(
            id=f"syrup-{uuid4().hex[:12]}",
            name=name,
            status=payload.status,
            created_at=timestamp,
            updated_at=timestamp,
        )
        syrups.append(syrup)
        self.save_syrups(syrups)
        return syrup

    def update_syrup_status(
        self,
        syrup_id: str,
        status: SyrupStatus,
        *,
        now: datetime | None = None,
    ) -> Syrup | None:
        syrups = self.get_syrups()
        for index, syrup in enumerate(syrups):
            if syrup.id == syrup_id:
                updated = syrup.model_copy(update={"status": SyrupStatus(status), "updated_at": now or utc_now()})
                syrups[index] = updated
                self.save_syrups(syrups)
                return updated

        logger.warning("[STORAGE] Cannot update status of unknown syrup %s", syrup_id)
        return None

    def delete_syrup(self, syrup_id: str) -> bool:
        """Remove a syrup from inventory; historical orders keep their snapshots."""
        syrups = self.get_syrups()
        remaining = [syrup for syrup in syrups if syrup.id != syrup_id]
        if len(remaining) == len(syrups):
            logger.warning("[STORAGE] Cannot delete unknown syrup %s", syrup_id)
            return False
        self.save_syrups(remaining)
        return True

    # -- settings ---------------------------------------------------------

    def has_settings(self) -> bool:
        return self._read(SETTINGS_KEY) is not None

    def get_settings(self) -> AppSettings:
        """Return stored settings upgraded to the current schema, or defaults."""
        raw = self._read(SETTINGS_KEY)
        if not isinstance(raw, dict):
            if raw is not None:
                logger.warning("[STORAGE] Ignoring settings of type %s", type(raw).__name__)
            return build_default_settings()

        result = migrate_settings(raw)
        blob = result.settings
        if _repeats_last_failure(raw, result):
            blob = raw
        elif result.changed:
            try:
                self._write(SETTINGS_KEY, blob)
            except StorageError:
                logger.warning("[STORAGE] Migrated settings could not be persisted; using them in memory.")

        try:
            return AppSettings.model_validate(blob)
        except ValidationError:
            logger.exception("[STORAGE] Stored settings are malformed; using defaults.")
            return build_default_settings()

    def save_settings(self, app_settings: AppSettings, *, now: datetime | None = None) -> AppSettings:
        """Persist settings, stamping ``last_updated``."""
        stamped = app_settings.model_copy(update={"last_updated": now or utc_now()})
        self._write(SETTINGS_KEY, stamped)
        return stamped

    # -- free-form settings ----------------------------------------------

    def get_setting(self, name: str) -> str | None:
        value = self._read(f"{SETTING_KEY_PREFIX}{name}")
        if value is None:
            return None
        return value if isinstance(value, str) else str(value)

    def save_setting(self, name: str, value: str) -> None:
        self._write(f"{SETTING_KEY_PREFIX}{name}", value)

    # -- maintenance ------------------------------------------------------

    def clear_all_data(self) -> None:
        """Remove every collection and free-form setting."""
        try:
            with self._session_factory() as session:
                session.execute(delete(StorageEntry).where(StorageEntry.key.like("@app:%")))
                session.commit()
        except SQLAlchemyError as exc:
            logger.exception("[STORAGE] Failed to clear storage")
            raise StorageError(f"Cannot clear storage: {exc}") from exc


def _prune_invalid(storage: StorageService, key: str, guard: Callable[[Any], bool]) -> int:
    records = storage.read_raw_collection(key)
    valid: list[Any] = []
    for record in records:
        if guard(record):
            valid.append(record)
            continue
        record_id = record.get("id", "unknown") if isinstance(record, dict) else "unknown"
        logger.warning("[STORAGE] Removing invalid record %s from %s", record_id, key)

    removed = len(records) - len(valid)
    if removed:
        storage.write_raw_collection(key, valid)
    return removed


def validate_stored_data(storage: StorageService) -> tuple[int, int]:
    """Drop stored drinks and orders that fail validation.

    Returns the number of removed drinks and removed orders.
    """
    removed_drinks = _prune_invalid(storage, DRINKS_KEY, validate_drink)
    removed_orders = _prune_invalid(storage, ORDERS_KEY, validate_order)
    logger.info("[STORAGE] Stored data validated: removed %s drinks, %s orders", removed_drinks, removed_orders)
    return removed_drinks, removed_orders
