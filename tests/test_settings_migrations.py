"""Settings schema migration tests."""

import copy
from datetime import datetime, timezone

from awaken.services.migration_service import (
    CURRENT_SCHEMA_VERSION,
    Migration,
    migrate_settings,
    migration_path,
    stored_schema_version,
)

FIXED_NOW = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)


def _fixed_now() -> datetime:
    return FIXED_NOW


def _v1_blob() -> dict:
    return {
        "userPreferences": {"fontSize": "large", "highContrastMode": False},
        "cartConfig": {"name": "Awaken Coffee Cart", "taxRate": 0.0875},
        "version": "1.0.0",
    }


def _bump(key: str):
    def apply(blob: dict) -> dict:
        blob[key] = True
        return blob

    return apply


def _explode(blob: dict) -> dict:
    blob["halfWritten"] = True
    raise RuntimeError("kaboom")


def test_missing_schema_version_is_version_one() -> None:
    assert stored_schema_version({}) == 1
    assert stored_schema_version({"schemaVersion": 2}) == 2
    assert stored_schema_version({"schemaVersion": "2"}) == 1


def test_migrates_v1_blob_to_current_version() -> None:
    blob = _v1_blob()
    original = copy.deepcopy(blob)

    result = migrate_settings(blob, now=_fixed_now)

    assert result.success is True
    assert result.from_version == 1
    assert result.to_version == CURRENT_SCHEMA_VERSION
    assert result.applied == ["derive-theme", "tax-rate-basis-points"]
    assert result.settings["schemaVersion"] == CURRENT_SCHEMA_VERSION
    assert result.settings["userPreferences"]["theme"] == "DEFAULT"
    assert result.settings["userPreferences"]["isAdminSession"] is False
    assert result.settings["cartConfig"]["taxRateBasisPoints"] == 875
    assert "taxRate" not in result.settings["cartConfig"]
    assert result.settings["migrationHistory"] == [
        {"fromVersion": 1, "toVersion": 2, "timestamp": "2026-10-19T12:00:00Z", "success": True},
        {"fromVersion": 2, "toVersion": 3, "timestamp": "2026-10-19T12:00:00Z", "success": True},
    ]
    assert blob == original


def test_migrating_twice_changes_nothing() -> None:
    first = migrate_settings(_v1_blob(), now=_fixed_now)

    second = migrate_settings(first.settings, now=_fixed_now)

    assert second.changed is False
    assert second.settings == first.settings
    assert len(second.settings["migrationHistory"]) == 2


def test_existing_theme_is_kept() -> None:
    blob = _v1_blob()
    blob["userPreferences"]["theme"] = "DARK"
    blob["userPreferences"]["highContrastMode"] = True

    result = migrate_settings(blob, now=_fixed_now)

    assert result.settings["userPreferences"]["theme"] == "DARK"


def test_failed_step_stops_chain_and_keeps_last_good_version() -> None:
    migrations = [
        Migration(from_version=3, to_version=4, name="third", apply=_bump("third")),
        Migration(from_version=1, to_version=2, name="first", apply=_bump("first")),
        Migration(from_version=2, to_version=3, name="boom", apply=_explode),
    ]

    result = migrate_settings({"version": "1.0.0"}, migrations=migrations, target_version=4, now=_fixed_now)

    assert result.success is False
    assert result.to_version == 2
    assert result.applied == ["first"]
    assert result.errors == ["Migration failed: boom - kaboom"]
    assert result.settings["schemaVersion"] == 2
    assert result.settings["first"] is True
    assert "halfWritten" not in result.settings
    assert "third" not in result.settings
    history = result.settings["migrationHistory"]
    assert [(r["fromVersion"], r["toVersion"], r["success"]) for r in history] == [(1, 2, True), (2, 3, False)]
    assert history[1]["error"] == "Migration failed: boom - kaboom"


def test_missing_step_is_recorded_as_failure() -> None:
    migrations = [Migration(from_version=1, to_version=2, name="first", apply=_bump("first"))]

    result = migrate_settings({}, migrations=migrations, target_version=3, now=_fixed_now)

    assert result.success is False
    assert result.to_version == 2
    assert result.errors == ["No migration registered from v2"]
    assert result.settings["migrationHistory"][-1]["success"] is False


def test_non_numeric_tax_rate_aborts_at_version_two() -> None:
    blob = _v1_blob()
    blob["cartConfig"]["taxRate"] = "eight percent"

    result = migrate_settings(blob, now=_fixed_now)

    assert result.success is False
    assert result.settings["schemaVersion"] == 2
    assert result.settings["cartConfig"]["taxRate"] == "eight percent"
    assert result.errors[0].startswith("Migration failed: tax-rate-basis-points - ")


def test_newer_schema_is_left_untouched() -> None:
    blob = {"version": "9.0.0", "schemaVersion": CURRENT_SCHEMA_VERSION + 1}

    result = migrate_settings(blob, now=_fixed_now)

    assert result.changed is False
    assert result.settings == blob


def test_migration_path_is_sorted_and_bounded() -> None:
    migrations = [
        Migration(from_version=2, to_version=3, name="b", apply=_bump("b")),
        Migration(from_version=1, to_version=2, name="a", apply=_bump("a")),
        Migration(from_version=3, to_version=4, name="c", apply=_bump("c")),
    ]

    assert [m.name for m in migration_path(1, 3, migrations)] == ["a", "b"]
    assert [m.name for m in migration_path(2, 4, migrations)] == ["b", "c"]
