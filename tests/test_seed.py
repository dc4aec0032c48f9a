"""Database seed behavior tests."""

from pathlib import Path

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from awaken.db.seed import seed_initial_data
from awaken.db.seed_menu import build_default_drinks, build_default_settings
from awaken.db.session import init_db
from awaken.schemas.drink import DrinkCategory
from awaken.schemas.syrup import SyrupCreate
from awaken.services.migration_service import CURRENT_SCHEMA_VERSION
from awaken.services.storage_service import StorageService
from awaken.utils.validation import validate_drink


def _build_test_engine(db_file: Path) -> Engine:
    return create_engine(
        f"sqlite:///{db_file}",
        connect_args={"check_same_thread": False},
    )


def _build_storage(db_file: Path, *, create_tables: bool = True) -> StorageService:
    engine = _build_test_engine(db_file)
    if create_tables:
        init_db(engine)
    return StorageService(sessionmaker(autocommit=False, autoflush=False, bind=engine))


def test_default_menu_has_one_free_drink_per_category() -> None:
    drinks = build_default_drinks()

    assert {drink.category for drink in drinks} == set(DrinkCategory)
    assert all(drink.base_price == 0 for drink in drinks)
    assert all(validate_drink(drink) for drink in drinks)
    assert [option.id for option in drinks[0].options] == [
        "opt-mocha-size-small",
        "opt-mocha-size-medium",
        "opt-mocha-size-large",
        "opt-mocha-milk-whole",
        "opt-mocha-milk-almond",
        "opt-mocha-milk-oat",
    ]


def test_default_settings_are_at_current_schema_version() -> None:
    app_settings = build_default_settings()

    assert app_settings.schema_version == CURRENT_SCHEMA_VERSION
    assert app_settings.migration_history == []
    assert app_settings.user_preferences.font_size == "large"
    assert app_settings.cart_config.name == "Awaken Coffee Cart"


def test_seed_initial_data_fills_empty_store(tmp_path: Path) -> None:
    storage = _build_storage(tmp_path / "seed_empty.db")

    seed_initial_data(storage)

    assert len(storage.get_drinks()) == 6
    assert [syrup.name for syrup in storage.get_syrups()] == ["Vanilla", "Caramel", "Hazelnut"]
    assert storage.has_settings() is True
    assert storage.get_settings().schema_version == CURRENT_SCHEMA_VERSION


def test_seed_initial_data_is_repeatable_and_keeps_existing_data(tmp_path: Path) -> None:
    storage = _build_storage(tmp_path / "seed_existing.db")
    storage.add_syrup(SyrupCreate(name="Lavender"))

    seed_initial_data(storage)
    seed_initial_data(storage)

    assert len(storage.get_drinks()) == 6
    assert [syrup.name for syrup in storage.get_syrups()] == ["Lavender"]


def test_seed_initial_data_logs_storage_failure(tmp_path: Path, caplog) -> None:
    storage = _build_storage(tmp_path / "seed_broken.db", create_tables=False)

    seed_initial_data(storage)

    assert "[SEED] Seeding failed" in caplog.text
