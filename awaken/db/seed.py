"""Database seeding helpers."""

import logging

from awaken.db.seed_menu import DEFAULT_SYRUP_NAMES, build_default_drinks, build_default_settings
from awaken.schemas.syrup import SyrupCreate
from awaken.services.storage_service import StorageError, StorageService
from awaken.utils.validation import validate_drink

logger = logging.getLogger(__name__)


def seed_initial_data(storage: StorageService) -> None:
    """Seed drinks, syrups and settings that are missing; never overwrite data."""
    try:
        if not storage.get_drinks():
            drinks = []
            for drink in build_default_drinks():
                if validate_drink(drink):
                    drinks.append(drink)
                else:
                    logger.warning("[SEED] Invalid drink in seed data: %s", drink.id)
            storage.save_drinks(drinks)
            logger.info("[SEED] Seeded %s drinks", len(drinks))

        if not storage.get_syrups():
            for name in DEFAULT_SYRUP_NAMES:
                storage.add_syrup(SyrupCreate(name=name))
            logger.info("[SEED] Seeded %s syrups", len(DEFAULT_SYRUP_NAMES))

        if not storage.has_settings():
            storage.save_settings(build_default_settings())
            logger.info("[SEED] Settings seeded")
    except StorageError:
        logger.exception("[SEED] Seeding failed; continuing with whatever is stored.")
