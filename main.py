import asyncio
import logging

from weapon_paints.config import get_settings
from weapon_paints.core import PlayerCustomizationStore, WeaponSynchronization
from weapon_paints.db.connection import Database
from weapon_paints.logging_setup import configure_logging


async def main():
    """Prepare the storage and the sync service for the game host."""
    settings = get_settings()

    configure_logging(settings.log_level_value)
    logger = logging.getLogger(__name__)

    database = Database.from_settings(settings.db)
    await database.initialize()

    store = PlayerCustomizationStore()
    sync = WeaponSynchronization(database, settings.features, store)

    logger.info(
        "Customization sync ready (knife=%s glove=%s skin=%s db=%s)",
        settings.features.knife_enabled,
        settings.features.glove_enabled,
        settings.features.skin_enabled,
        settings.db.path,
    )
    # The host registers sync.hydrate_player on join and
    # sync.persist_player followed by store.clear_slot on leave.
    try:
        await asyncio.Event().wait()
    finally:
        await database.close()


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except (KeyboardInterrupt, SystemExit):
        logging.info("Customization sync stopped.")
