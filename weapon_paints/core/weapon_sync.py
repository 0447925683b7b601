"""Loads and saves player customizations between the database and the slot caches."""

from __future__ import annotations

import asyncio
import logging
from typing import Dict, Optional

from weapon_paints.config import FeatureSettings
from weapon_paints.db.connection import Database
from weapon_paints.db.models import PlayerInfo, WeaponInfo
from weapon_paints.db.repositories import GloveRepository, KnifeRepository, SkinRepository
from weapon_paints.logging_setup import fmt_ctx, player_ctx

from .store import PlayerCustomizationStore

logger = logging.getLogger(__name__)


def _player_fields(player: Optional[PlayerInfo]) -> Dict[str, object]:
    if player is None:
        return {"steamid": None, "slot": None}
    return {"steamid": player.steamid, "slot": player.slot}


class WeaponSynchronization:
    """Bridges the durable steamid-keyed tables and the slot-keyed caches.

    Every public coroutine is a failure boundary: storage errors are logged once
    and swallowed, so callers observe a failed load exactly like a load that
    found nothing.
    """

    def __init__(
        self,
        database: Database,
        features: FeatureSettings,
        store: PlayerCustomizationStore,
    ):
        self._database = database
        self._features = features
        self._store = store

    @property
    def store(self) -> PlayerCustomizationStore:
        return self._store

    async def hydrate_knife(self, player: PlayerInfo) -> None:
        if not self._features.knife_enabled:
            return
        try:
            async with self._database.get_connection() as conn:
                row = await KnifeRepository.get(conn, player.steamid)
            if row is not None and row.knife:
                self._store.set_knife(player.slot, row.knife)
        except Exception as e:
            logger.error("Failed to load knife %s: %s", fmt_ctx(_player_fields(player)), e)

    async def hydrate_glove(self, player: PlayerInfo) -> None:
        if not self._features.glove_enabled:
            return
        try:
            async with self._database.get_connection() as conn:
                row = await GloveRepository.get(conn, player.steamid)
            # A missing row and a NULL defindex both leave the cached glove alone.
            if row is not None and row.weapon_defindex is not None:
                self._store.set_glove(player.slot, row.weapon_defindex)
        except Exception as e:
            logger.error("An error occurred while fetching glove data %s: %s", fmt_ctx(_player_fields(player)), e)

    async def hydrate_skins(self, player: Optional[PlayerInfo]) -> None:
        if not self._features.skin_enabled or player is None or not player.steamid:
            return
        try:
            async with self._database.get_connection() as conn:
                rows = await SkinRepository.get_all(conn, player.steamid)

            weapons: Dict[int, WeaponInfo] = {}
            for row in rows:
                weapons[row.weapon_defindex] = row.to_weapon_info()

            self._store.replace_weapons(player.slot, weapons)
            logger.debug("Loaded %d weapon skins %s", len(weapons), fmt_ctx(_player_fields(player)))
        except Exception as e:
            logger.error("Database error occurred while loading skins %s: %s", fmt_ctx(_player_fields(player)), e)

    async def persist_knife(self, player: Optional[PlayerInfo], knife: str) -> None:
        if not self._features.knife_enabled or player is None or not player.steamid or not knife:
            return
        try:
            async with self._database.get_connection() as conn:
                await KnifeRepository.upsert(conn, player.steamid, knife)
        except Exception as e:
            logger.error("Error syncing knife to database %s: %s", fmt_ctx(_player_fields(player)), e)

    async def persist_glove(self, player: Optional[PlayerInfo], defindex: int) -> None:
        if not self._features.glove_enabled or player is None or not player.steamid:
            return
        try:
            async with self._database.get_connection() as conn:
                await GloveRepository.upsert(conn, player.steamid, defindex)
        except Exception as e:
            logger.error("Error syncing glove to database %s: %s", fmt_ctx(_player_fields(player)), e)

    async def persist_all_skins(self, player: Optional[PlayerInfo]) -> None:
        if player is None or not player.steamid:
            return
        weapons = self._store.get_weapons(player.slot)
        if weapons is None:
            return

        written = 0
        try:
            async with self._database.get_connection() as conn:
                # Snapshot: equip handlers may touch the mapping while we are suspended.
                for defindex, info in list(weapons.items()):
                    await SkinRepository.upsert(
                        conn,
                        player.steamid,
                        defindex,
                        paint=info.paint,
                        wear=info.wear,
                        seed=info.seed,
                    )
                    written += 1
        except Exception as e:
            logger.error(
                "Error syncing weapon paints to database %s: %s",
                fmt_ctx({**_player_fields(player), "written": written}),
                e,
            )

    async def hydrate_player(self, player: Optional[PlayerInfo]) -> None:
        """Load every enabled customization for a player who just connected."""
        if player is None:
            return
        token = player_ctx.set(_player_fields(player))
        try:
            await asyncio.gather(
                self.hydrate_knife(player),
                self.hydrate_glove(player),
                self.hydrate_skins(player),
            )
        finally:
            player_ctx.reset(token)

    async def persist_player(self, player: Optional[PlayerInfo]) -> None:
        """Flush everything cached for the player's slot, typically on disconnect."""
        if player is None or not player.steamid:
            return
        token = player_ctx.set(_player_fields(player))
        try:
            knife = self._store.get_knife(player.slot)
            if knife:
                await self.persist_knife(player, knife)
            glove = self._store.get_glove(player.slot)
            if glove is not None:
                await self.persist_glove(player, glove)
            await self.persist_all_skins(player)
        finally:
            player_ctx.reset(token)
