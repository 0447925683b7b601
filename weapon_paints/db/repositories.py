"""SQLite repositories for the customization tables using aiosqlite."""

from __future__ import annotations

from typing import List, Optional

import aiosqlite

from .models import GloveRow, KnifeRow, SkinRow


class KnifeRepository:
    """Access to ``wp_player_knife``."""

    @staticmethod
    async def get(conn: aiosqlite.Connection, steamid: str) -> Optional[KnifeRow]:
        cursor = await conn.execute(
            "SELECT knife FROM wp_player_knife WHERE steamid = ?",
            (steamid,),
        )
        row = await cursor.fetchone()
        if row:
            return KnifeRow(**dict(row))
        return None

    @staticmethod
    async def upsert(conn: aiosqlite.Connection, steamid: str, knife: str) -> None:
        await conn.execute(
            """
            INSERT INTO wp_player_knife (steamid, knife)
            VALUES (?, ?)
            ON CONFLICT(steamid) DO UPDATE SET knife = excluded.knife
            """,
            (steamid, knife),
        )
        await conn.commit()


class GloveRepository:
    """Access to ``wp_player_gloves``."""

    @staticmethod
    async def get(conn: aiosqlite.Connection, steamid: str) -> Optional[GloveRow]:
        cursor = await conn.execute(
            "SELECT weapon_defindex FROM wp_player_gloves WHERE steamid = ?",
            (steamid,),
        )
        row = await cursor.fetchone()
        if row:
            return GloveRow(**dict(row))
        return None

    @staticmethod
    async def upsert(conn: aiosqlite.Connection, steamid: str, defindex: int) -> None:
        await conn.execute(
            """
            INSERT INTO wp_player_gloves (steamid, weapon_defindex)
            VALUES (?, ?)
            ON CONFLICT(steamid) DO UPDATE SET weapon_defindex = excluded.weapon_defindex
            """,
            (steamid, defindex),
        )
        await conn.commit()


class SkinRepository:
    """Access to ``wp_player_skins``, one row per (steamid, weapon_defindex)."""

    @staticmethod
    async def get_all(conn: aiosqlite.Connection, steamid: str) -> List[SkinRow]:
        cursor = await conn.execute(
            """
            SELECT weapon_defindex, weapon_paint_id, weapon_wear, weapon_seed
            FROM wp_player_skins
            WHERE steamid = ?
            """,
            (steamid,),
        )
        rows = await cursor.fetchall()
        return [SkinRow(**dict(row)) for row in rows]

    @staticmethod
    async def upsert(
        conn: aiosqlite.Connection,
        steamid: str,
        defindex: int,
        *,
        paint: int,
        wear: float,
        seed: int,
    ) -> None:
        await conn.execute(
            """
            INSERT INTO wp_player_skins (steamid, weapon_defindex, weapon_paint_id, weapon_wear, weapon_seed)
            VALUES (?, ?, ?, ?, ?)
            ON CONFLICT(steamid, weapon_defindex) DO UPDATE SET
                weapon_paint_id = excluded.weapon_paint_id,
                weapon_wear     = excluded.weapon_wear,
                weapon_seed     = excluded.weapon_seed
            """,
            (steamid, defindex, paint, wear, seed),
        )
        await conn.commit()
