"""In-memory customization tables shared by the sync service and the game host."""

from __future__ import annotations

from typing import Dict, Optional

from weapon_paints.db.models import WeaponInfo

WeaponMap = Dict[int, WeaponInfo]


class PlayerCustomizationStore:
    """Slot-keyed caches of knife, glove and weapon skin selections.

    One instance lives for the whole server process. Entries are last-writer-wins
    and are only dropped by :meth:`clear_slot`; a new occupant of a slot sees the
    previous occupant's data until its own hydration runs.
    """

    def __init__(self) -> None:
        self.knives: Dict[int, str] = {}
        self.gloves: Dict[int, int] = {}
        self.weapons: Dict[int, WeaponMap] = {}

    def get_knife(self, slot: int) -> Optional[str]:
        return self.knives.get(slot)

    def set_knife(self, slot: int, knife: str) -> None:
        self.knives[slot] = knife

    def get_glove(self, slot: int) -> Optional[int]:
        return self.gloves.get(slot)

    def set_glove(self, slot: int, defindex: int) -> None:
        self.gloves[slot] = defindex

    def get_weapons(self, slot: int) -> Optional[WeaponMap]:
        return self.weapons.get(slot)

    def replace_weapons(self, slot: int, weapons: WeaponMap) -> None:
        """Swap in a whole new mapping for *slot*; nothing is merged."""
        self.weapons[slot] = weapons

    def set_weapon(self, slot: int, defindex: int, info: WeaponInfo) -> None:
        """Record an in-game equip for one weapon."""
        self.weapons.setdefault(slot, {})[defindex] = info

    def clear_slot(self, slot: int) -> None:
        self.knives.pop(slot, None)
        self.gloves.pop(slot, None)
        self.weapons.pop(slot, None)
