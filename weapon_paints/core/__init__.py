from .store import PlayerCustomizationStore
from .weapon_sync import WeaponSynchronization

__all__ = ["PlayerCustomizationStore", "WeaponSynchronization"]
