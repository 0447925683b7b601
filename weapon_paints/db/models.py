from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class PlayerInfo(BaseModel):
    """A connected player as reported by the game server."""

    model_config = ConfigDict(frozen=True)

    steamid: str = ""
    slot: int = Field(ge=0)
    user_id: Optional[int] = None
    name: Optional[str] = None
    ip_address: Optional[str] = None


class WeaponInfo(BaseModel):
    """Cosmetic state of one weapon."""

    paint: int = 0
    seed: int = 0
    wear: float = 0.0


class KnifeRow(BaseModel):
    """Row of ``wp_player_knife``."""

    knife: Optional[str] = None


class GloveRow(BaseModel):
    """Row of ``wp_player_gloves``. A NULL defindex means no saved glove."""

    weapon_defindex: Optional[int] = None


class SkinRow(BaseModel):
    """Row of ``wp_player_skins``. NULL columns decode to zero."""

    weapon_defindex: int = 0
    weapon_paint_id: int = 0
    weapon_wear: float = 0.0
    weapon_seed: int = 0

    @field_validator("weapon_defindex", "weapon_paint_id", "weapon_seed", mode="before")
    def null_int_is_zero(cls, v: Any) -> Any:
        return 0 if v is None else v

    @field_validator("weapon_wear", mode="before")
    def null_wear_is_zero(cls, v: Any) -> Any:
        return 0.0 if v is None else v

    def to_weapon_info(self) -> WeaponInfo:
        return WeaponInfo(
            paint=self.weapon_paint_id,
            seed=self.weapon_seed,
            wear=self.weapon_wear,
        )
