"""
This file contains shared fixtures for the test suite.
"""

import os

import pytest
import pytest_asyncio

# Set env vars before any application modules are imported
os.environ.setdefault("TEST_MODE", "1")
os.environ.setdefault("DATABASE_PATH", ":memory:")
os.environ.setdefault("PYTHONIOENCODING", "utf-8")

from weapon_paints.config import FeatureSettings  # noqa: E402
from weapon_paints.core import PlayerCustomizationStore, WeaponSynchronization  # noqa: E402
from weapon_paints.db.connection import Database  # noqa: E402
from weapon_paints.db.models import PlayerInfo  # noqa: E402

STEAMID = "76561198000000001"
OTHER_STEAMID = "76561198000000002"


@pytest_asyncio.fixture
async def database():
    """Fresh in-memory database with the customization schema."""
    db = Database(":memory:", pool_timeout=5.0)
    await db.initialize()
    yield db
    await db.close()


@pytest.fixture
def store() -> PlayerCustomizationStore:
    return PlayerCustomizationStore()


@pytest.fixture
def features() -> FeatureSettings:
    return FeatureSettings(knife_enabled=True, glove_enabled=True, skin_enabled=True)


@pytest.fixture
def sync(database, features, store) -> WeaponSynchronization:
    return WeaponSynchronization(database, features, store)


@pytest.fixture
def player() -> PlayerInfo:
    return PlayerInfo(steamid=STEAMID, slot=3, name="tester")


@pytest.fixture
def anonymous_player() -> PlayerInfo:
    """A connected player whose steamid has not been resolved yet."""
    return PlayerInfo(steamid="", slot=4)
