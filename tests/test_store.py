from weapon_paints.core import PlayerCustomizationStore
from weapon_paints.db.models import WeaponInfo


def test_slots_are_independent():
    store = PlayerCustomizationStore()
    store.set_knife(1, "flip")
    store.set_glove(2, 5030)

    assert store.get_knife(1) == "flip"
    assert store.get_knife(2) is None
    assert store.get_glove(1) is None
    assert store.get_glove(2) == 5030


def test_replace_weapons_drops_previous_entries():
    store = PlayerCustomizationStore()
    store.set_weapon(1, 7, WeaponInfo(paint=5))

    store.replace_weapons(1, {9: WeaponInfo(paint=1)})

    assert store.get_weapons(1) == {9: WeaponInfo(paint=1)}


def test_set_weapon_creates_slot_mapping():
    store = PlayerCustomizationStore()

    store.set_weapon(3, 7, WeaponInfo(paint=5, seed=2, wear=0.3))
    store.set_weapon(3, 9, WeaponInfo(paint=1))

    assert set(store.get_weapons(3)) == {7, 9}


def test_clear_slot_only_touches_that_slot():
    store = PlayerCustomizationStore()
    for slot in (1, 2):
        store.set_knife(slot, "flip")
        store.set_glove(slot, 5030)
        store.set_weapon(slot, 7, WeaponInfo(paint=5))

    store.clear_slot(1)
    store.clear_slot(42)

    assert store.get_knife(1) is None
    assert store.get_glove(1) is None
    assert store.get_weapons(1) is None
    assert store.get_knife(2) == "flip"
    assert store.get_weapons(2) == {7: WeaponInfo(paint=5)}
