from weapon_clash.models import DC, MARVEL, Weapon
from weapon_clash.weapons import CATALOG, all_weapons, catalog_size, weapon_by_id, weapons_for


def test_catalog_is_symmetric():
    assert catalog_size(MARVEL) == catalog_size(DC) == 5
    assert catalog_size("anime") == 0
    assert len(all_weapons()) == 10
    assert {w.universe for w in weapons_for(DC)} == {DC}


def test_weapon_by_id():
    mjolnir = weapon_by_id("mjolnir")
    assert mjolnir.name == "Mjolnir" and mjolnir.power == 95
    assert weapon_by_id("mjolnir", MARVEL) is mjolnir
    assert weapon_by_id("mjolnir", DC) is None
    assert weapon_by_id("nope") is None


def test_lookups_accept_a_custom_catalog():
    custom = {MARVEL: [Weapon("m1", "M One", MARVEL, 10, "common")], DC: []}
    assert weapon_by_id("m1", catalog=custom).id == "m1"
    assert weapon_by_id("mjolnir", catalog=custom) is None
    assert catalog_size(MARVEL, custom) == 1
    assert catalog_size(DC, custom) == 0
    assert weapons_for(MARVEL) == CATALOG[MARVEL]
