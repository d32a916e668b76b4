# weapon_clash/weapons.py
from typing import Dict, List, Optional

from .models import Weapon

WEAPONS = {
    # Marvel
    "mjolnir": {
        "name": "Mjolnir",
        "universe": "marvel",
        "power": 95,
        "rarity": "legendary",
        "image_url": "https://img.icons8.com/color/96/thor-hammer.png",
    },
    "shield": {
        "name": "Captain America's Shield",
        "universe": "marvel",
        "power": 85,
        "rarity": "epic",
        "image_url": "https://img.icons8.com/color/96/captain-america.png",
    },
    "repulsors": {
        "name": "Iron Man Repulsors",
        "universe": "marvel",
        "power": 88,
        "rarity": "epic",
        "image_url": "https://img.icons8.com/color/96/iron-man.png",
    },
    "claws": {
        "name": "Adamantium Claws",
        "universe": "marvel",
        "power": 80,
        "rarity": "rare",
        "image_url": "https://img.icons8.com/color/96/wolverine.png",
    },
    "agamotto": {
        "name": "Eye of Agamotto",
        "universe": "marvel",
        "power": 92,
        "rarity": "legendary",
        "image_url": "https://img.icons8.com/fluency/96/visible.png",
    },

    # DC
    "lasso": {
        "name": "Lasso of Truth",
        "universe": "dc",
        "power": 90,
        "rarity": "legendary",
        "image_url": "https://img.icons8.com/color/96/wonder-woman.png",
    },
    "batarangs": {
        "name": "Batarangs",
        "universe": "dc",
        "power": 75,
        "rarity": "rare",
        "image_url": "https://img.icons8.com/color/96/batman.png",
    },
    "ring": {
        "name": "Green Lantern Ring",
        "universe": "dc",
        "power": 94,
        "rarity": "legendary",
        "image_url": "https://img.icons8.com/color/96/green-lantern.png",
    },
    "trident": {
        "name": "Aquaman's Trident",
        "universe": "dc",
        "power": 87,
        "rarity": "epic",
        "image_url": "https://img.icons8.com/color/96/aquaman.png",
    },
    "heat_vision": {
        "name": "Heat Vision",
        "universe": "dc",
        "power": 89,
        "rarity": "epic",
        "image_url": "https://img.icons8.com/color/96/superman.png",
    },
}


def _build_catalog() -> Dict[str, List[Weapon]]:
    catalog: Dict[str, List[Weapon]] = {}
    for weapon_id, data in WEAPONS.items():
        catalog.setdefault(data["universe"], []).append(Weapon(id=weapon_id, **data))
    return catalog


CATALOG: Dict[str, List[Weapon]] = _build_catalog()


def weapons_for(universe: str, catalog: Optional[Dict[str, List[Weapon]]] = None) -> List[Weapon]:
    return list((catalog or CATALOG).get(universe, []))


def weapon_by_id(weapon_id: str, universe: Optional[str] = None,
                 catalog: Optional[Dict[str, List[Weapon]]] = None) -> Optional[Weapon]:
    """Looks a weapon up by id, optionally restricted to one universe."""
    source = catalog or CATALOG
    universes = [universe] if universe else list(source)
    for u in universes:
        for weapon in source.get(u, []):
            if weapon.id == weapon_id:
                return weapon
    return None


def all_weapons(catalog: Optional[Dict[str, List[Weapon]]] = None) -> List[Weapon]:
    return [w for weapons in (catalog or CATALOG).values() for w in weapons]


def catalog_size(universe: str, catalog: Optional[Dict[str, List[Weapon]]] = None) -> int:
    return len((catalog or CATALOG).get(universe, []))
