"""Roster of battle-ready Pokemon.

A small built-in sample roster plus a loader for JSON roster files exported
by a data-fetch layer. Records accept both snake_case and the camelCase stat
keys PokeAPI-derived front-ends tend to produce (``specialAttack``...).
"""
from __future__ import annotations
import json
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Tuple, Union

from pokebattle.battle.models import RosterPokemon, Stats
from pokebattle.core.errors import DataLoadError, PokebattleError, ValidationError
from pokebattle.core.logging import logger
from pokebattle.core.types import normalize_types

ARTWORK_URL = "https://raw.githubusercontent.com/PokeAPI/sprites/master/sprites/pokemon/other/official-artwork/{id}.png"

_STAT_KEYS = {
    "hp": ("hp",),
    "attack": ("attack", "atk"),
    "defense": ("defense", "def"),
    "special_attack": ("special_attack", "specialAttack", "special-attack", "sp_atk"),
    "special_defense": ("special_defense", "specialDefense", "special-defense", "sp_def"),
    "speed": ("speed", "spe"),
}

# id, name, types, (hp, atk, def, sp_atk, sp_def, speed)
_SAMPLE: Tuple[Tuple[int, str, Tuple[str, ...], Tuple[int, int, int, int, int, int]], ...] = (
    (1, "Bulbasaur", ("grass", "poison"), (45, 49, 49, 65, 65, 45)),
    (4, "Charmander", ("fire",), (39, 52, 43, 60, 50, 65)),
    (7, "Squirtle", ("water",), (44, 48, 65, 50, 64, 43)),
    (25, "Pikachu", ("electric",), (35, 55, 40, 50, 50, 90)),
    (39, "Jigglypuff", ("normal", "fairy"), (115, 45, 20, 45, 25, 20)),
    (65, "Alakazam", ("psychic",), (55, 50, 45, 135, 95, 120)),
    (66, "Machop", ("fighting",), (70, 80, 50, 35, 35, 35)),
    (94, "Gengar", ("ghost", "poison"), (60, 65, 60, 130, 75, 110)),
    (95, "Onix", ("rock", "ground"), (35, 45, 160, 30, 45, 70)),
    (123, "Scyther", ("bug", "flying"), (70, 110, 80, 55, 80, 105)),
    (130, "Gyarados", ("water", "flying"), (95, 125, 79, 60, 100, 81)),
    (131, "Lapras", ("water", "ice"), (130, 85, 80, 85, 95, 60)),
    (143, "Snorlax", ("normal",), (160, 110, 65, 65, 110, 30)),
    (149, "Dragonite", ("dragon", "flying"), (91, 134, 95, 100, 100, 80)),
    (197, "Umbreon", ("dark",), (95, 65, 110, 60, 130, 65)),
    (227, "Skarmory", ("steel", "flying"), (65, 80, 140, 40, 70, 70)),
)

class PokemonNotFound(PokebattleError):
    pass

def _stat(raw: Dict[str, Any], name: str) -> int:
    for key in _STAT_KEYS[name]:
        if key in raw:
            try:
                val = int(raw[key])
            except (TypeError, ValueError):
                raise ValidationError(f"Stat {name} must be an integer, got {raw[key]!r}")
            if val <= 0:
                raise ValidationError(f"Stat {name} must be positive, got {val}")
            return val
    raise ValidationError(f"Missing stat: {name}")

def parse_record(raw: Dict[str, Any]) -> RosterPokemon:
    if not isinstance(raw, dict):
        raise ValidationError(f"Roster entry must be an object, got {type(raw).__name__}")
    try:
        pid = int(raw["id"])
        name = str(raw["name"])
        types = raw["types"]
        stats_raw = raw["stats"]
    except KeyError as e:
        raise ValidationError(f"Roster entry missing field {e.args[0]!r}")
    except (TypeError, ValueError):
        raise ValidationError(f"Roster entry has an invalid id: {raw.get('id')!r}")
    if isinstance(types, str):
        types = [types]
    if not isinstance(stats_raw, dict):
        raise ValidationError(f"Stats for {name} must be an object")
    stats = Stats(**{k: _stat(stats_raw, k) for k in _STAT_KEYS})
    image = str(raw.get("image") or raw.get("imageUrl") or ARTWORK_URL.format(id=pid))
    return RosterPokemon(id=pid, name=name, types=normalize_types(types), stats=stats, image=image)

def load_roster(path: Union[str, Path]) -> List[RosterPokemon]:
    path = Path(path)
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        raise DataLoadError(str(path), str(e))
    if isinstance(raw, dict):
        raw = raw.get("pokemon", [])
    if not isinstance(raw, list):
        raise DataLoadError(str(path), "expected a list of Pokemon records")
    roster = [parse_record(r) for r in raw]
    logger.debug("RosterLoaded", path=str(path), count=len(roster))
    return roster

@lru_cache(maxsize=None)
def _sample() -> Tuple[RosterPokemon, ...]:
    return tuple(
        RosterPokemon(id=pid, name=name, types=types, stats=Stats(*stats), image=ARTWORK_URL.format(id=pid))
        for pid, name, types, stats in _SAMPLE
    )

def sample_roster() -> List[RosterPokemon]:
    return list(_sample())

def find_pokemon(key: Union[int, str], roster: Optional[Iterable[RosterPokemon]] = None) -> RosterPokemon:
    """Look up by id (int or digit string) or case-insensitive name."""
    pool = list(roster) if roster is not None else sample_roster()
    text = str(key).strip()
    for p in pool:
        if text.isdigit() and p.id == int(text):
            return p
        if p.name.lower() == text.lower():
            return p
    raise PokemonNotFound(f"Pokemon not found in roster: {key}")

__all__ = ["PokemonNotFound", "parse_record", "load_roster", "sample_roster", "find_pokemon"]
