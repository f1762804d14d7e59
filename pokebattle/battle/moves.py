"""Static move catalog and 4-move loadout selection.

Catalog order is stable and doubles as the tie-break order for
:func:`moves_for_types`.
"""
from __future__ import annotations
from typing import Dict, Iterable, List, Tuple, Union

from .models import Move

def _m(id, name, type, category, power, accuracy, pp, description, ailment=None, ailment_chance=0) -> Move:
    return Move(id=id, name=name, type=type, category=category, power=power, accuracy=accuracy,
                pp=pp, description=description, ailment=ailment, ailment_chance=ailment_chance)

_CATALOG: Tuple[Move, ...] = (
    # Normal
    _m(1, "Tackle", "normal", "physical", 40, 100, 35,
       "A physical attack in which the user charges and slams into the target with its whole body."),
    _m(2, "Quick Attack", "normal", "physical", 40, 100, 30,
       "The user lunges at the target at a speed that makes it almost invisible."),
    _m(3, "Body Slam", "normal", "physical", 85, 100, 15,
       "The user drops onto the target with its full body weight. This may also leave the target with paralysis.",
       "paralysis", 30),
    # Fire
    _m(10, "Ember", "fire", "special", 40, 100, 25,
       "The target is attacked with small flames. This may also leave the target with a burn.", "burn", 10),
    _m(11, "Flamethrower", "fire", "special", 90, 100, 15,
       "The target is scorched with an intense blast of fire. This may also leave the target with a burn.", "burn", 10),
    _m(12, "Fire Blast", "fire", "special", 110, 85, 5,
       "The target is attacked with an intense blast of all-consuming fire. This may also leave the target with a burn.",
       "burn", 10),
    # Water
    _m(20, "Water Gun", "water", "special", 40, 100, 25, "The target is blasted with a forceful shot of water."),
    _m(21, "Bubble Beam", "water", "special", 65, 100, 20,
       "A spray of countless bubbles is jetted at the opposing Pokemon."),
    _m(22, "Hydro Pump", "water", "special", 110, 80, 5,
       "The target is blasted by a huge volume of water launched under great pressure."),
    # Electric
    _m(30, "Thunder Shock", "electric", "special", 40, 100, 30,
       "A jolt of electricity crashes down on the target. This may also leave the target with paralysis.",
       "paralysis", 10),
    _m(31, "Thunderbolt", "electric", "special", 90, 100, 15,
       "A strong electric blast crashes down on the target. This may also leave the target with paralysis.",
       "paralysis", 10),
    _m(32, "Thunder", "electric", "special", 110, 70, 10,
       "A wicked thunderbolt is dropped on the target. This may also leave the target with paralysis.",
       "paralysis", 30),
    # Grass
    _m(40, "Vine Whip", "grass", "physical", 45, 100, 25,
       "The target is struck with slender, whiplike vines to inflict damage."),
    _m(41, "Razor Leaf", "grass", "physical", 55, 95, 25,
       "Sharp-edged leaves are launched to slash at the opposing Pokemon."),
    _m(42, "Solar Beam", "grass", "special", 120, 100, 10,
       "The user gathers light, then blasts a bundled beam."),
    # Ice
    _m(43, "Ice Beam", "ice", "special", 90, 100, 10,
       "The target is struck with an icy-cold beam of energy. This may also leave the target frozen.", "freeze", 10),
    _m(44, "Blizzard", "ice", "special", 110, 70, 5,
       "A howling blizzard is summoned to strike opposing Pokemon. This may also leave them frozen.", "freeze", 10),
    # Fighting
    _m(45, "Karate Chop", "fighting", "physical", 50, 100, 25, "The target is attacked with a sharp chop."),
    _m(46, "Low Kick", "fighting", "physical", 60, 100, 20,
       "A powerful low kick that makes the target fall over."),
    # Poison
    _m(47, "Poison Sting", "poison", "physical", 15, 100, 35,
       "The user stabs the target with a poisonous stinger. This may also poison the target.", "poison", 30),
    _m(48, "Sludge Bomb", "poison", "special", 90, 100, 10,
       "Unsanitary sludge is hurled at the target. This may also poison the target.", "poison", 30),
    # Ground
    _m(49, "Earthquake", "ground", "physical", 100, 100, 10,
       "The user sets off an earthquake that strikes every Pokemon around it."),
    # Flying
    _m(50, "Gust", "flying", "special", 40, 100, 35,
       "A gust of wind is whipped up by wings and launched at the target to inflict damage."),
    _m(51, "Wing Attack", "flying", "physical", 60, 100, 35,
       "The target is struck with large, imposing wings spread wide to inflict damage."),
    # Psychic
    _m(52, "Confusion", "psychic", "special", 50, 100, 25, "The target is hit by a weak telekinetic force."),
    _m(53, "Psychic", "psychic", "special", 90, 100, 10, "The target is hit by a strong telekinetic force."),
    # Bug
    _m(54, "String Shot", "bug", "status", None, 95, 40,
       "The opposing Pokemon are bound with silk blown from the user's mouth."),
    _m(55, "Bug Bite", "bug", "physical", 60, 100, 20, "The user bites the target."),
    # Rock
    _m(56, "Rock Throw", "rock", "physical", 50, 90, 15,
       "The user picks up and throws a small rock at the target to attack."),
    _m(57, "Rock Slide", "rock", "physical", 75, 90, 10,
       "Large boulders are hurled at the opposing Pokemon to inflict damage."),
    # Ghost
    _m(58, "Lick", "ghost", "physical", 30, 100, 30,
       "The target is licked with a long tongue. This may also leave the target with paralysis.", "paralysis", 30),
    _m(59, "Shadow Ball", "ghost", "special", 80, 100, 15, "The user hurls a shadowy blob at the target."),
    # Dragon
    _m(60, "Dragon Rage", "dragon", "special", 40, 100, 10,
       "This attack hits the target with a shock wave of pure rage."),
    _m(61, "Dragon Claw", "dragon", "physical", 80, 100, 15, "The user slashes the target with huge, sharp claws."),
    # Dark
    _m(62, "Bite", "dark", "physical", 60, 100, 25, "The target is bitten with viciously sharp fangs."),
    _m(63, "Crunch", "dark", "physical", 80, 100, 15, "The user crunches up the target with sharp fangs."),
    # Steel
    _m(64, "Metal Claw", "steel", "physical", 50, 95, 35, "The target is raked with steel claws."),
    _m(65, "Iron Tail", "steel", "physical", 100, 75, 15, "The target is slammed with a steel-hard tail."),
    # Fairy
    _m(66, "Fairy Wind", "fairy", "special", 40, 100, 30,
       "The user stirs up a fairy wind and strikes the target with it."),
    _m(67, "Moonblast", "fairy", "special", 95, 100, 15,
       "Borrowing the power of the moon, the user attacks the target."),
)

DEFAULT_MOVE_NAME = "Tackle"
LOADOUT_SIZE = 4

_BY_ID: Dict[int, Move] = {m.id: m for m in _CATALOG}
_BY_NAME: Dict[str, Move] = {m.name.lower(): m for m in _CATALOG}

def all_moves() -> List[Move]:
    """Fresh copies of every catalog move, in catalog order."""
    return [m.fresh() for m in _CATALOG]

def get_move(key: Union[int, str]) -> Move:
    """Fresh copy of a catalog move looked up by id or (case-insensitive) name."""
    if isinstance(key, int):
        found = _BY_ID.get(key)
    else:
        found = _BY_NAME.get(str(key).strip().lower().replace("-", " "))
    if found is None:
        raise KeyError(f"Move not found: {key}")
    return found.fresh()

def moves_for_types(types: Iterable[str]) -> List[Move]:
    """Assemble a 4-move loadout for a Pokemon of the given types.

    One move per own type first (first catalog match), then any remaining
    same-type moves, then Tackle; short loadouts are padded with extra Tackle
    copies. Every returned move is an independent, full-PP instance.
    """
    types = [t.lower() for t in types]
    type_moves = [m for m in _CATALOG if m.type in types]
    default = _BY_NAME[DEFAULT_MOVE_NAME.lower()]
    chosen: List[Move] = []

    def taken(m: Move) -> bool:
        return any(c.id == m.id for c in chosen)

    for t in types:
        mv = next((m for m in type_moves if m.type == t and not taken(m)), None)
        if mv is not None and len(chosen) < LOADOUT_SIZE:
            chosen.append(mv.fresh())

    while len(chosen) < LOADOUT_SIZE:
        mv = next((m for m in type_moves if not taken(m)), default)
        if taken(mv):
            break
        chosen.append(mv.fresh())

    while len(chosen) < LOADOUT_SIZE:
        chosen.append(default.fresh())
    return chosen[:LOADOUT_SIZE]

__all__ = ["DEFAULT_MOVE_NAME", "LOADOUT_SIZE", "all_moves", "get_move", "moves_for_types"]
