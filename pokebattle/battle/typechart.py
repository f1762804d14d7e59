"""Static type-effectiveness chart (Gen VI+, Fairy included).

Only non-neutral pairs are listed; every absent (attacking, defending) pair
resolves to 1.0. The chart is a process-wide constant and is never mutated.

House rules on top of the canonical chart: steel resists electric and ice
resists flying (both 0.5).
"""
from __future__ import annotations
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Tuple

from pokebattle.core.types import ELEMENTAL_TYPES, normalize_types

_CHART: Dict[str, Dict[str, float]] = {
    "normal":  {"rock": 0.5, "ghost": 0.0, "steel": 0.5},
    "fire":    {"fire": 0.5, "water": 0.5, "grass": 2.0, "ice": 2.0, "bug": 2.0, "rock": 0.5, "dragon": 0.5, "steel": 2.0},
    "water":   {"fire": 2.0, "water": 0.5, "grass": 0.5, "ground": 2.0, "rock": 2.0, "dragon": 0.5},
    "electric":{"water": 2.0, "electric": 0.5, "grass": 0.5, "ground": 0.0, "flying": 2.0, "dragon": 0.5, "steel": 0.5},
    "grass":   {"fire": 0.5, "water": 2.0, "grass": 0.5, "poison": 0.5, "ground": 2.0, "flying": 0.5, "bug": 0.5, "rock": 2.0, "dragon": 0.5, "steel": 0.5},
    "ice":     {"fire": 0.5, "water": 0.5, "grass": 2.0, "ice": 0.5, "ground": 2.0, "flying": 2.0, "dragon": 2.0, "steel": 0.5},
    "fighting":{"normal": 2.0, "ice": 2.0, "poison": 0.5, "flying": 0.5, "psychic": 0.5, "bug": 0.5, "rock": 2.0, "ghost": 0.0, "dark": 2.0, "steel": 2.0, "fairy": 0.5},
    "poison":  {"grass": 2.0, "poison": 0.5, "ground": 0.5, "rock": 0.5, "ghost": 0.5, "steel": 0.0, "fairy": 2.0},
    "ground":  {"fire": 2.0, "electric": 2.0, "grass": 0.5, "poison": 2.0, "flying": 0.0, "bug": 0.5, "rock": 2.0, "steel": 2.0},
    "flying":  {"electric": 0.5, "grass": 2.0, "ice": 0.5, "fighting": 2.0, "bug": 2.0, "rock": 0.5, "steel": 0.5},
    "psychic": {"fighting": 2.0, "poison": 2.0, "psychic": 0.5, "dark": 0.0, "steel": 0.5},
    "bug":     {"fire": 0.5, "grass": 2.0, "fighting": 0.5, "poison": 0.5, "flying": 0.5, "psychic": 2.0, "ghost": 0.5, "dark": 2.0, "steel": 0.5, "fairy": 0.5},
    "rock":    {"fire": 2.0, "ice": 2.0, "fighting": 0.5, "ground": 0.5, "flying": 2.0, "bug": 2.0, "steel": 0.5},
    "ghost":   {"normal": 0.0, "psychic": 2.0, "ghost": 2.0, "dark": 0.5},
    "dragon":  {"dragon": 2.0, "steel": 0.5, "fairy": 0.0},
    "dark":    {"fighting": 0.5, "psychic": 2.0, "ghost": 2.0, "dark": 0.5, "fairy": 0.5},
    "steel":   {"fire": 0.5, "water": 0.5, "electric": 0.5, "ice": 2.0, "rock": 2.0, "steel": 0.5, "fairy": 2.0},
    "fairy":   {"fire": 0.5, "fighting": 2.0, "poison": 0.5, "dragon": 2.0, "dark": 2.0, "steel": 0.5},
}

TYPE_CHART: Mapping[str, Mapping[str, float]] = MappingProxyType(
    {atk: MappingProxyType(row) for atk, row in _CHART.items()}
)

def type_multiplier(attacking_type: str, defending_type: str) -> float:
    return TYPE_CHART.get(attacking_type.lower(), {}).get(defending_type.lower(), 1.0)

def effectiveness_of(attacking_type: str, defending_types: Iterable[str]) -> float:
    """Product of the attacking type's multiplier against each defending type.

    Unknown types are neutral rather than an error, so ``effectiveness_of("fire",
    ["grass", "bug"])`` is 4.0 and ``effectiveness_of("???", ["water"])`` is 1.0.
    """
    mult = 1.0
    for t in defending_types:
        mult *= type_multiplier(attacking_type, t)
    return mult

# ---------------------------------------------------------------------------
# Matchup profiles
# ---------------------------------------------------------------------------
@dataclass
class OffensiveProfile:
    types: Tuple[str, ...]
    super_effective: List[str] = field(default_factory=list)
    not_very_effective: List[str] = field(default_factory=list)
    no_effect: List[str] = field(default_factory=list)

@dataclass
class DefensiveProfile:
    types: Tuple[str, ...]
    weak_to: List[str] = field(default_factory=list)
    resistant_to: List[str] = field(default_factory=list)
    immune_to: List[str] = field(default_factory=list)
    double_weak_to: List[str] = field(default_factory=list)
    double_resistant_to: List[str] = field(default_factory=list)

def offensive_profile(types: Iterable[str]) -> OffensiveProfile:
    """How attacks of the given type(s) fare against each single defending type.

    For dual types the better of the two attacking multipliers counts, which is
    what a Pokemon carrying one move of each type can achieve.
    """
    atk_types = normalize_types(types)
    prof = OffensiveProfile(types=atk_types)
    for d in ELEMENTAL_TYPES:
        best = max(type_multiplier(a, d) for a in atk_types)
        if best > 1:
            prof.super_effective.append(d)
        elif best == 0:
            prof.no_effect.append(d)
        elif best < 1:
            prof.not_very_effective.append(d)
    return prof

def defensive_profile(types: Iterable[str]) -> DefensiveProfile:
    """Incoming multipliers for a one- or two-type defender.

    ``weak_to``/``resistant_to`` hold every type above/below neutral; the
    ``double_*`` lists are the 4x and 0.25x subsets.
    """
    def_types = normalize_types(types)
    prof = DefensiveProfile(types=def_types)
    for a in ELEMENTAL_TYPES:
        mult = effectiveness_of(a, def_types)
        if mult == 0:
            prof.immune_to.append(a)
        elif mult > 1:
            prof.weak_to.append(a)
            if mult >= 4:
                prof.double_weak_to.append(a)
        elif mult < 1:
            prof.resistant_to.append(a)
            if mult <= 0.25:
                prof.double_resistant_to.append(a)
    return prof

__all__ = [
    "TYPE_CHART", "type_multiplier", "effectiveness_of",
    "OffensiveProfile", "DefensiveProfile", "offensive_profile", "defensive_profile",
]
