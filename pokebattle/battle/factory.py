"""Factory helpers for constructing BattleCombatant instances from roster records."""
from __future__ import annotations

from .models import BattleCombatant, RosterPokemon, Stats
from .moves import moves_for_types

DEFAULT_LEVEL = 50
MIN_LEVEL = 1
MAX_LEVEL = 100

def clamp_level(level: int) -> int:
    return max(MIN_LEVEL, min(int(level), MAX_LEVEL))

def combatant_from_roster(pokemon: RosterPokemon, level: int = DEFAULT_LEVEL) -> BattleCombatant:
    """Full-HP combatant with its own fresh 4-move loadout."""
    stats = Stats(**vars(pokemon.stats))
    return BattleCombatant(
        id=pokemon.id,
        name=pokemon.name,
        types=tuple(pokemon.types),
        stats=stats,
        level=clamp_level(level),
        moves=moves_for_types(pokemon.types),
        image=pokemon.image,
    )

__all__ = ["combatant_from_roster", "clamp_level", "DEFAULT_LEVEL"]
