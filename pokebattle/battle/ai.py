from __future__ import annotations
from typing import Optional

from .engine import BattleEngine
from .models import BattleCombatant, Move

def choose_move(engine: BattleEngine, user: BattleCombatant, foe: BattleCombatant) -> Optional[Move]:
    """Pick a usable move, preferring super-effective ones; None if nothing is usable.

    Usability is re-rolled per move (sleep/freeze/paralysis gates), and the pick
    among candidates is uniform.
    """
    usable = [m for m in user.moves if engine.can_use_move(user, m)]
    if not usable:
        return None
    strong = [m for m in usable if engine.get_type_effectiveness(m.type, foe.types) > 1]
    return engine.rng.choice(strong or usable)

__all__ = ["choose_move"]
