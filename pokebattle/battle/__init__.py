"""
Battle system package.
- typechart.py (type effectiveness table, matchup profiles)
- moves.py (move catalog, loadout selection)
- models.py (combatants, moves, status effects, battle state)
- engine.py (damage calc, move usability, status ticks)
- ai.py (opponent decision logic)
- session.py (turn sequencing state machine)
- render.py (HP bars, move buttons, battle log)
"""
from .engine import BattleEngine
from .session import BattleSession, BattleEvent, Phase
from .typechart import effectiveness_of
from .moves import moves_for_types
__all__ = ["BattleEngine", "BattleSession", "BattleEvent", "Phase", "effectiveness_of", "moves_for_types"]
