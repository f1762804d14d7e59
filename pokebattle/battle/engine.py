"""Damage, move resolution and status mechanics.

All randomness goes through ``BattleEngine.rng`` (a ``random.Random`` or any
object offering ``random()`` and ``uniform()``), sampled fresh on every call.
"""
from __future__ import annotations
import math
import random
from typing import Iterable, List, Optional

from pokebattle.core.logging import logger
from .models import BattleCombatant, Move, MoveResult, StatusEffect
from .typechart import effectiveness_of

CRIT_CHANCE = 1 / 16
CRIT_MULTIPLIER = 1.5
STAB_MULTIPLIER = 1.5
RANDOM_FACTOR_RANGE = (0.85, 1.0)

# Chance that a move can be used this attempt while afflicted
STATUS_ACTION_CHANCE = {
    "sleep": 1 / 3,
    "freeze": 1 / 5,
    "paralysis": 3 / 4,
}

# Statuses a type can never be given
STATUS_IMMUNE_TYPES = {
    "burn": {"fire"},
    "freeze": {"ice"},
    "poison": {"poison", "steel"},
    "paralysis": {"electric"},
}

_TICK_TEXT = {
    "burn": "{name} is hurt by its burn!",
    "poison": "{name} is hurt by poison!",
}
_CURE_TEXT = {
    "burn": "{name}'s burn healed!",
    "poison": "{name} recovered from poison!",
    "paralysis": "{name} is no longer paralyzed!",
    "sleep": "{name} woke up!",
    "freeze": "{name} thawed out!",
}
_INFLICT_TEXT = {
    "burn": "{name} was burned!",
    "poison": "{name} was poisoned!",
    "paralysis": "{name} is paralyzed! It may be unable to move!",
    "sleep": "{name} fell asleep!",
    "freeze": "{name} was frozen solid!",
}

def effectiveness_message(effectiveness: float) -> str:
    if effectiveness > 1:
        return "It's super effective!"
    if effectiveness == 0:
        return "It had no effect!"
    if effectiveness < 1:
        return "It's not very effective..."
    return ""

def base_damage(attacker: BattleCombatant, defender: BattleCombatant, move: Move) -> int:
    """Level/power/stat term of the damage formula (before any multiplier)."""
    physical = move.category == "physical"
    atk = attacker.stats.attack if physical else attacker.stats.special_attack
    dfn = defender.stats.defense if physical else defender.stats.special_defense
    return math.floor((((2 * attacker.level / 5) + 2) * (move.power or 0) * atk / max(1, dfn)) / 50 + 2)

class BattleEngine:
    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()

    # ------------------------------------------------------------------
    # Previews
    # ------------------------------------------------------------------
    def get_type_effectiveness(self, move_type: str, defender_types: Iterable[str]) -> float:
        return effectiveness_of(move_type, defender_types)

    def modified_damage(self, attacker: BattleCombatant, defender: BattleCombatant, move: Move) -> float:
        """Damage before the random factor, burn and critical hit: base x STAB x type."""
        stab = STAB_MULTIPLIER if move.type in attacker.types else 1.0
        eff = self.get_type_effectiveness(move.type, defender.types)
        return base_damage(attacker, defender, move) * stab * eff

    # ------------------------------------------------------------------
    # Usability
    # ------------------------------------------------------------------
    def can_use_move(self, combatant: BattleCombatant, move: Move) -> bool:
        if move.current_pp <= 0:
            return False
        status = combatant.status_effect
        if status is not None and status.name in STATUS_ACTION_CHANCE:
            return self.rng.random() < STATUS_ACTION_CHANCE[status.name]
        return True

    # ------------------------------------------------------------------
    # Resolution
    # ------------------------------------------------------------------
    def execute_move(self, attacker: BattleCombatant, defender: BattleCombatant, move: Move) -> MoveResult:
        """Resolve one use of ``move``; consumes 1 PP. Caller applies the damage."""
        move.current_pp = max(0, move.current_pp - 1)

        if self.rng.random() * 100 >= move.accuracy:
            logger.debug("MoveMissed", attacker=attacker.name, move=move.name)
            return MoveResult(damage=0, effectiveness=1.0, critical=False,
                              message=f"{attacker.name} used {move.name}, but it missed!", hit=False)

        if not move.is_damaging:
            return MoveResult(damage=0, effectiveness=1.0, critical=False,
                              message=f"{attacker.name} used {move.name}!")

        eff = self.get_type_effectiveness(move.type, defender.types)
        rand = self.rng.uniform(*RANDOM_FACTOR_RANGE)
        damage = math.floor(self.modified_damage(attacker, defender, move) * rand)
        if attacker.has_status("burn") and move.category == "physical":
            damage = math.floor(damage * 0.5)
        critical = self.rng.random() < CRIT_CHANCE
        if critical:
            damage = math.floor(damage * CRIT_MULTIPLIER)
        if eff > 0:
            damage = max(1, damage)
        else:
            damage = 0

        parts = [f"{attacker.name} used {move.name}!"]
        suffix = effectiveness_message(eff)
        if suffix:
            parts.append(suffix)
        if critical:
            parts.append("A critical hit!")

        inflicted = None
        if damage > 0 and move.ailment and self.can_inflict(defender, move.ailment):
            if self.rng.random() * 100 < move.ailment_chance:
                inflicted = StatusEffect.inflict(move.ailment)

        logger.debug("MoveExecuted", attacker=attacker.name, move=move.name, damage=damage,
                     effectiveness=eff, crit=critical)
        return MoveResult(damage=damage, effectiveness=eff, critical=critical,
                          message=" ".join(parts), status_effect=inflicted)

    # ------------------------------------------------------------------
    # HP & status
    # ------------------------------------------------------------------
    def apply_damage(self, target: BattleCombatant, amount: int) -> int:
        """Subtract ``amount`` HP clamped to [0, max]; returns HP actually lost."""
        old = target.current_hp
        target.current_hp = max(0, min(target.max_hp, old - int(amount)))
        return old - target.current_hp

    def can_inflict(self, target: BattleCombatant, status: str) -> bool:
        if target.status_effect is not None or target.is_fainted():
            return False
        immune = STATUS_IMMUNE_TYPES.get(status, set())
        return not any(t in immune for t in target.types)

    def inflict_status(self, target: BattleCombatant, effect: StatusEffect) -> Optional[str]:
        """Attach ``effect`` unless one is already active; returns the log line."""
        if not self.can_inflict(target, effect.name):
            return None
        target.status_effect = effect
        return _INFLICT_TEXT[effect.name].format(name=target.name)

    def status_tick(self, combatant: BattleCombatant) -> List[str]:
        """Once-per-turn status upkeep: burn/poison damage, then countdown."""
        status = combatant.status_effect
        if status is None:
            return []
        messages: List[str] = []
        if status.name in _TICK_TEXT:
            self.apply_damage(combatant, combatant.max_hp // 8)
            messages.append(_TICK_TEXT[status.name].format(name=combatant.name))
        status.turns_remaining = max(0, status.turns_remaining - 1)
        if status.turns_remaining == 0:
            combatant.status_effect = None
            if not combatant.is_fainted():
                messages.append(_CURE_TEXT[status.name].format(name=combatant.name))
        return messages

__all__ = [
    "BattleEngine", "base_damage", "effectiveness_message",
    "CRIT_CHANCE", "STAB_MULTIPLIER", "STATUS_ACTION_CHANCE",
]
