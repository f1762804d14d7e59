"""Battle data model: moves, status effects, combatants and battle state."""
from __future__ import annotations
from dataclasses import dataclass, field, replace
from typing import List, Literal, Optional, Tuple

Side = Literal["player", "opponent"]

# Turns a freshly inflicted status lasts before it wears off
STATUS_DURATIONS = {
    "burn": 5,
    "poison": 5,
    "paralysis": 4,
    "sleep": 3,
    "freeze": 3,
}

def other_side(side: Side) -> Side:
    return "opponent" if side == "player" else "player"

@dataclass
class Stats:
    hp: int
    attack: int
    defense: int
    special_attack: int
    special_defense: int
    speed: int

@dataclass
class Move:
    id: int
    name: str
    type: str
    category: str  # physical | special | status
    power: Optional[int]  # None for status moves
    accuracy: int
    pp: int
    description: str = ""
    ailment: Optional[str] = None  # secondary status this move may inflict
    ailment_chance: int = 0  # percent
    current_pp: int = -1  # -1 => initialised to pp

    def __post_init__(self):
        if self.current_pp < 0 or self.current_pp > self.pp:
            self.current_pp = self.pp

    def fresh(self) -> "Move":
        """Independent copy with full PP."""
        return replace(self, current_pp=self.pp)

    @property
    def is_damaging(self) -> bool:
        return self.category != "status" and (self.power or 0) > 0

@dataclass
class StatusEffect:
    name: str  # burn | poison | paralysis | sleep | freeze
    turns_remaining: int

    @classmethod
    def inflict(cls, name: str) -> "StatusEffect":
        return cls(name=name, turns_remaining=STATUS_DURATIONS.get(name, 3))

@dataclass
class RosterPokemon:
    """A combat-eligible Pokemon record as supplied by the roster."""
    id: int
    name: str
    types: Tuple[str, ...]
    stats: Stats
    image: str = ""

@dataclass
class BattleCombatant:
    id: int
    name: str
    types: Tuple[str, ...]
    stats: Stats
    level: int
    moves: List[Move]
    image: str = ""
    current_hp: int = -1  # -1 => max HP
    status_effect: Optional[StatusEffect] = None

    def __post_init__(self):
        max_hp = int(self.stats.hp)
        if self.current_hp < 0 or self.current_hp > max_hp:
            self.current_hp = max_hp

    @property
    def max_hp(self) -> int:
        return int(self.stats.hp)

    def is_fainted(self) -> bool:
        return self.current_hp <= 0

    def has_status(self, name: str) -> bool:
        return self.status_effect is not None and self.status_effect.name == name

@dataclass
class MoveResult:
    damage: int
    effectiveness: float
    critical: bool
    message: str
    hit: bool = True
    status_effect: Optional[StatusEffect] = None

@dataclass
class BattleState:
    player: BattleCombatant
    opponent: BattleCombatant
    turn: Side = "player"
    log: List[str] = field(default_factory=list)
    turn_count: int = 1
    is_complete: bool = False
    winner: Optional[Side] = None

    def combatant(self, side: Side) -> BattleCombatant:
        return self.player if side == "player" else self.opponent

__all__ = [
    "Side", "STATUS_DURATIONS", "other_side",
    "Stats", "Move", "StatusEffect", "RosterPokemon",
    "BattleCombatant", "MoveResult", "BattleState",
]
