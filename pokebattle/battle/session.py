"""Battle session orchestration for 1v1 player-versus-AI battles.

The session owns the authoritative :class:`BattleState` and walks it through
explicit phases::

    NOT_STARTED -> AWAITING_PLAYER <-> AWAITING_OPPONENT -> COMPLETE

``RESOLVING`` marks the single move resolution in flight; any turn entry point
called outside its own phase is rejected as a no-op. The opponent acts through
a scheduler after a short delay. Each scheduled callback carries the battle
generation it was created for and re-reads the session when it fires, so
callbacks outliving a reset or a new battle do nothing.
"""
from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
import threading
from typing import Any, Callable, List, Optional, Tuple

from pokebattle.core.errors import ValidationError
from pokebattle.core.logging import logger
from pokebattle.system.settings import SettingsData
from .ai import choose_move
from .engine import BattleEngine
from .factory import combatant_from_roster
from .models import BattleState, Move, MoveResult, RosterPokemon, Side, other_side

Scheduler = Callable[[float, Callable[[], None]], Any]

class Phase(str, Enum):
    NOT_STARTED = "not-started"
    AWAITING_PLAYER = "awaiting-player"
    AWAITING_OPPONENT = "awaiting-opponent"
    RESOLVING = "resolving"
    COMPLETE = "complete"

_AWAITING = {"player": Phase.AWAITING_PLAYER, "opponent": Phase.AWAITING_OPPONENT}

def timer_scheduler(delay: float, fn: Callable[[], None]) -> threading.Timer:
    t = threading.Timer(delay, fn)
    t.daemon = True
    t.start()
    return t

@dataclass
class BattleEvent:
    kind: str  # move_executed | turn_changed | battle_complete
    state: BattleState
    side: Optional[Side] = None
    result: Optional[MoveResult] = None

class BattleSession:
    def __init__(self, engine: Optional[BattleEngine] = None, *,
                 settings: Optional[SettingsData] = None,
                 scheduler: Optional[Scheduler] = timer_scheduler):
        self.engine = engine or BattleEngine()
        self.settings = settings or SettingsData()
        self.scheduler = scheduler
        self.state: Optional[BattleState] = None
        self.phase = Phase.NOT_STARTED
        self.generation = 0
        self._lock = threading.Lock()
        self._listeners: List[Callable[[BattleEvent], None]] = []

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def start(self, player: RosterPokemon, opponent: RosterPokemon) -> BattleState:
        """Begin a new battle, discarding any previous one."""
        level = self.settings.level
        p = combatant_from_roster(player, level)
        o = combatant_from_roster(opponent, level)
        first: Side = "player" if p.stats.speed >= o.stats.speed else "opponent"
        first_name = p.name if first == "player" else o.name
        state = BattleState(
            player=p,
            opponent=o,
            turn=first,
            log=[f"{p.name} vs {o.name}!", "Battle begins!", f"{first_name} goes first!"],
        )
        with self._lock:
            self.generation += 1
            gen = self.generation
            self.state = state
            self.phase = _AWAITING[first]
        logger.info("BattleStart", player=p.name, opponent=o.name, first=first, level=level)
        if first == "opponent":
            self._schedule_opponent(gen)
        return state

    def reset(self):
        with self._lock:
            self.generation += 1
            self.state = None
            self.phase = Phase.NOT_STARTED
        logger.debug("BattleReset")

    def on_event(self, fn: Callable[[BattleEvent], None]):
        self._listeners.append(fn)

    @property
    def is_complete(self) -> bool:
        return self.phase == Phase.COMPLETE

    def outcome(self) -> str:
        if self.state is None or not self.state.is_complete:
            return "ONGOING"
        return "PLAYER_WIN" if self.state.winner == "player" else "PLAYER_LOSS"

    def move_previews(self) -> List[Tuple[Move, float]]:
        """Player moves paired with their effectiveness against the opponent."""
        if self.state is None:
            return []
        foe = self.state.opponent
        return [(m, self.engine.get_type_effectiveness(m.type, foe.types)) for m in self.state.player.moves]

    # ------------------------------------------------------------------
    # Turn entry points
    # ------------------------------------------------------------------
    def player_move(self, index: int) -> bool:
        """Use the player's move in slot ``index``.

        Returns True when the turn was taken (a move resolved, or the turn was
        passed because no move has PP left); False when the call was rejected
        (not the player's turn, battle over, resolution in flight) or the move
        could not be used this attempt.
        """
        return self._player_turn(index, gated=True)

    def player_pass(self) -> bool:
        """Hand the turn to the opponent; only allowed once every move is out of PP."""
        return self._player_pass(require_empty=True)

    def opponent_move(self, generation: Optional[int] = None) -> bool:
        """Let the AI act. ``generation`` pins the call to one specific battle."""
        if generation is not None and generation != self.generation:
            return False
        begun = self._begin(Phase.AWAITING_OPPONENT)
        if begun is None:
            return False
        state, gen = begun
        try:
            move = choose_move(self.engine, state.opponent, state.player)
            if move is None:
                next_phase = self._skip_turn(state, "opponent")
            else:
                next_phase = self._resolve(state, "opponent", move)
        except Exception as e:
            logger.error("OpponentTurnFailed", error=repr(e), turn=state.turn_count)
            state.log.append(f"Something went wrong during {state.opponent.name}'s turn. It's your move!")
            if state.is_complete:
                next_phase = Phase.COMPLETE
            else:
                next_phase = self._pass_turn(state, "player")
        self._finish(gen, next_phase)
        return True

    def run_auto(self, max_turns: int = 500) -> str:
        """Drive both sides with the AI policy until the battle ends."""
        steps = 0
        while self.state is not None and not self.is_complete and steps < max_turns:
            steps += 1
            if self.phase == Phase.AWAITING_PLAYER:
                player = self.state.player
                mv = choose_move(self.engine, player, self.state.opponent)
                if mv is None:
                    self._player_pass(require_empty=False)
                    continue
                # choose_move already rolled the status gate for this move
                self._player_turn(next(i for i, m in enumerate(player.moves) if m is mv), gated=False)
            elif self.phase == Phase.AWAITING_OPPONENT:
                self.opponent_move()
            else:
                break
        return self.outcome() if self.is_complete else "STALEMATE"

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------
    def _player_turn(self, index: int, gated: bool) -> bool:
        begun = self._begin(Phase.AWAITING_PLAYER)
        if begun is None:
            return False
        state, gen = begun
        player = state.player
        if not 0 <= index < len(player.moves):
            self._finish(gen, Phase.AWAITING_PLAYER)
            raise ValidationError(f"Move slot must be 0-{len(player.moves) - 1}, got {index}")
        move = player.moves[index]
        usable = self.engine.can_use_move(player, move) if gated else move.current_pp > 0
        if not usable:
            if not any(m.current_pp > 0 for m in player.moves):
                return self._finish_player(gen, self._skip_turn(state, "player"))
            state.log.append(f"{player.name} can't use {move.name}!")
            self._finish(gen, Phase.AWAITING_PLAYER)
            return False
        try:
            next_phase = self._resolve(state, "player", move)
        except Exception:
            self._finish(gen, Phase.AWAITING_PLAYER)
            raise
        return self._finish_player(gen, next_phase)

    def _player_pass(self, require_empty: bool) -> bool:
        begun = self._begin(Phase.AWAITING_PLAYER)
        if begun is None:
            return False
        state, gen = begun
        if require_empty and any(m.current_pp > 0 for m in state.player.moves):
            self._finish(gen, Phase.AWAITING_PLAYER)
            return False
        return self._finish_player(gen, self._skip_turn(state, "player"))

    def _finish_player(self, gen: int, next_phase: Phase) -> bool:
        self._finish(gen, next_phase)
        if next_phase == Phase.AWAITING_OPPONENT:
            self._schedule_opponent(gen)
        return True

    def _begin(self, expected: Phase) -> Optional[Tuple[BattleState, int]]:
        with self._lock:
            if self.state is None or self.phase != expected:
                return None
            self.phase = Phase.RESOLVING
            return self.state, self.generation

    def _finish(self, gen: int, next_phase: Phase):
        with self._lock:
            if gen == self.generation:
                self.phase = next_phase

    def _schedule_opponent(self, gen: int):
        if self.scheduler is None:
            return
        self.scheduler(self.settings.opponent_delay, lambda: self.opponent_move(generation=gen))

    def _resolve(self, state: BattleState, side: Side, move: Move) -> Phase:
        attacker = state.combatant(side)
        defender = state.combatant(other_side(side))
        result = self.engine.execute_move(attacker, defender, move)
        dealt = self.engine.apply_damage(defender, result.damage)
        state.log.append(result.message)
        if dealt > 0:
            state.log.append(f"{defender.name} took {dealt} damage!")
        logger.debug("MoveResolved", side=side, move=move.name, damage=dealt, hp=defender.current_hp)
        self._emit(BattleEvent("move_executed", state, side=side, result=result))
        if defender.is_fainted():
            return self._complete(state, side)
        if result.status_effect is not None:
            line = self.engine.inflict_status(defender, result.status_effect)
            if line:
                state.log.append(line)
        return self._end_turn(state, side)

    def _skip_turn(self, state: BattleState, side: Side) -> Phase:
        state.log.append(f"{state.combatant(side).name} has no available moves!")
        return self._end_turn(state, side)

    def _end_turn(self, state: BattleState, side: Side) -> Phase:
        """Status upkeep for the side whose turn it was, then hand over."""
        actor = state.combatant(side)
        state.log.extend(self.engine.status_tick(actor))
        if actor.is_fainted():
            return self._complete(state, other_side(side))
        return self._pass_turn(state, other_side(side))

    def _pass_turn(self, state: BattleState, to: Side) -> Phase:
        state.turn = to
        state.turn_count += 1
        self._emit(BattleEvent("turn_changed", state, side=to))
        return _AWAITING[to]

    def _complete(self, state: BattleState, winner: Side) -> Phase:
        loser = state.combatant(other_side(winner))
        champ = state.combatant(winner)
        state.is_complete = True
        state.winner = winner
        state.log.append(f"{loser.name} fainted!")
        state.log.append(f"{champ.name} wins the battle!")
        logger.info("BattleComplete", winner=winner, pokemon=champ.name, turns=state.turn_count)
        self._emit(BattleEvent("battle_complete", state, side=winner))
        return Phase.COMPLETE

    def _emit(self, event: BattleEvent):
        for fn in self._listeners:
            try:
                fn(event)
            except Exception as e:
                logger.warn("BattleListenerFailed", kind=event.kind, error=repr(e))

__all__ = ["BattleSession", "BattleEvent", "Phase", "timer_scheduler"]
