import random
import threading

import pytest

from pokebattle.battle.engine import BattleEngine
from pokebattle.battle.models import StatusEffect
from pokebattle.battle.session import BattleSession, Phase
from pokebattle.core.errors import ValidationError
from pokebattle.data.roster import find_pokemon
from pokebattle.system.settings import SettingsData

TACKLE = 3  # Pikachu: Thunder Shock, Thunderbolt, Thunder, Tackle


class DummyRng:
    """Always hits, never crits, never rolls a secondary status, max damage roll."""
    def random(self): return 0.5
    def uniform(self, a, b): return b
    def choice(self, seq): return seq[0]


class ScriptedRng(DummyRng):
    """Plays back ``values`` from random(), then falls back to 0.5."""
    def __init__(self, *values):
        self.values = list(values)
    def random(self): return self.values.pop(0) if self.values else 0.5


class ManualScheduler:
    def __init__(self):
        self.pending = []
    def __call__(self, delay, fn):
        self.pending.append((delay, fn))
    def fire(self):
        _, fn = self.pending.pop(0)
        fn()


def make_session(player="Pikachu", opponent="Squirtle", rng=None, **kw):
    sched = ManualScheduler()
    session = BattleSession(BattleEngine(rng or DummyRng()), settings=SettingsData(opponent_delay=0.25), scheduler=sched, **kw)
    session.start(find_pokemon(player), find_pokemon(opponent))
    return session, sched


def test_faster_side_moves_first():
    session, sched = make_session("Pikachu", "Squirtle")
    assert session.state.turn == "player"
    assert session.phase == Phase.AWAITING_PLAYER
    assert session.state.log == ["Pikachu vs Squirtle!", "Battle begins!", "Pikachu goes first!"]
    assert sched.pending == []


def test_slower_player_waits_for_scheduled_opponent():
    session, sched = make_session("Squirtle", "Pikachu")
    assert session.state.turn == "opponent"
    assert session.phase == Phase.AWAITING_OPPONENT
    assert session.state.log[-1] == "Pikachu goes first!"
    assert [d for d, _ in sched.pending] == [0.25]
    assert not session.player_move(0)


def test_speed_tie_goes_to_player():
    session, _ = make_session("Pikachu", "Pikachu")
    assert session.state.turn == "player"


def test_turns_alternate_and_battle_ends():
    session, sched = make_session()
    state = session.state
    assert session.player_move(TACKLE)
    assert state.opponent.current_hp == 44 - 16
    assert state.log[-2:] == ["Pikachu used Tackle!", "Squirtle took 16 damage!"]
    assert state.turn == "opponent" and state.turn_count == 2
    assert session.phase == Phase.AWAITING_OPPONENT
    assert len(sched.pending) == 1

    assert not session.player_move(TACKLE)  # second click while the opponent is up
    assert state.opponent.current_hp == 28

    sched.fire()
    assert state.player.current_hp == 35 - 28
    assert state.log[-2:] == ["Squirtle used Water Gun!", "Pikachu took 28 damage!"]
    assert state.turn == "player" and state.turn_count == 3

    assert session.player_move(0)
    assert state.opponent.current_hp == 0
    assert state.is_complete and state.winner == "player"
    assert state.log[-2:] == ["Squirtle fainted!", "Pikachu wins the battle!"]
    assert session.outcome() == "PLAYER_WIN"
    assert session.is_complete
    assert sched.pending == []
    assert not session.player_move(TACKLE)
    assert not session.opponent_move()


def test_opponent_can_win():
    session, sched = make_session("Squirtle", "Pikachu")
    sched.fire()
    state = session.state
    assert state.log[-4:] == [
        "Pikachu used Thunder Shock! It's super effective!",
        "Squirtle took 44 damage!",
        "Squirtle fainted!",
        "Pikachu wins the battle!",
    ]
    assert state.winner == "opponent"
    assert session.outcome() == "PLAYER_LOSS"


def test_stale_callback_after_reset_is_ignored():
    session, sched = make_session("Squirtle", "Pikachu")
    session.reset()
    assert session.state is None and session.phase == Phase.NOT_STARTED
    sched.fire()
    assert session.state is None
    assert session.outcome() == "ONGOING"


def test_stale_callback_does_not_touch_new_battle():
    session, sched = make_session("Squirtle", "Pikachu")
    state = session.start(find_pokemon("Squirtle"), find_pokemon("Pikachu"))
    assert len(sched.pending) == 2
    sched.fire()  # from the first battle
    assert state.log[-1] == "Pikachu goes first!"
    assert session.phase == Phase.AWAITING_OPPONENT
    sched.fire()
    assert state.is_complete


def test_calls_during_resolution_are_rejected():
    session, _ = make_session()
    reentrant = []
    session.on_event(lambda ev: reentrant.append(session.player_move(TACKLE)) if ev.kind == "move_executed" else None)
    assert session.player_move(TACKLE)
    assert reentrant == [False]
    assert session.state.opponent.current_hp == 28


def test_unusable_move_keeps_the_turn():
    session, sched = make_session()
    state = session.state
    state.player.status_effect = StatusEffect("sleep", 2)
    assert not session.player_move(0)
    assert state.log[-1] == "Pikachu can't use Thunder Shock!"
    assert session.phase == Phase.AWAITING_PLAYER
    assert state.turn_count == 1
    state.player.status_effect = None
    state.player.moves[1].current_pp = 0
    assert not session.player_move(1)
    assert state.log[-1] == "Pikachu can't use Thunderbolt!"
    assert sched.pending == []


def test_invalid_slot_raises_and_keeps_phase():
    session, _ = make_session()
    with pytest.raises(ValidationError):
        session.player_move(4)
    assert session.phase == Phase.AWAITING_PLAYER
    assert session.player_move(TACKLE)


def test_opponent_without_moves_passes():
    session, sched = make_session()
    for m in session.state.opponent.moves:
        m.current_pp = 0
    session.player_move(TACKLE)
    sched.fire()
    state = session.state
    assert state.log[-1] == "Squirtle has no available moves!"
    assert state.turn == "player" and state.turn_count == 3
    assert session.phase == Phase.AWAITING_PLAYER


def test_frozen_opponent_still_thaws_when_it_cannot_act():
    session, sched = make_session(rng=ScriptedRng(*[0.9] * 18))  # every status gate fails
    state = session.state
    state.opponent.stats.hp = state.opponent.current_hp = 1000
    state.opponent.status_effect = StatusEffect("freeze", 3)
    session.player_move(TACKLE)
    sched.fire()
    assert state.log[-1] == "Squirtle has no available moves!"
    assert state.opponent.status_effect.turns_remaining == 2
    assert state.turn == "player" and state.turn_count == 3
    for _ in range(2):
        session.player_move(TACKLE)
        sched.fire()
    assert state.log[-2:] == ["Squirtle has no available moves!", "Squirtle thawed out!"]
    assert state.opponent.status_effect is None


def test_opponent_without_moves_still_takes_burn_damage():
    session, sched = make_session()
    state = session.state
    for m in state.opponent.moves:
        m.current_pp = 0
    state.opponent.status_effect = StatusEffect("burn", 3)
    session.player_move(TACKLE)
    sched.fire()
    assert state.log[-2:] == ["Squirtle has no available moves!", "Squirtle is hurt by its burn!"]
    assert state.opponent.current_hp == 44 - 16 - 5
    assert session.phase == Phase.AWAITING_PLAYER


def test_poison_tick_on_a_skipped_turn_can_end_the_battle():
    session, sched = make_session()
    state = session.state
    for m in state.opponent.moves:
        m.current_pp = 0
    state.opponent.current_hp = 20
    state.opponent.status_effect = StatusEffect("poison", 3)
    session.player_move(TACKLE)
    sched.fire()
    assert state.log[-4:] == [
        "Squirtle has no available moves!", "Squirtle is hurt by poison!",
        "Squirtle fainted!", "Pikachu wins the battle!",
    ]
    assert session.outcome() == "PLAYER_WIN"
    assert session.phase == Phase.COMPLETE


def test_player_out_of_pp_passes_the_turn():
    session, sched = make_session()
    state = session.state
    for m in state.player.moves:
        m.current_pp = 0
    assert session.player_move(0)
    assert state.log[-1] == "Pikachu has no available moves!"
    assert state.turn == "opponent" and state.turn_count == 2
    assert session.phase == Phase.AWAITING_OPPONENT
    assert len(sched.pending) == 1


def test_player_pass_requires_empty_moves():
    session, sched = make_session()
    state = session.state
    assert not session.player_pass()
    assert session.phase == Phase.AWAITING_PLAYER
    for m in state.player.moves:
        m.current_pp = 0
    assert session.player_pass()
    assert state.log[-1] == "Pikachu has no available moves!"
    assert session.phase == Phase.AWAITING_OPPONENT
    assert len(sched.pending) == 1


def test_run_auto_rolls_the_status_gate_once():
    # four passing sleep rolls for the move choice, then 0.5 would fail a second roll
    session, _ = make_session(rng=ScriptedRng(0.1, 0.1, 0.1, 0.1))
    session.state.player.status_effect = StatusEffect("sleep", 3)
    assert session.run_auto(max_turns=1) == "PLAYER_WIN"
    assert not any("can't use" in line for line in session.state.log)


def test_run_auto_passes_a_player_that_cannot_act():
    session, _ = make_session(rng=ScriptedRng(0.9, 0.9, 0.9, 0.9))
    state = session.state
    state.player.status_effect = StatusEffect("sleep", 3)
    assert session.run_auto(max_turns=1) == "STALEMATE"
    assert state.log[-1] == "Pikachu has no available moves!"
    assert state.player.status_effect.turns_remaining == 2
    assert state.turn == "opponent"


def test_opponent_failure_hands_turn_back():
    session, sched = make_session()
    session.player_move(TACKLE)

    def boom(*args, **kwargs):
        raise RuntimeError("engine exploded")
    session.engine.execute_move = boom
    sched.fire()
    state = session.state
    assert state.log[-1] == "Something went wrong during Squirtle's turn. It's your move!"
    assert state.turn == "player" and state.turn_count == 3
    assert session.phase == Phase.AWAITING_PLAYER
    assert not state.is_complete


def test_events_and_failing_listener():
    session, sched = make_session()
    kinds = []
    session.on_event(lambda ev: kinds.append((ev.kind, ev.side)))
    session.on_event(lambda ev: 1 / 0)
    session.player_move(TACKLE)
    sched.fire()
    session.player_move(0)
    assert kinds == [
        ("move_executed", "player"), ("turn_changed", "opponent"),
        ("move_executed", "opponent"), ("turn_changed", "player"),
        ("move_executed", "player"), ("battle_complete", "player"),
    ]


def test_burn_tick_can_end_the_battle():
    session, _ = make_session()
    state = session.state
    state.player.current_hp = 1
    state.player.status_effect = StatusEffect("burn", 3)
    session.player_move(TACKLE)
    assert state.opponent.current_hp == 44 - 8  # burn halves physical damage
    assert state.log[-3:] == ["Pikachu is hurt by its burn!", "Pikachu fainted!", "Squirtle wins the battle!"]
    assert state.winner == "opponent"
    assert session.phase == Phase.COMPLETE


def test_move_previews():
    session, _ = make_session()
    assert [eff for _, eff in session.move_previews()] == [2.0, 2.0, 2.0, 1.0]


def test_run_auto_finishes():
    session = BattleSession(BattleEngine(random.Random(7)), scheduler=None)
    session.start(find_pokemon("Charmander"), find_pokemon("Bulbasaur"))
    assert session.run_auto() in {"PLAYER_WIN", "PLAYER_LOSS"}
    assert session.state.is_complete
    assert session.state.log[-1].endswith("wins the battle!")


def test_timer_scheduler_drives_the_opponent():
    done = threading.Event()
    session = BattleSession(BattleEngine(DummyRng()), settings=SettingsData(opponent_delay=0.0))
    session.on_event(lambda ev: done.set() if ev.kind == "battle_complete" else None)
    session.start(find_pokemon("Squirtle"), find_pokemon("Pikachu"))
    assert done.wait(timeout=5)
    assert session.outcome() == "PLAYER_LOSS"
