"""Terminal front-end: pick two Pokemon from the roster and battle."""
from __future__ import annotations
import argparse
import random
import sys
import time
from typing import List, Optional

from rich.console import Console
from rich.prompt import IntPrompt

from pokebattle.battle.engine import BattleEngine
from pokebattle.battle.render import battle_view, move_table
from pokebattle.battle.session import BattleSession, Phase
from pokebattle.core.errors import PokebattleError
from pokebattle.core.logging import logger
from pokebattle.data.roster import find_pokemon, load_roster, sample_roster
from pokebattle.system.settings import Settings

console = Console()

def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="pokebattle", description="One-on-one Pokemon battle simulator")
    ap.add_argument("--player", help="Your Pokemon (roster name or id); random if omitted")
    ap.add_argument("--opponent", help="Opponent Pokemon (roster name or id); random if omitted")
    ap.add_argument("--roster", help="JSON roster file (defaults to the built-in sample roster)")
    ap.add_argument("--auto", action="store_true", help="Let the AI play both sides")
    ap.add_argument("--seed", type=int, help="Seed for reproducible battles")
    ap.add_argument("--level", type=int, help="Battle level override")
    return ap

def _interactive(session: BattleSession, delay: float):
    while session.state is not None and not session.is_complete:
        state = session.state
        console.clear()
        console.print(battle_view(state))
        if session.phase == Phase.AWAITING_OPPONENT:
            time.sleep(delay)
            session.opponent_move()
            continue
        if not any(m.current_pp > 0 for m in state.player.moves):
            session.player_pass()
            continue
        previews = [eff for _, eff in session.move_previews()]
        console.print(move_table(state.player.moves, previews))
        slot = IntPrompt.ask("Choose a move", choices=[str(i + 1) for i in range(len(state.player.moves))])
        session.player_move(slot - 1)
    if session.state is not None:
        console.clear()
        console.print(battle_view(session.state))

def run(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    settings = Settings.load()
    settings.apply()
    if args.level is not None:
        settings.data.level = args.level
        settings.data.normalize()
    rng = random.Random(args.seed)
    try:
        roster = load_roster(args.roster) if args.roster else sample_roster()
        player = find_pokemon(args.player, roster) if args.player else rng.choice(roster)
        opponent = find_pokemon(args.opponent, roster) if args.opponent else rng.choice(roster)
    except PokebattleError as e:
        logger.error("BattleSetupFailed", error=str(e))
        console.print(f"[red]{e}[/]")
        return 2
    session = BattleSession(BattleEngine(rng), settings=settings.data, scheduler=None)
    state = session.start(player, opponent)
    if args.auto:
        outcome = session.run_auto()
        for line in state.log:
            console.print(line)
        console.print(f"[bold]{outcome}[/]")
    else:
        try:
            _interactive(session, settings.data.opponent_delay)
        except (KeyboardInterrupt, EOFError):
            console.print("\n[dim]Battle abandoned.[/]")
            session.reset()
            return 130
    return 0

def main():
    sys.exit(run())

if __name__ == "__main__":
    main()
