from __future__ import annotations
from typing import List, Optional

from rich.console import Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text
from rich.box import ROUNDED

from pokebattle.core.types import format_types, type_style, type_abbreviation
from .models import BattleCombatant, BattleState, Move

def hp_color(current: int, max_hp: int) -> str:
    ratio = current / max_hp if max_hp > 0 else 0
    if ratio > 0.5:
        return "green"
    if ratio > 0.2:
        return "yellow"
    return "red"

def draw_hp_bar(current: int, max_hp: int, width: int = 20) -> Text:
    if max_hp <= 0:
        return Text("█" * width)
    filled = int(max(0, min(current, max_hp)) / max_hp * width)
    bar = Text("█" * filled, style=hp_color(current, max_hp))
    bar.append("░" * (width - filled), style="dim")
    return bar

def combatant_panel(c: BattleCombatant, title: str, active: bool = False) -> Panel:
    body = Text.from_markup(f"[bold]{c.name}[/]  Lv{c.level}  {format_types(c.types)}\n")
    body.append("HP ")
    body.append_text(draw_hp_bar(c.current_hp, c.max_hp))
    body.append(f" {c.current_hp}/{c.max_hp}")
    if c.status_effect is not None:
        body.append(f"  {c.status_effect.name.upper()}", style="bold magenta")
    return Panel(body, title=title, box=ROUNDED, border_style="bright_white" if active else "dim")

def move_table(moves: List[Move], previews: Optional[List[float]] = None) -> Table:
    table = Table(box=ROUNDED, show_header=True, header_style="bold")
    table.add_column("#", justify="right")
    table.add_column("Move")
    table.add_column("Type")
    table.add_column("Power", justify="right")
    table.add_column("PP", justify="right")
    table.add_column("")
    for i, m in enumerate(moves):
        note = ""
        if previews is not None:
            eff = previews[i]
            note = "Super effective!" if eff > 1 else ("No effect" if eff == 0 else ("Not very effective" if eff < 1 else ""))
        pp_style = "red" if m.current_pp <= 0 else ""
        table.add_row(
            str(i + 1), m.name,
            Text(type_abbreviation(m.type), style=type_style(m.type)),
            str(m.power) if m.power else "-",
            Text(f"{m.current_pp}/{m.pp}", style=pp_style),
            note,
        )
    return table

def battle_view(state: BattleState, log_lines: int = 8) -> Group:
    log = Text("\n".join(state.log[-log_lines:]))
    return Group(
        combatant_panel(state.opponent, "Opponent", active=state.turn == "opponent" and not state.is_complete),
        combatant_panel(state.player, "You", active=state.turn == "player" and not state.is_complete),
        Panel(log, title=f"Battle Log · turn {state.turn_count}", box=ROUNDED),
    )

__all__ = ["hp_color", "draw_hp_bar", "combatant_panel", "move_table", "battle_view"]
