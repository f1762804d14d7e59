"""Global type metadata: the 18 elemental types, colors & abbreviations.

Provides:
  ELEMENTAL_TYPES: canonical ordered tuple of type names
  TYPE_COLORS_HEX: mapping type -> hex color string (#RRGGBB)
  TYPE_ABBREVIATIONS: mapping type -> 3-letter abbreviation (upper)
  helpers to validate type names and format them for terminal output.
"""
from __future__ import annotations
from typing import Dict, Iterable, Tuple
import re

from .errors import ValidationError

ELEMENTAL_TYPES: Tuple[str, ...] = (
    "normal", "fire", "water", "electric", "grass", "ice",
    "fighting", "poison", "ground", "flying", "psychic", "bug",
    "rock", "ghost", "dragon", "dark", "steel", "fairy",
)

TYPE_COLORS_HEX: Dict[str, str] = {
    "normal": "#A8A77A",
    "fire": "#EE8130",
    "water": "#6390F0",
    "electric": "#F7D02C",
    "grass": "#7AC74C",
    "ice": "#96D9D6",
    "fighting": "#C22E28",
    "poison": "#A33EA1",
    "ground": "#E2BF65",
    "flying": "#A98FF3",
    "psychic": "#F95587",
    "bug": "#A6B91A",
    "rock": "#B6A136",
    "ghost": "#735797",
    "dragon": "#6F35FC",
    "dark": "#705746",
    "steel": "#B7B7CE",
    "fairy": "#D685AD",
}

TYPE_ABBREVIATIONS: Dict[str, str] = {
    "normal": "NRM",
    "fire": "FIR",
    "water": "WTR",
    "grass": "GRS",
    "electric": "ELE",
    "ice": "ICE",
    "fighting": "FGT",
    "poison": "PSN",
    "ground": "GRN",
    "flying": "FLY",
    "psychic": "PSY",
    "bug": "BUG",
    "rock": "RCK",
    "ghost": "GHO",
    "dragon": "DRA",
    "dark": "DRK",
    "steel": "STL",
    "fairy": "FAI",
}

def normalize_type(type_name: str) -> str:
    t = str(type_name).strip().lower()
    if t not in TYPE_ABBREVIATIONS:
        raise ValidationError(f"Unknown elemental type: {type_name!r}")
    return t

def normalize_types(types: Iterable[str]) -> Tuple[str, ...]:
    """Validate a one- or two-type list, dropping duplicates but keeping order."""
    out: list[str] = []
    for t in types:
        norm = normalize_type(t)
        if norm not in out:
            out.append(norm)
    if not 1 <= len(out) <= 2:
        raise ValidationError(f"A Pokemon has one or two types, got {list(types)!r}")
    return tuple(out)

def type_abbreviation(type_name: str) -> str:
    return TYPE_ABBREVIATIONS.get(type_name.lower(), type_name[:3].upper())

def type_style(type_name: str) -> str:
    """Rich style string for a type badge ('' for unknown types)."""
    hex_val = TYPE_COLORS_HEX.get(type_name.lower())
    return f"bold {hex_val}" if hex_val else ""

def format_types(types: Tuple[str,...]) -> str:
    """Rich markup such as ``[bold #EE8130]FIR[/]/[bold #A98FF3]FLY[/]``."""
    parts = []
    for t in types:
        style = type_style(t)
        abbr = type_abbreviation(t)
        parts.append(f"[{style}]{abbr}[/]" if style else abbr)
    return '/'.join(parts)

MARKUP_RE = re.compile(r"\[/?[^\[\]]*\]")

def strip_markup(s: str) -> str:
    return MARKUP_RE.sub('', s)

__all__ = [
    'ELEMENTAL_TYPES','TYPE_COLORS_HEX','TYPE_ABBREVIATIONS',
    'normalize_type','normalize_types','type_abbreviation','type_style',
    'format_types','strip_markup'
]
