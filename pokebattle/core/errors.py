"""
Error classes for clearer exception sources.
"""
from __future__ import annotations

class PokebattleError(Exception):
    pass

class DataLoadError(PokebattleError):
    def __init__(self, path: str, detail: str):
        super().__init__(f"Failed to load {path}: {detail}")
        self.path = path
        self.detail = detail

class ValidationError(PokebattleError):
    pass

__all__ = ["PokebattleError", "DataLoadError", "ValidationError"]
