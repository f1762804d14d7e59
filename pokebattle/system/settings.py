from __future__ import annotations
import json, os
from dataclasses import dataclass, asdict, fields
from pathlib import Path
from typing import Callable, List, Optional
from pokebattle.core.logging import logger

SETTINGS_FILENAME = ".pokebattle_settings.json"
ENV_SETTINGS_PATH = "POKEBATTLE_SETTINGS"

@dataclass
class SettingsData:
    level: int = 50                # level every combatant battles at
    opponent_delay: float = 1.5    # seconds before the opponent acts
    log_level: str = "INFO"        # DEBUG / INFO / WARN / ERROR
    debug: bool = False            # Verbose battle/debug prints

    def normalize(self):
        try:
            self.level = max(1, min(int(self.level), 100))
        except (TypeError, ValueError):
            self.level = 50
        try:
            self.opponent_delay = max(0.0, float(self.opponent_delay))
        except (TypeError, ValueError):
            self.opponent_delay = 1.5
        self.log_level = str(self.log_level).upper()
        if self.log_level not in {"DEBUG","INFO","WARN","ERROR"}:
            self.log_level = "INFO"
        self.debug = bool(self.debug)

class Settings:
    def __init__(self, data: SettingsData, path: Path):
        self.data = data
        self.path = path
        self._listeners: List[Callable[[SettingsData], None]] = []

    @classmethod
    def _resolve_path(cls) -> Path:
        override = os.environ.get(ENV_SETTINGS_PATH)
        if override:
            return Path(override)
        home = Path(os.path.expanduser("~"))
        if home.is_dir() and os.access(home, os.W_OK):
            return home / SETTINGS_FILENAME
        return Path.cwd() / SETTINGS_FILENAME

    @classmethod
    def load(cls, path: Optional[Path] = None) -> "Settings":
        path = Path(path) if path else cls._resolve_path()
        if path.exists():
            try:
                raw = json.loads(path.read_text(encoding="utf-8"))
                # Backfill missing fields (migration safe)
                field_names = {f.name for f in fields(SettingsData)}
                data = SettingsData(**{k: v for k, v in raw.items() if k in field_names})
                data.normalize()
                logger.debug("SettingsLoaded", path=str(path))
                return cls(data, path)
            except (OSError, ValueError, TypeError, AttributeError) as e:
                logger.warn("SettingsParseFailedUsingDefaults", path=str(path), error=str(e))
        data = SettingsData()
        data.normalize()
        return cls(data, path)

    def save(self):
        try:
            self.path.write_text(json.dumps(asdict(self.data), indent=2), encoding="utf-8")
            logger.debug("SettingsSaved", path=str(self.path))
        except OSError as e:
            logger.error("SettingsSaveFailed", error=str(e))

    def apply(self):
        """Push settings into process-wide collaborators (currently the logger level)."""
        logger.set_level("DEBUG" if self.data.debug else self.data.log_level)  # type: ignore[arg-type]
        self._notify()

    def on_change(self, fn: Callable[[SettingsData], None]):
        self._listeners.append(fn)

    def _notify(self):
        for fn in self._listeners:
            fn(self.data)

__all__ = ["Settings", "SettingsData", "SETTINGS_FILENAME"]
