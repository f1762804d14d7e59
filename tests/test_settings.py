import json

from pokebattle.core.logging import logger
from pokebattle.system.settings import Settings, SettingsData


def test_defaults_when_file_missing(isolated_settings):
    s = Settings.load()
    assert s.path == isolated_settings
    assert s.data == SettingsData()


def test_round_trip_and_backfill(isolated_settings):
    isolated_settings.write_text(json.dumps({"level": 30, "removed_option": True}), encoding="utf-8")
    s = Settings.load()
    assert s.data.level == 30
    assert s.data.opponent_delay == 1.5
    s.data.opponent_delay = 0.5
    s.save()
    assert Settings.load().data.opponent_delay == 0.5


def test_normalize_clamps_values():
    data = SettingsData(level=500, opponent_delay=-3, log_level="verbose")
    data.normalize()
    assert data.level == 100
    assert data.opponent_delay == 0.0
    assert data.log_level == "INFO"


def test_corrupt_file_falls_back_to_defaults(isolated_settings):
    isolated_settings.write_text("[1, 2", encoding="utf-8")
    assert Settings.load().data == SettingsData()


def test_apply_sets_logger_level_and_notifies(isolated_settings):
    s = Settings.load()
    seen = []
    s.on_change(seen.append)
    s.data.log_level = "ERROR"
    try:
        s.apply()
        assert logger.threshold == logger._order["ERROR"]
        assert seen == [s.data]
    finally:
        logger.set_level("INFO")
