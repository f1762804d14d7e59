# Ensure project root is on sys.path for tests
import sys, pathlib
import pytest

root = pathlib.Path(__file__).resolve().parent
if str(root) not in sys.path:
    sys.path.insert(0, str(root))


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch):
    """Keep Settings.load() away from the real home directory."""
    path = tmp_path / "pokebattle_settings.json"
    monkeypatch.setenv("POKEBATTLE_SETTINGS", str(path))
    return path
