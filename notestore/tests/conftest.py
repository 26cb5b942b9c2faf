import datetime as dt
import sys
from pathlib import Path

import pytest

# Ensure project root on sys.path
_THIS_DIR = Path(__file__).resolve().parent
_PROJECT_ROOT = _THIS_DIR.parent.parent
if str(_PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(_PROJECT_ROOT))

from notestore.config import DEFAULTS  # noqa: E402
from notestore.db import Store  # noqa: E402


class TickClock:
    """Deterministic UTC clock: every call is one second after the previous."""

    def __init__(self, start=dt.datetime(2025, 1, 1, tzinfo=dt.timezone.utc)):
        self.current = start

    def __call__(self) -> str:
        self.current += dt.timedelta(seconds=1)
        return self.current.isoformat(timespec="microseconds")


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch, tmp_path):
    # Never touch a real user database or config.yaml
    monkeypatch.delenv("NOTESTORE_DB_PATH", raising=False)
    monkeypatch.setenv("NOTESTORE_CONFIG", str(tmp_path / "missing-config.yaml"))
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "xdg"))


@pytest.fixture()
def clock():
    return TickClock()


@pytest.fixture()
def db_path(tmp_path):
    return str(tmp_path / "data" / "notes.db")


@pytest.fixture()
def store(db_path, clock):
    s = Store(db_path, config=dict(DEFAULTS), clock=clock)
    yield s
    s.close()
