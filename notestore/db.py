from __future__ import annotations

# notestore/db.py
import logging
import os
import sqlite3
import threading
from contextlib import contextmanager
from typing import Callable, Iterator, Optional

from .config import read_config, default_data_dir, is_test_env
from .errors import StorageUnavailable, LockContention, translate
from .schema import apply_pragmas, ensure_schema, existing_tables
from .utils import utc_now_iso

logger = logging.getLogger(__name__)

DB_FILENAME = "recallify.db"

# DB path resolution order:
# 1) explicit argument
# 2) env NOTESTORE_DB_PATH
# 3) config.yaml test_db_path (test runs only)
# 4) config.yaml db_path
# 5) <data dir>/recallify/recallify.db


def get_db_path(db_path: str | None = None, cfg: dict | None = None) -> str:
    cfg = cfg if cfg is not None else read_config()
    env_path = os.environ.get("NOTESTORE_DB_PATH")

    if db_path:
        path = db_path
    elif env_path:
        path = env_path
    elif is_test_env() and cfg.get("test_db_path"):
        path = cfg["test_db_path"]
    elif cfg.get("db_path"):
        path = cfg["db_path"]
    else:
        path = os.path.join(default_data_dir(), DB_FILENAME)
    return os.path.expanduser(path)


def open_connection(path: str) -> sqlite3.Connection:
    """
    Open the SQLite file, creating its directory first.
    Autocommit mode: multi-statement writes go through Store.transaction().
    """
    if path != ":memory:":
        dirn = os.path.dirname(os.path.abspath(path))
        os.makedirs(dirn, exist_ok=True)
    conn = sqlite3.connect(path, check_same_thread=False, isolation_level=None)
    conn.row_factory = sqlite3.Row
    return conn


class Store:
    """
    Process-wide handle owning the single connection.

    Create once and pass it to every service call. All access goes through
    session(), which serialises callers on one lock and translates engine
    errors into StoreError kinds.
    """

    def __init__(
        self,
        db_path: str | None = None,
        *,
        config: dict | None = None,
        lock_timeout: float | None = None,
        atomic_cascade: bool | None = None,
        clock: Optional[Callable[[], str]] = None,
    ):
        cfg = config if config is not None else read_config()
        self.path = get_db_path(db_path, cfg)
        timeout = lock_timeout if lock_timeout is not None else cfg.get("lock_timeout")
        # negative means wait forever, same as config.yaml
        self.lock_timeout = None if timeout is None or timeout < 0 else float(timeout)
        self.atomic_cascade = cfg.get("atomic_cascade", True) if atomic_cascade is None else atomic_cascade
        self._clock = clock or utc_now_iso
        self._lock = threading.Lock()
        self._conn: sqlite3.Connection | None = None

        conn = None
        try:
            conn = open_connection(self.path)
            self.journal_mode = apply_pragmas(conn)
            ensure_schema(conn)
        except (sqlite3.Error, OSError) as e:
            if conn is not None:
                conn.close()
            logger.error("cannot open store at %s: %s", self.path, e)
            raise StorageUnavailable(f"cannot open database {self.path}: {e}") from e
        self._conn = conn
        logger.info("store opened at %s (journal_mode=%s)", self.path, self.journal_mode)

    def now(self) -> str:
        return self._clock()

    @property
    def closed(self) -> bool:
        return self._conn is None

    def _acquire(self):
        timeout = -1 if self.lock_timeout is None else self.lock_timeout
        if not self._lock.acquire(timeout=timeout):
            raise LockContention(f"could not acquire store lock within {self.lock_timeout}s")

    @contextmanager
    def session(self) -> Iterator[sqlite3.Connection]:
        """Hold the store lock for one logical operation."""
        self._acquire()
        try:
            if self._conn is None:
                raise StorageUnavailable("store is closed")
            yield self._conn
        except sqlite3.Error as e:
            raise translate(e) from e
        finally:
            self._lock.release()

    @contextmanager
    def transaction(self, conn: sqlite3.Connection) -> Iterator[sqlite3.Connection]:
        """BEGIN IMMEDIATE ... COMMIT, rolled back on any error. Use inside session()."""
        conn.execute("BEGIN IMMEDIATE")
        try:
            yield conn
            conn.execute("COMMIT")
        except BaseException:
            if conn.in_transaction:
                conn.execute("ROLLBACK")
            raise

    def tables(self) -> list[str]:
        with self.session() as conn:
            return existing_tables(conn)

    def close(self):
        self._acquire()
        try:
            if self._conn is not None:
                self._conn.close()
                self._conn = None
                logger.info("store closed: %s", self.path)
        finally:
            self._lock.release()

    def __enter__(self) -> "Store":
        return self

    def __exit__(self, *exc):
        self.close()
