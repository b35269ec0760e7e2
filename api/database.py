"""
Database connection management for the API.

The query client is an explicitly constructed object: ``create_app()``
builds (or is handed) one ``Database`` at startup and stores it on
``app.state``.  Routes receive per-request connections through the
``get_db`` dependency.

DATABASE_URL forms accepted:
    sqlite:///relative/path.sqlite
    sqlite:////absolute/path.sqlite
    /plain/file/path.sqlite
"""

import logging
import sqlite3
from collections.abc import Generator, Iterator
from contextlib import contextmanager
from pathlib import Path

from fastapi import HTTPException, Request

from utils.config import AppConfig, ConfigurationError

logger = logging.getLogger(__name__)

_SQLITE_PREFIX = "sqlite:///"


def parse_database_url(url: str) -> Path:
    """Return the SQLite file path named by *url*.

    Raises:
        ConfigurationError: empty URL or a scheme other than sqlite.
    """
    url = (url or "").strip()
    if not url:
        raise ConfigurationError("DATABASE_URL is empty")
    if url.startswith(_SQLITE_PREFIX):
        path = url[len(_SQLITE_PREFIX):]
        if not path:
            raise ConfigurationError(f"DATABASE_URL has no database path: {url!r}")
        return Path(path)
    if "://" in url:
        scheme = url.split("://", 1)[0]
        raise ConfigurationError(
            f"Unsupported database scheme '{scheme}'. Use sqlite:///path/to/db.sqlite"
        )
    return Path(url)


class Database:
    """SQLite query client.  Created once per process and held for its lifetime."""

    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    @classmethod
    def from_url(cls, url: str) -> "Database":
        return cls(parse_database_url(url))

    @classmethod
    def from_env(cls, cfg: AppConfig | None = None) -> "Database":
        """Build from DATABASE_URL.

        Raises:
            ConfigurationError: DATABASE_URL is unset or unusable.
        """
        cfg = cfg or AppConfig.from_env()
        db = cls.from_url(cfg.require_database_url())
        logger.info("using database %s", db.path)
        return db

    def exists(self) -> bool:
        return self.path.exists()

    @contextmanager
    def connect(self, read_only: bool = True) -> Iterator[sqlite3.Connection]:
        """Open a connection, closing it when the block exits."""
        if read_only:
            conn = sqlite3.connect(f"file:{self.path}?mode=ro", uri=True,
                                   check_same_thread=False, timeout=10)
        else:
            conn = sqlite3.connect(str(self.path), check_same_thread=False, timeout=10)
        conn.row_factory = sqlite3.Row
        conn.execute("PRAGMA busy_timeout=5000")
        try:
            yield conn
        finally:
            conn.close()


def get_database(request: Request) -> Database:
    """Return the Database held by the running application."""
    return request.app.state.database


def get_db(request: Request) -> Generator[sqlite3.Connection, None, None]:
    """FastAPI dependency: yield a SQLite connection, close on exit.

    Raises HTTP 503 with a friendly message if the database file is missing,
    instead of a cryptic SQLite error.

    Usage in a route::

        @router.get("/example")
        def example(conn=Depends(get_db)):
            ...
    """
    db = get_database(request)
    if not db.exists():
        raise HTTPException(
            status_code=503,
            detail=(
                f"Database not found at '{db.path}'. "
                "Run 'python build_advocates_db.py' to build it."
            ),
        )
    with db.connect() as conn:
        yield conn
