# manages the local sqlite file standing in for browser local storage
import asyncio
import os
from contextlib import asynccontextmanager
from sqlite3 import Row

import aiosqlite

from utils.logger import get_logger

_logger = get_logger(__name__)

DB_PATH = "data/local_storage.sqlite"

SCHEMA = """
CREATE TABLE IF NOT EXISTS local_storage (
    key   TEXT PRIMARY KEY,
    value TEXT NOT NULL
);
"""

_initialized: set[str] = set()
_init_lock = asyncio.Lock()


async def _init_db(conn: aiosqlite.Connection) -> None:
    await conn.executescript(SCHEMA)
    await conn.commit()


@asynccontextmanager
async def connect(path: str | None = None) -> aiosqlite.Connection:
    """Async context manager yielding an aiosqlite connection.

    Creates the parent directory and the key/value table on first use of a path.
    """
    path = path or DB_PATH
    parent = os.path.dirname(path)
    if parent:
        os.makedirs(parent, exist_ok=True)

    conn = await aiosqlite.connect(path)
    conn.row_factory = Row

    if path not in _initialized:
        async with _init_lock:
            if path not in _initialized:
                _logger.info(f"Initializing local storage at {path}...")
                await _init_db(conn)
                _initialized.add(path)
    try:
        yield conn
    finally:
        await conn.close()
