from __future__ import annotations

import json
from typing import Dict, Optional

from api.errors import MalformedResponseError
from api.models import Session
from store.database import connect
from utils.logger import get_logger

_logger = get_logger(__name__)

USER_KEY = "user"
TOKEN_KEY = "token"


class SessionStore:
    """
    Persists the logged-in user between runs, the same two values the web
    client kept in localStorage: the serialized user object and the token.
    """

    def __init__(self, path: Optional[str] = None) -> None:
        self.path = path

    async def _read_all(self) -> Dict[str, str]:
        async with connect(self.path) as conn:
            cur = await conn.execute("SELECT key, value FROM local_storage;")
            rows = await cur.fetchall()
            await cur.close()
        return {row["key"]: row["value"] for row in rows}

    async def load(self) -> Optional[Session]:
        """Return the saved session, or None if nothing usable is stored."""
        values = await self._read_all()
        raw_user = values.get(USER_KEY)
        if not raw_user:
            return None

        try:
            user = json.loads(raw_user)
            token = (values.get(TOKEN_KEY) or "").strip() or None
            return Session.from_json(user, token=token)
        except (ValueError, MalformedResponseError) as e:
            _logger.warning(f"Ignoring malformed stored session: {e}")
            return None

    async def save(self, session: Session) -> None:
        async with connect(self.path) as conn:
            await conn.execute(
                "INSERT OR REPLACE INTO local_storage(key, value) VALUES (?, ?);",
                (USER_KEY, json.dumps(session.to_json())),
            )
            if session.token:
                await conn.execute(
                    "INSERT OR REPLACE INTO local_storage(key, value) VALUES (?, ?);",
                    (TOKEN_KEY, session.token),
                )
            else:
                await conn.execute(
                    "DELETE FROM local_storage WHERE key = ?;", (TOKEN_KEY,)
                )
            await conn.commit()

    async def clear(self) -> None:
        async with connect(self.path) as conn:
            await conn.execute("DELETE FROM local_storage;")
            await conn.commit()
