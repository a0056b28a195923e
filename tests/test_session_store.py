import os
import tempfile
import unittest

from api.models import Role, Session
from store import database as store_database
from store.session_store import TOKEN_KEY, USER_KEY, SessionStore


class SessionStoreTestCase(unittest.IsolatedAsyncioTestCase):
    def setUp(self):
        # Point the store at a temporary file
        self.temp_dir = tempfile.TemporaryDirectory()
        self.db_path = os.path.join(self.temp_dir.name, "nested", "storage.sqlite")
        self.store = SessionStore(self.db_path)
        self.session = Session(
            id="u1",
            name="Ada",
            email="ada@example.com",
            role=Role.SELLER,
            token="tok",
            wallet_balance=2500,
        )

    def tearDown(self):
        self.temp_dir.cleanup()

    async def _put_raw(self, key, value):
        async with store_database.connect(self.db_path) as conn:
            await conn.execute(
                "INSERT OR REPLACE INTO local_storage(key, value) VALUES (?, ?);",
                (key, value),
            )
            await conn.commit()

    async def test_empty_store_loads_nothing(self):
        self.assertIsNone(await self.store.load())
        self.assertTrue(os.path.exists(self.db_path))

    async def test_save_then_load_after_restart(self):
        await self.store.save(self.session)

        # a fresh store object on the same file, as after a restart
        restored = await SessionStore(self.db_path).load()
        self.assertEqual(restored, self.session)

    async def test_session_without_token(self):
        await self.store.save(self.session)
        no_token = Session("u1", "Ada", "ada@example.com", Role.BUYER)
        await self.store.save(no_token)

        restored = await self.store.load()
        self.assertEqual(restored, no_token)
        self.assertIsNone(restored.token)

    async def test_malformed_user_is_ignored(self):
        await self._put_raw(USER_KEY, "{not json")
        await self._put_raw(TOKEN_KEY, "tok")
        self.assertIsNone(await self.store.load())

        await self._put_raw(USER_KEY, '{"id": "u1", "role": "pirate"}')
        self.assertIsNone(await self.store.load())

        await self._put_raw(USER_KEY, "null")
        self.assertIsNone(await self.store.load())

    async def test_token_without_user_is_absent(self):
        await self._put_raw(TOKEN_KEY, "tok")
        self.assertIsNone(await self.store.load())

    async def test_blank_token_reads_as_none(self):
        await self._put_raw(USER_KEY, '{"id": "u1", "name": "A", "role": "rider"}')
        await self._put_raw(TOKEN_KEY, "   ")
        restored = await self.store.load()
        self.assertEqual(restored.role, Role.RIDER)
        self.assertIsNone(restored.token)

    async def test_clear_removes_everything(self):
        await self.store.save(self.session)
        await self.store.clear()
        self.assertIsNone(await self.store.load())

        async with store_database.connect(self.db_path) as conn:
            cur = await conn.execute("SELECT COUNT(*) FROM local_storage;")
            row = await cur.fetchone()
            await cur.close()
        self.assertEqual(row[0], 0)


if __name__ == "__main__":
    unittest.main()
