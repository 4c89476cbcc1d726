"""SQLite record store adapter.

Implements RecordStorePort using SQLite with aiosqlite for async access.
Each item is one row: its primary key plus its attributes as JSON.
"""

import asyncio
import json
import logging
from pathlib import Path

import aiosqlite

from prefstore.core.ports import RecordStorePort
from prefstore.core.records import Item

from ._validation import item_key, validate_table_name

logger = logging.getLogger(__name__)


class SQLiteRecordStore(RecordStorePort):
    """SQLite-backed record store with connection pooling and async access."""

    def __init__(
        self,
        db_path: str,
        table_name: str,
        key_attribute: str,
        pool_size: int = 5,
    ):
        """Initialize SQLite store with connection pooling.

        Args:
            db_path: Path to SQLite database file.
            table_name: Table holding the items.
            key_attribute: Name of the primary key attribute of stored items.
            pool_size: Number of connections to maintain in the pool.
        """
        self.db_path = Path(db_path)
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self.table_name = validate_table_name(table_name)
        self.key_attribute = key_attribute
        self._pool: list[aiosqlite.Connection] = []
        self._pool_lock = asyncio.Lock()
        self._schema_lock = asyncio.Lock()
        self._pool_size = pool_size
        self._schema_initialized = False

    async def _get_connection(self) -> aiosqlite.Connection:
        """Get a connection from the pool or create a new one."""
        async with self._pool_lock:
            if self._pool:
                return self._pool.pop()
        return await aiosqlite.connect(str(self.db_path))

    async def _return_connection(self, conn: aiosqlite.Connection) -> None:
        """Return a connection to the pool."""
        async with self._pool_lock:
            if len(self._pool) < self._pool_size:
                self._pool.append(conn)
                return
        await conn.close()

    async def close(self) -> None:
        """Close all pooled connections."""
        async with self._pool_lock:
            for conn in self._pool:
                await conn.close()
            self._pool.clear()

    async def _init_schema(self) -> None:
        """Create the items table on first use.

        Only runs once per instance. Subsequent calls are no-ops.
        """
        if self._schema_initialized:
            return

        async with self._schema_lock:
            # Check again after acquiring lock to prevent race
            if self._schema_initialized:
                return

            conn = await self._get_connection()
            try:
                await conn.execute(
                    f"""
                    CREATE TABLE IF NOT EXISTS {self.table_name} (
                        item_key TEXT PRIMARY KEY,
                        attributes TEXT NOT NULL
                    )
                    """
                )
                await conn.commit()
                self._schema_initialized = True
            finally:
                await self._return_connection(conn)

    async def get_item(self, key: str) -> Item | None:
        """Look up an item by its primary key."""
        await self._init_schema()

        conn = await self._get_connection()
        try:
            cursor = await conn.execute(
                f"SELECT attributes FROM {self.table_name} WHERE item_key = ?",
                (key,),
            )
            row = await cursor.fetchone()
        finally:
            await self._return_connection(conn)

        if row is None:
            return None
        return self._row_to_item(key, row[0])

    async def put_item(self, item: Item) -> None:
        """Create or replace an item."""
        key = item_key(item, self.key_attribute)
        await self._init_schema()

        conn = await self._get_connection()
        try:
            await conn.execute(
                f"""
                INSERT OR REPLACE INTO {self.table_name} (item_key, attributes)
                VALUES (?, ?)
                """,
                (key, json.dumps(item.to_dict(), sort_keys=True)),
            )
            await conn.commit()
        finally:
            await self._return_connection(conn)
        logger.debug(f"Stored item {key!r} in {self.table_name}")

    def _row_to_item(self, key: str, attributes_json: str) -> Item:
        """Convert a stored attributes column to an Item.

        Raises:
            ValueError: If the stored JSON is malformed.
        """
        try:
            attributes = json.loads(attributes_json)
        except (json.JSONDecodeError, TypeError) as e:
            logger.error(f"Failed to parse attributes for item {key!r}: {e}")
            raise ValueError(f"Row parsing failed: {e}") from e
        if not isinstance(attributes, dict):
            raise ValueError(f"Attributes for item {key!r} are not an object")
        return Item.from_dict(attributes, primary_key_name=self.key_attribute)
