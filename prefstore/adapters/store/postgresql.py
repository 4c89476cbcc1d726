"""PostgreSQL record store adapter.

Implements RecordStorePort using PostgreSQL with asyncpg for async access.
Item attributes are kept in a JSONB column next to the primary key.
"""

import asyncio
import json
import logging
from typing import Any

import asyncpg

from prefstore.core.ports import RecordStorePort
from prefstore.core.records import Item

from ._validation import item_key, validate_table_name

logger = logging.getLogger(__name__)


class PostgreSQLRecordStore(RecordStorePort):
    """PostgreSQL-backed record store with connection pooling and async access."""

    def __init__(
        self,
        table_name: str,
        key_attribute: str,
        host: str = "localhost",
        port: int = 5432,
        database: str = "prefstore",
        user: str = "prefstore",
        password: str = "",
        pool_size: int = 10,
    ):
        """Initialize PostgreSQL store with connection pooling.

        Args:
            table_name: Table holding the items.
            key_attribute: Name of the primary key attribute of stored items.
            host: PostgreSQL server hostname.
            port: PostgreSQL server port.
            database: Database name.
            user: Database user.
            password: Database password.
            pool_size: Number of connections to maintain in the pool.
        """
        self.table_name = validate_table_name(table_name)
        self.key_attribute = key_attribute
        self.host = host
        self.port = port
        self.database = database
        self.user = user
        self.password = password
        self._pool: asyncpg.Pool | None = None
        self._pool_size = pool_size
        self._schema_lock = asyncio.Lock()
        self._schema_initialized = False

    async def _init_pool(self) -> None:
        """Initialize the connection pool on first use."""
        if self._pool is not None:
            return

        self._pool = await asyncpg.create_pool(
            host=self.host,
            port=self.port,
            database=self.database,
            user=self.user,
            password=self.password,
            min_size=1,
            max_size=self._pool_size,
        )

    async def close(self) -> None:
        """Close all pooled connections."""
        if self._pool is not None:
            await self._pool.close()
            self._pool = None

    async def _init_schema(self) -> None:
        """Create the items table on first use.

        Only runs once per instance. Subsequent calls are no-ops.
        """
        if self._schema_initialized:
            return

        async with self._schema_lock:
            if self._schema_initialized:
                return

            await self._init_pool()
            assert self._pool is not None

            async with self._pool.acquire() as conn:
                await conn.execute(
                    f"""
                    CREATE TABLE IF NOT EXISTS {self.table_name} (
                        item_key TEXT PRIMARY KEY,
                        attributes JSONB NOT NULL
                    )
                    """
                )
            self._schema_initialized = True

    async def get_item(self, key: str) -> Item | None:
        """Look up an item by its primary key."""
        await self._init_schema()
        await self._init_pool()
        assert self._pool is not None

        async with self._pool.acquire() as conn:
            row = await conn.fetchrow(
                f"SELECT attributes FROM {self.table_name} WHERE item_key = $1",
                key,
            )
        if row is None:
            return None

        return self._row_to_item(key, row["attributes"])

    async def put_item(self, item: Item) -> None:
        """Create or replace an item."""
        key = item_key(item, self.key_attribute)
        await self._init_schema()
        await self._init_pool()
        assert self._pool is not None

        async with self._pool.acquire() as conn:
            await conn.execute(
                f"""
                INSERT INTO {self.table_name} (item_key, attributes)
                VALUES ($1, $2::jsonb)
                ON CONFLICT (item_key) DO UPDATE SET attributes = EXCLUDED.attributes
                """,
                key,
                json.dumps(item.to_dict()),
            )
        logger.debug(f"Stored item {key!r} in {self.table_name}")

    def _row_to_item(self, key: str, attributes: Any) -> Item:
        """Convert a stored attributes column to an Item.

        Raises:
            ValueError: If the stored JSON is malformed.
        """
        # asyncpg returns JSONB as text unless a codec is registered
        if isinstance(attributes, str):
            try:
                attributes = json.loads(attributes)
            except json.JSONDecodeError as e:
                logger.error(f"Failed to parse attributes for item {key!r}: {e}")
                raise ValueError(f"Row parsing failed: {e}") from e
        if not isinstance(attributes, dict):
            raise ValueError(f"Attributes for item {key!r} are not an object")
        return Item.from_dict(attributes, primary_key_name=self.key_attribute)
