"""DBClient — owns the MongoDB connection for the files_manager app.

Construction is synchronous and never touches the network. ``start()``
schedules the connect attempt as a background task, so ``is_alive()`` reads
``False`` until the ping comes back. Count queries never raise: failures are
captured in a ``CountResult`` and only collapsed to ``0`` by ``count_or_zero``
and the ``nb_*`` helpers.
"""

from __future__ import annotations

import asyncio
import logging
from contextlib import asynccontextmanager, suppress
from dataclasses import dataclass
from typing import AsyncIterator, Literal

from motor.motor_asyncio import AsyncIOMotorClient

from files_manager.config import DbConfig, mongo_url
from files_manager.store.client import get_motor_client

logger = logging.getLogger(__name__)

ConnectionState = Literal["disconnected", "connected"]

USERS_COLLECTION = "users"
FILES_COLLECTION = "files"


@dataclass(frozen=True)
class CountResult:
    collection: str
    count: int = 0
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def value(self) -> int:
        """The count, with a failed query reported as zero."""
        return self.count if self.ok else 0


class DBClient:
    def __init__(
        self,
        host: str = "localhost",
        port: int = 27017,
        database: str = "files_manager",
        server_selection_timeout_ms: int = 5000,
        client: AsyncIOMotorClient | None = None,  # type: ignore[type-arg]
    ) -> None:
        self.host = host
        self.port = port
        self.db_name = database
        self.url = mongo_url(host, port)
        self._client = client if client is not None else get_motor_client(
            self.url, server_selection_timeout_ms
        )
        self._db = self._client[database]
        self._state: ConnectionState = "disconnected"
        self._task: asyncio.Task | None = None
        self._closed = False

    @classmethod
    def from_config(cls, config: DbConfig) -> DBClient:
        return cls(
            host=config.host,
            port=config.port,
            database=config.database,
            server_selection_timeout_ms=config.server_selection_timeout_ms,
        )

    @property
    def state(self) -> ConnectionState:
        return self._state

    async def connect(self) -> bool:
        """Ping the server once; a failure is logged and leaves the client disconnected."""
        try:
            await self._client.admin.command("ping")
        except Exception as exc:
            logger.error("MongoDB connection error (%s): %s", self.url, exc)
            return False
        self._state = "connected"
        logger.info("Connected to MongoDB at %s (database=%s)", self.url, self.db_name)
        return True

    async def start(self) -> None:
        """Schedule the connect attempt without waiting for it."""
        if self._task is None:
            self._task = asyncio.create_task(self.connect())

    async def wait_connected(self) -> bool:
        """Wait for the pending connect attempt and report liveness.

        The attempt is shielded: cancelling a waiter cancels only the waiter,
        never the shared connect task.
        """
        if self._task is not None:
            try:
                await asyncio.shield(self._task)
            except asyncio.CancelledError:
                if not self._task.cancelled():
                    raise
        return self.is_alive()

    def is_alive(self) -> bool:
        return self._state == "connected"

    async def count_records(self, collection: str) -> CountResult:
        if not self.is_alive():
            logger.warning("Cannot count %s: MongoDB is not connected", collection)
            return CountResult(collection=collection, error="not connected")
        try:
            count = await self._db[collection].count_documents({})
        except Exception as exc:
            logger.error("Error counting %s: %s", collection, exc)
            return CountResult(collection=collection, error=str(exc))
        return CountResult(collection=collection, count=count)

    async def count_or_zero(self, collection: str) -> int:
        result = await self.count_records(collection)
        return result.value

    async def nb_users(self) -> int:
        return await self.count_or_zero(USERS_COLLECTION)

    async def nb_files(self) -> int:
        return await self.count_or_zero(FILES_COLLECTION)

    async def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        if self._task is not None and not self._task.done():
            self._task.cancel()
            with suppress(asyncio.CancelledError):
                await self._task
        self._client.close()
        logger.info("MongoDB client closed")


@asynccontextmanager
async def managed_db_client(config: DbConfig) -> AsyncIterator[DBClient]:
    """Build a DBClient, kick off its connect step, and close it on exit."""
    db_client = DBClient.from_config(config)
    await db_client.start()
    try:
        yield db_client
    finally:
        await db_client.close()
