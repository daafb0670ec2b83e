"""Motor async client setup.

Building the client performs no network I/O; the driver connects lazily
on the first command, which is what lets DBClient stay synchronous to
construct.
"""

from __future__ import annotations

from motor.motor_asyncio import AsyncIOMotorClient


def get_motor_client(uri: str, server_selection_timeout_ms: int = 5000) -> AsyncIOMotorClient:  # type: ignore[type-arg]
    return AsyncIOMotorClient(uri, serverSelectionTimeoutMS=server_selection_timeout_ms)
