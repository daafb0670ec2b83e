"""FastAPI dependency providers.

The DBClient is created by the app lifespan and attached to app.state;
routes retrieve it here via Request injection.
"""

from __future__ import annotations

from fastapi import Request

from files_manager.store.db_client import DBClient


def get_db_client(request: Request) -> DBClient:
    return request.app.state.db_client  # type: ignore[no-any-return]
