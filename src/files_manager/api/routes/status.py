"""GET /status and GET /stats — database liveness and document counts."""

from __future__ import annotations

import asyncio

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from files_manager.api.dependencies import get_db_client
from files_manager.store.db_client import DBClient

router = APIRouter()


class DbStatus(BaseModel):
    db: bool


class Stats(BaseModel):
    users: int = Field(ge=0)
    files: int = Field(ge=0)


@router.get("/status", response_model=DbStatus)
async def status(db_client: DBClient = Depends(get_db_client)) -> DbStatus:
    return DbStatus(db=db_client.is_alive())


@router.get("/stats", response_model=Stats)
async def stats(db_client: DBClient = Depends(get_db_client)) -> Stats:
    """Count users and files concurrently; a failed count reports as 0."""
    users, files = await asyncio.gather(db_client.nb_users(), db_client.nb_files())
    return Stats(users=users, files=files)
