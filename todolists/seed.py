"""Create the schema and add users.

Users are not created through the API. Run this module to create the
tables and register an account::

    python -m todolists.seed alice "correct horse battery staple"
"""
from __future__ import annotations

import asyncio
import logging
import sys

from sqlalchemy import insert
from sqlalchemy.ext.asyncio import AsyncEngine

from todolists.database import Base, engine as default_engine
from todolists.executor import QueryExecutor
from todolists.models import todo, user  # noqa: F401  register tables on Base
from todolists.repositories.todolist_repo import hash_password

logger = logging.getLogger(__name__)


async def init_db(engine: AsyncEngine) -> None:
    """Create any missing tables."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def create_user(executor: QueryExecutor, username: str, password: str) -> None:
    """Insert a user with a bcrypt hash of ``password``."""
    stmt = insert(user.User.__table__).values(
        username=username,
        password=hash_password(password),
    )
    await executor.execute(stmt)
    logger.info("created user %s", username)


async def run_seeds(username: str, password: str) -> None:
    await init_db(default_engine)
    await create_user(QueryExecutor(default_engine), username, password)
    await default_engine.dispose()


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    if len(sys.argv) != 3:
        sys.exit("usage: python -m todolists.seed <username> <password>")
    asyncio.run(run_seeds(sys.argv[1], sys.argv[2]))
