from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from sqlalchemy.exc import DBAPIError, IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine
from sqlalchemy.sql import Executable

from todolists.errors import StoreError, UniqueConstraintViolation

logger = logging.getLogger(__name__)

# Structured "duplicate key" codes per driver.
PG_UNIQUE_VIOLATION = "23505"
MYSQL_DUP_ENTRY = 1062
SQLITE_CONSTRAINT_UNIQUE = "SQLITE_CONSTRAINT_UNIQUE"


@dataclass
class QueryResult:
    rows: list[dict[str, Any]] = field(default_factory=list)
    row_count: int = 0


def is_unique_violation(error: DBAPIError) -> bool:
    """Tell a uniqueness failure apart from any other integrity error.

    Looks at the driver's error code, never at the message text:
    - PostgreSQL (asyncpg / psycopg): SQLSTATE 23505
    - MySQL (aiomysql / pymysql): errno 1062
    - SQLite: extended result code SQLITE_CONSTRAINT_UNIQUE
    """
    if not isinstance(error, IntegrityError):
        return False
    orig = error.orig
    sqlstate = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)
    if sqlstate == PG_UNIQUE_VIOLATION:
        return True
    if getattr(orig, "sqlite_errorname", None) == SQLITE_CONSTRAINT_UNIQUE:
        return True
    args = getattr(orig, "args", ())
    return bool(args) and args[0] == MYSQL_DUP_ENTRY


class QueryExecutor:
    """
    Runs one statement per call against the store.
    - Each call checks a connection out of the engine's pool and commits on
      success; nothing spans more than one statement.
    - Row-returning statements yield plain dict rows.
    """

    def __init__(self, engine: AsyncEngine) -> None:
        self.engine = engine

    async def execute(self, statement: Executable, **params: Any) -> QueryResult:
        try:
            async with self.engine.begin() as conn:
                result = await conn.execute(statement, params or None)
                if result.returns_rows:
                    rows = [dict(row) for row in result.mappings().all()]
                    return QueryResult(rows=rows, row_count=len(rows))
                return QueryResult(row_count=max(result.rowcount or 0, 0))
        except DBAPIError as e:
            if is_unique_violation(e):
                logger.info("unique constraint violated: %s", e.orig)
                raise UniqueConstraintViolation(str(e.orig)) from e
            logger.debug("statement failed: %s", e.orig)
            raise StoreError(str(e.orig)) from e
        except SQLAlchemyError as e:
            logger.debug("store unavailable: %s", e)
            raise StoreError(str(e)) from e
