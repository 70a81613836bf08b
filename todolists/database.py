from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.orm import declarative_base

from todolists.config import DATABASE_URL
from todolists.executor import QueryExecutor

Base = declarative_base()


def make_engine(url: str = DATABASE_URL, **kwargs) -> AsyncEngine:
    engine = create_async_engine(url, future=True, pool_pre_ping=True, **kwargs)
    if engine.dialect.name == "sqlite":
        # SQLite ignores ON DELETE CASCADE unless enabled per connection
        @event.listens_for(engine.sync_engine, "connect")
        def _enable_foreign_keys(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    return engine


engine = make_engine()
executor = QueryExecutor(engine)


async def get_executor() -> QueryExecutor:
    return executor
