import asyncio
import inspect
import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")

import pytest
from httpx import ASGITransport, AsyncClient

from todolists.database import get_executor, make_engine
from todolists.executor import QueryExecutor
from todolists.main import app
from todolists.repositories.todolist_repo import TodoListRepository
from todolists.seed import create_user, init_db

USERS = {"alice": "alicepass", "bob": "bobpass"}

@pytest.fixture(autouse=True)
def fresh_event_loop_for_sync_tests(request):
    # Async tests leave the main thread without a current event loop;
    # sync tests calling the Mangum handler need one, as in a fresh process.
    if inspect.iscoroutinefunction(getattr(request.node, "obj", None)):
        yield
        return
    loop = asyncio.new_event_loop()
    asyncio.set_event_loop(loop)
    yield
    asyncio.set_event_loop(None)
    loop.close()

@pytest.fixture(scope="session")
def anyio_backend():
    return "asyncio"

@pytest.fixture
async def engine(tmp_path):
    engine_test = make_engine(f"sqlite+aiosqlite:///{tmp_path / 'todos.db'}")
    await init_db(engine_test)
    yield engine_test
    await engine_test.dispose()

@pytest.fixture
async def executor(engine):
    executor_test = QueryExecutor(engine)
    for username, password in USERS.items():
        await create_user(executor_test, username, password)
    return executor_test

@pytest.fixture
def alice(executor):
    return TodoListRepository(executor, "alice")

@pytest.fixture
def bob(executor):
    return TodoListRepository(executor, "bob")

@pytest.fixture
async def client(executor):
    async def override_get_executor():
        return executor
    app.dependency_overrides[get_executor] = override_get_executor
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()

@pytest.fixture
async def signed_in(client):
    res = await client.post("/users/signin", json={"username": "alice", "password": USERS["alice"]})
    assert res.status_code == 200
    return client
