import pytest
from sqlalchemy import insert, text

from todolists.errors import StoreError, UniqueConstraintViolation
from todolists.models.todo import TodoList

pytestmark = pytest.mark.anyio

todolists = TodoList.__table__


async def test_select_returns_dict_rows_and_count(executor):
    await executor.execute(insert(todolists).values(title="Work", username="alice"))
    await executor.execute(insert(todolists).values(title="Home", username="alice"))

    result = await executor.execute(
        text("SELECT title FROM todolists WHERE username = :username ORDER BY title"),
        username="alice",
    )
    assert result.rows == [{"title": "Home"}, {"title": "Work"}]
    assert result.row_count == 2


async def test_write_reports_affected_rows(executor):
    result = await executor.execute(insert(todolists).values(title="Work", username="alice"))
    assert result.rows == []
    assert result.row_count == 1

    result = await executor.execute(text("UPDATE todolists SET title = 'Play' WHERE username = :u"), u="nobody")
    assert result.row_count == 0


async def test_unique_violation_is_discriminated(executor):
    await executor.execute(insert(todolists).values(title="Work", username="alice"))

    with pytest.raises(UniqueConstraintViolation) as excinfo:
        await executor.execute(insert(todolists).values(title="Work", username="alice"))
    assert isinstance(excinfo.value, StoreError)


async def test_other_failures_raise_store_error(executor):
    with pytest.raises(StoreError) as excinfo:
        await executor.execute(text("SELECT * FROM no_such_table"))
    assert not isinstance(excinfo.value, UniqueConstraintViolation)


async def test_foreign_key_failure_is_not_a_unique_violation(executor):
    stmt = text("INSERT INTO todos (title, done, username, todolist_id) VALUES ('x', 0, 'alice', 999)")
    with pytest.raises(StoreError) as excinfo:
        await executor.execute(stmt)
    assert not isinstance(excinfo.value, UniqueConstraintViolation)
