from __future__ import annotations

import asyncio
import logging
from typing import List, Optional

import anyio
import bcrypt
from sqlalchemy import String, delete, func, insert, literal, not_, select, true, update

from todolists.errors import UniqueConstraintViolation
from todolists.executor import QueryExecutor
from todolists.models.todo import Todo as TodoRow, TodoList as TodoListRow
from todolists.models.user import User as UserRow
from todolists.schemas.todo import Todo, TodoList

logger = logging.getLogger(__name__)

todolists = TodoListRow.__table__
todos = TodoRow.__table__
users = UserRow.__table__


class TodoListRepository:
    """
    Data access for one signed-in user.
    - Built per request with the session's username; every statement filters
      on it, so rows owned by other users are never read or written.
    - ``None`` means "not found"; booleans report whether any row changed.
    - Store failures propagate as ``StoreError``.
    """

    def __init__(self, executor: QueryExecutor, username: Optional[str]) -> None:
        self._executor = executor
        self._username = username

    @property
    def username(self) -> Optional[str]:
        return self._username

    # ------------------------ Read ------------------------

    async def list_all_todo_lists(self) -> List[TodoList]:
        """All lists with their todos: undone lists first, then done lists,
        each group ordered by title ignoring case."""
        # lower() is Unicode-aware on MySQL/PostgreSQL, ASCII-only on SQLite
        all_todolists = (
            select(todolists)
            .where(todolists.c.username == self._username)
            .order_by(func.lower(todolists.c.title).asc(), todolists.c.id.asc())
        )
        all_todos = select(todos).where(todos.c.username == self._username)

        result_todolists, result_todos = await asyncio.gather(
            self._executor.execute(all_todolists),
            self._executor.execute(all_todos),
        )

        by_list: dict[int, list] = {}
        for row in result_todos.rows:
            by_list.setdefault(row["todolist_id"], []).append(row)

        loaded = [
            TodoList(**row, todos=by_list.get(row["id"], []))
            for row in result_todolists.rows
        ]
        return self._partition_todo_lists(loaded)

    def _partition_todo_lists(self, todo_lists: List[TodoList]) -> List[TodoList]:
        undone = [t for t in todo_lists if not self.is_done_todo_list(t)]
        done = [t for t in todo_lists if self.is_done_todo_list(t)]
        return undone + done

    @staticmethod
    def is_done_todo_list(todo_list: TodoList) -> bool:
        return len(todo_list.todos) > 0 and all(todo.done for todo in todo_list.todos)

    @classmethod
    def has_undone_todos(cls, todo_list: TodoList) -> bool:
        return not cls.is_done_todo_list(todo_list)

    async def load_todo_list(self, todolist_id: int) -> Optional[TodoList]:
        find_todolist = select(todolists).where(
            todolists.c.id == todolist_id,
            todolists.c.username == self._username,
        )
        find_todos = select(todos).where(
            todos.c.todolist_id == todolist_id,
            todos.c.username == self._username,
        )

        result_todolist, result_todos = await asyncio.gather(
            self._executor.execute(find_todolist),
            self._executor.execute(find_todos),
        )
        if not result_todolist.rows:
            return None
        return TodoList(**result_todolist.rows[0], todos=result_todos.rows)

    async def list_sorted_todos(self, todo_list: TodoList) -> List[Todo]:
        """Undone todos first, then by title ignoring case."""
        # same backend-dependent lower() as list_all_todo_lists
        stmt = (
            select(todos)
            .where(
                todos.c.todolist_id == todo_list.id,
                todos.c.username == self._username,
            )
            .order_by(todos.c.done.asc(), func.lower(todos.c.title).asc(), todos.c.id.asc())
        )
        result = await self._executor.execute(stmt)
        return [Todo(**row) for row in result.rows]

    async def load_todo(self, todolist_id: int, todo_id: int) -> Optional[Todo]:
        stmt = select(todos).where(
            todos.c.todolist_id == todolist_id,
            todos.c.id == todo_id,
            todos.c.username == self._username,
        )
        result = await self._executor.execute(stmt)
        if not result.rows:
            return None
        return Todo(**result.rows[0])

    async def todo_list_title_exists(self, title: str) -> bool:
        # Advisory only: the (username, title) constraint is what enforces it.
        stmt = select(todolists.c.id).where(
            todolists.c.title == title,
            todolists.c.username == self._username,
        )
        result = await self._executor.execute(stmt)
        return result.row_count > 0

    # ------------------------ Write ------------------------

    async def toggle_todo_done(self, todolist_id: int, todo_id: int) -> bool:
        stmt = (
            update(todos)
            .where(
                todos.c.todolist_id == todolist_id,
                todos.c.id == todo_id,
                todos.c.username == self._username,
            )
            .values(done=not_(todos.c.done))
        )
        result = await self._executor.execute(stmt)
        return result.row_count > 0

    async def delete_todo(self, todolist_id: int, todo_id: int) -> bool:
        stmt = delete(todos).where(
            todos.c.todolist_id == todolist_id,
            todos.c.id == todo_id,
            todos.c.username == self._username,
        )
        result = await self._executor.execute(stmt)
        return result.row_count > 0

    async def complete_all_todos(self, todolist_id: int) -> bool:
        stmt = (
            update(todos)
            .where(
                todos.c.todolist_id == todolist_id,
                not_(todos.c.done),
                todos.c.username == self._username,
            )
            .values(done=true())
        )
        result = await self._executor.execute(stmt)
        return result.row_count > 0

    async def create_todo(self, todolist_id: int, title: str) -> bool:
        # Insert through a select of the owned list so a todo can never point
        # at somebody else's list.
        owned_list = select(
            literal(title, String(100)),
            todolists.c.id,
            todolists.c.username,
        ).where(
            todolists.c.id == todolist_id,
            todolists.c.username == self._username,
        )
        stmt = insert(todos).from_select(["title", "todolist_id", "username"], owned_list)
        result = await self._executor.execute(stmt)
        return result.row_count > 0

    async def delete_todo_list(self, todolist_id: int) -> bool:
        stmt = delete(todolists).where(
            todolists.c.id == todolist_id,
            todolists.c.username == self._username,
        )
        result = await self._executor.execute(stmt)
        return result.row_count > 0

    async def rename_todo_list(self, todolist_id: int, title: str) -> bool:
        stmt = (
            update(todolists)
            .where(
                todolists.c.id == todolist_id,
                todolists.c.username == self._username,
            )
            .values(title=title)
        )
        result = await self._executor.execute(stmt)
        return result.row_count > 0

    async def create_todo_list(self, title: str) -> bool:
        stmt = insert(todolists).values(title=title, username=self._username)
        try:
            result = await self._executor.execute(stmt)
        except UniqueConstraintViolation:
            logger.info("todo list title %r already used by %s", title, self._username)
            return False
        return result.row_count > 0

    # ------------------------ Auth ------------------------

    async def authenticate(self, username: str, password: str) -> bool:
        """Check a password against the stored hash of ``username``.

        Looks the user up globally, not by the username this repository is
        scoped to, since sign-in happens before a session identity exists.
        """
        stmt = select(users.c.password).where(users.c.username == username)
        result = await self._executor.execute(stmt)
        if result.row_count == 0:
            return False
        hashed = result.rows[0]["password"]
        return await anyio.to_thread.run_sync(check_password, password, hashed)


def hash_password(password: str) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def check_password(password: str, hashed: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode("utf-8"), hashed.encode("utf-8"))
    except ValueError:
        # malformed hash, or a password bcrypt refuses to process
        return False
