from typing import List

from todolists.errors import ConflictError, NotFoundError, UniqueConstraintViolation
from todolists.repositories.todolist_repo import TodoListRepository
from todolists.schemas.todo import Todo, TodoListDetail, TodoListSummary

DUPLICATE_TITLE = "The list title must be unique."

class TodoListService:
    def __init__(self, repo: TodoListRepository):
        self.repo = repo

    async def list_todo_lists(self) -> List[TodoListSummary]:
        todo_lists = await self.repo.list_all_todo_lists()
        return [
            TodoListSummary(
                id=todo_list.id,
                title=todo_list.title,
                todo_count=len(todo_list.todos),
                done_count=sum(1 for todo in todo_list.todos if todo.done),
                is_done=self.repo.is_done_todo_list(todo_list),
            )
            for todo_list in todo_lists
        ]

    async def get_todo_list(self, todolist_id: int) -> TodoListDetail:
        todo_list = await self._load_todo_list(todolist_id)
        todo_list.todos = await self.repo.list_sorted_todos(todo_list)
        return TodoListDetail(
            id=todo_list.id,
            title=todo_list.title,
            todos=todo_list.todos,
            is_done=self.repo.is_done_todo_list(todo_list),
            has_undone_todos=self.repo.has_undone_todos(todo_list),
        )

    async def create_todo_list(self, title: str) -> None:
        if await self.repo.todo_list_title_exists(title):
            raise ConflictError(DUPLICATE_TITLE)
        # the pre-check can race with another request; the constraint decides
        if not await self.repo.create_todo_list(title):
            raise ConflictError(DUPLICATE_TITLE)

    async def rename_todo_list(self, todolist_id: int, title: str) -> None:
        await self._load_todo_list(todolist_id)
        if await self.repo.todo_list_title_exists(title):
            raise ConflictError(DUPLICATE_TITLE)
        try:
            updated = await self.repo.rename_todo_list(todolist_id, title)
        except UniqueConstraintViolation:
            raise ConflictError(DUPLICATE_TITLE)
        if not updated:
            raise NotFoundError()

    async def delete_todo_list(self, todolist_id: int) -> None:
        if not await self.repo.delete_todo_list(todolist_id):
            raise NotFoundError()

    async def create_todo(self, todolist_id: int, title: str) -> None:
        if not await self.repo.create_todo(todolist_id, title):
            raise NotFoundError()

    async def toggle_todo(self, todolist_id: int, todo_id: int) -> Todo:
        if not await self.repo.toggle_todo_done(todolist_id, todo_id):
            raise NotFoundError()
        todo = await self.repo.load_todo(todolist_id, todo_id)
        if todo is None:
            # deleted by a concurrent request after the toggle
            raise NotFoundError()
        return todo

    async def delete_todo(self, todolist_id: int, todo_id: int) -> None:
        if not await self.repo.delete_todo(todolist_id, todo_id):
            raise NotFoundError()

    async def complete_all_todos(self, todolist_id: int) -> None:
        if await self.repo.complete_all_todos(todolist_id):
            return
        # nothing changed: either every todo was already done or the list
        # isn't ours
        await self._load_todo_list(todolist_id)

    async def _load_todo_list(self, todolist_id: int):
        todo_list = await self.repo.load_todo_list(todolist_id)
        if todo_list is None:
            raise NotFoundError()
        return todo_list
