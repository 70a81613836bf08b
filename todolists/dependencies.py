from fastapi import Depends, Request

from todolists.database import get_executor
from todolists.errors import UnauthorizedError
from todolists.executor import QueryExecutor
from todolists.repositories.todolist_repo import TodoListRepository
from todolists.services.auth_service import AuthService
from todolists.services.todolist_service import TodoListService


def get_repo(request: Request, executor: QueryExecutor = Depends(get_executor)) -> TodoListRepository:
    # A fresh repository per request, scoped to the session's user
    return TodoListRepository(executor, request.session.get("username"))


def require_signed_in(request: Request) -> str:
    if not request.session.get("signed_in"):
        raise UnauthorizedError("Please sign in.")
    return request.session["username"]


def get_todolist_service(
    _: str = Depends(require_signed_in),
    repo: TodoListRepository = Depends(get_repo),
) -> TodoListService:
    return TodoListService(repo)


def get_auth_service(repo: TodoListRepository = Depends(get_repo)) -> AuthService:
    return AuthService(repo)
