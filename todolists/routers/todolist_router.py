from fastapi import APIRouter, Depends, Response
from typing import List

from todolists.dependencies import get_todolist_service
from todolists.schemas.todo import (
    Message,
    TodoCreate,
    TodoListCreate,
    TodoListDetail,
    TodoListSummary,
    ToggledTodo,
)
from todolists.services.todolist_service import TodoListService

router = APIRouter()

@router.get("", response_model=List[TodoListSummary])
async def list_todo_lists(service: TodoListService = Depends(get_todolist_service)):
    return await service.list_todo_lists()

@router.post("", response_model=Message, status_code=201)
async def create_todo_list(todo_list_in: TodoListCreate, service: TodoListService = Depends(get_todolist_service)):
    await service.create_todo_list(todo_list_in.title)
    return {"message": "The todo list has been created."}

@router.get("/{todolist_id}", response_model=TodoListDetail)
async def get_todo_list(todolist_id: int, service: TodoListService = Depends(get_todolist_service)):
    return await service.get_todo_list(todolist_id)

@router.put("/{todolist_id}", response_model=Message)
async def rename_todo_list(
    todolist_id: int,
    todo_list_in: TodoListCreate,
    service: TodoListService = Depends(get_todolist_service),
):
    await service.rename_todo_list(todolist_id, todo_list_in.title)
    return {"message": "Todo list updated."}

@router.delete("/{todolist_id}", status_code=204)
async def delete_todo_list(todolist_id: int, service: TodoListService = Depends(get_todolist_service)):
    await service.delete_todo_list(todolist_id)
    return Response(status_code=204)

@router.post("/{todolist_id}/todos", response_model=Message, status_code=201)
async def create_todo(
    todolist_id: int,
    todo_in: TodoCreate,
    service: TodoListService = Depends(get_todolist_service),
):
    await service.create_todo(todolist_id, todo_in.title)
    return {"message": "The todo has been created."}

@router.post("/{todolist_id}/todos/{todo_id}/toggle", response_model=ToggledTodo)
async def toggle_todo(todolist_id: int, todo_id: int, service: TodoListService = Depends(get_todolist_service)):
    todo = await service.toggle_todo(todolist_id, todo_id)
    if todo.done:
        message = f'"{todo.title}" marked done.'
    else:
        message = f'"{todo.title}" marked as NOT done!'
    return {"todo": todo, "message": message}

@router.delete("/{todolist_id}/todos/{todo_id}", status_code=204)
async def delete_todo(todolist_id: int, todo_id: int, service: TodoListService = Depends(get_todolist_service)):
    await service.delete_todo(todolist_id, todo_id)
    return Response(status_code=204)

@router.post("/{todolist_id}/complete_all", response_model=Message)
async def complete_all_todos(todolist_id: int, service: TodoListService = Depends(get_todolist_service)):
    await service.complete_all_todos(todolist_id)
    return {"message": "All todos have been marked as done."}
