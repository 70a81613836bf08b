from typing import Annotated, List
from pydantic import BaseModel, ConfigDict, StringConstraints

Title = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=100)]

class TodoBase(BaseModel):
    title: str

class TodoCreate(BaseModel):
    title: Title

class Todo(TodoBase):
    id: int
    done: bool = False
    username: str
    todolist_id: int
    model_config = ConfigDict(from_attributes=True)

class TodoListCreate(BaseModel):
    title: Title

class TodoList(TodoBase):
    id: int
    username: str
    todos: List[Todo] = []
    model_config = ConfigDict(from_attributes=True)

class TodoListSummary(TodoBase):
    id: int
    todo_count: int
    done_count: int
    is_done: bool

class TodoListDetail(TodoBase):
    id: int
    todos: List[Todo]
    is_done: bool
    has_undone_todos: bool

class ToggledTodo(BaseModel):
    todo: Todo
    message: str

class Message(BaseModel):
    message: str
