"""
Endpoints CRUD para `todos`.

Los errores de dominio (NotFoundError, PersistenceError) no se capturan aquí:
los serializan los handlers globales de `core/exceptions.py`.
"""
from typing import Annotated, List

from fastapi import APIRouter, Depends, Path, status

from todo_api.api.deps import get_todo_repo
from todo_api.api.schemas.todo import ErrorResponse, TodoIn, TodoOut
from todo_api.repositories.todo_repo import TodoRepository


router = APIRouter(prefix="/todos", tags=["Todo API"])

_NOT_FOUND = {status.HTTP_404_NOT_FOUND: {"model": ErrorResponse, "description": "Not found entity"}}
_INVALID = {status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse, "description": "Invalid todo payload"}}

TodoId = Annotated[str, Path(description="Todo ID")]


@router.get(
    "",
    response_model=List[TodoOut],
    summary="Listar todos",
    description="Get all todos",
)
def get_todos(repo: TodoRepository = Depends(get_todo_repo)) -> List[TodoOut]:
    return [TodoOut.from_domain(t) for t in repo.list_todos()]


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=TodoOut,
    responses=_INVALID,
    summary="Crear todo",
    description="Create new todo",
)
def create_todo(payload: TodoIn, repo: TodoRepository = Depends(get_todo_repo)) -> TodoOut:
    return TodoOut.from_domain(repo.create_todo(payload.to_domain()))


@router.get(
    "/{id}",
    response_model=TodoOut,
    responses=_NOT_FOUND,
    summary="Obtener todo",
    description="Get todo by todo id",
)
def get_todo(id: TodoId, repo: TodoRepository = Depends(get_todo_repo)) -> TodoOut:
    return TodoOut.from_domain(repo.get_todo_by_id(id))


@router.put(
    "/{id}",
    response_model=TodoOut,
    responses={**_INVALID, **_NOT_FOUND},
    summary="Actualizar todo",
    description="Update todo by todo id",
)
def update_todo(
    payload: TodoIn,
    id: TodoId,
    repo: TodoRepository = Depends(get_todo_repo),
) -> TodoOut:
    return TodoOut.from_domain(repo.update_todo_by_id(id, payload.to_domain()))


@router.delete(
    "/{id}",
    response_model=str,
    responses=_NOT_FOUND,
    summary="Eliminar todo",
    description="Remove todo by todo id; responds with the removed todo id",
)
def remove_todo(id: TodoId, repo: TodoRepository = Depends(get_todo_repo)) -> str:
    return repo.delete_todo_by_id(id)
