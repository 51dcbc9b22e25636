"""
Dependencias reutilizables para routers (FastAPI Depends).

- Repositorios: se construyen sobre la session factory compartida.
- Mantener esta capa delgada: sin lógica de negocio.
- En tests se reemplazan con `app.dependency_overrides`.
"""
from todo_api.infrastructure.db.database import get_session_factory
from todo_api.repositories.todo_repo import TodoRepository


def get_todo_repo() -> TodoRepository:
    return TodoRepository(get_session_factory())
