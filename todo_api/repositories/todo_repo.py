"""Repo de la tabla `todos`.

- Cada operación es una sola sentencia SQL (con RETURNING) en su propia sesión.
- "No hay fila" (NoResultFound) se traduce a NotFoundError; cualquier otra
  falla de SQLAlchemy se propaga como PersistenceError encadenando la original.
- UPDATE/DELETE que no afectan filas también son NotFoundError.
"""
from __future__ import annotations

import logging
from datetime import timezone
from typing import List

from sqlalchemy import delete, insert, select, update
from sqlalchemy.exc import NoResultFound, SQLAlchemyError

from todo_api.domain.errors import NotFoundError, PersistenceError
from todo_api.domain.todos.schemas import Todo
from todo_api.infrastructure.db.database import SessionFactory
from todo_api.infrastructure.db.models import TodoRow

_log = logging.getLogger("todo.repo")

# Sentencias Core sobre la tabla: sin sincronización de identidad del ORM
_TODOS = TodoRow.__table__
_COLUMNS = (_TODOS.c.id, _TODOS.c.title, _TODOS.c.contents, _TODOS.c.created_at)


def _to_todo(row) -> Todo:
    created_at = row.created_at
    # SQLite devuelve datetimes naive; se guardan siempre en UTC
    if created_at is not None and created_at.tzinfo is None:
        created_at = created_at.replace(tzinfo=timezone.utc)
    return Todo(id=row.id, title=row.title, contents=row.contents, created_at=created_at)


class TodoRepository:
    def __init__(self, session_factory: SessionFactory) -> None:
        self._session_factory = session_factory

    def _run(self, stmt, op: str, todo_id: str | None = None):
        """Ejecuta `stmt` en una transacción y devuelve todas las filas."""
        try:
            with self._session_factory() as session, session.begin():
                return session.execute(stmt).all()
        except SQLAlchemyError as e:
            _log.error("%s failed todo_id=%s: %s", op, todo_id, e)
            raise PersistenceError(f"{op} failed") from e

    def _run_one(self, stmt, op: str, todo_id: str):
        """Igual que `_run` pero exige exactamente una fila afectada."""
        try:
            with self._session_factory() as session, session.begin():
                return session.execute(stmt).one()
        except NoResultFound as e:
            raise NotFoundError() from e
        except SQLAlchemyError as e:
            _log.error("%s failed todo_id=%s: %s", op, todo_id, e)
            raise PersistenceError(f"{op} failed") from e

    def list_todos(self) -> List[Todo]:
        """Lista todas las filas (orden estable por created_at, id)."""
        stmt = select(*_COLUMNS).order_by(_TODOS.c.created_at, _TODOS.c.id)
        return [_to_todo(r) for r in self._run(stmt, "list_todos")]

    def get_todo_by_id(self, todo_id: str) -> Todo:
        stmt = select(*_COLUMNS).where(_TODOS.c.id == todo_id)
        return _to_todo(self._run_one(stmt, "get_todo_by_id", todo_id))

    def create_todo(self, draft: Todo) -> Todo:
        """Inserta title/contents; id y created_at los asigna el store (se ignoran los del draft)."""
        stmt = (
            insert(_TODOS)
            .values(title=draft.title, contents=draft.contents)
            .returning(*_COLUMNS)
        )
        rows = self._run(stmt, "create_todo")
        created = _to_todo(rows[0])
        _log.info("todo creado id=%s", created.id)
        return created

    def update_todo_by_id(self, todo_id: str, changes: Todo) -> Todo:
        """Sobrescribe title/contents; id y created_at no se tocan."""
        stmt = (
            update(_TODOS)
            .where(_TODOS.c.id == todo_id)
            .values(title=changes.title, contents=changes.contents)
            .returning(*_COLUMNS)
        )
        return _to_todo(self._run_one(stmt, "update_todo_by_id", todo_id))

    def delete_todo_by_id(self, todo_id: str) -> str:
        stmt = delete(_TODOS).where(_TODOS.c.id == todo_id).returning(_TODOS.c.id)
        row = self._run_one(stmt, "delete_todo_by_id", todo_id)
        _log.info("todo eliminado id=%s", row.id)
        return row.id
