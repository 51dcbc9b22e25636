"""
Bootstrap de la base relacional: crea las tablas mínimas si no existen.
Se ejecuta al inicio de la app; no aplica migraciones.
"""
from __future__ import annotations

import logging

from sqlalchemy import Engine, inspect

from todo_api.infrastructure.db.models import Base

_log = logging.getLogger("todo.db.bootstrap")


def ensure_tables(engine: Engine) -> None:
    """Garantiza las tablas declaradas en `Base.metadata` (idempotente)."""
    existing = set(inspect(engine).get_table_names())
    missing = [t.name for t in Base.metadata.sorted_tables if t.name not in existing]
    Base.metadata.create_all(engine)
    if missing:
        _log.info("Tablas creadas: %s", ", ".join(missing))
