"""Entrada principal de la app FastAPI (configura middlewares, excepciones y routers)."""
import logging

from fastapi import FastAPI

from todo_api.api.router import api_router
from todo_api.core.config import settings
from todo_api.core.exceptions import register_exception_handlers
from todo_api.core.logging import setup_logging
from todo_api.core.middleware import add_middlewares
from todo_api.infrastructure.db.database import close_db, db_ready, init_db

_log = logging.getLogger("todo.startup")

setup_logging(settings.log_level)
app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="This is a sample todo starter server.",
)

add_middlewares(app)
register_exception_handlers(app)


# Startup / shutdown
@app.on_event("startup")
def on_startup():
    init_db()
    if not db_ready():
        _log.warning("Base de datos no lista; las peticiones a /todos fallarán con 500")


@app.on_event("shutdown")
def on_shutdown():
    close_db()


# Monta routers bajo el prefijo configurado
app.include_router(api_router, prefix=settings.api_prefix_normalized)
