# todo_api/infrastructure/db/database.py
import logging
from typing import Callable, Optional

from sqlalchemy import Engine, create_engine, text
from sqlalchemy.engine import make_url
from sqlalchemy.exc import ArgumentError, SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from todo_api.core.config import settings
from todo_api.domain.errors import PersistenceError
from todo_api.infrastructure.db.bootstrap import ensure_tables

_log = logging.getLogger("todo.db")

SessionFactory = Callable[[], Session]

_engine: Optional[Engine] = None
_session_factory: Optional[sessionmaker] = None


def build_engine(url: str, echo: bool = False) -> Engine:
    """
    Crea el engine de SQLAlchemy para `url`.

    SQLite se comparte entre los hilos del threadpool de FastAPI; la variante
    en memoria usa una sola conexión (StaticPool) para no perder la base.
    """
    kwargs = dict(echo=echo)
    if url.startswith("sqlite"):
        kwargs["connect_args"] = {"check_same_thread": False}
        if url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool
    else:
        kwargs["pool_pre_ping"] = True
    return create_engine(url, **kwargs)


def build_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


def init_db(url: Optional[str] = None) -> None:
    """
    Inicializa engine y session factory y valida conexión (SELECT 1).
    Llamar una sola vez en el startup de FastAPI; reinicializar libera el engine previo.
    """
    global _engine, _session_factory
    close_db()
    url = url or settings.database_url
    engine: Optional[Engine] = None
    try:
        engine = build_engine(url, echo=settings.database_echo)
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        ensure_tables(engine)
    except SQLAlchemyError as e:
        # No tumbar la app: deja el store sin inicializar y loggea
        _log.warning("Base de datos no accesible (%s): %s", engine_url_for_log(url), e)
        _discard(engine)
        return
    except Exception as e:
        # p.ej. driver no instalado (ModuleNotFoundError al crear el engine)
        _log.warning("Error inicializando la base (%s): %s", engine_url_for_log(url), e)
        _discard(engine)
        return
    _engine = engine
    _session_factory = build_session_factory(engine)
    _log.info("Conectado a %s", engine_url_for_log(url))


def _discard(engine: Optional[Engine]) -> None:
    global _engine, _session_factory
    if engine is not None:
        engine.dispose()
    _engine = None
    _session_factory = None


def close_db() -> None:
    global _engine, _session_factory
    if _engine is not None:
        _engine.dispose()
        _log.info("Engine liberado")
    _engine = None
    _session_factory = None


def get_session_factory() -> SessionFactory:
    """
    Devuelve la fábrica de sesiones compartida.
    Úsalo al construir repositorios, no en routers.
    """
    if _session_factory is None:
        raise PersistenceError("Database not initialized")
    return _session_factory


def db_ready() -> bool:
    return _session_factory is not None


def engine_url_for_log(url: str) -> str:
    """Oculta la contraseña de la URL antes de loggearla."""
    try:
        return make_url(url).render_as_string(hide_password=True)
    except ArgumentError:
        return "<invalid url>"
