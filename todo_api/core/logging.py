"""
Configuración de logging para la aplicación e integración con Uvicorn.
"""
import logging


def setup_logging(level: str = "INFO") -> None:
    resolved = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(
        level=resolved,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )
    for name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
        logging.getLogger(name).setLevel(resolved)
    # El SQL emitido solo se ve si DATABASE_ECHO=true
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
