"""Configuración central de la aplicación (Pydantic Settings).

- Carga variables desde .env en la raíz del proyecto.
- Agrupa ajustes por área: App, CORS, Base de datos, Logging.
"""
from pathlib import Path

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Resuelve el .env ubicado en la raíz del proyecto (independiente del CWD)
ENV_FILE = Path(__file__).resolve().parents[2] / ".env"


class Settings(BaseSettings):
    """Conjunto de variables de configuración con valores por defecto razonables.

    Nota: los valores pueden sobreescribirse vía variables de entorno (.env).
    """
    # App
    app_name: str = "Todo Starter API"
    app_version: str = "1.0"
    api_prefix: str = "/api"

    # CORS
    cors_origins: list[str] = ["http://localhost:3000", "http://127.0.0.1:3000"]
    cors_allow_any: bool = False  # Permite todos los orígenes (usa con cuidado)

    # Base de datos (cualquier URL soportada por SQLAlchemy)
    database_url: str = Field(
        "sqlite:///./todos.db",
        validation_alias=AliasChoices("TODO_DATABASE_URL", "DATABASE_URL"),
    )
    database_echo: bool = False  # loggea el SQL emitido

    # Logging
    log_level: str = "INFO"

    @property
    def api_prefix_normalized(self) -> str:
        """Devuelve `api_prefix` con formato consistente.

        - Siempre inicia con '/'
        - Sin '/' final (excepto cuando es solo '/')
        - Si está vacío, devuelve ""
        """
        pref = (self.api_prefix or "").strip()
        if not pref:
            return ""
        if not pref.startswith('/'):
            pref = '/' + pref
        if len(pref) > 1 and pref.endswith('/'):
            pref = pref[:-1]
        return pref

    model_config = SettingsConfigDict(
        env_file=str(ENV_FILE),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # no fallar si hay variables no usadas
    )


settings = Settings()
