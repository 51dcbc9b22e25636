"""
Global exception handlers for consistent API errors.

Toda respuesta de error usa el sobre {"errors": [{"message": ...}, ...]}.
"""
import logging
from typing import Any, Dict, Iterable, List

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from todo_api.domain.errors import (
    ErrorKind,
    NotFoundError,
    PersistenceError,
    ValidationError,
)

STATUS_BY_KIND = {
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.VALIDATION: 400,
    ErrorKind.PERSISTENCE: 500,
}


def _req_id(request: Request) -> str | None:
    return getattr(getattr(request, "state", object()), "request_id", None)


def error_body(messages: Iterable[str]) -> Dict[str, Any]:
    return {"errors": [{"message": m} for m in messages]}


def _validation_messages(errors: Iterable[Dict[str, Any]]) -> List[str]:
    out: List[str] = []
    for err in errors:
        # loc llega como ("body", "title"); el prefijo "body" no aporta
        loc = [str(p) for p in err.get("loc", ()) if p != "body"]
        msg = err.get("msg", "invalid value")
        out.append(f"{'.'.join(loc)}: {msg}" if loc else msg)
    return out or ["Invalid todo payload"]


def _json(status_code: int, messages: Iterable[str]) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=error_body(messages))


def register_exception_handlers(app: FastAPI) -> None:
    log = logging.getLogger("todo.errors")

    @app.exception_handler(NotFoundError)
    async def _not_found_handler(request: Request, exc: NotFoundError):
        return _json(STATUS_BY_KIND[exc.kind], [exc.message])

    @app.exception_handler(ValidationError)
    async def _domain_validation_handler(request: Request, exc: ValidationError):
        return _json(STATUS_BY_KIND[exc.kind], exc.details or [exc.message])

    @app.exception_handler(PersistenceError)
    async def _persistence_handler(request: Request, exc: PersistenceError):
        log.error(
            "Persistence error request_id=%s: %s", _req_id(request), exc.message,
            exc_info=exc,
        )
        return _json(STATUS_BY_KIND[exc.kind], ["Internal server error"])

    @app.exception_handler(StarletteHTTPException)
    async def _http_exc_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content=error_body([str(exc.detail or "HTTP error")]),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def _validation_handler(request: Request, exc: RequestValidationError):
        # Un solo camino 400: el error de FastAPI se traduce al de dominio
        return await _domain_validation_handler(
            request, ValidationError(details=_validation_messages(exc.errors()))
        )

    @app.exception_handler(Exception)
    async def _generic_handler(request: Request, exc: Exception):
        log.exception("Unhandled error request_id=%s", _req_id(request))
        return _json(500, ["Internal server error"])
