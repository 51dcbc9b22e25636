"""Health (sin auth), salida tipada y estable."""
from fastapi import APIRouter, status

from todo_api.api.schemas.health import HealthOut
from todo_api.infrastructure.db.database import db_ready


router = APIRouter(tags=["App API"])  # no prefix to keep paths stable


@router.get(
    "/healthy",
    status_code=status.HTTP_200_OK,
    response_model=HealthOut,
    summary="Salud básica",
    description="Get server healthy",
)
def healthy() -> HealthOut:
    return HealthOut(ok=True, database=db_ready())
