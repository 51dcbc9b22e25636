"""Schemas para el endpoint de salud."""
from pydantic import BaseModel


class HealthOut(BaseModel):
    ok: bool
    database: bool
