"""Agregador de routers de la API."""
from fastapi import APIRouter
from todo_api.api.routers import health, todo

api_router = APIRouter()
api_router.include_router(health.router)
api_router.include_router(todo.router)
