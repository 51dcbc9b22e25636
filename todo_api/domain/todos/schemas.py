# todo_api/domain/todos/schemas.py
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class Todo(BaseModel):
    """Registro Todo.

    `id` y `created_at` los asigna el store al crear; quedan en None
    mientras el registro no esté persistido.
    """
    id: Optional[str] = None
    title: str = Field(min_length=1)
    contents: str = ""
    created_at: Optional[datetime] = None

    @property
    def persisted(self) -> bool:
        return self.id is not None
