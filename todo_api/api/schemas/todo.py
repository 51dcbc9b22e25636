"""
Esquemas Pydantic para `todo` (payloads y salidas HTTP).

- El payload de creación/actualización es el mismo: {title, contents}.
- La salida expone la fecha de creación como `create_at` (ISO-8601).
"""
from typing import List

from pydantic import BaseModel, Field, field_validator

from todo_api.domain.todos.schemas import Todo


class TodoIn(BaseModel):
    title: str = Field(min_length=1, max_length=255, examples=["<new title>"])
    contents: str = Field(examples=["<new contents>"])

    @field_validator("title")
    @classmethod
    def _title_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("title must not be blank")
        return v

    def to_domain(self) -> Todo:
        return Todo(title=self.title, contents=self.contents)


class TodoOut(BaseModel):
    id: str
    title: str
    contents: str
    create_at: str

    @classmethod
    def from_domain(cls, todo: Todo) -> "TodoOut":
        if not todo.persisted:
            raise ValueError("only persisted todos can be serialized")
        return cls(
            id=todo.id,
            title=todo.title,
            contents=todo.contents,
            create_at=todo.created_at.isoformat() if todo.created_at else "",
        )


class APIError(BaseModel):
    message: str


class ErrorResponse(BaseModel):
    errors: List[APIError]
