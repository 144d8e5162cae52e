"""Task Schemas: Pydantic models for the /tasks request and response bodies.

Invariants:
    - Request fields are strict: title must be a JSON string, id a JSON integer
      (no coercion from "1" or 1.0); anything else is a malformed request
    - id must fit SQLite's signed 64-bit INTEGER; larger values are malformed
    - Absent or null fields take their zero value (title "", id 0)
    - Empty title passes the schema; emptiness is a domain rule (core/enforce_task)
"""

from typing import Annotated, Any

from pydantic import (
    BaseModel, ConfigDict, Field, StrictInt, StrictStr, field_validator,
)

SQLITE_INTEGER_MIN = -2**63
SQLITE_INTEGER_MAX = 2**63 - 1

TaskId = Annotated[
    StrictInt, Field(ge=SQLITE_INTEGER_MIN, le=SQLITE_INTEGER_MAX),
]


class TaskCreate(BaseModel):
    """Body of POST /tasks."""
    title: StrictStr = ""

    @field_validator("title", mode="before")
    @classmethod
    def null_title_is_empty(cls, v: Any) -> Any:
        return "" if v is None else v


class TaskIdentifier(BaseModel):
    """Body of POST /tasks/toggle and POST /tasks/delete."""
    id: TaskId = 0

    @field_validator("id", mode="before")
    @classmethod
    def null_id_is_zero(cls, v: Any) -> Any:
        return 0 if v is None else v


class TaskResponse(BaseModel):
    """Public task representation."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    completed: bool


class MessageResponse(BaseModel):
    """Acknowledgement returned by mutation endpoints."""
    message: str
