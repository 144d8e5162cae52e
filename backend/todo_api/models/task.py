"""Task ORM: the only persisted entity.

Invariants:
    - id is an AUTOINCREMENT integer key (SQLite never reuses a deleted id)
    - title is non-nullable text; emptiness is checked at the HTTP boundary
    - completed defaults to false on both the ORM and the server side
"""

from sqlalchemy import Boolean, Integer, Text, false
from sqlalchemy.orm import Mapped, mapped_column

from todo_api.db.base import Base


class Task(Base):
    """A to-do item: title plus completed flag."""
    __tablename__ = "tasks"
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True,
    )
    title: Mapped[str] = mapped_column(Text, nullable=False)
    completed: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, server_default=false(),
    )

    def __repr__(self) -> str:
        return f"Task(id={self.id!r}, title={self.title!r}, completed={self.completed!r})"
