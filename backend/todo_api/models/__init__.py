"""ORM Models: SQLAlchemy declarative models.

Invariants:
    - All models imported here so Base.metadata knows every table
      before create_all runs
"""

from todo_api.models.task import Task  # noqa: F401
