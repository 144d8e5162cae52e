"""Task Rules: boundary checks applied before a storage call.

Invariants:
    - Pure: no IO, no state; raises ValidationError on violation
    - Title is rejected only when exactly empty (whitespace is a valid title)
"""

from todo_api.core.errors import ValidationError


TITLE_REQUIRED_MESSAGE = "Title is required"


def check_title(title: str) -> str:
    """Return title unchanged, or raise ValidationError if it is empty."""
    if title == "":
        raise ValidationError(TITLE_REQUIRED_MESSAGE, field="title")
    return title
