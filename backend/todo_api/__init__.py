"""Todo API Package: task CRUD over HTTP backed by SQLite.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
