"""Infrastructure: IO boundaries: SQLite task store and logging setup."""
