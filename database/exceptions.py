import asyncpg


class DatabaseError(Exception):
    """Base for all database errors."""


class NotFoundError(DatabaseError):
    """Entity not found."""


class DuplicateError(DatabaseError):
    """Unique constraint violation."""


class IntegrityError(DatabaseError):
    """Foreign key or check constraint violation."""


def translate_pg_error(exc: asyncpg.PostgresError) -> DatabaseError:
    """Map an asyncpg constraint error onto the repository error hierarchy."""
    if isinstance(exc, asyncpg.UniqueViolationError):
        return DuplicateError(str(exc))
    if isinstance(exc, (asyncpg.ForeignKeyViolationError, asyncpg.CheckViolationError,
                        asyncpg.NotNullViolationError)):
        return IntegrityError(str(exc))
    return DatabaseError(str(exc))
