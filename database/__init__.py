from database.connection import DatabasePool, db, dsn_from_env
from database.db_manager import DatabaseManager
from database.repositories import RoundPlayerRepositoryDB, TourRepositoryDB
from database.exceptions import DatabaseError, NotFoundError, DuplicateError, IntegrityError

__all__ = [
    "DatabasePool",
    "db",
    "dsn_from_env",
    "DatabaseManager",
    "RoundPlayerRepositoryDB",
    "TourRepositoryDB",
    "DatabaseError",
    "NotFoundError",
    "DuplicateError",
    "IntegrityError",
]
