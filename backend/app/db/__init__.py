"""Database connections package."""

from app.db.postgres import Database, database, get_session, init_db

__all__ = ["Database", "database", "get_session", "init_db"]
