"""Database package."""
from campusvibe.db.session import engine, SessionLocal, get_db, get_db_context
from campusvibe.db.base import Base

__all__ = ["engine", "SessionLocal", "get_db", "get_db_context", "Base"]
