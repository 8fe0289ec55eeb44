"""Database package."""
from mastergym.db.database import Base, async_session_maker, get_db, init_db

__all__ = ["Base", "async_session_maker", "get_db", "init_db"]
