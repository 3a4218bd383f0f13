"""Database package."""
from app.db.database import (
    Base,
    async_session_maker,
    check_db,
    close_all_engines,
    engine,
    get_db,
    init_db,
)

__all__ = [
    "Base",
    "async_session_maker",
    "check_db",
    "close_all_engines",
    "engine",
    "get_db",
    "init_db",
]
