from .base import Base, async_session_maker, engine, get_session, init_db

__all__ = ["Base", "async_session_maker", "engine", "get_session", "init_db"]
