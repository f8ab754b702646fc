from .base import Base
from .session import get_engine, get_session, init_db

__all__ = ["Base", "get_engine", "get_session", "init_db"]
