# tourlead/db/__init__.py
"""
Database package for SQLAlchemy setup, session management, and base models.
"""

from tourlead.db.base import Base
from tourlead.db.session import get_session, init_models

__all__ = [
    "Base",
    "get_session",
    "init_models",
]
