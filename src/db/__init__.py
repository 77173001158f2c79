"""
Persistence layer for PrepPilot

Contains:
- Engine and session factory
- SQLAlchemy tables for interviews, questions, responses and feedback
- Interview Repository: transactional CRUD returning Pydantic records
"""

from src.db.session import Base, create_db_engine, create_session_factory, get_engine, init_db
from src.db.repository import InterviewRepository

__all__ = [
    "Base",
    "create_db_engine",
    "create_session_factory",
    "get_engine",
    "init_db",
    "InterviewRepository",
]
