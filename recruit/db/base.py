"""
Declarative base shared by every model.

Alembic imports ``Base.metadata`` from here to discover tables.
"""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Base class for all ORM models."""
