"""Declarative base and column types shared by SQLAlchemy models."""

from sqlalchemy import Numeric
from sqlalchemy.orm import DeclarativeBase

MONEY = Numeric(14, 2)
RATE = Numeric(7, 4)


class BaseSchema(DeclarativeBase):
    """Base class for all SQLAlchemy schemas."""

    pass


def enum_values(enum_class: type) -> list[str]:
    """Persist string enums by value rather than by member name."""
    return [member.value for member in enum_class]


__all__ = ["MONEY", "RATE", "BaseSchema", "enum_values"]
