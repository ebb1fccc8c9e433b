# models/base.py
import uuid

from sqlalchemy.orm import DeclarativeBase


def new_id() -> str:
     """Opaque string key for a new document."""
     return uuid.uuid4().hex


class Base(DeclarativeBase):
     """
     Base class for all SQLAlchemy models.

     Every model is addressed by an opaque string `id` so the document store
     can treat rows as key-addressed documents.
     """

     @classmethod
     def field_names(cls) -> list[str]:
          return [column.key for column in cls.__table__.columns]
