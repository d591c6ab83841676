import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, Uuid
from sqlalchemy.orm import declared_attr, declarative_base

Base = declarative_base()


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


# --- Mixin ---
class TimestampMixin:
    """Mixin adding created_date and updated_date columns."""

    created_date = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_date = Column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False
    )


# --- Base class for all models ---
class BaseMixin(TimestampMixin):
    """Base class combining a UUID primary key and timestamps."""

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)

    # Table name derived from the class name (e.g. Badge -> badges)
    @declared_attr
    def __tablename__(cls):
        return cls.__name__.lower() + "s"

    def __repr__(self):
        return f"<{self.__class__.__name__}(id={self.id})>"
