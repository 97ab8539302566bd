from datetime import datetime, timedelta, timezone

from sqlalchemy import DateTime, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

class Base(DeclarativeBase):
    """Base class for all SQLAlchemy ORM models."""
    pass


class KeyedMixin:
    """Identity plus store-stamped timestamps shared by every table."""
    id: Mapped[str] = mapped_column(String(32), primary_key=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)


class Clock:
    """
    Naive-UTC clock whose readings strictly increase.
    Ties on created_at would lose insertion order, so equal readings are
    nudged forward by one microsecond.
    """

    def __init__(self):
        self._last: datetime | None = None

    def now(self) -> datetime:
        current = datetime.now(timezone.utc).replace(tzinfo=None)
        if self._last is not None and current <= self._last:
            current = self._last + timedelta(microseconds=1)
        self._last = current
        return current
