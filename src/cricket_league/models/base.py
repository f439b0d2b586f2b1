"""Base model classes for the cricket league database."""

from datetime import timezone

from sqlalchemy import Column, DateTime, String
from sqlalchemy.orm import declarative_base
from sqlalchemy.types import TypeDecorator


class UTCDateTime(TypeDecorator):
    """Timezone-aware timestamp stored as UTC.

    SQLite drops tzinfo on the way in, so values are normalized to UTC before
    binding and re-tagged as UTC when loaded. Naive inputs are taken as UTC.
    """

    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)

# Create the declarative base
Base = declarative_base()

class IdentifiedMixin:
    """Opaque string primary key allocated by ``ids.IdAllocator``."""

    id = Column(String(255), primary_key=True)
