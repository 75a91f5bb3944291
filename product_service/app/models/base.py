import uuid
from datetime import datetime, timezone
from decimal import Decimal
from typing import Optional

from sqlalchemy import String
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.types import TypeDecorator


def utc_now() -> datetime:
    """Current UTC time as a naive datetime, the storage convention for timestamps."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def generate_document_id() -> str:
    """Opaque identifier assigned to a record on its first save."""
    return uuid.uuid4().hex


class ExactDecimal(TypeDecorator):
    """
    Decimal stored as its canonical string.

    Keeps every digit at any scale on every backend, including SQLite,
    which has no native decimal type.
    """

    impl = String
    cache_ok = True

    def process_bind_param(self, value: Optional[Decimal], dialect) -> Optional[str]:
        if value is None:
            return None
        return str(Decimal(value))

    def process_result_value(self, value: Optional[str], dialect) -> Optional[Decimal]:
        if value is None:
            return None
        return Decimal(value)


class ProductServiceBase(DeclarativeBase):
    """Base class for all Product Service database models."""

    pass
