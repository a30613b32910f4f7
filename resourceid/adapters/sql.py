"""SQLAlchemy column types for text-codec identifiers.

Identifiers are stored as ``VARCHAR`` holding their canonical text. Binding
accepts an identifier instance or a string that parses as one; any other
Python type is rejected. Rows are decoded back with ``parse``.

Usage:
    class UserTable(Base):
        __tablename__ = "users"

        id: Mapped[ResourceID] = mapped_column(ResourceIDType(), primary_key=True)
"""

import logging
from typing import Any, Optional

from sqlalchemy import String
from sqlalchemy.types import TypeDecorator

from resourceid.core.config import settings
from resourceid.core.resource_id import ResourceID

logger = logging.getLogger(__name__)


class TextCodecType(TypeDecorator):
    """Base for identifier columns; subclasses set ``codec``."""

    impl = String
    cache_ok = True

    codec: type = None

    @property
    def python_type(self) -> type:
        return self.codec

    def process_bind_param(self, value: Any, dialect) -> Optional[str]:
        if value is None:
            return None
        if isinstance(value, self.codec):
            return value.to_text()
        if isinstance(value, str):
            # Round-trip so malformed strings never reach the database
            return self.codec.parse(value).to_text()
        logger.debug(f"Rejected bind value of type {type(value).__name__} for {self.codec.__name__}")
        raise TypeError(
            f"{self.codec.__name__} column expects {self.codec.__name__} or str, "
            f"got {type(value).__name__}"
        )

    def process_result_value(self, value: Any, dialect) -> Any:
        if value is None:
            return None
        if not isinstance(value, str):
            raise TypeError(
                f"{self.codec.__name__} column returned {type(value).__name__}, expected str"
            )
        return self.codec.parse(value)


class ResourceIDType(TextCodecType):
    cache_ok = True

    codec = ResourceID

    def __init__(self, length: Optional[int] = None, **kwargs):
        super().__init__(length or settings.text_length, **kwargs)
