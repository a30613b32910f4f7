"""Resource identifiers: a resource-type tag followed by a ULID.

Canonical text is ``<TAG><ULID>``, e.g. ``USER01ARZ3NDEKTSV4RRFFQ69G5FAV``.
The tag is uppercased and exactly ``settings.tag_length`` characters wide
(4 by default); the ULID is always 26 characters. Which tags exist is up to
the caller; only the width is enforced here.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import ClassVar, Optional

from resourceid.core import ulid as ulid_codec
from resourceid.core.config import settings
from resourceid.core.errors import (
    DecodeError,
    InvalidIdentifierResourceLength,
    UnableToDecodeUlid,
)
from resourceid.core.ulid import Ulid, UlidGenerator

logger = logging.getLogger(__name__)


@dataclass(frozen=True, order=True)
class ResourceID:
    resource: str
    ulid: Ulid

    schema_name: ClassVar[str] = "ResourceID"
    schema_format: ClassVar[str] = "ResourceID"
    schema_description: ClassVar[str] = "A unique resource identifier"

    def __post_init__(self):
        self.validate(self.resource)
        if not isinstance(self.ulid, Ulid):
            raise TypeError(f"ulid must be a Ulid, got {type(self.ulid).__name__}")
        object.__setattr__(self, "resource", self.resource.upper())

    @classmethod
    def new(cls, resource: str, generator: Optional[UlidGenerator] = None) -> "ResourceID":
        """Create an identifier for ``resource`` with a freshly generated ULID.

        Raises:
            InvalidIdentifierResourceLength: the tag has the wrong width.
        """
        cls.validate(resource)
        ulid = (generator or ulid_codec.default_generator).generate()
        return cls(resource, ulid)

    @staticmethod
    def validate(resource: str) -> None:
        if not isinstance(resource, str):
            raise TypeError(f"Resource tag must be a str, got {type(resource).__name__}")
        # Some characters grow when uppercased (e.g. "ß" -> "SS")
        if len(resource) != settings.tag_length or len(resource.upper()) != settings.tag_length:
            raise InvalidIdentifierResourceLength(resource)

    @classmethod
    def parse(cls, text: str, correct_ambiguous: Optional[bool] = None) -> "ResourceID":
        """Parse canonical text back into an identifier.

        The first ``settings.tag_length`` characters are the tag, the rest
        must be a 26-character ULID. The ULID is decoded before the tag is
        checked, so a short input reports the ULID failure.

        Raises:
            UnableToDecodeUlid: the suffix is not a valid ULID.
            InvalidIdentifierResourceLength: the tag has the wrong width.
        """
        if not isinstance(text, str):
            raise TypeError(f"ResourceID text must be a str, got {type(text).__name__}")
        if correct_ambiguous is None:
            correct_ambiguous = settings.correct_ambiguous

        width = settings.tag_length
        resource, ulid_text = text[:width], text[width:]

        try:
            ulid = ulid_codec.decode(ulid_text, correct_ambiguous=correct_ambiguous)
        except DecodeError as e:
            logger.debug(f"Failed to decode ULID in {text!r}: {e}")
            raise UnableToDecodeUlid(e) from e

        return cls(resource, ulid)

    @classmethod
    def is_valid(cls, text: str) -> bool:
        try:
            cls.parse(text)
        except (ValueError, TypeError):
            return False
        return True

    @property
    def resource_type(self) -> str:
        return self.resource

    @property
    def created_at(self) -> datetime:
        return self.ulid.datetime

    def to_text(self) -> str:
        return f"{self.resource}{ulid_codec.encode(self.ulid)}"

    def __str__(self) -> str:
        return self.to_text()

    def __repr__(self) -> str:
        return f"ResourceID({self.to_text()!r})"
