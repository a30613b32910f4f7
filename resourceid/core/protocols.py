"""Capability interfaces consumed by the storage and serialization adapters.

Adapters only rely on these two protocols, so any identifier type that can
round-trip through a single string can be plugged into them.
"""

from typing import Protocol, TypeVar, runtime_checkable

T = TypeVar("T", bound="TextCodec")


@runtime_checkable
class TextCodec(Protocol):
    def to_text(self) -> str: ...

    @classmethod
    def parse(cls: type[T], text: str) -> T: ...


@runtime_checkable
class SchemaDescriptor(Protocol):
    # Described to schema tooling as {"type": "string", "format": schema_format}
    schema_name: str
    schema_format: str
    schema_description: str
