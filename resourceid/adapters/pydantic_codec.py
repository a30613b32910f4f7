"""Pydantic integration for text-codec identifiers.

``TextCodecAnnotation`` teaches pydantic to validate, serialize and describe
any type that implements ``TextCodec`` and ``SchemaDescriptor``:

- validation accepts an instance as-is, or a string passed through ``parse``
  (parse errors become ``ValidationError``s)
- serialization always emits ``to_text()``
- JSON Schema describes an opaque string with a named format

Usage:
    class User(BaseModel):
        id: PydanticResourceID
"""

import logging
from typing import Annotated, Any

from pydantic import GetCoreSchemaHandler, GetJsonSchemaHandler
from pydantic.json_schema import JsonSchemaValue
from pydantic_core import core_schema

from resourceid.core.protocols import SchemaDescriptor, TextCodec
from resourceid.core.resource_id import ResourceID

logger = logging.getLogger(__name__)


class TextCodecAnnotation:
    """``Annotated`` marker binding a text-codec type to pydantic."""

    def __init__(self, codec: type):
        if not issubclass(codec, TextCodec):
            raise TypeError(f"{codec.__name__} does not implement TextCodec")
        self.codec = codec

    def _parse(self, text: str) -> Any:
        try:
            return self.codec.parse(text)
        except ValueError as e:
            logger.debug(f"Rejected {self.codec.__name__} value {text!r}: {e}")
            raise

    def __get_pydantic_core_schema__(
        self, source_type: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        from_text = core_schema.no_info_after_validator_function(
            self._parse, core_schema.str_schema()
        )
        return core_schema.json_or_python_schema(
            json_schema=from_text,
            python_schema=core_schema.union_schema(
                [core_schema.is_instance_schema(self.codec), from_text]
            ),
            serialization=core_schema.plain_serializer_function_ser_schema(
                lambda value: value.to_text()
            ),
        )

    def __get_pydantic_json_schema__(
        self, schema: core_schema.CoreSchema, handler: GetJsonSchemaHandler
    ) -> JsonSchemaValue:
        return describe(self.codec)


def describe(descriptor: SchemaDescriptor) -> dict:
    """JSON Schema for an identifier: a string with a named format, no fields."""
    return {
        "type": "string",
        "format": descriptor.schema_format,
        "title": descriptor.schema_name,
        "description": descriptor.schema_description,
    }


PydanticResourceID = Annotated[ResourceID, TextCodecAnnotation(ResourceID)]
