"""YAML support for text-codec identifiers.

Identifiers are written as a single string scalar carrying an explicit tag,
e.g. ``owner: !resource_id USER01ARZ3NDEKTSV4RRFFQ69G5FAV``, and read back
through ``parse``. The dumper and loader extend the safe variants only.
"""

import logging
from typing import Any

import yaml
from yaml.constructor import ConstructorError

from resourceid.core.protocols import TextCodec
from resourceid.core.resource_id import ResourceID

logger = logging.getLogger(__name__)

RESOURCE_ID_TAG = "!resource_id"


class ResourceIDDumper(yaml.SafeDumper):
    pass


class ResourceIDLoader(yaml.SafeLoader):
    pass


def add_text_codec(
    codec: type,
    tag: str,
    dumper: type = ResourceIDDumper,
    loader: type = ResourceIDLoader,
) -> None:
    """Register representer/constructor for ``codec`` under ``tag``."""
    if not issubclass(codec, TextCodec):
        raise TypeError(f"{codec.__name__} does not implement TextCodec")

    def represent(dumper: yaml.SafeDumper, value: TextCodec) -> yaml.ScalarNode:
        return dumper.represent_scalar(tag, value.to_text())

    def construct(loader: yaml.SafeLoader, node: yaml.Node) -> Any:
        if not isinstance(node, yaml.ScalarNode):
            raise ConstructorError(
                None, None, f"expected a scalar node for {tag}, got {node.id}", node.start_mark
            )
        text = loader.construct_scalar(node)
        try:
            return codec.parse(text)
        except (ValueError, TypeError) as e:
            logger.debug(f"Invalid {tag} value {text!r}: {e}")
            raise ConstructorError(
                None, None, f"invalid {tag} value {text!r}: {e}", node.start_mark
            ) from e

    dumper.add_representer(codec, represent)
    loader.add_constructor(tag, construct)


def dump(data: Any, stream=None, **kwargs) -> Any:
    """yaml.dump with identifier support."""
    return yaml.dump(data, stream, Dumper=ResourceIDDumper, **kwargs)


def load(stream) -> Any:
    """yaml.load with identifier support, safe constructors only."""
    return yaml.load(stream, Loader=ResourceIDLoader)


add_text_codec(ResourceID, RESOURCE_ID_TAG)
