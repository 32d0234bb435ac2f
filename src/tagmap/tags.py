"""Reading tags attached to record fields.

A field opts into export by carrying a tag in its ``dataclasses.field``
metadata. Two spellings are understood:

    port: int = field(metadata={"config": "listen_port"})
    port: int = field(metadata={"tag": 'config:"listen_port" json:"port"'})

The first form keys the metadata by tag name. The second holds a single
struct tag string, which may carry tags for several consumers at once.
"""

from __future__ import annotations

import dataclasses
from functools import lru_cache
from typing import Any

from tagmap.errors import MalformedTagError
from tagmap.parsing.tag_parser import TagParser
from tagmap.types import StructTag

# Tag name matched by the map builder unless told otherwise
TAG_NAME = "config"

# Metadata key holding a struct tag string
STRUCT_TAG_KEY = "tag"


@lru_cache(maxsize=256)
def parse_struct_tag(text: str) -> StructTag:
    """Parse a struct tag string such as ``config:"a" json:"b"``."""
    return TagParser().parse(text)


def field_tag(field: dataclasses.Field, tag_name: str = TAG_NAME) -> str:
    """Return the value of tag ``tag_name`` on a dataclass field.

    Returns an empty string when the field does not carry the tag.
    """
    metadata = field.metadata
    if tag_name in metadata:
        value = metadata[tag_name]
        if not isinstance(value, str):
            err = MalformedTagError(
                f"Tag '{tag_name}' must be a string, got {type(value).__name__}"
            )
            err.add_field(field.name)
            raise err
        return value

    raw = metadata.get(STRUCT_TAG_KEY)
    if raw is None:
        return ""
    if not isinstance(raw, str):
        err = MalformedTagError(f"Struct tag must be a string, got {type(raw).__name__}")
        err.add_field(field.name)
        raise err
    try:
        return parse_struct_tag(raw).get(tag_name)
    except MalformedTagError as err:
        err.add_field(field.name)
        raise


def tagged(name: str, *, tag_name: str = TAG_NAME, **kwargs: Any) -> Any:
    """Declare a dataclass field exported under ``name``.

    Extra keyword arguments are passed to ``dataclasses.field``; any
    ``metadata`` given is merged with the tag.
    """
    metadata = dict(kwargs.pop("metadata", None) or {})
    metadata[tag_name] = name
    return dataclasses.field(metadata=metadata, **kwargs)
