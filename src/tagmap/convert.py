"""Conversion of a tagged record into a flat map of values."""

from __future__ import annotations

import logging
from typing import Any

from tagmap.collect import struct_fields
from tagmap.errors import (
    DuplicateTagError,
    NilReferenceError,
    NotAPointerError,
    UntaggedFieldError,
)
from tagmap.tags import TAG_NAME

logger = logging.getLogger(__name__)


def struct_to_map(obj: Any, tag_name: str = TAG_NAME) -> dict[str, Any]:
    """Convert a record instance into a map of configuration values.

    Only fields carrying the ``tag_name`` tag are included, searched through
    untagged nested records. The tag value is the key in the map and the
    map value is the runtime value of the field, untouched.

    Args:
        obj: The record instance to convert.
        tag_name: Name of the tag that marks a field for export.

    Returns:
        Mapping from tag value to field value.

    Raises:
        NotAPointerError: If ``obj`` is a record class rather than an instance.
        NilReferenceError: If ``obj`` is None.
        StructMapError: Any error raised while collecting fields, or a
            DuplicateTagError if two fields share a tag.
    """
    if isinstance(obj, type):
        raise NotAPointerError(obj)

    if obj is None:
        raise NilReferenceError()

    fields = struct_fields(obj, tag_name, frozenset())

    values: dict[str, Any] = {}
    for field in fields:
        if not field.tag:
            raise UntaggedFieldError(field.name)

        if field.tag in values:
            raise DuplicateTagError(field.tag, field.name)

        values[field.tag] = field.value

    logger.debug(
        "Converted %s into %d value(s) tagged '%s'", type(obj).__name__, len(values), tag_name
    )
    return values
