"""Recursive collection of tagged fields from a record graph."""

from __future__ import annotations

import dataclasses
import logging
from typing import Any

from tagmap.errors import (
    NilNestedReferenceError,
    NotAStructError,
    RecursiveTypeError,
    StructMapError,
)
from tagmap.tags import field_tag
from tagmap.types import FieldDescriptor, FieldKind, classify, is_record, resolve_field_type

logger = logging.getLogger(__name__)


def struct_fields(
    value: Any, tag_name: str, visited: frozenset[type] = frozenset()
) -> list[FieldDescriptor]:
    """Gather every field of a record and its nested records tagged with ``tag_name``.

    Fields carrying the tag are collected as they are, whatever their type.
    Untagged fields holding a record, or an optional reference to one, are
    descended into. Everything else is skipped.

    Args:
        value: The record instance to walk.
        tag_name: Name of the tag that marks a field for export.
        visited: Record types on the path from the top-level record down to
            ``value``. A type seen twice on one path is a structural cycle.

    Returns:
        Descriptors in declaration order, depth-first, with the fields of a
        nested record in place of the field that holds it.

    Raises:
        NotAStructError: If ``value`` is not a record.
        RecursiveTypeError: If a record type contains itself.
        NilNestedReferenceError: If an untagged record reference is None.
    """
    if not is_record(value):
        raise NotAStructError(value)

    record_type = type(value)
    if record_type in visited:
        raise RecursiveTypeError(record_type)
    visited = visited | {record_type}

    fields: list[FieldDescriptor] = []
    for field in dataclasses.fields(value):
        field_value = getattr(value, field.name)

        # If the field is tagged, gather it and move on.
        tag = field_tag(field, tag_name)
        if tag:
            fields.append(FieldDescriptor(field.name, tag, field.type, field_value))
            continue

        kind, nested_type = classify(resolve_field_type(record_type, field))
        if not kind.is_nested:
            continue

        try:
            # Checked on the declared type so that an empty reference to an
            # enclosing type still counts as a cycle.
            if nested_type in visited:
                raise RecursiveTypeError(nested_type)
            if not is_record(field_value):
                check_acyclic(nested_type, tag_name, visited)
            if kind is FieldKind.RECORD_REFERENCE and field_value is None:
                raise NilNestedReferenceError(nested_type)
            inner = struct_fields(field_value, tag_name, visited)
        except StructMapError as err:
            err.add_field(field.name)
            raise

        logger.debug(
            "Collected %d field(s) from %s.%s", len(inner), record_type.__name__, field.name
        )
        fields.extend(inner)

    return fields


def check_acyclic(
    record_type: type, tag_name: str, visited: frozenset[type] = frozenset()
) -> None:
    """Walk the declared structure of a record class looking for cycles.

    Follows the same fields ``struct_fields`` would descend into, without
    needing values, so a cycle behind an empty reference is still reported.
    """
    if record_type in visited:
        raise RecursiveTypeError(record_type)
    visited = visited | {record_type}

    for field in dataclasses.fields(record_type):
        if field_tag(field, tag_name):
            continue

        kind, nested_type = classify(resolve_field_type(record_type, field))
        if not kind.is_nested:
            continue

        try:
            check_acyclic(nested_type, tag_name, visited)
        except StructMapError as err:
            err.add_field(field.name)
            raise
