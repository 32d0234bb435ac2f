"""Type definitions for the tagmap library."""

from __future__ import annotations

import dataclasses
import sys
import types
import typing
from dataclasses import dataclass
from enum import Enum
from typing import Any, Union


class FieldKind(Enum):
    """Structural kind of a declared field type."""

    RECORD = "record"
    RECORD_REFERENCE = "record_reference"
    OTHER = "other"

    @property
    def is_nested(self) -> bool:
        """Return whether the collector descends into fields of this kind."""
        return self is not FieldKind.OTHER


@dataclass(frozen=True)
class StructTag:
    """A parsed struct tag: an ordered list of ``key:"value"`` pairs."""

    raw: str
    pairs: tuple[tuple[str, str], ...] = ()

    def lookup(self, key: str) -> tuple[str, bool]:
        """Return the value for ``key`` and whether the key was present.

        When a key appears more than once the first occurrence wins.
        """
        for name, value in self.pairs:
            if name == key:
                return value, True
        return "", False

    def get(self, key: str) -> str:
        """Return the value for ``key``, or an empty string if absent."""
        value, _ = self.lookup(key)
        return value

    def keys(self) -> list[str]:
        """List the keys in declaration order."""
        return [name for name, _ in self.pairs]


@dataclass(frozen=True)
class FieldDescriptor:
    """One exported field of a record, found during collection.

    ``value`` is the runtime value read from the record when it was
    collected; ``type`` is the annotation of the field as written, left
    unresolved since a tagged field is exported whatever its type.
    """

    name: str
    tag: str
    type: Any
    value: Any


def is_record_type(tp: Any) -> bool:
    """Check if a declared type is a record (dataclass) class."""
    return isinstance(tp, type) and dataclasses.is_dataclass(tp)


def is_record(value: Any) -> bool:
    """Check if a value is a record instance (not a record class)."""
    return dataclasses.is_dataclass(value) and not isinstance(value, type)


def classify(tp: Any) -> tuple[FieldKind, type | None]:
    """Classify a declared field type.

    Returns the field kind together with the record class it leads to, or
    None for fields the collector never descends into.
    """
    if is_record_type(tp):
        return FieldKind.RECORD, tp

    origin = typing.get_origin(tp)
    if origin is Union or origin is types.UnionType:
        args = [arg for arg in typing.get_args(tp) if arg is not type(None)]
        # Optional[X] only; unions of several types are opaque
        if len(args) == 1 and len(typing.get_args(tp)) == 2 and is_record_type(args[0]):
            return FieldKind.RECORD_REFERENCE, args[0]

    return FieldKind.OTHER, None


# Raised when an annotation names something that does not exist at runtime
RESOLVE_ERRORS = (NameError, AttributeError, TypeError, SyntaxError)


def resolve_field_type(record_type: type, field: dataclasses.Field) -> Any:
    """Resolve the declared annotation of one field of a record class.

    String annotations, whether written as strings or produced by ``from
    __future__ import annotations``, are evaluated in the namespace of the
    module of the class that declares the field. An annotation that cannot
    be evaluated at runtime, such as a name imported only under
    ``TYPE_CHECKING`` or a class local to a function, is returned unchanged,
    and ``classify`` then treats it as ``FieldKind.OTHER``.
    """
    owner = record_type
    for base in record_type.__mro__:
        if field.name in base.__dict__.get("__annotations__", {}):
            owner = base
            break

    module = sys.modules.get(owner.__module__)
    globalns = dict(vars(module)) if module is not None else {}
    holder = types.SimpleNamespace(__annotations__={field.name: field.type})
    try:
        hints = typing.get_type_hints(holder, globalns=globalns, localns=dict(vars(owner)))
    except RESOLVE_ERRORS:
        return field.type
    return hints[field.name]
