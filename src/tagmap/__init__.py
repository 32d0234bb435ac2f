"""tagmap - Flatten tagged dataclass records into maps of values."""

from tagmap.collect import check_acyclic, struct_fields
from tagmap.convert import struct_to_map
from tagmap.errors import (
    DuplicateTagError,
    MalformedTagError,
    NilNestedReferenceError,
    NilReferenceError,
    NotAPointerError,
    NotAStructError,
    RecursiveTypeError,
    StructMapError,
    UntaggedFieldError,
)
from tagmap.tags import STRUCT_TAG_KEY, TAG_NAME, field_tag, parse_struct_tag, tagged
from tagmap.types import FieldDescriptor, FieldKind, StructTag, classify

__all__ = [
    # Main API
    "struct_to_map",
    "struct_fields",
    "check_acyclic",
    "tagged",
    "TAG_NAME",
    # Tags
    "STRUCT_TAG_KEY",
    "StructTag",
    "field_tag",
    "parse_struct_tag",
    # Types
    "FieldDescriptor",
    "FieldKind",
    "classify",
    # Errors
    "StructMapError",
    "NotAPointerError",
    "NilReferenceError",
    "NotAStructError",
    "RecursiveTypeError",
    "NilNestedReferenceError",
    "UntaggedFieldError",
    "DuplicateTagError",
    "MalformedTagError",
]

__version__ = "0.1.0"
