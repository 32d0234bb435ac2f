"""Errors raised while converting a record into a tag map."""

from __future__ import annotations


class StructMapError(Exception):
    """Base class for all tag map conversion errors.

    ``path`` holds the names of the fields that were being descended into
    when the error surfaced, outermost first. It grows as the error travels
    back up through nested records, so the rendered message reads like a
    breadcrumb: ``field net: field tunnel: nil reference to Tunnel``.
    """

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message
        self.path: list[str] = []

    def add_field(self, name: str) -> None:
        """Record that the error was raised below the field ``name``."""
        self.path.insert(0, name)

    def __str__(self) -> str:
        prefix = "".join(f"field {name}: " for name in self.path)
        return prefix + self.message


class NotAPointerError(StructMapError, TypeError):
    """The top-level input is not a reference to a record instance."""

    def __init__(self, obj: object) -> None:
        super().__init__(f"{_type_name(obj)} is not a reference to a record instance")
        self.obj = obj


class NilReferenceError(StructMapError, ValueError):
    """The top-level input reference is None."""

    def __init__(self) -> None:
        super().__init__("nil reference passed instead of a record")


class NotAStructError(StructMapError, TypeError):
    """A value expected to be a record is not one."""

    def __init__(self, value: object) -> None:
        super().__init__(f"{type(value).__name__} is not a record")
        self.value = value


class RecursiveTypeError(StructMapError, ValueError):
    """A record type structurally contains itself."""

    def __init__(self, record_type: type) -> None:
        super().__init__(f"recursion on type {record_type.__name__}")
        self.record_type = record_type


class NilNestedReferenceError(StructMapError, ValueError):
    """An untagged reference to a nested record is None."""

    def __init__(self, record_type: type) -> None:
        super().__init__(f"nil reference to {record_type.__name__}")
        self.record_type = record_type


class UntaggedFieldError(StructMapError, ValueError):
    """A collected field descriptor carries no tag."""

    def __init__(self, field_name: str) -> None:
        super().__init__(f"field {field_name} has no tag")
        self.field_name = field_name


class DuplicateTagError(StructMapError, ValueError):
    """Two fields of the record graph share the same tag."""

    def __init__(self, tag: str, field_name: str) -> None:
        super().__init__(f"tag {tag} on field {field_name} occurs multiple times in object")
        self.tag = tag
        self.field_name = field_name


class MalformedTagError(StructMapError, ValueError):
    """A field tag could not be read."""


def _type_name(obj: object) -> str:
    if isinstance(obj, type):
        return f"type {obj.__name__}"
    return type(obj).__name__
