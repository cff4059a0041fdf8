"""Exceptions raised while decoding annotated documentation trees."""

from __future__ import annotations

from typing import Sequence

KeyPath = Sequence[str]


def format_path(path: KeyPath) -> str:
    """Render a key path as ``$.a.b`` for error messages."""
    if not path:
        return "$"
    return "$" + "".join(f".{part}" for part in path)


class DecodeError(RuntimeError):
    """Base class for hard decode failures; aborts the whole decode."""

    def __init__(self, message: str, path: KeyPath = ()) -> None:
        self.path = tuple(path)
        self.detail = message
        super().__init__(f"{format_path(self.path)}: {message}")


class MissingPackageDeclaration(DecodeError):
    """Raised when a package scope lacks the reserved metadata key."""

    def __init__(self, path: KeyPath = (), *, marker: str = "#") -> None:
        self.marker = marker
        super().__init__(f"package declaration missing (no '{marker}' key)", path)


class MissingFieldKind(DecodeError):
    """Raised when field metadata carries none of function/object/value."""

    def __init__(self, name: str, path: KeyPath = ()) -> None:
        self.name = name
        super().__init__(f"field {name} lacking {{function | object | value}}", path)


class MissingValueType(DecodeError):
    """Raised when a value field has no string ``type``."""

    def __init__(self, name: str, path: KeyPath = ()) -> None:
        self.name = name
        super().__init__(f"value {name} lacking type information", path)


class MalformedShape(DecodeError):
    """Raised when an input value does not have the shape the decoder expects."""

    def __init__(self, expected: str, actual: str, path: KeyPath = (), *, what: str | None = None) -> None:
        self.expected = expected
        self.actual = actual
        subject = what or "value"
        super().__init__(f"expected {subject} to be {expected}, found {actual}", path)


class DepthExceeded(DecodeError):
    """Raised when the input nests deeper than the configured limit."""

    def __init__(self, limit: int, path: KeyPath = ()) -> None:
        self.limit = limit
        super().__init__(f"nesting exceeds maximum depth of {limit}", path)


__all__ = [
    "DecodeError",
    "DepthExceeded",
    "KeyPath",
    "MalformedShape",
    "MissingFieldKind",
    "MissingPackageDeclaration",
    "MissingValueType",
    "format_path",
]
