"""Typed documentation model produced by the decoder."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping, Optional, Sequence

Type = str


class _Absent:
    """Marks a default that was never declared (distinct from a ``null`` default)."""

    _instance: Optional["_Absent"] = None

    def __new__(cls) -> "_Absent":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "ABSENT"

    def __bool__(self) -> bool:
        return False


ABSENT = _Absent()


@dataclass(frozen=True)
class Argument:
    """Single positional or named argument of a documented function."""

    name: str
    type: Type
    default: Any = field(default=ABSENT, hash=False)

    @property
    def has_default(self) -> bool:
        return self.default is not ABSENT


@dataclass(frozen=True)
class Function:
    """Documented function with its ordered argument list."""

    name: str
    help: str = ""
    args: Sequence[Argument] = field(default_factory=tuple, hash=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "args", tuple(self.args))


@dataclass(frozen=True)
class Value:
    """Documented constant or setting; always typed."""

    name: str
    type: Type
    help: str = ""
    default: Any = field(default=ABSENT, hash=False)

    @property
    def has_default(self) -> bool:
        return self.default is not ABSENT


@dataclass(frozen=True)
class Object:
    """Documented namespace holding further fields."""

    name: str
    help: str = ""
    fields: Mapping[str, "Field"] = field(default_factory=dict, hash=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "fields", _freeze(self.fields))


@dataclass(frozen=True)
class Field:
    """Tagged union over the three documentable member kinds."""

    function: Optional[Function] = None
    object: Optional[Object] = None
    value: Optional[Value] = None

    def __post_init__(self) -> None:
        populated = [kind for kind in ("function", "object", "value") if getattr(self, kind) is not None]
        if len(populated) != 1:
            raise ValueError(
                f"Field must hold exactly one of function/object/value, got {populated or 'none'}"
            )

    @property
    def kind(self) -> str:
        if self.function is not None:
            return "function"
        if self.object is not None:
            return "object"
        return "value"

    @property
    def member(self) -> Function | Object | Value:
        return getattr(self, self.kind)

    @property
    def name(self) -> str:
        return self.member.name

    @property
    def help(self) -> str:
        return self.member.help


@dataclass(frozen=True)
class Package:
    """A named, importable unit of documented API plus its sub-packages."""

    name: str
    help: str
    import_path: str
    api: Mapping[str, Field] = field(default_factory=dict, hash=False)
    sub: Mapping[str, "Package"] = field(default_factory=dict, hash=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "api", _freeze(self.api))
        object.__setattr__(self, "sub", _freeze(self.sub))

    def count_fields(self) -> int:
        """Return the number of fields in the API, nested objects included."""
        return _count(self.api)


def _freeze(mapping: Mapping[str, Any]) -> Mapping[str, Any]:
    return MappingProxyType(dict(mapping))


def _count(fields: Mapping[str, Field]) -> int:
    total = 0
    for item in fields.values():
        total += 1
        if item.object is not None:
            total += _count(item.object.fields)
    return total


__all__ = [
    "ABSENT",
    "Argument",
    "Field",
    "Function",
    "Object",
    "Package",
    "Type",
    "Value",
]
