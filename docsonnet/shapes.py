"""Checked accessors over the evaluator's untyped JSON-like values."""

from __future__ import annotations

from typing import Any, List, Mapping

from .errors import KeyPath, MalformedShape

NULL = "null"
BOOLEAN = "boolean"
NUMBER = "number"
STRING = "string"
SEQUENCE = "sequence"
MAPPING = "mapping"


def shape_of(value: Any) -> str:
    """Classify a value into one of the generic structured shapes."""
    if value is None:
        return NULL
    # bool subclasses int, so it has to be tested first
    if isinstance(value, bool):
        return BOOLEAN
    if isinstance(value, (int, float)):
        return NUMBER
    if isinstance(value, str):
        return STRING
    if isinstance(value, Mapping):
        return MAPPING
    if isinstance(value, (list, tuple)):
        return SEQUENCE
    return type(value).__name__


def is_mapping(value: Any) -> bool:
    return isinstance(value, Mapping)


def expect_mapping(value: Any, path: KeyPath, *, what: str | None = None) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise MalformedShape(MAPPING, shape_of(value), path, what=what)
    return value


def expect_sequence(value: Any, path: KeyPath, *, what: str | None = None) -> List[Any]:
    if not isinstance(value, (list, tuple)):
        raise MalformedShape(SEQUENCE, shape_of(value), path, what=what)
    return list(value)


def expect_str(mapping: Mapping[str, Any], key: str, path: KeyPath) -> str:
    """Return ``mapping[key]`` as a string, failing when absent or mistyped."""
    if key not in mapping:
        raise MalformedShape(STRING, "nothing", (*path, key), what=f"'{key}'")
    value = mapping[key]
    if not isinstance(value, str):
        raise MalformedShape(STRING, shape_of(value), (*path, key), what=f"'{key}'")
    return value


def check_structured(value: Any, path: KeyPath) -> Any:
    """Ensure an opaque value is made only of generic structured shapes."""
    stack = [(value, tuple(path))]
    while stack:
        current, where = stack.pop()
        shape = shape_of(current)
        if shape == MAPPING:
            for key, item in current.items():
                if not isinstance(key, str):
                    raise MalformedShape(STRING, shape_of(key), where, what="mapping key")
                stack.append((item, (*where, key)))
        elif shape == SEQUENCE:
            stack.extend((item, (*where, str(index))) for index, item in enumerate(current))
        elif shape not in (NULL, BOOLEAN, NUMBER, STRING):
            raise MalformedShape("a structured value", shape, where)
    return value


__all__ = [
    "BOOLEAN",
    "MAPPING",
    "NULL",
    "NUMBER",
    "SEQUENCE",
    "STRING",
    "check_structured",
    "expect_mapping",
    "expect_sequence",
    "expect_str",
    "is_mapping",
    "shape_of",
]
