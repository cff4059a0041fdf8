"""Decode an evaluated, marker-annotated tree into the typed documentation model.

The input is the JSON-like value produced by evaluating a documented
configuration tree. Documentation lives inline with the data:

* the bare marker key (``#``) declares the package (``name``/``help``/``import``);
* ``#foo`` holds the metadata describing field ``foo`` (one of ``function``,
  ``object`` or ``value``);
* the unprefixed sibling ``foo`` holds the real data, which for ``object``
  fields contains the object's own children;
* an unannotated mapping holding annotated descendants is documented as an
  implicit object, and one holding the bare marker key is a sub-package.

Mapping order carries no meaning. The annotated branch always writes its slot
while nested inference only fills empty slots, so explicit annotations win no
matter which sibling is visited first.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Dict, List, Mapping, Optional, Tuple

from .config import DecoderConfig
from .errors import (
    DepthExceeded,
    KeyPath,
    MalformedShape,
    MissingFieldKind,
    MissingPackageDeclaration,
    MissingValueType,
    format_path,
)
from .logging import get_logger, log_diagnostic
from .models import ABSENT, Argument, Field, Function, Object, Package, Value
from .shapes import (
    STRING,
    check_structured,
    expect_mapping,
    expect_sequence,
    expect_str,
    is_mapping,
    shape_of,
)

logger = get_logger("decoder")

FIELD_KINDS = ("function", "object", "value")


@dataclass(frozen=True)
class Diagnostic:
    """Non-fatal condition met while decoding."""

    path: Tuple[str, ...]
    message: str

    def __str__(self) -> str:
        return f"{format_path(self.path)}: {self.message}"


class Decoder:
    """Walks one evaluated tree and assembles the package model.

    A decoder keeps per-call state (the collected diagnostics), so use one
    instance per thread.
    """

    def __init__(self, config: DecoderConfig | None = None) -> None:
        self.config = config or DecoderConfig()
        self.marker = self.config.marker
        self.diagnostics: List[Diagnostic] = []

    def decode(self, root: Any) -> Package:
        """Decode ``root`` into a :class:`Package`, raising ``DecodeError`` on malformed input."""
        self.diagnostics = []
        return self._decode_package(root, (), 0)

    # Package level

    def extract_package(self, tree: Mapping[str, Any], path: KeyPath = ()) -> Package:
        """Read the reserved declaration key into an otherwise empty package."""
        if self.marker not in tree:
            raise MissingPackageDeclaration(path, marker=self.marker)
        where = (*path, self.marker)
        declaration = expect_mapping(tree[self.marker], where, what="package declaration")
        return Package(
            name=expect_str(declaration, "name", where),
            help=expect_str(declaration, "help", where),
            import_path=expect_str(declaration, "import", where),
        )

    def _decode_package(self, tree: Any, path: KeyPath, depth: int) -> Package:
        self._enter(depth, path)
        tree = expect_mapping(tree, path, what="package")
        declaration = self.extract_package(tree, path)
        api: Dict[str, Field] = {}
        sub: Dict[str, Package] = {}

        for key, value in tree.items():
            if key == self.marker:
                continue
            where = (*path, self._check_key(key, path))

            if self._is_annotated(key):
                name = self._trim(key)
                api[name] = self.resolve_field(name, value, tree, where, depth=depth + 1)
                continue

            if is_mapping(value) and self.marker in value:
                child = self._decode_package(value, where, depth + 1)
                if child.name in sub:
                    self._diagnose(where, f"sub-package {child.name} declared more than once")
                logger.debug("Found sub-package %s at %s", child.name, format_path(where))
                sub[child.name] = child
                continue

            if self._has_annotation(key, tree) or key in api:
                continue
            nested = self.resolve_nested(key, value, where, depth=depth + 1)
            if nested is not None:
                logger.debug("Inferred object %s at %s", key, format_path(where))
                api[key] = nested

        return replace(declaration, api=api, sub=sub)

    # Fields

    def resolve_field(
        self,
        name: str,
        meta: Any,
        parent: Mapping[str, Any],
        path: KeyPath = (),
        *,
        depth: int = 0,
    ) -> Field:
        """Build the field described by ``meta``; ``parent`` is the mapping holding its siblings."""
        meta = expect_mapping(meta, path, what=f"metadata of field {name}")
        kinds = [kind for kind in FIELD_KINDS if kind in meta]
        if not kinds:
            raise MissingFieldKind(name, path)
        if len(kinds) > 1:
            self._diagnose(path, f"field {name} declares {' and '.join(kinds)}; using {kinds[0]}")

        kind = kinds[0]
        payload = expect_mapping(meta[kind], (*path, kind), what=kind)
        if kind == "function":
            return self._build_function(name, meta, payload, path)
        if kind == "object":
            return self._build_object(name, meta, payload, parent, path, depth)
        return self._build_value(name, meta, payload, path)

    def _build_function(
        self, name: str, meta: Mapping[str, Any], payload: Mapping[str, Any], path: KeyPath
    ) -> Field:
        help_text = self._help(meta, payload, path, "function") or ""
        args: List[Argument] = []
        if payload.get("args") is not None:
            args_path = (*path, "function", "args")
            for index, raw in enumerate(expect_sequence(payload["args"], args_path, what="args")):
                where = (*args_path, str(index))
                arg = expect_mapping(raw, where, what="argument")
                args.append(
                    Argument(
                        name=expect_str(arg, "name", where),
                        type=expect_str(arg, "type", where),
                        default=self._default(arg, where),
                    )
                )
        return Field(function=Function(name=name, help=help_text, args=args))

    def _build_object(
        self,
        name: str,
        meta: Mapping[str, Any],
        payload: Mapping[str, Any],
        parent: Mapping[str, Any],
        path: KeyPath,
        depth: int,
    ) -> Field:
        help_text = self._help(meta, payload, path, "object")
        if help_text is None:
            raise MalformedShape(STRING, "nothing", (*path, "help"), what=f"help of object {name}")

        # children live under the unprefixed sibling key, not in the metadata
        sibling_path = (*path[:-1], name)
        if name not in parent:
            available = ", ".join(sorted(str(key) for key in parent))
            self._diagnose(sibling_path, f"object {name} has no children (siblings: {available})")
            return Field(object=Object(name=name, help=help_text))

        children = expect_mapping(parent[name], sibling_path, what=f"children of object {name}")
        fields = self._walk_fields(children, sibling_path, depth + 1)
        return Field(object=Object(name=name, help=help_text, fields=fields))

    def _build_value(
        self, name: str, meta: Mapping[str, Any], payload: Mapping[str, Any], path: KeyPath
    ) -> Field:
        value_type = payload.get("type")
        if not isinstance(value_type, str):
            raise MissingValueType(name, path)
        return Field(
            value=Value(
                name=name,
                type=value_type,
                help=self._help(meta, payload, path, "value") or "",
                default=self._default(payload, (*path, "value")),
            )
        )

    # Implicit objects

    def resolve_nested(self, name: str, subtree: Any, path: KeyPath = (), *, depth: int = 0) -> Optional[Field]:
        """Infer an object from unannotated data, or return ``None`` when it documents nothing."""
        if not is_mapping(subtree):
            return None
        fields = self._walk_fields(subtree, path, depth)
        if not fields:
            return None
        return Field(object=Object(name=name, fields=fields))

    def _walk_fields(self, mapping: Mapping[str, Any], path: KeyPath, depth: int) -> Dict[str, Field]:
        self._enter(depth, path)
        fields: Dict[str, Field] = {}
        for key, value in mapping.items():
            if key == self.marker:
                continue
            where = (*path, self._check_key(key, path))
            if self._is_annotated(key):
                name = self._trim(key)
                fields[name] = self.resolve_field(name, value, mapping, where, depth=depth + 1)
                continue
            if self._has_annotation(key, mapping) or key in fields:
                continue
            nested = self.resolve_nested(key, value, where, depth=depth + 1)
            if nested is not None:
                fields[key] = nested
        return fields

    # Helpers

    def _is_annotated(self, key: str) -> bool:
        return key.startswith(self.marker)

    def _has_annotation(self, key: str, mapping: Mapping[str, Any]) -> bool:
        # the annotated sibling always writes (or raises), so inference would be discarded
        return self.marker + key in mapping

    def _trim(self, key: str) -> str:
        return key[len(self.marker):]

    def _check_key(self, key: Any, path: KeyPath) -> str:
        if not isinstance(key, str):
            raise MalformedShape(STRING, shape_of(key), path, what="mapping key")
        return key

    def _enter(self, depth: int, path: KeyPath) -> None:
        if depth > self.config.max_depth:
            raise DepthExceeded(self.config.max_depth, path)

    def _help(
        self, meta: Mapping[str, Any], payload: Mapping[str, Any], path: KeyPath, kind: str
    ) -> Optional[str]:
        # the kind payload's own help wins over the shared one beside the marker
        if payload.get("help") is not None:
            value, where = payload["help"], (*path, kind, "help")
        else:
            value, where = meta.get("help"), (*path, "help")
        if value is None:
            return None
        if not isinstance(value, str):
            raise MalformedShape(STRING, shape_of(value), where, what="help")
        return value

    def _default(self, mapping: Mapping[str, Any], path: KeyPath) -> Any:
        if "default" not in mapping:
            return ABSENT
        return check_structured(mapping["default"], (*path, "default"))

    def _diagnose(self, path: KeyPath, message: str) -> None:
        diagnostic = Diagnostic(tuple(path), message)
        log_diagnostic(logger, diagnostic.path, message)
        self.diagnostics.append(diagnostic)


def decode(root: Any, config: DecoderConfig | None = None) -> Package:
    """Decode an evaluated tree with a fresh :class:`Decoder`."""
    return Decoder(config).decode(root)


__all__ = ["Decoder", "Diagnostic", "FIELD_KINDS", "decode"]
