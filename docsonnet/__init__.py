"""Decode inline documentation annotations into a typed package model."""

from .config import DecoderConfig
from .decoder import Decoder, Diagnostic, decode
from .errors import (
    DecodeError,
    DepthExceeded,
    MalformedShape,
    MissingFieldKind,
    MissingPackageDeclaration,
    MissingValueType,
)
from .models import ABSENT, Argument, Field, Function, Object, Package, Value

__all__ = [
    "ABSENT",
    "Argument",
    "DecodeError",
    "Decoder",
    "DecoderConfig",
    "DepthExceeded",
    "Diagnostic",
    "Field",
    "Function",
    "MalformedShape",
    "MissingFieldKind",
    "MissingPackageDeclaration",
    "MissingValueType",
    "Object",
    "Package",
    "Value",
    "decode",
]
