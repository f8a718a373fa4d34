from .common import (
    BridgeError,
    GenericSlotsExhaustedError,
    KindAmbiguityError,
    MissingAttributeError,
    SchemaParseError,
    StructuralMismatchError,
    UnsupportedShapeError,
    write_if_changed,
)
from .declarations import Framework, build_framework
from .emitter import BridgeOptions, emit_framework, generate, render_framework
from .naming import returns_owned
from .output import Output
from .schema import SchemaNode, parse

__all__ = [
    "BridgeError",
    "BridgeOptions",
    "Framework",
    "GenericSlotsExhaustedError",
    "KindAmbiguityError",
    "MissingAttributeError",
    "Output",
    "SchemaNode",
    "SchemaParseError",
    "StructuralMismatchError",
    "UnsupportedShapeError",
    "build_framework",
    "emit_framework",
    "generate",
    "parse",
    "render_framework",
    "returns_owned",
    "write_if_changed",
]
