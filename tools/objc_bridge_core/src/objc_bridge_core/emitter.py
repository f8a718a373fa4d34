from __future__ import annotations

from dataclasses import dataclass

from .common import UnsupportedShapeError
from .declarations import (
    DEFAULT_PLATFORM,
    Alias,
    Enumeration,
    Extern,
    Framework,
    Module,
    ProtocolDecl,
    Structure,
    Use,
    build_framework,
)
from .emit_interfaces import emit_protocol
from .emit_leaves import (
    emit_alias,
    emit_enumeration,
    emit_extern,
    emit_module,
    emit_script,
    emit_structure,
    emit_use,
)
from .members import Script
from .output import DEFAULT_INDENT, Output
from .schema import parse

PRELUDE_ALLOW = "#![allow(non_upper_case_globals)]"
PRELUDE_USES = ("use std;", "use objc;", "use super::ObjectiveC;")


@dataclass(frozen=True)
class BridgeOptions:
    platform: str = DEFAULT_PLATFORM
    indent: str = DEFAULT_INDENT


def emit_declaration(decl: object, o: Output) -> None:
    # ClassDecl is a ProtocolDecl and takes the same path.
    if isinstance(decl, ProtocolDecl):
        emit_protocol(decl, o)
    elif isinstance(decl, Alias):
        emit_alias(decl, o)
    elif isinstance(decl, Enumeration):
        emit_enumeration(decl, o)
    elif isinstance(decl, Extern):
        emit_extern(decl, o)
    elif isinstance(decl, Structure):
        emit_structure(decl, o)
    elif isinstance(decl, Module):
        emit_module(decl, o)
    elif isinstance(decl, Use):
        emit_use(decl, o)
    elif isinstance(decl, Script):
        emit_script(decl, o)
    else:
        raise UnsupportedShapeError(f"no emission rule for {type(decl).__name__}")


def emit_framework(framework: Framework, o: Output) -> None:
    o.line(PRELUDE_ALLOW, pad=True, group="prelude")
    if not framework.no_prelude:
        for line in PRELUDE_USES:
            o.line(line, group="prelude")
    for decl in framework.children:
        emit_declaration(decl, o)


def render_framework(framework: Framework, options: BridgeOptions | None = None) -> str:
    options = options or BridgeOptions()
    o = Output(indent=options.indent)
    emit_framework(framework, o)
    return o.render()


def generate(text: str, options: BridgeOptions | None = None) -> str:
    """Translate bridge schema markup into Rust wrapper source.

    The whole document is built before anything is emitted, and any
    ``BridgeError`` aborts the run without returning partial output.
    """
    options = options or BridgeOptions()
    framework = build_framework(parse(text), platform=options.platform)
    return render_framework(framework, options)
