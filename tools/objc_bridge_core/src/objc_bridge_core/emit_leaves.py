from __future__ import annotations

from .common import UnsupportedShapeError
from .declarations import Alias, Enumeration, Extern, Module, Structure, Use
from .members import KIND_PROTOCOL, KIND_TYPE, Field, Function, Script, Static, Value
from .naming import underscore
from .output import Output


def emit_alias(decl: Alias, o: Output) -> None:
    o.line(f"pub type {decl.name} = {decl.type};", group="alias")


def emit_value(value: Value, o: Output) -> None:
    o.line(f"const {value.name} = {value.value},")


def emit_enumeration(decl: Enumeration, o: Output) -> None:
    with o.block("bitflags!", pad=True):
        with o.block(f"pub flags {decl.name}: {decl.type}"):
            for value in decl.children:
                emit_value(value, o)


def emit_function(function: Function, o: Output) -> None:
    parameters: list[str] = []
    for argument in function.arguments:
        if argument.kind != KIND_TYPE:
            raise UnsupportedShapeError(
                f"extern function '{function.name}' only supports type arguments, got '{argument.kind}'"
            )
        parameters.append(f"{underscore(argument.name)}: {argument.value}")

    returns = ""
    if function.return_value is not None:
        if function.return_value.kind != KIND_TYPE:
            raise UnsupportedShapeError(
                f"unsupported return kind '{function.return_value.kind}' on extern function '{function.name}'"
            )
        returns = f" -> {function.return_value.value}"

    o.line(f"fn {function.name}({', '.join(parameters)}){returns};")


def emit_static(static: Static, o: Output) -> None:
    visibility = "pub " if static.public else ""
    if static.kind == KIND_TYPE:
        o.line(f"{visibility}static {static.name}: {static.value};", group="static")
    elif static.kind == KIND_PROTOCOL:
        o.line(f"{visibility}static {static.name}: {static.value}ID;", group="static")
    else:
        raise UnsupportedShapeError(f"invalid kind '{static.kind}' on static '{static.name}'")


def emit_extern(decl: Extern, o: Output) -> None:
    o.line(f'#[link(name = "{decl.framework}", kind = "framework")]', pad=True)
    if not decl.children:
        o.line("extern {}")
        return
    with o.block("extern"):
        for child in decl.children:
            if isinstance(child, Function):
                emit_function(child, o)
            else:
                emit_static(child, o)


def emit_field(field: Field, o: Output) -> None:
    visibility = "" if field.private else "pub "
    o.line(f"{visibility}{underscore(field.name)}: {field.type},")


def emit_structure(decl: Structure, o: Output) -> None:
    o.line("#[repr(C)]", pad=True, group="structure")
    o.line("#[derive(Clone, Copy, Debug)]", group="structure")
    with o.block(f"pub struct {decl.name}", group="structure"):
        for field in decl.children:
            emit_field(field, o)


def emit_module(decl: Module, o: Output) -> None:
    visibility = "" if decl.private else "pub "
    o.line(f"{visibility}mod {underscore(decl.name)};")


def emit_use(decl: Use, o: Output) -> None:
    visibility = "pub " if decl.public else ""
    o.line(f"{visibility}use {decl.path};", group="use")


def emit_script(script: Script, o: Output) -> None:
    for line in script.content.splitlines():
        o.verbatim(line)
