from __future__ import annotations

from dataclasses import dataclass

from .common import KindAmbiguityError, UnsupportedShapeError
from .naming import selector_method_name, upcase_first
from .schema import SchemaNode, build_children, expect_label, require

KIND_ERROR = "error"
KIND_PROTOCOL = "protocol"
KIND_TYPE = "type"
KIND_GENERIC = "generic"

ARGUMENT_KINDS = (KIND_ERROR, KIND_PROTOCOL, KIND_TYPE)
RETURN_KINDS = (KIND_PROTOCOL, KIND_TYPE, KIND_GENERIC)
PROPERTY_KINDS = (KIND_PROTOCOL, KIND_TYPE)
STATIC_KINDS = (KIND_PROTOCOL, KIND_TYPE)

SCRIPT_TRAIT = "trait"
SCRIPT_ID = "id"


def resolve_kind(node: SchemaNode, kinds: tuple[str, ...]) -> tuple[str, str]:
    present = [kind for kind in kinds if node.has(kind)]
    if not present:
        raise KindAmbiguityError(f"no value defined on {node.describe()}: expected one of {', '.join(kinds)}")
    if len(present) > 1:
        raise KindAmbiguityError(f"multiple values defined on {node.describe()}: {', '.join(present)}")
    kind = present[0]
    return kind, require(node, kind)


@dataclass(frozen=True)
class Argument:
    name: str
    kind: str
    value: str

    @classmethod
    def from_node(cls, node: SchemaNode) -> Argument:
        expect_label(node, "argument")
        kind, value = resolve_kind(node, ARGUMENT_KINDS)
        return cls(name=require(node, "name"), kind=kind, value=value)


@dataclass(frozen=True)
class ReturnValue:
    kind: str
    value: str

    @classmethod
    def from_node(cls, node: SchemaNode) -> ReturnValue:
        expect_label(node, "return")
        kind, value = resolve_kind(node, RETURN_KINDS)
        return cls(kind=kind, value=value)


def _single_error_argument(arguments: tuple[Argument, ...], node: SchemaNode) -> Argument | None:
    errors = [argument for argument in arguments if argument.kind == KIND_ERROR]
    if len(errors) > 1:
        raise UnsupportedShapeError(f"multiple error arguments on {node.describe()}")
    return errors[0] if errors else None


def _single_return(returns: tuple[ReturnValue, ...], node: SchemaNode) -> ReturnValue | None:
    if len(returns) > 1:
        raise UnsupportedShapeError(f"too many return values on {node.describe()}")
    return returns[0] if returns else None


@dataclass(frozen=True)
class Initializer:
    selector: str
    arguments: tuple[Argument, ...]
    error_argument: Argument | None

    @classmethod
    def from_node(cls, node: SchemaNode) -> Initializer:
        expect_label(node, "initializer")
        arguments = build_children(node, {"argument": Argument.from_node})
        return cls(
            selector=require(node, "selector"),
            arguments=arguments,
            error_argument=_single_error_argument(arguments, node),
        )

    @property
    def name(self) -> str:
        return selector_method_name(self.selector)


@dataclass(frozen=True)
class Method:
    selector: str
    arguments: tuple[Argument, ...]
    return_value: ReturnValue | None
    error_argument: Argument | None

    @classmethod
    def from_node(cls, node: SchemaNode) -> Method:
        expect_label(node, "method")
        children = build_children(node, {"argument": Argument.from_node, "return": ReturnValue.from_node})
        arguments = tuple(child for child in children if isinstance(child, Argument))
        returns = tuple(child for child in children if isinstance(child, ReturnValue))
        return cls(
            selector=require(node, "selector"),
            arguments=arguments,
            return_value=_single_return(returns, node),
            error_argument=_single_error_argument(arguments, node),
        )

    @property
    def name(self) -> str:
        return selector_method_name(self.selector)


@dataclass(frozen=True)
class Property:
    name: str
    kind: str
    value: str
    read_only: bool
    weak: bool
    getter: str
    setter: str

    @classmethod
    def from_node(cls, node: SchemaNode) -> Property:
        expect_label(node, "property")
        name = require(node, "name")
        kind, value = resolve_kind(node, PROPERTY_KINDS)
        return cls(
            name=name,
            kind=kind,
            value=value,
            read_only=node.has("read-only"),
            weak=node.has("weak"),
            getter=node.get("getter") or name,
            setter=node.get("setter") or f"set{upcase_first(name)}",
        )


@dataclass(frozen=True)
class Script:
    """Target-language text injected verbatim; ``type`` picks the insertion point."""

    type: str | None
    content: str

    @classmethod
    def from_node(cls, node: SchemaNode) -> Script:
        expect_label(node, "script")
        lines = node.text.splitlines()
        # Only the surrounding blank lines are trimmed; the body is kept as written.
        while lines and not lines[0].strip():
            lines.pop(0)
        while lines and not lines[-1].strip():
            lines.pop()
        return cls(type=node.get("type"), content="\n".join(lines))


@dataclass(frozen=True)
class Text:
    content: str

    @classmethod
    def from_node(cls, node: SchemaNode) -> Text:
        return cls(content=node.text)


@dataclass(frozen=True)
class Field:
    name: str
    type: str
    private: bool

    @classmethod
    def from_node(cls, node: SchemaNode) -> Field:
        return cls(name=require(node, "name"), type=require(node, "type"), private=node.has("private"))


@dataclass(frozen=True)
class Value:
    name: str
    value: str

    @classmethod
    def from_node(cls, node: SchemaNode) -> Value:
        return cls(name=require(node, "name"), value=require(node, "value"))


@dataclass(frozen=True)
class Static:
    name: str
    kind: str
    value: str
    public: bool

    @classmethod
    def from_node(cls, node: SchemaNode) -> Static:
        kind, value = resolve_kind(node, STATIC_KINDS)
        return cls(name=require(node, "name"), kind=kind, value=value, public=node.has("public"))


@dataclass(frozen=True)
class Function:
    name: str
    arguments: tuple[Argument, ...]
    return_value: ReturnValue | None

    @classmethod
    def from_node(cls, node: SchemaNode) -> Function:
        children = build_children(node, {"argument": Argument.from_node, "return": ReturnValue.from_node})
        arguments = tuple(child for child in children if isinstance(child, Argument))
        returns = tuple(child for child in children if isinstance(child, ReturnValue))
        return cls(name=require(node, "name"), arguments=arguments, return_value=_single_return(returns, node))
