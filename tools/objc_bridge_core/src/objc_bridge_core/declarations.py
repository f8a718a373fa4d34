from __future__ import annotations

from dataclasses import dataclass
from functools import partial
from typing import Any, Callable

from .common import MissingAttributeError, UnsupportedShapeError
from .members import (
    Field,
    Function,
    Initializer,
    Method,
    Property,
    Script,
    Static,
    Text,
    Value,
)
from .naming import constructor_name
from .schema import SchemaNode, build_children, expect_label, require

DEFAULT_PLATFORM = "mac"


def split_inherits(raw: str | None) -> list[str]:
    if not raw:
        return []
    return [item.strip() for item in raw.split(",") if item.strip()]


def _reject_constructor_collisions(owner: str, children: tuple[Any, ...]) -> None:
    seen: dict[str, str] = {}
    for child in children:
        if not isinstance(child, Initializer):
            continue
        name = constructor_name(child.selector)
        if name in seen:
            raise UnsupportedShapeError(
                f"initializers '{seen[name]}' and '{child.selector}' on {owner} both map to constructor '{name}'"
            )
        seen[name] = child.selector


@dataclass(frozen=True)
class ProtocolDecl:
    name: str
    inherits: tuple[str, ...]
    children: tuple[Any, ...]

    LABEL = "protocol"

    @classmethod
    def from_node(cls, node: SchemaNode, platform: str = DEFAULT_PLATFORM) -> ProtocolDecl:
        expect_label(node, cls.LABEL)
        # Platform list first, then the generic one; duplicates are kept.
        inherits = split_inherits(node.get(f"inherits_{platform}")) + split_inherits(node.get("inherits"))
        children = build_children(
            node,
            {
                "initializer": Initializer.from_node,
                "method": Method.from_node,
                "property": Property.from_node,
                "script": Script.from_node,
                "text": Text.from_node,
            },
        )
        name = require(node, "name")
        _reject_constructor_collisions(name, children)
        return cls(name=name, inherits=tuple(inherits), children=children)

    @property
    def initializers(self) -> list[Initializer]:
        return [child for child in self.children if isinstance(child, Initializer)]

    def scripts(self, script_type: str) -> list[Script]:
        return [child for child in self.children if isinstance(child, Script) and child.type == script_type]


@dataclass(frozen=True)
class ClassDecl(ProtocolDecl):
    LABEL = "class"


@dataclass(frozen=True)
class Alias:
    name: str
    type: str

    @classmethod
    def from_node(cls, node: SchemaNode) -> Alias:
        expect_label(node, "alias")
        return cls(name=require(node, "name"), type=require(node, "type"))


@dataclass(frozen=True)
class Enumeration:
    name: str
    type: str
    children: tuple[Value, ...]

    @classmethod
    def from_node(cls, node: SchemaNode) -> Enumeration:
        expect_label(node, "enumeration")
        children = build_children(node, {"value": Value.from_node})
        return cls(name=require(node, "name"), type=require(node, "type"), children=children)


@dataclass(frozen=True)
class Extern:
    framework: str
    children: tuple[Any, ...]

    @classmethod
    def from_node(cls, node: SchemaNode) -> Extern:
        expect_label(node, "extern")
        children = build_children(node, {"function": Function.from_node, "static": Static.from_node})
        return cls(framework=require(node, "framework"), children=children)


@dataclass(frozen=True)
class Structure:
    name: str
    children: tuple[Field, ...]

    @classmethod
    def from_node(cls, node: SchemaNode) -> Structure:
        expect_label(node, "structure")
        return cls(name=require(node, "name"), children=build_children(node, {"field": Field.from_node}))


@dataclass(frozen=True)
class Module:
    name: str
    private: bool

    @classmethod
    def from_node(cls, node: SchemaNode) -> Module:
        return cls(name=require(node, "name"), private=node.has("private"))


@dataclass(frozen=True)
class Use:
    path: str
    public: bool

    @classmethod
    def from_node(cls, node: SchemaNode) -> Use:
        path = node.text.strip()
        if not path:
            raise MissingAttributeError(f"missing path text on {node.describe()}")
        return cls(path=path, public=node.has("public"))


def framework_children_table(platform: str) -> dict[str, Callable[[SchemaNode], Any]]:
    return {
        "alias": Alias.from_node,
        "class": partial(ClassDecl.from_node, platform=platform),
        "enumeration": Enumeration.from_node,
        "extern": Extern.from_node,
        "module": Module.from_node,
        "protocol": partial(ProtocolDecl.from_node, platform=platform),
        "script": Script.from_node,
        "structure": Structure.from_node,
        "use": Use.from_node,
    }


@dataclass(frozen=True)
class Framework:
    module: str | None
    no_prelude: bool
    children: tuple[Any, ...]

    @classmethod
    def from_node(cls, node: SchemaNode, platform: str = DEFAULT_PLATFORM) -> Framework:
        expect_label(node, "framework")
        return cls(
            module=node.get("module"),
            no_prelude=node.has("no-prelude"),
            children=build_children(node, framework_children_table(platform)),
        )


def build_framework(node: SchemaNode, platform: str = DEFAULT_PLATFORM) -> Framework:
    return Framework.from_node(node, platform=platform)
