from __future__ import annotations

import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from typing import Any, Callable

from .common import MissingAttributeError, SchemaParseError, StructuralMismatchError

TEXT_LABEL = "text"


@dataclass(frozen=True)
class SchemaNode:
    label: str
    attributes: dict[str, str] = field(default_factory=dict)
    children: tuple[SchemaNode, ...] = ()
    text: str = ""

    def has(self, name: str) -> bool:
        return name in self.attributes

    def get(self, name: str, default: Any = None) -> Any:
        return self.attributes.get(name, default)

    def describe(self) -> str:
        for key in ("name", "selector"):
            value = self.attributes.get(key)
            if value:
                return f'<{self.label} {key}="{value}">'
        return f"<{self.label}>"


def _text_node(value: str | None) -> SchemaNode | None:
    if value is None or not value.strip():
        return None
    return SchemaNode(label=TEXT_LABEL, text=value)


def _convert(element: ET.Element) -> SchemaNode:
    children: list[SchemaNode] = []
    leading = _text_node(element.text)
    if leading is not None:
        children.append(leading)
    for child in element:
        children.append(_convert(child))
        trailing = _text_node(child.tail)
        if trailing is not None:
            children.append(trailing)
    return SchemaNode(
        label=element.tag,
        attributes=dict(element.attrib),
        children=tuple(children),
        text="".join(element.itertext()),
    )


def parse(text: str) -> SchemaNode:
    try:
        root = ET.fromstring(text)
    except ET.ParseError as exc:
        raise SchemaParseError(f"Schema markup is not well-formed: {exc}") from exc
    return _convert(root)


def expect_label(node: SchemaNode, label: str) -> None:
    if node.label != label:
        raise StructuralMismatchError(f"expected node name '{label}' but got '{node.label}' at {node.describe()}")


def build_children(node: SchemaNode, table: dict[str, Callable[[SchemaNode], Any]]) -> tuple[Any, ...]:
    # Labels missing from the table are dropped on purpose.
    built: list[Any] = []
    for child in node.children:
        factory = table.get(child.label)
        if factory is None:
            continue
        built.append(factory(child))
    return tuple(built)


def require(node: SchemaNode, name: str) -> str:
    value = node.get(name)
    if not value:
        raise MissingAttributeError(f"missing required attribute '{name}' on {node.describe()}")
    return value
