"""
Generic attributed tree consumed by the parsers.

A DWML document is reduced to one node type for every tag: a name, its
attributes, its ordered children and optional text content. Parsers
switch on ``name`` and never on the shape of a node.
"""

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from lxml import etree


def _freeze(attributes: Mapping[str, str] | None) -> Mapping[str, str]:
    return MappingProxyType(dict(attributes or {}))


@dataclass(frozen=True)
class TreeNode:
    """
    One element of a parsed DWML document.

    Attributes:
        name: Tag name (namespace prefix stripped).
        attributes: Attribute mapping (read-only).
        children: Child nodes in document order.
        content: Stripped text content, or None when the element has no text.
    """

    name: str
    attributes: Mapping[str, str] = field(default_factory=lambda: _freeze(None))
    children: tuple["TreeNode", ...] = ()
    content: str | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.attributes, MappingProxyType):
            object.__setattr__(self, "attributes", _freeze(self.attributes))
        if not isinstance(self.children, tuple):
            object.__setattr__(self, "children", tuple(self.children))

    def attr(self, key: str, default: str | None = None) -> str | None:
        """Return an attribute value, or ``default`` if absent."""
        return self.attributes.get(key, default)

    def find(self, name: str) -> "TreeNode | None":
        """Return the first child named ``name``."""
        return next(self.iter_children(name), None)

    def find_all(self, name: str) -> list["TreeNode"]:
        """Return all children named ``name`` in document order."""
        return list(self.iter_children(name))

    def iter_children(self, name: str | None = None) -> Iterator["TreeNode"]:
        """Iterate children, optionally only those named ``name``."""
        for child in self.children:
            if name is None or child.name == name:
                yield child

    @classmethod
    def from_element(cls, element: etree._Element) -> "TreeNode":
        """
        Build a tree from an lxml element.

        Comments and processing instructions are skipped. Namespaced tag
        and attribute names (``xsi:nil``) are reduced to their local name.
        """
        children = tuple(
            cls.from_element(child)
            for child in element
            if isinstance(child.tag, str)
        )
        text = (element.text or "").strip()
        return cls(
            name=etree.QName(element).localname,
            attributes={
                etree.QName(key).localname: value
                for key, value in element.attrib.items()
            },
            children=children,
            content=text or None,
        )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "TreeNode":
        """
        Build a tree from a plain mapping.

        Accepts the shape produced by generic XML-to-JSON parsers:
        ``{"name": ..., "attributes": {...}, "children": [...], "content": ...}``.
        """
        return cls(
            name=data["name"],
            attributes=data.get("attributes") or {},
            children=tuple(cls.from_dict(child) for child in data.get("children") or ()),
            content=(data.get("content") or "").strip() or None,
        )
