"""Namespace-agnostic XML tree used for package and navigation documents."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Protocol

from lxml import etree

from epubdoc.errors import PackageParseError


def _local_name(name: str) -> str:
    """Strip a Clark-notation namespace or a ``prefix:`` from a name."""
    if "}" in name:
        name = name.rsplit("}", 1)[1]
    return name.rsplit(":", 1)[-1]


class XmlNode:
    """Read-only view over an element matching tags and attributes by local name."""

    __slots__ = ("_element",)

    def __init__(self, element: etree._Element) -> None:
        self._element = element

    def __repr__(self) -> str:
        return f"XmlNode({self.tag!r})"

    @property
    def tag(self) -> str:
        return _local_name(self._element.tag)

    @property
    def text(self) -> str | None:
        """Own text of the element, stripped; None when empty."""
        raw = self._element.text
        if raw is None:
            return None
        cleaned = raw.strip()
        return cleaned or None

    def attribute(self, name: str) -> str | None:
        attrib = self._element.attrib
        if name in attrib:
            return attrib[name]
        wanted = _local_name(name)
        for key, value in attrib.items():
            if _local_name(key) == wanted:
                return value
        return None

    def children(self) -> list[XmlNode]:
        return [XmlNode(child) for child in self._element if isinstance(child.tag, str)]

    def all(self, tag: str, attributes: Mapping[str, str] | None = None) -> list[XmlNode]:
        """Direct children named ``tag``, optionally filtered by attribute values."""
        wanted = _local_name(tag)
        matches: list[XmlNode] = []
        for child in self.children():
            if child.tag != wanted:
                continue
            if attributes and any(child.attribute(key) != value for key, value in attributes.items()):
                continue
            matches.append(child)
        return matches

    def first(self, *path: str) -> XmlNode | None:
        """Follow ``path`` through first matching children."""
        node: XmlNode | None = self
        for tag in path:
            if node is None:
                return None
            found = node.all(tag)
            node = found[0] if found else None
        return node


class XmlTreeParser(Protocol):
    def __call__(self, data: bytes) -> XmlNode:
        """Parse raw document bytes into a navigable tree."""


def parse_xml(data: bytes) -> XmlNode:
    """Parse bytes with a hardened lxml parser and return the root node."""

    parser = etree.XMLParser(resolve_entities=False, no_network=True, load_dtd=False, huge_tree=False)
    try:
        root = etree.fromstring(data, parser=parser)
    except (etree.XMLSyntaxError, ValueError) as exc:
        raise PackageParseError(f"Malformed XML document: {exc}") from exc
    if root is None:
        raise PackageParseError("XML document has no root element")
    return XmlNode(root)
