"""Best-effort mapping of the OPF metadata element into Metadata."""

from __future__ import annotations

from epubdoc.models import Creator, Metadata
from epubdoc.xmltree import XmlNode

_SCALAR_FIELDS = (
    "coverage",
    "date",
    "description",
    "format",
    "identifier",
    "language",
    "publisher",
    "relation",
    "rights",
    "source",
    "subject",
    "title",
    "type",
)


def _first_text(node: XmlNode, tag: str) -> str | None:
    element = node.first(tag)
    return element.text if element is not None else None


def _creator(node: XmlNode, tag: str) -> Creator | None:
    element = node.first(tag)
    if element is None:
        return None
    return Creator(
        name=element.text,
        role=element.attribute("opf:role"),
        file_as=element.attribute("opf:file-as"),
    )


def _cover_id(node: XmlNode) -> str | None:
    for meta in node.all("meta", {"name": "cover"}):
        return meta.attribute("content")
    return None


def extract_metadata(node: XmlNode | None) -> Metadata:
    """Extract Dublin Core fields; absent fields stay None and never fail."""

    if node is None:
        return Metadata()

    values = {name: _first_text(node, name) for name in _SCALAR_FIELDS}
    return Metadata(
        contributor=_creator(node, "contributor"),
        creator=_creator(node, "creator"),
        cover_id=_cover_id(node),
        **values,
    )
