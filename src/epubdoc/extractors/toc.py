"""Recursive construction of the table of contents from an NCX navMap."""

from __future__ import annotations

from epubdoc.errors import TocError
from epubdoc.models import TableOfContents
from epubdoc.xmltree import XmlNode

TOC_ROOT_ID = "0"


def _nav_points(node: XmlNode, location: str) -> tuple[TableOfContents, ...]:
    entries: list[TableOfContents] = []
    for position, point in enumerate(node.all("navPoint"), start=1):
        point_location = f"{location}/navPoint[{position}]"

        point_id = point.attribute("id")
        if not point_id:
            raise TocError("navPoint has no id", element=point_location)

        label_node = point.first("navLabel", "text")
        label = label_node.text if label_node is not None else None
        if label is None:
            raise TocError("navPoint has no label", element=f"{point_location} id={point_id}")

        content = point.first("content")
        src = content.attribute("src") if content is not None else None
        if not src:
            raise TocError("navPoint has no content src", element=f"{point_location} id={point_id}")

        entries.append(
            TableOfContents(
                label=label,
                id=point_id,
                item=src,
                sub_table=_nav_points(point, point_location),
            )
        )
    return tuple(entries)


def extract_table_of_contents(root: XmlNode) -> TableOfContents:
    """Build the TOC tree rooted at the document title."""

    title_node = root.first("docTitle", "text")
    title = title_node.text if title_node is not None else None
    if title is None:
        raise TocError("Navigation document has no docTitle text", element="docTitle/text")

    head = root.first("head")
    uid_meta = head.all("meta", {"name": "dtb:uid"}) if head is not None else []
    item = uid_meta[0].attribute("content") if uid_meta else None

    nav_map = root.first("navMap")
    sub_table = _nav_points(nav_map, "navMap") if nav_map is not None else ()
    return TableOfContents(label=title, id=TOC_ROOT_ID, item=item, sub_table=sub_table)
