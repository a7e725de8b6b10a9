"""Map OPF manifest items into an id-indexed Manifest."""

from __future__ import annotations

import logging

from epubdoc.errors import ManifestError
from epubdoc.models import Manifest, ManifestItem, MediaType
from epubdoc.xmltree import XmlNode

logger = logging.getLogger(__name__)


def extract_manifest(node: XmlNode | None) -> Manifest:
    """Build the manifest; later items with a duplicate id replace earlier ones."""

    if node is None:
        raise ManifestError("Package document has no manifest", element="manifest")

    elements = node.all("item")
    if not elements:
        raise ManifestError("Manifest contains no items", element="manifest")

    items: dict[str, ManifestItem] = {}
    for position, element in enumerate(elements, start=1):
        item_id = element.attribute("id")
        if not item_id:
            raise ManifestError("Manifest item has no id", element=f"item[{position}]")

        href = element.attribute("href")
        if not href:
            raise ManifestError("Manifest item has no href", element=f"item[{position}] id={item_id}")

        if item_id in items:
            logger.debug("Manifest id %s redeclared at item[%d]; keeping the later one", item_id, position)

        items[item_id] = ManifestItem(
            id=item_id,
            path=href,
            media_type=MediaType.from_value(element.attribute("media-type")),
            property=element.attribute("properties"),
        )

    return Manifest(items=items, id=node.attribute("id"))
