"""Map the OPF spine into an ordered Spine."""

from __future__ import annotations

import logging

from epubdoc.errors import SpineError
from epubdoc.models import PageProgressionDirection, Spine, SpineItem
from epubdoc.xmltree import XmlNode

logger = logging.getLogger(__name__)


def _direction(raw: str | None) -> PageProgressionDirection:
    if raw is None:
        return PageProgressionDirection.LTR
    if raw == PageProgressionDirection.LTR.value:
        return PageProgressionDirection.LTR
    if raw == PageProgressionDirection.RTL.value:
        return PageProgressionDirection.RTL
    logger.warning("Unrecognized page-progression-direction %r", raw)
    return PageProgressionDirection.UNSPECIFIED


def extract_spine(node: XmlNode | None) -> Spine:
    """Build the spine preserving itemref order.

    ``linear`` is true when the attribute is absent and otherwise only for the
    exact value ``"yes"``.
    """

    if node is None:
        raise SpineError("Package document has no spine", element="spine")

    elements = node.all("itemref")
    if not elements:
        raise SpineError("Spine contains no itemrefs", element="spine")

    items: list[SpineItem] = []
    for position, element in enumerate(elements, start=1):
        idref = element.attribute("idref")
        if not idref:
            raise SpineError("Spine itemref has no idref", element=f"itemref[{position}]")
        items.append(
            SpineItem(
                idref=idref,
                id=element.attribute("id"),
                linear=element.attribute("linear") in (None, "yes"),
            )
        )

    return Spine(
        items=tuple(items),
        id=node.attribute("id"),
        toc=node.attribute("toc"),
        page_progression_direction=_direction(node.attribute("page-progression-direction")),
    )
