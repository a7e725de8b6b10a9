"""Extractors mapping parsed XML trees into domain entities."""

from .container import CONTAINER_PATH, locate_package_document
from .manifest import extract_manifest
from .metadata import extract_metadata
from .spine import extract_spine
from .toc import TOC_ROOT_ID, extract_table_of_contents

__all__ = [
    "CONTAINER_PATH",
    "TOC_ROOT_ID",
    "extract_manifest",
    "extract_metadata",
    "extract_spine",
    "extract_table_of_contents",
    "locate_package_document",
]
