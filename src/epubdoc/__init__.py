"""Parse EPUB packages into an immutable document model."""

from .errors import (
    ContainerError,
    EPUBParseError,
    ExtractionError,
    ManifestError,
    NotFoundError,
    PackageParseError,
    SpineError,
    TocError,
)
from .models import Document, Manifest, Metadata, Spine, TableOfContents
from .observer import ParserObserver
from .parser import EPUBParser, parse_epub

__all__ = [
    "ContainerError",
    "Document",
    "EPUBParseError",
    "EPUBParser",
    "ExtractionError",
    "Manifest",
    "ManifestError",
    "Metadata",
    "NotFoundError",
    "PackageParseError",
    "ParserObserver",
    "Spine",
    "SpineError",
    "TableOfContents",
    "TocError",
    "parse_epub",
]
