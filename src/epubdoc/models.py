"""Immutable domain model produced by a successful EPUB parse."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from types import MappingProxyType
from urllib.parse import unquote

from epubdoc.errors import NotFoundError


class MediaType(str, Enum):
    """IANA media types found in package manifests."""

    GIF = "image/gif"
    JPEG = "image/jpeg"
    PNG = "image/png"
    SVG = "image/svg+xml"
    WEBP = "image/webp"
    XHTML = "application/xhtml+xml"
    HTML = "text/html"
    OPF2 = "application/oebps-package+xml"
    NCX = "application/x-dtbncx+xml"
    OEB1_DOCUMENT = "text/x-oeb1-document"
    OEB1_CSS = "text/x-oeb1-css"
    CSS = "text/css"
    XML = "application/xml"
    DTBOOK = "application/x-dtbook+xml"
    SMIL = "application/smil+xml"
    PLS = "application/pls+xml"
    JAVASCRIPT = "text/javascript"
    ECMASCRIPT = "application/ecmascript"
    OPENTYPE = "application/vnd.ms-opentype"
    FONT_OTF = "font/otf"
    FONT_TTF = "font/ttf"
    FONT_WOFF = "font/woff"
    FONT_WOFF2 = "font/woff2"
    FONT_WOFF_LEGACY = "application/font-woff"
    MPEG_AUDIO = "audio/mpeg"
    MP4_AUDIO = "audio/mp4"
    MP4_VIDEO = "video/mp4"
    UNKNOWN = "unknown"

    @classmethod
    def from_value(cls, raw: str | None) -> MediaType:
        """Map a manifest media-type string, falling back to UNKNOWN."""
        if not raw:
            return cls.UNKNOWN
        try:
            return cls(raw.strip().lower())
        except ValueError:
            return cls.UNKNOWN


class PageProgressionDirection(str, Enum):
    LTR = "ltr"
    RTL = "rtl"
    UNSPECIFIED = "unspecified"


@dataclass(frozen=True, slots=True)
class Creator:
    """Dublin Core creator or contributor with its OPF refinements."""

    name: str | None = None
    role: str | None = None
    file_as: str | None = None


@dataclass(frozen=True, slots=True)
class Metadata:
    """Publication properties; every field is independently optional."""

    contributor: Creator | None = None
    coverage: str | None = None
    creator: Creator | None = None
    date: str | None = None
    description: str | None = None
    format: str | None = None
    identifier: str | None = None
    language: str | None = None
    publisher: str | None = None
    relation: str | None = None
    rights: str | None = None
    source: str | None = None
    subject: str | None = None
    title: str | None = None
    type: str | None = None
    cover_id: str | None = None


@dataclass(frozen=True, slots=True)
class ManifestItem:
    id: str
    path: str
    media_type: MediaType = MediaType.UNKNOWN
    property: str | None = None


@dataclass(frozen=True, slots=True)
class Manifest:
    """Resources of the publication keyed by manifest id."""

    items: Mapping[str, ManifestItem] = field(default_factory=lambda: MappingProxyType({}))
    id: str | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.items, MappingProxyType):
            object.__setattr__(self, "items", MappingProxyType(dict(self.items)))

    def __getitem__(self, item_id: str) -> ManifestItem:
        return self.items[item_id]

    def __contains__(self, item_id: object) -> bool:
        return item_id in self.items

    def __len__(self) -> int:
        return len(self.items)

    def path_for(self, item_id: str | None) -> str:
        """Return the href of ``item_id`` or raise NotFoundError."""
        if not item_id:
            raise NotFoundError("Manifest lookup requires an item id")
        item = self.items.get(item_id)
        if item is None:
            raise NotFoundError(f"Manifest has no item with id {item_id!r}", element=item_id)
        return item.path

    def items_of_type(self, media_type: MediaType) -> list[ManifestItem]:
        return [item for item in self.items.values() if item.media_type is media_type]


@dataclass(frozen=True, slots=True)
class SpineItem:
    idref: str
    id: str | None = None
    linear: bool = True


@dataclass(frozen=True, slots=True)
class Spine:
    """Reading order of the publication."""

    items: tuple[SpineItem, ...] = ()
    id: str | None = None
    toc: str | None = None
    page_progression_direction: PageProgressionDirection = PageProgressionDirection.LTR


@dataclass(frozen=True, slots=True)
class TableOfContents:
    """Node of the navigation tree; the root carries the document title."""

    label: str
    id: str
    item: str | None = None
    sub_table: tuple[TableOfContents, ...] = ()

    def walk(self) -> Iterator[TableOfContents]:
        """Yield this node and all descendants depth-first."""
        yield self
        for child in self.sub_table:
            yield from child.walk()


@dataclass(frozen=True, slots=True)
class Document:
    """Fully parsed EPUB package."""

    directory: Path
    content_directory: Path
    metadata: Metadata
    manifest: Manifest
    spine: Spine
    table_of_contents: TableOfContents

    @property
    def title(self) -> str | None:
        return self.metadata.title

    @property
    def author(self) -> str | None:
        creator = self.metadata.creator
        return creator.name if creator is not None else None

    @property
    def publisher(self) -> str | None:
        return self.metadata.publisher

    @property
    def cover(self) -> Path | None:
        """Absolute path of the cover image, when metadata names one."""
        cover_id = self.metadata.cover_id
        if cover_id is None or cover_id not in self.manifest:
            return None
        return self.content_directory / unquote(self.manifest[cover_id].path)
