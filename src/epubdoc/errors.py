"""Error taxonomy raised while parsing an EPUB package."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(slots=True, eq=False)
class EPUBParseError(Exception):
    """Base error for every failure that aborts a parse call."""

    message: str
    path: Path | None = None
    element: str | None = None

    def __reduce__(self) -> tuple[type, tuple[str, Path | None, str | None]]:
        return (type(self), (self.message, self.path, self.element))

    def __str__(self) -> str:
        parts = [self.message]
        if self.element is not None:
            parts.append(f"element={self.element}")
        if self.path is not None:
            parts.append(f"path={self.path}")
        if len(parts) == 1:
            return self.message
        return f"{self.message} ({', '.join(parts[1:])})"


class ExtractionError(EPUBParseError):
    """Archive is missing, corrupt or not a zip container."""


class ContainerError(EPUBParseError):
    """META-INF/container.xml is missing, malformed or has no package path."""


class PackageParseError(EPUBParseError):
    """Package or navigation document is not well-formed XML."""


class ManifestError(EPUBParseError):
    """Manifest has no items or an item lacks its id or href."""


class SpineError(EPUBParseError):
    """Spine has no itemrefs or an itemref lacks its idref."""


class NotFoundError(EPUBParseError):
    """Navigation document cannot be resolved from the spine and manifest."""


class TocError(EPUBParseError):
    """Navigation map lacks its title or a navPoint lacks a required part."""


__all__ = [
    "ContainerError",
    "EPUBParseError",
    "ExtractionError",
    "ManifestError",
    "NotFoundError",
    "PackageParseError",
    "SpineError",
    "TocError",
]
