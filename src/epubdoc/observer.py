"""Lifecycle callbacks emitted by EPUBParser."""

from __future__ import annotations

from pathlib import Path

from epubdoc.models import Manifest, Metadata, Spine, TableOfContents


class ParserObserver:
    """No-op base class; override the callbacks you care about.

    Callbacks run synchronously on the parsing thread, in this order:
    ``begin``, ``archive_extracted``, ``metadata_ready``, ``manifest_ready``,
    ``spine_ready``, ``toc_ready``, ``end``. ``failed`` replaces the rest of
    the sequence when a stage raises.
    """

    def begin(self, path: Path) -> None:
        pass

    def archive_extracted(self, directory: Path) -> None:
        pass

    def metadata_ready(self, metadata: Metadata) -> None:
        pass

    def manifest_ready(self, manifest: Manifest) -> None:
        pass

    def spine_ready(self, spine: Spine) -> None:
        pass

    def toc_ready(self, table_of_contents: TableOfContents) -> None:
        pass

    def end(self, path: Path) -> None:
        pass

    def failed(self, path: Path, error: Exception) -> None:
        pass
