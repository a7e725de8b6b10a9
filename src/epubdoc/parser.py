"""Parse orchestration from archive path to Document."""

from __future__ import annotations

import logging
from pathlib import Path
from urllib.parse import unquote
import weakref

from epubdoc.archive import ArchiveExtractor, ZipArchiveExtractor
from epubdoc.errors import EPUBParseError, ExtractionError, NotFoundError, PackageParseError
from epubdoc.extractors import (
    extract_manifest,
    extract_metadata,
    extract_spine,
    extract_table_of_contents,
    locate_package_document,
)
from epubdoc.models import Document
from epubdoc.observer import ParserObserver
from epubdoc.xmltree import XmlNode, XmlTreeParser, parse_xml

logger = logging.getLogger(__name__)


class EPUBParser:
    """Turn an EPUB archive into an immutable Document.

    The observer is referenced weakly: the parser never keeps it alive and
    skips notifications once it has been collected.
    """

    def __init__(
        self,
        extractor: ArchiveExtractor | None = None,
        xml_parser: XmlTreeParser = parse_xml,
        observer: ParserObserver | None = None,
    ) -> None:
        self._extractor: ArchiveExtractor = extractor or ZipArchiveExtractor()
        self._parse_xml = xml_parser
        self._observer_ref: weakref.ReferenceType[ParserObserver] | None = None
        self.observer = observer

    @property
    def observer(self) -> ParserObserver | None:
        if self._observer_ref is None:
            return None
        return self._observer_ref()

    @observer.setter
    def observer(self, observer: ParserObserver | None) -> None:
        self._observer_ref = weakref.ref(observer) if observer is not None else None

    def parse(self, path: str | Path) -> Document:
        """Parse the archive at ``path``; any failure aborts with no partial result."""

        source = Path(path)
        try:
            return self._parse(source)
        except Exception as exc:
            logger.warning("Failed to parse %s: %s", source, exc)
            self._notify("failed", source, exc)
            raise

    def _parse(self, source: Path) -> Document:
        logger.info("Parsing EPUB %s", source)
        self._notify("begin", source)

        directory = self._extract(source)
        self._notify("archive_extracted", directory)

        package_path = locate_package_document(directory, self._parse_xml)
        content_directory = package_path.parent
        package = self._read_tree(package_path)

        metadata = extract_metadata(package.first("metadata"))
        self._notify("metadata_ready", metadata)

        manifest = extract_manifest(package.first("manifest"))
        self._notify("manifest_ready", manifest)

        spine = extract_spine(package.first("spine"))
        self._notify("spine_ready", spine)

        if not spine.toc:
            raise NotFoundError("Spine declares no toc reference", path=package_path, element="spine")
        try:
            toc_href = manifest.path_for(spine.toc)
        except NotFoundError as exc:
            raise NotFoundError(exc.message, path=package_path, element=exc.element) from exc

        toc_path = content_directory / unquote(toc_href)
        if directory.resolve() not in toc_path.resolve().parents:
            raise NotFoundError("Navigation document escapes the archive directory", path=package_path, element=toc_href)
        if not toc_path.is_file():
            raise NotFoundError("Navigation document does not exist", path=toc_path, element=spine.toc)
        table_of_contents = extract_table_of_contents(self._read_tree(toc_path))
        self._notify("toc_ready", table_of_contents)

        document = Document(
            directory=directory,
            content_directory=content_directory,
            metadata=metadata,
            manifest=manifest,
            spine=spine,
            table_of_contents=table_of_contents,
        )
        logger.info("Parsed EPUB %s: %d manifest items, %d spine items", source, len(manifest), len(spine.items))
        self._notify("end", source)
        return document

    def _extract(self, source: Path) -> Path:
        try:
            return self._extractor.extract(source)
        except ExtractionError:
            raise
        except Exception as exc:
            raise ExtractionError(f"Archive extraction failed: {exc}", path=source) from exc

    def _read_tree(self, path: Path) -> XmlNode:
        try:
            data = path.read_bytes()
        except OSError as exc:
            raise NotFoundError(f"Failed to read document: {exc}", path=path) from exc
        try:
            return self._parse_xml(data)
        except PackageParseError as exc:
            raise PackageParseError(exc.message, path=path, element=exc.element) from exc
        except EPUBParseError:
            raise
        except Exception as exc:
            raise PackageParseError(f"XML parser failed: {exc}", path=path) from exc

    def _notify(self, callback: str, *args: object) -> None:
        observer = self.observer
        if observer is None:
            return
        getattr(observer, callback)(*args)


def parse_epub(
    path: str | Path,
    *,
    extract_root: str | Path | None = None,
    observer: ParserObserver | None = None,
) -> Document:
    """Parse ``path`` with the default zip extractor and lxml parser."""

    parser = EPUBParser(extractor=ZipArchiveExtractor(extract_root), observer=observer)
    return parser.parse(path)
