"""Archive extraction collaborators for zip-based EPUB containers."""

from __future__ import annotations

import hashlib
import logging
from pathlib import Path
import shutil
from typing import Protocol, runtime_checkable
from zipfile import BadZipFile, ZipFile

from epubdoc.errors import ExtractionError

logger = logging.getLogger(__name__)

_ZIP_MAGIC = b"PK\x03\x04"
_ARCHIVE_SUFFIXES = {".epub", ".zip"}


@runtime_checkable
class ArchiveExtractor(Protocol):
    """Protocol for turning an archive path into an extracted directory."""

    def supports(self, path: Path, sniffed_bytes: bytes | None = None) -> bool:
        """Return True when this extractor can open the given file."""

    def extract(self, path: Path) -> Path:
        """Materialize the archive and return the extracted directory."""


class ZipArchiveExtractor:
    """Extract ``.epub`` archives into a directory derived from the archive path."""

    def __init__(self, extract_root: str | Path | None = None) -> None:
        self._extract_root = Path(extract_root) if extract_root is not None else None

    def supports(self, path: Path, sniffed_bytes: bytes | None = None) -> bool:
        if path.suffix.lower() in _ARCHIVE_SUFFIXES:
            return True
        if sniffed_bytes is None:
            return False
        return sniffed_bytes.startswith(_ZIP_MAGIC)

    def destination_for(self, path: Path) -> Path:
        """Directory the archive at ``path`` is extracted into.

        Named after the stem plus a digest of the resolved archive path.
        """
        digest = hashlib.sha256(str(Path(path).resolve()).encode("utf-8")).hexdigest()[:12]
        name = f"{path.stem}-{digest}"
        if self._extract_root is not None:
            return self._extract_root / name
        return path.with_name(name)

    def extract(self, path: Path) -> Path:
        source = Path(path)
        if not source.is_file():
            raise ExtractionError("Archive does not exist", path=source)

        sniffed = self._sniff(source)
        if not self.supports(source, sniffed):
            raise ExtractionError("Unsupported archive format", path=source)

        destination = self.destination_for(source)
        try:
            with ZipFile(source, "r") as archive:
                self._check_members(archive, destination, source)
                if destination.exists():
                    shutil.rmtree(destination)
                destination.mkdir(parents=True, exist_ok=True)
                archive.extractall(destination)
        except BadZipFile as exc:
            raise ExtractionError(f"Corrupt zip archive: {exc}", path=source) from exc
        except OSError as exc:
            raise ExtractionError(f"Failed to extract archive: {exc}", path=source) from exc

        logger.debug("Extracted %s into %s", source, destination)
        return destination

    def _sniff(self, path: Path) -> bytes:
        try:
            with path.open("rb") as handle:
                return handle.read(len(_ZIP_MAGIC))
        except OSError as exc:
            raise ExtractionError(f"Failed to read archive: {exc}", path=path) from exc

    def _check_members(self, archive: ZipFile, destination: Path, source: Path) -> None:
        root = destination.resolve()
        for name in archive.namelist():
            target = (root / name).resolve()
            if target != root and root not in target.parents:
                raise ExtractionError("Archive member escapes extraction directory", path=source, element=name)
