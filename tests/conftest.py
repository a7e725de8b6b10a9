from __future__ import annotations

from collections.abc import Callable, Mapping
from pathlib import Path
from zipfile import ZIP_DEFLATED, ZIP_STORED, ZipFile

import pytest

CONTAINER_XML = """<?xml version="1.0" encoding="UTF-8"?>
<container version="1.0" xmlns="urn:oasis:names:tc:opendocument:xmlns:container">
  <rootfiles>
    <rootfile full-path="OEBPS/content.opf" media-type="application/oebps-package+xml"/>
  </rootfiles>
</container>
"""

PACKAGE_OPF = """<?xml version="1.0" encoding="UTF-8"?>
<package xmlns="http://www.idpf.org/2007/opf" version="2.0" unique-identifier="uid">
  <metadata xmlns:dc="http://purl.org/dc/elements/1.1/" xmlns:opf="http://www.idpf.org/2007/opf">
    <dc:title>T</dc:title>
    <dc:creator opf:role="aut" opf:file-as="Writer, Some">Some Writer</dc:creator>
    <dc:language>en</dc:language>
    <dc:identifier id="uid">urn:uuid:1234</dc:identifier>
    <meta name="generator" content="tests"/>
    <meta name="cover" content="cover-img"/>
  </metadata>
  <manifest>
    <item id="toc" href="toc.ncx" media-type="application/x-dtbncx+xml"/>
    <item id="ch1" href="ch1.html" media-type="application/xhtml+xml"/>
    <item id="cover-img" href="images/cover.png" media-type="image/png"/>
  </manifest>
  <spine toc="toc">
    <itemref idref="toc"/>
  </spine>
</package>
"""

NAV_NCX = """<?xml version="1.0" encoding="UTF-8"?>
<ncx xmlns="http://www.daisy.org/z3986/2005/ncx/" version="2005-1">
  <head>
    <meta name="dtb:uid" content="urn:uuid:1234"/>
    <meta name="dtb:depth" content="1"/>
  </head>
  <docTitle><text>T</text></docTitle>
  <navMap>
    <navPoint id="np1" playOrder="1">
      <navLabel><text>Ch1</text></navLabel>
      <content src="ch1.html"/>
    </navPoint>
  </navMap>
</ncx>
"""

CHAPTER_HTML = """<?xml version="1.0" encoding="UTF-8"?>
<html xmlns="http://www.w3.org/1999/xhtml"><body><p>Chapter one.</p></body></html>
"""

EpubWriter = Callable[..., Path]


def default_files() -> dict[str, str | bytes]:
    return {
        "META-INF/container.xml": CONTAINER_XML,
        "OEBPS/content.opf": PACKAGE_OPF,
        "OEBPS/toc.ncx": NAV_NCX,
        "OEBPS/ch1.html": CHAPTER_HTML,
        "OEBPS/images/cover.png": b"\x89PNG\r\n\x1a\n",
    }


@pytest.fixture
def write_epub(tmp_path: Path) -> EpubWriter:
    """Write a zip archive with the given members; ``None`` drops a default member."""

    def _write(
        name: str = "book.epub",
        files: Mapping[str, str | bytes | None] | None = None,
    ) -> Path:
        members: dict[str, str | bytes | None] = dict(default_files())
        if files:
            members.update(files)

        archive_path = tmp_path / name
        with ZipFile(archive_path, "w") as archive:
            archive.writestr("mimetype", "application/epub+zip", compress_type=ZIP_STORED)
            for member, content in members.items():
                if content is None:
                    continue
                archive.writestr(member, content, compress_type=ZIP_DEFLATED)
        return archive_path

    return _write


@pytest.fixture
def epub_files() -> dict[str, str | bytes]:
    """Fresh copy of the default archive members for tests that edit them."""

    return default_files()
