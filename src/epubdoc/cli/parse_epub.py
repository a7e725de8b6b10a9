"""CLI command that parses EPUB packages and prints their structure as JSON."""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path

from dotenv import load_dotenv

from epubdoc.archive import ZipArchiveExtractor
from epubdoc.config import ParserSettings
from epubdoc.errors import EPUBParseError
from epubdoc.models import Document, TableOfContents
from epubdoc.parser import EPUBParser

logger = logging.getLogger(__name__)


def _collect_inputs(target: Path) -> list[Path]:
    if target.is_file():
        return [target]
    if target.is_dir():
        return sorted(path for path in target.rglob("*.epub") if path.is_file())
    return []


def _toc_payload(node: TableOfContents) -> dict[str, object]:
    return {
        "label": node.label,
        "id": node.id,
        "item": node.item,
        "children": [_toc_payload(child) for child in node.sub_table],
    }


def _document_payload(source: Path, document: Document) -> dict[str, object]:
    metadata = document.metadata
    return {
        "source_path": str(source),
        "directory": str(document.directory),
        "title": metadata.title,
        "author": document.author,
        "language": metadata.language,
        "identifier": metadata.identifier,
        "cover": str(document.cover) if document.cover is not None else None,
        "manifest": {
            item_id: {"path": item.path, "media_type": item.media_type.value}
            for item_id, item in document.manifest.items.items()
        },
        "spine": [
            {"idref": item.idref, "linear": item.linear} for item in document.spine.items
        ],
        "page_progression_direction": document.spine.page_progression_direction.value,
        "toc": _toc_payload(document.table_of_contents),
    }


def main(argv: list[str] | None = None) -> int:
    load_dotenv()
    settings = ParserSettings.from_env()

    parser = argparse.ArgumentParser(description="Parse EPUB packages and emit their structure")
    parser.add_argument("--path", required=True, help="EPUB file or directory of EPUB files")
    parser.add_argument(
        "--extract-dir",
        default=None,
        help="Directory archives are extracted into (defaults to EPUBDOC_EXTRACT_DIR or next to each archive)",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        level=settings.log_level,
    )

    extract_root = Path(args.extract_dir) if args.extract_dir else settings.extract_root
    epub_parser = EPUBParser(extractor=ZipArchiveExtractor(extract_root))

    source_path = Path(args.path)
    results: list[dict[str, object]] = []
    errors: list[dict[str, str]] = []

    for file_path in _collect_inputs(source_path):
        try:
            document = epub_parser.parse(file_path)
        except EPUBParseError as exc:
            errors.append({"source_path": str(file_path), "error_type": type(exc).__name__, "error": str(exc)})
            continue
        results.append(_document_payload(file_path, document))

    logger.info("Parsed %d of %d packages", len(results), len(results) + len(errors))

    payload = {
        "path": str(source_path),
        "processed": len(results),
        "results": results,
        "errors": errors,
    }
    print(json.dumps(payload, ensure_ascii=False, indent=2))
    return 0 if not errors else 1


if __name__ == "__main__":
    raise SystemExit(main())
