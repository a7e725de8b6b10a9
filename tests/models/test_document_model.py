from __future__ import annotations

from dataclasses import FrozenInstanceError
from pathlib import Path
import pickle

import pytest

from epubdoc.errors import EPUBParseError, ManifestError
from epubdoc.models import (
    Creator,
    Document,
    Manifest,
    ManifestItem,
    MediaType,
    Metadata,
    Spine,
    SpineItem,
    TableOfContents,
)


def _document(metadata: Metadata, items: dict[str, ManifestItem]) -> Document:
    return Document(
        directory=Path("/tmp/book"),
        content_directory=Path("/tmp/book/OEBPS"),
        metadata=metadata,
        manifest=Manifest(items=items),
        spine=Spine(items=(SpineItem(idref="c1"),)),
        table_of_contents=TableOfContents(label="Book", id="0"),
    )


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("application/xhtml+xml", MediaType.XHTML),
        ("IMAGE/JPEG", MediaType.JPEG),
        ("application/x-dtbncx+xml", MediaType.NCX),
        ("application/x-unheard-of", MediaType.UNKNOWN),
        ("", MediaType.UNKNOWN),
        (None, MediaType.UNKNOWN),
    ],
)
def test_media_type_from_value_never_fails(raw: str | None, expected: MediaType) -> None:
    assert MediaType.from_value(raw) is expected


def test_cover_resolves_through_manifest() -> None:
    document = _document(
        Metadata(title="Book", creator=Creator(name="Author"), publisher="House", cover_id="img"),
        {"img": ManifestItem(id="img", path="images/my%20cover.jpg", media_type=MediaType.JPEG)},
    )

    assert document.title == "Book"
    assert document.author == "Author"
    assert document.publisher == "House"
    assert document.cover == Path("/tmp/book/OEBPS/images/my cover.jpg")


def test_cover_is_none_when_unreferenced_or_unknown() -> None:
    assert _document(Metadata(), {}).cover is None
    assert _document(Metadata(cover_id="missing"), {}).cover is None
    assert _document(Metadata(), {}).author is None


def test_entities_are_immutable() -> None:
    document = _document(Metadata(title="Book"), {})

    with pytest.raises(FrozenInstanceError):
        document.metadata = Metadata()  # type: ignore[misc]
    with pytest.raises(FrozenInstanceError):
        document.spine.items[0].linear = False  # type: ignore[misc]


def test_error_string_includes_element_and_path() -> None:
    error = ManifestError("Manifest item has no href", path=Path("content.opf"), element="item[2] id=x")

    assert isinstance(error, EPUBParseError)
    assert str(error) == "Manifest item has no href (element=item[2] id=x, path=content.opf)"
    assert str(EPUBParseError("plain")) == "plain"


def test_errors_survive_pickling() -> None:
    error = ManifestError("Manifest item has no href", path=Path("content.opf"), element="item[2]")

    restored = pickle.loads(pickle.dumps(error))

    assert type(restored) is ManifestError
    assert (restored.message, restored.path, restored.element) == (error.message, error.path, error.element)
    assert str(restored) == str(error)
