"""Locate the package document through META-INF/container.xml."""

from __future__ import annotations

from pathlib import Path

from epubdoc.errors import ContainerError, PackageParseError
from epubdoc.xmltree import XmlTreeParser, parse_xml

CONTAINER_PATH = Path("META-INF") / "container.xml"


def locate_package_document(directory: Path, parse: XmlTreeParser = parse_xml) -> Path:
    """Return the absolute path of the package document inside ``directory``."""

    container_path = directory / CONTAINER_PATH
    try:
        data = container_path.read_bytes()
    except OSError as exc:
        raise ContainerError(f"Failed to read container file: {exc}", path=container_path) from exc

    try:
        container = parse(data)
    except PackageParseError as exc:
        raise ContainerError(f"Container file is not valid XML: {exc.message}", path=container_path) from exc

    rootfile = container.first("rootfiles", "rootfile")
    if rootfile is None:
        raise ContainerError("Container file declares no rootfile", path=container_path, element="rootfiles/rootfile")

    full_path = rootfile.attribute("full-path")
    if not full_path:
        raise ContainerError("Rootfile has no full-path attribute", path=container_path, element="rootfile")

    package_path = directory / full_path
    root = directory.resolve()
    if root not in package_path.resolve().parents:
        raise ContainerError("Rootfile full-path escapes the archive directory", path=container_path, element=full_path)
    if not package_path.is_file():
        raise ContainerError("Package document does not exist", path=package_path)
    return package_path
