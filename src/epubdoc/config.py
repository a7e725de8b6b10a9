"""Runtime configuration for the EPUB parser and its command line."""

from __future__ import annotations

from dataclasses import dataclass
import logging
import os
from pathlib import Path
from typing import Mapping


DEFAULT_LOG_LEVEL = "INFO"


def _parse_log_level(*, name: str, raw_value: str) -> str:
    level = raw_value.upper()
    if not isinstance(logging.getLevelName(level), int):
        raise ValueError(f"{name} must be a logging level name, got {raw_value!r}")
    return level


@dataclass(frozen=True, slots=True)
class ParserSettings:
    """Validated parser settings loaded from the environment."""

    extract_root: Path | None = None
    log_level: str = DEFAULT_LOG_LEVEL

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "ParserSettings":
        source: Mapping[str, str] = os.environ if environ is None else environ

        extract_root: Path | None = None
        if "EPUBDOC_EXTRACT_DIR" in source:
            extract_root_raw = source["EPUBDOC_EXTRACT_DIR"].strip()
            if not extract_root_raw:
                raise ValueError("EPUBDOC_EXTRACT_DIR cannot be empty")
            extract_root = Path(extract_root_raw)

        log_level_raw = source.get("EPUBDOC_LOG_LEVEL", DEFAULT_LOG_LEVEL).strip()
        if not log_level_raw:
            raise ValueError("EPUBDOC_LOG_LEVEL cannot be empty")
        log_level = _parse_log_level(name="EPUBDOC_LOG_LEVEL", raw_value=log_level_raw)

        return cls(extract_root=extract_root, log_level=log_level)
