"""Sources backed by existing bytes: files and text literals."""

from __future__ import annotations

import os
from pathlib import Path

from loguru import logger

from entropy_density.sources.base import InputSource

PANGRAM = "The quick brown fox jumps over the lazy dog"


class FileSource(InputSource):
    """Raw bytes of a file on disk.  No format is parsed."""

    description = "Raw file contents"

    def __init__(self, path: str | os.PathLike) -> None:
        self.path = Path(path)
        self.name = self.path.name

    def is_available(self) -> bool:
        return self.path.is_file()

    def collect(self, n_bytes: int | None = None) -> bytes:
        with open(self.path, "rb") as f:
            data = f.read() if n_bytes is None else f.read(n_bytes)
        logger.debug("loaded {} bytes from {}", len(data), self.path)
        return data


class TextSource(InputSource):
    """UTF-8 encoding of a string; a short, highly redundant input."""

    description = "UTF-8 text literal"

    def __init__(self, text: str = PANGRAM, name: str = "text") -> None:
        self.text = text
        self.name = name

    def collect(self, n_bytes: int | None = None) -> bytes:
        data = self.text.encode("utf-8")
        return data if n_bytes is None else data[:n_bytes]
