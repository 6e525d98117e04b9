"""
Content sources - where chapter documents come from.

A source enumerates documents in a deterministic order (lexicographic by
identifier). Reading is deferred to ChapterDocument.read_text() so the
catalog can skip a single unreadable document without losing the rest.
"""

import logging
from dataclasses import dataclass
from importlib import resources
from importlib.resources.abc import Traversable
from pathlib import Path
from typing import Iterator, Protocol


logger = logging.getLogger(__name__)

DEFAULT_PATTERN = "*.md"
BUNDLED_PACKAGE = "stepwise"
BUNDLED_DIR = "content/chapters"


@dataclass(frozen=True)
class ChapterDocument:
    """One raw chapter document and its stable identifier."""
    identifier: str
    location: Path | Traversable

    def read_text(self) -> str:
        return self.location.read_text(encoding="utf-8-sig")


class ContentSource(Protocol):
    """Anything that can enumerate chapter documents."""

    def iter_documents(self) -> Iterator[ChapterDocument]:
        ...


class DirectorySource:
    """
    Chapter documents stored as files in a directory.

    A missing directory is treated as an empty source.
    """

    def __init__(self, directory: str | Path, pattern: str = DEFAULT_PATTERN):
        self.directory = Path(directory)
        self.pattern = pattern

    def iter_documents(self) -> Iterator[ChapterDocument]:
        if not self.directory.is_dir():
            logger.warning(f"Chapter directory not found: {self.directory}")
            return
        paths = sorted(p for p in self.directory.glob(self.pattern) if p.is_file())
        for path in paths:
            yield ChapterDocument(identifier=path.name, location=path)

    def __repr__(self) -> str:
        return f"DirectorySource({str(self.directory)!r}, pattern={self.pattern!r})"


class PackageSource:
    """Chapter documents bundled inside the installed package."""

    def __init__(
        self,
        package: str = BUNDLED_PACKAGE,
        subdir: str = BUNDLED_DIR,
        suffix: str = ".md",
    ):
        self.package = package
        self.subdir = subdir
        self.suffix = suffix

    def iter_documents(self) -> Iterator[ChapterDocument]:
        root = resources.files(self.package)
        for part in self.subdir.split("/"):
            root = root.joinpath(part)
        if not root.is_dir():
            logger.warning(f"Bundled chapter directory not found: {self.package}/{self.subdir}")
            return
        entries = sorted(
            (entry for entry in root.iterdir() if entry.is_file() and entry.name.endswith(self.suffix)),
            key=lambda entry: entry.name,
        )
        for entry in entries:
            yield ChapterDocument(identifier=entry.name, location=entry)

    def __repr__(self) -> str:
        return f"PackageSource({self.package!r}, {self.subdir!r})"
