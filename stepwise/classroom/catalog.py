"""
ChapterCatalog - Parsed, ordered, cached list of chapters.

Builds the chapter list once from a ContentSource and publishes it as an
immutable tuple. Readers never take a lock once the snapshot exists;
reload_chapters() only drops the snapshot, the next read rebuilds it.
"""

import logging
import threading
from dataclasses import dataclass
from typing import Callable, Optional

from stepwise.schemas import Chapter, ChapterCategory
from stepwise.utils.chapter_parser import parse_chapter

from .sources import ContentSource


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ChapterLoadFailure:
    """A document that was left out of the catalog."""
    identifier: str
    error: str


class ChapterCatalog:
    """
    Cached catalog of chapters parsed from a content source.

    Thread-safe: concurrent cold reads trigger a single build, and a reload
    during a build prevents the stale result from being published.
    """

    def __init__(
        self,
        source: ContentSource,
        parser: Callable[[str], Chapter] = parse_chapter,
    ):
        """
        Initialize catalog.

        Args:
            source: Where chapter documents are read from
            parser: Document-to-Chapter function (default: markdown parser)
        """
        self.source = source
        self.parser = parser
        self._snapshot: Optional[tuple[Chapter, ...]] = None
        self._failures: tuple[ChapterLoadFailure, ...] = ()
        self._generation = 0
        self._build_lock = threading.Lock()
        self._state_lock = threading.Lock()

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def get_all_chapters(self) -> tuple[Chapter, ...]:
        """Get all chapters ordered by number, building the cache if needed."""
        snapshot = self._snapshot
        if snapshot is not None:
            return snapshot

        with self._build_lock:
            snapshot = self._snapshot
            if snapshot is not None:
                return snapshot

            with self._state_lock:
                generation = self._generation
            chapters, failures = self._build()

            with self._state_lock:
                if generation == self._generation:
                    self._snapshot = chapters
                    self._failures = failures
            return chapters

    def get_chapters_by_category(self) -> dict[ChapterCategory, list[Chapter]]:
        """Group chapters by category, keeping chapter order within each group."""
        groups: dict[ChapterCategory, list[Chapter]] = {}
        for chapter in self.get_all_chapters():
            groups.setdefault(chapter.category, []).append(chapter)
        return groups

    def get_chapter(self, chapter_id: int) -> Optional[Chapter]:
        """Get a single chapter by id."""
        for chapter in self.get_all_chapters():
            if chapter.id == chapter_id:
                return chapter
        return None

    @property
    def last_failures(self) -> tuple[ChapterLoadFailure, ...]:
        """Documents skipped by the most recently published build."""
        return self._failures

    def reload_chapters(self):
        """Discard the cached chapters; the next read re-parses the source."""
        with self._state_lock:
            self._generation += 1
            self._snapshot = None
        logger.info("Chapter catalog invalidated")

    # -------------------------------------------------------------------------
    # Build
    # -------------------------------------------------------------------------

    def _build(self) -> tuple[tuple[Chapter, ...], tuple[ChapterLoadFailure, ...]]:
        chapters: list[Chapter] = []
        failures: list[ChapterLoadFailure] = []
        seen_ids: dict[int, str] = {}
        seen_numbers: dict[int, str] = {}

        try:
            documents = list(self.source.iter_documents())
        except Exception as e:
            # Bad patterns and unknown packages fail here, not in the parser
            logger.exception(f"Could not enumerate chapters from {self.source!r}: {e}")
            documents = []

        for document in documents:
            try:
                chapter = self.parser(document.read_text())
            except (ValueError, OSError, UnicodeDecodeError) as e:
                logger.warning(f"Failed to parse chapter {document.identifier}: {e}")
                failures.append(ChapterLoadFailure(document.identifier, str(e)))
                continue

            if chapter.id in seen_ids:
                message = f"Duplicate chapter id {chapter.id} (already loaded from {seen_ids[chapter.id]})"
                logger.warning(f"Skipping chapter {document.identifier}: {message}")
                failures.append(ChapterLoadFailure(document.identifier, message))
                continue
            if chapter.number in seen_numbers:
                logger.warning(
                    f"Chapter {document.identifier} repeats number {chapter.number} "
                    f"(also used by {seen_numbers[chapter.number]})"
                )

            seen_ids[chapter.id] = document.identifier
            seen_numbers.setdefault(chapter.number, document.identifier)
            chapters.append(chapter)

        chapters.sort(key=lambda chapter: chapter.number)
        logger.info(f"Loaded {len(chapters)} chapters ({len(failures)} skipped)")
        return tuple(chapters), tuple(failures)
