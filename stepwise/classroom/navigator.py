"""
Navigator - Chapter sequencing and the category tree for the dashboard.

Provides:
- Next/previous chapter navigation
- Chapter position within the course
- Recommended chapter based on progress
- Category tree with completion counts and status indicators
"""

from dataclasses import dataclass
from typing import Optional

from stepwise.schemas import Chapter, ChapterCategory, ChapterProgress, LearningState
from stepwise.viewer.labels import get_state_icon

from .catalog import ChapterCatalog
from .progress import ProgressTracker


CURRENT_INDICATOR = "→"


@dataclass
class NavigationChapter:
    """Chapter with navigation metadata."""
    chapter: Chapter
    progress: ChapterProgress
    is_current: bool


@dataclass
class NavigationCategory:
    """Category with chapters and completion counts."""
    category: ChapterCategory
    chapters: list[NavigationChapter]
    completed_count: int
    total_count: int


class Navigator:
    """
    Navigate through the chapters in catalog order.

    Combines ChapterCatalog (content) with ProgressTracker (learner state).
    The order is read from the catalog on every call so a reload is picked
    up immediately.
    """

    def __init__(self, catalog: ChapterCatalog, progress: ProgressTracker):
        """
        Initialize navigator.

        Args:
            catalog: ChapterCatalog instance for content access
            progress: ProgressTracker instance for learner progress
        """
        self.catalog = catalog
        self.progress = progress

    def _chapter_order(self) -> list[int]:
        return [chapter.id for chapter in self.catalog.get_all_chapters()]

    @property
    def total_chapters(self) -> int:
        """Total number of chapters."""
        return len(self.catalog.get_all_chapters())

    # -------------------------------------------------------------------------
    # Navigation
    # -------------------------------------------------------------------------

    def get_first_chapter_id(self) -> Optional[int]:
        """Get the ID of the first chapter."""
        order = self._chapter_order()
        return order[0] if order else None

    def get_next_chapter_id(self, current_id: int) -> Optional[int]:
        """Get the ID of the next chapter in order."""
        order = self._chapter_order()
        if current_id not in order:
            return None
        index = order.index(current_id)
        if index + 1 >= len(order):
            return None
        return order[index + 1]

    def get_previous_chapter_id(self, current_id: int) -> Optional[int]:
        """Get the ID of the previous chapter in order."""
        order = self._chapter_order()
        if current_id not in order:
            return None
        index = order.index(current_id)
        if index <= 0:
            return None
        return order[index - 1]

    def get_chapter_position(self, chapter_id: int) -> tuple[int, int]:
        """
        Get chapter position as (current, total).

        Returns (0, total) if chapter not found.
        """
        order = self._chapter_order()
        if chapter_id not in order:
            return (0, len(order))
        return (order.index(chapter_id) + 1, len(order))

    def get_recommended_chapter_id(self) -> Optional[int]:
        """
        Get the recommended chapter for the learner.

        Priority:
        1. First chapter in progress
        2. First chapter not started
        3. First chapter
        """
        all_progress = self.progress.get_all_progress()
        for state in (LearningState.IN_PROGRESS, LearningState.NOT_STARTED):
            for progress in all_progress:
                if progress.state == state:
                    return progress.chapter_id
        return self.get_first_chapter_id()

    # -------------------------------------------------------------------------
    # Category Tree
    # -------------------------------------------------------------------------

    def get_navigation_tree(self, current_id: Optional[int] = None) -> list[NavigationCategory]:
        """
        Get chapters grouped by category with progress attached.

        Args:
            current_id: Chapter currently open in the UI, if any
        """
        tree = []
        for category, chapters in self.catalog.get_chapters_by_category().items():
            nav_chapters = [
                NavigationChapter(
                    chapter=chapter,
                    progress=self.progress.get_progress(chapter.id),
                    is_current=chapter.id == current_id,
                )
                for chapter in chapters
            ]
            tree.append(NavigationCategory(
                category=category,
                chapters=nav_chapters,
                completed_count=sum(
                    1 for c in nav_chapters if c.progress.state == LearningState.COMPLETED
                ),
                total_count=len(nav_chapters),
            ))
        return tree

    def get_status_indicator(self, chapter_id: int, current_id: Optional[int] = None) -> str:
        """
        Get status indicator for sidebar display.

        Returns:
            → for the open chapter while in progress
            otherwise the learning-state icon
        """
        state = self.progress.get_progress(chapter_id).state
        if chapter_id == current_id and state == LearningState.IN_PROGRESS:
            return CURRENT_INDICATOR
        return get_state_icon(state)

    # -------------------------------------------------------------------------
    # Chapter Actions
    # -------------------------------------------------------------------------

    def complete_chapter(self, chapter_id: int) -> Optional[int]:
        """
        Complete a chapter and return the next chapter ID.

        Returns:
            ID of the next chapter, or None at the end of the course
        """
        self.progress.complete_chapter(chapter_id)
        return self.get_next_chapter_id(chapter_id)

    # -------------------------------------------------------------------------
    # Progress Summary
    # -------------------------------------------------------------------------

    def get_progress_summary(self) -> dict:
        """Get progress summary for display."""
        stats = self.progress.get_completion_stats()
        categories = [
            {
                "category": nav_category.category.value,
                "completed": nav_category.completed_count,
                "total": nav_category.total_count,
            }
            for nav_category in self.get_navigation_tree()
        ]
        return {
            **stats,
            "categories": categories,
            "recommended_chapter_id": self.get_recommended_chapter_id(),
        }
