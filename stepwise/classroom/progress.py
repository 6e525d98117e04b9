"""
ProgressTracker - Track per-chapter learning progress in memory.

State machine per chapter id:

    NotStarted --start_chapter--> InProgress --update_progress(>=100)--> Completed
    NotStarted / InProgress --complete_chapter--> Completed

update_progress on a NotStarted chapter starts it first.

Progress lives for the lifetime of the process (or until reset). Entries
are immutable ChapterProgress snapshots replaced under a lock, so readers
never see a half-updated entry. Observers are notified after the lock is
released.
"""

import logging
import threading
from datetime import datetime, timezone
from typing import Callable, Optional

from stepwise.schemas import ChapterProgress, LearningState

from .catalog import ChapterCatalog


logger = logging.getLogger(__name__)

# Steps alone can move a chapter up to this percentage; the rest is earned
# by the quiz or by explicitly completing the chapter.
STEP_PROGRESS_CAP = 90

ProgressObserver = Callable[[Optional[int]], None]


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _clamp(value: int, low: int, high: int) -> int:
    return max(low, min(value, high))


class ProgressTracker:
    """
    Track learner progress for the chapters of a catalog.

    Thread-safe: get-or-create, per-entry updates and clearing all happen
    under one lock. The catalog is only consulted for step counts and for
    the overall statistics; it is never modified.
    """

    def __init__(self, catalog: ChapterCatalog):
        """
        Initialize progress tracker.

        Args:
            catalog: ChapterCatalog used for step counts and chapter totals
        """
        self.catalog = catalog
        self._entries: dict[int, ChapterProgress] = {}
        self._lock = threading.Lock()
        self._observers: list[ProgressObserver] = []
        self._observers_lock = threading.Lock()

    # -------------------------------------------------------------------------
    # Observers
    # -------------------------------------------------------------------------

    def subscribe(self, observer: ProgressObserver) -> Callable[[], None]:
        """
        Register a change observer.

        The observer is called with the affected chapter id, or None when all
        progress was reset. Returns a function that unsubscribes it.
        """
        with self._observers_lock:
            self._observers.append(observer)

        def unsubscribe():
            with self._observers_lock:
                if observer in self._observers:
                    self._observers.remove(observer)

        return unsubscribe

    def _notify(self, chapter_id: Optional[int]):
        with self._observers_lock:
            observers = list(self._observers)
        for observer in observers:
            try:
                observer(chapter_id)
            except Exception:
                logger.exception(f"Progress observer {observer!r} failed")

    # -------------------------------------------------------------------------
    # Chapter Progress
    # -------------------------------------------------------------------------

    def _get_or_create(self, chapter_id: int) -> ChapterProgress:
        # Caller must hold self._lock
        progress = self._entries.get(chapter_id)
        if progress is None:
            progress = ChapterProgress(chapter_id=chapter_id)
            self._entries[chapter_id] = progress
        return progress

    def _started(self, progress: ChapterProgress) -> ChapterProgress:
        return progress.model_copy(update={
            "state": LearningState.IN_PROGRESS,
            "started_at": _now(),
            "progress_percentage": 0,
            "current_step_index": 0,
        })

    def get_progress(self, chapter_id: int) -> ChapterProgress:
        """Get progress for a chapter, creating a NotStarted entry if needed."""
        with self._lock:
            return self._get_or_create(chapter_id)

    def start_chapter(self, chapter_id: int):
        """Mark a chapter as in progress. No-op unless it is NotStarted."""
        with self._lock:
            progress = self._get_or_create(chapter_id)
            if progress.state != LearningState.NOT_STARTED:
                return
            self._entries[chapter_id] = self._started(progress)
        self._notify(chapter_id)

    def complete_step(self, chapter_id: int, step_index: int):
        """
        Record that a step was finished.

        Indexes below the current position are ignored. Does not start the
        chapter; call start_chapter() first.
        """
        chapter = self.catalog.get_chapter(chapter_id)
        if chapter is None:
            return
        total_steps = chapter.step_count

        with self._lock:
            progress = self._get_or_create(chapter_id)
            if step_index < progress.current_step_index:
                return
            current = step_index + 1
            update = {"current_step_index": current}
            if total_steps > 0:
                percentage = round(current * (STEP_PROGRESS_CAP / total_steps))
                update["progress_percentage"] = _clamp(percentage, 0, STEP_PROGRESS_CAP)
            self._entries[chapter_id] = progress.model_copy(update=update)
        self._notify(chapter_id)

    def update_progress(self, chapter_id: int, percentage: int):
        """
        Set the percentage directly; 100 or more completes the chapter.

        A NotStarted chapter is started first, and observers hear about the
        start and the update separately.
        """
        with self._lock:
            progress = self._get_or_create(chapter_id)
            started = progress.state == LearningState.NOT_STARTED
            if started:
                progress = self._started(progress)

            update = {"progress_percentage": _clamp(percentage, 0, 100)}
            if percentage >= 100 and progress.state != LearningState.COMPLETED:
                update["state"] = LearningState.COMPLETED
                update["completed_at"] = _now()
            self._entries[chapter_id] = progress.model_copy(update=update)
        if started:
            self._notify(chapter_id)
        self._notify(chapter_id)

    def complete_chapter(self, chapter_id: int):
        """Mark a chapter as completed from any state."""
        with self._lock:
            progress = self._get_or_create(chapter_id)
            now = _now()
            self._entries[chapter_id] = progress.model_copy(update={
                "state": LearningState.COMPLETED,
                "completed_at": now,
                "progress_percentage": 100,
                "started_at": progress.started_at or now,
            })
        self._notify(chapter_id)

    def reset_chapter(self, chapter_id: int):
        """Forget a chapter's progress."""
        with self._lock:
            removed = self._entries.pop(chapter_id, None)
        if removed is not None:
            self._notify(chapter_id)

    def reset_all_progress(self):
        """Forget all progress."""
        with self._lock:
            self._entries.clear()
        self._notify(None)

    # -------------------------------------------------------------------------
    # Statistics
    # -------------------------------------------------------------------------

    def _peek(self, chapter_id: int) -> ChapterProgress:
        with self._lock:
            progress = self._entries.get(chapter_id)
        return progress or ChapterProgress(chapter_id=chapter_id)

    def get_all_progress(self) -> list[ChapterProgress]:
        """Get progress for every catalog chapter, in catalog order."""
        return [self._peek(chapter.id) for chapter in self.catalog.get_all_chapters()]

    def get_completed_count(self) -> int:
        """Count catalog chapters whose progress is Completed."""
        return sum(
            1 for progress in self.get_all_progress()
            if progress.state == LearningState.COMPLETED
        )

    def get_overall_progress_percentage(self) -> int:
        """Share of catalog chapters completed, 0-100."""
        return self.get_completion_stats()["completion_percent"]

    def get_completion_stats(self) -> dict:
        """
        Get completion statistics.

        Returns:
            Dictionary with completion stats
        """
        all_progress = self.get_all_progress()
        total = len(all_progress)
        completed = sum(1 for p in all_progress if p.state == LearningState.COMPLETED)
        in_progress = sum(1 for p in all_progress if p.state == LearningState.IN_PROGRESS)

        return {
            "total_chapters": total,
            "completed": completed,
            "in_progress": in_progress,
            "not_started": total - completed - in_progress,
            "completion_percent": round(100 * completed / total) if total > 0 else 0,
        }
