"""
Navigator tests for Stepwise.

Tests chapter sequencing, recommendations and the category tree.
"""

import pytest

from stepwise.classroom import Navigator
from stepwise.classroom.navigator import CURRENT_INDICATOR
from stepwise.schemas import ChapterCategory


@pytest.fixture
def navigator(course):
    catalog, tracker = course
    return Navigator(catalog, tracker)


class TestSequencing:
    """Test next/previous navigation."""

    def test_first_and_total(self, navigator):
        assert navigator.get_first_chapter_id() == 7
        assert navigator.total_chapters == 4

    def test_next_and_previous(self, navigator):
        assert navigator.get_next_chapter_id(7) == 8
        assert navigator.get_next_chapter_id(10) is None
        assert navigator.get_previous_chapter_id(8) == 7
        assert navigator.get_previous_chapter_id(7) is None

    def test_unknown_chapter(self, navigator):
        assert navigator.get_next_chapter_id(99) is None
        assert navigator.get_previous_chapter_id(99) is None
        assert navigator.get_chapter_position(99) == (0, 4)

    def test_position(self, navigator):
        assert navigator.get_chapter_position(9) == (3, 4)


class TestRecommendation:
    """Test recommended chapter selection."""

    def test_fresh_course_starts_at_first(self, navigator):
        assert navigator.get_recommended_chapter_id() == 7

    def test_in_progress_wins(self, navigator):
        navigator.progress.complete_chapter(7)
        navigator.progress.start_chapter(9)
        assert navigator.get_recommended_chapter_id() == 9

    def test_first_not_started(self, navigator):
        navigator.progress.complete_chapter(7)
        navigator.progress.complete_chapter(8)
        assert navigator.get_recommended_chapter_id() == 9

    def test_all_completed_falls_back_to_first(self, navigator):
        for chapter_id in (7, 8, 9, 10):
            navigator.progress.complete_chapter(chapter_id)
        assert navigator.get_recommended_chapter_id() == 7


class TestTree:
    """Test the category tree."""

    def test_groups_and_counts(self, navigator):
        navigator.progress.complete_chapter(8)
        tree = navigator.get_navigation_tree(current_id=9)

        assert [c.category for c in tree] == [
            ChapterCategory.INTRODUCTION,
            ChapterCategory.SETUP,
            ChapterCategory.WRAP_UP,
        ]
        setup = tree[1]
        assert [c.chapter.id for c in setup.chapters] == [8, 9]
        assert (setup.completed_count, setup.total_count) == (1, 2)
        assert [c.is_current for c in setup.chapters] == [False, True]

    def test_status_indicator(self, navigator):
        navigator.progress.start_chapter(7)
        navigator.progress.complete_chapter(8)
        assert navigator.get_status_indicator(7, current_id=7) == CURRENT_INDICATOR
        assert navigator.get_status_indicator(7) == "◐"
        assert navigator.get_status_indicator(8, current_id=8) == "✓"
        assert navigator.get_status_indicator(9) == "○"

    def test_complete_chapter_returns_next(self, navigator):
        assert navigator.complete_chapter(9) == 10
        assert navigator.complete_chapter(10) is None
        assert navigator.progress.get_completed_count() == 2

    def test_progress_summary(self, navigator):
        navigator.progress.complete_chapter(7)
        summary = navigator.get_progress_summary()
        assert summary["completed"] == 1
        assert summary["recommended_chapter_id"] == 8
        assert summary["categories"][0] == {"category": "Introduction", "completed": 1, "total": 1}
