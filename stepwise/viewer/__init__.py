"""
Stepwise Viewer - Rendering components for the dashboard.

This module provides:
- Category / learning-state labels
- Chapter header, topics and step badges
- Quiz display and scoring
"""

from .labels import (
    get_category_display_name,
    get_state_icon,
    get_state_class,
)

from .chapter import (
    get_chapter_css,
    render_state_badge,
    render_chapter_header,
    render_topic_list,
    render_step_badge,
    format_step_label,
)

from .quiz import (
    get_quiz_css,
    has_valid_answer,
    check_answer,
    render_quiz_question,
    calculate_quiz_score,
    render_quiz_score,
)

__all__ = [
    # Labels
    "get_category_display_name",
    "get_state_icon",
    "get_state_class",
    # Chapter
    "get_chapter_css",
    "render_state_badge",
    "render_chapter_header",
    "render_topic_list",
    "render_step_badge",
    "format_step_label",
    # Quiz
    "get_quiz_css",
    "has_valid_answer",
    "check_answer",
    "render_quiz_question",
    "calculate_quiz_score",
    "render_quiz_score",
]
