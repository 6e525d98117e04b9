"""Stepwise utilities."""

from .markdown_sections import (
    FrontMatterSplit,
    Section,
    split_front_matter,
    split_sections,
)
from .chapter_parser import (
    ChapterParseError,
    parse_category,
    parse_metadata,
    parse_step,
    parse_question,
    parse_quiz,
    parse_chapter,
)

__all__ = [
    "FrontMatterSplit",
    "Section",
    "split_front_matter",
    "split_sections",
    "ChapterParseError",
    "parse_category",
    "parse_metadata",
    "parse_step",
    "parse_question",
    "parse_quiz",
    "parse_chapter",
]
