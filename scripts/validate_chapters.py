#!/usr/bin/env python3
"""
validate_chapters.py - Parse chapter files and report what the catalog would load.

Builds a catalog from a directory of markdown chapters, prints one line per
parsed chapter and lists the documents that failed. Exits with status 1 if
any document was skipped.

Usage:
  python scripts/validate_chapters.py
  python scripts/validate_chapters.py --content-dir stepwise/content/chapters --verbose
"""

import argparse
import logging
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from stepwise.classroom import ChapterCatalog, DirectorySource
from stepwise.config import configure_logging, load_settings
from stepwise.viewer import get_category_display_name, has_valid_answer

logger = logging.getLogger(__name__)


DEFAULT_CONTENT_DIR = PROJECT_ROOT / "stepwise" / "content" / "chapters"


def check_quizzes(catalog: ChapterCatalog) -> list[str]:
    """Find quiz questions whose correct option index is out of range."""
    issues = []
    for chapter in catalog.get_all_chapters():
        if chapter.quiz is None:
            continue
        for index, question in enumerate(chapter.quiz.questions):
            if not has_valid_answer(question):
                issues.append(
                    f"Chapter {chapter.number} question {index + 1}: "
                    f"correct index {question.correct_option_index} "
                    f"with {len(question.options)} options"
                )
    return issues


def main():
    parser = argparse.ArgumentParser(
        description="Validate chapter markdown files"
    )
    parser.add_argument(
        "--content-dir",
        type=Path,
        default=None,
        help="Directory with chapter files (default: settings, then bundled chapters)"
    )
    parser.add_argument(
        "--pattern",
        default=None,
        help="Glob for chapter files (default: *.md)"
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Show steps and quiz sizes per chapter"
    )

    args = parser.parse_args()

    settings = load_settings()
    configure_logging(settings)

    content_dir = args.content_dir or settings.content_dir or DEFAULT_CONTENT_DIR
    pattern = args.pattern or settings.content_pattern

    logger.info(f"Loading chapters from {content_dir} ({pattern})...")
    catalog = ChapterCatalog(DirectorySource(content_dir, pattern=pattern))
    chapters = catalog.get_all_chapters()

    for chapter in chapters:
        line = (
            f"  {chapter.number:>3}. [{get_category_display_name(chapter.category)}] "
            f"{chapter.title} (id={chapter.id})"
        )
        if args.verbose:
            questions = chapter.quiz.question_count if chapter.quiz else 0
            line += f" - {chapter.step_count} steps, {questions} quiz questions"
        logger.info(line)

    quiz_issues = check_quizzes(catalog)
    for issue in quiz_issues:
        logger.warning(f"  - {issue}")

    failures = catalog.last_failures
    logger.info("=" * 50)
    logger.info(f"Chapters: {len(chapters)}")
    if failures:
        logger.warning(f"Skipped documents: {len(failures)}")
        for failure in failures:
            logger.warning(f"  - {failure.identifier}: {failure.error}")
        sys.exit(1)
    logger.info("All chapter files parsed!")


if __name__ == "__main__":
    main()
