"""
Chapter parser for Stepwise markdown chapters.

Turns one chapter document into a Chapter:

    ---
    id: 5
    number: 5
    title: "Components at a Glance"
    category: Components
    topics:
      - "Razor component structure"
    ---
    ## Step 1: Intro
    **Type: Action**
    Do this.
    ---
    ## Quiz
    ### Question 1
    What is a component?
    - "A class"
    - "A page"
    **Correct: 0**
    **Explanation: Components are classes.**

Decoding is tolerant: unknown keys are ignored and non-numeric numbers keep
their default of 0. The only hard failure is a missing front-matter block.
"""

import re
from typing import Any

from stepwise.schemas import (
    Chapter,
    ChapterCategory,
    ChapterStep,
    Quiz,
    QuizQuestion,
    StepType,
)

from .markdown_sections import Section, split_front_matter, split_sections


STEP_TITLE_PATTERN = re.compile(r"^\s*Step\s+\d+\s*:\s*(.*)$", re.IGNORECASE)
STEP_TYPE_PATTERN = re.compile(r"\*\*Type:\s*(\w+)\*\*", re.IGNORECASE)

CORRECT_MARKER = "**Correct:"
EXPLANATION_MARKER = "**Explanation:"

SCALAR_KEYS = {"id", "number", "title", "description", "route", "category"}
LIST_KEYS = {"topics": "topics", "keypoints": "key_points"}

_CATEGORY_LOOKUP = {member.value.lower(): member for member in ChapterCategory}


class ChapterParseError(ValueError):
    """Raised when a document cannot be turned into a chapter."""
    pass


def _strip_value(value: str) -> str:
    """Trim whitespace and surrounding double quotes."""
    return value.strip().strip('"').strip()


def _parse_int(value: str, default: int = 0) -> int:
    try:
        return int(value.strip())
    except ValueError:
        return default


# -----------------------------------------------------------------------------
# Metadata
# -----------------------------------------------------------------------------

def parse_category(value: str) -> ChapterCategory:
    """Case-insensitive category lookup; unknown names map to Introduction."""
    return _CATEGORY_LOOKUP.get(value.strip().lower(), ChapterCategory.INTRODUCTION)


def parse_metadata(metadata: str) -> dict[str, Any]:
    """
    Decode front-matter text into Chapter field values.

    `key: value` lines set scalar fields. `key:` with no value opens list
    mode for that key; following `- item` lines are appended to it until the
    next key line.

    Args:
        metadata: Text between the front-matter fences

    Returns:
        Dict of Chapter keyword arguments (only keys that were present)
    """
    fields: dict[str, Any] = {}
    list_key = None

    for line in metadata.split("\n"):
        stripped = line.strip()

        if stripped.startswith("- ") and list_key is not None:
            field_name = LIST_KEYS.get(list_key)
            if field_name:
                fields.setdefault(field_name, []).append(_strip_value(stripped[2:]))
            continue

        colon = stripped.find(":")
        if colon <= 0:
            continue

        key = stripped[:colon].strip().lower()
        value = _strip_value(stripped[colon + 1:])

        if not value:
            list_key = key
            continue

        list_key = None
        if key not in SCALAR_KEYS:
            continue
        if key in ("id", "number"):
            fields[key] = _parse_int(value, fields.get(key, 0))
        elif key == "category":
            fields[key] = parse_category(value)
        else:
            fields[key] = value

    for field_name in LIST_KEYS.values():
        if field_name in fields:
            fields[field_name] = tuple(fields[field_name])
    return fields


# -----------------------------------------------------------------------------
# Steps
# -----------------------------------------------------------------------------

def _strip_trailing_separators(content: str) -> str:
    lines = content.rstrip().split("\n")
    while lines and lines[-1].strip() == "---":
        lines.pop()
        while lines and not lines[-1].strip():
            lines.pop()
    return "\n".join(lines).strip()


def parse_step(section: Section) -> ChapterStep:
    """
    Decode a `## Step N: Title` section.

    The `Step N:` prefix is removed from the title. A heading with nothing
    after the prefix (`## Step 1:`) or without the prefix keeps the heading
    text unchanged as the title, so a step never has an empty title.

    The `**Type: Action**` marker line selects the step type and is dropped
    from the content together with everything above it.
    """
    title_match = STEP_TITLE_PATTERN.match(section.title)
    if title_match and title_match.group(1).strip():
        title = title_match.group(1).strip()
    else:
        title = section.title

    step_type = StepType.READ
    lines = section.content.split("\n")
    body_lines = lines

    for index, line in enumerate(lines):
        type_match = STEP_TYPE_PATTERN.search(line)
        if type_match:
            if type_match.group(1).lower() == "action":
                step_type = StepType.ACTION
            body_lines = lines[index + 1:]
            break

    content = _strip_trailing_separators("\n".join(body_lines))
    return ChapterStep(title=title, content=content, type=step_type)


# -----------------------------------------------------------------------------
# Quiz
# -----------------------------------------------------------------------------

def _marker_value(line: str, marker: str) -> str:
    return line[len(marker):].replace("**", "").strip()


def parse_question(content: str) -> QuizQuestion:
    """
    Decode the body of a `### Question N` section.

    Non-empty lines before the first bullet form the question text (joined
    with spaces); each bullet is an option; `**Correct: N**` and
    `**Explanation: ...**` lines fill the remaining fields.
    """
    text_lines: list[str] = []
    options: list[str] = []
    correct_index = 0
    explanation = ""
    seen_option = False

    for line in content.split("\n"):
        stripped = line.strip()
        if stripped.startswith("- "):
            options.append(_strip_value(stripped[2:]))
            seen_option = True
        elif stripped.startswith(CORRECT_MARKER):
            correct_index = _parse_int(_marker_value(stripped, CORRECT_MARKER), correct_index)
        elif stripped.startswith(EXPLANATION_MARKER):
            explanation = _marker_value(stripped, EXPLANATION_MARKER)
        elif stripped and not seen_option:
            text_lines.append(stripped)

    return QuizQuestion(
        text=" ".join(text_lines),
        options=tuple(options),
        correct_option_index=correct_index,
        explanation=explanation,
    )


def parse_quiz(content: str) -> Quiz:
    """Decode the body of a `## Quiz` section into its questions."""
    questions = tuple(
        parse_question(section.content)
        for section in split_sections(content, level=3)
        if section.title.lower().startswith("question")
    )
    return Quiz(questions=questions)


# -----------------------------------------------------------------------------
# Chapter
# -----------------------------------------------------------------------------

def parse_chapter(text: str) -> Chapter:
    """
    Parse a complete chapter document.

    Args:
        text: Raw markdown including the front-matter block

    Returns:
        Fully populated Chapter

    Raises:
        ChapterParseError: If the document has no complete front-matter block
    """
    split = split_front_matter(text)
    if not split.has_front_matter:
        if split.metadata:
            raise ChapterParseError("Front matter is not terminated by '---'")
        raise ChapterParseError("Document has no front matter block")

    fields = parse_metadata(split.metadata)
    steps: list[ChapterStep] = []
    quiz = None

    for section in split_sections(split.body, level=2):
        if section.title.lower().startswith("step"):
            steps.append(parse_step(section))
        elif section.title.lower() == "quiz":
            # A later quiz section replaces an earlier one
            quiz = parse_quiz(section.content)

    return Chapter(**fields, steps=tuple(steps), quiz=quiz)
