"""
Line scanner for the chapter authoring format.

Splits a chapter document into its front-matter block and body, and splits
a body into sections by heading level. Only the narrow subset used by the
chapter files is understood: `---` fences and `##` / `###` headings.
"""

from typing import NamedTuple


FRONT_MATTER_FENCE = "---"


class FrontMatterSplit(NamedTuple):
    """Result of splitting a document at its front-matter fences."""
    metadata: str
    body: str
    has_front_matter: bool   # False when no complete ---/--- block was found


class Section(NamedTuple):
    """A heading title and the text up to the next heading of the same level."""
    title: str
    content: str


def normalize_newlines(text: str) -> str:
    """Convert CRLF / CR line endings to LF."""
    return text.replace("\r\n", "\n").replace("\r", "\n")


def split_front_matter(text: str) -> FrontMatterSplit:
    """
    Split a document into front-matter text and body text.

    The first line equal to `---` (ignoring surrounding whitespace) opens the
    block and the next such line closes it. Lines before the opening fence
    are dropped. Line breaks inside both parts are preserved.

    Edge cases:
    - no opening fence: empty metadata, the whole text is the body
    - opening fence without a closing one: everything after the opener is
      metadata, the body is empty

    Args:
        text: Raw document text

    Returns:
        FrontMatterSplit(metadata, body, has_front_matter)
    """
    lines = normalize_newlines(text).split("\n")

    opener = None
    for index, line in enumerate(lines):
        if line.strip() == FRONT_MATTER_FENCE:
            opener = index
            break

    if opener is None:
        return FrontMatterSplit("", "\n".join(lines), False)

    for index in range(opener + 1, len(lines)):
        if lines[index].strip() == FRONT_MATTER_FENCE:
            metadata = "\n".join(lines[opener + 1:index])
            body = "\n".join(lines[index + 1:])
            return FrontMatterSplit(metadata, body, True)

    return FrontMatterSplit("\n".join(lines[opener + 1:]), "", False)


def heading_title(line: str, level: int) -> str | None:
    """
    Return the title of a heading line at exactly `level`, else None.

    `## Quiz` is a level-2 heading; `### Question 1` is not.
    """
    marker = "#" * level + " "
    if not line.startswith(marker):
        return None
    title = line[len(marker):].strip()
    return title or None


def split_sections(body: str, level: int) -> list[Section]:
    """
    Split body text into ordered sections at the given heading level.

    Text before the first heading is ignored. Section content runs from the
    line after its heading to the line before the next heading of the same
    level (or the end of the text) and is whitespace-trimmed.

    Args:
        body: Body text (front matter already removed)
        level: Heading level, 2 for `##` and 3 for `###`

    Returns:
        List of Section(title, content) in document order
    """
    if level < 1:
        raise ValueError(f"Heading level must be >= 1, got {level}")

    sections: list[Section] = []
    title = None
    content_lines: list[str] = []

    for line in normalize_newlines(body).split("\n"):
        next_title = heading_title(line, level)
        if next_title is not None:
            if title is not None:
                sections.append(Section(title, "\n".join(content_lines).strip()))
            title = next_title
            content_lines = []
        elif title is not None:
            content_lines.append(line)

    if title is not None:
        sections.append(Section(title, "\n".join(content_lines).strip()))

    return sections
