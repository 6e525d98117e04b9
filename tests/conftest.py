"""Shared fixtures: chapter documents written to a temporary directory."""

import pytest

from stepwise.classroom import ChapterCatalog, DirectorySource, ProgressTracker


def chapter_doc(chapter_id, number=None, title="Chapter", category="Introduction", steps=0, quiz=False):
    """Build a well-formed chapter document."""
    number = chapter_id if number is None else number
    lines = [
        "---",
        f"id: {chapter_id}",
        f"number: {number}",
        f'title: "{title}"',
        f"category: {category}",
        "---",
    ]
    for index in range(steps):
        lines += [
            f"## Step {index + 1}: Part {index + 1}",
            "**Type: Read**",
            f"Body of part {index + 1}.",
            "---",
        ]
    if quiz:
        lines += [
            "## Quiz",
            "### Question 1",
            "Pick one.",
            "- A",
            "- B",
            "**Correct: 1**",
            "**Explanation: B is right.**",
        ]
    return "\n".join(lines) + "\n"


@pytest.fixture
def make_doc():
    return chapter_doc


@pytest.fixture
def chapter_dir(tmp_path):
    """Factory writing {filename: text} into a fresh directory."""
    root = tmp_path / "chapters"
    root.mkdir()

    def write(documents: dict[str, str]):
        for name, text in documents.items():
            (root / name).write_text(text, encoding="utf-8")
        return root

    return write


@pytest.fixture
def course(chapter_dir):
    """Catalog + tracker over four chapters (ids 7, 8, 9, 10)."""
    root = chapter_dir({
        "a.md": chapter_doc(7, number=1, title="Seven", steps=4, quiz=True),
        "b.md": chapter_doc(8, number=2, title="Eight", category="Setup", steps=2),
        "c.md": chapter_doc(9, number=3, title="Nine", category="Setup"),
        "d.md": chapter_doc(10, number=4, title="Ten", category="WrapUp", steps=3),
    })
    catalog = ChapterCatalog(DirectorySource(root))
    return catalog, ProgressTracker(catalog)
