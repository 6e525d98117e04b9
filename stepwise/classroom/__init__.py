"""
Stepwise Classroom - Runtime components for loading and navigating chapters.

This module provides:
- Content sources: where chapter documents are read from
- ChapterCatalog: parsed, cached chapter list
- ProgressTracker: per-chapter learning progress
- Navigator: chapter sequencing and the category tree
"""

from .sources import (
    ChapterDocument,
    ContentSource,
    DirectorySource,
    PackageSource,
)

from .catalog import (
    ChapterCatalog,
    ChapterLoadFailure,
)

from .progress import (
    ProgressTracker,
    STEP_PROGRESS_CAP,
)

from .navigator import (
    Navigator,
    NavigationChapter,
    NavigationCategory,
)

__all__ = [
    # Sources
    "ChapterDocument",
    "ContentSource",
    "DirectorySource",
    "PackageSource",
    # Catalog
    "ChapterCatalog",
    "ChapterLoadFailure",
    # Progress
    "ProgressTracker",
    "STEP_PROGRESS_CAP",
    # Navigator
    "Navigator",
    "NavigationChapter",
    "NavigationCategory",
]
