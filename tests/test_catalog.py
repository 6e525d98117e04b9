"""
Catalog tests for Stepwise.

Tests loading, ordering, caching, reloading and failure isolation.
"""

import logging
import threading
import time

import pytest

from stepwise.classroom import ChapterCatalog, DirectorySource, PackageSource
from stepwise.schemas import ChapterCategory
from stepwise.utils import parse_chapter


class TestSources:
    """Test content sources."""

    def test_directory_source_sorted(self, chapter_dir, make_doc):
        root = chapter_dir({"b.md": make_doc(2), "a.md": make_doc(1), "notes.txt": "x"})
        identifiers = [doc.identifier for doc in DirectorySource(root).iter_documents()]
        assert identifiers == ["a.md", "b.md"]

    def test_directory_source_pattern(self, chapter_dir, make_doc):
        root = chapter_dir({"a.md": make_doc(1), "b.markdown": make_doc(2)})
        identifiers = [doc.identifier for doc in DirectorySource(root, pattern="*.markdown").iter_documents()]
        assert identifiers == ["b.markdown"]

    def test_missing_directory_is_empty(self, tmp_path):
        assert list(DirectorySource(tmp_path / "missing").iter_documents()) == []

    def test_package_source_has_bundled_chapters(self):
        documents = list(PackageSource().iter_documents())
        assert documents
        assert all(doc.identifier.endswith(".md") for doc in documents)
        assert "---" in documents[0].read_text()


class TestCatalogLoading:
    """Test catalog builds."""

    def test_sorted_by_number(self, chapter_dir, make_doc):
        root = chapter_dir({
            "a.md": make_doc(1, number=3),
            "b.md": make_doc(2, number=1),
            "c.md": make_doc(3, number=2),
        })
        chapters = ChapterCatalog(DirectorySource(root)).get_all_chapters()
        assert [c.number for c in chapters] == [1, 2, 3]
        assert [c.id for c in chapters] == [2, 3, 1]

    def test_malformed_document_skipped(self, chapter_dir, make_doc, caplog):
        root = chapter_dir({
            "01.md": make_doc(1),
            "02.md": "## Step 1: No front matter\nbody\n",
            "03.md": make_doc(3),
        })
        catalog = ChapterCatalog(DirectorySource(root))
        with caplog.at_level(logging.WARNING, logger="stepwise.classroom.catalog"):
            chapters = catalog.get_all_chapters()

        assert [c.id for c in chapters] == [1, 3]
        assert [f.identifier for f in catalog.last_failures] == ["02.md"]
        assert "02.md" in caplog.text

    def test_unreadable_document_skipped(self, chapter_dir, make_doc):
        root = chapter_dir({"01.md": make_doc(1)})
        (root / "02.md").write_bytes(b"\xff\xfe\x00bad")
        catalog = ChapterCatalog(DirectorySource(root))
        assert [c.id for c in catalog.get_all_chapters()] == [1]
        assert catalog.last_failures[0].identifier == "02.md"

    def test_duplicate_id_skipped(self, chapter_dir, make_doc):
        root = chapter_dir({"a.md": make_doc(1, title="First"), "b.md": make_doc(1, number=2, title="Second")})
        catalog = ChapterCatalog(DirectorySource(root))
        chapters = catalog.get_all_chapters()
        assert [c.title for c in chapters] == ["First"]
        assert "Duplicate chapter id" in catalog.last_failures[0].error

    def test_missing_directory_gives_empty_catalog(self, tmp_path):
        catalog = ChapterCatalog(DirectorySource(tmp_path / "nope"))
        assert catalog.get_all_chapters() == ()

    def test_enumeration_failure_gives_empty_catalog(self):
        class BrokenSource:
            def iter_documents(self):
                raise PermissionError("denied")

        assert ChapterCatalog(BrokenSource()).get_all_chapters() == ()

    def test_bad_pattern_gives_empty_catalog(self, chapter_dir, make_doc, caplog):
        root = chapter_dir({"a.md": make_doc(1)})
        with caplog.at_level(logging.ERROR, logger="stepwise.classroom.catalog"):
            assert ChapterCatalog(DirectorySource(root, pattern="/abs/*.md")).get_all_chapters() == ()
            assert ChapterCatalog(DirectorySource(root, pattern="")).get_all_chapters() == ()
        assert "Could not enumerate chapters" in caplog.text

    def test_unknown_package_gives_empty_catalog(self):
        catalog = ChapterCatalog(PackageSource(package="stepwise_missing_package"))
        assert catalog.get_all_chapters() == ()

    def test_cached_chapters_cannot_be_edited(self, chapter_dir):
        root = chapter_dir({"a.md": "---\nid: 1\ntopics:\n  - first\n---\n"})
        catalog = ChapterCatalog(DirectorySource(root))
        with pytest.raises(AttributeError):
            catalog.get_all_chapters()[0].topics.append("extra")
        assert catalog.get_all_chapters()[0].topics == ("first",)

    def test_round_trip_fields(self, chapter_dir):
        root = chapter_dir({"a.md": "---\nid: 42\nnumber: 7\ntopics:\n  - z\n  - y\n  - x\n---\n"})
        chapter = ChapterCatalog(DirectorySource(root)).get_all_chapters()[0]
        assert (chapter.id, chapter.number) == (42, 7)
        assert chapter.topics == ("z", "y", "x")

    def test_bundled_chapters_parse(self):
        catalog = ChapterCatalog(PackageSource())
        chapters = catalog.get_all_chapters()
        assert chapters
        assert catalog.last_failures == ()
        assert [c.number for c in chapters] == sorted(c.number for c in chapters)


class TestCatalogCaching:
    """Test caching and reload semantics."""

    def test_same_object_until_reload(self, chapter_dir, make_doc):
        root = chapter_dir({"a.md": make_doc(1)})
        catalog = ChapterCatalog(DirectorySource(root))
        first = catalog.get_all_chapters()
        assert catalog.get_all_chapters() is first

        catalog.reload_chapters()
        second = catalog.get_all_chapters()
        assert second is not first
        assert second == first

    def test_reload_picks_up_new_documents(self, chapter_dir, make_doc):
        root = chapter_dir({"a.md": make_doc(1)})
        catalog = ChapterCatalog(DirectorySource(root))
        assert len(catalog.get_all_chapters()) == 1

        (root / "b.md").write_text(make_doc(2), encoding="utf-8")
        assert len(catalog.get_all_chapters()) == 1
        catalog.reload_chapters()
        assert len(catalog.get_all_chapters()) == 2

    def test_concurrent_cold_reads_build_once(self, chapter_dir, make_doc):
        root = chapter_dir({f"{i}.md": make_doc(i) for i in range(1, 4)})
        parse_calls = []

        def slow_parse(text):
            parse_calls.append(1)
            time.sleep(0.01)
            return parse_chapter(text)

        catalog = ChapterCatalog(DirectorySource(root), parser=slow_parse)
        barrier = threading.Barrier(8)
        results = []

        def read():
            barrier.wait()
            results.append(catalog.get_all_chapters())

        threads = [threading.Thread(target=read) for _ in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(parse_calls) == 3
        assert all(result is results[0] for result in results)
        assert len(results[0]) == 3

    def test_reload_during_build_discards_stale_result(self, chapter_dir, make_doc):
        root = chapter_dir({"a.md": make_doc(1)})
        catalog = None

        def reloading_parse(text):
            catalog.reload_chapters()
            return parse_chapter(text)

        catalog = ChapterCatalog(DirectorySource(root), parser=reloading_parse)
        first = catalog.get_all_chapters()
        assert len(first) == 1
        # The build raced with a reload, so it was not cached
        assert catalog.get_all_chapters() is not first


class TestCatalogQueries:
    """Test grouping and lookup."""

    def test_by_category_keeps_order(self, chapter_dir, make_doc):
        root = chapter_dir({
            "a.md": make_doc(1, number=1, category="Setup"),
            "b.md": make_doc(2, number=2, category="Components"),
            "c.md": make_doc(3, number=3, category="setup"),
        })
        groups = ChapterCatalog(DirectorySource(root)).get_chapters_by_category()
        assert list(groups) == [ChapterCategory.SETUP, ChapterCategory.COMPONENTS]
        assert [c.id for c in groups[ChapterCategory.SETUP]] == [1, 3]

    def test_get_chapter(self, course):
        catalog, _ = course
        assert catalog.get_chapter(8).title == "Eight"
        assert catalog.get_chapter(99) is None
