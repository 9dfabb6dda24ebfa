"""Tests for the store-backed pages tool."""

import pytest

from book_pager.models import PageStatus
from book_pager.redistribute import PageNotFoundError
from book_pager.splitter import PAGE_BREAK_MARKER
from book_pager.store import ChapterNotFoundError, JsonPageStore
from book_pager.tools.pages import compact_chapter, edit_page, import_chapter, load_pages, save_pages


@pytest.fixture
def store(tmp_path):
    store = JsonPageStore(tmp_path / "pages.json")
    store.set_chapter_content("ch1", f"one{PAGE_BREAK_MARKER}two{PAGE_BREAK_MARKER}three")
    return store


def test_load_pages_from_chapter_text(store):
    pages, from_content = load_pages(store, "ch1")
    assert from_content is True
    assert [p.content for p in pages] == ["one", "two", "three"]
    assert [p.id for p in pages] == ["temp-0", "temp-1", "temp-2"]
    assert all(p.chapter_id == "ch1" for p in pages)


def test_load_pages_unknown_chapter(store):
    with pytest.raises(ChapterNotFoundError):
        load_pages(store, "missing")


def test_save_pages_syncs_chapter_text(store):
    pages, _ = load_pages(store, "ch1")
    stored = save_pages(store, "ch1", pages)
    assert [p.page_number for p in stored] == [1, 2, 3]
    assert store.get_chapter_content("ch1") == "one\n\ntwo\n\nthree"
    pages, from_content = load_pages(store, "ch1")
    assert from_content is False
    assert pages == stored


def test_edit_page_redistributes_and_saves(store):
    pages = edit_page(store, "ch1", 2, "x" * 1000, "a5")
    assert [p.page_number for p in pages] == [1, 2, 3, 4]
    assert [p.content for p in store.get_pages("ch1")] == ["one", "x" * 800, "x" * 200, "three"]
    assert store.get_chapter_content("ch1") == "one\n\n" + "x" * 800 + "\n\n" + "x" * 200 + "\n\nthree"


def test_edit_missing_page(store):
    with pytest.raises(PageNotFoundError):
        edit_page(store, "ch1", 4, "text", "a4")


def test_compact_chapter(store):
    pages = compact_chapter(store, "ch1", "a4")
    assert len(pages) == 1
    assert pages[0].content == "one\n\ntwo\n\nthree"
    assert len(store.get_pages("ch1")) == 1


def test_import_chapter_replaces_pages(store):
    save_pages(store, "ch1", load_pages(store, "ch1")[0])
    pages = import_chapter(store, "ch1", "A" * 2000 + "\n\n" + "B" * 2000, paper_format="a4")
    assert [p.content[0] for p in pages] == ["A", "B"]
    assert all(p.status == PageStatus.DRAFT for p in pages)
    assert store.get_pages("ch1") == pages
