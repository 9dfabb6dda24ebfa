"""Tests for the library entry points."""

import pytest

from book_pager import paginate_file, paginate_text
from book_pager.formats import UnknownPaperFormatError
from book_pager.models import PaperFormat
from book_pager.splitter import PAGE_BREAK_MARKER


def test_paginate_text_without_format():
    result = paginate_text("one two\n\nthree")
    assert len(result.pages) == 1
    assert result.paper_format is None
    assert result.total_words == 3
    assert result.overflow_pages == []
    assert result.manual_breaks is False
    assert result.message == "1 page(s)"


def test_paginate_text_reports_overflowing_manual_pages():
    text = "short" + PAGE_BREAK_MARKER + "x" * 900 + PAGE_BREAK_MARKER + "end"
    result = paginate_text(text, paper_format="a5", start_page=10)
    assert [p.page_number for p in result.pages] == [10, 11, 12]
    assert result.paper_format == PaperFormat.A5
    assert result.manual_breaks is True
    assert result.overflow_pages == [11]
    assert result.message == "3 page(s) from manual breaks; 1 over the a5 limit"


def test_paginate_text_unknown_format():
    with pytest.raises(UnknownPaperFormatError):
        paginate_text("text", paper_format="a0")


def test_paginate_file(tmp_path):
    path = tmp_path / "chapter-03.txt"
    path.write_text("A" * 2000 + "\n\n" + "B" * 2000, encoding="utf-8")
    result = paginate_file(path, chars_per_page=1500)
    assert len(result.pages) == 2
    assert result.source_path == path
    assert all(p.chapter_id == "chapter-03" for p in result.pages)
