"""
Book Pager: split chapter text into fixed-capacity pages per paper format and
keep the page sequence valid as pages are edited.

Use as a library:

    from book_pager import split_chapter_to_pages, redistribute_pages
    pages = split_chapter_to_pages(chapter_text)
    pages = redistribute_pages(pages, 2, new_text, "a5")

Or run the CLI:

    book-pager split chapter.txt --format a5
"""

from book_pager.api import paginate_file, paginate_text
from book_pager.formats import FORMATS, classify_status, get_format
from book_pager.models import (
    FormatSpec,
    OverflowReport,
    Page,
    PageStatus,
    PaginationConfig,
    PaginationResult,
    PaperFormat,
    SplitFragment,
)
from book_pager.redistribute import (
    calculate_total_pages,
    compact_pages,
    get_page_range,
    merge_pages_to_chapter,
    redistribute_pages,
)
from book_pager.splitter import (
    check_page_overflow,
    split_chapter_to_pages,
    split_overflow_content,
    split_overflow_fragments,
)
from book_pager.text import count_words, effective_length, strip_markup

__all__ = [
    "paginate_text",
    "paginate_file",
    "FORMATS",
    "get_format",
    "classify_status",
    "FormatSpec",
    "OverflowReport",
    "Page",
    "PageStatus",
    "PaginationConfig",
    "PaginationResult",
    "PaperFormat",
    "SplitFragment",
    "split_chapter_to_pages",
    "split_overflow_content",
    "split_overflow_fragments",
    "check_page_overflow",
    "redistribute_pages",
    "compact_pages",
    "merge_pages_to_chapter",
    "calculate_total_pages",
    "get_page_range",
    "strip_markup",
    "effective_length",
    "count_words",
]
