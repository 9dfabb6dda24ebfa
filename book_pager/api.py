"""
Public API: paginate chapter text from code.

    from book_pager import paginate_text
    result = paginate_text(chapter_text, paper_format="a5")
"""

from pathlib import Path

from book_pager.formats import get_format
from book_pager.models import DEFAULT_CHARS_PER_PAGE, PaginationConfig, PaginationResult, PaperFormat
from book_pager.splitter import has_manual_breaks, split_chapter_to_pages
from book_pager.text import effective_length


def _run(text: str, config: PaginationConfig, source_path: Path | None = None) -> PaginationResult:
    pages = split_chapter_to_pages(
        text,
        config.start_page,
        paper_format=config.paper_format,
        chars_per_page=config.chars_per_page,
        chapter_id=config.chapter_id,
    )
    overflow: list[int] = []
    if config.paper_format is not None:
        limit = get_format(config.paper_format).char_limit
        overflow = [p.page_number for p in pages if effective_length(p.content) > limit]
    manual = has_manual_breaks(text)
    message = f"{len(pages)} page(s)" + (" from manual breaks" if manual else "")
    if overflow:
        message += f"; {len(overflow)} over the {config.paper_format.value} limit"
    return PaginationResult(
        pages=pages,
        paper_format=config.paper_format,
        source_path=source_path,
        manual_breaks=manual,
        total_words=sum(p.word_count for p in pages),
        overflow_pages=overflow,
        message=message,
    )


def paginate_text(
    text: str,
    *,
    paper_format: PaperFormat | str | None = None,
    start_page: int = 1,
    chars_per_page: int = DEFAULT_CHARS_PER_PAGE,
    chapter_id: str | None = None,
) -> PaginationResult:
    """
    Split chapter text into pages (library entry point).

    Args:
        text: Full chapter text; may contain inline markup and ---pagebreak--- markers.
        paper_format: Format for status thresholds and overflow reporting (a4, a5, b5, letter, novel).
        start_page: Number of the first page.
        chars_per_page: Packing budget for chapters without manual breaks.
        chapter_id: Stamped on every page.

    Returns:
        PaginationResult with pages, word total and page numbers over the format limit.
    """
    config = PaginationConfig(
        paper_format=get_format(paper_format).name if paper_format is not None else None,
        start_page=start_page,
        chars_per_page=chars_per_page,
        chapter_id=chapter_id,
    )
    return _run(text, config)


def paginate_file(
    path: str | Path,
    *,
    paper_format: PaperFormat | str | None = None,
    start_page: int = 1,
    chars_per_page: int = DEFAULT_CHARS_PER_PAGE,
    chapter_id: str | None = None,
) -> PaginationResult:
    """paginate_text on a UTF-8 file; chapter_id defaults to the file stem."""
    path = Path(path)
    config = PaginationConfig(
        paper_format=get_format(paper_format).name if paper_format is not None else None,
        start_page=start_page,
        chars_per_page=chars_per_page,
        chapter_id=chapter_id or path.stem,
    )
    return _run(path.read_text(encoding="utf-8"), config, source_path=path)
