"""
Keep a chapter's page sequence valid after edits.

  - redistribute_pages: re-split one edited page and shift the pages after it.
  - compact_pages: fold under-full neighbours together and drop empty pages.
  - merge_pages_to_chapter: join pages back into one chapter string.

Page numbers stay contiguous after every operation. Calls against the same
chapter must be serialized by the caller: each call shifts relative to the
sequence it was given.
"""

import logging
from typing import Iterable, Sequence

from book_pager.formats import get_format
from book_pager.models import Page, PaperFormat
from book_pager.splitter import PAGE_JOINER, split_chapter_to_pages, split_overflow_fragments
from book_pager.text import effective_length

log = logging.getLogger(__name__)


class PageNotFoundError(LookupError):
    """Raised when the edited page number is not in the given sequence."""


def _sorted(pages: Iterable[Page]) -> list[Page]:
    return sorted(pages, key=lambda p: p.page_number)


def redistribute_pages(
    pages: Sequence[Page],
    changed_page_number: int,
    new_content: str,
    paper_format: PaperFormat | str,
    chapter_id: str | None = None,
) -> list[Page]:
    """
    Apply new_content to one page, splitting it if it overflows the format limit.

    With a single fragment only that page changes. With k fragments the page
    becomes k pages numbered from its old number; the first keeps its id, the
    others get id None, and every later page moves up by k - 1.
    """
    spec = get_format(paper_format)
    target = next((p for p in pages if p.page_number == changed_page_number), None)
    if target is None:
        raise PageNotFoundError(
            f"Page {changed_page_number} not found. Pages: {[p.page_number for p in _sorted(pages)]}"
        )
    fragments = split_overflow_fragments(new_content, spec.char_limit)

    if len(fragments) == 1:
        updated = target.with_content(fragments[0].content, word_threshold=spec.word_threshold)
        return _sorted(updated if p.page_number == changed_page_number else p for p in pages)

    shift = len(fragments) - 1
    log.debug("Page %d split into %d pages", changed_page_number, len(fragments))
    owner = chapter_id if chapter_id is not None else target.chapter_id
    result: list[Page] = []
    for p in pages:
        if p.page_number < changed_page_number:
            result.append(p)
        elif p.page_number > changed_page_number:
            result.append(p.renumbered(p.page_number + shift))
    for idx, fragment in enumerate(fragments):
        result.append(
            Page.build(
                changed_page_number + idx,
                fragment.content,
                word_threshold=spec.word_threshold,
                id=target.id if idx == 0 else None,
                chapter_id=owner,
            )
        )
    return _sorted(result)


def compact_pages(
    pages: Sequence[Page],
    paper_format: PaperFormat | str,
    chapter_id: str | None = None,
) -> list[Page]:
    """
    Merge each page into the previous output page while the combined text fits
    the format limit; drop empty pages; renumber from 1. Never returns an empty
    list: a chapter whose pages are all empty keeps one empty page.
    Running it on its own output changes nothing.
    """
    spec = get_format(paper_format)
    ordered = _sorted(pages)
    result: list[Page] = []

    for page in ordered:
        content = page.content.strip()
        if not content:
            continue
        if not result:
            result.append(
                page.model_copy(update={"page_number": 1}).with_content(
                    content, word_threshold=spec.word_threshold
                )
            )
            continue
        prev = result[-1]
        merged = prev.content + PAGE_JOINER + content
        if effective_length(merged) <= spec.char_limit:
            result[-1] = prev.with_content(merged, word_threshold=spec.word_threshold)
        else:
            result.append(
                page.model_copy(update={"page_number": len(result) + 1}).with_content(
                    content, word_threshold=spec.word_threshold
                )
            )

    if not result:
        first = ordered[0] if ordered else None
        return [
            Page.build(
                1,
                "",
                word_threshold=spec.word_threshold,
                id=first.id if first else None,
                chapter_id=chapter_id if chapter_id is not None else (first.chapter_id if first else None),
            )
        ]
    log.debug("Compacted %d pages into %d", len(ordered), len(result))
    return result


def merge_pages_to_chapter(pages: Iterable[Page]) -> str:
    """Non-empty page contents in page-number order, joined by a blank line."""
    return PAGE_JOINER.join(p.content for p in _sorted(pages) if p.content.strip())


def calculate_total_pages(chapter_texts: Iterable[str], **split_options) -> int:
    """Number of pages the chapters split into on a cold start."""
    return sum(len(split_chapter_to_pages(text, **split_options)) for text in chapter_texts)


def get_page_range(chapter_number: int, page_counts: Sequence[int]) -> tuple[int, int]:
    """
    Book-level (first, last) page of a 1-based chapter, given every chapter's
    page count in order. A chapter without a known count occupies one page.
    """
    if chapter_number < 1:
        raise ValueError(f"chapter_number must be >= 1, got {chapter_number}")
    start = 1 + sum(page_counts[: chapter_number - 1])
    count = page_counts[chapter_number - 1] if chapter_number - 1 < len(page_counts) else 0
    return start, start + (count or 1) - 1
