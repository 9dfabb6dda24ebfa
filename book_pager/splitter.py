"""
Chapter → pages splitting.

Two entry points:
  - split_chapter_to_pages: cold start from a chapter's full text. Manual
    page-break markers win when present; otherwise paragraphs are packed
    greedily up to a nominal per-page budget.
  - split_overflow_fragments / split_overflow_content: cut one page's content
    into pieces that fit a paper format's hard character limit.

All functions are pure; every string input yields a valid result.
"""

import logging
import re

from book_pager.boundaries import DEFAULT_CHAIN, BoundaryFinder, find_split_point
from book_pager.formats import get_format, word_threshold_for
from book_pager.models import (
    DEFAULT_CHARS_PER_PAGE,
    OverflowReport,
    Page,
    PaperFormat,
    SplitFragment,
)
from book_pager.text import effective_length, has_markup

log = logging.getLogger(__name__)

PAGE_BREAK_MARKER = "---pagebreak---"
PAGE_JOINER = "\n\n"
PARAGRAPH_BREAK_RE = re.compile(r"\n[ \t]*\n")


def has_manual_breaks(content: str) -> bool:
    return PAGE_BREAK_MARKER in content


def split_chapter_to_pages(
    content: str,
    start_page_number: int = 1,
    *,
    paper_format: PaperFormat | str | None = None,
    chars_per_page: int = DEFAULT_CHARS_PER_PAGE,
    chapter_id: str | None = None,
) -> list[Page]:
    """
    Split a chapter's full text into pages numbered from start_page_number.

    Manual mode: one page per segment between PAGE_BREAK_MARKERs, whatever
    its length. Automatic mode: paragraphs (blank-line separated) are added to
    the current page until the next one would push it past chars_per_page.
    Empty or whitespace-only input gives a single empty page.
    """
    if start_page_number < 1:
        raise ValueError(f"start_page_number must be >= 1, got {start_page_number}")
    if chars_per_page <= 0:
        raise ValueError(f"chars_per_page must be positive, got {chars_per_page}")
    threshold = word_threshold_for(paper_format)

    def _page(offset: int, text: str) -> Page:
        return Page.build(
            start_page_number + offset,
            text,
            word_threshold=threshold,
            chapter_id=chapter_id,
        )

    if not content.strip():
        return [_page(0, "")]

    if has_manual_breaks(content):
        sections = content.split(PAGE_BREAK_MARKER)
        log.debug("Manual mode: %d page-break markers", len(sections) - 1)
        return [_page(i, section.strip()) for i, section in enumerate(sections)]

    texts: list[str] = []
    current = ""
    for para in PARAGRAPH_BREAK_RE.split(content):
        para = para.strip()
        if not para:
            continue
        candidate = current + PAGE_JOINER + para if current else para
        if current and effective_length(candidate) > chars_per_page:
            texts.append(current)
            current = para
        else:
            current = candidate
    if current:
        texts.append(current)

    log.debug("Automatic mode: %d pages at budget %d", len(texts), chars_per_page)
    if not texts:
        return [_page(0, "")]
    return [_page(i, text) for i, text in enumerate(texts)]


def _step_out_of_tag(text: str, cut: int) -> int:
    """
    Keep a cut out of markup tags. A cut inside a tag moves back to its '<';
    when the tag opens the text it moves past the '>' so the tag stays whole.
    """
    open_pos = text.rfind("<", 0, cut)
    if open_pos == -1:
        return cut
    if text.find(">", open_pos, cut) != -1:
        return cut
    close_pos = text.find(">", cut)
    if close_pos == -1:
        # unterminated '<' is plain text, not a tag
        return cut
    if open_pos > 0:
        return open_pos
    return close_pos + 1


def split_overflow_fragments(
    content: str,
    char_limit: int,
    chain: tuple[BoundaryFinder, ...] = DEFAULT_CHAIN,
) -> list[SplitFragment]:
    """
    Cut content into fragments whose effective length is at most char_limit.

    Content that already fits is returned as a single fragment, unchanged.
    Otherwise the best split point at or before the limit is searched in the
    order paragraph, sentence, word, hard cut; fragments and remainders are
    trimmed. Fragments produced by a hard cut are marked forced.
    Markup tags are never split.
    """
    if char_limit <= 0:
        raise ValueError(f"char_limit must be positive, got {char_limit}")
    if effective_length(content) <= char_limit:
        return [SplitFragment(content=content)]

    fragments: list[SplitFragment] = []
    remaining = content.strip()
    markup = has_markup(content)
    while remaining:
        if effective_length(remaining) <= char_limit:
            fragments.append(SplitFragment(content=remaining))
            break
        cut, finder = find_split_point(remaining, char_limit, chain)
        forced = finder.forced
        if markup:
            adjusted = _step_out_of_tag(remaining, cut)
            forced = forced and adjusted == cut
            cut = adjusted
        piece = remaining[:cut].strip()
        if forced:
            log.warning("No boundary within %d chars; hard cut at %d", char_limit, cut)
        else:
            log.debug("Split at %s boundary, cut=%d", finder.name, cut)
        if piece:
            fragments.append(SplitFragment(content=piece, forced=forced))
        remaining = remaining[cut:].strip()

    return fragments or [SplitFragment(content="")]


def split_overflow_content(content: str, paper_format: PaperFormat | str) -> list[str]:
    """Overflow split against a paper format's limit; plain strings only."""
    limit = get_format(paper_format).char_limit
    return [f.content for f in split_overflow_fragments(content, limit)]


def check_page_overflow(content: str, paper_format: PaperFormat | str) -> OverflowReport:
    """Measure content against a paper format's limit."""
    char_count = effective_length(content)
    max_chars = get_format(paper_format).char_limit
    over = char_count > max_chars
    return OverflowReport(
        is_overflow=over,
        char_count=char_count,
        max_chars=max_chars,
        overflow_amount=char_count - max_chars if over else 0,
    )
