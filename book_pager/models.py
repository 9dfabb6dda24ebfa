"""Data models for pages, paper formats and pagination results."""

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field

# Nominal values used when no paper format is selected
DEFAULT_CHARS_PER_PAGE = 1500
DEFAULT_WORD_THRESHOLD = 400


class PaperFormat(str, Enum):
    """Physical paper formats a book can be laid out for."""

    A4 = "a4"
    A5 = "a5"
    B5 = "b5"
    LETTER = "letter"
    NOVEL = "novel"


class PageStatus(str, Enum):
    """Fill state of a page, derived from its word count."""

    EMPTY = "empty"
    DRAFT = "draft"
    COMPLETE = "complete"

    @property
    def rank(self) -> int:
        return _STATUS_ORDER.index(self)


_STATUS_ORDER = [PageStatus.EMPTY, PageStatus.DRAFT, PageStatus.COMPLETE]


class FormatSpec(BaseModel):
    """Capacity of one paper format."""

    name: PaperFormat = Field(description="Format identifier")
    label: str = Field(default="", description="Human-readable name")
    char_limit: int = Field(gt=0, description="Max effective characters that fit one page")
    word_threshold: int = Field(gt=0, description="Words per page used for the complete/draft decision")

    model_config = {"frozen": True}


class Page(BaseModel):
    """
    One page of a chapter. word_count and status are derived from content;
    build pages with Page.build() and change them with with_content()/renumbered().
    """

    id: str | None = Field(default=None, description="Store id; None for pages not persisted yet")
    chapter_id: str | None = Field(default=None, description="Owning chapter")
    page_number: int = Field(ge=1, description="1-based position within the chapter")
    content: str = Field(default="", description="Page text, possibly with inline markup")
    word_count: int = Field(default=0, ge=0)
    status: PageStatus = Field(default=PageStatus.EMPTY)

    model_config = {"frozen": True}

    @classmethod
    def build(
        cls,
        page_number: int,
        content: str,
        *,
        word_threshold: int = DEFAULT_WORD_THRESHOLD,
        id: str | None = None,
        chapter_id: str | None = None,
    ) -> "Page":
        # local import: formats imports this module
        from book_pager.formats import classify_status
        from book_pager.text import count_words

        words = count_words(content)
        return cls(
            id=id,
            chapter_id=chapter_id,
            page_number=page_number,
            content=content,
            word_count=words,
            status=classify_status(words, word_threshold),
        )

    def with_content(self, content: str, *, word_threshold: int = DEFAULT_WORD_THRESHOLD) -> "Page":
        """Same page (id, number) with new content and recomputed metrics."""
        return Page.build(
            self.page_number,
            content,
            word_threshold=word_threshold,
            id=self.id,
            chapter_id=self.chapter_id,
        )

    def renumbered(self, page_number: int) -> "Page":
        return self.model_copy(update={"page_number": page_number})


class SplitFragment(BaseModel):
    """One piece of an overflow split. forced is True when it ends in a hard cut (possibly mid-word)."""

    content: str
    forced: bool = False

    model_config = {"frozen": True}


class OverflowReport(BaseModel):
    """Result of measuring a page against its format limit."""

    is_overflow: bool
    char_count: int = Field(description="Effective (markup-stripped) length")
    max_chars: int = Field(description="Format char limit")
    overflow_amount: int = Field(default=0, description="Characters over the limit, 0 if it fits")


class PaginationConfig(BaseModel):
    """Options for splitting a chapter into pages."""

    paper_format: PaperFormat | None = Field(
        default=None,
        description="Format used for status thresholds and overflow reporting; None uses nominal values",
    )
    start_page: int = Field(default=1, ge=1, description="Number of the first page")
    chars_per_page: int = Field(
        default=DEFAULT_CHARS_PER_PAGE,
        gt=0,
        description="Packing budget for automatic mode (not the hard format limit)",
    )
    chapter_id: str | None = Field(default=None, description="Chapter id stamped on every page")


class PaginationResult(BaseModel):
    """Result of a pagination run."""

    pages: list[Page] = Field(default_factory=list)
    paper_format: PaperFormat | None = Field(default=None)
    source_path: Path | None = Field(default=None, description="File the text was read from, if any")
    manual_breaks: bool = Field(default=False, description="Whether manual page-break markers were used")
    total_words: int = Field(default=0)
    overflow_pages: list[int] = Field(
        default_factory=list,
        description="Page numbers whose effective length exceeds the format limit",
    )
    message: str = Field(default="", description="Human-readable summary")

    model_config = {"arbitrary_types_allowed": True}
