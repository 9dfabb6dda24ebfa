"""Capacity table per paper format and the page status classifier."""

from book_pager.models import DEFAULT_WORD_THRESHOLD, FormatSpec, PageStatus, PaperFormat

# Share of the word threshold at which a page counts as complete
COMPLETE_RATIO = 0.8


class UnknownPaperFormatError(KeyError):
    """Raised when a paper format name is not in the capacity table."""


FORMATS: dict[PaperFormat, FormatSpec] = {
    PaperFormat.A4: FormatSpec(name=PaperFormat.A4, label="A4", char_limit=1400, word_threshold=350),
    PaperFormat.A5: FormatSpec(name=PaperFormat.A5, label="A5", char_limit=800, word_threshold=200),
    PaperFormat.B5: FormatSpec(name=PaperFormat.B5, label="B5", char_limit=1000, word_threshold=250),
    PaperFormat.LETTER: FormatSpec(name=PaperFormat.LETTER, label="US Letter", char_limit=1300, word_threshold=325),
    PaperFormat.NOVEL: FormatSpec(name=PaperFormat.NOVEL, label="Novel (152x225)", char_limit=700, word_threshold=175),
}


def get_format(paper_format: PaperFormat | str) -> FormatSpec:
    """Return the capacity of a format. Accepts the enum or its name (case-insensitive)."""
    key = paper_format
    if not isinstance(key, PaperFormat):
        try:
            key = PaperFormat(str(paper_format).strip().lower())
        except ValueError:
            raise UnknownPaperFormatError(
                f"Unknown paper format: {paper_format}. Available: {[f.value for f in FORMATS]}"
            ) from None
    return FORMATS[key]


def word_threshold_for(paper_format: PaperFormat | str | None) -> int:
    if paper_format is None:
        return DEFAULT_WORD_THRESHOLD
    return get_format(paper_format).word_threshold


def classify_status(word_count: int, threshold: int = DEFAULT_WORD_THRESHOLD) -> PageStatus:
    """empty for no words, complete at 80% of threshold, draft otherwise."""
    if threshold <= 0:
        raise ValueError(f"Word threshold must be positive, got {threshold}")
    if word_count <= 0:
        return PageStatus.EMPTY
    if word_count >= threshold * COMPLETE_RATIO:
        return PageStatus.COMPLETE
    return PageStatus.DRAFT
