"""
Split-point search for overflowing pages.

Each finder looks for its kind of boundary at or before the limit and only
accepts it past a minimum share of the limit, so no fragment comes out
nearly empty. Finders run in priority order (paragraph, sentence, word) and
the hard cut at the limit ends the chain.

A position returned by a finder is a cut index: the fragment is text[:cut],
the remainder text[cut:], both trimmed by the caller.
"""

import re
from abc import ABC, abstractmethod


class BoundaryFinder(ABC):
    """One tier of the split-point cascade."""

    name: str = ""
    # Cut must be strictly past limit * min_fraction
    min_fraction: float = 0.0
    # True when cuts from this tier may land mid-word
    forced: bool = False

    @abstractmethod
    def find(self, text: str, limit: int) -> int | None:
        """Last cut index <= limit for this boundary kind, or None."""
        ...

    def accept(self, text: str, limit: int) -> int | None:
        cut = self.find(text, limit)
        if cut is None or cut <= limit * self.min_fraction:
            return None
        return cut


class RegexBoundary(BoundaryFinder):
    """Boundary defined by a regex; cut at the start or end of the last match."""

    pattern: re.Pattern[str]
    cut_at_end: bool = False
    # Matches may start before the limit and run past it
    slack: int = 0

    def find(self, text: str, limit: int) -> int | None:
        best = None
        for m in self.pattern.finditer(text, 0, min(len(text), limit + self.slack)):
            cut = m.end() if self.cut_at_end else m.start()
            if cut <= limit:
                best = cut
        return best


class ParagraphBoundary(RegexBoundary):
    name = "paragraph"
    min_fraction = 0.5
    pattern = re.compile(r"\n[ \t]*\n")

    def find(self, text: str, limit: int) -> int | None:
        # blank lines may run past the limit; only the start has to fit
        pos = text.rfind("\n", 0, limit + 1)
        while pos != -1:
            if self.pattern.match(text, pos):
                return pos
            pos = text.rfind("\n", 0, pos)
        return None


class SentenceBoundary(RegexBoundary):
    name = "sentence"
    min_fraction = 0.3
    # Latin terminators need following whitespace; CJK full stops do not
    pattern = re.compile(r"[.!?](?=\s)|[。！？]")
    cut_at_end = True
    slack = 1


class WordBoundary(RegexBoundary):
    name = "word"
    min_fraction = 0.5
    pattern = re.compile(r"\s")
    slack = 1


class HardCut(BoundaryFinder):
    name = "hard"
    forced = True

    def find(self, text: str, limit: int) -> int | None:
        return limit


DEFAULT_CHAIN: tuple[BoundaryFinder, ...] = (
    ParagraphBoundary(),
    SentenceBoundary(),
    WordBoundary(),
    HardCut(),
)


def find_split_point(
    text: str,
    limit: int,
    chain: tuple[BoundaryFinder, ...] = DEFAULT_CHAIN,
) -> tuple[int, BoundaryFinder]:
    """Return (cut, finder) from the first tier that accepts a cut. Falls back to a hard cut at limit."""
    for finder in chain:
        cut = finder.accept(text, limit)
        if cut is not None:
            return cut, finder
    return limit, DEFAULT_CHAIN[-1]
