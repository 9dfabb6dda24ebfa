"""Unit tests for the capacity table and status classifier."""

import pytest

from book_pager.formats import FORMATS, UnknownPaperFormatError, classify_status, get_format, word_threshold_for
from book_pager.models import DEFAULT_WORD_THRESHOLD, PageStatus, PaperFormat


def test_every_format_has_positive_limits():
    assert set(FORMATS) == set(PaperFormat)
    for spec in FORMATS.values():
        assert spec.char_limit > 0
        assert spec.word_threshold > 0


@pytest.mark.parametrize(
    "name,char_limit,words",
    [("a4", 1400, 350), ("a5", 800, 200), ("b5", 1000, 250), ("letter", 1300, 325), ("novel", 700, 175)],
)
def test_format_values(name, char_limit, words):
    spec = get_format(name)
    assert spec.char_limit == char_limit
    assert spec.word_threshold == words


def test_get_format_accepts_enum_and_any_case():
    assert get_format(PaperFormat.B5) is FORMATS[PaperFormat.B5]
    assert get_format(" Letter ").name == PaperFormat.LETTER


def test_unknown_format_raises_key_error():
    with pytest.raises(UnknownPaperFormatError):
        get_format("a3")
    with pytest.raises(KeyError):
        get_format("")


def test_word_threshold_default():
    assert word_threshold_for(None) == DEFAULT_WORD_THRESHOLD
    assert word_threshold_for("novel") == 175


def test_classify_status_boundaries():
    assert classify_status(0, 350) == PageStatus.EMPTY
    assert classify_status(1, 350) == PageStatus.DRAFT
    assert classify_status(279, 350) == PageStatus.DRAFT
    assert classify_status(280, 350) == PageStatus.COMPLETE


def test_classify_status_default_threshold():
    assert classify_status(319) == PageStatus.DRAFT
    assert classify_status(320) == PageStatus.COMPLETE


def test_classify_status_monotonic():
    for spec in FORMATS.values():
        ranks = [classify_status(n, spec.word_threshold).rank for n in range(0, 500)]
        assert ranks == sorted(ranks)


def test_zero_threshold_rejected():
    with pytest.raises(ValueError):
        classify_status(10, 0)
