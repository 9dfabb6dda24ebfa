"""Unit tests for the split-point cascade."""

from book_pager.boundaries import (
    DEFAULT_CHAIN,
    HardCut,
    ParagraphBoundary,
    SentenceBoundary,
    WordBoundary,
    find_split_point,
)


def test_chain_order():
    assert [f.name for f in DEFAULT_CHAIN] == ["paragraph", "sentence", "word", "hard"]
    assert [f.forced for f in DEFAULT_CHAIN] == [False, False, False, True]


def test_paragraph_boundary_last_before_limit():
    text = "a" * 30 + "\n\n" + "b" * 40 + "\n\n" + "c" * 100
    assert ParagraphBoundary().find(text, 100) == 72
    assert ParagraphBoundary().accept(text, 100) == 72


def test_paragraph_boundary_rejected_when_too_early():
    text = "a" * 10 + "\n\n" + "b" * 100
    assert ParagraphBoundary().find(text, 50) == 10
    assert ParagraphBoundary().accept(text, 50) is None


def test_paragraph_boundary_with_blank_line_spaces():
    text = "a" * 60 + "\n  \n" + "b" * 100
    assert ParagraphBoundary().accept(text, 100) == 60


def test_sentence_boundary_cuts_after_terminator():
    text = "x" * 40 + ". " + "y" * 100
    assert SentenceBoundary().accept(text, 100) == 41


def test_sentence_boundary_needs_following_whitespace():
    text = "x" * 40 + ".5" + "y" * 100
    assert SentenceBoundary().find(text, 100) is None


def test_sentence_boundary_cjk_full_stop_and_newline():
    assert SentenceBoundary().find("가" * 50 + "。" + "나" * 100, 100) == 51
    assert SentenceBoundary().find("x" * 50 + "?\n" + "y" * 100, 100) == 51


def test_sentence_boundary_threshold_is_thirty_percent():
    text = "x" * 29 + ". " + "y" * 100
    assert SentenceBoundary().accept(text, 100) is None
    text = "x" * 30 + ". " + "y" * 100
    assert SentenceBoundary().accept(text, 100) == 31


def test_sentence_boundary_terminator_at_limit_edge():
    # terminator as the last character inside the limit, space just past it
    text = "x" * 99 + ". " + "y" * 50
    assert SentenceBoundary().find(text, 100) == 100


def test_word_boundary():
    text = "word " * 40
    assert WordBoundary().accept(text, 100) == 99
    assert WordBoundary().accept("x" * 60 + " " + "y" * 60, 100) == 60
    assert WordBoundary().accept("x" * 40 + " " + "y" * 80, 100) is None


def test_hard_cut_always_at_limit():
    assert HardCut().accept("x" * 500, 120) == 120


def test_find_split_point_prefers_paragraph():
    text = "One. Two. " * 6 + "\n\n" + "z " * 100
    cut, finder = find_split_point(text, 100)
    assert finder.name == "paragraph"
    assert cut == 60


def test_find_split_point_falls_through_to_hard_cut():
    cut, finder = find_split_point("x" * 300, 100)
    assert (cut, finder.name, finder.forced) == (100, "hard", True)


def test_paragraph_boundary_wide_blank_line_across_limit():
    text = "a" * 60 + "\n" + " \t" * 20 + "\n" + "b" * 100
    assert ParagraphBoundary().accept(text, 70) == 60


def test_paragraph_boundary_repeated_newlines():
    text = "a" * 60 + "\n\n\n" + "b" * 100
    cut = ParagraphBoundary().find(text, 100)
    assert cut == 61
    assert text[:cut].strip() == "a" * 60


def test_word_boundary_space_at_limit():
    text = "x" * 100 + " " + "y" * 50
    assert WordBoundary().accept(text, 100) == 100
