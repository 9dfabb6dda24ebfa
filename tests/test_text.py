"""Unit tests for markup stripping and text metrics."""

from book_pager.text import count_words, effective_length, normalize_whitespace, strip_markup


def test_plain_text_returned_unchanged():
    text = "a  b\n\nc &amp; d "
    assert strip_markup(text) == text


def test_tags_become_spaces_and_whitespace_collapses():
    assert strip_markup("<p>Hello&nbsp;<b>world</b></p>") == "Hello world"


def test_image_markup_removed_with_payload():
    html = '<p>Hi</p><img src="data:image/png;base64,' + "A" * 5000 + '">'
    assert strip_markup(html) == "Hi"
    assert effective_length(html) == 2


def test_entities_decoded():
    assert strip_markup("<br>&lt;tag&gt; &amp; &quot;q&quot;") == '<tag> & "q"'


def test_effective_length_plain_counts_raw_characters():
    assert effective_length("ab  cd") == 6
    assert effective_length("") == 0


def test_count_words_empty_and_whitespace():
    assert count_words("") == 0
    assert count_words("   \n\t ") == 0
    assert count_words("<p> </p>") == 0


def test_count_words_latin():
    assert count_words("hello world") == 2
    assert count_words("  one\ntwo   three ") == 3


def test_count_words_cjk_counts_characters():
    assert count_words("안녕하세요 world") == 6
    assert count_words("日本語 text here") == 5
    assert count_words("ひらがなカタカナ") == 8


def test_count_words_cjk_inside_latin_token():
    # CJK characters split the surrounding Latin token
    assert count_words("abc한def") == 3


def test_count_words_strips_markup_first():
    assert count_words("<p>one <em>two</em></p><img src='x.png'>") == 2


def test_normalize_whitespace():
    assert normalize_whitespace("  a\n\n b\tc ") == "a b c"
