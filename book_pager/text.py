"""
Plain-text view of page content: markup stripping, effective length and
script-aware word counting.

Rich text is measured after removing markup. Image tags are dropped
entirely (embedded base64 payloads count for nothing), other tags become a
single space, the common entities are decoded and whitespace is collapsed.
Text without a '<' is taken as plain and measured as-is.
"""

import re

MARKUP_INDICATOR = "<"

IMG_TAG_RE = re.compile(r"<img[^>]*>", re.IGNORECASE)
HTML_TAG_RE = re.compile(r"<[^>]+>")
WHITESPACE_RE = re.compile(r"\s+")

# Hangul syllables, CJK ideographs (+ extension A, compatibility) and kana.
# Each character counts as one word since these scripts do not space words.
CJK_CHAR_RE = re.compile(
    "[\uac00-\ud7af\u4e00-\u9fff\u3400-\u4dbf\uf900-\ufaff\u3040-\u309f\u30a0-\u30ff]"
)

HTML_ENTITIES = (
    ("&nbsp;", " "),
    ("&amp;", "&"),
    ("&lt;", "<"),
    ("&gt;", ">"),
    ("&quot;", '"'),
)


def has_markup(text: str) -> bool:
    return MARKUP_INDICATOR in text


def strip_markup(text: str) -> str:
    """Plain text of rich text. Returns text unchanged when it has no markup."""
    if not has_markup(text):
        return text
    text = IMG_TAG_RE.sub("", text)
    text = HTML_TAG_RE.sub(" ", text)
    for entity, char in HTML_ENTITIES:
        text = text.replace(entity, char)
    return WHITESPACE_RE.sub(" ", text).strip()


def effective_length(content: str) -> int:
    """Character count used for capacity decisions."""
    return len(strip_markup(content))


def count_words(content: str) -> int:
    """
    Word count for mixed CJK/Latin text: one word per CJK character plus
    whitespace-separated tokens of what remains.
    """
    text = strip_markup(content)
    if not text.strip():
        return 0
    cjk = len(CJK_CHAR_RE.findall(text))
    rest = CJK_CHAR_RE.sub(" ", text)
    return cjk + len(rest.split())


def normalize_whitespace(text: str) -> str:
    """Collapse whitespace runs to single spaces; used to compare page text against chapter text."""
    return WHITESPACE_RE.sub(" ", text).strip()
