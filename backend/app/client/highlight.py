"""Render the original text as HTML with the corrected phrases marked."""

import re
from collections.abc import Iterable

# An ampersand that does not already start a character reference.
_BARE_AMP_RE = re.compile(r"&(?!(?:[A-Za-z][A-Za-z0-9]*|#[0-9]+|#[xX][0-9A-Fa-f]+);)")
_NEWLINE_RE = re.compile(r"\r\n|\r|\n")


def escape_html(text: str) -> str:
    """Escape ``&``, ``<`` and ``>``.

    Existing character references are left alone, so escaping already
    escaped text is a no-op.
    """
    text = _BARE_AMP_RE.sub("&amp;", text)
    return text.replace("<", "&lt;").replace(">", "&gt;")


def _render(text: str) -> str:
    return _NEWLINE_RE.sub("<br>", escape_html(text))


def find_wrong_word_spans(original: str, wrong_words: Iterable[str]) -> list[tuple[int, int]]:
    """Character spans of *original* to mark, sorted by start.

    Each distinct phrase is matched case-insensitively as a whole word, in
    first-seen order. A match overlapping a span claimed by an earlier phrase
    is dropped.
    """
    spans: list[tuple[int, int]] = []
    for phrase in dict.fromkeys(wrong_words):
        if not phrase or not phrase.strip():
            continue
        pattern = re.compile(rf"(?<!\w){re.escape(phrase)}(?!\w)", re.IGNORECASE)
        for match in pattern.finditer(original):
            start, end = match.span()
            if not any(start < e and s < end for s, e in spans):
                spans.append((start, end))
    return sorted(spans)


def highlight_wrong_words(
    original: str,
    wrong_words: Iterable[str],
    tag: str = "mark",
) -> str:
    """Return *original* as HTML-safe markup with wrong words in ``<tag>``.

    Line breaks become ``<br>``. Matching happens on the raw text, so markup
    and character references produced by escaping are never matched.
    """
    pieces: list[str] = []
    cursor = 0
    for start, end in find_wrong_word_spans(original, wrong_words):
        pieces.append(_render(original[cursor:start]))
        pieces.append(f"<{tag}>{_render(original[start:end])}</{tag}>")
        cursor = end
    pieces.append(_render(original[cursor:]))
    return "".join(pieces)
