"""Text cleaners for chunking input. Keeps line structure so separators still apply."""

import re

_LINE_ENDINGS = re.compile(r"\r\n?")
_INLINE_SPACE = re.compile(r"[ \t\f\v]+")
_TRAILING_SPACE = re.compile(r"[ \t]+\n")
_BLANK_RUNS = re.compile(r"\n{3,}")


def normalize_whitespace(text: str) -> str:
    """
    Normalize line endings to \\n, collapse runs of spaces/tabs to one space,
    drop trailing spaces on lines and squeeze 3+ newlines to a paragraph break.
    """
    if not text or not isinstance(text, str):
        return ""
    text = _LINE_ENDINGS.sub("\n", text)
    text = _INLINE_SPACE.sub(" ", text)
    text = _TRAILING_SPACE.sub("\n", text)
    return _BLANK_RUNS.sub("\n\n", text).strip()


def clean_for_chunking(text: str, normalize: bool = True) -> str:
    """Clean raw content before chunking. Returns text unchanged when normalize is False."""
    if not normalize:
        return text
    return normalize_whitespace(text)
