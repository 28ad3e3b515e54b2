"""Text helpers shared by the classifier, search and synthesizer.

Incoming queries and scraped pages are cleaned once at the boundary
(BOM markers removed, whitespace collapsed). Internal layers assume clean
text.
"""

import re
import unicodedata

_WHITESPACE = re.compile(r"[ \t\f\v]+")
_BLANK_LINES = re.compile(r"\n{3,}")


def normalize_text(text: str | None) -> str:
    """Strip BOMs, apply NFKC and collapse runs of whitespace.

    Newlines are kept (``\\r\\n`` becomes ``\\n``) but more than one empty line
    in a row is squeezed to a single empty line.
    """
    if not text:
        return ""

    cleaned = text.replace("\ufeff", "").replace("\ufffd", "")
    cleaned = unicodedata.normalize("NFKC", cleaned)
    cleaned = cleaned.replace("\r\n", "\n").replace("\r", "\n")
    cleaned = "\n".join(_WHITESPACE.sub(" ", line).strip() for line in cleaned.split("\n"))
    cleaned = _BLANK_LINES.sub("\n\n", cleaned)
    return cleaned.strip()


def collapse_whitespace(text: str) -> str:
    """Collapse all whitespace (including newlines) into single spaces."""
    return re.sub(r"\s+", " ", text).strip()


def tokenize(text: str) -> list[str]:
    """Lowercase and split on whitespace."""
    return text.lower().split()


def truncate(text: str, max_chars: int) -> str:
    """Cut ``text`` to ``max_chars`` characters, marking the cut with an ellipsis."""
    if len(text) <= max_chars:
        return text
    return f"{text[:max_chars].rstrip()}..."
