"""Normalize decoded document text before extraction."""

from __future__ import annotations

import re

_EXCESS_NEWLINES = re.compile(r"\n{3,}")
# Printable ASCII plus tab and newline survive.
_NON_PRINTABLE = re.compile(r"[^\x20-\x7E\t\n]")
_WHITESPACE_RUN = re.compile(r"\s+")


def normalize_text(text: str | None) -> str:
    """Unify line endings, drop non-printable characters, collapse whitespace.

    Total and idempotent: any input (including None) yields a string, and
    normalizing an already-normalized string returns it unchanged.
    """
    if not text:
        return ""

    text = text.replace("\r\n", "\n").replace("\r", "\n")
    text = _EXCESS_NEWLINES.sub("\n\n", text)
    text = _NON_PRINTABLE.sub("", text)
    text = _WHITESPACE_RUN.sub(" ", text)
    return text.strip()
