"""Decide whether a hidden token is an ApexDoc comment."""

from __future__ import annotations

from src.constants import BLOCK_DOC_OPEN, LINE_DOC_PREFIX, RESERVED_DOC_MARKER


def is_reserved_format(text: str) -> bool:
    """Match the placeholder marker of the not-yet-published ApexDoc syntax.

    This is a plain substring test on purpose: until the format is finalized
    any comment mentioning the marker is accepted. Tighten it here only; the
    locator and decoder never look at the marker themselves.
    """
    return RESERVED_DOC_MARKER in text


def is_doc_comment(text: str) -> bool:
    stripped = text.strip()
    return (
        stripped.startswith(BLOCK_DOC_OPEN)
        or stripped.startswith(LINE_DOC_PREFIX)
        or is_reserved_format(stripped)
    )
