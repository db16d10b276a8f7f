#!/usr/bin/env python3
"""
Locate the ApexDoc comment attached to a declaration.

Given the index of a declaration's first significant token, the hidden run in
front of it is gathered from both sides (left of the anchor, right of the
anchor's predecessor), filtered to doc comments, and the comment closest to
the anchor wins. License headers, TODOs and blank lines may sit in the same
run; only the nearest doc comment is considered attached.

Every public lookup returns ``None`` on failure: an undocumented declaration
and a stream or comment that could not be processed look the same to callers.
"""

from __future__ import annotations

import logging

from src.apexdoc.classifier import is_doc_comment
from src.apexdoc.tags import build_doc_comment
from src.apexdoc.tokens import Token, TokenStream
from src.apexdoc.types import DocComment, Location

logger = logging.getLogger(__name__)


def _candidate_tokens(stream: TokenStream, anchor_index: int) -> list[Token]:
    tokens = list(stream.hidden_tokens_to_left(anchor_index) or [])
    if anchor_index > 0:
        # Same hidden run seen from the other side; duplicates are harmless
        # because selection is by maximum index.
        tokens.extend(stream.hidden_tokens_to_right(anchor_index - 1) or [])
    return tokens


def find_doc_token(stream: TokenStream, anchor_index: int) -> Token | None:
    """Return the doc comment token nearest to ``anchor_index``, if any.

    Raises on stream errors; the ``locate_*`` functions are the safe boundary.
    """
    docs = [t for t in _candidate_tokens(stream, anchor_index) if is_doc_comment(t.text)]
    if not docs:
        return None
    return max(docs, key=lambda t: t.token_index)


def locate_address(stream: TokenStream, anchor_index: int) -> Location | None:
    """Source span of the doc comment attached to ``anchor_index``."""
    try:
        token = find_doc_token(stream, anchor_index)
        return Location.from_token(token) if token is not None else None
    except Exception as e:
        logger.debug("ApexDoc address lookup failed at token %s: %s", anchor_index, e)
        return None


def locate_comment(
    stream: TokenStream, anchor_index: int, *, multi_param: bool = False
) -> DocComment | None:
    """Decoded doc comment attached to ``anchor_index``.

    ``multi_param`` builds ``params`` from every ``@param`` line instead of
    only the last one.
    """
    try:
        token = find_doc_token(stream, anchor_index)
        if token is None:
            return None
        return build_doc_comment(token, multi_param=multi_param)
    except Exception as e:
        logger.debug("ApexDoc lookup failed at token %s: %s", anchor_index, e)
        return None


def locate_address_in_source(source: str, anchor_index: int) -> Location | None:
    try:
        from src.apexdoc.lexer import tokenize

        stream = tokenize(source)
    except Exception as e:
        logger.debug("Tokenization failed: %s", e)
        return None
    return locate_address(stream, anchor_index)


def locate_comment_in_source(
    source: str, anchor_index: int, *, multi_param: bool = False
) -> DocComment | None:
    try:
        from src.apexdoc.lexer import tokenize

        stream = tokenize(source)
    except Exception as e:
        logger.debug("Tokenization failed: %s", e)
        return None
    return locate_comment(stream, anchor_index, multi_param=multi_param)


def parse_at(
    source: str, line: int, column: int = 0, *, multi_param: bool = False
) -> DocComment | None:
    """Doc comment of the declaration starting at ``(line, column)`` in ``source``.

    The anchor is the first significant token at or after the position, so a
    stored declaration location can be resolved without a parse tree.
    """
    try:
        from src.apexdoc.lexer import tokenize

        stream = tokenize(source)
        anchor_index = stream.index_at(line, column)
    except Exception as e:
        logger.debug("Tokenization failed: %s", e)
        return None
    if anchor_index is None:
        return None
    return locate_comment(stream, anchor_index, multi_param=multi_param)


__all__ = [
    "find_doc_token",
    "locate_address",
    "locate_address_in_source",
    "locate_comment",
    "locate_comment_in_source",
    "parse_at",
]
