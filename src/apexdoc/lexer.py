#!/usr/bin/env python3
"""
Tree-sitter backed tokenizer producing a hidden-channel token stream.

Apex shares Java's lexical surface (comments, literals, braces), so the Java
grammar is used to split the source. Parse-tree leaves become default-channel
tokens, comments and whitespace become hidden tokens, and the byte gaps the
tree does not cover are kept so token text concatenates back to the source.
"""

from __future__ import annotations

import logging
import re
from bisect import bisect_right
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, NamedTuple

import tree_sitter_java as ts_java
from tree_sitter import Language, Parser

from src.apexdoc.tokens import ListTokenStream, Token
from src.constants import DEFAULT_CHANNEL, HIDDEN_CHANNEL, LINE_DOC_PREFIX

logger = logging.getLogger(__name__)

_COMMENT_TYPES = {"line_comment", "block_comment", "comment"}
_ATOMIC_TYPES = _COMMENT_TYPES | {"string_literal", "character_literal", "text_block"}

DECLARATION_TYPES = {
    "class_declaration": "class",
    "interface_declaration": "interface",
    "enum_declaration": "enum",
    "constructor_declaration": "constructor",
    "method_declaration": "method",
    "field_declaration": "field",
    "constant_declaration": "field",
}

_WORD = re.compile(r"\w+")
_STATEMENT_BREAKS = {"{", "}", ";"}

# Declarations the grammar builds out of Apex modifiers it cannot place
_RECOVERY_DECLARATION_TYPES = {"field_declaration", "local_variable_declaration", "constant_declaration"}


@dataclass(frozen=True)
class DeclarationAnchor:
    kind: str
    name: str | None
    anchor_index: int
    line: int


class _Piece(NamedTuple):
    start: int
    end: int
    kind: str
    channel: int


class _LineIndex:
    """Map byte offsets to (1-based line, 0-based character column)."""

    def __init__(self, source_bytes: bytes) -> None:
        self._bytes = source_bytes
        self._starts = [0] + [m.end() for m in re.finditer(b"\n", source_bytes)]

    def point(self, offset: int) -> tuple[int, int]:
        row = bisect_right(self._starts, offset) - 1
        prefix = self._bytes[self._starts[row] : offset]
        return row + 1, len(prefix.decode("utf-8", errors="ignore"))


@lru_cache(maxsize=1)
def _java_language() -> Language:
    return Language(ts_java.language())


def _parse(source_bytes: bytes) -> Any:
    parser = Parser(_java_language())
    return parser.parse(source_bytes)


def _iter_leaves(root: Any):
    stack = [root]
    while stack:
        node = stack.pop()
        if node.end_byte <= node.start_byte:
            continue
        if node.child_count == 0 or node.type in _ATOMIC_TYPES:
            yield node
            continue
        stack.extend(reversed(node.children))


def _comment_kind(text: bytes) -> str:
    return "block_comment" if text.startswith(b"/*") else "line_comment"


def _gap_piece(source_bytes: bytes, start: int, end: int) -> _Piece:
    if source_bytes[start:end].strip():
        return _Piece(start, end, "unknown", DEFAULT_CHANNEL)
    return _Piece(start, end, "whitespace", HIDDEN_CHANNEL)


def _collect_pieces(source_bytes: bytes, root: Any) -> list[_Piece]:
    pieces: list[_Piece] = []
    cursor = 0
    for leaf in _iter_leaves(root):
        if leaf.start_byte < cursor:
            continue
        if leaf.start_byte > cursor:
            pieces.append(_gap_piece(source_bytes, cursor, leaf.start_byte))
        if leaf.type in _COMMENT_TYPES:
            text = source_bytes[leaf.start_byte : leaf.end_byte]
            pieces.append(_Piece(leaf.start_byte, leaf.end_byte, _comment_kind(text), HIDDEN_CHANNEL))
        else:
            pieces.append(_Piece(leaf.start_byte, leaf.end_byte, leaf.type, DEFAULT_CHANNEL))
        cursor = leaf.end_byte
    if cursor < len(source_bytes):
        pieces.append(_gap_piece(source_bytes, cursor, len(source_bytes)))
    return pieces


def _is_triple_slash(source_bytes: bytes, piece: _Piece) -> bool:
    return piece.kind == "line_comment" and source_bytes[piece.start : piece.end].startswith(
        LINE_DOC_PREFIX.encode()
    )


def _merge_triple_slash_runs(source_bytes: bytes, pieces: list[_Piece]) -> list[_Piece]:
    """Fold ``///`` lines on consecutive lines into a single hidden token."""
    merged: list[_Piece] = []
    i = 0
    while i < len(pieces):
        piece = pieces[i]
        if _is_triple_slash(source_bytes, piece):
            j = i
            while (
                j + 2 < len(pieces)
                and pieces[j + 1].kind == "whitespace"
                and source_bytes[pieces[j + 1].start : pieces[j + 1].end].count(b"\n") == 1
                and _is_triple_slash(source_bytes, pieces[j + 2])
            ):
                j += 2
            if j > i:
                merged.append(_Piece(piece.start, pieces[j].end, "doc_line_comment", HIDDEN_CHANNEL))
                i = j + 1
                continue
        merged.append(piece)
        i += 1
    return merged


def _build_stream(source_bytes: bytes, root: Any) -> ListTokenStream:
    pieces = _merge_triple_slash_runs(source_bytes, _collect_pieces(source_bytes, root))
    lines = _LineIndex(source_bytes)
    tokens: list[Token] = []
    for idx, piece in enumerate(pieces):
        line, column = lines.point(piece.start)
        text = source_bytes[piece.start : piece.end].decode("utf-8", errors="ignore")
        tokens.append(Token(text, idx, line, column, piece.channel, piece.kind, piece.start))
    return ListTokenStream(tokens)


def tokenize(source: str) -> ListTokenStream:
    """Tokenize Apex source into a hidden-channel aware token stream."""
    source_bytes = source.encode("utf-8", errors="ignore")
    stream = _build_stream(source_bytes, _parse(source_bytes).root_node)
    logger.debug("Tokenized %d bytes into %d tokens", len(source_bytes), len(stream))
    return stream


def _node_text(source_bytes: bytes, node: Any) -> str:
    return source_bytes[node.start_byte : node.end_byte].decode("utf-8", errors="ignore")


def _declaration_name(source_bytes: bytes, stream: ListTokenStream, node: Any) -> str | None:
    params = node.child_by_field_name("parameters")
    if params is not None:
        # The word before the parameter list, wherever recovery put it
        idx = stream.index_at_byte(params.start_byte)
        prev = stream.previous_significant(idx) if idx is not None else None
        if prev is not None and prev.start_byte >= node.start_byte and _WORD.fullmatch(prev.text):
            return prev.text
    name_node = node.child_by_field_name("name")
    if name_node is None:
        declarator = node.child_by_field_name("declarator")
        if declarator is not None:
            name_node = declarator.child_by_field_name("name")
    if name_node is None:
        return None
    return _node_text(source_bytes, name_node)


def _adjacent(source_bytes: bytes, left: Any, right: Any) -> bool:
    return not source_bytes[left.end_byte : right.start_byte].strip()


def _is_modifier_noise(source_bytes: bytes, node: Any) -> bool:
    """ERROR or MISSING node holding nothing but stray modifier words."""
    if node.is_missing:
        return True
    if node.type != "ERROR":
        return False
    return not any(mark in _node_text(source_bytes, node) for mark in ("{", "}", ";"))


def _is_unterminated(source_bytes: bytes, node: Any) -> bool:
    # A MISSING ";" has no width, so the recovered text ends on the last modifier
    return node.has_error and not _node_text(source_bytes, node).rstrip().endswith(";")


def _is_recovered_modifiers(source_bytes: bytes, node: Any) -> bool:
    if node.type in _RECOVERY_DECLARATION_TYPES:
        return _is_unterminated(source_bytes, node)
    return _is_modifier_noise(source_bytes, node)


def _is_modifier_spill(source_bytes: bytes, node: Any) -> bool:
    """A field or local declaration invented from modifiers of the next declaration.

    ``public with sharing class Svc`` parses as ``public with sharing`` closed by a
    MISSING ``;`` followed by ``class Svc``.
    """
    if node.type not in _RECOVERY_DECLARATION_TYPES or not _is_unterminated(source_bytes, node):
        return False
    prev, nxt = node, node.next_sibling
    while nxt is not None and _is_modifier_noise(source_bytes, nxt) and _adjacent(source_bytes, prev, nxt):
        prev, nxt = nxt, nxt.next_sibling
    return nxt is not None and nxt.type in DECLARATION_TYPES and _adjacent(source_bytes, prev, nxt)


def _recovery_floor(source_bytes: bytes, node: Any) -> int | None:
    """Start byte of the recovered modifier run directly before ``node``, if any."""
    floor = None
    current, prev = node, node.prev_sibling
    while (
        prev is not None
        and _adjacent(source_bytes, prev, current)
        and _is_recovered_modifiers(source_bytes, prev)
    ):
        floor = prev.start_byte
        current, prev = prev, prev.prev_sibling
    parent = node.parent
    if parent is not None and parent.type == "ERROR":
        floor = parent.start_byte if floor is None else min(floor, parent.start_byte)
    return floor


def _widen_anchor(stream: ListTokenStream, anchor_index: int, floor_byte: int) -> int:
    # Walk back over recovered modifier tokens; a comment, a statement break or
    # the start of the recovered region ends the declaration header.
    idx = anchor_index
    while idx > 0:
        j = idx - 1
        while j >= 0 and stream[j].is_hidden and not stream[j].text.strip():
            j -= 1
        if j < 0:
            break
        tok = stream[j]
        if tok.is_hidden or tok.start_byte < floor_byte or tok.text in _STATEMENT_BREAKS:
            break
        idx = j
    return idx


def scan_source(source: str) -> tuple[ListTokenStream, list[DeclarationAnchor]]:
    """Tokenize ``source`` and locate the anchor token of every declaration."""
    source_bytes = source.encode("utf-8", errors="ignore")
    root = _parse(source_bytes).root_node
    stream = _build_stream(source_bytes, root)

    anchors: list[DeclarationAnchor] = []
    stack = [root]
    while stack:
        node = stack.pop()
        stack.extend(reversed(node.children))
        kind = DECLARATION_TYPES.get(node.type)
        if kind is None:
            continue
        if _is_modifier_spill(source_bytes, node):
            logger.debug("Skipping recovered modifiers at line %d", node.start_point[0] + 1)
            continue
        anchor_index = stream.index_at_byte(node.start_byte)
        if anchor_index is None:
            continue
        floor = _recovery_floor(source_bytes, node)
        if floor is not None:
            anchor_index = _widen_anchor(stream, anchor_index, floor)
        anchors.append(
            DeclarationAnchor(
                kind=kind,
                name=_declaration_name(source_bytes, stream, node),
                anchor_index=anchor_index,
                line=stream[anchor_index].line,
            )
        )

    anchors.sort(key=lambda a: a.anchor_index)
    logger.debug("Found %d declarations", len(anchors))
    return stream, anchors


__all__ = [
    "DECLARATION_TYPES",
    "DeclarationAnchor",
    "scan_source",
    "tokenize",
]
