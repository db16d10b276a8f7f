#!/usr/bin/env python3
"""
Hidden-channel aware token stream.

Comment locators only need two questions answered about a stream: which
hidden tokens sit immediately before a token, and which sit immediately after
it. ``TokenStream`` captures that contract so any tokenizer can be plugged in;
``ListTokenStream`` is the in-memory implementation produced by
``src.apexdoc.lexer.tokenize``.
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from typing import Protocol

from src.constants import DEFAULT_CHANNEL


@dataclass(frozen=True)
class Token:
    text: str
    token_index: int
    line: int
    column: int
    channel: int = DEFAULT_CHANNEL
    kind: str = ""
    start_byte: int = -1

    @property
    def is_hidden(self) -> bool:
        return self.channel != DEFAULT_CHANNEL


class TokenStream(Protocol):
    def hidden_tokens_to_left(self, token_index: int) -> Sequence[Token] | None: ...

    def hidden_tokens_to_right(self, token_index: int) -> Sequence[Token] | None: ...


class ListTokenStream:
    """Token stream backed by a list of tokens ordered by ``token_index``."""

    def __init__(self, tokens: Sequence[Token]) -> None:
        self._tokens: list[Token] = list(tokens)
        for idx, tok in enumerate(self._tokens):
            if tok.token_index != idx:
                raise ValueError(f"Token at position {idx} has token_index {tok.token_index}")

    def __len__(self) -> int:
        return len(self._tokens)

    def __iter__(self) -> Iterator[Token]:
        return iter(self._tokens)

    def __getitem__(self, token_index: int) -> Token:
        self._check_index(token_index)
        return self._tokens[token_index]

    @property
    def tokens(self) -> list[Token]:
        return list(self._tokens)

    def _check_index(self, token_index: int) -> None:
        if token_index < 0 or token_index >= len(self._tokens):
            raise IndexError(f"{token_index} not in 0..{len(self._tokens) - 1}")

    def hidden_tokens_to_left(self, token_index: int) -> list[Token] | None:
        """Hidden tokens between the previous default-channel token and ``token_index``."""
        self._check_index(token_index)
        start = token_index
        while start > 0 and self._tokens[start - 1].is_hidden:
            start -= 1
        run = self._tokens[start:token_index]
        return run or None

    def hidden_tokens_to_right(self, token_index: int) -> list[Token] | None:
        """Hidden tokens between ``token_index`` and the next default-channel token."""
        self._check_index(token_index)
        end = token_index + 1
        while end < len(self._tokens) and self._tokens[end].is_hidden:
            end += 1
        run = self._tokens[token_index + 1 : end]
        return run or None

    def index_at(self, line: int, column: int) -> int | None:
        """Index of the first default-channel token starting at or after ``(line, column)``."""
        for tok in self._tokens:
            if tok.is_hidden:
                continue
            if (tok.line, tok.column) >= (line, column):
                return tok.token_index
        return None

    def index_at_byte(self, start_byte: int) -> int | None:
        """Index of the first default-channel token starting at or after ``start_byte``."""
        for tok in self._tokens:
            if not tok.is_hidden and tok.start_byte >= start_byte:
                return tok.token_index
        return None

    def previous_significant(self, token_index: int) -> Token | None:
        self._check_index(token_index)
        for idx in range(token_index - 1, -1, -1):
            if not self._tokens[idx].is_hidden:
                return self._tokens[idx]
        return None

