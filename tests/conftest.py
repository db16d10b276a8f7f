"""Pytest configuration and shared token-stream builders.

Streams are assembled by hand so locator tests do not depend on the
tree-sitter grammar being installed.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence

import pytest

from src.apexdoc.tokens import ListTokenStream, Token
from src.constants import DEFAULT_CHANNEL, HIDDEN_CHANNEL


def build_stream(pieces: Sequence[tuple[str, bool]]) -> ListTokenStream:
    """Build a stream from ``(text, hidden)`` pairs laid out back to back."""
    tokens: list[Token] = []
    line, column, offset = 1, 0, 0
    for idx, (text, hidden) in enumerate(pieces):
        channel = HIDDEN_CHANNEL if hidden else DEFAULT_CHANNEL
        tokens.append(Token(text, idx, line, column, channel, start_byte=offset))
        offset += len(text.encode("utf-8"))
        if "\n" in text:
            line += text.count("\n")
            column = len(text.rsplit("\n", 1)[-1])
        else:
            column += len(text)
    return ListTokenStream(tokens)


@pytest.fixture
def make_stream() -> Callable[[Sequence[tuple[str, bool]]], ListTokenStream]:
    return build_stream


def pytest_collection_modifyitems(config, items):  # type: ignore[no-untyped-def]
    for item in items:
        if "tests/apexdoc" in item.path.as_posix():
            item.add_marker(pytest.mark.unit)
