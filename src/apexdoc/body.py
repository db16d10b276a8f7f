#!/usr/bin/env python3
"""
Decode the body of an ApexDoc comment.

The raw token text is cleaned line by line (comment delimiters and the ``*``
continuation gutter are removed) and then split into a free-text description
and ``@tag value`` entries. Description lines are only collected until the
first tag line; anything after that which is not itself a tag is skipped.
"""

from __future__ import annotations

import re
from typing import NamedTuple

from src.constants import BLOCK_DOC_CLOSE, BLOCK_DOC_OPEN, CONTINUATION_MARKER, LINE_DOC_PREFIX

_TAG_LINE = re.compile(r"@(\w+)\s+(.*)")
# "/**/" shares its asterisk between the opener and the closer
_EMPTY_BLOCK = BLOCK_DOC_OPEN + "/"


class ParsedBody(NamedTuple):
    description: str
    tags: dict[str, str]
    tag_values: dict[str, tuple[str, ...]]


def _clean_line(line: str) -> str:
    s = line.strip()
    if s == _EMPTY_BLOCK:
        return ""
    if s.startswith(BLOCK_DOC_OPEN):
        s = s[len(BLOCK_DOC_OPEN) :]
    if s.endswith(BLOCK_DOC_CLOSE):
        s = s[: -len(BLOCK_DOC_CLOSE)]
    if s.startswith(CONTINUATION_MARKER):
        s = s[len(CONTINUATION_MARKER) :]
    if s.startswith(LINE_DOC_PREFIX):
        s = s[len(LINE_DOC_PREFIX) :]
    return s.strip()


def clean_comment_text(raw: str) -> str:
    """Strip comment markers from every line and trim the joined result."""
    return "\n".join(_clean_line(line) for line in raw.split("\n")).strip()


def parse_body(raw: str) -> ParsedBody:
    """Split a raw comment into ``(description, tags, tag_values)``.

    ``tags`` holds the last value seen for each tag name; ``tag_values`` holds
    all of them in order.
    """
    description_lines: list[str] = []
    seen: list[tuple[str, str]] = []
    in_description = True

    for line in clean_comment_text(raw).split("\n"):
        line = line.strip()
        match = _TAG_LINE.fullmatch(line)
        if match:
            in_description = False
            seen.append((match.group(1), match.group(2).strip()))
        elif in_description and line:
            description_lines.append(line)

    tag_values: dict[str, tuple[str, ...]] = {}
    for name, value in seen:
        tag_values[name] = tag_values.get(name, ()) + (value,)
    tags = {name: values[-1] for name, values in tag_values.items()}
    return ParsedBody(" ".join(description_lines).strip(), tags, tag_values)
