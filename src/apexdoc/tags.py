#!/usr/bin/env python3
"""
Turn decoded tags into the structured fields of a DocComment.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from src.apexdoc.body import parse_body
from src.apexdoc.tokens import Token
from src.apexdoc.types import DocComment, Location
from src.constants import AUTHOR_TAG, DEPRECATED_TAG, PARAM_TAG, RETURN_TAG


def split_param(value: str) -> tuple[str, str]:
    """Split ``"name description..."`` on the first run of whitespace."""
    parts = value.split(None, 1)
    if not parts:
        return "", ""
    if len(parts) == 1:
        return parts[0], ""
    return parts[0], parts[1]


def _params_from(values: Iterable[str]) -> dict[str, str]:
    params: dict[str, str] = {}
    for value in values:
        name, desc = split_param(value)
        if name:
            params[name] = desc
    return params


def extract_params(tags: Mapping[str, str]) -> dict[str, str]:
    """Params from a single-valued tag mapping: at most one entry.

    Repeated ``@param`` lines have already collapsed to the last one.
    """
    if PARAM_TAG not in tags:
        return {}
    return _params_from([tags[PARAM_TAG]])


def extract_all_params(tag_values: Mapping[str, Iterable[str]]) -> dict[str, str]:
    """Params from every ``@param`` occurrence, in source order."""
    return _params_from(tag_values.get(PARAM_TAG, ()))


def extract_tag(tags: Mapping[str, str], tag_name: str) -> str | None:
    value = tags.get(tag_name)
    if value is None or not value.strip():
        return None
    return value


def build_doc_comment(token: Token, *, multi_param: bool = False) -> DocComment:
    """Decode ``token`` into a DocComment.

    Raises whatever decoding raises; callers at the lookup boundary turn that
    into an absent result.
    """
    description, tags, tag_values = parse_body(token.text)
    params = extract_all_params(tag_values) if multi_param else extract_params(tags)
    return DocComment(
        location=Location.from_token(token),
        description=description,
        params=params,
        return_description=extract_tag(tags, RETURN_TAG),
        author=extract_tag(tags, AUTHOR_TAG),
        deprecated=extract_tag(tags, DEPRECATED_TAG),
        tags=tags,
        tag_values=tag_values,
    )
