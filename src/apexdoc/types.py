"""
Result types for ApexDoc extraction.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, TypedDict

if TYPE_CHECKING:  # pragma: no cover
    from src.apexdoc.tokens import Token


def _frozen(mapping: Mapping[str, Any] | None) -> Mapping[str, Any]:
    return MappingProxyType(dict(mapping or {}))


@dataclass(frozen=True)
class Location:
    """Source span of a comment token: 1-based lines, 0-based columns."""

    start_line: int
    start_column: int
    end_line: int
    end_column: int

    @classmethod
    def from_token(cls, token: Token) -> Location:
        text = token.text
        end_line = token.line + text.count("\n")
        if "\n" in text:
            end_column = len(text.rsplit("\n", 1)[-1])
        else:
            end_column = token.column + len(text)
        return cls(token.line, token.column, end_line, end_column)

    def to_dict(self) -> dict[str, int]:
        return {
            "start_line": self.start_line,
            "start_column": self.start_column,
            "end_line": self.end_line,
            "end_column": self.end_column,
        }


@dataclass(frozen=True)
class DocComment:
    """A decoded ApexDoc comment.

    ``tags`` keeps one raw value per tag name (the last occurrence wins), while
    ``tag_values`` keeps every occurrence in source order. Mapping fields are
    read-only views; the record never refers back to the token stream.
    """

    location: Location
    description: str = ""
    params: Mapping[str, str] = field(default_factory=dict)
    return_description: str | None = None
    author: str | None = None
    deprecated: str | None = None
    tags: Mapping[str, str] = field(default_factory=dict)
    tag_values: Mapping[str, tuple[str, ...]] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "params", _frozen(self.params))
        object.__setattr__(self, "tags", _frozen(self.tags))
        object.__setattr__(
            self,
            "tag_values",
            _frozen({k: tuple(v) for k, v in dict(self.tag_values).items()}),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "location": self.location.to_dict(),
            "description": self.description,
            "params": dict(self.params),
            "return_description": self.return_description,
            "author": self.author,
            "deprecated": self.deprecated,
            "tags": dict(self.tags),
            "tag_values": {k: list(v) for k, v in self.tag_values.items()},
        }


class DeclarationDoc(TypedDict):
    file: str
    kind: str
    name: str | None
    line: int
    anchor_index: int
    location: dict[str, int]
    doc: dict[str, Any] | None


class FileDocs(TypedDict):
    path: str
    language: str
    total_lines: int
    declaration_count: int
    documented_count: int
    docs: list[DeclarationDoc]
