#!/usr/bin/env python3

from __future__ import annotations

import textwrap

import pytest

pytest.importorskip("tree_sitter")
pytest.importorskip("tree_sitter_java")

from src.apexdoc.lexer import _widen_anchor, scan_source, tokenize  # noqa: E402
from src.apexdoc.locator import (  # noqa: E402
    locate_address_in_source,
    locate_comment,
    locate_comment_in_source,
    parse_at,
)

pytestmark = pytest.mark.treesitter

SOURCE = textwrap.dedent(
    """\
    /*
     * Copyright header
     */
    public class Calculator {
        /** Running total. */
        private Integer total;

        /**
         * Adds two numbers.
         * @param a first operand
         * @param b second operand
         * @return the sum
         */
        public Integer add(Integer a, Integer b) {
            return a + b;
        }

        /// Resets the total.
        /// @author Jane Doe
        public void reset() {
            total = 0;
        }

        // not documentation
        public void undocumented() {}
    }
    """
)


def _anchor(anchors, name):
    return next(a for a in anchors if a.name == name)


def test_tokens_reassemble_the_source():
    stream = tokenize(SOURCE)
    assert "".join(t.text for t in stream) == SOURCE
    assert [t.token_index for t in stream] == list(range(len(stream)))


def test_comments_and_whitespace_are_hidden():
    stream = tokenize(SOURCE)
    hidden_kinds = {t.kind for t in stream if t.is_hidden}
    assert hidden_kinds <= {"whitespace", "block_comment", "line_comment", "doc_line_comment"}
    assert all(not t.is_hidden for t in stream if t.text in {"public", "class", "{", "}"})


def test_triple_slash_lines_merge_into_one_token():
    stream = tokenize(SOURCE)
    merged = [t for t in stream if t.kind == "doc_line_comment"]
    assert len(merged) == 1
    assert merged[0].text == "/// Resets the total.\n    /// @author Jane Doe"
    assert (merged[0].line, merged[0].column) == (18, 4)


def test_columns_count_characters_not_bytes():
    stream = tokenize("/** é */ class A {}")
    cls = next(t for t in stream if t.text == "class")
    assert (cls.line, cls.column) == (1, 9)


def test_declarations_are_found_with_names_and_kinds():
    _, anchors = scan_source(SOURCE)
    found = {(a.kind, a.name) for a in anchors}
    assert ("class", "Calculator") in found
    assert ("field", "total") in found
    assert ("method", "add") in found
    assert ("method", "reset") in found
    assert ("method", "undocumented") in found
    assert _anchor(anchors, "add").line == 14


def test_end_to_end_comment_association():
    stream, anchors = scan_source(SOURCE)

    # License header is an ordinary block comment
    assert locate_comment(stream, _anchor(anchors, "Calculator").anchor_index) is None

    field = locate_comment(stream, _anchor(anchors, "total").anchor_index)
    assert field is not None and field.description == "Running total."

    add = locate_comment(stream, _anchor(anchors, "add").anchor_index)
    assert add is not None
    assert add.description == "Adds two numbers."
    assert add.params == {"b": "second operand"}
    assert add.return_description == "the sum"
    assert add.location.start_line == 8
    assert add.location.end_line == 13

    reset = locate_comment(stream, _anchor(anchors, "reset").anchor_index)
    assert reset is not None
    assert reset.description == "Resets the total."
    assert reset.author == "Jane Doe"

    assert locate_comment(stream, _anchor(anchors, "undocumented").anchor_index) is None


def test_source_wrappers():
    _, anchors = scan_source(SOURCE)
    idx = _anchor(anchors, "add").anchor_index

    address = locate_address_in_source(SOURCE, idx)
    assert address is not None and address.start_line == 8

    doc = locate_comment_in_source(SOURCE, idx, multi_param=True)
    assert doc is not None
    assert doc.params == {"a": "first operand", "b": "second operand"}

    assert locate_comment_in_source(SOURCE, 10_000) is None


def test_parse_at_resolves_declaration_position():
    doc = parse_at(SOURCE, 14, 4)
    assert doc is not None and doc.description == "Adds two numbers."
    assert parse_at(SOURCE, 500, 0) is None


APEX_SERVICE = textwrap.dedent(
    """\
    /** Service docs. */
    public with sharing class Svc {
        /** Prop doc. */
        public String name { get; set; }
        /** Overridden. */
        public override void run() {}
        /** Global meth. */
        global static void g() {}
        public void plain() {}
    }
    """
)


def _described(stream, anchors):
    out = {}
    for a in anchors:
        doc = locate_comment(stream, a.anchor_index)
        out[(a.kind, a.name)] = doc.description if doc is not None else None
    return out


def test_with_sharing_class_header_keeps_its_doc():
    stream, anchors = scan_source(APEX_SERVICE)
    svc = _anchor(anchors, "Svc")
    assert svc.kind == "class"
    assert svc.line == 2
    assert stream[svc.anchor_index].text == "public"
    doc = locate_comment(stream, svc.anchor_index)
    assert doc is not None and doc.description == "Service docs."


def test_global_virtual_class_header_keeps_its_doc():
    stream, anchors = scan_source("/** G docs. */\nglobal virtual class G {\n}\n")
    (g,) = [a for a in anchors if a.kind == "class"]
    assert g.name == "G"
    assert stream[g.anchor_index].text == "global"
    doc = locate_comment(stream, g.anchor_index)
    assert doc is not None and doc.description == "G docs."


def test_apex_method_modifiers_do_not_create_declarations():
    stream, anchors = scan_source(APEX_SERVICE)
    names = [a.name for a in anchors]
    assert "static" not in names
    assert "void" not in names
    assert names.count("g") == 1

    described = _described(stream, anchors)
    assert described[("method", "run")] == "Overridden."
    assert described[("method", "g")] == "Global meth."
    assert described[("field", "name")] == "Prop doc."
    assert described[("method", "plain")] is None
    assert _anchor(anchors, "g").line == 8
    assert _anchor(anchors, "run").line == 6


def test_widen_anchor_pulls_in_recovered_modifiers(make_stream):
    stream = make_stream(
        [
            ("}", False),
            ("\n", True),
            ("global", False),
            (" ", True),
            ("with", False),
            (" ", True),
            ("sharing", False),
            (" ", True),
            ("class", False),
        ]
    )
    assert _widen_anchor(stream, 8, 0) == 2
    # "with" starts at byte 9; nothing before it is part of the recovered run
    assert _widen_anchor(stream, 8, 9) == 4


def test_widen_anchor_stops_at_a_comment(make_stream):
    stream = make_stream(
        [
            ("total", False),
            ("\n", True),
            ("/** Doc. */", True),
            ("\n", True),
            ("global", False),
            (" ", True),
            ("class", False),
        ]
    )
    assert _widen_anchor(stream, 6, 0) == 4
