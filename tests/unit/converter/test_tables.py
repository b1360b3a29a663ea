"""Tests for converter/tables.py: cell rendering and table assembly."""

from slackify.converter.tables import build_cell, build_table


def _text(raw):
    return {"type": "text", "raw": raw}


def _cell(*children):
    return {"type": "table_cell", "attrs": {"align": None, "head": False},
            "children": list(children)}


def _table(head, *rows):
    return {
        "type": "table",
        "children": [
            {"type": "table_head", "children": head},
            {"type": "table_body", "children": [
                {"type": "table_row", "children": row} for row in rows
            ]},
        ],
    }


def _section_elements(cell):
    assert cell["type"] == "rich_text"
    return cell["elements"][0]["elements"]


# =========================================================================
# build_cell
# =========================================================================

class TestBuildCellCollapse:

    def test_empty_cell_is_empty_raw_text(self):
        assert build_cell([]) == {"type": "raw_text", "text": ""}

    def test_single_plain_run_is_raw_text(self):
        assert build_cell([_text("Cell 1")]) == {"type": "raw_text", "text": "Cell 1"}

    def test_two_plain_runs_are_rich_text(self):
        cell = build_cell([_text("a"), _text("b")])
        assert _section_elements(cell) == [
            {"type": "text", "text": "a"},
            {"type": "text", "text": "b"},
        ]

    def test_only_ignored_children_is_empty_raw_text(self):
        cell = build_cell([{"type": "linebreak"}, {"type": "html_inline", "raw": "<br>"}])
        assert cell == {"type": "raw_text", "text": ""}


class TestBuildCellStyles:

    def test_bold(self):
        cell = build_cell([{"type": "strong", "children": [_text("Bold")]}])
        assert _section_elements(cell) == [
            {"type": "text", "text": "Bold", "style": {"bold": True}},
        ]

    def test_italic(self):
        cell = build_cell([{"type": "emphasis", "children": [_text("It")]}])
        assert _section_elements(cell)[0]["style"] == {"italic": True}

    def test_strike(self):
        cell = build_cell([{"type": "strikethrough", "children": [_text("S")]}])
        assert _section_elements(cell)[0]["style"] == {"strike": True}

    def test_code_verbatim(self):
        cell = build_cell([{"type": "codespan", "raw": "a*b"}])
        assert _section_elements(cell) == [
            {"type": "text", "text": "a*b", "style": {"code": True}},
        ]

    def test_code_uses_escaped_payload(self):
        cell = build_cell([{"type": "codespan", "raw": "a<b", "text": "a&lt;b"}])
        assert _section_elements(cell)[0]["text"] == "a&lt;b"

    def test_styled_run_uses_literal_text(self):
        token = {"type": "strong", "children": [
            {"type": "text", "raw": "a & b", "text": "a &amp; b"},
        ]}
        assert _section_elements(build_cell([token]))[0]["text"] == "a & b"

    def test_nested_styles_collapse_to_outer(self):
        token = {"type": "strong", "children": [
            _text("bold "),
            {"type": "emphasis", "children": [_text("and italic")]},
        ]}
        assert _section_elements(build_cell([token])) == [
            {"type": "text", "text": "bold and italic", "style": {"bold": True}},
        ]

    def test_mixed_runs_keep_order(self):
        cell = build_cell([
            {"type": "strong", "children": [_text("bold")]},
            _text(" and "),
            {"type": "emphasis", "children": [_text("italic")]},
        ])
        assert [run["text"] for run in _section_elements(cell)] == [
            "bold", " and ", "italic",
        ]


class TestBuildCellLinksAndImages:

    def test_link(self):
        token = {"type": "link", "attrs": {"url": "https://example.com"},
                 "children": [_text("Link")]}
        assert _section_elements(build_cell([token])) == [
            {"type": "link", "url": "https://example.com", "text": "Link"},
        ]

    def test_link_text_defaults_to_url(self):
        token = {"type": "link", "attrs": {"url": "https://example.com"}, "children": []}
        run = _section_elements(build_cell([token]))[0]
        assert run["text"] == "https://example.com"

    def test_image_title_is_plain_raw_text(self):
        token = {"type": "image", "attrs": {"url": "u", "title": "T"}, "children": []}
        assert build_cell([token]) == {"type": "raw_text", "text": "T"}

    def test_image_without_title_uses_url(self):
        token = {"type": "image", "attrs": {"url": "u"}, "children": []}
        assert build_cell([token]) == {"type": "raw_text", "text": "u"}


# =========================================================================
# build_table
# =========================================================================

class TestBuildTable:

    def test_header_then_body_rows(self):
        token = _table(
            [_cell(_text("H1")), _cell(_text("H2"))],
            [_cell(_text("a")), _cell(_text("b"))],
            [_cell(_text("c")), _cell(_text("d"))],
        )
        block = build_table(token)
        assert block["type"] == "table"
        assert [[c["text"] for c in row] for row in block["rows"]] == [
            ["H1", "H2"], ["a", "b"], ["c", "d"],
        ]

    def test_row_cap(self):
        rows = [[_cell(_text(str(i)))] for i in range(105)]
        block = build_table(_table([_cell(_text("Header"))], *rows))
        assert len(block["rows"]) == 100
        assert block["rows"][0][0]["text"] == "Header"
        assert block["rows"][-1][0]["text"] == "98"

    def test_column_cap(self):
        head = [_cell(_text(f"H{i}")) for i in range(25)]
        row = [_cell(_text(f"C{i}")) for i in range(25)]
        block = build_table(_table(head, row))
        assert all(len(r) == 20 for r in block["rows"])
        assert block["rows"][0][-1]["text"] == "H19"

    def test_non_cell_children_skipped(self):
        token = _table([{"type": "other"}, _cell(_text("x"))])
        assert build_table(token)["rows"] == [[{"type": "raw_text", "text": "x"}]]

    def test_empty_table(self):
        assert build_table({"type": "table"}) == {"type": "table", "rows": []}
