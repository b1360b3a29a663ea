"""Tests for converter/blocks.py: constructors and size caps."""

import pytest

from slackify.converter.blocks import (
    MAX_HEADER_LENGTH,
    MAX_IMAGE_ALT_TEXT_LENGTH,
    MAX_IMAGE_TITLE_LENGTH,
    MAX_TABLE_COLUMNS,
    MAX_TABLE_ROWS,
    MAX_TEXT_LENGTH,
    divider,
    header,
    image,
    link_run,
    raw_text,
    rich_text,
    section,
    table,
    text_run,
)


class TestLimits:
    """The caps are the documented Block Kit limits."""

    def test_limit_values(self):
        assert MAX_TEXT_LENGTH == 3000
        assert MAX_HEADER_LENGTH == 150
        assert MAX_IMAGE_ALT_TEXT_LENGTH == 2000
        assert MAX_IMAGE_TITLE_LENGTH == 2000
        assert MAX_TABLE_ROWS == 100
        assert MAX_TABLE_COLUMNS == 20


class TestSection:

    def test_shape(self):
        assert section("*hi*") == {
            "type": "section",
            "text": {"type": "mrkdwn", "text": "*hi*"},
        }

    def test_truncated_to_first_3000_chars(self):
        text = "a" * 2999 + "bc" + "d" * 1000
        block = section(text)
        assert len(block["text"]["text"]) == 3000
        assert block["text"]["text"] == text[:3000]

    def test_short_text_untouched(self):
        assert section("x" * 3000)["text"]["text"] == "x" * 3000


class TestHeader:

    def test_shape(self):
        assert header("Title") == {
            "type": "header",
            "text": {"type": "plain_text", "text": "Title"},
        }

    def test_truncated_to_150_chars(self):
        assert header("a" * 200)["text"]["text"] == "a" * 150


class TestImage:

    def test_without_title(self):
        assert image("https://example.com/a.png", "alt") == {
            "type": "image",
            "image_url": "https://example.com/a.png",
            "alt_text": "alt",
        }

    def test_with_title(self):
        block = image("u", "alt", "title")
        assert block["title"] == {"type": "plain_text", "text": "title"}

    @pytest.mark.parametrize("title", [None, ""])
    def test_empty_title_omitted(self, title):
        assert "title" not in image("u", "alt", title)

    def test_alt_and_title_capped_independently(self):
        block = image("u" * 5000, "a" * 3000, "t" * 2500)
        assert block["image_url"] == "u" * 5000
        assert block["alt_text"] == "a" * 2000
        assert block["title"]["text"] == "t" * 2000


class TestDivider:

    def test_shape(self):
        assert divider() == {"type": "divider"}


class TestTable:

    def test_shape(self):
        rows = [[raw_text("a"), raw_text("b")], [raw_text("c"), raw_text("d")]]
        assert table(rows) == {"type": "table", "rows": rows}

    def test_rows_capped_keeping_leading_rows(self):
        rows = [[raw_text(str(i))] for i in range(120)]
        block = table(rows)
        assert len(block["rows"]) == 100
        assert block["rows"][0] == [raw_text("0")]
        assert block["rows"][-1] == [raw_text("99")]

    def test_every_row_capped_to_20_columns(self):
        rows = [[raw_text(str(i)) for i in range(25)] for _ in range(3)]
        block = table(rows)
        for row in block["rows"]:
            assert len(row) == 20
            assert row[-1] == raw_text("19")

    def test_ragged_rows_capped_independently(self):
        block = table([[raw_text("x")] * 30, [raw_text("y")] * 5])
        assert [len(row) for row in block["rows"]] == [20, 5]


class TestCells:

    def test_raw_text(self):
        assert raw_text("x") == {"type": "raw_text", "text": "x"}

    def test_rich_text_wraps_one_section(self):
        runs = [text_run("a"), text_run("b", {"bold": True})]
        assert rich_text(runs) == {
            "type": "rich_text",
            "elements": [{"type": "rich_text_section", "elements": runs}],
        }

    def test_text_run_without_style(self):
        assert text_run("a") == {"type": "text", "text": "a"}

    def test_text_run_with_style(self):
        assert text_run("a", {"code": True}) == {
            "type": "text", "text": "a", "style": {"code": True},
        }

    def test_link_run(self):
        assert link_run("https://x.io", "X") == {
            "type": "link", "url": "https://x.io", "text": "X",
        }
