"""Table conversion: Markdown table AST to a Slack table block.

The normalized table token looks like::

    {
        "type": "table",
        "children": [
            {"type": "table_head",
             "children": [{"type": "table_cell", "children": [inline...]}, ...]},
            {"type": "table_body",
             "children": [
                 {"type": "table_row",
                  "children": [{"type": "table_cell", "children": [inline...]}, ...]},
                 ...
             ]},
        ],
    }

Cells become either a ``raw_text`` leaf or a ``rich_text`` element.  Table
cells do not nest styles: a ``**bold _and italic_**`` span becomes a single
bold run whose text is the flattened content.
"""

from __future__ import annotations

from typing import Any

from slackify.converter.blocks import link_run, raw_text, rich_text, table, text_run
from slackify.converter.mrkdwn import escaped_text, plain_text
from slackify.models import TokenType

_STYLE_FLAGS: dict[str, str] = {
    TokenType.STRONG.value: "bold",
    TokenType.EMPHASIS.value: "italic",
    TokenType.STRIKETHROUGH.value: "strike",
}


def build_table(token: dict[str, Any]) -> dict[str, Any]:
    """Build a Slack table block from a table AST token.

    The header row comes first, followed by the body rows.  Row and column
    caps are applied by :func:`~slackify.converter.blocks.table`.
    """
    rows: list[list[dict[str, Any]]] = []

    for child in token.get("children", []):
        child_type = child.get("type", "")

        if child_type == TokenType.TABLE_HEAD:
            rows.append(_build_row(child.get("children", [])))

        elif child_type == TokenType.TABLE_BODY:
            for row in child.get("children", []):
                if row.get("type") == TokenType.TABLE_ROW:
                    rows.append(_build_row(row.get("children", [])))

    return table(rows)


def _build_row(cells: list[dict[str, Any]]) -> list[dict[str, Any]]:
    return [
        build_cell(cell.get("children", []))
        for cell in cells
        if cell.get("type") == TokenType.TABLE_CELL
    ]


def build_cell(children: list[dict[str, Any]]) -> dict[str, Any]:
    """Convert a table cell's inline tokens to a ``raw_text`` or ``rich_text`` cell.

    Parameters
    ----------
    children:
        The inline tokens of one ``table_cell``.

    Returns
    -------
    dict
        ``raw_text`` when the cell is empty or holds a single unstyled text
        run, otherwise ``rich_text`` wrapping every run in order.
    """
    elements: list[dict[str, Any]] = []

    for child in children:
        child_type = child.get("type", "")

        if child_type == TokenType.TEXT:
            elements.append(text_run(escaped_text(child)))

        elif child_type in _STYLE_FLAGS:
            text = plain_text(child.get("children", []))
            elements.append(text_run(text, {_STYLE_FLAGS[child_type]: True}))

        elif child_type == TokenType.CODESPAN:
            elements.append(text_run(escaped_text(child), {"code": True}))

        elif child_type == TokenType.LINK:
            url = child.get("attrs", {}).get("url", "")
            text = plain_text(child.get("children", []))
            elements.append(link_run(url, text or url))

        elif child_type == TokenType.IMAGE:
            attrs = child.get("attrs", {})
            elements.append(text_run(attrs.get("title") or attrs.get("url", "")))

        # linebreak, html_inline and unknown kinds contribute nothing

    if not elements:
        return raw_text("")

    if len(elements) == 1 and elements[0]["type"] == "text" and "style" not in elements[0]:
        return raw_text(elements[0]["text"])

    return rich_text(elements)
