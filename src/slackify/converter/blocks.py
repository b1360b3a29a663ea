"""Block constructors for the Slack Block Kit layout schema.

Every constructor returns a plain dict in the shape the ``blocks`` field of
a Slack message expects, and enforces that block kind's documented size
limits by slicing.  No other module truncates; a block built here is valid
by construction.

Section::

    {"type": "section", "text": {"type": "mrkdwn", "text": "..."}}

Header::

    {"type": "header", "text": {"type": "plain_text", "text": "..."}}

Image::

    {"type": "image", "image_url": "...", "alt_text": "...",
     "title": {"type": "plain_text", "text": "..."}}

Table::

    {"type": "table", "rows": [[<cell>, ...], ...]}

where each cell is either ``{"type": "raw_text", "text": "..."}`` or a
``rich_text`` element wrapping one ``rich_text_section``.
"""

from __future__ import annotations

from typing import Any

from slackify.models import BlockType

# ---------------------------------------------------------------------------
# Size limits
# ---------------------------------------------------------------------------

MAX_TEXT_LENGTH = 3000
"""Maximum characters in a section block's text."""

MAX_HEADER_LENGTH = 150
"""Maximum characters in a header block's text."""

MAX_IMAGE_ALT_TEXT_LENGTH = 2000
"""Maximum characters in an image block's ``alt_text``."""

MAX_IMAGE_TITLE_LENGTH = 2000
"""Maximum characters in an image block's title."""

MAX_TABLE_ROWS = 100
"""Maximum rows in a table block, header row included."""

MAX_TABLE_COLUMNS = 20
"""Maximum cells kept in each table row."""


# ---------------------------------------------------------------------------
# Blocks
# ---------------------------------------------------------------------------

def section(text: str) -> dict[str, Any]:
    """Build a section block with ``mrkdwn`` text."""
    return {
        "type": BlockType.SECTION.value,
        "text": {
            "type": "mrkdwn",
            "text": text[:MAX_TEXT_LENGTH],
        },
    }


def header(text: str) -> dict[str, Any]:
    """Build a header block with ``plain_text`` text."""
    return {
        "type": BlockType.HEADER.value,
        "text": {
            "type": "plain_text",
            "text": text[:MAX_HEADER_LENGTH],
        },
    }


def image(url: str, alt_text: str, title: str | None = None) -> dict[str, Any]:
    """Build an image block.

    The URL is never truncated.  ``title`` is only included when it is a
    non-empty string.
    """
    block: dict[str, Any] = {
        "type": BlockType.IMAGE.value,
        "image_url": url,
        "alt_text": alt_text[:MAX_IMAGE_ALT_TEXT_LENGTH],
    }
    if title:
        block["title"] = {
            "type": "plain_text",
            "text": title[:MAX_IMAGE_TITLE_LENGTH],
        }
    return block


def divider() -> dict[str, Any]:
    """Build a divider block."""
    return {"type": BlockType.DIVIDER.value}


def table(rows: list[list[dict[str, Any]]]) -> dict[str, Any]:
    """Build a table block, keeping the leading rows and columns that fit."""
    return {
        "type": BlockType.TABLE.value,
        "rows": [row[:MAX_TABLE_COLUMNS] for row in rows[:MAX_TABLE_ROWS]],
    }


# ---------------------------------------------------------------------------
# Table cells and rich text runs
# ---------------------------------------------------------------------------

def raw_text(text: str) -> dict[str, Any]:
    """Build a plain table cell."""
    return {"type": "raw_text", "text": text}


def rich_text(elements: list[dict[str, Any]]) -> dict[str, Any]:
    """Build a styled table cell from a list of runs."""
    return {
        "type": "rich_text",
        "elements": [{"type": "rich_text_section", "elements": elements}],
    }


def text_run(text: str, style: dict[str, bool] | None = None) -> dict[str, Any]:
    """Build a text run, optionally styled (``bold``, ``italic``, ``strike``, ``code``)."""
    run: dict[str, Any] = {"type": "text", "text": text}
    if style:
        run["style"] = dict(style)
    return run


def link_run(url: str, text: str) -> dict[str, Any]:
    """Build a hyperlink run."""
    return {"type": "link", "url": url, "text": text}
