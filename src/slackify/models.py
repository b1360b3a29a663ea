"""Public data models for slackify.

Token and block discriminators are :class:`str` enums so that they compare
equal to the plain ``"type"`` strings carried by token and block dicts.
Result types are plain dataclasses.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class TokenType(str, Enum):
    """Canonical token kinds produced by :class:`ASTNormalizer`."""

    # Block tokens
    HEADING = "heading"
    PARAGRAPH = "paragraph"
    BLOCK_QUOTE = "block_quote"
    LIST = "list"
    LIST_ITEM = "list_item"
    TASK_LIST_ITEM = "task_list_item"
    BLOCK_CODE = "block_code"
    TABLE = "table"
    TABLE_HEAD = "table_head"
    TABLE_BODY = "table_body"
    TABLE_ROW = "table_row"
    TABLE_CELL = "table_cell"
    THEMATIC_BREAK = "thematic_break"
    HTML_BLOCK = "html_block"

    # Inline tokens
    TEXT = "text"
    STRONG = "strong"
    EMPHASIS = "emphasis"
    STRIKETHROUGH = "strikethrough"
    CODESPAN = "codespan"
    LINK = "link"
    IMAGE = "image"
    LINEBREAK = "linebreak"
    HTML_INLINE = "html_inline"


class BlockType(str, Enum):
    """Block kinds emitted by the converter."""

    SECTION = "section"
    HEADER = "header"
    IMAGE = "image"
    DIVIDER = "divider"
    TABLE = "table"


# ---------------------------------------------------------------------------
# Conversion warnings
# ---------------------------------------------------------------------------

@dataclass
class ConversionWarning:
    """A non-fatal issue encountered while converting Markdown.

    Attributes
    ----------
    code:
        A machine-readable warning code (e.g. ``"UNKNOWN_TOKEN"``).
    message:
        A human-readable description of the issue.
    context:
        Arbitrary structured data for diagnostics.
    """

    code: str
    message: str
    context: dict = field(default_factory=dict)


@dataclass
class ConversionResult:
    """Result of converting one Markdown document.

    Attributes
    ----------
    blocks:
        Block dicts ready to be sent as the ``blocks`` field of a message.
    warnings:
        Tokens that were skipped or partially dropped.
    """

    blocks: list[dict]
    warnings: list[ConversionWarning] = field(default_factory=list)
