"""slackify: Markdown to Slack Block Kit blocks.

Public re-exports
-----------------

* **Entry point:** :func:`markdown_to_blocks`
* **Converter:** :class:`MarkdownToSlackConverter`
* **Configuration:** :class:`SlackifyConfig`
* **Errors:** :class:`SlackifyError`, :class:`SlackifyConversionError`, :class:`ErrorCode`
* **Models:** :class:`ConversionResult`, :class:`ConversionWarning`,
  :class:`TokenType`, :class:`BlockType`

Usage::

    from slackify import markdown_to_blocks

    blocks = markdown_to_blocks("# Release notes\\n\\n- **fast** parser")
    client.chat_postMessage(channel="#general", blocks=blocks)
"""

from __future__ import annotations

# ── Configuration ───────────────────────────────────────────────────────
from slackify.config import DEFAULT_BULLET, SlackifyConfig

# ── Converter ───────────────────────────────────────────────────────────
from slackify.converter.md_to_slack import MarkdownToSlackConverter

# ── Errors ──────────────────────────────────────────────────────────────
from slackify.errors import ErrorCode, SlackifyConversionError, SlackifyError

# ── Models ──────────────────────────────────────────────────────────────
from slackify.models import BlockType, ConversionResult, ConversionWarning, TokenType


def markdown_to_blocks(
    body: str,
    config: SlackifyConfig | None = None,
) -> list[dict]:
    """Convert Markdown (including GitHub-flavoured Markdown) to Slack blocks.

    - All heading levels become the single ``header`` block.
    - Numbered, bulleted and task lists become one ``section`` each.
    - Bold, italic, strikethrough, inline code and links become ``mrkdwn``.
    - Images become ``image`` blocks; thematic breaks become dividers.
    - Tables become ``table`` blocks.
    - Block quotes keep only their paragraphs.

    Parameters
    ----------
    body:
        Markdown source text.
    config:
        Conversion options.

    Returns
    -------
    list[dict]
        Block Kit blocks, in document order.

    Raises
    ------
    SlackifyConversionError
        If *body* is not a string.
    """
    if not isinstance(body, str):
        raise SlackifyConversionError(
            message=f"Markdown body must be str, got {type(body).__name__}.",
            context={"input_type": type(body).__name__},
            code=ErrorCode.INVALID_INPUT,
        )
    return MarkdownToSlackConverter(config).convert(body).blocks


# ── Public surface ──────────────────────────────────────────────────────

__all__ = [
    # Entry point
    "markdown_to_blocks",
    "MarkdownToSlackConverter",
    # Configuration
    "SlackifyConfig",
    "DEFAULT_BULLET",
    # Errors
    "SlackifyError",
    "SlackifyConversionError",
    "ErrorCode",
    # Models
    "ConversionResult",
    "ConversionWarning",
    "TokenType",
    "BlockType",
]
