"""Convert normalized AST tokens to Slack block dicts.

Top-level tokens are converted independently and their blocks concatenated
in document order:

- heading (any level) -> header block with plain text
- paragraph -> section blocks with ``mrkdwn`` text, split around images
- block_code -> section block holding a fenced code block
- list / task list -> one section block, one line per item
- block_quote -> section blocks from its paragraphs, ``> `` prefixed
- table -> table block (see tables.py)
- thematic_break -> divider block
- html_block -> image blocks for embedded ``<img>`` tags

Anything else produces no blocks.  Conversion never raises for content it
does not understand; it records a :class:`ConversionWarning` instead.
"""

from __future__ import annotations

from collections.abc import Callable

from slackify.config import DEFAULT_BULLET, SlackifyConfig
from slackify.converter.blocks import divider, header, image, section
from slackify.converter.html_images import extract_images
from slackify.converter.mrkdwn import fix_delimiter_spacing, plain_text, render_mrkdwn
from slackify.converter.tables import build_table
from slackify.models import ConversionWarning, TokenType
from slackify.observability import get_logger

log = get_logger("slackify.converter")


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def build_blocks(
    tokens: list[dict],
    config: SlackifyConfig,
) -> tuple[list[dict], list[ConversionWarning]]:
    """Convert normalized AST tokens to Slack block dicts.

    Parameters
    ----------
    tokens:
        Top-level canonical tokens from :class:`ASTNormalizer`.
    config:
        Conversion options.

    Returns
    -------
    tuple[list[dict], list[ConversionWarning]]
        (blocks, warnings)
    """
    ctx = _BuildContext(config)
    blocks: list[dict] = []
    for token in tokens:
        blocks.extend(_process_token(token, ctx))
    return blocks, ctx.warnings


def parse_blocks(
    tokens: list[dict],
    config: SlackifyConfig | None = None,
) -> list[dict]:
    """Convert normalized AST tokens to Slack block dicts, discarding warnings."""
    blocks, _ = build_blocks(tokens, config or SlackifyConfig())
    return blocks


class _BuildContext:
    """Per-call state: the options and the warnings collected so far."""

    __slots__ = ("config", "warnings")

    def __init__(self, config: SlackifyConfig) -> None:
        self.config = config
        self.warnings: list[ConversionWarning] = []

    def add_warning(self, code: str, message: str, **context: object) -> None:
        log.debug(message, extra={"extra_fields": {"code": code, **context}})
        self.warnings.append(ConversionWarning(
            code=code, message=message, context=dict(context),
        ))


# ---------------------------------------------------------------------------
# Token dispatch
# ---------------------------------------------------------------------------

def _process_token(token: dict, ctx: _BuildContext) -> list[dict]:
    """Process a single top-level token and return the block(s) produced."""
    token_type = token.get("type", "")
    handler = _BLOCK_HANDLERS.get(token_type)
    if handler is not None:
        return handler(token, ctx)
    ctx.add_warning(
        "UNKNOWN_TOKEN",
        f"Unknown token type '{token_type}' was skipped.",
        token_type=token_type,
    )
    return []


# ---------------------------------------------------------------------------
# Block builders
# ---------------------------------------------------------------------------

def _build_heading(token: dict, ctx: _BuildContext) -> list[dict]:
    """All heading levels map to the single header block kind."""
    return [header(plain_text(token.get("children", [])))]


def _paragraph_runs(token: dict) -> list[str | dict]:
    """Fold a paragraph's inline children into text runs and image blocks.

    Consecutive non-image children are rendered into one ``str`` run; each
    image becomes an image block and starts a new run.  Only the last
    element is inspected at each step.
    """
    runs: list[str | dict] = []
    for child in token.get("children", []):
        if child.get("type") == TokenType.IMAGE:
            runs.append(_image_from_token(child))
            continue
        text = render_mrkdwn(child)
        if runs and isinstance(runs[-1], str):
            runs[-1] += text
        else:
            runs.append(text)
    return runs


def _finish_runs(
    runs: list[str | dict],
    transform: Callable[[str], str] | None = None,
) -> list[dict]:
    """Turn text runs into section blocks; image blocks pass through."""
    blocks: list[dict] = []
    for run in runs:
        if isinstance(run, dict):
            blocks.append(run)
            continue
        text = fix_delimiter_spacing(run)
        if not text:
            continue
        if transform is not None:
            text = transform(text)
        blocks.append(section(text))
    return blocks


def _build_paragraph(token: dict, ctx: _BuildContext) -> list[dict]:
    return _finish_runs(_paragraph_runs(token))


def _image_from_token(token: dict) -> dict:
    attrs = token.get("attrs", {})
    url = attrs.get("url", "")
    title = attrs.get("title") or None
    alt_text = plain_text(token.get("children", []))
    return image(url, alt_text or title or url, title)


def _build_code_block(token: dict, ctx: _BuildContext) -> list[dict]:
    """Code is fenced verbatim; its content is never rendered as mrkdwn."""
    return [section(f"```\n{token.get('raw', '')}\n```")]


def _build_list(token: dict, ctx: _BuildContext) -> list[dict]:
    """Build one section block holding every item of the list.

    Only the first child of each item is rendered, so nested lists are
    dropped.  Images inside items are dropped as well.
    """
    ordered = token.get("attrs", {}).get("ordered", False)
    lines: list[str] = []
    index = 0

    for item in token.get("children", []):
        item_type = item.get("type", "")
        if item_type not in (TokenType.LIST_ITEM, TokenType.TASK_LIST_ITEM):
            continue

        children = item.get("children", [])
        first = children[0] if children else None
        inline = first.get("children", []) if first is not None else []
        if first is None or first.get("type") != TokenType.PARAGRAPH or not inline:
            lines.append(_item_fallback_text(first))
            continue

        if any(child.get("type") == TokenType.IMAGE for child in inline):
            ctx.add_warning(
                "IMAGE_DROPPED",
                "Image inside a list item was dropped.",
            )
        text = "".join(
            render_mrkdwn(child)
            for child in inline
            if child.get("type") != TokenType.IMAGE
        )

        checked = item.get("attrs", {}).get("checked")
        if ordered:
            index += 1
            lines.append(f"{index}. {text}")
        elif item_type == TokenType.TASK_LIST_ITEM and checked is not None:
            lines.append(f"{ctx.config.task_prefix(checked)}{text}")
        else:
            lines.append(f"{DEFAULT_BULLET}{text}")

    return [section("\n".join(lines))]


def _item_fallback_text(token: dict | None) -> str:
    """Plain text of a list item whose first child has no inline content."""
    if token is None:
        return ""
    if "raw" in token:
        return token["raw"]
    return plain_text(token.get("children", []))


def _quote(text: str) -> str:
    # Single-line paragraphs are left as they are.
    if "\n" not in text:
        return text
    return "> " + text.replace("\n", "\n> ")


def _build_block_quote(token: dict, ctx: _BuildContext) -> list[dict]:
    """Convert the quote's paragraphs; other children are dropped."""
    blocks: list[dict] = []
    for child in token.get("children", []):
        child_type = child.get("type", "")
        if child_type == TokenType.PARAGRAPH:
            blocks.extend(_finish_runs(_paragraph_runs(child), transform=_quote))
        else:
            ctx.add_warning(
                "QUOTE_CHILD_DROPPED",
                f"'{child_type}' inside a block quote was dropped.",
                token_type=child_type,
            )
    return blocks


def _build_table(token: dict, ctx: _BuildContext) -> list[dict]:
    return [build_table(token)]


def _build_divider(token: dict, ctx: _BuildContext) -> list[dict]:
    return [divider()]


def _build_html_block(token: dict, ctx: _BuildContext) -> list[dict]:
    """Embedded ``<img>`` tags become image blocks; other HTML is skipped."""
    raw = token.get("raw", "")
    blocks = extract_images(raw)
    if not blocks:
        ctx.add_warning(
            "HTML_BLOCK_SKIPPED",
            "HTML block was skipped (only <img> tags are supported).",
            raw=raw[:200],
        )
    return blocks


# ---------------------------------------------------------------------------
# Block handler dispatch table
# ---------------------------------------------------------------------------

_BlockHandler = Callable[[dict, _BuildContext], list[dict]]

_BLOCK_HANDLERS: dict[str, _BlockHandler] = {
    TokenType.HEADING.value: _build_heading,
    TokenType.PARAGRAPH.value: _build_paragraph,
    TokenType.BLOCK_CODE.value: _build_code_block,
    TokenType.BLOCK_QUOTE.value: _build_block_quote,
    TokenType.LIST.value: _build_list,
    TokenType.TABLE.value: _build_table,
    TokenType.THEMATIC_BREAK.value: _build_divider,
    TokenType.HTML_BLOCK.value: _build_html_block,
}
