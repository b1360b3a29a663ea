"""Parse Markdown and normalize to canonical AST tokens.

This module wraps mistune v3's AST renderer and normalises the raw token
stream into the closed set of :class:`~slackify.models.TokenType` kinds
used by the rest of the converter pipeline.

A few adjustments are made on the way, so that the block builder can copy
text verbatim into ``mrkdwn``:

* Soft line breaks become ``"\\n"`` text tokens.
* Text and code span tokens keep their literal source in ``raw`` and gain
  a ``text`` payload with HTML entities decoded, then ``&``, ``<`` and
  ``>`` re-escaped, which is the only escaping Slack expects.
* A single tilde pair (``~gone~``) is strikethrough, as in GitHub's
  renderer; mistune's own plugin only knows ``~~gone~~``.
"""

from __future__ import annotations

import html
import re

import mistune

from slackify.models import TokenType

# ---------------------------------------------------------------------------
# Mistune-to-canonical type mapping
# ---------------------------------------------------------------------------

_BLOCK_TYPE_MAP: dict[str, str] = {
    "heading": TokenType.HEADING.value,
    "paragraph": TokenType.PARAGRAPH.value,
    "block_quote": TokenType.BLOCK_QUOTE.value,
    "list": TokenType.LIST.value,
    "list_item": TokenType.LIST_ITEM.value,
    "task_list_item": TokenType.TASK_LIST_ITEM.value,
    "block_code": TokenType.BLOCK_CODE.value,
    "table": TokenType.TABLE.value,
    "thematic_break": TokenType.THEMATIC_BREAK.value,
    "block_html": TokenType.HTML_BLOCK.value,
    # Tight list items wrap their inline content in block_text
    "block_text": TokenType.PARAGRAPH.value,
}

_INLINE_TYPE_MAP: dict[str, str] = {
    "text": TokenType.TEXT.value,
    "strong": TokenType.STRONG.value,
    "emphasis": TokenType.EMPHASIS.value,
    "codespan": TokenType.CODESPAN.value,
    "strikethrough": TokenType.STRIKETHROUGH.value,
    "link": TokenType.LINK.value,
    "image": TokenType.IMAGE.value,
    "linebreak": TokenType.LINEBREAK.value,
    "inline_html": TokenType.HTML_INLINE.value,
}

_TABLE_PARTS: frozenset[str] = frozenset({
    "table_head",
    "table_body",
    "table_row",
    "table_cell",
})

_SLACK_ESCAPES: dict[str, str] = {
    "&": "&amp;",
    "<": "&lt;",
    ">": "&gt;",
}


def decode_and_escape(text: str) -> str:
    """Decode HTML entities, then escape the characters Slack reserves.

    >>> decode_and_escape("Fish &amp; Chips <3")
    'Fish &amp; Chips &lt;3'
    """
    decoded = html.unescape(text)
    return "".join(_SLACK_ESCAPES.get(char, char) for char in decoded)


# ---------------------------------------------------------------------------
# Single-tilde strikethrough
# ---------------------------------------------------------------------------

# A closing tilde follows a non-space, non-escaped character.
_TILDE_END = re.compile(r"(?<![\s~\\])~(?!~)")

# env key of the sources already known to hold no closing tilde
_NO_END_KEY = "slackify_tilde_no_end"


def _parse_single_tilde(inline, m, state):
    no_end = state.env.setdefault(_NO_END_KEY, {})
    if no_end.get(id(state.src)) is state.src:
        return None

    start = m.end()
    end = _TILDE_END.search(state.src, start)
    if end is None:
        no_end[id(state.src)] = state.src
        return None
    end_pos = end.end()
    new_state = state.copy()
    new_state.src = state.src[start:end_pos - 1]
    children = inline.render(new_state)
    state.append_token({"type": "strikethrough", "children": children})
    return end_pos


def single_tilde_strikethrough(md):
    """mistune plugin: parse ``~text~`` as strikethrough.

    Must be registered after the ``strikethrough`` plugin so that ``~~``
    is tried first.
    """
    md.inline.register(
        "single_tilde_strikethrough",
        r"~(?=[^\s~])",
        _parse_single_tilde,
        before="link",
    )


class ASTNormalizer:
    """Parse Markdown and normalize to canonical AST tokens."""

    def __init__(self) -> None:
        self._parser = mistune.create_markdown(
            renderer="ast",
            plugins=[
                "strikethrough",
                single_tilde_strikethrough,
                "table",
                "task_lists",
                "url",
            ],
        )

    def parse(self, markdown: str) -> list[dict]:
        """Parse markdown and return normalized AST token list."""
        raw_tokens = self._parser(markdown)
        if isinstance(raw_tokens, str):
            return []
        return self._normalize_tokens(raw_tokens)

    def _normalize_tokens(self, tokens: list[dict]) -> list[dict]:
        """Walk the token tree and normalize every node."""
        result: list[dict] = []
        for token in tokens:
            normalized = self._normalize_token(token)
            if normalized is not None:
                result.append(normalized)
        return result

    def _normalize_token(self, token: dict) -> dict | None:
        """Normalize a single token, returning None if it should be skipped."""
        raw_type = token.get("type", "")

        if raw_type == "softbreak":
            return {"type": TokenType.TEXT.value, "raw": "\n", "text": "\n"}

        if raw_type in _BLOCK_TYPE_MAP:
            return self._normalize_block(token, _BLOCK_TYPE_MAP[raw_type])

        if raw_type in _INLINE_TYPE_MAP:
            return self._normalize_inline(token, _INLINE_TYPE_MAP[raw_type])

        if raw_type in _TABLE_PARTS:
            return self._normalize_container(token, raw_type)

        # blank_line and anything unknown
        return None

    def _normalize_block(self, token: dict, canonical_type: str) -> dict:
        """Normalize a block-level token."""
        if canonical_type == TokenType.BLOCK_CODE:
            raw_code = token.get("raw", "")
            # Strip trailing newline added by mistune
            if raw_code.endswith("\n"):
                raw_code = raw_code[:-1]
            result: dict = {"type": canonical_type, "raw": raw_code}
            info = (token.get("attrs") or {}).get("info")
            if info:
                result["attrs"] = {"info": info}
            return result

        if canonical_type == TokenType.HTML_BLOCK:
            return {"type": canonical_type, "raw": token.get("raw", "")}

        if canonical_type == TokenType.THEMATIC_BREAK:
            return {"type": canonical_type}

        return self._normalize_container(token, canonical_type)

    def _normalize_inline(self, token: dict, canonical_type: str) -> dict:
        """Normalize an inline-level token."""
        if canonical_type in (TokenType.TEXT, TokenType.CODESPAN):
            # raw: literal source, for plain-text fields
            # text: Slack-escaped, for mrkdwn and table runs
            raw = token.get("raw", "")
            return {
                "type": canonical_type,
                "raw": raw,
                "text": decode_and_escape(raw),
            }

        if canonical_type == TokenType.HTML_INLINE:
            return {"type": canonical_type, "raw": token.get("raw", "")}

        if canonical_type == TokenType.LINEBREAK:
            return {"type": canonical_type}

        return self._normalize_container(token, canonical_type)

    def _normalize_container(self, token: dict, canonical_type: str) -> dict:
        """Copy attrs and recursively normalize children."""
        result: dict = {"type": canonical_type}

        attrs = token.get("attrs")
        if attrs:
            result["attrs"] = dict(attrs)

        result["children"] = self._normalize_tokens(token.get("children") or [])
        return result
