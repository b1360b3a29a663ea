"""Inline rendering: normalized inline AST tokens to Slack ``mrkdwn``.

Slack's ``mrkdwn`` uses single-character delimiters that differ from
Markdown's::

    Markdown            mrkdwn
    **bold**            *bold*
    *italic*            _italic_
    ~~strike~~          ~strike~
    `code`              `code`
    [text](url)         <url|text>

Unlike Markdown, ``mrkdwn`` only recognises a delimiter when it sits on a
word boundary, so ``(-26°C)*Conditions:*`` is shown literally.
:func:`fix_delimiter_spacing` repairs such runs after a paragraph has been
rendered.

The plain-text helpers strip all styling and are used wherever the target
field does not accept markup (headers, image alt text, table cells).
"""

from __future__ import annotations

import re

from slackify.models import TokenType

# ---------------------------------------------------------------------------
# mrkdwn rendering
# ---------------------------------------------------------------------------

_WRAPPERS: dict[str, str] = {
    TokenType.EMPHASIS.value: "_",
    TokenType.STRONG.value: "*",
    TokenType.STRIKETHROUGH.value: "~",
}


def escaped_text(token: dict) -> str:
    """Return the Slack-escaped payload of a text or code span token."""
    return token.get("text", token.get("raw", ""))


def render_mrkdwn(token: dict) -> str:
    """Render one inline token (and its children) as ``mrkdwn``.

    Images are handled by the caller and never rendered here; they, like
    line breaks, raw HTML and unknown kinds, produce an empty string.

    Parameters
    ----------
    token:
        A normalized inline token.

    Returns
    -------
    str
        The ``mrkdwn`` fragment for *token*.
    """
    token_type = token.get("type", "")

    if token_type == TokenType.TEXT:
        return escaped_text(token)

    if token_type in _WRAPPERS:
        delimiter = _WRAPPERS[token_type]
        return f"{delimiter}{render_children(token)}{delimiter}"

    if token_type == TokenType.CODESPAN:
        # Code spans are verbatim: no recursive rendering.
        return f"`{escaped_text(token)}`"

    if token_type == TokenType.LINK:
        url = token.get("attrs", {}).get("url", "")
        # Trailing space stops Slack from swallowing the following text
        # into the link.
        return f"<{url}|{render_children(token)}> "

    return ""


def render_children(token: dict) -> str:
    """Render and concatenate the children of *token*."""
    return "".join(render_mrkdwn(child) for child in token.get("children", []))


# ---------------------------------------------------------------------------
# Plain text
# ---------------------------------------------------------------------------

def flatten_plain_text(token: dict) -> list[str]:
    """Return the plain-text fragments of an inline token, styling removed.

    Text is the literal source (``raw``), not the escaped ``mrkdwn``
    payload.  ``"".join(flatten_plain_text(token))`` is the flattened text.
    """
    token_type = token.get("type", "")

    if token_type in (
        TokenType.LINK,
        TokenType.EMPHASIS,
        TokenType.STRONG,
        TokenType.STRIKETHROUGH,
    ):
        fragments: list[str] = []
        for child in token.get("children", []):
            fragments.extend(flatten_plain_text(child))
        return fragments

    if token_type == TokenType.LINEBREAK:
        return []

    if token_type == TokenType.IMAGE:
        attrs = token.get("attrs", {})
        return [attrs.get("title") or attrs.get("url", "")]

    if token_type == TokenType.CODESPAN:
        return [f"`{token.get('raw', '')}`"]

    if token_type in (TokenType.TEXT, TokenType.HTML_INLINE):
        return [token.get("raw", "")]

    return []


def plain_text(tokens: list[dict]) -> str:
    """Flatten a list of inline tokens to a single plain string."""
    return "".join(
        fragment for token in tokens for fragment in flatten_plain_text(token)
    )


# ---------------------------------------------------------------------------
# Delimiter spacing repair
# ---------------------------------------------------------------------------

_DELIMITERS = "*_~"

# Characters after which an opening delimiter is fused to the preceding word.
_CLOSING_PUNCTUATION = frozenset(")]}.,:;!?")

# A rendered "<url|text>" link; neither part is scanned for delimiters.
_LINK_RE = re.compile(r"<[^\s<>|]+\|[^<>]*>")

# An unterminated "<url|" head; delimiters inside URLs are literal.
_LINK_HEAD_RE = re.compile(r"<[^\s<>|]+\|")


def fix_delimiter_spacing(text: str) -> str:
    """Insert boundary spaces around ``mrkdwn`` style delimiters.

    Delimiters (``*``, ``_``, ``~``) are paired left to right.  For every
    outermost pair a space is inserted before the opener when it directly
    follows an alphanumeric character, closing punctuation or the closer
    of another pair, and after the closer when it is directly followed by
    an alphanumeric character.  Code spans and links are left untouched,
    as are pairs fused to words on both sides (``snake_case_name``).  The
    function is idempotent and runs in linear time.

    >>> fix_delimiter_spacing("(-26°C)*Conditions:* Light")
    '(-26°C) *Conditions:* Light'
    >>> fix_delimiter_spacing("*bold*text")
    '*bold* text'
    >>> fix_delimiter_spacing("*bold*_italic_")
    '*bold* _italic_'
    """
    pairs = _delimiter_pairs(text)
    closers = {closer for _, closer in pairs}

    insert_at: set[int] = set()
    for opener, closer in _outermost(pairs):
        before = text[opener - 1] if opener > 0 else ""
        after = text[closer + 1] if closer + 1 < len(text) else ""
        if before.isalnum() and after.isalnum():
            continue
        if before and (
            before.isalnum()
            or before in _CLOSING_PUNCTUATION
            or opener - 1 in closers
        ):
            insert_at.add(opener)
        if after.isalnum():
            insert_at.add(closer + 1)

    if not insert_at:
        return text

    parts: list[str] = []
    start = 0
    for index in sorted(insert_at):
        parts.append(text[start:index])
        parts.append(" ")
        start = index
    parts.append(text[start:])
    return "".join(parts)


def _delimiter_pairs(text: str) -> list[tuple[int, int]]:
    """Return ``(opener, closer)`` index pairs of matched delimiters.

    A closer matches the nearest open delimiter of the same character;
    openers of other characters opened after that one are discarded.
    """
    pairs: list[tuple[int, int]] = []
    open_at: dict[str, list[int]] = {char: [] for char in _DELIMITERS}
    length = len(text)
    i = 0

    while i < length:
        char = text[i]

        if char == "`":
            end = text.find("`", i + 1)
            if end != -1:
                i = end + 1
                continue

        elif char == "<":
            match = _LINK_RE.match(text, i) or _LINK_HEAD_RE.match(text, i)
            if match is not None:
                i = match.end()
                continue

        elif char in open_at:
            prev = text[i - 1] if i > 0 else ""
            nxt = text[i + 1] if i + 1 < length else ""
            if prev and not prev.isspace() and open_at[char]:
                opener = open_at[char].pop()
                pairs.append((opener, i))
                _discard_after(open_at, opener)
                i += 1
                continue
            if nxt and not nxt.isspace():
                open_at[char].append(i)

        i += 1

    return pairs


def _discard_after(open_at: dict[str, list[int]], index: int) -> None:
    # Each opener is popped at most once, so pairing stays linear.
    for stack in open_at.values():
        while stack and stack[-1] > index:
            stack.pop()


def _outermost(pairs: list[tuple[int, int]]) -> list[tuple[int, int]]:
    """Drop pairs enclosed by another pair."""
    result: list[tuple[int, int]] = []
    furthest_close = -1
    for opener, closer in sorted(pairs):
        if closer < furthest_close:
            continue
        result.append((opener, closer))
        furthest_close = closer
    return result
