"""Markdown → Slack Block Kit conversion pipeline.

Public API:

- :class:`MarkdownToSlackConverter`: Markdown → blocks, with warnings.
- :class:`ASTNormalizer`: parse and normalize Markdown to canonical AST.
- :func:`build_blocks` / :func:`parse_blocks`: normalized AST → blocks.
- :func:`render_mrkdwn`: inline AST token → ``mrkdwn`` string.
- :func:`fix_delimiter_spacing`: boundary-space repair for ``mrkdwn``.
- :func:`build_table`: table AST token → table block.
"""

from slackify.converter.ast_normalizer import ASTNormalizer
from slackify.converter.block_builder import build_blocks, parse_blocks
from slackify.converter.md_to_slack import MarkdownToSlackConverter
from slackify.converter.mrkdwn import fix_delimiter_spacing, render_mrkdwn
from slackify.converter.tables import build_table

__all__ = [
    "ASTNormalizer",
    "MarkdownToSlackConverter",
    "build_blocks",
    "build_table",
    "fix_delimiter_spacing",
    "parse_blocks",
    "render_mrkdwn",
]
