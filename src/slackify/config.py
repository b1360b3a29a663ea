"""Configuration for slackify.

:class:`SlackifyConfig` is the options object accepted by every public
entry point.  Only ``checkbox_prefix`` changes the produced blocks; the
remaining fields control observability and debugging.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

DEFAULT_BULLET = "• "
"""Prefix used for unordered list items and, by default, task list items."""


@dataclass
class SlackifyConfig:
    """Complete configuration for a slackify conversion.

    Every parameter has a default, so ``SlackifyConfig()`` is valid.

    Parameters
    ----------
    checkbox_prefix:
        Called with the ``checked`` state of each task list item
        (``- [x] done``) and returns the line prefix.  When ``None`` every
        task item gets :data:`DEFAULT_BULLET` regardless of its state.
    metrics:
        A :class:`~slackify.observability.MetricsHook` implementation.
        ``None`` selects :class:`~slackify.observability.NoopMetricsHook`.
    debug_dump_ast:
        Write the normalised mistune AST to *stderr* on each conversion.
    debug_dump_payload:
        Write the produced block payload to *stderr* on each conversion.
    """

    checkbox_prefix: Callable[[bool], str] | None = None

    # ── Observability ──────────────────────────────────────────────────
    metrics: Any | None = None

    # ── Debug ───────────────────────────────────────────────────────────
    debug_dump_ast: bool = False

    debug_dump_payload: bool = False

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if self.checkbox_prefix is not None and not callable(self.checkbox_prefix):
            raise ValueError(
                f"checkbox_prefix must be callable, got {type(self.checkbox_prefix).__name__}"
            )

    def task_prefix(self, checked: bool) -> str:
        """Return the line prefix for a task list item."""
        if self.checkbox_prefix is None:
            return DEFAULT_BULLET
        return self.checkbox_prefix(checked)
