"""Error hierarchy for slackify.

The converter itself never raises for unsupported or malformed tokens; it
degrades to emitting no blocks and records a
:class:`~slackify.models.ConversionWarning`.  Errors here are reserved for
misuse of the public entry points.

Every error carries a machine-readable ``code`` (from :class:`ErrorCode`),
a human-readable ``message``, an optional structured ``context`` dict, and
an optional ``cause``.
"""

from __future__ import annotations

from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    """Machine-readable error codes for every error slackify can raise."""

    CONVERSION_ERROR = "CONVERSION_ERROR"
    INVALID_INPUT = "INVALID_INPUT"


class SlackifyError(Exception):
    """Base exception for all slackify errors.

    Parameters
    ----------
    code:
        A value from :class:`ErrorCode` (or any string).
    message:
        A developer-friendly description of what went wrong.
    context:
        Arbitrary structured data providing extra diagnostic detail.
    cause:
        The underlying exception, if this error wraps another.
    """

    def __init__(
        self,
        code: str,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        self.code: str = code
        self.message: str = message
        self.context: dict[str, Any] = context or {}
        self.cause: Exception | None = cause
        super().__init__(message)
        if cause is not None:
            self.__cause__ = cause

    def __repr__(self) -> str:
        ctx = f", context={self.context!r}" if self.context else ""
        return f"{type(self).__name__}(code={self.code!r}, message={self.message!r}{ctx})"


class SlackifyConversionError(SlackifyError):
    """Markdown could not be handed to the converter.

    Context keys: ``input_type``.
    """

    def __init__(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
        code: str = ErrorCode.CONVERSION_ERROR,
    ) -> None:
        super().__init__(
            code=code,
            message=message,
            context=context,
            cause=cause,
        )
