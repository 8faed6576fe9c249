from __future__ import annotations

from typing import Any


class LayoutExportError(Exception):
    """Base class for every failure that aborts a layout export run."""


class ConfigurationError(LayoutExportError, ValueError):
    """An invalid traversal/source setting; detected before any traversal begins."""


class SourceUnavailable(LayoutExportError):
    """
    The layout source could not be constructed (missing input, backend error, ...).

    `code` is a stable machine-readable identifier, `detail` carries audit context.
    """

    def __init__(self, code: str, message: str, detail: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.detail = detail

    def __str__(self) -> str:
        return f"{self.message} [{self.code}]"


class LayoutCursorError(LayoutExportError):
    """A level cursor was used after it was invalidated or has no node to point at."""
