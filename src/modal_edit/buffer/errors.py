"""Exceptions raised by the buffer layer."""

from __future__ import annotations

import os
from typing import Optional


class BufferLoadError(RuntimeError):
    """Raised when a file cannot be read into a ``TextBuffer``."""

    reason = "io_error"

    def __init__(self, message: str, *, path: str | os.PathLike[str]) -> None:
        super().__init__(message)
        self.path = os.fspath(path)


class BufferNotFoundError(BufferLoadError):
    """The source path does not exist."""

    reason = "not_found"


class BufferPermissionError(BufferLoadError):
    """The source path exists but cannot be read."""

    reason = "permission_denied"


class BufferSaveError(RuntimeError):
    """Raised when a buffer cannot be written back to disk."""

    def __init__(
        self, message: str, *, path: Optional[str | os.PathLike[str]] = None
    ) -> None:
        super().__init__(message)
        self.path = os.fspath(path) if path is not None else None


def load_error_for(exc: OSError, path: str | os.PathLike[str]) -> BufferLoadError:
    """Translate an ``OSError`` from ``open``/``read`` into a load error."""

    if isinstance(exc, FileNotFoundError):
        return BufferNotFoundError(f"No such file: {os.fspath(path)}", path=path)
    if isinstance(exc, PermissionError):
        return BufferPermissionError(
            f"Permission denied: {os.fspath(path)}", path=path
        )
    return BufferLoadError(f"Cannot read {os.fspath(path)}: {exc}", path=path)


__all__ = [
    "BufferLoadError",
    "BufferNotFoundError",
    "BufferPermissionError",
    "BufferSaveError",
    "load_error_for",
]
