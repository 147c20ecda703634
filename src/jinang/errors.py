"""Typed failures raised by the memory store."""

from __future__ import annotations

from pathlib import Path


class JinangError(Exception):
    """Base class for all store failures."""


class ValidationFailure(JinangError):
    """Caller passed unusable input (e.g. empty content on remember)."""


class IOFailure(JinangError):
    """Directory creation, read or write of the store file failed."""

    def __init__(self, path: Path, cause: BaseException) -> None:
        self.path = path
        self.cause = cause
        super().__init__(f"{path}: {cause}")
