"""Exception types for build-instructions."""

from __future__ import annotations

import errno
import os


class BuildInstructionsError(Exception):
    """Base exception for build-instructions."""


class ConfigurationError(BuildInstructionsError):
    """Raised when settings or command-line options are invalid."""


class PathNotFoundError(BuildInstructionsError, FileNotFoundError):
    """Raised when a path that must exist is missing."""

    def __init__(self, path: str | os.PathLike[str]) -> None:
        self.path = os.fspath(path)
        super().__init__(errno.ENOENT, "path not found", self.path)
