"""
Source reader.

Thin I/O layer over the filesystem. Callers treat any SourceReadError as
"this link in the chain does not exist"; missing and unreadable files are
deliberately not told apart above this module.
"""

import logging
import os
from pathlib import Path
from typing import Union

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


class WidgetScopeError(Exception):
    """Base class for widgetscope errors."""


class SourceReadError(WidgetScopeError):
    """Raised when a source file cannot be read."""


class SourceNotFoundError(SourceReadError):
    """Raised when a source file does not exist."""


def normalize_path(path: PathLike) -> Path:
    """Absolute, lexically normalized path used as the identity of a file."""
    return Path(os.path.normpath(os.path.abspath(str(path))))


class SourceReader:
    """Reads compiled source files as text."""

    def __init__(self, encoding: str = "utf-8"):
        self.encoding = encoding

    def exists(self, path: PathLike) -> bool:
        return Path(path).is_file()

    def read(self, path: PathLike) -> str:
        """
        Read a file's text content.

        Raises:
            SourceNotFoundError: path does not exist or is not a file
            SourceReadError: path exists but could not be read or decoded
        """
        path = Path(path)
        if not path.is_file():
            raise SourceNotFoundError(f"File not found: {path}")
        try:
            return path.read_text(encoding=self.encoding)
        except (OSError, UnicodeDecodeError) as e:
            logger.debug("Read failed for %s: %s", path, e)
            raise SourceReadError(f"Cannot read {path}: {e}") from e
