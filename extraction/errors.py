"""
Error taxonomy for addon function extraction.

Fatal errors abort the whole read. Header comment errors are recovered per
file when only comments are requested.
"""

import os
from typing import Optional


class ReaderError(RuntimeError):
    """Base class for all extraction failures."""


class DiscoveryError(ReaderError):
    """Raised when the addons directory cannot be walked."""


class NoAddonsFound(ReaderError):
    """Raised when the addons directory holds no addon folders."""


class ListingError(ReaderError):
    """Raised when an existing functions directory cannot be listed."""


class FileReadError(ReaderError):
    """Raised when a function file cannot be read in full-content mode."""


class HeaderCommentError(ReaderError):
    """Base class for recoverable header comment failures."""

    reason: str = "invalid header comment"

    def __init__(self, file_path: Optional[str] = None):
        self.file_path = file_path
        if file_path:
            message = f"{os.path.basename(file_path)} - {self.reason}"
        else:
            message = self.reason
        super().__init__(message)


class EmptyFile(HeaderCommentError):
    """Fewer than two non-blank lines were read."""

    reason = "empty file"


class MissingDocumentation(HeaderCommentError):
    """No header comment opens on the first two non-blank lines."""

    reason = "missing documentation?"


class IncompleteComment(HeaderCommentError):
    """The header comment opens but is never closed."""

    reason = "incomplete header comment"
