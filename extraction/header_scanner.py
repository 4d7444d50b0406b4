"""
Header comment extraction for SQF function files.

Every function file is expected to start with a single block comment that
documents it:

    /*
     * Author: ...
     * Does stuff.
     */

The scanner is an explicit state machine fed one non-blank line at a time,
so it can be exercised on plain lists of strings without touching the
filesystem.
"""

import enum
import logging
import re
from typing import Iterable, List, Optional

from extraction.config import (
    COMMENT_LINE_SEPARATOR,
    HEADER_FILE_ENCODING,
    MAX_HEADER_START_LINE,
    MIN_FILE_LINES,
)
from extraction.errors import EmptyFile, IncompleteComment, MissingDocumentation
from extraction.file_io import iter_nonblank_lines

logger = logging.getLogger(__name__)

# A byte order mark may precede the opener on the first line
_COMMENT_OPEN_RE = re.compile(r"^[\s\ufeff]*/\*")
_COMMENT_CLOSE_RE = re.compile(r"^\s*\*/\s*$")
# Leading decoration: any run of '*' and whitespace
_DECORATION_RE = re.compile(r"^[*\s]*")


class ScanState(enum.Enum):
    """Scanner states."""

    BEFORE_COMMENT = "before_comment"
    IN_COMMENT = "in_comment"
    DONE = "done"


class HeaderCommentScanner:
    """Line-by-line parser for the leading ``/* ... */`` comment.

    Call :meth:`feed` for each non-blank line until it returns True (the
    comment closed), then :meth:`finish` to get the body. :meth:`finish`
    also handles end of input and raises the matching failure.
    """

    def __init__(self, file_path: Optional[str] = None):
        self.file_path = file_path
        self.state = ScanState.BEFORE_COMMENT
        self.lines_read = 0
        self.body: List[str] = []

    def feed(self, line: str) -> bool:
        """Consume one line.

        Args:
            line: A non-blank line without its terminator.

        Returns:
            True once the comment has been closed and no more input is needed.

        Raises:
            MissingDocumentation: If no comment opened on the first two lines.
        """
        if self.state is ScanState.DONE:
            return True

        self.lines_read += 1

        if self.state is ScanState.BEFORE_COMMENT:
            if self.lines_read > MAX_HEADER_START_LINE:
                raise MissingDocumentation(self.file_path)
            if _COMMENT_OPEN_RE.match(line):
                self.state = ScanState.IN_COMMENT
            return False

        if _COMMENT_CLOSE_RE.match(line):
            self.state = ScanState.DONE
            return True

        text = _DECORATION_RE.sub("", line, count=1).strip()
        if text:
            self.body.append(text)
        return False

    def finish(self) -> str:
        """Return the comment body, or raise if input ended too early.

        Raises:
            EmptyFile: Fewer than two lines were read.
            MissingDocumentation: No comment was opened.
            IncompleteComment: The comment was opened but never closed.
        """
        if self.state is ScanState.DONE:
            return COMMENT_LINE_SEPARATOR.join(self.body)
        if self.lines_read < MIN_FILE_LINES:
            raise EmptyFile(self.file_path)
        if self.state is ScanState.BEFORE_COMMENT:
            raise MissingDocumentation(self.file_path)
        raise IncompleteComment(self.file_path)


def parse_header_comment(lines: Iterable[str], file_path: Optional[str] = None) -> str:
    """Extract the header comment body from a sequence of lines.

    Blank lines are skipped before they reach the scanner, matching the
    file reader used by :func:`scan_header_comment`. Iteration stops as soon
    as the comment closes.

    Args:
        lines: Source lines without terminators.
        file_path: Optional path used in error messages.

    Returns:
        Stripped comment lines joined with ``\\r\\n``.

    Example:
        >>> parse_header_comment(["/*", " * Line one.", " * Line two.", " */"])
        'Line one.\\r\\nLine two.'
    """
    scanner = HeaderCommentScanner(file_path)
    for line in lines:
        if not line:
            continue
        if scanner.feed(line):
            break
    return scanner.finish()


def scan_header_comment(file_path: str) -> str:
    """Read a function file and return its header comment body.

    The file handle is closed on every exit path, including early stops and
    failures raised mid-stream.

    Args:
        file_path: Path to the function file.

    Returns:
        The stripped header comment body.

    Raises:
        HeaderCommentError: One of EmptyFile, MissingDocumentation or
            IncompleteComment.
        OSError: If the file cannot be opened or read.
        UnicodeDecodeError: If the file is not valid text.
    """
    with open(file_path, "r", encoding=HEADER_FILE_ENCODING) as f:
        body = parse_header_comment(iter_nonblank_lines(f), file_path=file_path)
    logger.debug(f"Scanned header comment of {file_path}")
    return body
