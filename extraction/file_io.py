"""
Filesystem primitives used by the extraction pipeline.

Blocking helpers only; the async layers call them through
``asyncio.to_thread``.
"""

import os
from typing import Iterator, List, TextIO

from extraction.config import FILE_ENCODING
from extraction.errors import FileReadError


def read_text_file(file_path: str) -> str:
    """Read a whole file as text.

    Args:
        file_path: Path to the file.

    Returns:
        The decoded file contents, line endings untouched.

    Raises:
        FileReadError: If the file cannot be opened, read or decoded.
    """
    try:
        with open(file_path, "r", encoding=FILE_ENCODING, newline="") as f:
            return f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise FileReadError(f"Cannot read {file_path}: {e}") from e


def iter_nonblank_lines(handle: TextIO) -> Iterator[str]:
    """Yield lines from an open text handle, skipping empty ones.

    Universal newline mode folds ``\\r\\n`` and ``\\r`` into ``\\n``, so only
    the trailing ``\\n`` has to be removed. Whitespace-only lines are kept.
    """
    for raw in handle:
        line = raw.rstrip("\n")
        if line:
            yield line


def list_directory(directory: str) -> List[str]:
    """Return the entry names of ``directory``.

    ``FileNotFoundError`` and other ``OSError`` subclasses propagate so the
    caller can tell a missing directory from an unreadable one.
    """
    return os.listdir(directory)


def list_subdirectories(directory: str) -> List[str]:
    """Return absolute paths of the immediate subdirectories of ``directory``.

    Symlinks are not followed, so a linked folder is not reported.
    """
    with os.scandir(directory) as entries:
        return [
            os.path.abspath(entry.path)
            for entry in entries
            if entry.is_dir(follow_symlinks=False)
        ]
