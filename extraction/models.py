"""
Data models for extracted addon functions.
"""

from dataclasses import dataclass, asdict, field
from typing import Dict, Any, List, Tuple

from extraction.config import (
    DEFAULT_MAX_CONCURRENT_READS,
    FUNCTION_FILE_EXTENSIONS,
    FUNCTION_NAME_PREFIX,
)


@dataclass(frozen=True)
class ReaderConfig:
    """Options for a read run.

    Attributes:
        only_comments: Extract the header comment body instead of full text
        function_name_prefix: Leading part of derived function names
        extensions: Function file extensions, matched case-insensitively
        max_concurrent_reads: Upper bound on file reads in flight
    """

    only_comments: bool = False
    function_name_prefix: str = FUNCTION_NAME_PREFIX
    extensions: Tuple[str, ...] = FUNCTION_FILE_EXTENSIONS
    max_concurrent_reads: int = DEFAULT_MAX_CONCURRENT_READS


@dataclass(frozen=True)
class AddonFolder:
    """A top-level addon directory discovered under ``addons``.

    Attributes:
        path: Absolute path to the addon folder
        prefix: Folder name, used as the mapping key and in derived names
    """

    path: str
    prefix: str


@dataclass(frozen=True)
class FunctionFile:
    """A function source file selected for extraction."""

    path: str
    derived_name: str


@dataclass(frozen=True)
class ExtractedFunction:
    """A named block of extracted text.

    Attributes:
        name: Derived function name, e.g. ``ACE_medical_fnDoStuff``
        text: Full file contents or the stripped header comment body
    """

    name: str
    text: str

    def to_dict(self) -> Dict[str, Any]:
        """Convert the function to a dictionary suitable for JSON serialization.

        Returns:
            Dictionary with ``name`` and ``text`` keys.
        """
        return asdict(self)


@dataclass(frozen=True)
class ExtractionWarning:
    """A per-file documentation problem that did not stop the run."""

    file_path: str
    reason: str

    def to_dict(self) -> Dict[str, str]:
        return asdict(self)


@dataclass
class FolderRecord:
    """Extraction result for one addon folder, in filename order."""

    prefix: str
    functions: List[ExtractedFunction] = field(default_factory=list)
    warnings: List[ExtractionWarning] = field(default_factory=list)


ResultMapping = Dict[str, List[ExtractedFunction]]


class ReadStats:
    """Statistics for a read operation."""

    def __init__(self):
        self.folders_found = 0
        self.files_processed = 0
        self.warnings = 0

    def to_dict(self) -> Dict[str, int]:
        """Convert stats to dictionary."""
        return {
            "folders_found": self.folders_found,
            "files_processed": self.files_processed,
            "warnings": self.warnings,
        }

    def __str__(self) -> str:
        return (
            f"ReadStats(folders={self.folders_found}, "
            f"files={self.files_processed}, warnings={self.warnings})"
        )


@dataclass
class ReadResult:
    """Full outcome of a read: ordered mapping plus side-channel warnings."""

    functions: ResultMapping
    warnings: List[ExtractionWarning] = field(default_factory=list)
    stats: ReadStats = field(default_factory=ReadStats)

    def to_dict(self) -> Dict[str, List[Dict[str, Any]]]:
        """Return the JSON-ready ``{prefix: [{name, text}]}`` mapping."""
        return {
            prefix: [fnc.to_dict() for fnc in functions]
            for prefix, functions in self.functions.items()
        }
