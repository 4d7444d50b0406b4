"""
Layer 1: Extraction Engine

Reads ACE3-style addon trees (``addons/<prefix>/functions/fn*.sqf``) and
extracts either full function sources or their header comments.
"""

from extraction.models import (
    AddonFolder,
    ExtractedFunction,
    ExtractionWarning,
    FolderRecord,
    FunctionFile,
    ReaderConfig,
    ReadResult,
    ReadStats,
)
from extraction.errors import (
    ReaderError,
    DiscoveryError,
    NoAddonsFound,
    ListingError,
    FileReadError,
    HeaderCommentError,
    EmptyFile,
    MissingDocumentation,
    IncompleteComment,
)
from extraction.header_scanner import (
    HeaderCommentScanner,
    ScanState,
    parse_header_comment,
    scan_header_comment,
)
from extraction.file_io import read_text_file
from extraction.function_files import (
    derive_function_name,
    is_function_file,
    list_function_files,
    resolve_function_files,
)
from extraction.extractor import (
    discover_addon_folders,
    prefix_sort_key,
    read,
    read_addons,
    read_sync,
    read_to_dict,
    resolve_addon_folder,
)

__all__ = [
    # Data models
    "AddonFolder",
    "ExtractedFunction",
    "ExtractionWarning",
    "FolderRecord",
    "FunctionFile",
    "ReaderConfig",
    "ReadResult",
    "ReadStats",
    # Errors
    "ReaderError",
    "DiscoveryError",
    "NoAddonsFound",
    "ListingError",
    "FileReadError",
    "HeaderCommentError",
    "EmptyFile",
    "MissingDocumentation",
    "IncompleteComment",
    # Per-file extraction
    "HeaderCommentScanner",
    "ScanState",
    "parse_header_comment",
    "scan_header_comment",
    "read_text_file",
    # Per-addon resolution
    "derive_function_name",
    "is_function_file",
    "list_function_files",
    "resolve_function_files",
    # High-level orchestration
    "discover_addon_folders",
    "prefix_sort_key",
    "read",
    "read_addons",
    "read_sync",
    "read_to_dict",
    "resolve_addon_folder",
]
