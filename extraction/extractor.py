"""
High-level orchestrator for addon function extraction.

This module provides the main entry points: discover the addon folders
under a project root, resolve every folder concurrently, and merge the
results into one mapping ordered by addon prefix.
"""

import asyncio
import logging
import os
from typing import Any, Dict, List, Optional, Tuple

from core.structured_logging import phase_scope
from extraction.config import ADDONS_DIR_NAME, FUNCTIONS_DIR_NAME
from extraction.errors import DiscoveryError, NoAddonsFound
from extraction.file_io import list_subdirectories
from extraction.function_files import resolve_function_files
from extraction.models import (
    AddonFolder,
    FolderRecord,
    ReaderConfig,
    ReadResult,
    ReadStats,
    ResultMapping,
)

logger = logging.getLogger(__name__)


def prefix_sort_key(prefix: str) -> Tuple[str, str, str]:
    """Sort key for addon prefixes.

    Compares case-insensitively first, then puts lower case before upper
    case for names that differ only in case, then falls back to the raw
    string. The order does not depend on the process locale.

    Punctuation and digits compare by code point, unlike ICU collation:
    ``a-b < a1 < a_b`` here, where ICU gives ``a_b < a-b < a1``.

    Example:
        >>> sorted(["zeus", "Banana", "apple", "Apple"], key=prefix_sort_key)
        ['apple', 'Apple', 'Banana', 'zeus']
    """
    return (prefix.casefold(), prefix.swapcase(), prefix)


def addon_prefix(folder_path: str) -> str:
    """Return the addon prefix (final path segment) of a folder."""
    return os.path.basename(os.path.normpath(folder_path))


async def discover_addon_folders(root_dir: str) -> List[AddonFolder]:
    """List the addon folders directly under ``{root_dir}/addons``.

    Args:
        root_dir: Project root containing the ``addons`` directory.

    Returns:
        Addon folders in listing order (not sorted).

    Raises:
        DiscoveryError: If the addons directory cannot be listed.
        NoAddonsFound: If it contains no subdirectories.
    """
    addons_dir = os.path.join(os.path.abspath(root_dir), ADDONS_DIR_NAME)
    logger.info(f"Discovering addon folders in {addons_dir}")

    try:
        paths = await asyncio.to_thread(list_subdirectories, addons_dir)
    except OSError as e:
        raise DiscoveryError(f"Cannot walk {addons_dir}: {e}") from e

    if not paths:
        raise NoAddonsFound(f"Found no addon folders in {addons_dir}")

    logger.info(f"Found {len(paths)} folders")
    return [AddonFolder(path=p, prefix=addon_prefix(p)) for p in paths]


async def resolve_addon_folder(
    folder_path: str,
    config: ReaderConfig,
    semaphore: Optional[asyncio.Semaphore] = None,
) -> FolderRecord:
    """Resolve one addon folder into a FolderRecord.

    Failures from the function file resolver propagate unchanged.
    """
    prefix = addon_prefix(folder_path)
    functions_dir = os.path.join(folder_path, FUNCTIONS_DIR_NAME)
    record = await resolve_function_files(functions_dir, prefix, config, semaphore)
    logger.debug(f"Resolved {len(record.functions)} functions in {prefix}")
    return record


def sort_folder_records(records: List[FolderRecord]) -> List[FolderRecord]:
    """Order folder records by prefix using :func:`prefix_sort_key`."""
    return sorted(records, key=lambda r: prefix_sort_key(r.prefix))


def build_result_mapping(records: List[FolderRecord]) -> ResultMapping:
    """Merge folder records into a mapping ordered by prefix."""
    return {record.prefix: record.functions for record in sort_folder_records(records)}


async def read_addons(
    root_dir: str,
    config: Optional[ReaderConfig] = None,
) -> ReadResult:
    """Read every addon's function files under a project root.

    Folders and files are read concurrently. The first unrecovered error
    aborts the whole read; no partial mapping is returned.

    Args:
        root_dir: Project root containing ``addons/<prefix>/functions``.
        config: Reader configuration. Defaults to full-content mode.

    Returns:
        ReadResult with the prefix-ordered mapping, per-file warnings and
        statistics.

    Raises:
        DiscoveryError: If the addons directory cannot be walked.
        NoAddonsFound: If there are no addon folders.
        ListingError: If a functions directory cannot be listed.
        FileReadError: If a file cannot be read in full-content mode.

    Example:
        >>> result = asyncio.run(read_addons("/path/to/ACE3", ReaderConfig(only_comments=True)))
        >>> list(result.functions)
        ['advanced_ballistics', 'ai', ...]
    """
    config = config or ReaderConfig()
    stats = ReadStats()

    with phase_scope("discover"):
        folders = await discover_addon_folders(root_dir)
    stats.folders_found = len(folders)

    semaphore = asyncio.Semaphore(config.max_concurrent_reads)
    with phase_scope("resolve"):
        records = await asyncio.gather(
            *(resolve_addon_folder(f.path, config, semaphore) for f in folders)
        )

    ordered = sort_folder_records(list(records))
    mapping = build_result_mapping(ordered)
    warnings = [warning for record in ordered for warning in record.warnings]
    stats.files_processed = sum(len(fncs) for fncs in mapping.values())
    stats.warnings = len(warnings)

    logger.info(f"Read complete: {stats}")
    return ReadResult(functions=mapping, warnings=warnings, stats=stats)


async def read(
    root_dir: str,
    config: Optional[ReaderConfig] = None,
) -> ResultMapping:
    """Read addon functions and return only the prefix-ordered mapping.

    See :func:`read_addons` for arguments and errors.
    """
    result = await read_addons(root_dir, config)
    return result.functions


def read_sync(
    root_dir: str,
    config: Optional[ReaderConfig] = None,
) -> ReadResult:
    """Blocking wrapper around :func:`read_addons` for synchronous callers."""
    return asyncio.run(read_addons(root_dir, config))


def read_to_dict(
    root_dir: str,
    only_comments: bool = False,
) -> Dict[str, List[Dict[str, Any]]]:
    """Read addon functions and return the JSON-ready mapping.

    Example:
        >>> docs = read_to_dict("/path/to/ACE3", only_comments=True)
        >>> import json
        >>> json.dump(docs, open("docs.json", "w"), indent=2)
    """
    return read_sync(root_dir, ReaderConfig(only_comments=only_comments)).to_dict()
