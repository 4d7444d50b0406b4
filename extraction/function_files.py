"""
Function file resolution for a single addon.

Lists an addon's ``functions`` directory, selects the function files, and
extracts each one concurrently (full text or header comment only).
"""

import asyncio
import logging
import os
import re
from typing import List, Optional, Sequence, Tuple

from extraction.config import FUNCTION_FILE_PREFIX, FUNCTION_NAME_PREFIX
from extraction.errors import HeaderCommentError, ListingError
from extraction.file_io import list_directory, read_text_file
from extraction.header_scanner import scan_header_comment
from extraction.models import (
    ExtractedFunction,
    ExtractionWarning,
    FolderRecord,
    FunctionFile,
    ReaderConfig,
)

logger = logging.getLogger(__name__)


def _function_file_re(extensions: Sequence[str]) -> "re.Pattern[str]":
    alternatives = "|".join(re.escape(ext.lstrip(".")) for ext in extensions)
    return re.compile(
        rf"^{re.escape(FUNCTION_FILE_PREFIX)}.*\.(?:{alternatives})$",
        re.IGNORECASE,
    )


def is_function_file(filename: str, extensions: Sequence[str]) -> bool:
    """Check whether a filename follows the ``fn*.<ext>`` convention.

    The match is case-insensitive, so ``FNfoo.SQF`` qualifies.
    """
    return _function_file_re(extensions).match(filename) is not None


def derive_function_name(
    prefix: str,
    filename: str,
    name_prefix: str = FUNCTION_NAME_PREFIX,
) -> str:
    """Build the canonical function name for a file.

    Only the extension is stripped; the ``fn`` part of the filename is kept.

    Example:
        >>> derive_function_name("medical", "fnDoStuff.sqf")
        'ACE_medical_fnDoStuff'
    """
    stem = os.path.splitext(filename)[0]
    return f"{name_prefix}_{prefix}_{stem}"


async def list_function_files(
    functions_dir: str,
    prefix: str,
    config: ReaderConfig,
) -> List[FunctionFile]:
    """List the function files of an addon in extraction order.

    Args:
        functions_dir: Path to the addon's ``functions`` directory.
        prefix: Addon prefix used for derived names.
        config: Reader configuration.

    Returns:
        Function files sorted by filename (code point order). Empty when the
        directory does not exist.

    Raises:
        ListingError: If the directory exists but cannot be listed.
    """
    try:
        entries = await asyncio.to_thread(list_directory, functions_dir)
    except FileNotFoundError:
        logger.debug(f"No functions directory in {prefix}")
        return []
    except OSError as e:
        raise ListingError(f"Cannot list {functions_dir}: {e}") from e

    pattern = _function_file_re(config.extensions)
    filenames = sorted(name for name in entries if pattern.match(name))

    return [
        FunctionFile(
            path=os.path.abspath(os.path.join(functions_dir, name)),
            derived_name=derive_function_name(
                prefix, name, config.function_name_prefix
            ),
        )
        for name in filenames
    ]


async def _extract_function(
    fnc_file: FunctionFile,
    config: ReaderConfig,
    semaphore: asyncio.Semaphore,
) -> Tuple[ExtractedFunction, Optional[ExtractionWarning]]:
    async with semaphore:
        if not config.only_comments:
            text = await asyncio.to_thread(read_text_file, fnc_file.path)
            return ExtractedFunction(name=fnc_file.derived_name, text=text), None

        try:
            text = await asyncio.to_thread(scan_header_comment, fnc_file.path)
        except HeaderCommentError as e:
            reason = e.reason
        except (OSError, UnicodeDecodeError) as e:
            reason = f"read error: {e}"
        else:
            return ExtractedFunction(name=fnc_file.derived_name, text=text), None

    logger.warning(f"{fnc_file.path} - {reason}")
    warning = ExtractionWarning(file_path=fnc_file.path, reason=reason)
    return ExtractedFunction(name=fnc_file.derived_name, text=""), warning


async def resolve_function_files(
    functions_dir: str,
    prefix: str,
    config: ReaderConfig,
    semaphore: Optional[asyncio.Semaphore] = None,
) -> FolderRecord:
    """Extract every function file of one addon.

    Files are processed concurrently; the result keeps filename order no
    matter which read completes first.

    Args:
        functions_dir: Path to the addon's ``functions`` directory.
        prefix: Addon prefix.
        config: Reader configuration. ``only_comments`` selects header
            comment extraction instead of full file contents.
        semaphore: Shared limit on in-flight reads. A private one sized by
            ``config.max_concurrent_reads`` is created when omitted.

    Returns:
        FolderRecord with functions in filename order and any per-file
        documentation warnings.

    Raises:
        ListingError: If the functions directory cannot be listed.
        FileReadError: If a file cannot be read in full-content mode.
    """
    if semaphore is None:
        semaphore = asyncio.Semaphore(config.max_concurrent_reads)

    fnc_files = await list_function_files(functions_dir, prefix, config)
    results = await asyncio.gather(
        *(_extract_function(f, config, semaphore) for f in fnc_files)
    )

    record = FolderRecord(prefix=prefix)
    for extracted, warning in results:
        record.functions.append(extracted)
        if warning is not None:
            record.warnings.append(warning)
    return record
