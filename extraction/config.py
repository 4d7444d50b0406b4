"""
Configuration constants for ACE3 addon function extraction.

Defines the directory layout, file naming convention and header comment
rules used when reading addon function documentation.
"""

from typing import Tuple

# Directory under the project root that holds one folder per addon
ADDONS_DIR_NAME: str = "addons"

# Subfolder of each addon holding its function files
FUNCTIONS_DIR_NAME: str = "functions"

# Function files are named fn<Name>.<ext> (matched case-insensitively)
FUNCTION_FILE_PREFIX: str = "fn"

# SQF source file extensions
FUNCTION_FILE_EXTENSIONS: Tuple[str, ...] = (
    ".sqf",
)

# Derived names look like ACE_<prefix>_<file stem>
FUNCTION_NAME_PREFIX: str = "ACE"

# Separator used to join stripped header comment lines
COMMENT_LINE_SEPARATOR: str = "\r\n"

# The header comment must open on one of the first N non-blank lines
MAX_HEADER_START_LINE: int = 2

# Fewer non-blank lines than this is reported as an empty file
MIN_FILE_LINES: int = 2

# Upper bound on file reads in flight at once
DEFAULT_MAX_CONCURRENT_READS: int = 64

# Encoding used for every function file read
FILE_ENCODING: str = "utf-8"

# Header scans drop a leading byte order mark
HEADER_FILE_ENCODING: str = "utf-8-sig"
