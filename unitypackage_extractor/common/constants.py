"""
Constants and exit codes for the UnityPackage extractor.
"""

import re


class ExitCodes:
    """Exit codes for different error conditions."""
    OK = 0
    FAILURE = 1
    USAGE = 2
    INPUT_ERROR = 3
    ARCHIVE_ERROR = 4
    IO_ERROR = 5
    PATH_TRAVERSAL = 6
    INTERRUPTED = 130


# Members of a hashed entry directory
PATHNAME_MEMBER = 'pathname'
ASSET_MEMBER = 'asset'

STAGING_PREFIX = 'unitypackage-'
COPY_CHUNK_SIZE = 64 * 1024

# > : " | ? * < and control characters are forbidden in Windows filenames
WINDOWS_INVALID_CHARS = re.compile(r'[<>:"|?*\x00-\x1f]')
WINDOWS_DRIVE_PREFIX = re.compile(r'^[A-Za-z]:')
WINDOWS_RESERVED_NAMES = frozenset({
    'CON', 'PRN', 'AUX', 'NUL',
    'COM1', 'COM2', 'COM3', 'COM4', 'COM5', 'COM6', 'COM7', 'COM8', 'COM9',
    'LPT1', 'LPT2', 'LPT3', 'LPT4', 'LPT5', 'LPT6', 'LPT7', 'LPT8', 'LPT9',
})
REPLACEMENT_CHAR = '_'

LOG_LEVEL_ENV = 'UNITYPACKAGE_LOG_LEVEL'
TEMP_DIR_ENV = 'UNITYPACKAGE_TEMP_DIR'
