"""
Content root validation for spahost.

This module resolves the configured build directory once at startup and
checks that it can actually be served.
"""

import logging
import os
import stat
from typing import NamedTuple

from core.errors import ConfigInvalidError, IndexMissingError, RootMissingError

logger = logging.getLogger(__name__)

INDEX_FILE = "index.html"


class ContentRoot(NamedTuple):
    """Absolute paths of the served directory and its index document."""
    root: str
    index_path: str


def resolve_content_root(directory: str) -> ContentRoot:
    """
    Resolve and validate the directory to serve.

    Args:
        directory: Configured directory, absolute or relative to the cwd

    Returns:
        ContentRoot: Absolute root and index.html paths

    Raises:
        ConfigInvalidError: If the path cannot be made absolute
        RootMissingError: If the path is missing or not a directory
        IndexMissingError: If index.html is missing from the directory
    """
    if "\x00" in directory:
        raise ConfigInvalidError(f"invalid directory: {directory!r} contains a NUL byte", path=directory)
    try:
        root = os.path.abspath(directory)
    except OSError as e:
        # Relative paths need the cwd, which may have been removed
        raise ConfigInvalidError(f"invalid directory: {directory}: {e}", path=directory) from e

    try:
        root_stat = os.stat(root)
    except OSError as e:
        raise RootMissingError(f"build directory does not exist: {root}", path=root) from e
    if not stat.S_ISDIR(root_stat.st_mode):
        raise RootMissingError(f"build directory is not a directory: {root}", path=root)

    index_path = os.path.join(root, INDEX_FILE)
    try:
        index_stat = os.stat(index_path)
    except OSError as e:
        raise IndexMissingError(f"index.html not found in build directory: {index_path}", path=index_path) from e
    if not stat.S_ISREG(index_stat.st_mode):
        raise IndexMissingError(f"index.html is not a regular file: {index_path}", path=index_path)

    logger.debug("Content root resolved to %s", root)
    return ContentRoot(root=root, index_path=index_path)
