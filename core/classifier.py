"""
Request path classification for spahost.

Decides, per request path, whether the file server or the SPA index answers.
"""

import os
import posixpath
import stat
from enum import Enum


class Disposition(str, Enum):
    """Routing decision for a single request."""
    SERVE_FILE = "serve_file"
    SERVE_ASSET_PREFIX = "serve_asset_prefix"
    SERVE_INDEX_FALLBACK = "serve_index_fallback"


# Output folders of common bundlers (Vite, SvelteKit); a miss under these is a 404
ASSET_PREFIXES = ("/assets", "/_app")


def clean_relative_path(url_path: str) -> str:
    """
    Lexically clean a URL path and make it relative.

    The path is normalized as a rooted path first, so ".." segments stop at
    the root instead of climbing above it.
    """
    cleaned = posixpath.normpath("/" + url_path)
    return cleaned.lstrip("/")


def is_regular_file(path: str) -> bool:
    try:
        return stat.S_ISREG(os.stat(path).st_mode)
    except (OSError, ValueError):
        return False


def classify(url_path: str, root: str) -> Disposition:
    """
    Classify a request path against the content root.

    Args:
        url_path: Decoded request path, e.g. "/users/42"
        root: Absolute content root

    Returns:
        Disposition: SERVE_FILE for an existing regular file,
            SERVE_ASSET_PREFIX for other paths under an asset prefix,
            SERVE_INDEX_FALLBACK for everything else
    """
    candidate = os.path.join(root, clean_relative_path(url_path))
    if is_regular_file(candidate):
        return Disposition.SERVE_FILE

    # Literal prefix match on the raw path, not the cleaned one
    if url_path.startswith(ASSET_PREFIXES):
        return Disposition.SERVE_ASSET_PREFIX

    return Disposition.SERVE_INDEX_FALLBACK
