"""
Startup errors for spahost.

Every failure that stops the server before it starts listening is a
StartupError. The entrypoint logs it and exits non-zero; nothing retries.
"""

from typing import Optional


class StartupError(Exception):
    """Base class for fatal startup failures."""

    kind = "STARTUP_FAILED"

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message)
        self.path = path

    def __str__(self):
        return f"{self.kind}: {self.args[0]}"


class ConfigInvalidError(StartupError):
    """The configured directory cannot be resolved to an absolute path."""
    kind = "CONFIG_INVALID"


class RootMissingError(StartupError):
    """The resolved content root does not exist or is not a directory."""
    kind = "ROOT_MISSING"


class IndexMissingError(StartupError):
    """The content root has no index.html."""
    kind = "INDEX_MISSING"


class BindFailedError(StartupError):
    """The listener could not be started on the requested address."""
    kind = "BIND_FAILED"
