"""
Exception types for the ff15 file finder.
"""

from typing import Optional


class FinderError(Exception):
    """Base class for all ff15 errors."""
    pass


class ConfigurationError(FinderError):
    """Raised when configuration parsing or validation fails."""
    pass


class RevealError(FinderError):
    """Raised when the host file manager cannot be asked to show a file."""
    
    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message)
        self.path = path


class UnsupportedPlatformError(RevealError):
    """Raised when no file manager integration exists for the current platform."""
    pass
