"""
Errors
======

Exception types raised by the generation pipeline.
"""


class SlopesError(Exception):
    """Base class for all errors raised by this package."""
    pass


class InvalidConfigurationError(SlopesError, ValueError):
    """Raised when a generation config would produce no drawable region."""
    pass
