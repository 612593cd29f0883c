"""Exception hierarchy for the Linnaeus classifier."""

from __future__ import annotations


class LinnaeusError(Exception):
    """Base class for every error raised by this package."""


class ConfigurationError(LinnaeusError, ValueError):
    """Malformed or missing configuration.

    Raised while a classifier or corpus store is being constructed, never
    from an individual classification call.
    """


class BackendError(LinnaeusError):
    """A corpus store or stopword source could not be read.

    The underlying library error is always attached as ``__cause__``.
    """
