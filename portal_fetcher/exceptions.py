"""
Exceptions raised at the outer surface (CLI, settings validation).

The extraction engine and the download flow never raise these; they log
and return an empty or absent result instead.
"""


class PortalFetcherError(Exception):
    """Base exception for all application-specific errors."""


class ConfigurationError(PortalFetcherError):
    """Raised when a required setting is missing."""
