"""
Defines custom exceptions for the application to allow for more specific error handling.
"""


class CaniuseCliError(Exception):
    """Base exception for all application-specific errors."""


class ConfigurationError(CaniuseCliError):
    """Raised for issues related to configuration loading or validation."""


class DatabaseFetchError(CaniuseCliError):
    """Raised when the feature database cannot be downloaded or decoded."""


class FeatureNotFoundError(CaniuseCliError):
    """Raised when a query does not name a known feature."""


class CacheError(CaniuseCliError):
    """Raised when a cache entry exists but cannot be trusted."""


class StaleCacheError(CacheError):
    """Raised when a cache entry is older than its time-to-live."""


class CorruptCacheError(CacheError):
    """Raised when a cache entry cannot be decoded or encoded."""


class RemoteUnavailableError(CaniuseCliError):
    """Raised when the latest release cannot be determined."""
