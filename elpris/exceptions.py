"""
Exception hierarchy for the spot price dashboard.

All dashboard-specific exceptions derive from ElprisError so callers can
catch every domain failure uniformly.
"""


class ElprisError(Exception):
    """Base class for dashboard errors."""


class ValidationError(ElprisError):
    """Raw price input is malformed or empty.

    Named after the dashboard concern, not pydantic's ValidationError.
    """


class CacheIntegrityError(ElprisError):
    """A window contains records that were never normalized."""


class NoDataError(ElprisError):
    """No usable record window exists in any time direction."""


class NetworkError(ElprisError):
    """Neither the price API nor any fallback proxy could be reached."""


class InvalidFormatError(ElprisError):
    """The price API answered with something other than a JSON list."""


class PreferenceStorageError(ElprisError):
    """A preference backend failed to read or write a value."""


__all__ = [
    "ElprisError",
    "ValidationError",
    "CacheIntegrityError",
    "NoDataError",
    "NetworkError",
    "InvalidFormatError",
    "PreferenceStorageError",
]
