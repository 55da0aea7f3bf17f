"""Errors raised by the SDK.

Every class also derives from the builtin exception that code written
before this hierarchy existed would catch, so `except FileNotFoundError`
keeps working for a missing dataset and `except ValueError` for a bad
argument.

Errors from the DuckDB engine (`duckdb.Error`) and from the filesystem
(`OSError`) are not wrapped: they propagate unmodified.
"""


class MtgjsonError(Exception):
    """Base class for all the SDK errors."""


class MtgjsonNotFoundError(MtgjsonError, FileNotFoundError):
    """
    The requested data is not available.

    Raised for unknown logical dataset names, files that are missing while
    offline, absent booster configuration, and cache files that were found
    corrupt and removed. In the last case retrying downloads a fresh copy.
    """


class MtgjsonInvalidArgumentError(MtgjsonError, ValueError):
    """The caller supplied malformed input. Retrying does not help."""


class MtgjsonNetworkError(MtgjsonError, ConnectionError):
    """A download failed at the transport or HTTP level."""


class MtgjsonUnsupportedTypeError(MtgjsonError, TypeError):
    """A query returned a native value with no canonical representation."""
