"""MTGJSON SDK.

This library downloads MTGJSON parquet and JSON files from the CDN,
caches them locally, and exposes them as DuckDB views whose columns
adapt to upstream schema changes. It also simulates opening booster
packs using the published booster configuration.
"""

from ._version import __version__
from .booster import BoosterPackTemplate, BoosterSheetData, BoosterSimulator
from .cache import CacheEntry, CacheManager
from .client import MtgjsonSdk
from .connection import CanonicalValue, Connection
from .errors import (
    MtgjsonError,
    MtgjsonInvalidArgumentError,
    MtgjsonNetworkError,
    MtgjsonNotFoundError,
    MtgjsonUnsupportedTypeError,
)

__all__ = [
    "BoosterPackTemplate",
    "BoosterSheetData",
    "BoosterSimulator",
    "CacheEntry",
    "CacheManager",
    "CanonicalValue",
    "Connection",
    "MtgjsonError",
    "MtgjsonInvalidArgumentError",
    "MtgjsonNetworkError",
    "MtgjsonNotFoundError",
    "MtgjsonSdk",
    "MtgjsonUnsupportedTypeError",
    "__version__",
]
