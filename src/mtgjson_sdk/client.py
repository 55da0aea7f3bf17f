"""Module containing the MtgjsonSdk session object."""

from __future__ import annotations

import logging
import random
import threading
from collections.abc import Sequence
from pathlib import Path
from typing import Any

import pandas as pd

from .booster import BoosterSimulator
from .cache import CacheManager, ProgressCallback
from .config import DEFAULT_TIMEOUT
from .connection import CanonicalValue, Connection
from .errors import MtgjsonNetworkError, MtgjsonNotFoundError

log = logging.getLogger("client")


class MtgjsonSdk:
    """
    Query session for MTGJSON card data.

    Owns one CacheManager and one DuckDB Connection for its whole
    lifetime. Data is downloaded lazily from the MTGJSON CDN, cached on
    disk, and exposed as DuckDB views.

    The session is meant to be driven by a single logical caller. When
    sharing it across threads, hold `sdk.lock` around every call.

    Usage::

        with MtgjsonSdk() as sdk:
            pack = sdk.booster.open_pack("MH3", "draft")
            sdk.connection.ensure_views("cards")
            rows = sdk.sql("SELECT name FROM cards WHERE manaValue = ? LIMIT 5", [1])
    """

    def __init__(
        self,
        cache_dir: str | Path | None = None,
        *,
        offline: bool = False,
        timeout: float = DEFAULT_TIMEOUT,
        progress: bool = False,
        on_progress: ProgressCallback | None = None,
        strict_types: bool = False,
        rng: random.Random | None = None,
        seed: int | None = None,
    ) -> None:
        """
        Initialize the SDK.

        Parameters:
            cache_dir: Directory for cached data files (default: platform cache dir).
            offline: If True, never download from the CDN.
            timeout: Per-request HTTP timeout in seconds.
            progress: If True, show progress bars while downloading.
            on_progress: Optional `(filename, downloaded, total)` callback.
            strict_types: If True, fail on values without a canonical form.
            rng: Random generator used by the booster simulator.
            seed: Seed for the booster simulator random generator.
        """
        self._cache = CacheManager(
            cache_dir,
            offline=offline,
            timeout=timeout,
            progress=progress,
            on_progress=on_progress,
        )
        self._conn = Connection(self._cache, strict_types=strict_types)
        self._rng = rng
        self._seed = seed
        self._booster: BoosterSimulator | None = None

    @property
    def cache(self) -> CacheManager:
        return self._cache

    @property
    def connection(self) -> Connection:
        return self._conn

    @property
    def lock(self) -> threading.RLock:
        """The lock serializing access to the session."""
        return self._conn.lock

    @property
    def booster(self) -> BoosterSimulator:
        """
        Simulate opening booster packs using set configuration data.

        Example::

            pack = sdk.booster.open_pack("MH3", "draft")
        """
        if self._booster is None:
            self._booster = BoosterSimulator(self._conn, rng=self._rng, seed=self._seed)
        return self._booster

    @property
    def views(self) -> list[str]:
        """List the currently registered views (they are registered lazily)."""
        return self._conn.views

    def meta(self) -> dict[str, Any]:
        """
        Return the MTGJSON build metadata.

        Returns an empty dict when the metadata is not cached and cannot
        be downloaded.
        """
        try:
            document = self._cache.load_json("meta")
        except (MtgjsonNotFoundError, MtgjsonNetworkError) as exc:
            log.warning("cannot load metadata: %s", exc)
            return {}
        return document if isinstance(document, dict) else {}

    def sql(
        self,
        query: str,
        params: Sequence[Any] | None = None,
        *,
        as_dataframe: bool = False,
    ) -> list[dict[str, CanonicalValue]] | pd.DataFrame:
        """
        Execute raw SQL against the DuckDB database.

        Views are registered lazily: use `sdk.connection.ensure_views(...)`
        before querying a view no other call has touched yet.

        Returns:
            A list of row dicts, or a pandas DataFrame if `as_dataframe`.
        """
        if as_dataframe:
            return self._conn.execute_df(query, params)
        return self._conn.execute(query, params)

    def refresh(self) -> bool:
        """
        Check for a new MTGJSON release and reset the session if stale.

        When stale, we clear the cache directory and the view registry, so
        the next access downloads and registers fresh data. Safe to call
        periodically from long-running processes.

        Returns:
            True if the data was stale (and the state was reset).
        """
        with self._conn.lock:
            self._cache.remote_version(refresh=True)
            if not self._cache.is_stale():
                return False
            self._cache.clear()
            self._conn.reset_views()
            self._booster = None
        log.info("data was stale; cache cleared and views reset")
        return True

    def export_db(self, path: Path | str) -> Path:
        """Export all registered views to a standalone `.duckdb` file."""
        return self._conn.export_db(path)

    def close(self) -> None:
        """Close the DuckDB connection and the HTTP session."""
        self._conn.close()
        self._cache.close()

    def __enter__(self) -> MtgjsonSdk:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def __repr__(self) -> str:
        return (
            f"MtgjsonSdk(cache_dir={str(self._cache.cache_dir)!r}, "
            f"views={self.views!r}, offline={self._cache.offline})"
        )
