"""Module containing the version-aware CacheManager implementation."""

from __future__ import annotations

import gzip
import json
import logging
import os
import shutil
import zlib
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import requests
from tqdm import tqdm
from tqdm.contrib.logging import logging_redirect_tqdm

from ..config import (
    CDN_BASE,
    DEFAULT_TIMEOUT,
    META_URL,
    TMP_SUFFIX,
    VERSION_FILENAME,
    cache_dir_or_default,
)
from ..errors import MtgjsonNetworkError, MtgjsonNotFoundError
from .entry import CacheEntry, FileKind, cache_entry, cache_entry_names
from .meta import meta_version

log = logging.getLogger("cache/manager")

ProgressCallback = Callable[[str, int, int | None], None]
"""Called as `(filename, bytes_downloaded, total_bytes_or_None)`."""

_CHUNK_SIZE = 8192


@dataclass(frozen=True, kw_only=True)
class CacheEntryStatus:
    """
    On-disk status of a cache entry.

    Attributes:
        entry: the cache entry
        size: the file size in bytes or None when the file is missing
    """

    entry: CacheEntry
    size: int | None

    @property
    def present(self) -> bool:
        return self.size is not None


class CacheManager:
    """
    Downloads and caches MTGJSON data files from the CDN.

    The manager compares the local version token (`version.txt`) with the
    one published in Meta.json and re-downloads files when stale. Files
    are downloaded lazily on first access.

    Network failures while checking the version are logged and swallowed,
    so ordinary query paths keep working when the CDN is unreachable.
    Download failures are surfaced as MtgjsonNetworkError.

    The manager is not internally synchronized: a single logical owner
    must drive it at any given time.
    """

    def __init__(
        self,
        cache_dir: str | Path | None = None,
        *,
        offline: bool = False,
        timeout: float = DEFAULT_TIMEOUT,
        progress: bool = False,
        on_progress: ProgressCallback | None = None,
    ) -> None:
        """
        Initialize the cache manager and create the cache directory.

        Parameters:
            cache_dir: Directory for cached data files. If None, defaults
                to the platform cache directory.
            offline: If True, never contact the CDN and only use cached files.
            timeout: Per-request HTTP timeout in seconds.
            progress: If True, show a tqdm progress bar while downloading.
            on_progress: Optional callback invoked for each downloaded chunk.
        """
        self.cache_dir = cache_dir_or_default(cache_dir)
        self.cache_dir.mkdir(parents=True, exist_ok=True)
        self.offline = offline
        self.timeout = timeout
        self.progress = progress
        self.on_progress = on_progress
        self._session: requests.Session | None = None
        self._remote_version: str | None = None
        self._remote_checked = False

    @property
    def version_file(self) -> Path:
        """Return the path of the local version token."""
        return self.cache_dir / VERSION_FILENAME

    def session(self) -> requests.Session:
        """Return the lazily-created HTTP session."""
        if self._session is None:
            self._session = requests.Session()
        return self._session

    def local_version(self) -> str | None:
        """Return the locally cached version token or None."""
        try:
            version = self.version_file.read_text(encoding="utf-8").strip()
        except FileNotFoundError:
            return None
        return version or None

    def save_version(self, version: str) -> None:
        """Persist the given version token as the local one."""
        self.version_file.write_text(version, encoding="utf-8")

    def remote_version(self, *, refresh: bool = False) -> str | None:
        """
        Fetch the current dataset version from Meta.json on the CDN.

        The outcome is memoized for the lifetime of the manager, failures
        included, so an unreachable CDN costs one request per session.
        Pass `refresh=True` to forget the memoized outcome and ask again.

        Returns:
            The version token (e.g., "5.2.2+20240101") or None when offline,
            when the CDN is unreachable, or when the document does not
            contain a version. None means "cannot verify", never "stale".
        """
        if refresh:
            self._remote_version = None
            self._remote_checked = False
        if self._remote_checked:
            return self._remote_version
        if self.offline:
            return None

        self._remote_checked = True

        log.debug("checking remote version... start")
        try:
            resp = self.session().get(META_URL, timeout=self.timeout)
            resp.raise_for_status()
            document = resp.json()
        except (requests.RequestException, ValueError) as exc:
            log.warning("checking remote version... failure: %s", exc)
            return None

        version = meta_version(document)
        if version is None:
            log.warning("checking remote version... failure: no version in %s", META_URL)
            return None

        log.debug("checking remote version... ok: %s", version)
        self._remote_version = version
        return version

    def is_stale(self) -> bool:
        """
        Return whether the local cache is out of date.

        True when there is no local version token or when the CDN
        publishes a different one. False when up to date or when the
        remote version cannot be determined.
        """
        local = self.local_version()
        if local is None:
            return True
        remote = self.remote_version()
        if remote is None:
            return False
        return local != remote

    def entry(self, name: str) -> CacheEntry:
        """
        Return the cache entry for the given logical dataset name.

        Raises:
            MtgjsonNotFoundError: if the name is unknown.
        """
        return cache_entry(name, self.cache_dir)

    def ensure_file(self, name: str) -> Path:
        """
        Ensure the file for the given logical dataset is cached locally.

        We download when the file is missing or the cache is stale. When
        offline, an existing file is returned as-is.

        Returns:
            The local path of the cached file.

        Raises:
            MtgjsonNotFoundError: if the name is unknown, or if the file is
                missing and offline mode is enabled.
            MtgjsonNetworkError: if the download fails.
        """
        entry = self.entry(name)
        if entry.exists() and not self.is_stale():
            return entry.local_path

        if self.offline:
            if entry.exists():
                return entry.local_path
            raise MtgjsonNotFoundError(
                f"{entry.remote_path} not cached and offline mode is enabled"
            )

        self.download(name)

        version = self.remote_version()
        if version is not None:
            self.save_version(version)
        return entry.local_path

    def ensure_parquet(self, name: str) -> Path:
        """Same as `ensure_file` but the dataset must be a parquet file."""
        entry = self.entry(name)
        if entry.kind != FileKind.PARQUET:
            raise MtgjsonNotFoundError(f"Unknown parquet view: {name}")
        return self.ensure_file(name)

    def ensure_json(self, name: str) -> Path:
        """Same as `ensure_file` but the dataset must be a JSON document."""
        entry = self.entry(name)
        if entry.kind == FileKind.PARQUET:
            raise MtgjsonNotFoundError(f"Unknown JSON file: {name}")
        return self.ensure_file(name)

    def download(self, name: str, dest: Path | None = None) -> Path:
        """
        Download a single file from the CDN.

        We write to a `.tmp` sibling in the destination directory and use
        `os.replace()` on success, so the final path never contains a
        partially-written file. On failure the `.tmp` file is removed.

        Arguments:
            name: the logical dataset name.
            dest: optional destination (default: the entry local path).

        Returns:
            The destination path.

        Raises:
            MtgjsonNetworkError: on transport or HTTP errors.
            OSError: on filesystem errors.
        """
        entry = self.entry(name)
        if dest is None:
            dest, tmp_file = entry.local_path, entry.tmp_path()
        else:
            dest = Path(dest)
            tmp_file = dest.with_name(dest.name + TMP_SUFFIX)
        url = entry.url(CDN_BASE)
        dest.parent.mkdir(parents=True, exist_ok=True)

        log.info("fetching %s... start", url)
        done = False
        try:
            self._fetch(url, tmp_file, display_name=dest.name)
            os.replace(tmp_file, dest)
            done = True
        except requests.RequestException as exc:
            log.warning("fetching %s... failure: %s", url, exc)
            raise MtgjsonNetworkError(f"cannot download {url}: {exc}") from exc
        finally:
            if not done:
                tmp_file.unlink(missing_ok=True)
        log.info("fetching %s... ok", url)
        return dest

    def _fetch(self, url: str, tmp_file: Path, *, display_name: str) -> None:
        resp = self.session().get(url, stream=True, timeout=self.timeout)
        try:
            resp.raise_for_status()
            total = resp.headers.get("Content-Length")
            total = int(total) if total is not None else None
            downloaded = 0

            with (
                open(tmp_file, "wb") as filep,
                logging_redirect_tqdm(),
                tqdm(
                    total=total,
                    unit="B",
                    unit_scale=True,
                    unit_divisor=1024,
                    desc=display_name,
                    leave=False,
                    disable=not self.progress,
                ) as pbar,
            ):
                for chunk in resp.iter_content(chunk_size=_CHUNK_SIZE):
                    if not chunk:
                        continue
                    filep.write(chunk)
                    downloaded += len(chunk)
                    pbar.update(len(chunk))
                    if self.on_progress is not None:
                        self.on_progress(display_name, downloaded, total)
        finally:
            resp.close()

    def load_json(self, name: str) -> Any:
        """
        Load and parse a JSON document, handling `.gz` transparently.

        If the cached file is corrupt (e.g., truncated download, disk
        error) we remove it, so that the next call downloads a fresh copy.

        Raises:
            MtgjsonNotFoundError: if the document is not available or was
                corrupt and has been removed (retry to download again).
            MtgjsonNetworkError: if the download fails.
        """
        path = self.ensure_json(name)
        try:
            return _read_json(path)
        except (ValueError, EOFError, gzip.BadGzipFile, zlib.error) as exc:
            log.warning("corrupt cache file %s: %s -- removing", path, exc)
            path.unlink(missing_ok=True)
            raise MtgjsonNotFoundError(
                f"Cache file '{path.name}' was corrupt and has been removed. "
                f"Retry to re-download. Original error: {exc}"
            ) from exc

    def clear(self) -> None:
        """Remove all cached files and recreate the cache directory."""
        if self.cache_dir.exists():
            shutil.rmtree(self.cache_dir)
        self.cache_dir.mkdir(parents=True, exist_ok=True)
        log.info("cleared cache directory %s", self.cache_dir)

    def status(self) -> list[CacheEntryStatus]:
        """Return the on-disk status of every known dataset."""
        result = []
        for name in cache_entry_names():
            entry = self.entry(name)
            try:
                size = entry.local_path.stat().st_size
            except FileNotFoundError:
                size = None
            result.append(CacheEntryStatus(entry=entry, size=size))
        return result

    def close(self) -> None:
        """Close the HTTP session, if open."""
        if self._session is not None:
            self._session.close()
            self._session = None

    def __repr__(self) -> str:
        return f"CacheManager(cache_dir={str(self.cache_dir)!r}, offline={self.offline})"


def _read_json(path: Path) -> Any:
    if path.suffix == ".gz":
        with gzip.open(path, "rt", encoding="utf-8") as filep:
            return json.load(filep)
    with open(path, encoding="utf-8") as filep:
        return json.load(filep)
