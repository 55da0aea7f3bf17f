"""Module mapping logical dataset names to on-disk cache entries."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from filelock import BaseFileLock, FileLock

from ..config import JSON_FILES, LOCK_SUFFIX, PARQUET_FILES, TMP_SUFFIX
from ..errors import MtgjsonNotFoundError


class FileKind(str, Enum):
    """Enumerate the kinds of files the cache stores."""

    PARQUET = "parquet"
    JSON = "json"
    JSON_GZ = "json.gz"


@dataclass(frozen=True, kw_only=True)
class CacheEntry:
    """
    Reference to a single cached dataset file.

    The entry is lazy: the file may not exist on disk until the
    CacheManager downloads it.

    Attributes:
        name: the logical dataset name (e.g., "cards")
        remote_path: path relative to the CDN base URL
        local_path: absolute path of the cached file
        kind: the kind of file
    """

    name: str
    remote_path: str
    local_path: Path
    kind: FileKind

    def url(self, base: str) -> str:
        """Return the URL from which to download this entry."""
        return f"{base}/{self.remote_path}"

    def tmp_path(self) -> Path:
        """Return the path of the sibling used while downloading."""
        return self.local_path.with_name(self.local_path.name + TMP_SUFFIX)

    def exists(self) -> bool:
        """Return True if the entry file exists, False otherwise."""
        return self.local_path.exists()

    def lock(self) -> BaseFileLock:
        """
        Return a FileLock locking the entry.

        The cache manager itself never takes this lock. Callers that want
        to serialize downloads across processes (e.g., the CLI) may hold
        it around `CacheManager.ensure_file`.
        """
        lock_file_path = self.local_path.with_name(self.local_path.name + LOCK_SUFFIX)
        lock_file_path.parent.mkdir(parents=True, exist_ok=True)
        return FileLock(lock_file_path)


def _kind_for(name: str) -> tuple[str, FileKind]:
    if name in PARQUET_FILES:
        return PARQUET_FILES[name], FileKind.PARQUET
    if name in JSON_FILES:
        remote_path = JSON_FILES[name]
        if remote_path.endswith(".gz"):
            return remote_path, FileKind.JSON_GZ
        return remote_path, FileKind.JSON
    raise MtgjsonNotFoundError(f"Unknown dataset: {name}")


def cache_entry(name: str, cache_dir: Path) -> CacheEntry:
    """
    Return the cache entry for the given logical dataset name.

    Raises:
        MtgjsonNotFoundError: if the name is not in the dataset table.
    """
    remote_path, kind = _kind_for(name)
    return CacheEntry(
        name=name,
        remote_path=remote_path,
        local_path=cache_dir / remote_path,
        kind=kind,
    )


def cache_entry_names() -> list[str]:
    """Return all the logical dataset names, parquet first."""
    return [*PARQUET_FILES, *JSON_FILES]
