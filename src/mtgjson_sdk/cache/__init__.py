"""Package managing the local cache of MTGJSON data files.

The `CacheManager` translates a logical dataset name (e.g., "cards") into
a file guaranteed to be present on disk, downloading it from the CDN when
missing or stale.

On-Disk Format
--------------

Given the cache directory $cachedir (by default a platform cache
directory, see `mtgjson_sdk.config.default_cache_dir`), we store:

    $cachedir/version.txt
    $cachedir/parquet/{Table}.parquet
    $cachedir/{Document}.json[.gz]

The `version.txt` file contains the plain-text version token of the
dataset build we last downloaded. When it is missing the cache is
considered stale.

While downloading, the file is written to a `.tmp`-suffixed sibling and
atomically renamed into place on success, so readers never observe a
partially-written file. Concurrent writers in different processes are
not coordinated: the last rename wins. Use `CacheEntry.lock()` if you
need to serialize them.

Staleness
---------

We compare the local token with the one published by Meta.json, which
may live at either `data.version` or `meta.version`. When the CDN cannot
be reached we optimistically assume the cache is fresh.
"""

from .entry import CacheEntry, FileKind, cache_entry, cache_entry_names
from .manager import CacheEntryStatus, CacheManager, ProgressCallback
from .meta import meta_version

__all__ = [
    "CacheEntry",
    "CacheEntryStatus",
    "CacheManager",
    "FileKind",
    "ProgressCallback",
    "cache_entry",
    "cache_entry_names",
    "meta_version",
]
