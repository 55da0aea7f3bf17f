"""Tests for the mtgjson_sdk.cache.entry module."""

from pathlib import Path

import pytest
from filelock import BaseFileLock

from mtgjson_sdk import MtgjsonNotFoundError
from mtgjson_sdk.cache import FileKind, cache_entry, cache_entry_names
from mtgjson_sdk.config import CDN_BASE


class TestCacheEntry:
    """Tests for mapping logical names to cache entries."""

    def test_parquet_entry(self, tmp_path: Path):
        entry = cache_entry("card_legalities", tmp_path)
        assert entry.kind == FileKind.PARQUET
        assert entry.remote_path == "parquet/cardLegalities.parquet"
        assert entry.local_path == tmp_path / "parquet" / "cardLegalities.parquet"
        assert entry.url(CDN_BASE) == f"{CDN_BASE}/parquet/cardLegalities.parquet"

    def test_json_entry(self, tmp_path: Path):
        entry = cache_entry("meta", tmp_path)
        assert entry.kind == FileKind.JSON
        assert entry.local_path == tmp_path / "Meta.json"

    def test_unknown_entry(self, tmp_path: Path):
        with pytest.raises(MtgjsonNotFoundError, match="Unknown dataset: nope"):
            cache_entry("nope", tmp_path)

    def test_unknown_entry_is_file_not_found(self, tmp_path: Path):
        """Callers catching FileNotFoundError keep working."""
        with pytest.raises(FileNotFoundError):
            cache_entry("nope", tmp_path)

    def test_exists_and_tmp_path(self, tmp_path: Path):
        entry = cache_entry("sets", tmp_path)
        assert not entry.exists()
        assert entry.tmp_path() == tmp_path / "parquet" / "sets.parquet.tmp"
        entry.local_path.parent.mkdir(parents=True)
        entry.local_path.write_bytes(b"x")
        assert entry.exists()

    def test_lock(self, tmp_path: Path):
        entry = cache_entry("sets", tmp_path)
        lock = entry.lock()
        assert isinstance(lock, BaseFileLock)
        with lock:
            assert lock.is_locked
        assert Path(lock.lock_file) == tmp_path / "parquet" / "sets.parquet.lock"

    def test_names(self):
        names = cache_entry_names()
        assert names[0] == "cards"
        assert "set_booster_sheet_cards" in names
        assert names[-1] == "meta"
        assert len(names) == len(set(names))
