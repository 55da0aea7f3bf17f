"""Tests for the mtgjson_sdk.config module."""

from pathlib import Path

from mtgjson_sdk import config


class TestDefaultCacheDir:
    """Tests for the platform cache directory."""

    def test_linux(self, monkeypatch, tmp_path: Path):
        monkeypatch.setattr(config.platform, "system", lambda: "Linux")
        monkeypatch.setattr(Path, "home", lambda: tmp_path)
        assert config.default_cache_dir() == tmp_path / ".cache" / "mtgjson-sdk"

    def test_macos(self, monkeypatch, tmp_path: Path):
        monkeypatch.setattr(config.platform, "system", lambda: "Darwin")
        monkeypatch.setattr(Path, "home", lambda: tmp_path)
        assert config.default_cache_dir() == tmp_path / "Library" / "Caches" / "mtgjson-sdk"

    def test_windows(self, monkeypatch, tmp_path: Path):
        monkeypatch.setattr(config.platform, "system", lambda: "Windows")
        monkeypatch.setattr(Path, "home", lambda: tmp_path)
        assert config.default_cache_dir() == tmp_path / "AppData" / "Local" / "mtgjson-sdk"


def test_cache_dir_or_default(tmp_path: Path):
    assert config.cache_dir_or_default(str(tmp_path)) == tmp_path
    assert config.cache_dir_or_default(None) == config.default_cache_dir()


def test_dataset_tables_do_not_overlap():
    assert not set(config.PARQUET_FILES) & set(config.JSON_FILES)
    assert all(path.endswith(".parquet") for path in config.PARQUET_FILES.values())
