"""Tests for the mtgjson_sdk.client module."""

from pathlib import Path
from unittest.mock import MagicMock, patch

import duckdb
import pandas as pd
import pytest
import requests

from mtgjson_sdk import MtgjsonSdk


def _meta_session(version: str) -> MagicMock:
    resp = MagicMock()
    resp.raise_for_status = MagicMock()
    resp.json = MagicMock(return_value={"data": {"version": version}})
    session = MagicMock()
    session.get.return_value = resp
    return session


class TestMtgjsonSdk:
    """Tests for the MtgjsonSdk session object."""

    def test_views_are_lazy(self, sdk):
        assert sdk.views == []
        sdk.connection.ensure_views("cards")
        assert sdk.views == ["cards"]

    def test_booster_is_cached(self, sdk):
        assert sdk.booster is sdk.booster

    def test_open_pack(self, sdk):
        cards = sdk.booster.open_pack("MH3", "draft")
        assert len(cards) == 14
        assert "cards" in sdk.views

    def test_seeded_sessions_agree(self, cache_dir: Path):
        with MtgjsonSdk(cache_dir, offline=True, seed=5) as first:
            a = [card["uuid"] for card in first.booster.open_pack("MH3", "draft")]
        with MtgjsonSdk(cache_dir, offline=True, seed=5) as second:
            b = [card["uuid"] for card in second.booster.open_pack("MH3", "draft")]
        assert a == b

    def test_meta(self, sdk):
        assert sdk.meta()["data"]["version"] == "5.2.2+20240101"

    def test_meta_unavailable(self, sdk, caplog):
        sdk.cache.clear()
        with caplog.at_level("WARNING"):
            assert sdk.meta() == {}
        assert "cannot load metadata" in caplog.text

    @patch("mtgjson_sdk.cache.manager.requests.Session")
    def test_meta_network_failure(self, mock_session_cls, tmp_path: Path, caplog):
        """An unreachable CDN with nothing cached yields empty metadata."""
        mock_session_cls.return_value.get.side_effect = requests.ConnectionError("unreachable")
        with MtgjsonSdk(tmp_path) as session:
            with caplog.at_level("WARNING"):
                assert session.meta() == {}
        assert "cannot load metadata" in caplog.text

    def test_sql(self, sdk):
        sdk.connection.ensure_views("cards")
        rows = sdk.sql("SELECT uuid FROM cards WHERE rarity = ? ORDER BY uuid", ["mythic"])
        assert rows == [{"uuid": "f01"}, {"uuid": "f02"}]

    def test_sql_dataframe(self, sdk):
        sdk.connection.ensure_views("cards")
        df = sdk.sql("SELECT * FROM cards", as_dataframe=True)
        assert isinstance(df, pd.DataFrame)
        assert len(df) == 20

    def test_export_db(self, sdk, tmp_path: Path):
        sdk.connection.ensure_views("set_booster_sheets")
        out = sdk.export_db(tmp_path / "mtg.duckdb")
        with duckdb.connect(str(out), read_only=True) as exported:
            assert exported.execute("SELECT count(*) FROM set_booster_sheets").fetchone()[0] == 4

    def test_close(self, cache_dir: Path):
        with MtgjsonSdk(cache_dir, offline=True) as session:
            raw = session.connection.raw
        with pytest.raises(duckdb.Error):
            raw.execute("SELECT 1")

    def test_repr(self, sdk):
        assert repr(sdk).startswith("MtgjsonSdk(cache_dir=")


class TestRefresh:
    """Tests for MtgjsonSdk.refresh."""

    def test_offline_is_never_stale(self, sdk):
        sdk.connection.ensure_views("cards")
        assert sdk.refresh() is False
        assert sdk.views == ["cards"]

    @patch("mtgjson_sdk.cache.manager.requests.Session")
    def test_up_to_date(self, mock_session_cls, cache_dir: Path):
        mock_session_cls.return_value = _meta_session("5.2.2+20240101")
        with MtgjsonSdk(cache_dir) as session:
            session.connection.ensure_views("cards")
            assert session.refresh() is False
            assert session.views == ["cards"]
            assert (cache_dir / "parquet" / "cards.parquet").exists()

    @patch("mtgjson_sdk.cache.manager.requests.Session")
    def test_stale(self, mock_session_cls, cache_dir: Path):
        """A new release clears the cache and forgets the views."""
        mock_session_cls.return_value = _meta_session("5.2.2+20240101")
        with MtgjsonSdk(cache_dir) as session:
            session.connection.ensure_views("cards")
            old_booster = session.booster

            mock_session_cls.return_value.get.return_value.json.return_value = {
                "data": {"version": "5.2.3+20240201"}
            }
            assert session.refresh() is True
            assert session.views == []
            assert session.booster is not old_booster
            assert not (cache_dir / "parquet" / "cards.parquet").exists()
            assert session.cache.local_version() is None
