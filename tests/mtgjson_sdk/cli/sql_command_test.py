"""Tests for the mtgjson-sdk sql command."""

import json
from pathlib import Path

from click.testing import CliRunner

from mtgjson_sdk.cli import cli


class TestSql:
    """mtgjson-sdk sql."""

    def test_rows_as_json_lines(self, cache_dir: Path):
        args = [
            "sql",
            "SELECT uuid, colors FROM cards WHERE rarity = ? ORDER BY uuid",
            "-p",
            "rare",
            "-V",
            "cards",
            "-d",
            str(cache_dir),
            "--offline",
        ]
        result = CliRunner().invoke(cli, args)
        assert result.exit_code == 0
        rows = [json.loads(line) for line in result.stdout.splitlines()]
        assert [row["uuid"] for row in rows] == ["r01", "r02"]
        assert rows[0]["colors"] == ["W", "U"]

    def test_view_not_registered(self, cache_dir: Path):
        args = ["sql", "SELECT * FROM cards", "-d", str(cache_dir), "--offline"]
        result = CliRunner().invoke(cli, args)
        assert result.exit_code == 1
        assert "Error" in result.output

    def test_unavailable_view(self, cache_dir: Path):
        args = ["sql", "SELECT 1", "-V", "sets", "-d", str(cache_dir), "--offline"]
        result = CliRunner().invoke(cli, args)
        assert result.exit_code == 1
        assert "offline mode" in result.output
