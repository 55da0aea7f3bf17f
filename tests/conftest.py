"""Shared pytest fixtures for mtgjson-sdk tests.

The fixtures build a small but realistic cache directory: a handful of
cards, wide-format legalities, and a booster configuration for a fake
"MH3" set, all written as parquet files at the paths the CDN uses.
"""

import json
from pathlib import Path

import pyarrow as pa
import pyarrow.parquet as pq
import pytest

from mtgjson_sdk import CacheManager, Connection, MtgjsonSdk
from mtgjson_sdk.cache import cache_entry

FIXTURE_VERSION = "5.2.2+20240101"

COMMONS = [f"c{idx:02d}" for idx in range(1, 13)]
UNCOMMONS = [f"u{idx:02d}" for idx in range(1, 5)]
RARES = ["r01", "r02"]
FOILS = ["f01", "f02"]


def _card_rows() -> list[dict]:
    rows = []
    for number, (uuid, rarity) in enumerate(
        [(u, "common") for u in COMMONS]
        + [(u, "uncommon") for u in UNCOMMONS]
        + [(u, "rare") for u in RARES]
        + [(u, "mythic") for u in FOILS],
        start=1,
    ):
        rows.append(
            {
                "uuid": uuid,
                "name": f"Card {uuid}",
                "setCode": "MH3",
                "rarity": rarity,
                "number": str(number),
                "manaValue": float(number % 7),
                "colors": "W, U" if number % 2 else "",
                "colorIdentity": "W, U" if number % 2 else None,
                "subtypes": "Human, Wizard",
                "keywords": "Flying",
                "text": "Flying, vigilance",
                "identifiers": json.dumps({"scryfallId": f"sf-{uuid}"}),
            }
        )
    return rows


def cards_table() -> pa.Table:
    """Return the cards dataset."""
    return pa.Table.from_pylist(_card_rows())


def legalities_table() -> pa.Table:
    """Return the wide-format legalities dataset."""
    return pa.table(
        {
            "uuid": ["c01", "c02", "r01"],
            "commander": ["Legal", "Legal", "Banned"],
            "modern": ["Legal", None, "Legal"],
            "vintage": [None, "Restricted", "Legal"],
        }
    )


def booster_tables() -> dict[str, pa.Table]:
    """Return the four booster configuration datasets."""
    sheet_cards = (
        [("draft", "common", uuid, 1) for uuid in COMMONS]
        + [("draft", "uncommon", uuid, 1) for uuid in UNCOMMONS]
        + [("draft", "rare", uuid, 7) for uuid in RARES]
        + [("collector", "foil", uuid, 1) for uuid in FOILS]
    )
    sheets = [
        ("draft", "common", False, False, False, False, len(COMMONS)),
        ("draft", "uncommon", False, False, False, False, len(UNCOMMONS)),
        ("draft", "rare", False, False, False, False, 14),
        ("collector", "foil", False, True, False, True, len(FOILS)),
    ]
    return {
        "set_booster_content_weights": pa.table(
            {
                "setCode": ["MH3", "MH3"],
                "boosterName": ["draft", "collector"],
                "boosterIndex": [0, 0],
                "boosterWeight": [1, 1],
            }
        ),
        "set_booster_contents": pa.table(
            {
                "setCode": ["MH3"] * 5,
                "boosterName": ["draft", "draft", "draft", "collector", "collector"],
                "boosterIndex": [0, 0, 0, 0, 0],
                "sheetName": ["common", "uncommon", "rare", "foil", "missing"],
                "sheetPicks": [10, 3, 1, 5, 2],
            }
        ),
        "set_booster_sheets": pa.table(
            {
                "setCode": ["MH3"] * len(sheets),
                "boosterName": [row[0] for row in sheets],
                "sheetName": [row[1] for row in sheets],
                "sheetHasBalanceColors": [row[2] for row in sheets],
                "sheetIsFoil": [row[3] for row in sheets],
                "sheetIsFixed": [row[4] for row in sheets],
                "sheetAllowDuplicates": [row[5] for row in sheets],
                "totalWeight": [row[6] for row in sheets],
            }
        ),
        "set_booster_sheet_cards": pa.table(
            {
                "setCode": ["MH3"] * len(sheet_cards),
                "boosterName": [row[0] for row in sheet_cards],
                "sheetName": [row[1] for row in sheet_cards],
                "cardUuid": [row[2] for row in sheet_cards],
                "cardWeight": [row[3] for row in sheet_cards],
            }
        ),
    }


def write_dataset(cache_dir: Path, name: str, table: pa.Table) -> Path:
    """Write the given table where the cache expects the named dataset."""
    path = cache_entry(name, cache_dir).local_path
    path.parent.mkdir(parents=True, exist_ok=True)
    pq.write_table(table, path)
    return path


@pytest.fixture
def cache_dir(tmp_path: Path) -> Path:
    """Return a cache directory populated with the fixture datasets."""
    root = tmp_path / "cache"
    write_dataset(root, "cards", cards_table())
    write_dataset(root, "card_legalities", legalities_table())
    for name, table in booster_tables().items():
        write_dataset(root, name, table)
    meta = {"data": {"version": FIXTURE_VERSION, "date": "2024-01-01"}}
    (root / "Meta.json").write_text(json.dumps(meta))
    (root / "version.txt").write_text(FIXTURE_VERSION)
    return root


@pytest.fixture
def offline_cache(cache_dir: Path) -> CacheManager:
    """Return an offline CacheManager over the fixture datasets."""
    return CacheManager(cache_dir, offline=True)


@pytest.fixture
def conn(offline_cache: CacheManager):
    """Return a Connection over the fixture datasets."""
    connection = Connection(offline_cache)
    yield connection
    connection.close()


@pytest.fixture
def sdk(cache_dir: Path):
    """Return an offline, seeded MtgjsonSdk over the fixture datasets."""
    session = MtgjsonSdk(cache_dir, offline=True, seed=42)
    yield session
    session.close()
