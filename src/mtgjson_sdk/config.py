"""Module containing the CDN endpoints, dataset table, and SDK defaults."""

from __future__ import annotations

import platform
from pathlib import Path
from typing import Final

CDN_BASE: Final[str] = "https://mtgjson.com/api/v5"
"""Base URL for the MTGJSON v5 API / CDN."""

META_URL: Final[str] = f"{CDN_BASE}/Meta.json"
"""URL of the document carrying the current dataset version."""

VERSION_FILENAME: Final[str] = "version.txt"
TMP_SUFFIX: Final[str] = ".tmp"
LOCK_SUFFIX: Final[str] = ".lock"

LIST_DELIMITER: Final[str] = ", "
"""Delimiter the upstream producer uses when flattening lists to text."""

DEFAULT_TIMEOUT: Final[float] = 120.0
"""Default per-request HTTP timeout in seconds."""

CACHE_DIR_NAME: Final[str] = "mtgjson-sdk"

PARQUET_FILES: Final[dict[str, str]] = {
    # Flat normalized tables
    "cards": "parquet/cards.parquet",
    "tokens": "parquet/tokens.parquet",
    "sets": "parquet/sets.parquet",
    "card_identifiers": "parquet/cardIdentifiers.parquet",
    "card_legalities": "parquet/cardLegalities.parquet",
    "card_foreign_data": "parquet/cardForeignData.parquet",
    "card_rulings": "parquet/cardRulings.parquet",
    "card_purchase_urls": "parquet/cardPurchaseUrls.parquet",
    "set_translations": "parquet/setTranslations.parquet",
    "token_identifiers": "parquet/tokenIdentifiers.parquet",
    # Booster tables
    "set_booster_content_weights": "parquet/setBoosterContentWeights.parquet",
    "set_booster_contents": "parquet/setBoosterContents.parquet",
    "set_booster_sheet_cards": "parquet/setBoosterSheetCards.parquet",
    "set_booster_sheets": "parquet/setBoosterSheets.parquet",
    # Full nested
    "all_printings": "parquet/AllPrintings.parquet",
    # Prices and SKUs
    "all_prices_today": "parquet/AllPricesToday.parquet",
    "all_prices": "parquet/AllPrices.parquet",
    "tcgplayer_skus": "parquet/TcgplayerSkus.parquet",
}
"""Mapping of logical view names to CDN parquet file paths."""

JSON_FILES: Final[dict[str, str]] = {
    "keywords": "Keywords.json",
    "card_types": "CardTypes.json",
    "deck_list": "DeckList.json",
    "enum_values": "EnumValues.json",
    "meta": "Meta.json",
}
"""Mapping of logical document names to CDN JSON file paths.

A `.gz` suffix marks a gzip-compressed document."""


def default_cache_dir() -> Path:
    """
    Return the platform-appropriate cache directory.

    That is:

        ~/AppData/Local/mtgjson-sdk     on Windows
        ~/Library/Caches/mtgjson-sdk    on macOS
        ~/.cache/mtgjson-sdk            elsewhere
    """
    system = platform.system()
    if system == "Windows":
        base = Path.home() / "AppData" / "Local"
    elif system == "Darwin":
        base = Path.home() / "Library" / "Caches"
    else:
        base = Path.home() / ".cache"
    return base / CACHE_DIR_NAME


def cache_dir_or_default(cache_dir: str | Path | None) -> Path:
    """
    Return cache_dir as a Path if not empty. Otherwise return the
    default value for the cache directory (see `default_cache_dir`).
    """
    return default_cache_dir() if cache_dir is None else Path(cache_dir)
