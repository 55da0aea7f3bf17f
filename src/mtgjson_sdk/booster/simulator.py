"""Module containing the BoosterSimulator implementation."""

from __future__ import annotations

import logging
import random
from collections.abc import Sequence
from typing import Any

from ..connection import CanonicalValue, Connection
from ..errors import MtgjsonInvalidArgumentError, MtgjsonNotFoundError
from .models import BoosterPackTemplate, BoosterSheetData
from .sampling import pick_from_sheet, pick_pack

log = logging.getLogger("booster/simulator")

_CONTENT_WEIGHTS_VIEW = "set_booster_content_weights"
_CONTENTS_VIEW = "set_booster_contents"
_SHEET_CARDS_VIEW = "set_booster_sheet_cards"
_SHEETS_VIEW = "set_booster_sheets"
_CARDS_VIEW = "cards"

_AVAILABLE_TYPES_SQL = """
    SELECT DISTINCT "boosterName"
    FROM set_booster_content_weights
    WHERE "setCode" = ?
    ORDER BY "boosterName"
"""

_WEIGHTS_SQL = """
    SELECT "boosterIndex", "boosterWeight"
    FROM set_booster_content_weights
    WHERE "setCode" = ?
      AND "boosterName" = ?
    ORDER BY "boosterIndex"
"""

_CONTENTS_SQL = """
    SELECT "boosterIndex", "sheetName", "sheetPicks"
    FROM set_booster_contents
    WHERE "setCode" = ?
      AND "boosterName" = ?
    ORDER BY "boosterIndex", "sheetName"
"""

_SHEET_PROPS_SQL = """
    SELECT "sheetHasBalanceColors", "sheetIsFoil", "sheetIsFixed",
           "sheetAllowDuplicates", "totalWeight"
    FROM set_booster_sheets
    WHERE "setCode" = ?
      AND "boosterName" = ?
      AND "sheetName" = ?
    LIMIT 1
"""

_SHEET_CARDS_SQL = """
    SELECT "cardUuid", "cardWeight"
    FROM set_booster_sheet_cards
    WHERE "setCode" = ?
      AND "boosterName" = ?
      AND "sheetName" = ?
    ORDER BY "cardUuid"
"""


def _as_int(value: CanonicalValue, default: int) -> int:
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    return default


def _as_bool(value: CanonicalValue) -> bool:
    return value is True


class BoosterSimulator:
    """
    Simulates opening booster packs using the booster configuration views.

    Opening a pack picks one pack template with probability proportional
    to its weight, then draws the requested number of cards from each
    sheet of the template, and finally fetches the full card records.

    The random generator is explicit: pass `rng` or `seed` to obtain
    reproducible packs.
    """

    def __init__(
        self,
        conn: Connection,
        *,
        rng: random.Random | None = None,
        seed: int | None = None,
    ) -> None:
        """
        Initialize the simulator.

        Parameters:
            conn: the connection used to query the booster views.
            rng: the random generator to use. If None, we create one
                seeded with `seed`.
            seed: seed for the random generator created when `rng` is None.
        """
        if rng is not None and seed is not None:
            raise MtgjsonInvalidArgumentError("pass either rng or seed, not both")
        self.conn = conn
        self.rng = rng if rng is not None else random.Random(seed)

    def available_types(self, set_code: str) -> list[str]:
        """
        Return the booster type names for a set (e.g., ["collector", "draft"]).

        Returns an empty list if the set has no booster configuration.
        """
        self.conn.ensure_views(_CONTENT_WEIGHTS_VIEW)
        rows = self.conn.execute(_AVAILABLE_TYPES_SQL, [set_code.upper()])
        return [row["boosterName"] for row in rows if isinstance(row["boosterName"], str)]

    def pack_templates(self, set_code: str, booster_type: str) -> list[BoosterPackTemplate]:
        """
        Return all pack templates for a set and booster type.

        Each template joins its weight with its sheet contents, grouped by
        the template index. Returns an empty list when not configured.
        """
        self.conn.ensure_views(_CONTENT_WEIGHTS_VIEW, _CONTENTS_VIEW)
        params = [set_code.upper(), booster_type]

        weight_rows = self.conn.execute(_WEIGHTS_SQL, params)
        if not weight_rows:
            return []

        sheets_by_index: dict[int, dict[str, int]] = {}
        for row in self.conn.execute(_CONTENTS_SQL, params):
            index = _as_int(row["boosterIndex"], 0)
            sheet_name = row["sheetName"]
            if not isinstance(sheet_name, str):
                continue
            sheets_by_index.setdefault(index, {})[sheet_name] = _as_int(row["sheetPicks"], 1)

        templates = []
        for row in weight_rows:
            index = _as_int(row["boosterIndex"], 0)
            templates.append(
                BoosterPackTemplate(
                    index=index,
                    weight=_as_int(row["boosterWeight"], 1),
                    sheets=dict(sheets_by_index.get(index, {})),
                )
            )
        return templates

    def sheet_data(
        self,
        set_code: str,
        booster_type: str,
        sheet_name: str,
    ) -> BoosterSheetData | None:
        """
        Return the cards and properties of a sheet, or None if it has no cards.

        A sheet without a properties row defaults to no duplicates.
        """
        self.conn.ensure_views(_SHEET_CARDS_VIEW, _SHEETS_VIEW)
        params = [set_code.upper(), booster_type, sheet_name]

        cards = self._sheet_cards(params)
        if cards is None:
            return None

        props_rows = self.conn.execute(_SHEET_PROPS_SQL, params)
        props: dict[str, Any] = props_rows[0] if props_rows else {}
        return BoosterSheetData(
            name=sheet_name,
            cards=cards,
            allow_duplicates=_as_bool(props.get("sheetAllowDuplicates")),
            total_weight=_as_int(props.get("totalWeight"), 0),
            is_foil=_as_bool(props.get("sheetIsFoil")),
            is_fixed=_as_bool(props.get("sheetIsFixed")),
            has_balance_colors=_as_bool(props.get("sheetHasBalanceColors")),
        )

    def sheet_contents(
        self,
        set_code: str,
        booster_type: str,
        sheet_name: str,
    ) -> dict[str, int] | None:
        """Return a sheet as a `{uuid: weight}` mapping, or None if it does not exist."""
        self.conn.ensure_views(_SHEET_CARDS_VIEW)
        return self._sheet_cards([set_code.upper(), booster_type, sheet_name])

    def _sheet_cards(self, params: list[str]) -> dict[str, int] | None:
        rows = self.conn.execute(_SHEET_CARDS_SQL, params)
        if not rows:
            return None
        cards: dict[str, int] = {}
        for row in rows:
            uuid = row["cardUuid"]
            if isinstance(uuid, str) and uuid:
                cards[uuid] = _as_int(row["cardWeight"], 1)
        return cards

    def open_pack(self, set_code: str, booster_type: str) -> list[dict[str, CanonicalValue]]:
        """
        Open a single booster pack.

        Returns:
            The card records in the order they were drawn, duplicates
            included. Empty when no card could be drawn.

        Raises:
            MtgjsonNotFoundError: if the set/booster type has no templates.
        """
        # 1. load the templates
        templates = self.pack_templates(set_code, booster_type)
        if not templates:
            raise MtgjsonNotFoundError(
                f"No booster configuration found for set '{set_code}' type '{booster_type}'"
            )

        # 2. pick one of them
        template = pick_pack(templates, self.rng)
        log.debug("opening %s/%s using template %d", set_code, booster_type, template.index)

        # 3. draw cards from each sheet, skipping sheets we cannot find
        uuids: list[str] = []
        for sheet_name, picks in template.sheets.items():
            if picks <= 0:
                continue
            sheet = self.sheet_data(set_code, booster_type, sheet_name)
            if sheet is None:
                log.debug("sheet %s of %s/%s has no cards", sheet_name, set_code, booster_type)
                continue
            uuids.extend(pick_from_sheet(sheet, picks, self.rng))

        # 4. fetch the card records
        return self.fetch_cards(uuids)

    def open_box(
        self,
        set_code: str,
        booster_type: str,
        pack_count: int,
    ) -> list[list[dict[str, CanonicalValue]]]:
        """Open `pack_count` independent booster packs."""
        if pack_count < 0:
            raise MtgjsonInvalidArgumentError(f"pack_count must be >= 0, got {pack_count}")
        return [self.open_pack(set_code, booster_type) for _ in range(pack_count)]

    def fetch_cards(self, uuids: Sequence[str]) -> list[dict[str, CanonicalValue]]:
        """
        Fetch full card records for the given UUIDs.

        The result follows the order of `uuids`, including duplicates.
        UUIDs missing from the cards view are skipped.
        """
        if not uuids:
            return []
        self.conn.ensure_views(_CARDS_VIEW)
        unique = list(dict.fromkeys(uuids))
        placeholders = ", ".join("?" for _ in unique)
        rows = self.conn.execute(f"SELECT * FROM cards WHERE uuid IN ({placeholders})", unique)
        by_uuid = {row["uuid"]: row for row in rows}
        return [dict(by_uuid[uuid]) for uuid in uuids if uuid in by_uuid]
