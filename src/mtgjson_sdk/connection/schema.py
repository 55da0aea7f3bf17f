"""Module to derive view SQL from introspected parquet schemas.

The upstream producer flattens list-valued fields to comma-separated text
and struct-valued fields to JSON text, and does not declare which is
which. We decide at registration time, using four ordered layers:

1. static allow-list: known list columns that do not look plural
   (e.g. `colorIdentity`, `availability`)

2. naming heuristic: VARCHAR columns whose name ends in `s` are lists,
   so new upstream columns are picked up without code changes

3. block-list: VARCHAR columns that look plural but are prose or JSON
   (e.g. `text`, `rulings`); this overrides the heuristic only

4. JSON-cast set: VARCHAR columns holding JSON objects, which we cast to
   the DuckDB JSON type

Candidates are then filtered to the columns that exist as VARCHAR in the
file at hand, since upstream may drop or retype a column at any time.

Nothing in this module touches the engine: callers pass the schema
obtained with `DESCRIBE`.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Final

from ..config import LIST_DELIMITER

TEXT_TYPE: Final[str] = "VARCHAR"

LEGALITIES_VIEW: Final[str] = "card_legalities"
"""The one dataset published in wide format (one column per format)."""

LEGALITIES_ID_COLUMN: Final[str] = "uuid"

STATIC_LIST_COLUMNS: Final[dict[str, frozenset[str]]] = {
    "cards": frozenset(
        {
            "artistIds",
            "attractionLights",
            "availability",
            "boosterTypes",
            "cardParts",
            "colorIdentity",
            "colorIndicator",
            "colors",
            "finishes",
            "frameEffects",
            "keywords",
            "originalPrintings",
            "otherFaceIds",
            "printings",
            "producedMana",
            "promoTypes",
            "rebalancedPrintings",
            "subsets",
            "subtypes",
            "supertypes",
            "types",
            "variations",
        }
    ),
    "tokens": frozenset(
        {
            "artistIds",
            "availability",
            "boosterTypes",
            "colorIdentity",
            "colorIndicator",
            "colors",
            "finishes",
            "frameEffects",
            "keywords",
            "otherFaceIds",
            "producedMana",
            "promoTypes",
            "reverseRelated",
            "subtypes",
            "supertypes",
            "types",
        }
    ),
}
"""Per-view list columns that are always split, whatever their name."""

IGNORED_COLUMNS: Final[frozenset[str]] = frozenset(
    {
        "text",
        "originalText",
        "flavorText",
        "printedText",
        "identifiers",
        "legalities",
        "leadershipSkills",
        "purchaseUrls",
        "relatedCards",
        "rulings",
        "sourceProducts",
        "foreignData",
        "translations",
        "toughness",
        "status",
        "format",
        "uris",
        "scryfallUri",
    }
)
"""VARCHAR columns that are never lists even if they look plural."""

JSON_CAST_COLUMNS: Final[frozenset[str]] = frozenset(
    {
        "identifiers",
        "legalities",
        "leadershipSkills",
        "purchaseUrls",
        "relatedCards",
        "rulings",
        "sourceProducts",
        "foreignData",
        "translations",
    }
)
"""VARCHAR columns holding JSON objects."""


@dataclass(frozen=True)
class ColumnSchema:
    """Name and declared type of a column, as reported by DESCRIBE."""

    name: str
    type: str

    @property
    def is_text(self) -> bool:
        return self.type == TEXT_TYPE


@dataclass(frozen=True, kw_only=True)
class ColumnAdaptationPlan:
    """
    Rewrites to apply to a view's columns.

    Attributes:
        list_columns: text columns to split into VARCHAR[] (sorted)
        json_columns: text columns to cast to JSON (sorted)
    """

    list_columns: tuple[str, ...] = field(default_factory=tuple)
    json_columns: tuple[str, ...] = field(default_factory=tuple)

    def is_empty(self) -> bool:
        return not self.list_columns and not self.json_columns

    def expressions(self) -> list[str]:
        """Return the SQL rewrite expressions, lists first."""
        delimiter = quote_literal(LIST_DELIMITER)
        exprs = []
        for name in self.list_columns:
            col = quote_identifier(name)
            exprs.append(
                f"CASE WHEN {col} IS NULL OR TRIM({col}) = '' "
                f"THEN []::VARCHAR[] "
                f"ELSE string_split({col}, {delimiter}) END AS {col}"
            )
        for name in self.json_columns:
            col = quote_identifier(name)
            exprs.append(f"TRY_CAST({col} AS JSON) AS {col}")
        return exprs

    def replace_clause(self) -> str:
        """Return the ` REPLACE (...)` clause, or an empty string."""
        if self.is_empty():
            return ""
        return f" REPLACE ({', '.join(self.expressions())})"


def build_adaptation_plan(
    view_name: str,
    schema: Iterable[ColumnSchema],
) -> ColumnAdaptationPlan:
    """
    Build the column adaptation plan for the given view.

    Arguments:
        view_name: the logical view name (selects the static allow-list)
        schema: the introspected columns of the underlying file

    Returns:
        A ColumnAdaptationPlan containing only columns that exist as
        VARCHAR in the given schema.
    """
    columns = list(schema)
    text_columns = {col.name for col in columns if col.is_text}

    # 1. static allow-list
    candidates = set(STATIC_LIST_COLUMNS.get(view_name, ()))

    # 2+3. naming heuristic, minus the block-list
    for col in columns:
        if col.is_text and col.name not in IGNORED_COLUMNS and col.name.endswith("s"):
            candidates.add(col.name)

    # 4. JSON-cast set
    json_columns = sorted(JSON_CAST_COLUMNS & text_columns)

    return ColumnAdaptationPlan(
        list_columns=tuple(sorted((candidates & text_columns) - set(json_columns))),
        json_columns=tuple(json_columns),
    )


def heuristic_list_columns(view_name: str, plan: ColumnAdaptationPlan) -> list[str]:
    """
    Return the list columns selected only by the naming heuristic.

    These are the columns most likely to be misclassified (e.g., a new
    plural-named scalar), so the connection logs them on registration.
    """
    static = STATIC_LIST_COLUMNS.get(view_name, frozenset())
    return [name for name in plan.list_columns if name not in static]


def quote_identifier(name: str) -> str:
    """Quote a SQL identifier using double quotes."""
    return '"' + name.replace('"', '""') + '"'


def quote_literal(value: str) -> str:
    """Quote a SQL string literal using single quotes."""
    return "'" + value.replace("'", "''") + "'"


def parquet_source(path: Path | str) -> str:
    """Return the `read_parquet(...)` table function call for a path."""
    # DuckDB accepts forward slashes on every platform
    posix = str(path).replace("\\", "/")
    return f"read_parquet({quote_literal(posix)})"


def describe_sql(path: Path | str) -> str:
    """Return the schema-only introspection query for a parquet file."""
    return (
        "SELECT column_name, column_type FROM "
        f"(DESCRIBE SELECT * FROM {parquet_source(path)})"
    )


def view_sql(view_name: str, path: Path | str, plan: ColumnAdaptationPlan) -> str:
    """Return the CREATE VIEW statement applying the given plan."""
    return (
        f"CREATE OR REPLACE VIEW {quote_identifier(view_name)} AS "
        f"SELECT *{plan.replace_clause()} FROM {parquet_source(path)}"
    )


def legalities_view_sql(path: Path | str, columns: Iterable[str]) -> str:
    """
    Return the CREATE VIEW statement reshaping wide legalities.

    Every column except the identifier names a format. We UNPIVOT them
    into `(uuid, format, status)` rows and drop null statuses, so new
    formats show up as soon as upstream adds a column. When the file has
    no format columns, the view passes the file through unchanged.
    """
    view = quote_identifier(LEGALITIES_VIEW)
    format_columns = [name for name in columns if name != LEGALITIES_ID_COLUMN]
    if not format_columns:
        return f"CREATE OR REPLACE VIEW {view} AS SELECT * FROM {parquet_source(path)}"
    on_clause = ", ".join(quote_identifier(name) for name in format_columns)
    uuid = quote_identifier(LEGALITIES_ID_COLUMN)
    return (
        f"CREATE OR REPLACE VIEW {view} AS "
        f"SELECT {uuid}, format, status FROM ("
        f"UNPIVOT (SELECT * FROM {parquet_source(path)}) "
        f"ON {on_clause} "
        f"INTO NAME format VALUE status"
        f") WHERE status IS NOT NULL"
    )
