"""Module containing the DuckDB Connection wrapper."""

from __future__ import annotations

import logging
import threading
from collections.abc import Sequence
from pathlib import Path
from typing import Any

import duckdb
import pandas as pd
import pyarrow as pa

from ..cache import CacheManager
from .schema import (
    LEGALITIES_VIEW,
    ColumnSchema,
    build_adaptation_plan,
    describe_sql,
    heuristic_list_columns,
    legalities_view_sql,
    quote_identifier,
    quote_literal,
    view_sql,
)
from .values import CanonicalValue, row_to_canonical, to_canonical

log = logging.getLogger("connection")

_EXPORT_ALIAS = "export_db"


class Connection:
    """
    Wraps an in-memory DuckDB connection and registers cached parquet
    files as views.

    Views are registered lazily, once per name, on first access. The
    view SQL is derived from the file schema (see the `schema` module),
    so the SDK adapts to upstream schema changes without code updates.

    The connection is owned by a single logical caller. To share it
    across threads, hold `lock` around every call that may register or
    reset views; the methods of this class take it themselves, so a
    single call is always serialized.
    """

    def __init__(self, cache: CacheManager, *, strict_types: bool = False) -> None:
        """
        Initialize the connection.

        Parameters:
            cache: the CacheManager used to locate and download files.
            strict_types: if True, raise MtgjsonUnsupportedTypeError for
                values without a canonical representation instead of
                converting them to None.
        """
        self.cache = cache
        self.strict_types = strict_types
        self.lock = threading.RLock()
        self._conn = duckdb.connect(":memory:")
        self._registered_views: set[str] = set()

    @property
    def raw(self) -> duckdb.DuckDBPyConnection:
        """Access the underlying DuckDB connection for advanced usage."""
        return self._conn

    @property
    def views(self) -> list[str]:
        """Return the sorted names of all registered views and tables."""
        with self.lock:
            return sorted(self._registered_views)

    def has_view(self, name: str) -> bool:
        """Return whether the given view has been registered."""
        with self.lock:
            return name in self._registered_views

    def reset_views(self) -> None:
        """Clear the registry so views are re-created on next access."""
        with self.lock:
            self._registered_views.clear()
        log.info("reset registered views")

    def ensure_views(self, *names: str) -> None:
        """
        Ensure one or more views are registered, downloading data if needed.

        Raises:
            MtgjsonNotFoundError: if a name is unknown or its file is unavailable.
            MtgjsonNetworkError: if downloading a file fails.
            duckdb.Error: if the engine rejects the view definition.
        """
        with self.lock:
            for name in names:
                if name not in self._registered_views:
                    self.ensure_view(name)

    def ensure_view(self, name: str) -> None:
        """
        Register the parquet file for the given dataset as a view.

        On failure the name stays unregistered.
        """
        with self.lock:
            if name in self._registered_views:
                return
            log.info("registering view %s... start", name)
            try:
                path = self.cache.ensure_parquet(name)
                if name == LEGALITIES_VIEW:
                    self._register_legalities_view(path)
                else:
                    self._register_adapted_view(name, path)
            except Exception as exc:
                log.warning("registering view %s... failure: %s", name, exc)
                raise
            self._registered_views.add(name)
            log.info("registering view %s... ok", name)

    def describe(self, path: Path) -> list[ColumnSchema]:
        """
        Return the columns of the given parquet file.

        Only the parquet footer is read: no data is scanned.
        """
        rows = self._conn.execute(describe_sql(path)).fetchall()
        return [ColumnSchema(name=name, type=type_) for name, type_ in rows]

    def _register_adapted_view(self, name: str, path: Path) -> None:
        plan = build_adaptation_plan(name, self.describe(path))
        guessed = heuristic_list_columns(name, plan)
        if guessed:
            log.debug("view %s: splitting %s by naming heuristic", name, ", ".join(guessed))
        self._conn.execute(view_sql(name, path, plan))

    def _register_legalities_view(self, path: Path) -> None:
        columns = [col.name for col in self.describe(path)]
        self._conn.execute(legalities_view_sql(path, columns))
        log.debug("view %s: unpivoted %d columns", LEGALITIES_VIEW, max(len(columns) - 1, 0))

    def execute(
        self,
        sql: str,
        params: Sequence[Any] | None = None,
    ) -> list[dict[str, CanonicalValue]]:
        """
        Execute SQL and return the rows as dicts of canonical values.

        Every user-controlled value must be passed in `params` and bound
        using `?` placeholders; never interpolate it into `sql`.

        Raises:
            duckdb.Error: if the engine rejects the query.
        """
        with self.lock:
            cursor = self._conn.execute(sql, list(params) if params else [])
            if cursor.description is None:
                return []
            columns = [desc[0] for desc in cursor.description]
            return [
                row_to_canonical(columns, row, strict=self.strict_types)
                for row in cursor.fetchall()
            ]

    def execute_scalar(
        self,
        sql: str,
        params: Sequence[Any] | None = None,
    ) -> CanonicalValue:
        """Execute SQL and return the first column of the first row, or None."""
        with self.lock:
            cursor = self._conn.execute(sql, list(params) if params else [])
            row = cursor.fetchone()
        if row is None:
            return None
        return to_canonical(row[0], strict=self.strict_types)

    def execute_df(self, sql: str, params: Sequence[Any] | None = None) -> pd.DataFrame:
        """Execute SQL and return the result as a pandas DataFrame."""
        with self.lock:
            return self._conn.execute(sql, list(params) if params else []).df()

    def execute_arrow(self, sql: str, params: Sequence[Any] | None = None) -> pa.Table:
        """Execute SQL and return the result as a pyarrow Table."""
        with self.lock:
            return self._conn.execute(sql, list(params) if params else []).fetch_arrow_table()

    def register_table_from_ndjson(self, table_name: str, ndjson_path: Path | str) -> None:
        """
        Create a table from a newline-delimited JSON file.

        The data is streamed from disk by DuckDB. The table name is added
        to the registry so that `ensure_views` does not try to download it.
        """
        posix = str(ndjson_path).replace("\\", "/")
        table = quote_identifier(table_name)
        with self.lock:
            self._conn.execute(
                f"CREATE OR REPLACE TABLE {table} AS "
                f"SELECT * FROM read_json_auto({quote_literal(posix)}, "
                f"format='newline_delimited')"
            )
            self._registered_views.add(table_name)
        log.info("registered table %s from %s", table_name, ndjson_path)

    def export_db(self, path: Path | str) -> Path:
        """
        Export all registered views and tables to a persistent DuckDB file.

        The exported file can be opened by any DuckDB client.

        Returns:
            The output path.
        """
        path = Path(path)
        path.unlink(missing_ok=True)
        posix = str(path).replace("\\", "/")
        with self.lock:
            self._conn.execute(f"ATTACH {quote_literal(posix)} AS {_EXPORT_ALIAS}")
            try:
                for name in sorted(self._registered_views):
                    view = quote_identifier(name)
                    self._conn.execute(
                        f"CREATE TABLE {_EXPORT_ALIAS}.{view} AS SELECT * FROM {view}"
                    )
            finally:
                self._conn.execute(f"DETACH {_EXPORT_ALIAS}")
        log.info("exported %d views to %s", len(self._registered_views), path)
        return path

    def close(self) -> None:
        """Close the DuckDB connection."""
        with self.lock:
            self._conn.close()

    def __enter__(self) -> Connection:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()
