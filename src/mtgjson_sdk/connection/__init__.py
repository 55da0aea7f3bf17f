"""Package exposing cached parquet files as DuckDB views.

The `Connection` class registers views lazily and runs parameterized
queries, returning canonical values (see `values.to_canonical`).

View Lifecycle
--------------

A view name is either unregistered or registered. The first access via
`Connection.ensure_views` downloads the file if needed, introspects its
schema and creates the view. `Connection.reset_views` moves every name
back to unregistered, so the next access re-creates the view from the
(possibly re-downloaded) file. A failure while registering leaves the
name unregistered.
"""

from .connection import Connection
from .schema import (
    IGNORED_COLUMNS,
    JSON_CAST_COLUMNS,
    LEGALITIES_VIEW,
    STATIC_LIST_COLUMNS,
    ColumnAdaptationPlan,
    ColumnSchema,
    build_adaptation_plan,
)
from .values import CanonicalValue, to_canonical

__all__ = [
    "CanonicalValue",
    "ColumnAdaptationPlan",
    "ColumnSchema",
    "Connection",
    "IGNORED_COLUMNS",
    "JSON_CAST_COLUMNS",
    "LEGALITIES_VIEW",
    "STATIC_LIST_COLUMNS",
    "build_adaptation_plan",
    "to_canonical",
]
