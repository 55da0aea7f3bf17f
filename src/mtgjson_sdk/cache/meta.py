"""Module to parse the version metadata document."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from dacite import DaciteError, from_dict


@dataclass(frozen=True, kw_only=True)
class MetaData:
    """Build metadata published alongside the dataset."""

    version: str | None = None
    date: str | None = None


@dataclass(frozen=True, kw_only=True)
class MetaDocument:
    """
    The Meta.json document.

    Current producers nest the build metadata under `data`, while older
    ones used `meta`. Both are accepted.
    """

    data: MetaData | None = None
    meta: MetaData | None = None


def meta_version(document: Any) -> str | None:
    """
    Return the version token inside the given decoded Meta.json document.

    We try `data.version` first and `meta.version` second. Return None
    when the document has neither or does not have the expected shape.
    """
    if not isinstance(document, dict):
        return None
    try:
        parsed = from_dict(MetaDocument, document)
    except (DaciteError, TypeError):
        return None
    for section in (parsed.data, parsed.meta):
        if section is not None and section.version:
            return section.version
    return None
