"""Module containing the booster configuration values."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True, kw_only=True)
class BoosterPackTemplate:
    """
    One possible layout of a booster pack.

    Attributes:
        index: the template index within the set/booster type
        weight: relative probability of this layout
        sheets: mapping from sheet name to the number of cards to pick
    """

    index: int
    weight: int
    sheets: dict[str, int] = field(default_factory=dict)


@dataclass(frozen=True, kw_only=True)
class BoosterSheetData:
    """
    A named pool of cards a template draws from.

    Attributes:
        name: the sheet name (e.g., "common")
        cards: mapping from card UUID to its draw weight
        allow_duplicates: whether cards are drawn with replacement
        total_weight: declared total weight (metadata only)
        is_foil: whether the sheet contains foil cards
        is_fixed: whether the sheet contents are fixed
        has_balance_colors: whether the sheet balances colors
    """

    name: str
    cards: dict[str, int]
    allow_duplicates: bool = False
    total_weight: int = 0
    is_foil: bool = False
    is_fixed: bool = False
    has_balance_colors: bool = False
