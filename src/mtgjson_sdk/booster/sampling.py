"""Module implementing weighted random selection.

All functions take an explicit `random.Random`, so that callers can seed
it and obtain reproducible draws.

We use roulette-wheel selection: draw an integer in [0, total_weight)
and walk the items subtracting each weight until the roll goes negative.
Each item is thus selected with probability weight / total_weight.
"""

from __future__ import annotations

import random
from collections.abc import Sequence

from ..errors import MtgjsonInvalidArgumentError
from .models import BoosterPackTemplate, BoosterSheetData


def _roulette(weights: Sequence[int], total_weight: int, rng: random.Random) -> int:
    roll = rng.randrange(total_weight)
    for idx, weight in enumerate(weights):
        roll -= weight
        if roll < 0:
            return idx
    # Only reachable with negative weights mixed with positive ones
    return len(weights) - 1


def pick_pack(
    templates: Sequence[BoosterPackTemplate],
    rng: random.Random,
) -> BoosterPackTemplate:
    """
    Pick a pack template with probability proportional to its weight.

    When the total weight is not positive, we pick uniformly at random.

    Raises:
        MtgjsonInvalidArgumentError: if there are no templates.
    """
    if not templates:
        raise MtgjsonInvalidArgumentError("cannot pick from zero pack templates")
    weights = [template.weight for template in templates]
    total_weight = sum(weights)
    if total_weight <= 0:
        return templates[rng.randrange(len(templates))]
    return templates[_roulette(weights, total_weight, rng)]


def weighted_choices_with_replacement(
    ids: Sequence[str],
    weights: Sequence[int],
    count: int,
    rng: random.Random,
) -> list[str]:
    """
    Draw `count` identifiers independently (duplicates allowed).

    Returns an empty list when the total weight is not positive.
    """
    total_weight = sum(weights)
    if total_weight <= 0:
        return []
    return [ids[_roulette(weights, total_weight, rng)] for _ in range(count)]


def weighted_choices_without_replacement(
    ids: Sequence[str],
    weights: Sequence[int],
    count: int,
    rng: random.Random,
) -> list[str]:
    """
    Draw up to `count` distinct identifiers.

    The count is clamped to the number of identifiers. We stop early when
    the remaining weight is not positive, so fewer identifiers than
    requested may be returned.
    """
    remaining_ids = list(ids)
    remaining_weights = list(weights)
    results: list[str] = []
    for _ in range(min(count, len(remaining_ids))):
        total_weight = sum(remaining_weights)
        if total_weight <= 0:
            break
        idx = _roulette(remaining_weights, total_weight, rng)
        results.append(remaining_ids.pop(idx))
        remaining_weights.pop(idx)
    return results


def pick_from_sheet(sheet: BoosterSheetData, count: int, rng: random.Random) -> list[str]:
    """Draw `count` card UUIDs from the given sheet."""
    if not sheet.cards or count <= 0:
        return []
    ids = list(sheet.cards)
    weights = [sheet.cards[uuid] for uuid in ids]
    if sheet.allow_duplicates:
        return weighted_choices_with_replacement(ids, weights, count, rng)
    return weighted_choices_without_replacement(ids, weights, count, rng)
