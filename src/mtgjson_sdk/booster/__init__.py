"""Package simulating the opening of sealed booster products.

The simulator reads four booster configuration views:

    set_booster_content_weights   (set, booster, index) -> weight
    set_booster_contents          (set, booster, index, sheet) -> picks
    set_booster_sheets            (set, booster, sheet) -> properties
    set_booster_sheet_cards       (set, booster, sheet, uuid) -> weight

and the `cards` view to return full card records.
"""

from .models import BoosterPackTemplate, BoosterSheetData
from .sampling import (
    pick_from_sheet,
    pick_pack,
    weighted_choices_with_replacement,
    weighted_choices_without_replacement,
)
from .simulator import BoosterSimulator

__all__ = [
    "BoosterPackTemplate",
    "BoosterSheetData",
    "BoosterSimulator",
    "pick_from_sheet",
    "pick_pack",
    "weighted_choices_with_replacement",
    "weighted_choices_without_replacement",
]
