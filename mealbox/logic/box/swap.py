"""Swap one plan entry for another profile-compatible dish."""
import logging
from typing import List, Optional

from mealbox.domain.Box import PlanEntry
from mealbox.domain.Dish import Dish
from mealbox.domain.Profile import UserProfile
from mealbox.logic.box.assembler import to_box_meal
from mealbox.logic.scoring.dish_scoring import rank_dishes
from mealbox.logic.scoring.random_source import RandomSource, DEFAULT_RANDOM
from mealbox.utilities.constants import SWAP_TOP_N

logger = logging.getLogger(__name__)


def swap_entry(entry: PlanEntry, dishes: List[Dish], profile: Optional[UserProfile],
               rng: RandomSource = DEFAULT_RANDOM) -> PlanEntry:
    """Return a new entry (same id/day/slot/enabled) holding a different dish.

    Candidates exclude the current dish and hard-excluded dishes; same-category
    dishes are preferred. The pick is uniform among the top SWAP_TOP_N so
    repeated swaps do not always land on the single best match. When nothing
    qualifies the entry is returned unchanged.
    """
    pool = rank_dishes([d for d in dishes if d.name != entry.name], profile, rng)
    same_category = [d for d in pool if d.category == entry.category]
    src = same_category or pool
    if not src:
        logger.info("No swap candidate for %s (%s)", entry.id, entry.name)
        return entry

    top = min(len(src), SWAP_TOP_N)
    pick = src[min(int(rng.next_float() * top), top - 1)]
    meal = to_box_meal(pick, entry.id, entry.slot, profile)
    return entry.with_dish(meal.name, meal.cooking_time, meal.calories, meal.image, meal.category, meal.match_reason)
