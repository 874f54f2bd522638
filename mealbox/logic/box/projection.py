from typing import List

from mealbox.domain.Box import PlanEntry, WeeklyBox
from mealbox.utilities.constants import DAYS_PER_WEEK


def build_plan_entries(box: WeeklyBox, duration: int) -> List[PlanEntry]:
    """Flatten the first `duration` days of a box into fresh, enabled plan entries.

    Called again whenever the duration changes: earlier edits are dropped.
    Durations outside 1..7 are clamped.
    """
    if box is None:
        return []
    days = max(1, min(int(duration), DAYS_PER_WEEK))
    return [
        PlanEntry.from_box_meal(meal, day_plan.day, day_plan.label)
        for day_plan in box.days[:days]
        for meal in day_plan.meals
    ]
