"""Box assembly: rank the catalog for a profile and lay it out over 4 weeks x 7 days x 4 slots.

Layout rule for week w, day d, slot index s over the week's ranked pool:

    idx = ((d - 1) * 4 + s + (w - 1) * WEEK_OFFSET) % len(pool)

so consecutive weeks start further down the pool and short pools repeat as
late as possible. With a stable ranking the box covers min(len(pool), 28 + 3 * WEEK_OFFSET)
distinct dishes, which never shrinks when the catalog grows.
"""
from __future__ import annotations
import logging
from typing import List, Optional

from mealbox.domain.Box import BoxMeal, DayPlan, WeeklyBox
from mealbox.domain.Dish import Dish
from mealbox.domain.Profile import UserProfile
from mealbox.logic.scoring.dish_scoring import rank_dishes, is_weight_loss, is_mass_gain
from mealbox.logic.scoring.match_reason import match_reason
from mealbox.logic.scoring.random_source import RandomSource, DEFAULT_RANDOM
from mealbox.utilities.constants import (
    MEAL_SLOTS, DAY_LABELS, WEEKS_PER_BOX, DAYS_PER_WEEK, WEEK_BIAS, WEEK_OFFSET,
    DEFAULT_COOKING_TIME, DEFAULT_BOX_CALORIES, PLACEHOLDER_IMAGE,
)

logger = logging.getLogger(__name__)


def week_themes(profile: Optional[UserProfile]) -> List[dict]:
    """Presentation text for the four weeks, derived only from profile attributes."""
    objective = profile.main_objective if profile else ""
    origin = profile.origin if profile else ""
    country = profile.country if profile else ""
    has_vp = bool(profile and profile.virtual_profile)
    description = (f"Adapté à votre objectif : {objective}" if objective
                   else "Un programme complet pour une semaine parfaite.")
    themes = [
        {
            "title": "Légèreté & Équilibre" if is_weight_loss(objective) else "Équilibre Gourmand",
            "theme": f"Saveurs {origin}" if origin else "Saveurs d'Antan",
            "color": "from-emerald-600 to-teal-600",
        },
        {
            "title": "Force & Vitalité" if is_mass_gain(objective) else "Boost Énergie",
            "theme": "Performance & Santé",
            "color": "from-blue-600 to-indigo-600",
        },
        {
            "title": "Découverte & Diversité",
            "theme": f"Cuisine de {country}" if country else "Voyage Culinaire",
            "color": "from-amber-500 to-orange-500",
        },
        {
            "title": "Rien que Pour Vous" if has_vp else "Fusion Culturelle",
            "theme": "Sélection Personnalisée",
            "color": "from-rose-600 to-pink-600",
        },
    ]
    for t in themes:
        t["description"] = description
    return themes


def placeholder_image(name: str) -> str:
    return PLACEHOLDER_IMAGE.format(name=name)


def to_box_meal(dish: Dish, meal_id: str, slot: str, profile: Optional[UserProfile]) -> BoxMeal:
    """Build the displayed meal, filling display defaults for missing dish data."""
    return BoxMeal(
        id=meal_id,
        name=dish.name,
        cooking_time=dish.cooking_time or DEFAULT_COOKING_TIME,
        calories=dish.calories or DEFAULT_BOX_CALORIES,
        image=dish.image_url or placeholder_image(dish.name),
        category=dish.category,
        slot=slot,
        match_reason=match_reason(dish, profile),
    )


def slot_index(day: int, slot_pos: int, week: int, pool_size: int) -> int:
    return ((day - 1) * len(MEAL_SLOTS) + slot_pos + (week - 1) * WEEK_OFFSET) % pool_size


def build_boxes(dishes: List[Dish], profile: Optional[UserProfile],
                rng: RandomSource = DEFAULT_RANDOM) -> List[WeeklyBox]:
    """Assemble the 4 weekly boxes. Each call re-scores (fresh jitter); reuse the result for one render."""
    if not dishes:
        return []

    ranked = rank_dishes(dishes, profile, rng)
    if not ranked:
        logger.warning("All %d dishes are hard-excluded for this profile; using the unfiltered catalog", len(dishes))
        ranked = list(dishes)
    fallback = list(dishes)

    boxes: List[WeeklyBox] = []
    for week, theme in enumerate(week_themes(profile)[:WEEKS_PER_BOX], start=1):
        # Fresh jitter per week reshuffles near-ties
        pool = rank_dishes(ranked, profile, rng, bias=(week - 1) * WEEK_BIAS)
        src = pool or fallback
        days = []
        for day in range(1, DAYS_PER_WEEK + 1):
            meals = []
            for pos, slot in enumerate(MEAL_SLOTS):
                dish = src[slot_index(day, pos, week, len(src))]
                meals.append(to_box_meal(dish, BoxMeal.make_id(week, day, slot), slot, profile))
            days.append(DayPlan(day, DAY_LABELS[day - 1], meals))
        boxes.append(WeeklyBox(week, theme["title"], theme["theme"], theme["description"], theme["color"], days))

    logger.info("Assembled %d weekly boxes from %d ranked dishes", len(boxes), len(ranked))
    return boxes


def find_week(boxes: List[WeeklyBox], week: int) -> Optional[WeeklyBox]:
    """Return the box for the given week, or None when out of range."""
    return next((b for b in boxes if b.week == week), None)


def distinct_dishes(boxes: List[WeeklyBox]) -> int:
    return len({m.name for b in boxes for d in b.days for m in d.meals})


__all__ = ["build_boxes", "find_week", "week_themes", "to_box_meal", "distinct_dishes", "placeholder_image"]
