"""Dish scoring against a user profile.

Score terms (higher is better):
  - hard block: any allergy token found in the dish name/category -> HARD_EXCLUSION
  - cultural affinity: +35 origin match, +20 country match
  - learned affinity from the virtual profile (origin x6, category x5)
  - objective alignment (weight loss / mass gain / vegetarian keyword families)
  - explicit preferences: +12
  - variety jitter in [0, 6)

Without a profile the score is a cold-start draw in [0, 10).
"""
from __future__ import annotations
import re
from typing import List, Optional

from mealbox.domain.Dish import Dish
from mealbox.domain.Profile import UserProfile
from mealbox.logic.scoring.random_source import RandomSource, DEFAULT_RANDOM
from mealbox.utilities.constants import (
    HARD_EXCLUSION, EXCLUSION_THRESHOLD, SCORING_CALORIES_DEFAULT, COLD_START_RANGE, JITTER_RANGE
)

TOKEN_SEPARATORS = re.compile(r"[,;|\s]+")

# Keyword families matched against the lowercased main objective
WEIGHT_LOSS_KEYWORDS = ("poids", "minceur", "perte")
MASS_GAIN_KEYWORDS = ("masse", "muscle", "prise")
VEGETARIAN_KEYWORDS = ("vég", "veget", "vegan")

HIGH_PROTEIN_KEYWORDS = (
    "poulet", "viande", "bœuf", "boeuf", "poisson", "oeuf", "œuf", "lentille",
    "pois", "haricot", "thon", "saumon", "crevette",
)
MEAT_KEYWORDS = (
    "poulet", "bœuf", "boeuf", "porc", "agneau", "veau", "canard", "saumon", "thon", "crevette", "viande",
)

ORIGIN_BONUS = 35
COUNTRY_BONUS = 20
ORIGIN_AFFINITY_WEIGHT = 6
CATEGORY_AFFINITY_WEIGHT = 5
PREFERENCE_BONUS = 12


def tokenize(text: Optional[str]) -> List[str]:
    """Split free text (allergies, preferences) into lowercase non-empty tokens."""
    if not text:
        return []
    return [t for t in TOKEN_SEPARATORS.split(text.lower()) if t]


def has_any(text: str, keywords) -> bool:
    return any(k in text for k in keywords)


def is_weight_loss(objective: str) -> bool:
    return has_any(objective.lower(), WEIGHT_LOSS_KEYWORDS)


def is_mass_gain(objective: str) -> bool:
    return has_any(objective.lower(), MASS_GAIN_KEYWORDS)


def is_vegetarian(objective: str) -> bool:
    return has_any(objective.lower(), VEGETARIAN_KEYWORDS)


def scoring_calories(dish: Dish) -> int:
    return dish.calories or SCORING_CALORIES_DEFAULT


def is_blocked(dish: Dish, profile: Optional[UserProfile]) -> bool:
    """True when an allergy token of the profile appears in the dish name or category."""
    if profile is None:
        return False
    name = dish.name.lower()
    category = dish.category.lower()
    return any(t in name or t in category for t in tokenize(profile.allergies))


def is_excluded(score: float) -> bool:
    return score <= EXCLUSION_THRESHOLD


def score_dish(dish: Dish, profile: Optional[UserProfile], rng: RandomSource = DEFAULT_RANDOM) -> float:
    if profile is None:
        return rng.next_float() * COLD_START_RANGE

    if is_blocked(dish, profile):
        return HARD_EXCLUSION

    name = dish.name.lower()
    category = dish.category.lower()
    dish_origin = dish.origin.lower()
    origin = profile.origin.lower()
    country = profile.country.lower()
    objective = profile.main_objective.lower()

    score = 0.0
    if origin and origin in dish_origin:
        score += ORIGIN_BONUS
    if country and country in dish_origin:
        score += COUNTRY_BONUS

    vp = profile.virtual_profile
    if vp is not None:
        score += vp.origin_score(dish.origin) * ORIGIN_AFFINITY_WEIGHT
        score += vp.category_score(dish.category) * CATEGORY_AFFINITY_WEIGHT

    cal = scoring_calories(dish)
    if is_weight_loss(objective):
        if cal < 350:
            score += 18
        elif cal < 500:
            score += 10
        elif cal > 700:
            score -= 15
    if is_mass_gain(objective):
        if cal > 600:
            score += 18
        if has_any(name, HIGH_PROTEIN_KEYWORDS) or has_any(category, HIGH_PROTEIN_KEYWORDS):
            score += 12
    if is_vegetarian(objective) and has_any(name, MEAT_KEYWORDS):
        score -= 25

    liked = tokenize(profile.preferences)
    if any(w in name or w in category or w in dish_origin for w in liked):
        score += PREFERENCE_BONUS

    score += rng.next_float() * JITTER_RANGE
    return score


def rank_dishes(dishes: List[Dish], profile: Optional[UserProfile], rng: RandomSource = DEFAULT_RANDOM,
                bias: float = 0.0) -> List[Dish]:
    """Score every dish once, drop hard-excluded ones and sort best first."""
    scored = []
    for dish in dishes:
        s = score_dish(dish, profile, rng)
        if is_excluded(s):
            continue
        scored.append((s + bias, dish))
    scored.sort(key=lambda pair: pair[0], reverse=True)
    return [dish for _, dish in scored]


__all__ = [
    "score_dish", "rank_dishes", "is_excluded", "is_blocked", "tokenize",
    "is_weight_loss", "is_mass_gain", "is_vegetarian", "scoring_calories",
]
