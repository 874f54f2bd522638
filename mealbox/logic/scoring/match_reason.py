"""Short human-readable reason explaining why a dish was picked for a profile."""
from typing import Optional

from mealbox.domain.Dish import Dish
from mealbox.domain.Profile import UserProfile
from mealbox.logic.scoring.dish_scoring import is_weight_loss, is_mass_gain, scoring_calories

GENERIC_REASON = "✦ Sélectionné pour vous"

# Calorie thresholds shared with the objective terms of score_dish
LOW_CALORIE_LIMIT = 500
HIGH_CALORIE_LIMIT = 600


def match_reason(dish: Dish, profile: Optional[UserProfile]) -> str:
    if profile is None:
        return GENERIC_REASON
    dish_origin = dish.origin.lower()
    origin = profile.origin.lower()
    country = profile.country.lower()
    cal = scoring_calories(dish)

    if origin and origin in dish_origin:
        return f"✦ Cuisine de vos origines ({profile.origin})"
    if country and country in dish_origin:
        return f"✦ Cuisine locale ({profile.country})"
    if is_weight_loss(profile.main_objective) and cal < LOW_CALORIE_LIMIT:
        return "✦ Faible en calories, parfait pour votre objectif"
    if is_mass_gain(profile.main_objective) and cal > HIGH_CALORIE_LIMIT:
        return "✦ Riche en énergie, adapté à la prise de masse"
    vp = profile.virtual_profile
    if vp is not None and vp.category_score(dish.category) > 0:
        return "✦ Catégorie appréciée selon vos habitudes"
    return GENERIC_REASON
