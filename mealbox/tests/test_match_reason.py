from mealbox.domain.Dish import Dish
from mealbox.domain.Profile import UserProfile, VirtualProfile
from mealbox.logic.scoring.match_reason import match_reason, GENERIC_REASON


def test_origin_reason_names_origin():
    dish = Dish(name="Couscous", origin="Marocaine", category="Plat", calories=400)
    reason = match_reason(dish, UserProfile(origin="Marocaine"))
    assert "Marocaine" in reason


def test_origin_wins_over_country():
    dish = Dish(name="Couscous", origin="Marocaine France")
    reason = match_reason(dish, UserProfile(origin="Marocaine", country="France"))
    assert "origines" in reason


def test_country_reason():
    dish = Dish(name="Ratatouille", origin="France")
    assert "France" in match_reason(dish, UserProfile(origin="Sénégalaise", country="France"))


def test_weight_loss_low_calorie_reason():
    dish = Dish(name="Taboulé", calories=230)
    assert "Faible en calories" in match_reason(dish, UserProfile(main_objective="minceur"))


def test_mass_gain_high_calorie_reason():
    dish = Dish(name="Mafé", calories=720)
    assert "prise de masse" in match_reason(dish, UserProfile(main_objective="gagner du muscle"))


def test_liked_category_reason():
    dish = Dish(name="Harira", category="Soupe", calories=550)
    profile = UserProfile(virtual_profile=VirtualProfile(category_scores={"Soupe": 1.5}))
    assert "Catégorie appréciée" in match_reason(dish, profile)


def test_generic_fallbacks():
    dish = Dish(name="Crêpes", category="Dessert", calories=550)
    assert match_reason(dish, UserProfile()) == GENERIC_REASON
    assert match_reason(dish, None) == GENERIC_REASON


def test_reason_is_deterministic():
    dish = Dish(name="Couscous", origin="Marocaine")
    profile = UserProfile(origin="Marocaine")
    assert match_reason(dish, profile) == match_reason(dish, profile)
