import unittest

import pytest

from mealbox.domain.Dish import Dish
from mealbox.domain.Profile import UserProfile, VirtualProfile
from mealbox.logic.scoring.dish_scoring import score_dish, is_excluded, tokenize, rank_dishes
from mealbox.logic.scoring.random_source import FixedRandom, SystemRandom


class TestDishScoring(unittest.TestCase):
    def setUp(self):
        self.no_jitter = FixedRandom([0.0])

    def test_origin_match_scenario(self):
        dish = Dish(name="Couscous", origin="Marocaine", category="Plat", calories=400)
        profile = UserProfile(origin="Marocaine")
        # jitter 0.5 * 6 = 3 (average draw)
        self.assertAlmostEqual(score_dish(dish, profile, FixedRandom([0.5])), 38.0)

    def test_country_adds_independently(self):
        dish = Dish(name="Couscous", origin="Cuisine marocaine de France", category="Plat")
        profile = UserProfile(origin="Marocaine", country="France")
        self.assertAlmostEqual(score_dish(dish, profile, self.no_jitter), 55.0)

    def test_allergy_is_hard_exclusion(self):
        dish = Dish(name="Poulet aux arachides", category="Plat", origin="Sénégalaise")
        profile = UserProfile(origin="Sénégalaise", allergies="arachide")
        score = score_dish(dish, profile, self.no_jitter)
        self.assertEqual(score, -9999)
        self.assertTrue(is_excluded(score))

    def test_allergy_matches_category_and_multiple_separators(self):
        dish = Dish(name="Tarte", category="Produits laitiers")
        profile = UserProfile(allergies="gluten; LAIT | soja")
        self.assertEqual(score_dish(dish, profile, self.no_jitter), -9999)

    def test_blank_allergy_tokens_do_not_block(self):
        dish = Dish(name="Ratatouille", category="Plat")
        profile = UserProfile(allergies=" , ;| ")
        self.assertFalse(is_excluded(score_dish(dish, profile, self.no_jitter)))

    def test_cold_start_without_profile(self):
        dish = Dish(name="Ratatouille")
        self.assertAlmostEqual(score_dish(dish, None, FixedRandom([0.25])), 2.5)

    def test_virtual_profile_weights(self):
        dish = Dish(name="Tajine", origin="Marocaine", category="Plat")
        profile = UserProfile(virtual_profile=VirtualProfile({"Marocaine": 2}, {"Plat": 1}))
        self.assertAlmostEqual(score_dish(dish, profile, self.no_jitter), 17.0)

    def test_virtual_profile_missing_keys_count_zero(self):
        dish = Dish(name="Tajine", origin="Libanaise", category="Soupe")
        profile = UserProfile(virtual_profile=VirtualProfile({"Marocaine": 2}, {"Plat": 1}))
        self.assertAlmostEqual(score_dish(dish, profile, self.no_jitter), 0.0)

    def test_weight_loss_calorie_bands(self):
        profile = UserProfile(main_objective="Perte de poids")
        cases = {300: 18, 450: 10, 600: 0, 800: -15}
        for calories, expected in cases.items():
            dish = Dish(name="Plat", calories=calories)
            self.assertAlmostEqual(score_dish(dish, profile, self.no_jitter), expected, msg=str(calories))

    def test_missing_calories_default_to_500(self):
        profile = UserProfile(main_objective="minceur")
        self.assertAlmostEqual(score_dish(Dish(name="Plat"), profile, self.no_jitter), 0.0)

    def test_mass_gain_calories_and_protein(self):
        profile = UserProfile(main_objective="Prise de masse")
        self.assertAlmostEqual(score_dish(Dish(name="Poulet rôti", calories=650), profile, self.no_jitter), 30.0)
        self.assertAlmostEqual(score_dish(Dish(name="Riz", category="Lentilles", calories=400), profile,
                                          self.no_jitter), 12.0)

    def test_vegetarian_meat_penalty(self):
        profile = UserProfile(main_objective="Végétarien")
        self.assertAlmostEqual(score_dish(Dish(name="Curry de poulet"), profile, self.no_jitter), -25.0)
        self.assertAlmostEqual(score_dish(Dish(name="Curry de légumes"), profile, self.no_jitter), 0.0)

    def test_preferences_bonus(self):
        profile = UserProfile(preferences="épicé, légumes")
        self.assertAlmostEqual(score_dish(Dish(name="Couscous aux légumes"), profile, self.no_jitter), 12.0)
        self.assertAlmostEqual(score_dish(Dish(name="Crêpes"), profile, self.no_jitter), 0.0)

    def test_jitter_makes_repeated_calls_differ(self):
        dish = Dish(name="Couscous", origin="Marocaine")
        profile = UserProfile(origin="Marocaine")
        rng = FixedRandom([0.0, 0.9])
        self.assertNotEqual(score_dish(dish, profile, rng), score_dish(dish, profile, rng))


def test_tokenize_splits_on_separators():
    assert tokenize("Arachide, lait;gluten |  soja") == ["arachide", "lait", "gluten", "soja"]
    assert tokenize("") == []
    assert tokenize(None) == []


def test_origin_bonus_in_expectation():
    profile = UserProfile(origin="Marocaine")
    matching = Dish(name="Tajine", origin="Marocaine")
    other = Dish(name="Ratatouille", origin="Française")
    draws = 500
    rng_a, rng_b = SystemRandom(seed=7), SystemRandom(seed=7)
    mean_a = sum(score_dish(matching, profile, rng_a) for _ in range(draws)) / draws
    mean_b = sum(score_dish(other, profile, rng_b) for _ in range(draws)) / draws
    assert mean_a - mean_b == pytest.approx(35.0)


def test_rank_dishes_drops_excluded_and_sorts():
    profile = UserProfile(origin="Marocaine", allergies="arachide")
    dishes = [
        Dish(name="Ratatouille", origin="Française"),
        Dish(name="Mafé aux arachides", origin="Sénégalaise"),
        Dish(name="Harira", origin="Marocaine"),
    ]
    ranked = rank_dishes(dishes, profile, FixedRandom([0.0]))
    assert [d.name for d in ranked] == ["Harira", "Ratatouille"]


if __name__ == '__main__':
    unittest.main()
