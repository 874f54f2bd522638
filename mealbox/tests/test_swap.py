import unittest

from mealbox.domain.Box import PlanEntry
from mealbox.domain.Dish import Dish
from mealbox.domain.Profile import UserProfile
from mealbox.logic.box.swap import swap_entry
from mealbox.logic.scoring.random_source import FixedRandom, SystemRandom


def make_entry(name="Ratatouille", category="Plat", enabled=True):
    return PlanEntry("w1d2tlunch", name, "50 min", 260, "img", category, "lunch", "",
                     day_index=2, day_label="Mardi", enabled=enabled)


class TestSwapEntry(unittest.TestCase):
    def test_swap_picks_another_dish(self):
        catalog = [Dish(name="Ratatouille", category="Plat"), Dish(name="Tajine", category="Plat")]
        for seed in range(10):
            swapped = swap_entry(make_entry(), catalog, UserProfile(), SystemRandom(seed=seed))
            self.assertEqual(swapped.name, "Tajine")

    def test_identity_preserved(self):
        entry = make_entry(enabled=False)
        catalog = [Dish(name="Ratatouille", category="Plat"), Dish(name="Harira", category="Soupe", calories=320)]
        swapped = swap_entry(entry, catalog, None, FixedRandom([0.0]))
        self.assertIsNot(swapped, entry)
        self.assertEqual((swapped.id, swapped.day_index, swapped.day_label, swapped.slot, swapped.enabled),
                         ("w1d2tlunch", 2, "Mardi", "lunch", False))
        self.assertEqual((swapped.name, swapped.category, swapped.calories), ("Harira", "Soupe", 320))
        # original value untouched
        self.assertEqual(entry.name, "Ratatouille")

    def test_same_category_preferred(self):
        catalog = [Dish(name=f"Plat {i}", category="Plat") for i in range(8)]
        catalog.append(Dish(name="Crêpes", category="Dessert"))
        entry = make_entry(name="Salade de fruits", category="Dessert")
        for seed in range(10):
            self.assertEqual(swap_entry(entry, catalog, None, SystemRandom(seed=seed)).name, "Crêpes")

    def test_pick_stays_in_top_five(self):
        profile = UserProfile(origin="Marocaine")
        top = [Dish(name=f"Marocain {i}", origin="Marocaine", category="Plat") for i in range(5)]
        rest = [Dish(name=f"Autre {i}", origin="Française", category="Plat") for i in range(10)]
        swapped = swap_entry(make_entry(), rest + top, profile, FixedRandom([0.99]))
        self.assertEqual(swapped.name, "Marocain 4")

    def test_no_candidate_returns_entry_unchanged(self):
        entry = make_entry()
        self.assertIs(swap_entry(entry, [Dish(name="Ratatouille", category="Plat")], None), entry)
        self.assertIs(swap_entry(entry, [], None), entry)

    def test_excluded_dishes_never_swapped_in(self):
        entry = make_entry()
        catalog = [Dish(name="Ratatouille", category="Plat"), Dish(name="Mafé aux arachides", category="Plat")]
        self.assertIs(swap_entry(entry, catalog, UserProfile(allergies="arachide")), entry)


if __name__ == '__main__':
    unittest.main()
