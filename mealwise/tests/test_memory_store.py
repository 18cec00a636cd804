import unittest
from datetime import date

from mealwise.domain.errors import IntegrityError, NotFoundError
from mealwise.infra.Memory_Store import MemoryStore
from mealwise.utilities.constants import DEFAULT_USER_ID


class TestSeededStore(unittest.TestCase):
    def setUp(self):
        self.store = MemoryStore(seed=True)

    def _recipe(self, title):
        return next(r for r in self.store.get_recipes() if r.title == title)

    def test_seed_contents(self):
        self.assertEqual(self.store.get_user(DEFAULT_USER_ID).username, "sarah_mom")
        self.assertEqual(len(self.store.get_ingredients()), 20)
        self.assertEqual(len(self.store.get_recipes()), 4)
        self.assertEqual(len(self.store.get_family_members(DEFAULT_USER_ID)), 4)
        self.assertEqual(self.store.get_user_preferences(DEFAULT_USER_ID).family_size, 4)
        pantry = self.store.get_pantry_items(DEFAULT_USER_ID)
        self.assertEqual(len(pantry), 8)
        self.assertEqual(pantry[0][1].name, "Chicken breast")
        self.assertTrue(all(item.quantity == "1" and item.unit == "piece" for item, _ in pantry))

    def test_recommendations_rank_by_pantry_coverage(self):
        ranked = self.store.get_recommended_recipes(DEFAULT_USER_ID)
        titles = [r.title for r, _ in ranked]
        self.assertEqual(titles[0], "Grilled Chicken with Quinoa & Roasted Vegetables")
        self.assertAlmostEqual(ranked[0][1], 5 / 6)
        self.assertEqual(titles[-1], "Baked Salmon with Herbs")
        self.assertEqual(ranked[-1][1], 0.0)

    def test_optional_ingredients_count_toward_ratio(self):
        lines = [{"name": "Chicken breast"}, {"name": "Saffron", "is_optional": True}]
        recipe = self.store.create_recipe_with_ingredients({"title": "Saffron chicken"}, lines)
        ratios = dict(self.store.get_recommended_recipes(DEFAULT_USER_ID))
        self.assertEqual(ratios[recipe], 0.5)

    def test_pantry_add_is_not_idempotent(self):
        before = len(self.store.get_pantry_items(DEFAULT_USER_ID))
        self.store.add_to_pantry(DEFAULT_USER_ID, "garlic", quantity="2", unit="cloves")
        self.store.add_to_pantry(DEFAULT_USER_ID, "Garlic", quantity="2", unit="cloves")
        items = self.store.get_pantry_items(DEFAULT_USER_ID)
        self.assertEqual(len(items), before + 2)
        # both resolve to the catalog's Garlic
        self.assertEqual({ing.name for _, ing in items[-2:]}, {"Garlic"})
        self.assertEqual(len(self.store.get_ingredients()), 20)

    def test_unknown_ingredient_is_rejected(self):
        with self.assertRaises(IntegrityError):
            self.store.create_pantry_item(DEFAULT_USER_ID, "missing-id")
        recipe = self.store.get_recipes()[0]
        with self.assertRaises(IntegrityError):
            self.store.add_recipe_ingredient(recipe.id, "missing-id")

    def test_family_member_lifecycle(self):
        member = self.store.create_family_member(DEFAULT_USER_ID, "Grandma", age=70)
        self.store.update_family_member(DEFAULT_USER_ID, member.id, {"allergies": ["Shellfish"]})
        self.assertEqual(self.store.get_family_member(DEFAULT_USER_ID, member.id).allergies, ["Shellfish"])
        self.store.delete_family_member(DEFAULT_USER_ID, member.id)
        with self.assertRaises(NotFoundError):
            self.store.update_family_member(DEFAULT_USER_ID, member.id, {"age": 71})
        with self.assertRaises(NotFoundError):
            self.store.get_family_member("someone-else", self.store.get_family_members(DEFAULT_USER_ID)[0].id)

    def test_preferences_defaults_and_update(self):
        user = self.store.create_user("new@example.com")
        with self.assertRaises(NotFoundError):
            self.store.update_user_preferences(user.id, {"budget": "Low"})
        prefs = self.store.create_user_preferences(user.id)
        self.assertEqual((prefs.family_size, prefs.cooking_skill, prefs.cooking_time), (1, "Beginner", "30 mins"))
        self.store.update_user_preferences(user.id, {"budget": "Low", "family_size": None})
        self.assertEqual(self.store.get_user_preferences(user.id).budget, "Low")
        self.assertEqual(self.store.get_user_preferences(user.id).family_size, 1)

    def test_search_recipes(self):
        self.assertEqual(len(self.store.search_recipes("salmon")), 1)
        self.assertEqual(len(self.store.search_recipes(cuisine="american")), 2)
        quick = self.store.search_recipes(tags=["Quick"], max_cook_time=25)
        self.assertEqual({r.title for r in quick},
                         {"Classic Pasta Marinara with Fresh Basil", "Beef and Vegetable Stir Fry"})

    def test_meal_plan_normalizes_to_sunday(self):
        plan = self.store.create_meal_plan(DEFAULT_USER_ID, date(2025, 3, 5))
        self.assertEqual(plan.week_starting, date(2025, 3, 2))
        self.assertIs(self.store.get_meal_plan(DEFAULT_USER_ID, date(2025, 3, 8)), plan)
        self.assertIsNone(self.store.get_meal_plan(DEFAULT_USER_ID, date(2025, 3, 9)))

    def test_shopping_list_from_meal_plan(self):
        plan = self.store.create_meal_plan(DEFAULT_USER_ID, date(2025, 3, 2))
        pasta = self._recipe("Classic Pasta Marinara with Fresh Basil")
        stir_fry = self._recipe("Beef and Vegetable Stir Fry")
        self.store.add_meal(DEFAULT_USER_ID, plan.id, stir_fry.id, 2, "dinner")
        self.store.add_meal(DEFAULT_USER_ID, plan.id, pasta.id, 1, "dinner")

        shopping_list = self.store.generate_shopping_list_from_meal_plan(DEFAULT_USER_ID, plan.id)
        self.assertEqual(shopping_list.name, "Shopping List - Week of 3/2/2025")
        self.assertEqual(shopping_list.meal_plan_id, plan.id)

        items = {i.name: i for i in self.store.get_shopping_list_items(shopping_list.id)}
        self.assertEqual(len(items), 10)
        garlic = items["Garlic"]
        self.assertEqual(garlic.added_from, "Classic Pasta Marinara with Fresh Basil, Beef and Vegetable Stir Fry")
        self.assertEqual((garlic.quantity, garlic.unit, garlic.category), ("3", "cloves", "Aromatics"))
        self.assertEqual(items["Fresh basil"].quantity, "1")
        self.assertTrue(self.store.has_shopping_list_for_plan(plan.id))

    def test_shopping_list_for_unknown_plan(self):
        with self.assertRaises(NotFoundError):
            self.store.generate_shopping_list_from_meal_plan(DEFAULT_USER_ID, "nope")


class TestEmptyStore(unittest.TestCase):
    def test_unseeded_store_is_empty(self):
        store = MemoryStore()
        self.assertEqual(store.get_recipes(), [])
        self.assertIsNone(store.get_user(DEFAULT_USER_ID))
        self.assertEqual(store.get_recommended_recipes("anyone"), [])

    def test_duplicate_email_rejected(self):
        store = MemoryStore()
        store.create_user("a@example.com")
        with self.assertRaises(IntegrityError):
            store.create_user("A@example.com")
        self.assertEqual(store.upsert_user("a@example.com", first_name="Ann").first_name, "Ann")


if __name__ == "__main__":
    unittest.main()
