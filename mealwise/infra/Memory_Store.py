"""In-process data store for users, catalog, pantry, plans and shopping lists.

One MemoryStore instance is created per app (see create_app) and reached by
request handlers through app.state. Entities live in per-type dicts keyed by
uuid strings; dict insertion order is the catalog order.
"""
import logging
from datetime import date, datetime
from typing import Dict, Iterable, List, Optional, Set, Tuple
from uuid import uuid4

from mealwise.domain.errors import IntegrityError, NotFoundError
from mealwise.domain.FamilyMember import FamilyMember
from mealwise.domain.Ingredient import Ingredient
from mealwise.domain.MealPlan import Meal, MealPlan, week_start_for
from mealwise.domain.PantryItem import PantryItem
from mealwise.domain.Recipe import Recipe, RecipeIngredient
from mealwise.domain.ShoppingList import ShoppingList, ShoppingListItem
from mealwise.domain.User import User
from mealwise.domain.UserPreferences import UserPreferences
from mealwise.infra import seed_data
from mealwise.logic.recommend.scoring import rank_recipes
from mealwise.logic.shopping.list_builder import build_shopping_list
from mealwise.utilities.config import RECOMMENDATION_LIMIT
from mealwise.utilities.constants import MEAL_TYPES

logger = logging.getLogger(__name__)


def _new_id() -> str:
    return str(uuid4())


class MemoryStore:
    def __init__(self, seed: bool = False):
        self.users: Dict[str, User] = {}
        self.family_members: Dict[str, FamilyMember] = {}
        self.ingredients: Dict[str, Ingredient] = {}
        self.pantry_items: Dict[str, PantryItem] = {}
        self.recipes: Dict[str, Recipe] = {}
        self.recipe_ingredients: Dict[str, RecipeIngredient] = {}
        self.favorites: Dict[Tuple[str, str], datetime] = {}
        self.meal_plans: Dict[str, MealPlan] = {}
        self.meals: Dict[str, Meal] = {}
        self.shopping_lists: Dict[str, ShoppingList] = {}
        self.shopping_list_items: Dict[str, ShoppingListItem] = {}
        self.preferences: Dict[str, UserPreferences] = {}
        self.dismissed: Dict[str, Set[str]] = {}
        if seed:
            self.seed()

    # -------------------- Seed --------------------
    def seed(self):
        """Load the demo household: one user, 20 ingredients, 4 recipes, family and pantry."""
        user = User(**seed_data.DEFAULT_USER)
        self.users[user.id] = user

        for name, category in seed_data.INGREDIENTS:
            self.create_ingredient(name, category)

        for data in seed_data.RECIPES:
            fields = {k: v for k, v in data.items() if k != "ingredients"}
            recipe = self.create_recipe(**fields)
            for name, quantity, unit in data["ingredients"]:
                ingredient = self.get_ingredient_by_name(name)
                if ingredient is None:
                    continue
                self.add_recipe_ingredient(recipe.id, ingredient.id, quantity=quantity, unit=unit)

        for data in seed_data.FAMILY_MEMBERS:
            self.create_family_member(user.id, **data)

        self.create_user_preferences(user.id, **seed_data.PREFERENCES)

        for ingredient in list(self.ingredients.values())[:seed_data.PANTRY_SIZE]:
            self.create_pantry_item(user.id, ingredient.id, quantity="1", unit="piece")

        logger.info("Seeded demo data: %d ingredients, %d recipes, %d pantry items",
                    len(self.ingredients), len(self.recipes), len(self.pantry_items))

    # -------------------- Users --------------------
    def get_user(self, user_id: str) -> Optional[User]:
        return self.users.get(user_id)

    def get_user_by_email(self, email: str) -> Optional[User]:
        email = (email or "").strip().lower()
        return next((u for u in self.users.values() if u.email.lower() == email), None)

    def create_user(self, email: str, first_name: Optional[str] = None, last_name: Optional[str] = None,
                    username: Optional[str] = None, user_id: Optional[str] = None) -> User:
        if self.get_user_by_email(email) is not None:
            raise IntegrityError(f"User with email {email} already exists")
        user = User(id=user_id or _new_id(), email=email, first_name=first_name,
                    last_name=last_name, username=username)
        self.users[user.id] = user
        logger.info("Created user %s", user.id)
        return user

    def upsert_user(self, email: str, first_name: Optional[str] = None,
                    last_name: Optional[str] = None) -> User:
        """Find a user by email (creating it if needed) and refresh supplied names."""
        user = self.get_user_by_email(email)
        if user is None:
            return self.create_user(email, first_name=first_name, last_name=last_name)
        if first_name:
            user.first_name = first_name
        if last_name:
            user.last_name = last_name
        user.updated_at = datetime.now()
        return user

    # -------------------- Family --------------------
    def get_family_members(self, user_id: str, active_only: bool = False) -> List[FamilyMember]:
        return [m for m in self.family_members.values()
                if m.user_id == user_id and (m.is_active or not active_only)]

    def get_family_member(self, user_id: str, member_id: str) -> FamilyMember:
        member = self.family_members.get(member_id)
        if member is None or member.user_id != user_id:
            raise NotFoundError("Family member", member_id)
        return member

    def create_family_member(self, user_id: str, name: str, **fields) -> FamilyMember:
        member = FamilyMember(id=_new_id(), user_id=user_id, name=name, **fields)
        self.family_members[member.id] = member
        return member

    def update_family_member(self, user_id: str, member_id: str, changes: dict) -> FamilyMember:
        member = self.get_family_member(user_id, member_id)
        member.update(changes)
        return member

    def delete_family_member(self, user_id: str, member_id: str) -> None:
        self.get_family_member(user_id, member_id)
        del self.family_members[member_id]

    # -------------------- Ingredients --------------------
    def get_ingredients(self) -> List[Ingredient]:
        return list(self.ingredients.values())

    def get_ingredient(self, ingredient_id: str) -> Optional[Ingredient]:
        return self.ingredients.get(ingredient_id)

    def get_ingredient_by_name(self, name: str) -> Optional[Ingredient]:
        return next((i for i in self.ingredients.values() if i.matches_name(name)), None)

    def create_ingredient(self, name: str, category: Optional[str] = None,
                          nutritional_info: Optional[dict] = None) -> Ingredient:
        ingredient = Ingredient(id=_new_id(), name=name.strip(), category=category or "Other",
                                nutritional_info=nutritional_info)
        self.ingredients[ingredient.id] = ingredient
        return ingredient

    def get_or_create_ingredient(self, name: str, category: Optional[str] = None) -> Ingredient:
        return self.get_ingredient_by_name(name) or self.create_ingredient(name, category)

    # -------------------- Pantry --------------------
    def get_pantry_items(self, user_id: str) -> List[Tuple[PantryItem, Ingredient]]:
        """Pantry items joined with their ingredient, in insertion order."""
        return [(item, self.ingredients[item.ingredient_id])
                for item in self.pantry_items.values()
                if item.user_id == user_id and item.ingredient_id in self.ingredients]

    def get_pantry_names(self, user_id: str) -> List[str]:
        return [ingredient.name for _, ingredient in self.get_pantry_items(user_id)]

    def create_pantry_item(self, user_id: str, ingredient_id: str, quantity: Optional[str] = None,
                           unit: Optional[str] = None, expiry_date: Optional[date] = None) -> PantryItem:
        if ingredient_id not in self.ingredients:
            raise IntegrityError(f"Unknown ingredient id: {ingredient_id}")
        item = PantryItem(id=_new_id(), user_id=user_id, ingredient_id=ingredient_id,
                          quantity=quantity, unit=unit, expiry_date=expiry_date)
        self.pantry_items[item.id] = item
        return item

    def add_to_pantry(self, user_id: str, name: str, quantity: Optional[str] = None,
                      unit: Optional[str] = None, category: Optional[str] = None,
                      expiry_date: Optional[date] = None) -> Tuple[PantryItem, Ingredient]:
        """Add one pantry item by ingredient name.

        Unknown names are added to the catalog first. Adding the same name twice
        creates two pantry items; nothing is merged.
        """
        ingredient = self.get_or_create_ingredient(name, category)
        item = self.create_pantry_item(user_id, ingredient.id, quantity=quantity, unit=unit,
                                       expiry_date=expiry_date)
        return item, ingredient

    def _owned_pantry_item(self, user_id: str, item_id: str) -> PantryItem:
        item = self.pantry_items.get(item_id)
        if item is None or item.user_id != user_id:
            raise NotFoundError("Pantry item", item_id)
        return item

    def update_pantry_item(self, user_id: str, item_id: str, changes: dict) -> Tuple[PantryItem, Ingredient]:
        item = self._owned_pantry_item(user_id, item_id)
        for key in ("quantity", "unit", "expiry_date"):
            if key in changes:
                setattr(item, key, changes[key])
        return item, self.ingredients[item.ingredient_id]

    def delete_pantry_item(self, user_id: str, item_id: str) -> None:
        self._owned_pantry_item(user_id, item_id)
        del self.pantry_items[item_id]

    # -------------------- Recipes --------------------
    def get_recipes(self, limit: int = 50, offset: int = 0) -> List[Recipe]:
        return list(self.recipes.values())[offset:offset + limit]

    def get_recipe(self, recipe_id: str) -> Recipe:
        recipe = self.recipes.get(recipe_id)
        if recipe is None:
            raise NotFoundError("Recipe", recipe_id)
        return recipe

    def get_recipe_ingredients(self, recipe_id: str) -> List[Tuple[RecipeIngredient, Ingredient]]:
        return [(link, self.ingredients[link.ingredient_id])
                for link in self.recipe_ingredients.values()
                if link.recipe_id == recipe_id and link.ingredient_id in self.ingredients]

    def create_recipe(self, title: str, **fields) -> Recipe:
        recipe = Recipe(id=_new_id(), title=title, **fields)
        self.recipes[recipe.id] = recipe
        return recipe

    def add_recipe_ingredient(self, recipe_id: str, ingredient_id: str, quantity: Optional[str] = None,
                              unit: Optional[str] = None, is_optional: bool = False) -> RecipeIngredient:
        if recipe_id not in self.recipes:
            raise IntegrityError(f"Unknown recipe id: {recipe_id}")
        if ingredient_id not in self.ingredients:
            raise IntegrityError(f"Unknown ingredient id: {ingredient_id}")
        link = RecipeIngredient(id=_new_id(), recipe_id=recipe_id, ingredient_id=ingredient_id,
                                quantity=quantity, unit=unit, is_optional=is_optional)
        self.recipe_ingredients[link.id] = link
        return link

    def create_recipe_with_ingredients(self, fields: dict, lines: Iterable[dict]) -> Recipe:
        """Create a recipe and link each ingredient line, adding unknown names to the catalog.

        A line is a dict with name and optional quantity, unit, category, is_optional.
        """
        recipe = self.create_recipe(**fields)
        for line in lines:
            ingredient = self.get_or_create_ingredient(line["name"], line.get("category"))
            self.add_recipe_ingredient(recipe.id, ingredient.id, quantity=line.get("quantity"),
                                       unit=line.get("unit"), is_optional=line.get("is_optional", False))
        return recipe

    def search_recipes(self, query: str = "", cuisine: Optional[str] = None,
                       tags: Optional[List[str]] = None, max_cook_time: Optional[int] = None) -> List[Recipe]:
        result = []
        for recipe in self.recipes.values():
            if not recipe.matches_query(query):
                continue
            if cuisine and (recipe.cuisine or "").lower() != cuisine.lower():
                continue
            if tags and not recipe.has_tags(tags):
                continue
            if max_cook_time is not None and recipe.cook_time > max_cook_time:
                continue
            result.append(recipe)
        return result

    def get_recommended_recipes(self, user_id: str, available: Optional[List[str]] = None,
                                limit: int = RECOMMENDATION_LIMIT) -> List[Tuple[Recipe, float]]:
        """Rank the catalog against the user's pantry (or the given names)."""
        if available is None:
            available = self.get_pantry_names(user_id)
        candidates = [
            (recipe, [ingredient.name for _, ingredient in self.get_recipe_ingredients(recipe.id)])
            for recipe in self.recipes.values()
        ]
        return rank_recipes(candidates, available, limit=limit)

    # -------------------- Favorites --------------------
    def add_favorite(self, user_id: str, recipe_id: str) -> None:
        self.get_recipe(recipe_id)
        self.favorites.setdefault((user_id, recipe_id), datetime.now())

    def remove_favorite(self, user_id: str, recipe_id: str) -> None:
        self.favorites.pop((user_id, recipe_id), None)

    def is_favorite(self, user_id: str, recipe_id: str) -> bool:
        return (user_id, recipe_id) in self.favorites

    def get_user_favorites(self, user_id: str) -> List[Recipe]:
        return [self.recipes[rid] for (uid, rid) in self.favorites
                if uid == user_id and rid in self.recipes]

    # -------------------- Meal plans --------------------
    def get_meal_plan(self, user_id: str, week_starting: date) -> Optional[MealPlan]:
        start = week_start_for(week_starting)
        return next((p for p in self.meal_plans.values()
                     if p.user_id == user_id and p.week_starting == start), None)

    def get_meal_plan_by_id(self, user_id: str, plan_id: str) -> MealPlan:
        plan = self.meal_plans.get(plan_id)
        if plan is None or plan.user_id != user_id:
            raise NotFoundError("Meal plan", plan_id)
        return plan

    def create_meal_plan(self, user_id: str, week_starting: date) -> MealPlan:
        plan = MealPlan(id=_new_id(), user_id=user_id, week_starting=week_start_for(week_starting))
        self.meal_plans[plan.id] = plan
        return plan

    def get_or_create_meal_plan(self, user_id: str, week_starting: date) -> MealPlan:
        return self.get_meal_plan(user_id, week_starting) or self.create_meal_plan(user_id, week_starting)

    def get_meals(self, plan_id: str) -> List[Tuple[Meal, Optional[Recipe]]]:
        """Meals of a plan with their recipe, ordered by day then slot."""
        meals = [m for m in self.meals.values() if m.meal_plan_id == plan_id]
        slot_order = {t: i for i, t in enumerate(MEAL_TYPES)}
        meals.sort(key=lambda m: (m.day_of_week, slot_order.get(m.meal_type, len(slot_order))))
        return [(m, self.recipes.get(m.recipe_id)) for m in meals]

    def add_meal(self, user_id: str, plan_id: str, recipe_id: str, day_of_week: int, meal_type: str,
                 scheduled_time: Optional[str] = None) -> Meal:
        self.get_meal_plan_by_id(user_id, plan_id)
        if recipe_id not in self.recipes:
            raise IntegrityError(f"Unknown recipe id: {recipe_id}")
        meal = Meal(id=_new_id(), meal_plan_id=plan_id, recipe_id=recipe_id, day_of_week=day_of_week,
                    meal_type=meal_type, scheduled_time=scheduled_time)
        self.meals[meal.id] = meal
        return meal

    def _owned_meal(self, user_id: str, meal_id: str) -> Meal:
        meal = self.meals.get(meal_id)
        if meal is None:
            raise NotFoundError("Meal", meal_id)
        plan = self.meal_plans.get(meal.meal_plan_id)
        if plan is None or plan.user_id != user_id:
            raise NotFoundError("Meal", meal_id)
        return meal

    def update_meal(self, user_id: str, meal_id: str, changes: dict) -> Meal:
        meal = self._owned_meal(user_id, meal_id)
        if changes.get("recipe_id") is not None and changes["recipe_id"] not in self.recipes:
            raise IntegrityError(f"Unknown recipe id: {changes['recipe_id']}")
        meal.update({k: v for k, v in changes.items() if v is not None or k == "scheduled_time"})
        return meal

    def delete_meal(self, user_id: str, meal_id: str) -> None:
        self._owned_meal(user_id, meal_id)
        del self.meals[meal_id]

    # -------------------- Shopping lists --------------------
    def get_shopping_lists(self, user_id: str) -> List[ShoppingList]:
        return [s for s in self.shopping_lists.values() if s.user_id == user_id]

    def get_shopping_list(self, user_id: str, list_id: str) -> ShoppingList:
        shopping_list = self.shopping_lists.get(list_id)
        if shopping_list is None or shopping_list.user_id != user_id:
            raise NotFoundError("Shopping list", list_id)
        return shopping_list

    def get_shopping_list_items(self, list_id: str) -> List[ShoppingListItem]:
        return [i for i in self.shopping_list_items.values() if i.shopping_list_id == list_id]

    def has_shopping_list_for_plan(self, plan_id: str) -> bool:
        return any(s.meal_plan_id == plan_id for s in self.shopping_lists.values())

    def create_shopping_list(self, user_id: str, name: str, meal_plan_id: Optional[str] = None) -> ShoppingList:
        shopping_list = ShoppingList(id=_new_id(), user_id=user_id, name=name, meal_plan_id=meal_plan_id)
        self.shopping_lists[shopping_list.id] = shopping_list
        return shopping_list

    def add_shopping_list_item(self, list_id: str, name: str, category: Optional[str] = None,
                               quantity: Optional[str] = None, unit: Optional[str] = None,
                               ingredient_id: Optional[str] = None,
                               added_from: Optional[str] = None) -> ShoppingListItem:
        if list_id not in self.shopping_lists:
            raise IntegrityError(f"Unknown shopping list id: {list_id}")
        if ingredient_id is not None and ingredient_id not in self.ingredients:
            raise IntegrityError(f"Unknown ingredient id: {ingredient_id}")
        item = ShoppingListItem(id=_new_id(), shopping_list_id=list_id, name=name, category=category,
                                quantity=quantity, unit=unit, ingredient_id=ingredient_id,
                                added_from=added_from)
        self.shopping_list_items[item.id] = item
        return item

    def _owned_list_item(self, user_id: str, item_id: str) -> ShoppingListItem:
        item = self.shopping_list_items.get(item_id)
        if item is None:
            raise NotFoundError("Shopping list item", item_id)
        shopping_list = self.shopping_lists.get(item.shopping_list_id)
        if shopping_list is None or shopping_list.user_id != user_id:
            raise NotFoundError("Shopping list item", item_id)
        return item

    def update_shopping_list_item(self, user_id: str, item_id: str, changes: dict) -> ShoppingListItem:
        item = self._owned_list_item(user_id, item_id)
        item.update({k: v for k, v in changes.items() if v is not None})
        return item

    def delete_shopping_list_item(self, user_id: str, item_id: str) -> None:
        self._owned_list_item(user_id, item_id)
        del self.shopping_list_items[item_id]

    def generate_shopping_list_from_meal_plan(self, user_id: str, plan_id: str) -> ShoppingList:
        """Persist a shopping list holding every ingredient of the plan's recipes."""
        plan = self.get_meal_plan_by_id(user_id, plan_id)
        scheduled = [(recipe, self.get_recipe_ingredients(recipe.id))
                     for _, recipe in self.get_meals(plan.id) if recipe is not None]
        week = plan.week_starting
        shopping_list = self.create_shopping_list(
            user_id, f"Shopping List - Week of {week.month}/{week.day}/{week.year}", meal_plan_id=plan.id)
        for entry in build_shopping_list(scheduled):
            self.add_shopping_list_item(shopping_list.id, entry["name"], category=entry["category"],
                                        quantity=entry["quantity"], unit=entry["unit"],
                                        ingredient_id=entry["ingredient_id"], added_from=entry["added_from"])
        logger.info("Generated shopping list %s from meal plan %s (%d items)",
                    shopping_list.id, plan.id, len(self.get_shopping_list_items(shopping_list.id)))
        return shopping_list

    # -------------------- Preferences --------------------
    def get_user_preferences(self, user_id: str) -> Optional[UserPreferences]:
        return self.preferences.get(user_id)

    def create_user_preferences(self, user_id: str, **fields) -> UserPreferences:
        prefs = UserPreferences(id=_new_id(), user_id=user_id,
                                **{k: v for k, v in fields.items() if v is not None})
        self.preferences[user_id] = prefs
        return prefs

    def update_user_preferences(self, user_id: str, changes: dict) -> UserPreferences:
        prefs = self.preferences.get(user_id)
        if prefs is None:
            raise NotFoundError("User preferences", user_id)
        prefs.update(changes)
        return prefs

    def upsert_user_preferences(self, user_id: str, changes: dict) -> UserPreferences:
        if user_id in self.preferences:
            return self.update_user_preferences(user_id, changes)
        return self.create_user_preferences(user_id, **changes)

    # -------------------- Suggestions --------------------
    def dismiss_suggestion(self, user_id: str, suggestion_id: str) -> None:
        self.dismissed.setdefault(user_id, set()).add(suggestion_id)

    def get_dismissed_suggestions(self, user_id: str) -> Set[str]:
        return set(self.dismissed.get(user_id, set()))
