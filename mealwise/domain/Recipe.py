"""Recipe domain entity: title, steps, timing, difficulty, tags, nutrition info."""
from datetime import datetime
from typing import List, Dict, Optional

from mealwise.utilities.constants import DIFFICULTIES


class RecipeIngredient:
    """Links a recipe to a catalog ingredient with a free-text quantity."""

    def __init__(self, id: str, recipe_id: str, ingredient_id: str, quantity: Optional[str] = None,
                 unit: Optional[str] = None, is_optional: bool = False):
        self.id = id
        self.recipe_id = recipe_id
        self.ingredient_id = ingredient_id
        self.quantity = quantity
        self.unit = unit
        self.is_optional = is_optional

    def __str__(self) -> str:
        return f"{self.quantity or ''} {self.unit or ''} of {self.ingredient_id}".strip()

    __repr__ = __str__

    def to_dict(self, ingredient=None):
        data = {
            "id": self.id,
            "recipeId": self.recipe_id,
            "ingredientId": self.ingredient_id,
            "quantity": self.quantity,
            "unit": self.unit,
            "isOptional": self.is_optional,
        }
        if ingredient is not None:
            data["ingredient"] = ingredient.to_dict()
        return data


class Recipe:
    def __init__(self, id: str, title: str = "", description: Optional[str] = None,
                 instructions: Optional[List[str]] = None, cook_time: int = 30, servings: int = 4,
                 difficulty: str = "Medium", cuisine: Optional[str] = None,
                 tags: Optional[List[str]] = None, nutritional_info: Optional[Dict[str, float]] = None,
                 image_url: Optional[str] = None, created_at: Optional[datetime] = None):
        self.id = id
        self.title = title
        self.description = description
        self.instructions = instructions[:] if instructions else []
        self.cook_time = cook_time
        self.servings = servings
        self.difficulty = difficulty if difficulty in DIFFICULTIES else "Medium"
        self.cuisine = cuisine
        self.tags = tags[:] if tags else []
        self.nutritional_info = dict(nutritional_info) if nutritional_info else None
        self.image_url = image_url
        self.created_at = created_at or datetime.now()

    def __str__(self) -> str:
        return f"{self.title} - {self.servings} servings - {self.cook_time} min - Tags: {', '.join(self.tags)}"

    __repr__ = __str__

    def get_calories(self): return (self.nutritional_info or {}).get("calories", 0) or 0
    def get_protein(self): return (self.nutritional_info or {}).get("protein", 0) or 0
    def get_carbs(self): return (self.nutritional_info or {}).get("carbs", 0) or 0
    def get_fats(self): return (self.nutritional_info or {}).get("fats", 0) or 0

    def matches_query(self, query: str) -> bool:
        """Case-insensitive search over title and description."""
        q = (query or "").strip().lower()
        if not q:
            return True
        return q in self.title.lower() or q in (self.description or "").lower()

    def has_tags(self, tags: List[str]) -> bool:
        own = {t.lower() for t in self.tags}
        return all(t.lower() in own for t in tags)

    def to_dict(self, ingredients=None):
        '''Converts the recipe to its wire form.

        ingredients, when given, is a list of (RecipeIngredient, Ingredient) pairs
        and is rendered under the "ingredients" key.
        '''
        data = {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "instructions": self.instructions,
            "cookTime": self.cook_time,
            "servings": self.servings,
            "difficulty": self.difficulty,
            "cuisine": self.cuisine,
            "tags": self.tags,
            "nutritionalInfo": self.nutritional_info,
            "imageUrl": self.image_url,
            "createdAt": self.created_at.isoformat(),
        }
        if ingredients is not None:
            data["ingredients"] = [link.to_dict(ing) for link, ing in ingredients]
        return data
