"""UserPreferences domain entity: household-level cooking settings."""
from datetime import datetime
from typing import List, Optional


class UserPreferences:
    def __init__(self, id: str, user_id: str, family_size: int = 1, cooking_skill: str = "Beginner",
                 budget: str = "Medium", cooking_time: str = "30 mins",
                 cuisine_preferences: Optional[List[str]] = None, healthy_alternatives: bool = True,
                 seasonal_ingredients: bool = True, meal_variety: bool = True,
                 updated_at: Optional[datetime] = None):
        self.id = id
        self.user_id = user_id
        self.family_size = family_size
        self.cooking_skill = cooking_skill
        self.budget = budget
        self.cooking_time = cooking_time
        self.cuisine_preferences = cuisine_preferences[:] if cuisine_preferences else []
        self.healthy_alternatives = healthy_alternatives
        self.seasonal_ingredients = seasonal_ingredients
        self.meal_variety = meal_variety
        self.updated_at = updated_at or datetime.now()

    def update(self, changes: dict):
        '''Applies a partial update; None values keep the current setting.'''
        for key in ("family_size", "cooking_skill", "budget", "cooking_time", "cuisine_preferences",
                    "healthy_alternatives", "seasonal_ingredients", "meal_variety"):
            if changes.get(key) is not None:
                setattr(self, key, changes[key])
        self.updated_at = datetime.now()

    def to_dict(self):
        return {
            "id": self.id,
            "userId": self.user_id,
            "familySize": self.family_size,
            "cookingSkill": self.cooking_skill,
            "budget": self.budget,
            "cookingTime": self.cooking_time,
            "cuisinePreferences": self.cuisine_preferences,
            "healthyAlternatives": self.healthy_alternatives,
            "seasonalIngredients": self.seasonal_ingredients,
            "mealVariety": self.meal_variety,
            "updatedAt": self.updated_at.isoformat(),
        }
