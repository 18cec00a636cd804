"""MealPlan domain entity: a user's week (starting Sunday) of scheduled meals."""
from datetime import date, datetime, timedelta
from typing import Optional

from mealwise.utilities.constants import DATE_FORMAT, DAY_NAMES


def week_start_for(day: date) -> date:
    """Return the Sunday that opens the week containing day."""
    # date.weekday(): Monday=0 .. Sunday=6
    return day - timedelta(days=(day.weekday() + 1) % 7)


def day_of_week_for(day: date) -> int:
    """0=Sunday .. 6=Saturday."""
    return (day.weekday() + 1) % 7


class Meal:
    def __init__(self, id: str, meal_plan_id: str, recipe_id: str, day_of_week: int,
                 meal_type: str, scheduled_time: Optional[str] = None):
        self.id = id
        self.meal_plan_id = meal_plan_id
        self.recipe_id = recipe_id
        self.day_of_week = day_of_week
        self.meal_type = meal_type
        self.scheduled_time = scheduled_time

    def __str__(self) -> str:
        return f"{DAY_NAMES[self.day_of_week]} {self.meal_type}: {self.recipe_id}"

    __repr__ = __str__

    def update(self, changes: dict):
        for key in ("recipe_id", "day_of_week", "meal_type", "scheduled_time"):
            if key in changes:
                setattr(self, key, changes[key])

    def to_dict(self, recipe=None):
        data = {
            "id": self.id,
            "mealPlanId": self.meal_plan_id,
            "recipeId": self.recipe_id,
            "dayOfWeek": self.day_of_week,
            "mealType": self.meal_type,
            "scheduledTime": self.scheduled_time,
        }
        if recipe is not None:
            data["recipe"] = recipe.to_dict()
        return data


class MealPlan:
    def __init__(self, id: str, user_id: str, week_starting: date, created_at: Optional[datetime] = None):
        self.id = id
        self.user_id = user_id
        self.week_starting = week_starting
        self.created_at = created_at or datetime.now()

    def __str__(self) -> str:
        return f"Meal plan for week of {self.week_starting.strftime(DATE_FORMAT)}"

    __repr__ = __str__

    def date_for(self, day_of_week: int) -> date:
        return self.week_starting + timedelta(days=day_of_week)

    def to_dict(self, meals=None):
        '''meals, when given, is a list of (Meal, Recipe) pairs.'''
        data = {
            "id": self.id,
            "userId": self.user_id,
            "weekStarting": self.week_starting.strftime(DATE_FORMAT),
            "createdAt": self.created_at.isoformat(),
        }
        if meals is not None:
            data["meals"] = [meal.to_dict(recipe) for meal, recipe in meals]
        return data
