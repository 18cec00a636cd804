"""Nutrition aggregation logic for a stored meal plan."""
from collections import defaultdict
from typing import Any, Sequence, Tuple

from mealwise.utilities.constants import DAY_NAMES, DATE_FORMAT

_KEYS = ('calories', 'protein', 'carbs', 'fats')


def _recipe_nutrition(recipe):
    return {
        'calories': recipe.get_calories(),
        'protein': recipe.get_protein(),
        'carbs': recipe.get_carbs(),
        'fats': recipe.get_fats(),
    }


def compute_week_nutrition(plan, meals: Sequence[Tuple[Any, Any]]):
    """Aggregate nutrition stats for the given meal plan.

    meals is a sequence of (Meal, Recipe) pairs. Returns:
    {
      'days': [ {'day': 'Sunday', 'date': 'YYYY-MM-DD', 'calories': .., 'protein': .., 'carbs': .., 'fats': ..,
                 'meals': [ {'mealType': 'dinner', 'title': str, 'calories': .., ...}, ... ]}, ... ],
      'weekTotals': {'calories': .., 'protein': .., 'carbs': .., 'fats': ..},
      'averageCalories': ..
    }
    Recipes without nutritionalInfo count as zero.
    """
    per_day = {i: {'meals': [], **{k: 0 for k in _KEYS}} for i in range(7)}
    totals = defaultdict(float)

    for meal, recipe in meals:
        if recipe is None:
            continue
        values = _recipe_nutrition(recipe)
        day = per_day[meal.day_of_week]
        day['meals'].append({'mealType': meal.meal_type, 'title': recipe.title, **values})
        for k in _KEYS:
            day[k] += values[k]
            totals[k] += values[k]

    days = []
    for i in range(7):
        days.append({
            'day': DAY_NAMES[i],
            'date': plan.date_for(i).strftime(DATE_FORMAT),
            **per_day[i],
        })

    planned_days = sum(1 for d in days if d['meals'])
    return {
        'days': days,
        'weekTotals': {k: totals[k] for k in _KEYS},
        'averageCalories': round(totals['calories'] / planned_days) if planned_days else 0,
    }

__all__ = ["compute_week_nutrition"]
