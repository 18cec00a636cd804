"""Shopping list builder.

Provides build_shopping_list(scheduled) which folds the ingredients of every
scheduled recipe into one list of items.
"""
import re
from typing import Any, Dict, List, Sequence, Tuple

_LEADING_NUMBER = re.compile(r'^\s*[+-]?(\d+(\.\d*)?|\.\d+)')


def parse_quantity(text) -> float:
    """Read the leading number of a free-text quantity ("1.5", "2 large", "1/4").

    Anything without a leading non-zero number counts as 1.
    """
    if isinstance(text, (int, float)):
        return float(text) or 1.0
    m = _LEADING_NUMBER.match(str(text or ''))
    if not m:
        return 1.0
    return float(m.group(0)) or 1.0


def format_quantity(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else str(value)


def build_shopping_list(scheduled: Sequence[Tuple[Any, Sequence[Tuple[Any, Any]]]]) -> List[Dict[str, Any]]:
    """Aggregate ingredients for a sequence of scheduled recipes.

    Args:
        scheduled: one (recipe, [(recipe_ingredient, ingredient), ...]) pair per
            meal slot, in plan order. A recipe may appear in several slots.

    Returns:
        List of dicts { name, ingredient_id, category, quantity, unit, added_from }
        in first-seen order. Items are keyed by the exact ingredient name, so
        "Tomato" and "tomatoes" stay separate. Quantities are not summed: the
        first-seen quantity and unit win. added_from lists each contributing
        recipe title once.
    """
    merged: Dict[str, Dict[str, Any]] = {}

    for recipe, links in scheduled:
        if recipe is None:
            continue
        for link, ingredient in links:
            if ingredient is None:
                continue
            key = ingredient.name
            entry = merged.get(key)
            if entry is None:
                merged[key] = {
                    'name': key,
                    'ingredient_id': ingredient.id,
                    'category': ingredient.category or 'Other',
                    'quantity': format_quantity(parse_quantity(link.quantity)),
                    'unit': link.unit or '',
                    'recipes': [recipe.title],
                }
            elif recipe.title not in entry['recipes']:
                entry['recipes'].append(recipe.title)

    items: List[Dict[str, Any]] = []
    for entry in merged.values():
        recipes = entry.pop('recipes')
        entry['added_from'] = ', '.join(recipes)
        items.append(entry)
    return items

__all__ = ['build_shopping_list', 'parse_quantity', 'format_quantity']
