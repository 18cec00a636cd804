"""Pantry analysis helpers."""
from __future__ import annotations
from datetime import date as _date
from typing import List, Dict, Any, Sequence, Tuple

from mealwise.utilities.config import DAYS_BEFORE_EXPIRY

__all__ = ["compute_expiring_soon", "pantry_names"]


def compute_expiring_soon(items: Sequence[Tuple[Any, Any]], *, window: int | None = None,
                          today: _date | None = None) -> List[Dict[str, Any]]:
    """Return pantry items expiring in <= window days (including already expired).

    items is a sequence of (PantryItem, Ingredient) pairs.
    """
    expiring_window = window if window is not None else DAYS_BEFORE_EXPIRY
    today = today or _date.today()
    result: List[Dict[str, Any]] = []
    for item, ingredient in items:
        days_left = item.days_until_expiry(today)
        if days_left is None or days_left > expiring_window:
            continue
        result.append({
            'id': item.id,
            'name': ingredient.name if ingredient else '',
            'quantity': item.quantity,
            'unit': item.unit,
            'days_left': days_left,
        })
    result.sort(key=lambda x: (x['days_left'], x['name']))
    return result


def pantry_names(items: Sequence[Tuple[Any, Any]]) -> List[str]:
    return [ingredient.name for _, ingredient in items if ingredient is not None]
