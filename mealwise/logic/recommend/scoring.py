"""Pantry-based recipe scoring.

A recipe's match ratio is the share of its ingredients found in the pantry.
Names match case-insensitively by substring containment in either direction,
so "Olive oil" in the pantry covers a recipe's "oil" and vice versa. This also
lets "Rice" match "Rice vinegar"; the false positive is accepted.
"""
from typing import Any, Iterable, List, Optional, Sequence, Tuple

__all__ = ["ingredient_matches", "score_recipe", "rank_recipes"]


def _normalize(name: str) -> str:
    return (name or '').strip().lower()


def ingredient_matches(recipe_ingredient: str, pantry_item: str) -> bool:
    a, b = _normalize(recipe_ingredient), _normalize(pantry_item)
    if not a or not b:
        return False
    return a in b or b in a


def score_recipe(ingredient_names: Sequence[str], available: Iterable[str]) -> Optional[float]:
    """Return the match ratio in [0, 1], or None for a recipe without ingredients."""
    if not ingredient_names:
        return None
    pantry = [p for p in (_normalize(a) for a in available) if p]
    matched = sum(
        1 for name in ingredient_names
        if any(ingredient_matches(name, p) for p in pantry)
    )
    return matched / len(ingredient_names)


def rank_recipes(candidates: Sequence[Tuple[Any, Sequence[str]]], available: Sequence[str], *,
                 limit: int = 10) -> List[Tuple[Any, float]]:
    """Rank (recipe, ingredient names) pairs by match ratio, best first.

    With an empty pantry the first `limit` recipes come back in catalog order
    with a ratio of 0.0. Recipes without ingredients are never scored.
    Ties keep catalog order (sorted() is stable). Optional ingredients count
    toward the ratio like required ones; nothing filters them out.
    """
    if limit <= 0:
        return []
    if not [a for a in available if _normalize(a)]:
        return [(recipe, 0.0) for recipe, _ in candidates[:limit]]

    scored: List[Tuple[Any, float]] = []
    for recipe, names in candidates:
        ratio = score_recipe(names, available)
        if ratio is None:
            continue
        scored.append((recipe, ratio))
    scored = sorted(scored, key=lambda pair: pair[1], reverse=True)
    return scored[:limit]
