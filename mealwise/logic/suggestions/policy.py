"""Rule-based assistant helpers: quick-reply chips, canned replies and dashboard cards.

Nothing here calls the model. Keyword groups are tested in a fixed order
against the lower-cased message; the first group that hits wins.
"""
from datetime import datetime
from typing import Any, Dict, List, Optional, Sequence, Tuple

from mealwise.domain.Suggestion import ProactiveSuggestion
from mealwise.utilities.constants import DATE_FORMAT

__all__ = ["suggestions_for", "fallback_chat_reply", "build_proactive_suggestions"]

_SUGGESTION_RULES: Tuple[Tuple[Tuple[str, ...], List[str]], ...] = (
    (("recipe", "cook", "make"), ["Show quick recipes", "Find healthy options", "Use my pantry items"]),
    (("plan", "week", "meal"), ["Plan this week", "Suggest breakfast", "Dinner ideas", "Prep meals"]),
    (("shop", "buy", "list"), ["Generate shopping list", "Find missing ingredients", "Weekly groceries"]),
    (("healthy", "diet", "nutrition"), ["Healthy recipes", "Low calorie options", "High protein meals"]),
)
_PANTRY_SUGGESTIONS = ["What can I cook?", "Quick meal ideas", "Use expiring items", "Meal planning"]
_COLD_START_SUGGESTIONS = ["Add ingredients", "Browse recipes", "Plan meals", "Get cooking tips"]

_FALLBACK_REPLIES: Tuple[Tuple[Tuple[str, ...], str], ...] = (
    (("recipe", "cook"),
     "I can help you find recipes! Try scanning some ingredients or browsing our curated lists to get started."),
    (("plan", "meal"),
     "Great idea to plan ahead! Add some ingredients to your pantry and I'll suggest meal combinations for the week."),
    (("shop", "buy"),
     "I can help generate shopping lists based on your meal plans. Start by planning some meals first!"),
    (("healthy", "diet"),
     "I'd love to help with healthy eating! Share your dietary preferences and I'll suggest nutritious meal options."),
)
_DEFAULT_REPLY = ("I'm your meal planning assistant! I can help you find recipes, plan meals, "
                  "and create shopping lists. What would you like to work on?")

_PRIORITY_ORDER = {"high": 0, "medium": 1, "low": 2}


def _first_hit(message: str, rules):
    text = (message or '').lower()
    for keywords, value in rules:
        if any(k in text for k in keywords):
            return value
    return None


def suggestions_for(message: str, pantry_count: int) -> List[str]:
    hit = _first_hit(message, _SUGGESTION_RULES)
    if hit is not None:
        return list(hit)
    if pantry_count > 0:
        return list(_PANTRY_SUGGESTIONS)
    return list(_COLD_START_SUGGESTIONS)


def fallback_chat_reply(message: str) -> str:
    return _first_hit(message, _FALLBACK_REPLIES) or _DEFAULT_REPLY


def _cooking_tip(now: datetime, pantry: Sequence[str]) -> ProactiveSuggestion:
    if now.hour < 11:
        period, title, description, max_time = (
            "morning", "Quick breakfast idea",
            "Eggs, oats or yogurt bowls come together in under 15 minutes.", 15)
    elif now.hour < 16:
        period, title, description, max_time = (
            "afternoon", "Prep tonight's dinner early",
            "Chop vegetables and marinate proteins now to save time tonight.", 30)
    else:
        period, title, description, max_time = (
            "evening", "Dinner in 30 minutes",
            "A one-pan meal with what you have keeps the washing up short.", 30)
    return ProactiveSuggestion(
        id=f"tip-{now.strftime(DATE_FORMAT)}-{period}",
        type="cooking_tip",
        title=title,
        description=description,
        priority="low",
        action="Generate recipe",
        data={"ingredients": list(pantry[:5]), "maxCookTime": max_time},
        created_at=now,
    )


def build_proactive_suggestions(now: datetime, *, expiring: Sequence[Dict[str, Any]],
                                best_match: Optional[Tuple[Any, float]], pantry: Sequence[str],
                                week_starting, plan=None, plan_meal_count: int = 0,
                                plan_has_list: bool = False,
                                dismissed: Sequence[str] = ()) -> List[ProactiveSuggestion]:
    """Compute the dashboard cards for one user at `now`.

    Card ids are stable for the same underlying state, so a dismissal keeps
    the card hidden until that state changes.
    """
    cards: List[ProactiveSuggestion] = []

    for item in expiring:
        days_left = item['days_left']
        if days_left < 0:
            title, description = f"{item['name']} has expired", "Check it and remove it from your pantry."
        elif days_left == 0:
            title, description = f"{item['name']} expires today", "Use it in tonight's meal."
        else:
            title = f"{item['name']} expires soon"
            description = f"Use it within {days_left} day{'s' if days_left != 1 else ''}."
        cards.append(ProactiveSuggestion(
            id=f"expiry-{item['id']}",
            type="expiry_warning",
            title=title,
            description=description,
            priority="high" if days_left <= 1 else "medium",
            action="Find recipes",
            data={"pantryItemId": item['id'], "name": item['name'], "daysLeft": days_left,
                  "ingredients": [item['name']]},
            created_at=now,
        ))

    if best_match is not None and best_match[1] > 0:
        recipe, ratio = best_match
        cards.append(ProactiveSuggestion(
            id=f"recipe-{recipe.id}",
            type="recipe",
            title=f"You can make {recipe.title}",
            description=f"Your pantry covers {round(ratio * 100)}% of the ingredients.",
            priority="medium" if ratio >= 0.5 else "low",
            action="View recipe",
            data={"recipeId": recipe.id, "matchRatio": ratio, "cuisine": recipe.cuisine,
                  "maxCookTime": recipe.cook_time},
            created_at=now,
        ))

    week = week_starting.strftime(DATE_FORMAT)
    if plan is None or plan_meal_count == 0:
        cards.append(ProactiveSuggestion(
            id=f"meal-plan-{week}",
            type="meal_plan",
            title="Plan your week",
            description="You have no meals planned this week. Let me draft a plan for the family.",
            priority="medium",
            action="Generate meal plan",
            data={"weekStarting": week},
            created_at=now,
        ))
    elif not plan_has_list:
        cards.append(ProactiveSuggestion(
            id=f"shopping-{plan.id}",
            type="shopping",
            title="Generate your shopping list",
            description=f"{plan_meal_count} meal{'s' if plan_meal_count != 1 else ''} planned this week.",
            priority="medium",
            action="Generate shopping list",
            data={"mealPlanId": plan.id},
            created_at=now,
        ))

    cards.append(_cooking_tip(now, pantry))

    hidden = set(dismissed)
    cards = [c for c in cards if c.id not in hidden]
    return sorted(cards, key=lambda c: _PRIORITY_ORDER.get(c.priority, 3))
