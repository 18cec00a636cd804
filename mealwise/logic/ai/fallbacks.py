"""Fixed answers served when the AI provider is unavailable.

The values are literal so the app behaves the same offline, in tests and
when the provider is down.
"""
from datetime import date, timedelta
from typing import Any, Dict, List, Optional, Sequence

from mealwise.utilities.constants import DATE_FORMAT, DAY_NAMES

SCAN_FALLBACK: Dict[str, Any] = {
    "ingredients": [
        {"name": "Tomatoes", "quantity": "3", "unit": "pieces", "confidence": 0.95, "category": "Vegetables"},
        {"name": "Bell peppers", "quantity": "2", "unit": "pieces", "confidence": 0.90, "category": "Vegetables"},
        {"name": "Onions", "quantity": "1", "unit": "piece", "confidence": 0.85, "category": "Vegetables"},
        {"name": "Garlic", "quantity": "4", "unit": "cloves", "confidence": 0.80, "category": "Aromatics"},
    ],
    "totalConfidence": 0.88,
    "suggestions": [
        "The image shows fresh vegetables that would work great in a stir-fry or pasta dish",
        "Consider adding some protein like chicken or tofu to make a complete meal",
    ],
}


def scan_fallback() -> Dict[str, Any]:
    return {
        "ingredients": [dict(i) for i in SCAN_FALLBACK["ingredients"]],
        "totalConfidence": SCAN_FALLBACK["totalConfidence"],
        "suggestions": list(SCAN_FALLBACK["suggestions"]),
    }


def recipe_fallback(available: Sequence[str], family_size: int = 4) -> List[Dict[str, Any]]:
    available = list(available)
    return [
        {
            "title": "Quick Vegetable Stir-Fry",
            "description": "A healthy and colorful stir-fry using your available vegetables",
            "ingredients": available[:5] + ["soy sauce", "garlic", "ginger", "oil"],
            "instructions": [
                "Heat oil in a large pan or wok",
                "Add garlic and ginger, stir-fry for 30 seconds",
                "Add harder vegetables first, then softer ones",
                "Season with soy sauce and serve over rice",
            ],
            "cookTime": 15,
            "servings": family_size,
            "difficulty": "Easy",
            "cuisine": "Asian",
            "tags": ["Quick", "Healthy", "Vegetarian"],
        },
        {
            "title": "Simple Family Soup",
            "description": "Comforting soup made with your available ingredients",
            "ingredients": available[:4] + ["broth", "herbs", "salt", "pepper"],
            "instructions": [
                "Chop all vegetables into bite-sized pieces",
                "Heat broth in a large pot",
                "Add vegetables and simmer until tender",
                "Season with herbs, salt, and pepper to taste",
            ],
            "cookTime": 25,
            "servings": family_size,
            "difficulty": "Easy",
            "cuisine": "Comfort Food",
            "tags": ["Soup", "Comfort", "Family-friendly"],
        },
    ]


def quick_recipe_fallback(ingredients: Sequence[str], family_size: int = 4, cuisine: Optional[str] = None,
                          max_cook_time: Optional[int] = None) -> Dict[str, Any]:
    """Pick the fallback recipe that fits the time budget and adopt the requested cuisine."""
    options = recipe_fallback(ingredients, family_size)
    recipe = options[0]
    if max_cook_time is not None:
        fitting = [r for r in options if r["cookTime"] <= max_cook_time]
        recipe = fitting[0] if fitting else min(options, key=lambda r: r["cookTime"])
    if cuisine:
        recipe["cuisine"] = cuisine
    return recipe


# (title, description, cookTime, [(ingredient, category)], instructions, tags)
_BREAKFASTS = [
    ("Veggie Scrambled Eggs", "Fluffy eggs with spinach and tomatoes", 10,
     [("Eggs", "Dairy"), ("Spinach", "Vegetables"), ("Tomatoes", "Vegetables")],
     ["Whisk the eggs", "Wilt the spinach in a pan", "Scramble the eggs with the vegetables"],
     ["Quick", "Vegetarian"]),
    ("Overnight Oats", "Creamy oats soaked with milk and topped with fruit", 5,
     [("Oats", "Grains"), ("Milk", "Dairy"), ("Bananas", "Fruits")],
     ["Mix oats and milk", "Refrigerate overnight", "Top with sliced banana"],
     ["Make-ahead", "Vegetarian"]),
    ("Yogurt Parfait", "Layers of yogurt, granola and berries", 5,
     [("Yogurt", "Dairy"), ("Granola", "Grains"), ("Berries", "Fruits")],
     ["Spoon yogurt into glasses", "Layer granola and berries", "Serve immediately"],
     ["Quick", "Kid-friendly"]),
]
_LUNCHES = [
    ("Chicken Wraps", "Grilled chicken and crunchy vegetables in a tortilla", 20,
     [("Chicken breast", "Meat"), ("Tortillas", "Grains"), ("Bell peppers", "Vegetables")],
     ["Grill and slice the chicken", "Slice the peppers", "Roll everything in warm tortillas"],
     ["High-protein"]),
    ("Tomato Basil Soup", "Smooth tomato soup with fresh basil", 25,
     [("Tomatoes", "Vegetables"), ("Fresh basil", "Herbs"), ("Onions", "Vegetables")],
     ["Soften the onions", "Simmer with tomatoes for 15 minutes", "Blend with basil"],
     ["Vegetarian", "Comfort"]),
    ("Rice and Bean Bowls", "Hearty bowls with rice, beans and salsa", 20,
     [("Rice", "Grains"), ("Black beans", "Pantry"), ("Salsa", "Pantry")],
     ["Cook the rice", "Warm the beans", "Serve topped with salsa"],
     ["Budget", "Vegetarian"]),
]
_DINNERS = [
    ("Baked Salmon with Herbs", "Flaky salmon baked with fresh herbs and lemon", 30,
     [("Salmon", "Seafood"), ("Lemons", "Fruits"), ("Garlic", "Aromatics")],
     ["Preheat oven to 425°F", "Season salmon with herbs and garlic", "Bake for 12-15 minutes"],
     ["Healthy", "Seafood"]),
    ("Classic Pasta Marinara", "Pasta in homemade tomato sauce", 25,
     [("Pasta", "Grains"), ("Tomato sauce", "Pantry"), ("Garlic", "Aromatics")],
     ["Cook pasta", "Simmer sauce with garlic", "Toss pasta with the sauce"],
     ["Italian", "Vegetarian"]),
    ("Beef and Vegetable Stir Fry", "Tender beef with crisp vegetables", 20,
     [("Ground beef", "Meat"), ("Broccoli", "Vegetables"), ("Rice", "Grains")],
     ["Brown the beef", "Add vegetables and stir-fry", "Serve over rice"],
     ["Quick", "High-protein"]),
    ("Sheet Pan Chicken and Vegetables", "Roasted chicken thighs with carrots and potatoes", 40,
     [("Chicken thighs", "Meat"), ("Carrots", "Vegetables"), ("Potatoes", "Vegetables")],
     ["Toss everything with oil and seasoning", "Roast at 425°F for 35 minutes", "Rest and serve"],
     ["Family-friendly"]),
]


def _meal(template) -> Dict[str, Any]:
    title, description, cook_time, ingredients, instructions, tags = template
    return {
        "title": title,
        "description": description,
        "cookTime": cook_time,
        "ingredients": [name for name, _ in ingredients],
        "instructions": list(instructions),
        "tags": list(tags),
    }


def meal_plan_fallback(week_starting: date) -> Dict[str, Any]:
    """A fixed seven day plan (Sunday first) dated from week_starting."""
    days = []
    categories: Dict[str, List[str]] = {}
    seen: List[str] = []
    for i in range(7):
        templates = {
            "breakfast": _BREAKFASTS[i % len(_BREAKFASTS)],
            "lunch": _LUNCHES[i % len(_LUNCHES)],
            "dinner": _DINNERS[i % len(_DINNERS)],
        }
        for template in templates.values():
            for name, category in template[3]:
                if name not in seen:
                    seen.append(name)
                    categories.setdefault(category, []).append(name)
        days.append({
            "day": DAY_NAMES[i],
            "date": (week_starting + timedelta(days=i)).strftime(DATE_FORMAT),
            "meals": {slot: _meal(t) for slot, t in templates.items()},
        })
    return {
        "days": days,
        "shoppingList": {"ingredients": seen, "categories": categories},
        "nutritionSummary": {"averageCalories": 1950, "proteinBalance": "Balanced", "varietyScore": 8},
    }
