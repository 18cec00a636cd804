"""Demo household loaded into a fresh MemoryStore."""
from mealwise.utilities.constants import DEFAULT_USER_ID

DEFAULT_USER = {
    "id": DEFAULT_USER_ID,
    "username": "sarah_mom",
    "email": "sarah@example.com",
    "first_name": "Sarah",
}

INGREDIENTS = [
    ("Chicken breast", "Meat"),
    ("Quinoa", "Grains"),
    ("Broccoli", "Vegetables"),
    ("Bell peppers", "Vegetables"),
    ("Carrots", "Vegetables"),
    ("Pasta", "Grains"),
    ("Tomato sauce", "Pantry"),
    ("Fresh basil", "Herbs"),
    ("Garlic", "Aromatics"),
    ("Olive oil", "Pantry"),
    ("Onions", "Vegetables"),
    ("Tomatoes", "Vegetables"),
    ("Mozzarella cheese", "Dairy"),
    ("Ground beef", "Meat"),
    ("Rice", "Grains"),
    ("Salmon", "Seafood"),
    ("Eggs", "Dairy"),
    ("Spinach", "Vegetables"),
    ("Milk", "Dairy"),
    ("Bread", "Grains"),
]

# The first PANTRY_SIZE catalog ingredients start in the pantry as 1 piece each.
PANTRY_SIZE = 8

RECIPES = [
    {
        "title": "Grilled Chicken with Quinoa & Roasted Vegetables",
        "description": "A healthy, balanced meal with lean protein, whole grains, and colorful vegetables.",
        "instructions": [
            "Season chicken breast with salt, pepper, and herbs",
            "Grill chicken for 6-8 minutes per side until cooked through",
            "Cook quinoa according to package instructions",
            "Roast vegetables in oven at 400°F for 20-25 minutes",
            "Serve chicken over quinoa with roasted vegetables on the side",
        ],
        "cook_time": 45,
        "servings": 4,
        "difficulty": "Medium",
        "cuisine": "American",
        "tags": ["Healthy", "High-protein", "Gluten-free", "Meal prep"],
        "nutritional_info": {"calories": 520, "protein": 42, "carbs": 45, "fats": 16},
        "image_url": "/generated_images/Healthy_balanced_meal_plating.png",
        "ingredients": [
            ("chicken breast", "2", "lbs"),
            ("quinoa", "1", "cup"),
            ("broccoli", "1", "head"),
            ("bell peppers", "2", "pieces"),
            ("carrots", "3", "pieces"),
            ("olive oil", "2", "tbsp"),
        ],
    },
    {
        "title": "Classic Pasta Marinara with Fresh Basil",
        "description": "Simple and delicious pasta with homemade tomato sauce and fresh herbs.",
        "instructions": [
            "Cook pasta according to package directions",
            "Heat olive oil in large pan",
            "Sauté garlic until fragrant",
            "Add tomato sauce and simmer for 10 minutes",
            "Toss pasta with sauce and fresh basil",
            "Serve with grated cheese",
        ],
        "cook_time": 25,
        "servings": 2,
        "difficulty": "Easy",
        "cuisine": "Italian",
        "tags": ["Italian", "Vegetarian", "Quick", "Comfort food"],
        "nutritional_info": {"calories": 610, "protein": 18, "carbs": 98, "fats": 15},
        "image_url": "/generated_images/Appetizing_pasta_dish_photo.png",
        "ingredients": [
            ("pasta", "1", "lb"),
            ("tomato sauce", "2", "cups"),
            ("fresh basil", "1/4", "cup"),
            ("garlic", "3", "cloves"),
            ("olive oil", "2", "tbsp"),
        ],
    },
    {
        "title": "Beef and Vegetable Stir Fry",
        "description": "Quick and nutritious stir fry with tender beef and crisp vegetables.",
        "instructions": [
            "Slice beef into thin strips",
            "Heat oil in wok or large skillet",
            "Stir-fry beef until browned",
            "Add vegetables and cook until crisp-tender",
            "Season with soy sauce and garlic",
            "Serve over rice",
        ],
        "cook_time": 20,
        "servings": 4,
        "difficulty": "Easy",
        "cuisine": "Asian",
        "tags": ["Quick", "High-protein", "Gluten-free option"],
        "nutritional_info": {"calories": 560, "protein": 32, "carbs": 58, "fats": 20},
        "image_url": None,
        "ingredients": [
            ("ground beef", "1", "lb"),
            ("bell peppers", "2", "pieces"),
            ("onions", "1", "piece"),
            ("carrots", "2", "pieces"),
            ("garlic", "2", "cloves"),
            ("rice", "2", "cups"),
        ],
    },
    {
        "title": "Baked Salmon with Herbs",
        "description": "Flaky salmon baked with fresh herbs and lemon.",
        "instructions": [
            "Preheat oven to 425°F",
            "Season salmon with salt, pepper, and herbs",
            "Place on baking sheet with lemon slices",
            "Bake for 12-15 minutes until flakes easily",
            "Serve with steamed vegetables",
        ],
        "cook_time": 30,
        "servings": 4,
        "difficulty": "Easy",
        "cuisine": "American",
        "tags": ["Healthy", "Seafood", "Low-carb", "Quick"],
        "nutritional_info": {"calories": 410, "protein": 36, "carbs": 2, "fats": 27},
        "image_url": None,
        "ingredients": [
            ("salmon", "1.5", "lbs"),
            ("olive oil", "1", "tbsp"),
            ("garlic", "2", "cloves"),
        ],
    },
]

FAMILY_MEMBERS = [
    {"name": "Sarah (Mom)", "age": 35, "dietary": ["Vegetarian"], "allergies": ["Nuts"],
     "preferences": ["Italian", "Mexican", "Asian"]},
    {"name": "Mike (Dad)", "age": 37, "dietary": [], "allergies": [],
     "preferences": ["BBQ", "American", "Italian"]},
    {"name": "Emma (8)", "age": 8, "dietary": [], "allergies": ["Dairy"],
     "preferences": ["Simple", "Mild flavors"]},
    {"name": "Jake (12)", "age": 12, "dietary": [], "allergies": [],
     "preferences": ["Pizza", "Pasta", "Chicken"]},
]

PREFERENCES = {
    "family_size": 4,
    "cooking_skill": "Intermediate",
    "budget": "Medium",
    "cooking_time": "30-45 mins",
    "cuisine_preferences": ["Italian", "American", "Mexican", "Asian"],
    "healthy_alternatives": True,
    "seasonal_ingredients": True,
    "meal_variety": True,
}
