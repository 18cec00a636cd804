import logging
from datetime import date, datetime
from typing import Optional

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile

from mealwise.api.deps import current_user, get_gateway, get_store
from mealwise.api.routes.recipes import recipe_detail
from mealwise.domain.MealPlan import week_start_for
from mealwise.logic.pantry.analysis import compute_expiring_soon, pantry_names
from mealwise.logic.suggestions.policy import build_proactive_suggestions, suggestions_for
from mealwise.utilities.config import MAX_UPLOAD_BYTES
from mealwise.utilities.constants import DATE_FORMAT
from mealwise.utilities.validators import (
    ChatInput,
    DismissSuggestionInput,
    GenerateMealPlanInput,
    GenerateSuggestionsInput,
    QuickGenerateInput,
    RecommendationsInput,
)

logger = logging.getLogger(__name__)

# Endpoints here are plain `def` so the blocking OpenAI client runs in the threadpool.
router = APIRouter(prefix="/api", tags=["assistant"])


def _household(store, user):
    """Active family members, preferences and a family size for prompts."""
    family = store.get_family_members(user.id, active_only=True)
    prefs = store.get_user_preferences(user.id)
    family_size = (prefs.family_size if prefs else None) or len(family) or 4
    return family, prefs, family_size


# === Ingredient scan ===
@router.post("/scan-ingredients")
def scan_ingredients(image: UploadFile = File(...), gateway=Depends(get_gateway)):
    """Identify ingredients in an uploaded photo (max 10 MB, image/* only)."""
    content_type = (image.content_type or "").lower()
    if not content_type.startswith("image/"):
        raise HTTPException(status_code=400, detail="Only image uploads are accepted")
    data = image.file.read(MAX_UPLOAD_BYTES + 1)
    if not data:
        raise HTTPException(status_code=400, detail="Uploaded image is empty")
    if len(data) > MAX_UPLOAD_BYTES:
        raise HTTPException(status_code=400,
                            detail=f"Image is larger than {MAX_UPLOAD_BYTES // (1024 * 1024)} MB")
    logger.info("Scanning image %s (%d bytes)", image.filename, len(data))
    return gateway.identify_ingredients(data, content_type)


# === Recipes ===
@router.post("/recipes/recommendations")
def recipe_recommendations(payload: Optional[RecommendationsInput] = None, user=Depends(current_user),
                           store=Depends(get_store), gateway=Depends(get_gateway)):
    """AI recipe ideas from the pantry, the family's dietary tags and allergies, and cuisine preferences."""
    family, prefs, family_size = _household(store, user)
    restrictions = []
    for member in family:
        restrictions.extend(member.dietary)
        restrictions.extend(f"{a} allergy" for a in member.allergies)
    restrictions = list(dict.fromkeys(restrictions))
    cuisines = prefs.cuisine_preferences if prefs else []

    recipes = gateway.recommend_recipes(store.get_pantry_names(user.id), restrictions, cuisines, family_size)
    if payload is not None and payload.enhance:
        recipes = gateway.enhance_recipes(recipes, prefs, family)
    return {"recipes": recipes}


@router.post("/recipes/quick-generate")
def quick_generate_recipe(payload: QuickGenerateInput, user=Depends(current_user), store=Depends(get_store),
                          gateway=Depends(get_gateway)):
    """Generate one recipe from a suggestion and add it to the catalog."""
    _, _, family_size = _household(store, user)
    ingredients = payload.ingredients or store.get_pantry_names(user.id)
    generated = gateway.generate_quick_recipe(ingredients, family_size, payload.cuisine, payload.max_cook_time)
    fields = {
        "title": generated["title"],
        "description": generated["description"],
        "instructions": generated["instructions"],
        "cook_time": generated["cookTime"],
        "servings": generated["servings"],
        "difficulty": generated["difficulty"],
        "cuisine": generated.get("cuisine"),
        "tags": generated["tags"],
    }
    recipe = store.create_recipe_with_ingredients(fields, [{"name": name} for name in generated["ingredients"]])
    logger.info("Saved generated recipe %s (%s)", recipe.id, recipe.title)
    return recipe_detail(store, recipe, user.id)


# === Meal planning ===
@router.post("/meal-plans/generate")
def generate_meal_plan(payload: Optional[GenerateMealPlanInput] = None, user=Depends(current_user),
                       store=Depends(get_store), gateway=Depends(get_gateway)):
    week = week_start_for((payload.week_starting if payload else None) or date.today())
    family, prefs, _ = _household(store, user)
    plan = gateway.generate_meal_plan(family, prefs, store.get_pantry_names(user.id), week)
    return {"weekStarting": week.strftime(DATE_FORMAT), **plan}


# === Chat ===
@router.post("/chat")
def chat(payload: ChatInput, user=Depends(current_user), store=Depends(get_store), gateway=Depends(get_gateway)):
    pantry = store.get_pantry_names(user.id)
    previous = [m.model_dump() for m in payload.context.previous_messages]
    reply = gateway.chat(payload.message, previous)
    return {"message": reply, "suggestions": suggestions_for(payload.message, len(pantry))}


# === Proactive suggestions ===
def _proactive(store, user, now: datetime):
    pantry = store.get_pantry_items(user.id)
    ranked = store.get_recommended_recipes(user.id, limit=1)
    week = week_start_for(now.date())
    plan = store.get_meal_plan(user.id, week)
    cards = build_proactive_suggestions(
        now,
        expiring=compute_expiring_soon(pantry, today=now.date()),
        best_match=ranked[0] if ranked else None,
        pantry=pantry_names(pantry),
        week_starting=week,
        plan=plan,
        plan_meal_count=len(store.get_meals(plan.id)) if plan else 0,
        plan_has_list=store.has_shopping_list_for_plan(plan.id) if plan else False,
        dismissed=store.get_dismissed_suggestions(user.id),
    )
    return [c.to_dict() for c in cards]


@router.get("/suggestions/proactive")
def proactive_suggestions(user=Depends(current_user), store=Depends(get_store)):
    return _proactive(store, user, datetime.now())


@router.post("/suggestions/generate")
def generate_suggestions(payload: Optional[GenerateSuggestionsInput] = None, user=Depends(current_user),
                         store=Depends(get_store)):
    now = (payload.context.current_time if payload else None) or datetime.now()
    return _proactive(store, user, now)


@router.post("/suggestions/dismiss")
def dismiss_suggestion(payload: DismissSuggestionInput, user=Depends(current_user), store=Depends(get_store)):
    store.dismiss_suggestion(user.id, payload.suggestion_id)
    return {"success": True}
