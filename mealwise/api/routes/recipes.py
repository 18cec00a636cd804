from typing import Optional

from fastapi import APIRouter, Depends, Query

from mealwise.api.deps import current_user, get_store
from mealwise.utilities.validators import FavoriteInput, RecipeInput, RecipeSearchInput

router = APIRouter(prefix="/api", tags=["recipes"])


def recipe_detail(store, recipe, user_id: Optional[str] = None):
    """Recipe with joined ingredients (and the favorite flag when a user is given)."""
    data = recipe.to_dict(store.get_recipe_ingredients(recipe.id))
    if user_id is not None:
        data["isFavorite"] = store.is_favorite(user_id, recipe.id)
    return data


@router.get("/recipes")
def list_recipes(limit: int = Query(50, ge=1, le=200), offset: int = Query(0, ge=0), store=Depends(get_store)):
    return [r.to_dict() for r in store.get_recipes(limit=limit, offset=offset)]


@router.get("/recipes/search")
def search_recipes(q: str = Query("", max_length=200), cuisine: Optional[str] = None,
                   tags: Optional[str] = Query(None, description="Comma separated tags"),
                   maxCookTime: Optional[int] = Query(None, ge=1), store=Depends(get_store)):
    tag_list = [t.strip() for t in tags.split(",") if t.strip()] if tags else None
    return [r.to_dict() for r in store.search_recipes(q, cuisine=cuisine, tags=tag_list, max_cook_time=maxCookTime)]


@router.post("/recipes/search")
def search_recipes_by_body(payload: RecipeSearchInput, store=Depends(get_store)):
    return [r.to_dict() for r in store.search_recipes(payload.query)]


@router.get("/recipes/recommended")
def recommended_recipes(user=Depends(current_user), store=Depends(get_store)):
    """Catalog recipes ranked by how much of each the pantry already covers."""
    ranked = store.get_recommended_recipes(user.id)
    return [{**recipe.to_dict(), "matchRatio": round(ratio, 4)} for recipe, ratio in ranked]


@router.get("/recipes/{recipe_id}")
def get_recipe(recipe_id: str, user=Depends(current_user), store=Depends(get_store)):
    return recipe_detail(store, store.get_recipe(recipe_id), user.id)


@router.post("/recipes")
def create_recipe(payload: RecipeInput, store=Depends(get_store)):
    fields = payload.model_dump(exclude={"ingredients"})
    lines = [line.model_dump() for line in payload.ingredients]
    recipe = store.create_recipe_with_ingredients(fields, lines)
    return recipe_detail(store, recipe)


@router.post("/recipes/{recipe_id}/favorite")
def set_favorite(recipe_id: str, payload: FavoriteInput, user=Depends(current_user), store=Depends(get_store)):
    store.get_recipe(recipe_id)
    if payload.is_favorite:
        store.add_favorite(user.id, recipe_id)
    else:
        store.remove_favorite(user.id, recipe_id)
    return {"recipeId": recipe_id, "isFavorite": store.is_favorite(user.id, recipe_id)}


@router.get("/favorites")
def list_favorites(user=Depends(current_user), store=Depends(get_store)):
    return [r.to_dict() for r in store.get_user_favorites(user.id)]
