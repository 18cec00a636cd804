from fastapi import (
    FastAPI,
    Request,
    Query,
    APIRouter,
    Depends,
    HTTPException,
    Response,
)
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from datetime import date as _date
from typing import Optional
import logging

from mealwise.api.deps import current_user, get_store
from mealwise.domain.errors import IntegrityError, NotFoundError
from mealwise.domain.MealPlan import day_of_week_for, week_start_for
from mealwise.infra.AI_Gateway import AIGateway
from mealwise.infra.Memory_Store import MemoryStore
from mealwise.infra.Session_Store import InMemorySessionStore
from mealwise.infra.pdf_utils import generate_pdf_for_shopping_list, generate_pdf_for_week
from mealwise.logic.reporting.nutrition import compute_week_nutrition
from mealwise.utilities import config
from mealwise.utilities.validators import (
    AddRecipeToPlanInput,
    MealInput,
    MealPlanInput,
    MealUpdateInput,
    ShoppingGenerateInput,
    ShoppingListItemInput,
    ShoppingListItemUpdateInput,
)

# Routers
from mealwise.api.routes import auth, family, pantry, recipes
from mealwise.api.api_ai import router as ai_router

# Logging
logger = logging.getLogger("mealwise_app")

router = APIRouter(prefix="/api")


# -------------------- Helpers --------------------
def _plan_detail(store, plan):
    return plan.to_dict(store.get_meals(plan.id))


def _list_detail(store, shopping_list):
    return shopping_list.to_dict(store.get_shopping_list_items(shopping_list.id))


# -------------------- Meal plans --------------------
@router.get("/meal-plans")
def get_meal_plan(weekStarting: Optional[_date] = Query(default=None), user=Depends(current_user),
                  store=Depends(get_store)):
    """Plan for the week containing weekStarting (default: this week)."""
    week = weekStarting or _date.today()
    plan = store.get_meal_plan(user.id, week)
    if plan is None:
        raise HTTPException(status_code=404, detail=f"No meal plan for week of {week_start_for(week).isoformat()}")
    return _plan_detail(store, plan)


@router.post("/meal-plans")
def create_meal_plan(payload: MealPlanInput, user=Depends(current_user), store=Depends(get_store)):
    plan = store.get_or_create_meal_plan(user.id, payload.week_starting)
    return _plan_detail(store, plan)


@router.post("/meal-plans/add-recipe")
def add_recipe_to_plan(payload: AddRecipeToPlanInput, user=Depends(current_user), store=Depends(get_store)):
    """Schedule a recipe on a calendar date, creating that week's plan when needed."""
    store.get_recipe(payload.recipe_id)
    plan = store.get_or_create_meal_plan(user.id, payload.planned_date)
    meal = store.add_meal(user.id, plan.id, payload.recipe_id, day_of_week_for(payload.planned_date),
                          payload.meal_type)
    logger.info("Added recipe %s to plan %s on %s", payload.recipe_id, plan.id, payload.planned_date)
    return {"success": True, "mealPlanId": plan.id, "meal": meal.to_dict(store.get_recipe(meal.recipe_id))}


@router.post("/meal-plans/{plan_id}/meals")
def add_meal(plan_id: str, payload: MealInput, user=Depends(current_user), store=Depends(get_store)):
    meal = store.add_meal(user.id, plan_id, payload.recipe_id, payload.day_of_week, payload.meal_type,
                          payload.scheduled_time)
    return meal.to_dict(store.get_recipe(meal.recipe_id))


@router.get("/meal-plans/{plan_id}/nutrition")
def meal_plan_nutrition(plan_id: str, user=Depends(current_user), store=Depends(get_store)):
    plan = store.get_meal_plan_by_id(user.id, plan_id)
    return compute_week_nutrition(plan, store.get_meals(plan.id))


@router.get("/meal-plans/{plan_id}/pdf")
def meal_plan_pdf(plan_id: str, user=Depends(current_user), store=Depends(get_store)):
    plan = store.get_meal_plan_by_id(user.id, plan_id)
    pdf_bytes = generate_pdf_for_week(plan, store.get_meals(plan.id))
    filename = f"meal_plan_{plan.week_starting.isoformat()}.pdf"
    return Response(content=pdf_bytes, media_type="application/pdf",
                    headers={"Content-Disposition": f'attachment; filename="{filename}"'})


@router.put("/meals/{meal_id}")
def update_meal(meal_id: str, payload: MealUpdateInput, user=Depends(current_user), store=Depends(get_store)):
    meal = store.update_meal(user.id, meal_id, payload.model_dump(exclude_unset=True))
    return meal.to_dict(store.get_recipe(meal.recipe_id))


@router.delete("/meals/{meal_id}")
def delete_meal(meal_id: str, user=Depends(current_user), store=Depends(get_store)):
    store.delete_meal(user.id, meal_id)
    return {"success": True}


# -------------------- Shopping lists --------------------
@router.post("/shopping/generate")
def generate_shopping_list(payload: ShoppingGenerateInput, user=Depends(current_user), store=Depends(get_store)):
    """Build a shopping list from a meal plan; "current" means this week's plan."""
    if payload.meal_plan_id == "current":
        plan = store.get_meal_plan(user.id, _date.today())
        if plan is None:
            raise HTTPException(status_code=404, detail="No meal plan for the current week")
        plan_id = plan.id
    else:
        plan_id = payload.meal_plan_id
    shopping_list = store.generate_shopping_list_from_meal_plan(user.id, plan_id)
    return _list_detail(store, shopping_list)


@router.get("/shopping-lists")
def list_shopping_lists(user=Depends(current_user), store=Depends(get_store)):
    return [s.to_dict() for s in store.get_shopping_lists(user.id)]


@router.get("/shopping-lists/{list_id}")
def get_shopping_list(list_id: str, user=Depends(current_user), store=Depends(get_store)):
    return _list_detail(store, store.get_shopping_list(user.id, list_id))


@router.get("/shopping-lists/{list_id}/pdf")
def shopping_list_pdf(list_id: str, user=Depends(current_user), store=Depends(get_store)):
    shopping_list = store.get_shopping_list(user.id, list_id)
    pdf_bytes = generate_pdf_for_shopping_list(shopping_list, store.get_shopping_list_items(list_id))
    return Response(content=pdf_bytes, media_type="application/pdf",
                    headers={"Content-Disposition": 'attachment; filename="shopping_list.pdf"'})


@router.post("/shopping-lists/{list_id}/items")
def add_shopping_list_item(list_id: str, payload: ShoppingListItemInput, user=Depends(current_user),
                           store=Depends(get_store)):
    store.get_shopping_list(user.id, list_id)
    ingredient = store.get_ingredient_by_name(payload.name)
    item = store.add_shopping_list_item(
        list_id, payload.name,
        category=payload.category or (ingredient.category if ingredient else None),
        quantity=payload.quantity, unit=payload.unit,
        ingredient_id=ingredient.id if ingredient else None,
        added_from="Added manually",
    )
    return item.to_dict()


@router.put("/shopping-list-items/{item_id}")
def update_shopping_list_item(item_id: str, payload: ShoppingListItemUpdateInput, user=Depends(current_user),
                              store=Depends(get_store)):
    return store.update_shopping_list_item(user.id, item_id, payload.model_dump(exclude_unset=True)).to_dict()


@router.delete("/shopping-list-items/{item_id}")
def delete_shopping_list_item(item_id: str, user=Depends(current_user), store=Depends(get_store)):
    store.delete_shopping_list_item(user.id, item_id)
    return {"success": True}


# -------------------- Error handling --------------------
async def _validation_error(request: Request, exc: RequestValidationError):
    details = [{"loc": list(e.get("loc", ())), "msg": e.get("msg", ""), "type": e.get("type", "")}
               for e in exc.errors()]
    return JSONResponse(status_code=400, content={"error": "Invalid request", "details": details})


async def _not_found(request: Request, exc: NotFoundError):
    return JSONResponse(status_code=404, content={"detail": str(exc)})


async def _bad_value(request: Request, exc: IntegrityError):
    return JSONResponse(status_code=400, content={"detail": str(exc)})


async def _internal_error(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


# -------------------- App factory --------------------
def create_app(store: Optional[MemoryStore] = None, gateway: Optional[AIGateway] = None,
               sessions: Optional[InMemorySessionStore] = None,
               allow_default_user: Optional[bool] = None) -> FastAPI:
    """Build the API with its own store, AI gateway and session registry."""
    app = FastAPI(title="Mealwise Meal Planner API")
    app.state.store = store if store is not None else MemoryStore(seed=config.SEED_DEMO_DATA)
    app.state.gateway = gateway if gateway is not None else AIGateway()
    app.state.sessions = sessions if sessions is not None else InMemorySessionStore(config.SESSION_TTL_SECONDS)
    app.state.allow_default_user = config.ALLOW_DEFAULT_USER if allow_default_user is None else allow_default_user

    app.add_exception_handler(RequestValidationError, _validation_error)
    app.add_exception_handler(NotFoundError, _not_found)
    app.add_exception_handler(IntegrityError, _bad_value)
    app.add_exception_handler(Exception, _internal_error)

    app.include_router(auth.router)
    app.include_router(family.router)
    app.include_router(pantry.router)
    app.include_router(ai_router)
    app.include_router(recipes.router)
    app.include_router(router)

    @app.get("/api/health")
    def health():
        return {"status": "ok", "ai": bool(app.state.gateway.api_key)}

    return app


app = create_app()
