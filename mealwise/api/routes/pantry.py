from fastapi import APIRouter, Depends

from mealwise.api.deps import current_user, get_store
from mealwise.logic.pantry.analysis import compute_expiring_soon
from mealwise.utilities.validators import PantryAddInput, PantryUpdateInput

router = APIRouter(prefix="/api/pantry", tags=["pantry"])


@router.get("")
def list_pantry(user=Depends(current_user), store=Depends(get_store)):
    return [item.to_dict(ingredient) for item, ingredient in store.get_pantry_items(user.id)]


@router.get("/expiring")
def expiring_items(user=Depends(current_user), store=Depends(get_store)):
    return compute_expiring_soon(store.get_pantry_items(user.id))


@router.post("/add")
def add_to_pantry(payload: PantryAddInput, user=Depends(current_user), store=Depends(get_store)):
    """Add one pantry item per entry. Repeating a name adds another item."""
    added = []
    for entry in payload.ingredients:
        item, ingredient = store.add_to_pantry(
            user.id, entry.name, quantity=entry.quantity, unit=entry.unit,
            category=entry.category, expiry_date=entry.expiry_date,
        )
        added.append(item.to_dict(ingredient))
    return {"success": True, "items": added}


@router.put("/{item_id}")
def update_pantry_item(item_id: str, payload: PantryUpdateInput, user=Depends(current_user), store=Depends(get_store)):
    item, ingredient = store.update_pantry_item(user.id, item_id, payload.model_dump(exclude_unset=True))
    return item.to_dict(ingredient)


@router.delete("/{item_id}")
def delete_pantry_item(item_id: str, user=Depends(current_user), store=Depends(get_store)):
    store.delete_pantry_item(user.id, item_id)
    return {"success": True}
