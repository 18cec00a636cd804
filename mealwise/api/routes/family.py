from fastapi import APIRouter, Depends

from mealwise.api.deps import current_user, get_store
from mealwise.utilities.validators import FamilyMemberInput, FamilyMemberUpdateInput, PreferencesInput

router = APIRouter(prefix="/api", tags=["family"])


@router.get("/family")
def list_family(user=Depends(current_user), store=Depends(get_store)):
    return [m.to_dict() for m in store.get_family_members(user.id)]


@router.post("/family")
def add_family_member(payload: FamilyMemberInput, user=Depends(current_user), store=Depends(get_store)):
    fields = payload.model_dump()
    name = fields.pop("name")
    return store.create_family_member(user.id, name, **fields).to_dict()


@router.put("/family/{member_id}")
def update_family_member(member_id: str, payload: FamilyMemberUpdateInput,
                         user=Depends(current_user), store=Depends(get_store)):
    # age may be cleared; other fields ignore explicit nulls
    changes = {k: v for k, v in payload.model_dump(exclude_unset=True).items() if v is not None or k == "age"}
    return store.update_family_member(user.id, member_id, changes).to_dict()


@router.delete("/family/{member_id}")
def delete_family_member(member_id: str, user=Depends(current_user), store=Depends(get_store)):
    store.delete_family_member(user.id, member_id)
    return {"success": True}


@router.get("/preferences")
def get_preferences(user=Depends(current_user), store=Depends(get_store)):
    prefs = store.get_user_preferences(user.id)
    return prefs.to_dict() if prefs else None


@router.post("/preferences")
def save_preferences(payload: PreferencesInput, user=Depends(current_user), store=Depends(get_store)):
    """Create the preferences on first save, otherwise apply the supplied fields."""
    changes = payload.model_dump(exclude_unset=True)
    return store.upsert_user_preferences(user.id, changes).to_dict()
