from fastapi import APIRouter, Depends, Request, Response

from mealwise.api.deps import current_user, get_sessions, get_store
from mealwise.utilities.config import SESSION_COOKIE_NAME, SESSION_TTL_SECONDS
from mealwise.utilities.validators import LoginInput

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.get("/user")
def get_current_user(user=Depends(current_user)):
    return user.to_dict()


@router.post("/login")
def login(payload: LoginInput, response: Response, store=Depends(get_store), sessions=Depends(get_sessions)):
    """Open a session for the user with this email, creating the user on first login."""
    user = store.upsert_user(payload.email, first_name=payload.first_name, last_name=payload.last_name)
    session = sessions.create(user.id)
    response.set_cookie(SESSION_COOKIE_NAME, session.session_id, max_age=SESSION_TTL_SECONDS,
                        httponly=True, samesite="lax")
    return user.to_dict()


@router.post("/logout")
def logout(request: Request, response: Response, sessions=Depends(get_sessions)):
    sessions.delete(request.cookies.get(SESSION_COOKIE_NAME))
    response.delete_cookie(SESSION_COOKIE_NAME)
    return {"success": True}
