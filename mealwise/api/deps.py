"""Request dependencies resolved from app.state (wired in create_app)."""
from fastapi import Depends, HTTPException, Request

from mealwise.domain.User import User
from mealwise.infra.AI_Gateway import AIGateway
from mealwise.infra.Memory_Store import MemoryStore
from mealwise.infra.Session_Store import InMemorySessionStore
from mealwise.utilities.config import SESSION_COOKIE_NAME
from mealwise.utilities.constants import DEFAULT_USER_ID


def _state(request: Request, name: str):
    value = getattr(request.app.state, name, None)
    if value is None:
        raise RuntimeError(f"{name} not initialized. Check create_app wiring.")
    return value


def get_store(request: Request) -> MemoryStore:
    return _state(request, "store")


def get_gateway(request: Request) -> AIGateway:
    return _state(request, "gateway")


def get_sessions(request: Request) -> InMemorySessionStore:
    return _state(request, "sessions")


def current_user(request: Request, store: MemoryStore = Depends(get_store),
                 sessions: InMemorySessionStore = Depends(get_sessions)) -> User:
    """Resolve the caller from the session cookie.

    Without a session the seeded demo user is used when the app allows it;
    otherwise the request is rejected with 401.
    """
    session = sessions.get(request.cookies.get(SESSION_COOKIE_NAME))
    if session is not None:
        user = store.get_user(session.user_id)
        if user is not None:
            return user
    if getattr(request.app.state, "allow_default_user", False):
        user = store.get_user(DEFAULT_USER_ID)
        if user is not None:
            return user
    raise HTTPException(status_code=401, detail="Not authenticated")
