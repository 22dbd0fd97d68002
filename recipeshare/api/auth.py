from __future__ import annotations

from fastapi import APIRouter, Depends

from ..auth import users
from ..auth.dependencies import require_user
from ..auth.models import AuthResponse, LoginRequest, ProfileUpdate, RegisterRequest
from ..auth.tokens import create_access_token
from ..config import Settings, get_settings
from ..errors import BadRequestError
from ..storage import get_store
from ..storage.base import DocumentStore

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/register", response_model=AuthResponse, status_code=201)
def register(
    body: RegisterRequest,
    store: DocumentStore = Depends(get_store),
    settings: Settings = Depends(get_settings),
) -> AuthResponse:
    user, token = users.register(store, body, settings)
    return AuthResponse(user=user, token=token)


@router.post("/login", response_model=AuthResponse)
def login(
    body: LoginRequest,
    store: DocumentStore = Depends(get_store),
    settings: Settings = Depends(get_settings),
) -> AuthResponse:
    user = users.authenticate(store, body.email, body.password)
    if not user:
        raise BadRequestError("Invalid credentials")
    return AuthResponse(user=user, token=create_access_token(user["id"], settings))


@router.get("/me")
def me(user: dict = Depends(require_user)) -> dict:
    return user


@router.get("/user/{user_id}")
def get_user(
    user_id: str,
    user: dict = Depends(require_user),
    store: DocumentStore = Depends(get_store),
) -> dict:
    return users.get_account(store, user_id)


@router.put("/user/{user_id}")
def update_user(
    user_id: str,
    body: ProfileUpdate,
    user: dict = Depends(require_user),
    store: DocumentStore = Depends(get_store),
) -> dict:
    return users.update_profile(store, user, user_id, body)
