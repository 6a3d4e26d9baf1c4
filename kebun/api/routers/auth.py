"""Auth router — register, login and current user."""

import uuid

from fastapi import APIRouter, Depends

from kebun.api.deps import get_backend, get_current_user_id
from kebun.api.schemas import ApiResponse, LoginRequest, LoginResponse, RegisterRequest, UserPublic
from kebun.core.core import Backend

router = APIRouter()


@router.post("/register", response_model=ApiResponse[LoginResponse])
def register(body: RegisterRequest, backend: Backend = Depends(get_backend)):
    """Register a new user and return an access token."""
    result = backend.auth.register(
        name=body.name,
        email=body.email,
        password=body.password,
        confirm_password=body.confirm_password,
        city=body.city,
        birth_date=body.birth_date,
    )
    return ApiResponse(message="User registered successfully", data=result)


@router.post("/login", response_model=ApiResponse[LoginResponse])
def login(body: LoginRequest, backend: Backend = Depends(get_backend)):
    result = backend.auth.login(body.email, body.password)
    return ApiResponse(message="Login successful", data=result)


@router.get("/me", response_model=ApiResponse[UserPublic])
def me(
    user_id: uuid.UUID = Depends(get_current_user_id),
    backend: Backend = Depends(get_backend),
):
    """Get the authenticated user."""
    return ApiResponse(message="User retrieved successfully", data=backend.auth.me(user_id))
