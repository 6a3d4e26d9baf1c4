"""Kebun API — dependency injection."""

import uuid

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from kebun.core.core import Backend, BackendName, Kebun
from kebun.core.errors import AuthError

bearer_scheme = HTTPBearer(auto_error=False)


def get_kebun(request: Request) -> Kebun:
    """Get Kebun services from app state."""
    return request.app.state.kebun


def get_backend(backend: BackendName, kebun: Kebun = Depends(get_kebun)) -> Backend:
    """Resolve the ``{backend}`` path segment to its services."""
    return kebun.backend(backend)


def get_current_user_id(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    kebun: Kebun = Depends(get_kebun),
) -> uuid.UUID:
    if credentials is None or not credentials.credentials:
        raise AuthError("Authorization header required. Use: Bearer <token>")
    return kebun.tokens.verify(credentials.credentials)
