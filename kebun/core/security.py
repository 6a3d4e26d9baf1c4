"""Kebun Security — password hashing and access tokens."""

import logging
import uuid
from datetime import datetime, timedelta, timezone

import jwt
from werkzeug.security import check_password_hash, generate_password_hash

from kebun.core.config import Settings
from kebun.core.errors import AuthError

logger = logging.getLogger("kebun.security")

JWT_ALGORITHM = "HS256"


def hash_password(password: str) -> str:
    return generate_password_hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    try:
        return check_password_hash(password_hash, password)
    except ValueError:
        # Unknown hash format in storage
        return False


class TokenIssuer:
    """Issues and verifies HS256 access tokens carrying the user id as ``sub``."""

    def __init__(self, settings: Settings):
        self.secret = settings.jwt_secret
        self.ttl = timedelta(hours=settings.jwt_ttl_hours)

    def issue(self, user_id: uuid.UUID) -> str:
        now = datetime.now(timezone.utc)
        payload = {
            "sub": str(user_id),
            "iat": int(now.timestamp()),
            "exp": int((now + self.ttl).timestamp()),
        }
        return jwt.encode(payload, self.secret, algorithm=JWT_ALGORITHM)

    def verify(self, token: str) -> uuid.UUID:
        try:
            claims = jwt.decode(
                token,
                self.secret,
                algorithms=[JWT_ALGORITHM],
                options={"require": ["sub", "exp"]},
            )
        except jwt.ExpiredSignatureError as e:
            raise AuthError("Token expired") from e
        except jwt.InvalidTokenError as e:
            logger.debug(f"Rejected token: {e}")
            raise AuthError("Invalid token") from e
        try:
            return uuid.UUID(claims["sub"])
        except (TypeError, ValueError) as e:
            raise AuthError("Invalid user ID in token") from e
