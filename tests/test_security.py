import uuid
from datetime import datetime, timedelta, timezone

import jwt
import pytest

from kebun.core.errors import AuthError
from kebun.core.security import TokenIssuer, hash_password, verify_password


def test_password_hash_round_trip():
    hashed = hash_password("rahasia123")
    assert hashed != "rahasia123"
    assert verify_password("rahasia123", hashed)
    assert not verify_password("rahasia124", hashed)


def test_garbage_hash_never_verifies():
    assert not verify_password("rahasia123", "not-a-hash")


def test_issue_and_verify(settings):
    issuer = TokenIssuer(settings)
    user_id = uuid.uuid4()
    assert issuer.verify(issuer.issue(user_id)) == user_id


def test_token_signed_with_other_secret_is_rejected(settings):
    token = jwt.encode(
        {"sub": str(uuid.uuid4()), "exp": datetime.now(timezone.utc) + timedelta(hours=1)},
        "other-secret",
        algorithm="HS256",
    )
    with pytest.raises(AuthError, match="Invalid token"):
        TokenIssuer(settings).verify(token)


def test_expired_token_is_rejected(settings):
    token = jwt.encode(
        {"sub": str(uuid.uuid4()), "exp": datetime.now(timezone.utc) - timedelta(minutes=1)},
        settings.jwt_secret,
        algorithm="HS256",
    )
    with pytest.raises(AuthError, match="expired"):
        TokenIssuer(settings).verify(token)


@pytest.mark.parametrize("token", ["", "abc", "user_1234"])
def test_malformed_tokens_are_rejected(settings, token):
    with pytest.raises(AuthError):
        TokenIssuer(settings).verify(token)


def test_non_uuid_subject_is_rejected(settings):
    token = jwt.encode(
        {"sub": "admin", "exp": datetime.now(timezone.utc) + timedelta(hours=1)},
        settings.jwt_secret,
        algorithm="HS256",
    )
    with pytest.raises(AuthError):
        TokenIssuer(settings).verify(token)
