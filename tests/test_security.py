"""
Tests for password hashing and the token service.
"""

from datetime import datetime, timedelta, timezone
from unittest.mock import Mock

import jwt
import pytest
from bson import ObjectId

from app.config import Settings
from app.context import AppContext
from app.exceptions import UnauthorizedError
from app.security import PasswordHasher, TokenService

hasher = PasswordHasher(rounds=4)


def test_hash_is_salted_and_verifiable():
    h1 = hasher.hash("secret123")
    h2 = hasher.hash("secret123")

    assert h1 != h2
    assert h1 != "secret123"
    assert h1.startswith("$2")
    assert hasher.verify("secret123", h1)
    assert hasher.verify("secret123", h2)
    assert not hasher.verify("wrong", h1)


def test_verify_password_rejects_garbage_hash():
    assert hasher.verify("secret123", "not-a-hash") is False


def test_hash_cost_comes_from_settings():
    config = Settings(password_hash_rounds=5)

    h = PasswordHasher.from_settings(config).hash("secret123")

    assert h.split("$")[2] == "05"


def test_context_builds_auth_helpers_from_its_settings():
    config = Settings(password_hash_rounds=6, jwt_secret="ctx-secret", jwt_expire_days=2)

    ctx = AppContext(config, db=Mock(), attachments=Mock())

    assert ctx.passwords.rounds == 6
    assert ctx.passwords.hash("secret123").split("$")[2] == "06"
    token = ctx.tokens.issue(str(ObjectId()))
    claims = jwt.decode(token, "ctx-secret", algorithms=["HS256"])
    assert claims["exp"] - claims["iat"] == 2 * 24 * 3600


def test_token_round_trip():
    tokens = TokenService("s3cret")
    user_id = str(ObjectId())

    token = tokens.issue(user_id)

    assert tokens.verify(token) == user_id
    claims = jwt.decode(token, "s3cret", algorithms=["HS256"])
    assert set(claims) == {"sub", "iat", "exp"}
    assert claims["exp"] - claims["iat"] == 7 * 24 * 3600


def test_token_fails_after_expiry():
    tokens = TokenService("s3cret", expire_days=7)
    user_id = str(ObjectId())
    issued = datetime.now(tz=timezone.utc) - timedelta(days=7, seconds=5)

    token = tokens.issue(user_id, now=issued)

    with pytest.raises(UnauthorizedError) as exc:
        tokens.verify(token)
    assert exc.value.message == "Invalid or expired token"


def test_token_still_valid_just_before_expiry():
    tokens = TokenService("s3cret", expire_days=7)
    user_id = str(ObjectId())
    issued = datetime.now(tz=timezone.utc) - timedelta(days=6, hours=23)

    assert tokens.verify(tokens.issue(user_id, now=issued)) == user_id


def test_token_with_altered_signature_is_rejected():
    tokens = TokenService("s3cret")
    token = tokens.issue(str(ObjectId()))
    header, payload, signature = token.split(".")
    flipped = ("A" if signature[0] != "A" else "B") + signature[1:]

    with pytest.raises(UnauthorizedError):
        tokens.verify(f"{header}.{payload}.{flipped}")


def test_token_signed_with_other_secret_is_rejected():
    token = TokenService("other").issue(str(ObjectId()))

    with pytest.raises(UnauthorizedError):
        TokenService("s3cret").verify(token)


@pytest.mark.parametrize("token", ["", "abc", "a.b.c"])
def test_malformed_tokens_are_rejected(token):
    with pytest.raises(UnauthorizedError):
        TokenService("s3cret").verify(token)


def test_token_without_usable_subject_is_rejected():
    exp = datetime.now(tz=timezone.utc) + timedelta(days=1)
    token = jwt.encode({"sub": "not-an-id", "exp": exp}, "s3cret", algorithm="HS256")

    with pytest.raises(UnauthorizedError):
        TokenService("s3cret").verify(token)


def test_expired_and_forged_tokens_fail_identically():
    tokens = TokenService("s3cret")
    expired = tokens.issue(str(ObjectId()), now=datetime.now(tz=timezone.utc) - timedelta(days=30))
    forged = TokenService("other").issue(str(ObjectId()))

    errors = []
    for token in (expired, forged):
        with pytest.raises(UnauthorizedError) as exc:
            tokens.verify(token)
        errors.append(exc.value.to_dict())

    assert errors[0] == errors[1]
