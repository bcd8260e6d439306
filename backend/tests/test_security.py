"""
Unit tests for core/security.py: password hashing, session tokens, ownership.
"""

import datetime

import pytest
from jose import jwt

from moodrecipe.core.errors import Forbidden, InvalidTokenError
from moodrecipe.core.security import PasswordHasher, TokenService, ensure_owner

from conftest import T0, FakeClock


@pytest.fixture
def hasher() -> PasswordHasher:
    return PasswordHasher(rounds=4)


@pytest.fixture
def tokens(clock) -> TokenService:
    return TokenService(secret_key="unit-secret", expire_minutes=60, clock=clock)


# Password hashing
def test_hash_is_not_plaintext(hasher):
    digest = hasher.hash("s3cret-Pass")
    assert digest != "s3cret-Pass"
    assert "s3cret-Pass" not in digest
    assert digest.startswith("$2")


def test_hash_is_salted(hasher):
    assert hasher.hash("same-password") != hasher.hash("same-password")


def test_verify_password(hasher):
    digest = hasher.hash("correct horse")
    assert hasher.verify("correct horse", digest) is True
    assert hasher.verify("wrong horse", digest) is False


def test_verify_against_malformed_hash(hasher):
    assert hasher.verify("anything", "not-a-bcrypt-hash") is False


def test_configured_work_factor():
    digest = PasswordHasher(rounds=5).hash("pw")
    assert digest.split("$")[2] == "05"


# Session tokens
def test_issue_and_verify(tokens):
    token = tokens.issue(42)
    assert tokens.verify(token) == 42


def test_token_claims(tokens):
    token = tokens.issue(7)
    claims = jwt.get_unverified_claims(token)
    assert claims["sub"] == "7"
    assert claims["iat"] == int(T0.timestamp())
    assert claims["exp"] - claims["iat"] == 3600


def test_token_accepted_at_59_minutes(tokens, clock):
    token = tokens.issue(1)
    clock.advance(minutes=59)
    assert tokens.verify(token) == 1


def test_token_rejected_at_61_minutes(tokens, clock):
    token = tokens.issue(1)
    clock.advance(minutes=61)
    with pytest.raises(InvalidTokenError):
        tokens.verify(token)


def test_token_rejected_exactly_at_expiry(tokens, clock):
    token = tokens.issue(1)
    clock.advance(minutes=60)
    with pytest.raises(InvalidTokenError):
        tokens.verify(token)


def test_token_signed_with_other_key_rejected(clock):
    other = TokenService(secret_key="other-secret", clock=clock)
    ours = TokenService(secret_key="unit-secret", clock=clock)
    with pytest.raises(InvalidTokenError):
        ours.verify(other.issue(1))


def test_malformed_token_rejected(tokens):
    for bad in ["", "garbage", "a.b.c"]:
        with pytest.raises(InvalidTokenError):
            tokens.verify(bad)


def test_tampered_token_rejected(tokens):
    header, payload, signature = tokens.issue(1).split(".")
    forged_payload = jwt.encode(
        {"sub": "2", "iat": int(T0.timestamp()), "exp": int(T0.timestamp()) + 3600},
        "attacker-key",
    ).split(".")[1]
    with pytest.raises(InvalidTokenError):
        tokens.verify(".".join([header, forged_payload, signature]))


def test_non_integer_subject_rejected(tokens):
    exp = int(T0.timestamp()) + 3600
    token = jwt.encode({"sub": "alice", "exp": exp}, "unit-secret", algorithm="HS256")
    with pytest.raises(InvalidTokenError):
        tokens.verify(token)


def test_missing_expiry_rejected(tokens):
    token = jwt.encode({"sub": "1"}, "unit-secret", algorithm="HS256")
    with pytest.raises(InvalidTokenError):
        tokens.verify(token)


def test_expiry_uses_configured_lifetime():
    clock = FakeClock()
    short = TokenService(secret_key="k", expire_minutes=5, clock=clock)
    token = short.issue(3)
    clock.advance(minutes=4, seconds=59)
    assert short.verify(token) == 3
    clock.advance(seconds=1)
    with pytest.raises(InvalidTokenError):
        short.verify(token)


def test_empty_secret_refused():
    with pytest.raises(ValueError):
        TokenService(secret_key="")


def test_default_clock_is_timezone_aware():
    service = TokenService(secret_key="k")
    token = service.issue(9)
    exp = jwt.get_unverified_claims(token)["exp"]
    now = datetime.datetime.now(datetime.timezone.utc).timestamp()
    assert 3590 <= exp - now <= 3600
    assert service.verify(token) == 9


# Ownership
def test_ensure_owner_allows_self():
    ensure_owner(5, 5)


def test_ensure_owner_rejects_other_user():
    with pytest.raises(Forbidden):
        ensure_owner(5, 6)


def test_hash_refuses_password_over_72_bytes(hasher):
    with pytest.raises(ValueError):
        hasher.hash("x" * 73)


def test_verify_rejects_password_over_72_bytes(hasher):
    digest = hasher.hash("x" * 72)
    assert hasher.verify("x" * 72, digest) is True
    assert hasher.verify("x" * 72 + "y", digest) is False
