"""
Unit tests for services/credentials.py
"""

import pytest

from moodrecipe.core.errors import ValidationError
from moodrecipe.models.user import User
from moodrecipe.services.credentials import create_user, get_user, verify_credentials


def test_signup_then_login(db, ctx):
    """A new user can log in with the original password only."""
    user_id = create_user(db, "alice", "alice@example.com", "Wonderland1", ctx.hasher)

    assert get_user(db, user_id).username == "alice"
    assert verify_credentials(db, "alice@example.com", "Wonderland1", ctx.hasher) == user_id
    assert verify_credentials(db, "alice@example.com", "wonderland1", ctx.hasher) is None
    assert verify_credentials(db, "alice@example.com", "", ctx.hasher) is None


def test_unknown_email_returns_none(db, ctx):
    create_user(db, "alice", "alice@example.com", "Wonderland1", ctx.hasher)
    assert verify_credentials(db, "bob@example.com", "Wonderland1", ctx.hasher) is None
    assert verify_credentials(db, None, "Wonderland1", ctx.hasher) is None


def test_password_is_stored_hashed(db, ctx):
    user_id = create_user(db, "alice", "alice@example.com", "Wonderland1", ctx.hasher)
    user = get_user(db, user_id)
    assert user.password_hash != "Wonderland1"
    assert ctx.hasher.verify("Wonderland1", user.password_hash)


def test_email_is_normalized(db, ctx):
    user_id = create_user(db, "alice", "  Alice@Example.COM ", "Wonderland1", ctx.hasher)
    assert get_user(db, user_id).email == "alice@example.com"
    assert verify_credentials(db, "ALICE@example.com", "Wonderland1", ctx.hasher) == user_id


def test_duplicate_email_rejected(db, ctx):
    """Second signup with the same email fails and the first user is untouched."""
    first_id = create_user(db, "alice", "alice@example.com", "Wonderland1", ctx.hasher)
    original_hash = get_user(db, first_id).password_hash

    with pytest.raises(ValidationError) as exc:
        create_user(db, "alice2", "alice@example.com", "Other-pass9", ctx.hasher)
    assert "email" in exc.value.message

    assert db.query(User).count() == 1
    first = get_user(db, first_id)
    assert first.username == "alice"
    assert first.password_hash == original_hash
    assert verify_credentials(db, "alice@example.com", "Wonderland1", ctx.hasher) == first_id


def test_duplicate_username_rejected(db, ctx):
    create_user(db, "alice", "alice@example.com", "Wonderland1", ctx.hasher)
    with pytest.raises(ValidationError) as exc:
        create_user(db, "alice", "other@example.com", "Wonderland1", ctx.hasher)
    assert "username" in exc.value.message
    assert db.query(User).count() == 1


@pytest.mark.parametrize(
    "username,email,password",
    [
        (None, "a@example.com", "pw"),
        ("alice", None, "pw"),
        ("alice", "a@example.com", None),
        ("", "a@example.com", "pw"),
        ("alice", "   ", "pw"),
    ],
)
def test_missing_fields_rejected(db, ctx, username, email, password):
    with pytest.raises(ValidationError):
        create_user(db, username, email, password, ctx.hasher)
    assert db.query(User).count() == 0


def test_dietary_preferences_stored(db, ctx):
    user_id = create_user(
        db, "alice", "alice@example.com", "Wonderland1", ctx.hasher,
        dietary_preferences=["vegan", "gluten-free", "vegan"],
    )
    assert get_user(db, user_id).dietary_preferences == ["gluten-free", "vegan"]


def test_password_over_bcrypt_limit_rejected(db, ctx):
    """bcrypt ignores bytes past 72, so longer passwords are refused at signup."""
    with pytest.raises(ValidationError):
        create_user(db, "alice", "alice@example.com", "A" * 72 + "secret-tail", ctx.hasher)
    assert db.query(User).count() == 0


def test_password_sharing_72_byte_prefix_does_not_log_in(db, ctx):
    user_id = create_user(db, "alice", "alice@example.com", "A" * 72, ctx.hasher)

    assert verify_credentials(db, "alice@example.com", "A" * 72, ctx.hasher) == user_id
    assert verify_credentials(db, "alice@example.com", "A" * 72 + "totally-different", ctx.hasher) is None


def test_password_limit_counts_utf8_bytes(db, ctx):
    # 25 three-byte characters: 25 code points, 75 bytes
    with pytest.raises(ValidationError):
        create_user(db, "alice", "alice@example.com", "€" * 25, ctx.hasher)
