"""
credentials.py — User Creation & Credential Verification

Purpose:
- Create users with a salted bcrypt digest of their password.
- Check email + password pairs at login.

Key Rules:
- username and email are globally unique. The pre-check gives a clear error;
  the DB unique constraints catch the race where two signups interleave.
- Emails are normalized (stripped, lower-cased) before storing or lookup.
- Login never distinguishes "no such email" from "wrong password".
- Plaintext passwords are never stored or logged.
"""

from typing import Iterable, Optional

from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from moodrecipe.core.errors import ValidationError
from moodrecipe.core.logging import get_logger
from moodrecipe.core.security import PasswordHasher
from moodrecipe.models.user import User

logger = get_logger(__name__)


def normalize_email(email: str) -> str:
    return email.strip().lower()


def _require(**fields: Optional[str]) -> None:
    missing = [name for name, value in fields.items() if not value or not value.strip()]
    if missing:
        raise ValidationError(f"Missing required field(s): {', '.join(missing)}")


def create_user(
    db: Session,
    username: Optional[str],
    email: Optional[str],
    password: Optional[str],
    hasher: PasswordHasher,
    dietary_preferences: Optional[Iterable[str]] = None,
) -> int:
    """
    Create a user and return its id.

    Raises:
        ValidationError: a field is missing/blank, or the username or email
            is already taken. Existing users are left untouched.
    """
    _require(username=username, email=email, password=password)

    if hasher.is_too_long(password):
        raise ValidationError(
            f"Password must be at most {hasher.max_password_bytes} bytes"
        )

    username = username.strip()
    email = normalize_email(email)

    existing = (
        db.query(User)
        .filter(or_(User.username == username, User.email == email))
        .first()
    )
    if existing is not None:
        field = "username" if existing.username == username else "email"
        logger.warning("Signup rejected: duplicate %s", field)
        raise ValidationError(f"A user with this {field} already exists")

    user = User(
        username=username,
        email=email,
        password_hash=hasher.hash(password),
        dietary_preferences=sorted(set(dietary_preferences or [])),
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        logger.warning("Signup rejected by unique constraint")
        raise ValidationError("A user with this username or email already exists") from e

    logger.info("User created: id=%s username=%s", user.id, user.username)
    return user.id


def verify_credentials(
    db: Session,
    email: Optional[str],
    password: Optional[str],
    hasher: PasswordHasher,
) -> Optional[int]:
    """
    Return the user id if `password` matches the account for `email`, else None.
    """
    user = None
    if email:
        user = db.query(User).filter(User.email == normalize_email(email)).first()

    if user is None:
        hasher.dummy_verify()
        logger.warning("Login failed")
        return None

    if not password or not hasher.verify(password, user.password_hash):
        logger.warning("Login failed")
        return None

    logger.info("Login succeeded: id=%s", user.id)
    return user.id


def get_user(db: Session, user_id: int) -> Optional[User]:
    return db.query(User).filter(User.id == user_id).first()
