"""
security.py — Password Hashing, Session Tokens & Ownership Checks

Purpose:
- Hash & verify passwords (never store raw passwords).
- Issue and validate JWT session tokens.
- Enforce that a caller only acts on their own resources.

Key Constraints:
- Access tokens only (no refresh tokens).
- Authentication is stateless: a token is valid iff its signature checks out
  and the clock has not reached its `exp` claim. There is no revocation list.
- Signing key and hash cost come from Settings via the AppContext.

This module does NOT:
- Define API routes → that lives in moodrecipe/api/v1/auth.py
- Read the Authorization header → that lives in moodrecipe/api/deps.py
- Query the database.
"""

import datetime
from typing import Callable, Optional

from jose import JWTError, jwt
from passlib.context import CryptContext

from moodrecipe.core.errors import Forbidden, InvalidTokenError

Clock = Callable[[], datetime.datetime]


def utcnow() -> datetime.datetime:
    return datetime.datetime.now(datetime.timezone.utc)


# -----------------------------------------------------------------------------
# Password Hashing
# -----------------------------------------------------------------------------

class PasswordHasher:
    """
    Salted bcrypt digests through passlib.

    passlib generates a fresh salt per hash and compares digests in constant
    time on verify.

    bcrypt only reads the first 72 bytes of a secret. Longer passwords are
    refused on hash and never match on verify, so two passwords sharing a
    72-byte prefix cannot both log in.
    """

    max_password_bytes = 72

    def __init__(self, rounds: int = 10):
        self._context = CryptContext(
            schemes=["bcrypt"],
            deprecated="auto",
            bcrypt__rounds=rounds,
        )

    def is_too_long(self, raw_password: str) -> bool:
        return len(raw_password.encode("utf-8")) > self.max_password_bytes

    def hash(self, raw_password: str) -> str:
        if self.is_too_long(raw_password):
            raise ValueError(f"Password exceeds {self.max_password_bytes} bytes")
        return self._context.hash(raw_password)

    def verify(self, raw_password: str, hashed_password: str) -> bool:
        """
        Verify that a raw password matches its hashed stored version.
        A malformed stored hash or an over-long password counts as a mismatch.
        """
        if self.is_too_long(raw_password):
            self._context.dummy_verify()
            return False
        try:
            return self._context.verify(raw_password, hashed_password)
        except ValueError:
            return False

    def dummy_verify(self) -> None:
        """
        Spend the same time a real verify would. Used when the account does
        not exist, so response timing does not reveal it.
        """
        self._context.dummy_verify()


# -----------------------------------------------------------------------------
# JWT Token Handling
# -----------------------------------------------------------------------------

class TokenService:
    """
    Issue and verify signed, time-limited session tokens.

    Payload format:
        {"sub": "<user id>", "iat": <epoch seconds>, "exp": <epoch seconds>}

    `clock` is injectable so expiry can be checked at arbitrary instants.
    """

    def __init__(
        self,
        secret_key: str,
        expire_minutes: int = 60,
        algorithm: str = "HS256",
        clock: Optional[Clock] = None,
    ):
        if not secret_key:
            raise ValueError("secret_key must not be empty")
        self._secret_key = secret_key
        self._algorithm = algorithm
        self.lifetime = datetime.timedelta(minutes=expire_minutes)
        self._clock = clock or utcnow

    def issue(self, user_id: int) -> str:
        issued_at = int(self._clock().timestamp())
        expires_at = issued_at + int(self.lifetime.total_seconds())
        to_encode = {
            "sub": str(user_id),
            "iat": issued_at,
            "exp": expires_at,
        }
        return jwt.encode(to_encode, self._secret_key, algorithm=self._algorithm)

    def verify(self, token: str) -> int:
        """
        Decode and validate a token, returning the user id it was issued to.

        Raises:
            InvalidTokenError: bad signature, malformed token, missing claims,
                or now >= exp.
        """
        try:
            # Expiry is checked below against our own clock; python-jose's
            # check allows now == exp.
            payload = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self._algorithm],
                options={"verify_exp": False, "verify_iat": False},
            )
        except JWTError as e:
            raise InvalidTokenError(str(e)) from e

        expires_at = payload.get("exp")
        if not isinstance(expires_at, (int, float)):
            raise InvalidTokenError("Token has no expiry")
        if self._clock().timestamp() >= expires_at:
            raise InvalidTokenError("Token has expired")

        subject = payload.get("sub")
        try:
            return int(subject)
        except (TypeError, ValueError):
            raise InvalidTokenError("Token subject is not a user id")


# -----------------------------------------------------------------------------
# Ownership
# -----------------------------------------------------------------------------

def ensure_owner(caller_id: int, target_user_id: int) -> None:
    """
    Raise Forbidden unless the verified caller is the target user.

    `caller_id` must be the subject of a verified token, never a value taken
    from the request path or body. Strict equality: no admin override.
    """
    if caller_id != target_user_id:
        raise Forbidden("Unauthorized")
