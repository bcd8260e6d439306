"""
deps.py — Shared FastAPI Dependencies (Access Control Guard)

Purpose:
- Hand routes the AppContext built at startup.
- Resolve the caller's user id from `Authorization: Bearer <token>`.

Status codes:
- No Authorization header → 401 Unauthenticated.
- Header present but the token does not verify (malformed, bad signature,
  expired) → 403 Unauthenticated.

Ownership checks are done with core.security.ensure_owner() against the id
returned here, which always comes from the verified token.
"""

from typing import Optional

from fastapi import Depends, Header, Request

from moodrecipe.core.context import AppContext
from moodrecipe.core.errors import InvalidTokenError, Unauthenticated
from moodrecipe.core.logging import get_logger

logger = get_logger(__name__)


def get_context(request: Request) -> AppContext:
    return request.app.state.context


def get_current_user_id(
    authorization: Optional[str] = Header(default=None),
    ctx: AppContext = Depends(get_context),
) -> int:
    if not authorization:
        raise Unauthenticated("No token provided")

    scheme, _, token = authorization.partition(" ")
    token = token.strip()
    if scheme.lower() != "bearer" or not token:
        raise Unauthenticated("Invalid token", status_code=403)

    try:
        return ctx.tokens.verify(token)
    except InvalidTokenError as e:
        logger.info("Rejected session token: %s", e)
        raise Unauthenticated("Invalid token", status_code=403)
