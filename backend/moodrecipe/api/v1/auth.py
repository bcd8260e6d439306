"""
auth.py — Signup and Login Endpoints (API Layer)

Purpose:
- POST /auth/signup → create a user.
- POST /auth/login  → exchange email + password for a session token.

This file should be thin: hashing and token encoding live in
core/security.py, user lookups in services/credentials.py.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field
from sqlalchemy.orm import Session

from moodrecipe.api.deps import get_context
from moodrecipe.core.context import AppContext
from moodrecipe.core.database import get_db
from moodrecipe.core.errors import Unauthenticated
from moodrecipe.services.credentials import create_user, verify_credentials

router = APIRouter(
    prefix="/auth",
    tags=["auth"]
)

# -----------------------------------------------------------------------------
# Request / Response Schemas
# -----------------------------------------------------------------------------

class SignupRequest(BaseModel):
    """
    Fields are optional at the schema level so that a missing field is
    reported by the credential store as a ValidationError.
    """
    username: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None
    dietaryPreferences: List[str] = Field(default_factory=list)


class LoginRequest(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None


class MessageResponse(BaseModel):
    message: str


class TokenResponse(BaseModel):
    """
    - `token`: Encoded JWT string.
    - `token_type`: 'bearer', for the Authorization header.
    """
    token: str
    token_type: str = "bearer"


# -----------------------------------------------------------------------------
# Routes
# -----------------------------------------------------------------------------

@router.post("/signup", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
def signup(
    payload: SignupRequest,
    db: Session = Depends(get_db),
    ctx: AppContext = Depends(get_context),
):
    create_user(
        db,
        payload.username,
        payload.email,
        payload.password,
        ctx.hasher,
        dietary_preferences=payload.dietaryPreferences,
    )
    return MessageResponse(message="User created")


@router.post("/login", response_model=TokenResponse)
def login(
    payload: LoginRequest,
    db: Session = Depends(get_db),
    ctx: AppContext = Depends(get_context),
):
    """
    POST /auth/login

    Unknown email and wrong password produce the same 401 response.
    """
    user_id = verify_credentials(db, payload.email, payload.password, ctx.hasher)
    if user_id is None:
        raise Unauthenticated("Invalid email or password")
    return TokenResponse(token=ctx.tokens.issue(user_id))
