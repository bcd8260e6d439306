"""
context.py — Process-Wide Application Context

Purpose:
- Build, once per app, everything that is shared across requests:
    * Settings
    * SQLAlchemy engine + session factory
    * PasswordHasher (bcrypt cost from settings)
    * TokenService (signing key from settings)
    * External integrations (mood detection, sharing, grocery)
- All of it is read-only after construction. create_app() stores the context
  on `app.state.context`; dependencies read it from the request.
"""

from dataclasses import dataclass
from typing import Optional

from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from moodrecipe.core.config import Settings
from moodrecipe.core.database import build_engine, build_session_factory
from moodrecipe.core.security import Clock, PasswordHasher, TokenService
from moodrecipe.services.integrations import Integrations


@dataclass(frozen=True)
class AppContext:
    settings: Settings
    engine: Engine
    session_factory: sessionmaker
    hasher: PasswordHasher
    tokens: TokenService
    integrations: Integrations


def build_context(
    settings: Settings,
    integrations: Optional[Integrations] = None,
    clock: Optional[Clock] = None,
) -> AppContext:
    engine = build_engine(settings.DATABASE_URL)
    return AppContext(
        settings=settings,
        engine=engine,
        session_factory=build_session_factory(engine),
        hasher=PasswordHasher(rounds=settings.BCRYPT_ROUNDS),
        tokens=TokenService(
            secret_key=settings.JWT_SECRET_KEY,
            expire_minutes=settings.JWT_EXPIRE_MINUTES,
            algorithm=settings.JWT_ALGORITHM,
            clock=clock,
        ),
        integrations=integrations or Integrations(),
    )
