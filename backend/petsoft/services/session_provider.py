"""
PetSoft Backend — Credentials Session Provider
================================================

What:  Starts, reads and ends login sessions.
How:   A session is a signed JWT (HS256, PyJWT) holding the user id and email,
       carried in an HTTP-only cookie. Starting a session verifies the
       email/password pair against the stored bcrypt hash.
Who:   Used by the signup/login/logout actions and by the route dependency
       that reads the current session.

Outcomes:
    start_session → Redirect(session_token=...)  on success
                  → raises InvalidCredentialsError  unknown email / wrong password
                  → raises SessionProviderError     storage failure
    end_session   → Redirect(clear_session=True)
    read_session  → SessionUser, or None for a missing/expired/tampered token

Navigation is returned as a value; callers pass the Redirect through
unchanged.
"""

import logging
import time
import uuid
from typing import Any, Mapping, Optional

import jwt as pyjwt
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from petsoft.config import settings
from petsoft.exceptions import InvalidCredentialsError, SessionProviderError
from petsoft.models.user import User
from petsoft.results import Err, Redirect
from petsoft.schemas.auth import SessionUser
from petsoft.services.passwords import verify_password
from petsoft.validation import validate_auth

logger = logging.getLogger(__name__)

ALGORITHM = "HS256"


class SessionProvider:
    """
    Issues and verifies session tokens.

    Attributes:
        secret:       HMAC key for signing
        ttl_seconds:  Session lifetime
        post_login_path: Default destination after a session starts
    """

    def __init__(
        self,
        secret: Optional[str] = None,
        ttl_seconds: Optional[int] = None,
        post_login_path: Optional[str] = None,
    ):
        self.secret = secret or settings.session_secret
        self.ttl_seconds = ttl_seconds or settings.session_ttl_seconds
        self.post_login_path = post_login_path or settings.post_login_path

    def issue_token(self, user_id: uuid.UUID, email: str) -> str:
        now = int(time.time())
        payload = {
            "sub": str(user_id),
            "email": email,
            "iat": now,
            "exp": now + self.ttl_seconds,
        }
        return pyjwt.encode(payload, self.secret, algorithm=ALGORITHM)

    def read_session(self, token: Optional[str]) -> Optional[SessionUser]:
        if not token:
            return None
        try:
            payload = pyjwt.decode(
                token,
                self.secret,
                algorithms=[ALGORITHM],
                options={"require": ["exp", "sub"]},
            )
            return SessionUser(user_id=uuid.UUID(payload["sub"]), email=payload.get("email", ""))
        except pyjwt.PyJWTError as e:
            logger.debug("Rejected session token: %s", type(e).__name__)
            return None
        except ValueError:
            # sub is not a UUID
            return None

    async def start_session(
        self,
        db: AsyncSession,
        credentials: Mapping[str, Any],
        redirect_to: Optional[str] = None,
    ) -> Redirect:
        validated = validate_auth(credentials)
        if isinstance(validated, Err):
            raise InvalidCredentialsError()
        creds = validated.value

        try:
            result = await db.execute(select(User).where(User.email == creds.email))
            user = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error("User lookup failed during login: %s", type(e).__name__)
            raise SessionProviderError(context={"error_type": type(e).__name__}) from e

        if user is None or not await verify_password(creds.password, user.hashed_password):
            logger.info("Login rejected: invalid credentials")
            raise InvalidCredentialsError()

        logger.info("Session started for user %s", user.id)
        return Redirect(
            location=redirect_to or self.post_login_path,
            session_token=self.issue_token(user.id, user.email),
        )

    def end_session(self, redirect_to: str = "/") -> Redirect:
        return Redirect(location=redirect_to, clear_session=True)


# ── Singleton Instance ────────────────────────────────────────────────────
session_provider = SessionProvider()
