"""
PetSoft Backend — Auth Service (Signup / Login / Logout)
==========================================================

What:  Account creation and the login/logout actions.
How:   Signup validates, hashes with bcrypt, inserts the user and then logs
       in with the same raw form data. Login delegates to the session
       provider and maps its failures to user-facing messages.
Who:   Called by the /signup, /login and /logout route handlers.

Failure Mapping:
    non-mapping or invalid form     → "Invalid form data."
    duplicate email (unique index)  → "Email already exists."
    other storage failure (signup)  → "could not create account."
    InvalidCredentialsError         → "Invalid credentials."
    other SessionProviderError      → "could not log in."

The Redirect returned by the session provider is passed back untouched.
"""

import logging
from collections.abc import Mapping
from typing import Any, Union

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from petsoft.database import is_unique_violation
from petsoft.exceptions import (
    ConflictError,
    DatabaseError,
    InvalidCredentialsError,
    SessionProviderError,
)
from petsoft.models.user import User
from petsoft.results import ActionError, Err, Redirect
from petsoft.services.passwords import hash_password
from petsoft.services.session_provider import session_provider
from petsoft.validation import validate_auth

logger = logging.getLogger(__name__)

INVALID_FORM_DATA = "Invalid form data."


class AuthService:
    """Account actions; stateless, one instance shared by all requests."""

    async def sign_up(
        self,
        db: AsyncSession,
        form_data: Any,
    ) -> Union[Redirect, ActionError]:
        if not isinstance(form_data, Mapping):
            return ActionError(message=INVALID_FORM_DATA)

        form = dict(form_data)
        validated = validate_auth(form)
        if isinstance(validated, Err):
            return ActionError(message=INVALID_FORM_DATA)
        creds = validated.value

        hashed_password = await hash_password(creds.password)

        try:
            db.add(User(email=creds.email, hashed_password=hashed_password))
            await db.commit()
        except IntegrityError as e:
            await db.rollback()
            if is_unique_violation(e):
                logger.info("Signup rejected: email already registered")
                return ActionError.from_error(ConflictError())
            logger.error("Signup failed: %s", e.orig.__class__.__name__)
            return ActionError.from_error(DatabaseError(message="could not create account."))
        except SQLAlchemyError as e:
            await db.rollback()
            logger.error("Signup failed: %s", type(e).__name__, exc_info=True)
            return ActionError.from_error(DatabaseError(message="could not create account."))

        logger.info("Account created")
        return await session_provider.start_session(db, form)

    async def log_in(
        self,
        db: AsyncSession,
        form_data: Any,
    ) -> Union[Redirect, ActionError]:
        if not isinstance(form_data, Mapping):
            return ActionError(message=INVALID_FORM_DATA)

        try:
            return await session_provider.start_session(db, dict(form_data))
        except InvalidCredentialsError as e:
            return ActionError.from_error(e)
        except SessionProviderError as e:
            return ActionError(message="could not log in.", status_code=e.status_code)

    async def log_out(self) -> Redirect:
        return session_provider.end_session(redirect_to="/")


# ── Singleton Instance ────────────────────────────────────────────────────
auth_service = AuthService()
