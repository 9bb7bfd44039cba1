"""
PetSoft Backend — Auth Schemas
================================

What:  Credential input and the decoded session identity.
"""

import uuid
from typing import Annotated

from pydantic import BaseModel, EmailStr, StringConstraints, field_validator

MAX_EMAIL_LENGTH = 100


class AuthCredentials(BaseModel):
    """Email/password pair submitted by the signup and login forms."""

    email: EmailStr
    password: Annotated[str, StringConstraints(min_length=1, max_length=100)]

    @field_validator("email")
    @classmethod
    def check_email_length(cls, v: str) -> str:
        if len(v) > MAX_EMAIL_LENGTH:
            raise ValueError(f"Email must be at most {MAX_EMAIL_LENGTH} characters")
        return v


class SessionUser(BaseModel):
    """Identity carried by a valid session token. Read fresh on every request."""

    user_id: uuid.UUID
    email: str
