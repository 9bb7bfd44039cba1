"""
PetSoft Backend — Request Dependencies
========================================

What:  FastAPI dependencies that resolve the current session.
How:   Reads the session cookie on every request; nothing is cached across
       requests. `require_session` raises AuthenticationRequiredError, which
       the global handler turns into a redirect to the login page.
"""

from typing import Optional

from fastapi import Depends, Request

from petsoft.config import settings
from petsoft.exceptions import AuthenticationRequiredError
from petsoft.schemas.auth import SessionUser
from petsoft.services.session_provider import session_provider


async def get_current_session(request: Request) -> Optional[SessionUser]:
    token = request.cookies.get(settings.session_cookie_name)
    return session_provider.read_session(token)


async def require_session(
    session: Optional[SessionUser] = Depends(get_current_session),
) -> SessionUser:
    if session is None:
        raise AuthenticationRequiredError()
    return session
