"""
PetSoft Backend — Action Outcome → HTTP Response
==================================================

What:  Converts action outcomes into Starlette responses.

    None          → 204 No Content
    ActionError   → JSON {"message": ...} with the error's status code
    Redirect      → 303 See Other, issuing or clearing the session cookie
"""

from typing import Optional

from fastapi import Response
from fastapi.responses import JSONResponse, RedirectResponse

from petsoft.config import settings
from petsoft.results import ActionError, Redirect


def action_error_response(error: ActionError) -> JSONResponse:
    return JSONResponse(status_code=error.status_code, content=error.model_dump())


def mutation_response(result: Optional[ActionError]) -> Response:
    if result is None:
        return Response(status_code=204)
    return action_error_response(result)


def redirect_response(redirect: Redirect) -> RedirectResponse:
    response = RedirectResponse(url=redirect.location, status_code=redirect.status_code)
    if redirect.session_token:
        response.set_cookie(
            key=settings.session_cookie_name,
            value=redirect.session_token,
            max_age=settings.session_ttl_seconds,
            httponly=True,
            samesite="lax",
            secure=settings.session_cookie_secure,
        )
    if redirect.clear_session:
        response.delete_cookie(
            key=settings.session_cookie_name,
            httponly=True,
            samesite="lax",
            secure=settings.session_cookie_secure,
        )
    return response
