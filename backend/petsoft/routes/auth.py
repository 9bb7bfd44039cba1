"""
PetSoft Backend — Auth Route Handlers
=======================================

What:  Browser form endpoints for signup, login and logout.
How:   Parses the submitted form and hands it to AuthService unchanged.
       Success is a 303 redirect that sets (or clears) the session cookie;
       failure is a JSON {"message": ...} body.
"""

import logging

from fastapi import APIRouter, Depends, Request, Response
from sqlalchemy.ext.asyncio import AsyncSession

from petsoft.database import get_db_session
from petsoft.results import Redirect
from petsoft.routes.responses import action_error_response, redirect_response
from petsoft.schemas.common import MessageResponse
from petsoft.services.auth_service import auth_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Auth"])

_FORM_RESPONSES = {
    303: {"description": "Session started; redirect to the dashboard"},
    400: {"description": "Invalid form data", "model": MessageResponse},
    500: {"description": "Storage failure", "model": MessageResponse},
}


@router.post(
    "/signup",
    responses={**_FORM_RESPONSES, 409: {"description": "Email already exists", "model": MessageResponse}},
    summary="Create an account and log in",
)
async def sign_up(request: Request, db: AsyncSession = Depends(get_db_session)) -> Response:
    form = await request.form()
    result = await auth_service.sign_up(db, form)
    if isinstance(result, Redirect):
        return redirect_response(result)
    return action_error_response(result)


@router.post(
    "/login",
    responses={**_FORM_RESPONSES, 401: {"description": "Invalid credentials", "model": MessageResponse}},
    summary="Log in with email and password",
)
async def log_in(request: Request, db: AsyncSession = Depends(get_db_session)) -> Response:
    form = await request.form()
    result = await auth_service.log_in(db, form)
    if isinstance(result, Redirect):
        return redirect_response(result)
    return action_error_response(result)


@router.post(
    "/logout",
    responses={303: {"description": "Session ended; redirect to /"}},
    summary="Log out",
)
async def log_out() -> Response:
    return redirect_response(await auth_service.log_out())
