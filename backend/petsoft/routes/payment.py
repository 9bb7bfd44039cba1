"""
PetSoft Backend — Payment Route Handler
=========================================

What:  POST /payment/checkout-session sends the logged-in user to the
       hosted checkout page (303), or answers {"message": ...} with 502
       when the payment provider fails.
"""

from fastapi import APIRouter, Depends, Response

from petsoft.dependencies import require_session
from petsoft.results import Redirect
from petsoft.routes.responses import action_error_response, redirect_response
from petsoft.schemas.auth import SessionUser
from petsoft.schemas.common import MessageResponse
from petsoft.services.payment_service import payment_service

router = APIRouter(prefix="/payment", tags=["Payment"])


@router.post(
    "/checkout-session",
    responses={
        303: {"description": "Redirect to the hosted checkout page"},
        502: {"description": "Payment provider failed", "model": MessageResponse},
    },
    summary="Start a hosted payment checkout",
)
async def create_checkout_session(
    session: SessionUser = Depends(require_session),
) -> Response:
    result = await payment_service.create_checkout_session(session)
    if isinstance(result, Redirect):
        return redirect_response(result)
    return action_error_response(result)
