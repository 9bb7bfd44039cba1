"""
PetSoft Backend — Pet Route Handlers
======================================

What:  The dashboard API under /app/pets.
How:   Every route requires a session (redirect to /login otherwise) and
       delegates to PetService. Mutations answer 204 on success or
       {"message": ...} with the matching status on failure.

Caching:
    Listings are served from the in-process view cache and marked
    `Cache-Control: private, no-cache`, since any mutation invalidates them.
"""

import logging
from typing import Any, Optional

from fastapi import APIRouter, Body, Depends, Query, Response
from sqlalchemy.ext.asyncio import AsyncSession

from petsoft.database import get_db_session
from petsoft.dependencies import require_session
from petsoft.results import ActionError
from petsoft.routes.responses import action_error_response, mutation_response
from petsoft.schemas.auth import SessionUser
from petsoft.schemas.common import ErrorResponse, MessageResponse
from petsoft.schemas.pet import PetListResponse, PetResponse
from petsoft.services.pet_service import pet_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/app", tags=["Pets"])

_MUTATION_RESPONSES = {
    204: {"description": "Done"},
    400: {"description": "Invalid pet data", "model": MessageResponse},
    403: {"description": "Pet belongs to another user", "model": MessageResponse},
    404: {"description": "Pet not found", "model": MessageResponse},
    500: {"description": "Storage failure", "model": MessageResponse},
}


@router.get(
    "/pets",
    response_model=PetListResponse,
    responses={500: {"description": "Server error", "model": ErrorResponse}},
    summary="List the caller's boarding guests",
)
async def list_pets(
    response: Response,
    q: Optional[str] = Query(
        default=None,
        max_length=100,
        description="Case-insensitive pet name search",
    ),
    session: SessionUser = Depends(require_session),
    db: AsyncSession = Depends(get_db_session),
) -> PetListResponse:
    result = await pet_service.list_pets(db, session, search=q)
    response.headers["Cache-Control"] = "private, no-cache"
    return result


@router.get(
    "/pets/{pet_id}",
    response_model=PetResponse,
    responses={k: v for k, v in _MUTATION_RESPONSES.items() if k != 204},
    summary="Get one of the caller's pets",
)
async def get_pet(
    pet_id: str,
    session: SessionUser = Depends(require_session),
    db: AsyncSession = Depends(get_db_session),
):
    result = await pet_service.get_pet(db, session, pet_id)
    if isinstance(result, ActionError):
        return action_error_response(result)
    return result


@router.post(
    "/pets",
    responses=_MUTATION_RESPONSES,
    summary="Check in a new pet",
)
async def add_pet(
    pet: Any = Body(default=None),
    session: SessionUser = Depends(require_session),
    db: AsyncSession = Depends(get_db_session),
) -> Response:
    return mutation_response(await pet_service.add_pet(db, session, pet))


@router.put(
    "/pets/{pet_id}",
    responses=_MUTATION_RESPONSES,
    summary="Edit a pet",
)
async def edit_pet(
    pet_id: str,
    pet: Any = Body(default=None),
    session: SessionUser = Depends(require_session),
    db: AsyncSession = Depends(get_db_session),
) -> Response:
    return mutation_response(await pet_service.edit_pet(db, session, pet_id, pet))


@router.post(
    "/pets/{pet_id}/checkout",
    responses=_MUTATION_RESPONSES,
    summary="Check out a pet (delete its boarding record)",
)
async def checkout_pet(
    pet_id: str,
    session: SessionUser = Depends(require_session),
    db: AsyncSession = Depends(get_db_session),
) -> Response:
    return mutation_response(await pet_service.checkout_pet(db, session, pet_id))
