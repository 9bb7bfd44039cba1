"""
PetSoft Backend — Pet Service (Boarding Record Actions)
=========================================================

What:  The actions behind the dashboard: add, edit and check out a pet, plus
       the listing and detail reads.
How:   Every mutation runs the same fixed pipeline and stops at the first
       failure:

    ┌──────────┐   ┌────────────┐   ┌────────────┐   ┌──────────┐   ┌────────────┐
    │ session  │──▶│  validate  │──▶│ authorize  │──▶│  mutate  │──▶│ invalidate │
    │ (route)  │   │ (pipeline) │   │  (guard)   │   │ + commit │   │ /app views │
    └──────────┘   └────────────┘   └────────────┘   └──────────┘   └────────────┘

    validate  fails → ActionError("Invalid pet data.")
    authorize fails → ActionError("Pet not found.") / ActionError("Unauthorized.")
    mutate    fails → rollback, ActionError("could not <verb> pet.")
    success         → None

    No write happens unless every earlier step succeeded; exactly one write
    and one cache invalidation happen per successful call.

Who:   Called by the /app/pets route handlers. The authenticated session is
       resolved by the route dependency before an action runs.
"""

import logging
import uuid
from typing import Any, List, Optional, Union

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from petsoft.exceptions import DatabaseError
from petsoft.models.pet import Pet
from petsoft.results import ActionError, Err, Ok, Result
from petsoft.schemas.auth import SessionUser
from petsoft.schemas.pet import PetListResponse, PetResponse
from petsoft.services.ownership import authorize_owned_pet
from petsoft.services.view_cache import APP_VIEW_ROOT, view_cache
from petsoft.validation import validate_pet_form, validate_pet_id

logger = logging.getLogger(__name__)


def _listing_path(user_id: uuid.UUID) -> str:
    return f"{APP_VIEW_ROOT}/pets/{user_id}"


class PetService:
    """
    Business logic for boarding records.

    Error Handling Strategy:
        Expected conditions come back from the pipeline steps as `Err`
        values and leave the action as an `ActionError`. Storage errors are
        logged with their type and flattened into the action's generic
        message; the driver error never reaches the caller.
    """

    async def _authorize(
        self,
        db: AsyncSession,
        pet_id: uuid.UUID,
        user_id: uuid.UUID,
        verb: str,
    ) -> Result[Pet]:
        try:
            return await authorize_owned_pet(db, pet_id, user_id)
        except SQLAlchemyError as e:
            logger.error("Pet lookup failed (%s %s): %s", verb, pet_id, type(e).__name__)
            return Err(DatabaseError(
                message=f"could not {verb} pet.",
                context={"pet_id": str(pet_id), "error_type": type(e).__name__},
            ))

    async def _fail_write(self, db: AsyncSession, verb: str, error: SQLAlchemyError) -> ActionError:
        await db.rollback()
        logger.error("Failed to %s pet: %s", verb, type(error).__name__, exc_info=True)
        return ActionError.from_error(DatabaseError(
            message=f"could not {verb} pet.",
            context={"error_type": type(error).__name__},
        ))

    async def add_pet(
        self,
        db: AsyncSession,
        session: SessionUser,
        pet_data: Any,
    ) -> Optional[ActionError]:
        """
        Create a boarding record owned by the caller.

        Example:
            add_pet(db, session, {"name": "Rex", "ownerName": "Al",
                                  "imageUrl": "", "age": 3, "notes": ""})
            → None; one row with image_url == DEFAULT_PET_IMAGE
        """
        validated = validate_pet_form(pet_data)
        if isinstance(validated, Err):
            return ActionError.from_error(validated.error)

        pet = Pet(user_id=session.user_id, **validated.value.model_dump())
        try:
            db.add(pet)
            await db.commit()
        except SQLAlchemyError as e:
            return await self._fail_write(db, "add", e)

        view_cache.invalidate_tree(APP_VIEW_ROOT)
        logger.info("Pet %s added by user %s", pet.id, session.user_id)
        return None

    async def edit_pet(
        self,
        db: AsyncSession,
        session: SessionUser,
        pet_id: Any,
        new_pet_data: Any,
    ) -> Optional[ActionError]:
        """Replace every editable field of a pet the caller owns."""
        validated_id = validate_pet_id(pet_id)
        validated_pet = validate_pet_form(new_pet_data)
        for step in (validated_id, validated_pet):
            if isinstance(step, Err):
                return ActionError.from_error(step.error)

        owned = await self._authorize(db, validated_id.value, session.user_id, "edit")
        if isinstance(owned, Err):
            return ActionError.from_error(owned.error)

        pet = owned.value
        try:
            for field, value in validated_pet.value.model_dump().items():
                setattr(pet, field, value)
            await db.commit()
        except SQLAlchemyError as e:
            return await self._fail_write(db, "edit", e)

        view_cache.invalidate_tree(APP_VIEW_ROOT)
        logger.info("Pet %s edited by user %s", pet.id, session.user_id)
        return None

    async def checkout_pet(
        self,
        db: AsyncSession,
        session: SessionUser,
        pet_id: Any,
    ) -> Optional[ActionError]:
        """Remove a boarding record (the guest went home)."""
        validated_id = validate_pet_id(pet_id)
        if isinstance(validated_id, Err):
            return ActionError.from_error(validated_id.error)

        owned = await self._authorize(db, validated_id.value, session.user_id, "checkout")
        if isinstance(owned, Err):
            return ActionError.from_error(owned.error)

        try:
            await db.delete(owned.value)
            await db.commit()
        except SQLAlchemyError as e:
            return await self._fail_write(db, "checkout", e)

        view_cache.invalidate_tree(APP_VIEW_ROOT)
        logger.info("Pet %s checked out by user %s", validated_id.value, session.user_id)
        return None

    async def get_pet(
        self,
        db: AsyncSession,
        session: SessionUser,
        pet_id: Any,
    ) -> Union[PetResponse, ActionError]:
        validated_id = validate_pet_id(pet_id)
        if isinstance(validated_id, Err):
            return ActionError.from_error(validated_id.error)

        owned = await self._authorize(db, validated_id.value, session.user_id, "load")
        if isinstance(owned, Err):
            return ActionError.from_error(owned.error)
        return PetResponse.model_validate(owned.value)

    async def list_pets(
        self,
        db: AsyncSession,
        session: SessionUser,
        search: Optional[str] = None,
    ) -> PetListResponse:
        """
        The caller's guests, oldest check-in first.

        The unfiltered listing is cached per user under /app, unless a
        mutation invalidated the cache while it was loading; `search` is a
        case-insensitive substring match on the pet name applied on top of
        it. `total` always counts every guest.

        Raises:
            DatabaseError: the listing query failed (→ 500 via global handler)
        """
        path = _listing_path(session.user_id)
        pets: Optional[List[PetResponse]] = view_cache.get(path)

        if pets is None:
            generation = view_cache.generation
            try:
                result = await db.execute(
                    select(Pet)
                    .where(Pet.user_id == session.user_id)
                    .order_by(Pet.created_at, Pet.id)
                )
                pets = [PetResponse.model_validate(pet) for pet in result.scalars().all()]
            except SQLAlchemyError as e:
                logger.error("Database error listing pets: %s", type(e).__name__, exc_info=True)
                raise DatabaseError(
                    message="Could not retrieve pets. Please try again.",
                    context={"error_type": type(e).__name__},
                )
            # A write that landed during the query must not be masked
            view_cache.set_if_current(path, pets, generation)

        total = len(pets)
        needle = (search or "").strip().lower()
        if needle:
            pets = [pet for pet in pets if needle in pet.name.lower()]

        return PetListResponse(pets=pets, total=total)


# ── Singleton Instance ────────────────────────────────────────────────────
pet_service = PetService()
