"""
PetSoft Backend — Ownership Guard
===================================

What:  Confirms the acting user owns a pet before anything touches it.
How:   Point lookup by primary key, then an owner comparison.
Who:   Called by edit_pet, checkout_pet and get_pet, strictly after the pet
       id has been validated and strictly before any mutation.

Outcomes:
    Ok(pet)                  caller owns the pet
    Err(NotFoundError)       no pet with that id
    Err(UnauthorizedError)   the pet belongs to someone else

Storage errors from the lookup propagate; the calling action converts
them into its own failure message.
"""

import logging
import uuid
from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from petsoft.exceptions import NotFoundError, UnauthorizedError
from petsoft.models.pet import Pet
from petsoft.results import Err, Ok, Result

logger = logging.getLogger(__name__)


async def get_pet_by_id(db: AsyncSession, pet_id: uuid.UUID) -> Optional[Pet]:
    result = await db.execute(select(Pet).where(Pet.id == pet_id))
    return result.scalar_one_or_none()


async def authorize_owned_pet(
    db: AsyncSession,
    pet_id: uuid.UUID,
    user_id: uuid.UUID,
) -> Result[Pet]:
    pet = await get_pet_by_id(db, pet_id)

    if pet is None:
        return Err(NotFoundError(resource="pet", resource_id=str(pet_id)))

    if pet.user_id != user_id:
        logger.warning("User %s denied access to pet %s", user_id, pet_id)
        return Err(UnauthorizedError(context={"pet_id": str(pet_id), "user_id": str(user_id)}))

    return Ok(pet)
