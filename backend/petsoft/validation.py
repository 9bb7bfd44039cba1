"""
PetSoft Backend — Validation Pipeline
=======================================

What:  Total validators for every piece of untrusted input an action receives.
How:   Each validator returns `Ok(normalized_value)` or `Err(InvalidInputError)`.
       None of them raise for bad input, so every action maps a failure to
       its message the same way.
Who:   Called first by every action, before any storage call.

Validators:
    validate_auth(input)      → Ok(AuthCredentials)
    validate_pet_form(input)  → Ok(PetForm)
    validate_pet_id(input)    → Ok(uuid.UUID)
"""

import logging
import re
import uuid
from collections.abc import Mapping
from typing import Any, Optional

from pydantic import ValidationError

from petsoft.exceptions import InvalidInputError
from petsoft.results import Err, Ok, Result
from petsoft.schemas.auth import AuthCredentials
from petsoft.schemas.pet import PetForm

logger = logging.getLogger(__name__)

# Hyphenated 8-4-4-4-12 form only; uuid.UUID() alone would also accept
# braces, URNs and unhyphenated hex.
_UUID_PATTERN = re.compile(
    r"[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}"
)


def _invalid(message: str, exc: Optional[ValidationError] = None) -> Err:
    context = {}
    if exc is not None:
        context["errors"] = [
            {"loc": list(error["loc"]), "type": error["type"]} for error in exc.errors()
        ]
    return Err(InvalidInputError(message=message, context=context))


def validate_auth(data: Any) -> Result[AuthCredentials]:
    """Email must be a valid address ≤100 chars; password 1-100 chars."""
    if not isinstance(data, Mapping):
        return _invalid("Invalid form data.")
    try:
        return Ok(AuthCredentials.model_validate(dict(data)))
    except ValidationError as exc:
        return _invalid("Invalid form data.", exc)


def validate_pet_form(data: Any) -> Result[PetForm]:
    """
    Validate and normalize pet fields.

    Accepts `PetForm` instances unchanged, so re-validating a normalized
    value is a no-op; mappings go through the full schema.
    """
    if isinstance(data, PetForm):
        return Ok(data)
    if not isinstance(data, Mapping):
        return _invalid("Invalid pet data.")
    try:
        return Ok(PetForm.model_validate(dict(data)))
    except ValidationError as exc:
        logger.debug("Pet form rejected: %s", exc.errors())
        return _invalid("Invalid pet data.", exc)


def validate_pet_id(data: Any) -> Result[uuid.UUID]:
    if isinstance(data, uuid.UUID):
        return Ok(data)
    if not isinstance(data, str) or not _UUID_PATTERN.fullmatch(data):
        return _invalid("Invalid pet data.")
    return Ok(uuid.UUID(data))
