"""
PetSoft Backend — Pet Request/Response Schemas
================================================

What:  Pydantic models for pet form input and pet responses.
How:   Field names are snake_case in Python and camelCase on the wire
       (`ownerName`, `imageUrl`); input accepts either spelling.
Who:   `PetForm` is produced by the validation pipeline; `PetResponse` and
       `PetListResponse` are returned by the dashboard routes.

Normalization (PetForm):
    - name / ownerName / notes / imageUrl are trimmed
    - an empty imageUrl ("") becomes DEFAULT_PET_IMAGE; a blank one is rejected
    - age is coerced from numeric strings ("3", " 3 ")
    - a valid imageUrl is stored exactly as submitted (after trimming)
"""

import uuid
from datetime import datetime
from typing import Annotated, Any, List

from pydantic import (
    AnyUrl,
    BaseModel,
    ConfigDict,
    Field,
    StringConstraints,
    TypeAdapter,
    ValidationError,
    field_validator,
)
from pydantic.alias_generators import to_camel

DEFAULT_PET_IMAGE = "https://bytegrad.com/course-assets/react-nextjs/pet-placeholder.png"

MAX_PET_AGE = 99999

_url_adapter = TypeAdapter(AnyUrl)

TrimmedName = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=100)]
TrimmedNotes = Annotated[str, StringConstraints(strip_whitespace=True, max_length=1000)]
TrimmedUrl = Annotated[str, StringConstraints(strip_whitespace=True)]


class PetForm(BaseModel):
    """Validated, normalized pet fields ready to persist."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    name: TrimmedName
    owner_name: TrimmedName
    image_url: TrimmedUrl
    age: int = Field(gt=0, le=MAX_PET_AGE)
    notes: TrimmedNotes

    @field_validator("age", mode="before")
    @classmethod
    def coerce_age(cls, v: Any) -> Any:
        """Form fields arrive as strings; blank counts as 0 and fails the bound."""
        if isinstance(v, str):
            return v.strip() or 0
        return v

    @field_validator("image_url", mode="before")
    @classmethod
    def default_image_url(cls, v: Any) -> Any:
        """Only an exactly empty field means "no photo"; blanks are not URLs."""
        if v == "":
            return DEFAULT_PET_IMAGE
        return v

    @field_validator("image_url")
    @classmethod
    def validate_image_url(cls, v: str) -> str:
        try:
            _url_adapter.validate_python(v)
        except ValidationError:
            raise ValueError("Invalid image url")
        # The parsed AnyUrl is discarded: it may add a trailing slash
        return v


class PetResponse(BaseModel):
    """
    What:  Full representation of a boarding guest.
    Who:   Returned by GET /app/pets/{id} and as items of GET /app/pets.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
        frozen=True,
    )

    id: uuid.UUID = Field(description="Unique pet identifier (UUID)")
    name: str = Field(description="Pet name")
    owner_name: str = Field(description="Name of the pet's owner")
    image_url: str = Field(description="Photo URL (placeholder when none was given)")
    age: int = Field(description="Age in years")
    notes: str = Field(description="Free-text boarding notes")
    created_at: datetime = Field(description="When the pet checked in (UTC)")


class PetListResponse(BaseModel):
    """
    What:  Dashboard listing of the caller's guests.

    `total` is the number of guests currently boarding for the caller and
    does not change with the search filter.
    """

    pets: List[PetResponse] = Field(description="Guests matching the search filter")
    total: int = Field(description="Total guests owned by the caller")
