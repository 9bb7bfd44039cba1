"""
PetSoft Backend — Action Results
==================================

What:  Typed outcomes passed between pipeline steps and returned by actions.
How:
    - `Ok(value)` / `Err(error)`: tagged result of a validation or guard step.
      Expected failures travel as values; nothing is raised.
    - `ActionError`: the flat `{"message": ...}` record an action returns on
      failure. Its status code never appears in the body.
    - `Redirect`: a navigation outcome (login, logout, hosted checkout). It is
      a return value, so no caller has to re-raise a navigation signal.

Mutation actions return `None` on success; callers read the absence of an
`ActionError` as success.
"""

from dataclasses import dataclass
from typing import Generic, Optional, TypeVar, Union

from pydantic import BaseModel, Field

from petsoft.exceptions import PetSoftError

T = TypeVar("T")


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T


@dataclass(frozen=True)
class Err:
    error: PetSoftError


Result = Union[Ok[T], Err]


class ActionError(BaseModel):
    """Failure record returned by an action: exactly one user-facing message."""

    message: str
    status_code: int = Field(default=400, exclude=True)

    @classmethod
    def from_error(cls, error: PetSoftError) -> "ActionError":
        return cls(message=error.message, status_code=error.status_code)


class Redirect(BaseModel):
    """
    Navigation outcome.

    Attributes:
        location:      Where the client should go next
        session_token: Set when the outcome starts a session (cookie to issue)
        clear_session: Set when the outcome ends the session (cookie to delete)
    """

    location: str
    status_code: int = 303
    session_token: Optional[str] = None
    clear_session: bool = False
