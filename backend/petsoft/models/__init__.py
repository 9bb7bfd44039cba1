"""
PetSoft Backend — ORM Models
==============================

Importing this package registers every table with `Base.metadata`
(used by Alembic autogenerate and by the test suite's `create_all`).
"""

from petsoft.models.pet import Pet
from petsoft.models.user import User

__all__ = ["Pet", "User"]
