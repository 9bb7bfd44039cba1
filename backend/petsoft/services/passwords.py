"""
PetSoft Backend — Password Hashing
====================================

What:  bcrypt hashing and verification for account passwords.
How:   bcrypt is CPU-bound (~50-100ms at cost 10), so both calls run in the
       threadpool instead of on the event loop.
Who:   Signup hashes; the session provider verifies at login.
"""

from typing import Optional

import bcrypt
from starlette.concurrency import run_in_threadpool

from petsoft.config import settings

# bcrypt only consumes the first 72 bytes of a password; recent releases
# raise instead of truncating, so truncate explicitly on both paths.
BCRYPT_MAX_BYTES = 72


def _encode(password: str) -> bytes:
    return password.encode("utf-8")[:BCRYPT_MAX_BYTES]


def _hash(password: str, rounds: int) -> str:
    return bcrypt.hashpw(_encode(password), bcrypt.gensalt(rounds=rounds)).decode("utf-8")


def _verify(password: str, hashed_password: str) -> bool:
    try:
        return bcrypt.checkpw(_encode(password), hashed_password.encode("utf-8"))
    except ValueError:
        # Stored value is not a bcrypt hash
        return False


async def hash_password(password: str, rounds: Optional[int] = None) -> str:
    return await run_in_threadpool(_hash, password, rounds or settings.bcrypt_rounds)


async def verify_password(password: str, hashed_password: str) -> bool:
    return await run_in_threadpool(_verify, password, hashed_password)
