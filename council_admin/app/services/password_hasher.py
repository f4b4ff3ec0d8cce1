"""
Credential hashing with bcrypt.

Cost factor 12 matches the stored hashes; bcrypt embeds salt and cost in
its 60-character output so verification needs nothing else.
"""

import asyncio

import bcrypt

BCRYPT_ROUNDS = 12

# Used when the account does not exist so a failed login costs the same
_DUMMY_HASH = bcrypt.hashpw(b"dummy_password", bcrypt.gensalt(BCRYPT_ROUNDS))


def hash_password(password: str) -> str:
    """Hash a plaintext password with a fresh salt"""
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(BCRYPT_ROUNDS)).decode(
        "utf-8"
    )


def verify_password(password: str, password_hash: str) -> bool:
    """
    Check a plaintext password against a bcrypt hash.

    Returns False for a malformed hash or an over-long password instead of
    raising, so callers treat every failure as "invalid credentials".
    """
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        return False


def burn_verification(password: str) -> None:
    """Run a verification against a throwaway hash"""
    verify_password(password, _DUMMY_HASH.decode("utf-8"))


async def hash_password_async(password: str) -> str:
    return await asyncio.to_thread(hash_password, password)


async def verify_password_async(password: str, password_hash: str) -> bool:
    return await asyncio.to_thread(verify_password, password, password_hash)


async def burn_verification_async(password: str) -> None:
    await asyncio.to_thread(burn_verification, password)
