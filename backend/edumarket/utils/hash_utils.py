# edumarket/utils/hash_utils.py
import logging

from passlib.hash import argon2, bcrypt

logger = logging.getLogger(__name__)


def hash_password(password: str) -> str:
    """Hash plain password with Argon2."""
    return argon2.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    if not hashed_password:
        return False
    try:
        if hashed_password.startswith("$argon2"):
            return argon2.verify(plain_password, hashed_password)
        if hashed_password.startswith(("$2a$", "$2b$", "$2y$")):
            return bcrypt.verify(plain_password, hashed_password)
    except ValueError:
        logger.warning("Stored password hash is malformed")
        return False
    return False


async def verify_and_upgrade_password(record: dict, plain_password: str, collection) -> bool:
    """Check a password against a stored record.

    Records imported with bcrypt hashes are re-hashed with Argon2 after a
    successful match.
    """
    hashed_password = record.get("password") or ""
    if not verify_password(plain_password, hashed_password):
        return False

    if not hashed_password.startswith("$argon2"):
        await collection.update_one(
            {"_id": record["_id"]},
            {"$set": {"password": hash_password(plain_password)}},
        )
        logger.info("Upgraded legacy password hash for %s", record.get("email"))
    return True
