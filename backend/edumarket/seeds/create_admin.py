# edumarket/seeds/create_admin.py
import argparse
import asyncio
import getpass
import logging
from datetime import datetime

from edumarket.core.config import Settings, get_settings
from edumarket.core.logging import setup_logging
from edumarket.db.database import USERS, check_connection, create_client
from edumarket.models.user import User
from edumarket.services.auth_service import normalize_email
from edumarket.utils.hash_utils import hash_password

logger = logging.getLogger(__name__)


async def create_admin(db, settings: Settings, name: str, email: str, password: str) -> str:
    """Create an admin account, or promote an existing user with the same email.

    Returns ``"created"`` or ``"promoted"``.
    """
    email = normalize_email(email)
    if not email.endswith(settings.ADMIN_EMAIL_DOMAIN.lower()):
        raise ValueError(f"Admin accounts must use a {settings.ADMIN_EMAIL_DOMAIN} email address")
    if not password:
        raise ValueError("Password is required")

    users = db[USERS]
    existing = await users.find_one({"email": email})
    if existing:
        await users.update_one(
            {"_id": existing["_id"]},
            {"$set": {"role": "admin", "password": hash_password(password), "updatedAt": datetime.utcnow()}},
        )
        logger.info("Promoted %s to admin", email)
        return "promoted"

    admin = User(name=name, email=email, password=hash_password(password), role="admin")
    await users.insert_one(admin.model_dump())
    logger.info("Created admin %s", email)
    return "created"


async def main(args) -> None:
    settings = get_settings()
    setup_logging(settings)
    client = create_client(settings)
    try:
        db = client[settings.MONGO_DB_NAME]
        await check_connection(db)
        password = args.password or getpass.getpass("Admin password: ")
        outcome = await create_admin(db, settings, args.name, args.email, password)
        print(f"✅ Admin {args.email} {outcome}")
    finally:
        client.close()


def run():
    parser = argparse.ArgumentParser(description="Create or promote an admin account")
    parser.add_argument("email")
    parser.add_argument("--name", default="Administrator")
    parser.add_argument("--password", default=None)
    asyncio.run(main(parser.parse_args()))


if __name__ == "__main__":
    run()
