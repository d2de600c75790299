# edumarket/services/auth_service.py
import logging
from typing import Optional

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo.errors import DuplicateKeyError

from edumarket.core.config import Settings
from edumarket.core.exceptions import Conflict, Forbidden, Unauthorized, ValidationError
from edumarket.db.database import USERS
from edumarket.models.user import User
from edumarket.utils.auth_utils import create_access_token
from edumarket.utils.hash_utils import hash_password, verify_and_upgrade_password

logger = logging.getLogger(__name__)


def normalize_email(email: Optional[str]) -> str:
    return (email or "").strip().lower()


class AuthService:
    """Registration and login for end users and admins."""

    def __init__(self, db: AsyncIOMotorDatabase, settings: Settings):
        self.users = db[USERS]
        self.settings = settings

    def is_admin_email(self, email: str) -> bool:
        return email.endswith(self.settings.ADMIN_EMAIL_DOMAIN.lower())

    def _auth_payload(self, user: dict) -> dict:
        role = user.get("role") or "user"
        return {
            "_id": str(user["_id"]),
            "name": user["name"],
            "email": user["email"],
            "role": role,
            "token": create_access_token(user["_id"], role, self.settings),
        }

    async def register_user(self, name, email, password) -> dict:
        email = normalize_email(email)
        if not (name or "").strip() or not email or not password:
            raise ValidationError("All fields are required")

        if self.is_admin_email(email):
            raise Forbidden(
                f"Cannot register with {self.settings.ADMIN_EMAIL_DOMAIN} email. "
                "Contact system administrator."
            )

        if await self.users.find_one({"email": email}):
            raise Conflict("User already exists")

        user = User(name=name.strip(), email=email, password=hash_password(password), role="user")
        doc = user.model_dump()
        try:
            result = await self.users.insert_one(doc)
        except DuplicateKeyError:
            raise Conflict("User already exists")
        doc["_id"] = result.inserted_id

        logger.info("Registered user %s", email)
        return self._auth_payload(doc)

    async def login_user(self, email, password) -> dict:
        email = normalize_email(email)
        if not email or not password:
            raise ValidationError("Email and password are required")

        if self.is_admin_email(email):
            raise Forbidden("Admin accounts must use the admin login portal")

        user = await self.users.find_one({"email": email})
        if not user or not await verify_and_upgrade_password(user, password, self.users):
            logger.warning("Failed login for %s", email)
            raise Unauthorized("Invalid email or password")

        return self._auth_payload(user)

    async def admin_login(self, email, password) -> dict:
        email = normalize_email(email)
        if not email or not password:
            raise ValidationError("Email and password are required")

        if not self.is_admin_email(email):
            raise Forbidden(
                "Access denied. Admin accounts must use "
                f"{self.settings.ADMIN_EMAIL_DOMAIN} email address."
            )

        user = await self.users.find_one({"email": email})
        if not user:
            logger.warning("Failed admin login for unknown account %s", email)
            raise Unauthorized("Invalid credentials")

        if user.get("role") != "admin":
            logger.warning("Non-admin account %s attempted admin login", email)
            raise Forbidden("Access denied. This account is not authorized as admin.")

        if not await verify_and_upgrade_password(user, password, self.users):
            logger.warning("Failed admin login for %s", email)
            raise Unauthorized("Invalid credentials")

        logger.info("Admin %s logged in", email)
        return self._auth_payload(user)
