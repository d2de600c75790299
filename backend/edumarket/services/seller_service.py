# edumarket/services/seller_service.py
import logging

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo.errors import DuplicateKeyError

from edumarket.core.config import Settings
from edumarket.core.exceptions import Conflict, Unauthorized, ValidationError
from edumarket.db.database import SELLERS
from edumarket.models.seller import Seller
from edumarket.serialize import serialize_doc
from edumarket.services.auth_service import normalize_email
from edumarket.utils.auth_utils import create_access_token
from edumarket.utils.hash_utils import hash_password, verify_and_upgrade_password

logger = logging.getLogger(__name__)

SELLER_ROLE = "seller"
PUBLIC_SELLER_FIELDS = (
    "_id", "name", "email", "phone", "institutionName",
    "address", "profileImage", "isVerified", "isActive",
)


def seller_profile(seller: dict) -> dict:
    doc = serialize_doc(seller)
    return {field: doc.get(field) for field in PUBLIC_SELLER_FIELDS}


class SellerAuthService:
    def __init__(self, db: AsyncIOMotorDatabase, settings: Settings):
        self.sellers = db[SELLERS]
        self.settings = settings

    @property
    def domain(self) -> str:
        return self.settings.SELLER_EMAIL_DOMAIN.lower()

    def _auth_payload(self, seller: dict) -> dict:
        return {
            "token": create_access_token(seller["_id"], SELLER_ROLE, self.settings),
            "seller": seller_profile(seller),
        }

    async def register_seller(self, data) -> dict:
        email = normalize_email(data.email)
        required = (data.name, email, data.password, data.confirmPassword, data.phone, data.institutionName)
        if not all(value and value.strip() for value in required):
            raise ValidationError("Please fill all required fields")

        if not email.endswith(self.domain):
            raise ValidationError(f"Email must be an institutional {self.settings.SELLER_EMAIL_DOMAIN} email")

        if data.password != data.confirmPassword:
            raise ValidationError("Passwords do not match")

        if await self.sellers.find_one({"email": email}):
            raise Conflict("Seller with this email already exists")

        seller = Seller(
            name=data.name.strip(),
            email=email,
            password=hash_password(data.password),
            phone=data.phone.strip(),
            institutionName=data.institutionName.strip(),
            address=(data.address or "").strip(),
        )
        doc = seller.model_dump()
        try:
            result = await self.sellers.insert_one(doc)
        except DuplicateKeyError:
            raise Conflict("Seller with this email already exists")
        doc["_id"] = result.inserted_id

        logger.info("Registered seller %s (%s)", email, doc["institutionName"])
        return self._auth_payload(doc)

    async def login_seller(self, email, password) -> dict:
        email = normalize_email(email)
        if not email or not password:
            raise ValidationError("Please provide email and password")

        if not email.endswith(self.domain):
            raise ValidationError(f"Only {self.settings.SELLER_EMAIL_DOMAIN} institutional emails are allowed")

        seller = await self.sellers.find_one({"email": email})
        if not seller or not await verify_and_upgrade_password(seller, password, self.sellers):
            logger.warning("Failed seller login for %s", email)
            raise Unauthorized("Invalid email or password")

        return self._auth_payload(seller)
