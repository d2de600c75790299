# edumarket/middleware/rbac.py
import logging
from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from motor.motor_asyncio import AsyncIOMotorDatabase

from edumarket.core.config import Settings
from edumarket.core.exceptions import Forbidden, Unauthorized
from edumarket.db.database import SELLERS, USERS, get_db, parse_object_id
from edumarket.dependencies import get_app_settings
from edumarket.utils.auth_utils import InvalidToken, TokenPayload, decode_token

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


def get_token_payload(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    settings: Settings = Depends(get_app_settings),
) -> TokenPayload:
    if credentials is None or not credentials.credentials:
        raise Unauthorized("Not authorized, no token")
    try:
        return decode_token(credentials.credentials, settings)
    except InvalidToken as e:
        logger.info("Rejected bearer token: %s", e)
        raise Unauthorized("Not authorized, token failed")


async def _find_principal(db: AsyncIOMotorDatabase, collection: str, principal_id: str):
    oid = parse_object_id(principal_id)
    if oid is None:
        return None
    return await db[collection].find_one({"_id": oid}, {"password": 0})


async def get_current_user(
    request: Request,
    payload: TokenPayload = Depends(get_token_payload),
    db: AsyncIOMotorDatabase = Depends(get_db),
) -> dict:
    user = await _find_principal(db, USERS, payload.id)
    if not user:
        raise Unauthorized("User not found")
    request.state.user = user
    return user


async def is_admin(user: dict = Depends(get_current_user)) -> dict:
    if user.get("role") != "admin":
        raise Forbidden("Access denied. Admin only.")
    return user


async def get_current_seller(
    request: Request,
    payload: TokenPayload = Depends(get_token_payload),
    db: AsyncIOMotorDatabase = Depends(get_db),
) -> dict:
    seller = await _find_principal(db, SELLERS, payload.id)
    if not seller:
        raise Unauthorized("Seller not found")
    if not seller.get("isActive", True):
        raise Forbidden("Your account has been deactivated")
    request.state.seller = seller
    return seller
