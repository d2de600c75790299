# edumarket/services/admin_service.py
import logging
import math
from datetime import datetime
from typing import List, Tuple

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import DESCENDING

from edumarket.core.exceptions import NotFound, ValidationError
from edumarket.db.database import COURSES, PRODUCTS, SELLERS, USERS, parse_object_id
from edumarket.serialize import serialize_doc
from edumarket.services.listing_service import populate_sellers

logger = logging.getLogger(__name__)

NEWEST_FIRST = [("createdAt", DESCENDING), ("_id", DESCENDING)]
DEFAULT_LIMIT = 10
MAX_LIMIT = 100


def page_window(page, limit) -> Tuple[int, int, int]:
    """Return ``(page, limit, skip)``, falling back to defaults for junk input."""
    try:
        page = int(page)
    except (TypeError, ValueError):
        page = 1
    try:
        limit = int(limit)
    except (TypeError, ValueError):
        limit = DEFAULT_LIMIT
    page = page if page > 0 else 1
    limit = min(limit if limit > 0 else DEFAULT_LIMIT, MAX_LIMIT)
    return page, limit, (page - 1) * limit


def pagination(total: int, page: int, limit: int) -> dict:
    return {"total": total, "page": page, "pages": math.ceil(total / limit)}


def _created_at(doc: dict) -> datetime:
    return doc.get("createdAt") or datetime.min


class AdminService:
    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db
        self.users = db[USERS]
        self.sellers = db[SELLERS]

    async def stats(self) -> dict:
        recent = await self.users.find({}, {"password": 0}).sort(NEWEST_FIRST).limit(5).to_list(length=5)
        return {
            "stats": {
                "totalUsers": await self.users.count_documents({}),
                "totalSellers": await self.sellers.count_documents({}),
                "totalCourses": await self.db[COURSES].count_documents({}),
                "totalProducts": await self.db[PRODUCTS].count_documents({}),
            },
            "recentUsers": [serialize_doc(user) for user in recent],
        }

    async def list_accounts(self, page=1, limit=DEFAULT_LIMIT) -> dict:
        """Users and sellers as a single feed, newest first.

        Each source is read up to ``skip + limit`` so the merged slice matches
        a global ordering of both collections.
        """
        page, limit, skip = page_window(page, limit)
        window = skip + limit

        users = await self.users.find({}, {"password": 0}).sort(NEWEST_FIRST).limit(window).to_list(length=window)
        sellers = await self.sellers.find({}, {"password": 0}).sort(NEWEST_FIRST).limit(window).to_list(length=window)

        merged: List[dict] = []
        for user in users:
            item = serialize_doc(user)
            item["role"] = user.get("role") or "user"
            merged.append(item)
        for seller in sellers:
            item = serialize_doc(seller)
            item["role"] = "seller"
            merged.append(item)

        merged.sort(key=_created_at, reverse=True)
        total = await self.users.count_documents({}) + await self.sellers.count_documents({})
        return {
            "users": merged[skip:skip + limit],
            "pagination": pagination(total, page, limit),
        }

    async def delete_account(self, account_id: str, admin: dict) -> str:
        oid = parse_object_id(account_id)
        if oid is None:
            raise NotFound("User not found")
        if oid == admin["_id"]:
            raise ValidationError("Cannot delete your own account")

        result = await self.users.delete_one({"_id": oid})
        if result.deleted_count:
            logger.info("Admin %s deleted user %s", admin["_id"], oid)
            return "User deleted successfully"

        result = await self.sellers.delete_one({"_id": oid})
        if result.deleted_count:
            logger.info("Admin %s deleted seller %s", admin["_id"], oid)
            return "Seller deleted successfully"

        raise NotFound("User not found")

    async def list_listings(self, collection: str, page=1, limit=DEFAULT_LIMIT) -> Tuple[List[dict], dict]:
        page, limit, skip = page_window(page, limit)
        docs = await self.db[collection].find({}).sort(NEWEST_FIRST).skip(skip).limit(limit).to_list(length=limit)
        total = await self.db[collection].count_documents({})
        return await populate_sellers(self.db, docs), pagination(total, page, limit)

    async def delete_listing(self, collection: str, listing_id: str, admin: dict) -> None:
        label = "Course" if collection == COURSES else "Product"
        oid = parse_object_id(listing_id)
        result = await self.db[collection].delete_one({"_id": oid}) if oid is not None else None
        if result is None or not result.deleted_count:
            raise NotFound(f"{label} not found")
        logger.info("Admin %s deleted %s %s", admin["_id"], label.lower(), oid)
