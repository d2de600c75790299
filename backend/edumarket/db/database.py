# edumarket/db/database.py
import asyncio
import logging
from typing import Optional

from bson import ObjectId
from bson.errors import InvalidId
from fastapi import Request
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from pymongo import ASCENDING

from edumarket.core.config import Settings

logger = logging.getLogger(__name__)

USERS = "users"
SELLERS = "sellers"
COURSES = "courses"
PRODUCTS = "products"


def create_client(settings: Settings) -> AsyncIOMotorClient:
    return AsyncIOMotorClient(settings.MONGO_URL, serverSelectionTimeoutMS=5000)


async def check_connection(db: AsyncIOMotorDatabase, timeout: float = 5) -> None:
    """Ping the server; raise if it cannot be reached within ``timeout`` seconds."""
    try:
        await asyncio.wait_for(db.command("ping"), timeout=timeout)
        logger.info("✅ MongoDB connected successfully.")
    except Exception as e:
        logger.error("❌ MongoDB connection failed: %s", e)
        raise


async def ensure_indexes(db: AsyncIOMotorDatabase) -> None:
    await db[USERS].create_index([("email", ASCENDING)], unique=True)
    await db[SELLERS].create_index([("email", ASCENDING)], unique=True)

    await db[COURSES].create_index([("category", ASCENDING)])
    await db[COURSES].create_index([("level", ASCENDING)])
    await db[COURSES].create_index([("createdBy", ASCENDING)])

    await db[PRODUCTS].create_index([("category", ASCENDING)])
    await db[PRODUCTS].create_index([("createdBy", ASCENDING)])


def parse_object_id(value) -> Optional[ObjectId]:
    if isinstance(value, ObjectId):
        return value
    try:
        return ObjectId(str(value))
    except (InvalidId, TypeError):
        return None


def get_db(request: Request) -> AsyncIOMotorDatabase:
    return request.app.state.db
