# edumarket/services/listing_service.py
import logging
import math
import re
from datetime import datetime
from typing import List, Optional

from fastapi import UploadFile
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import DESCENDING, ReturnDocument

from edumarket.core.config import Settings
from edumarket.core.exceptions import Forbidden, NotFound, ValidationError
from edumarket.db.database import COURSES, PRODUCTS, SELLERS, parse_object_id
from edumarket.models.listing import COURSE_LEVELS, Course, Product
from edumarket.schemas.listing import ListingFilters, ListingForm
from edumarket.serialize import serialize_doc
from edumarket.utils.uploads import has_file, save_image

logger = logging.getLogger(__name__)

NEWEST_FIRST = [("createdAt", DESCENDING), ("_id", DESCENDING)]
SEARCH_FIELDS = ("title", "name", "description")


def _blank(value) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def parse_amount(value, label: str) -> float:
    try:
        amount = float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{label} must be a number")
    if not math.isfinite(amount):
        raise ValidationError(f"{label} must be a number")
    if amount < 0:
        raise ValidationError(f"{label} cannot be negative")
    return amount


def parse_level(value: str) -> str:
    level = value.strip()
    if level not in COURSE_LEVELS:
        raise ValidationError(f"Level must be one of: {', '.join(COURSE_LEVELS)}")
    return level


async def populate_sellers(db: AsyncIOMotorDatabase, docs: List[dict]) -> List[dict]:
    """Serialize listings, replacing ``createdBy`` with the owner's name and email."""
    seller_ids = list({doc["createdBy"] for doc in docs if doc.get("createdBy") is not None})
    owners = {}
    if seller_ids:
        sellers = await db[SELLERS].find(
            {"_id": {"$in": seller_ids}}, {"name": 1, "email": 1}
        ).to_list(length=None)
        for seller in sellers:
            owners[seller["_id"]] = serialize_doc(seller)

    populated = []
    for doc in docs:
        item = serialize_doc(doc)
        item["createdBy"] = owners.get(doc.get("createdBy"))
        populated.append(item)
    return populated


class ListingService:
    """Ownership-gated CRUD shared by courses and products."""

    kind = ""
    label = ""
    collection_name = ""
    model = None

    def __init__(self, db: AsyncIOMotorDatabase, settings: Settings):
        self.db = db
        self.collection = db[self.collection_name]
        self.settings = settings

    # -----------------------------
    # Helpers
    # -----------------------------
    def _extra_fields(self, form: ListingForm) -> dict:
        return {}

    def _filter_query(self, filters: ListingFilters) -> dict:
        query = {}
        if not _blank(filters.category):
            query["category"] = filters.category.strip()

        price = {}
        if filters.minPrice is not None:
            price["$gte"] = filters.minPrice
        if filters.maxPrice is not None:
            price["$lte"] = filters.maxPrice
        if price:
            query["price"] = price

        if not _blank(filters.search):
            pattern = re.escape(filters.search.strip())
            query["$or"] = [
                {field: {"$regex": pattern, "$options": "i"}} for field in SEARCH_FIELDS
            ]
        return query

    async def _find(self, query: dict) -> List[dict]:
        docs = await self.collection.find(query).sort(NEWEST_FIRST).to_list(length=None)
        return await populate_sellers(self.db, docs)

    async def _get_doc(self, listing_id: str) -> dict:
        oid = parse_object_id(listing_id)
        doc = await self.collection.find_one({"_id": oid}) if oid is not None else None
        if not doc:
            raise NotFound(f"{self.label} not found")
        return doc

    async def _get_owned(self, listing_id: str, seller: dict) -> dict:
        doc = await self._get_doc(listing_id)
        if str(doc.get("createdBy")) != str(seller["_id"]):
            raise Forbidden("Not authorized")
        return doc

    async def _store_image(self, image: UploadFile) -> str:
        return await save_image(image, self.collection_name, self.kind, self.settings)

    # -----------------------------
    # Public operations
    # -----------------------------
    async def create(self, form: ListingForm, image: Optional[UploadFile], seller: dict) -> dict:
        if not has_file(image):
            raise ValidationError(f"{self.label} image is required")

        required = (form.title, form.name, form.authorName, form.description, form.price, form.category)
        if any(_blank(value) for value in required):
            raise ValidationError("Please provide all required fields")

        price = parse_amount(form.price, "Price")
        original_price = price
        if not _blank(form.originalPrice):
            original_price = parse_amount(form.originalPrice, "Original price")
        extra = self._extra_fields(form)

        listing = self.model(
            title=form.title.strip(),
            name=form.name.strip(),
            authorName=form.authorName.strip(),
            description=form.description,
            price=price,
            originalPrice=original_price,
            category=form.category.strip(),
            image=await self._store_image(image),
            createdBy=seller["_id"],
            **extra,
        )
        doc = listing.model_dump()
        result = await self.collection.insert_one(doc)
        doc["_id"] = result.inserted_id

        logger.info("Seller %s created %s %s", seller["_id"], self.kind, doc["_id"])
        return (await populate_sellers(self.db, [doc]))[0]

    async def list_all(self, filters: ListingFilters) -> List[dict]:
        return await self._find(self._filter_query(filters))

    async def list_by_seller(self, seller_id: str) -> List[dict]:
        oid = parse_object_id(seller_id)
        if oid is None:
            return []
        return await self._find({"createdBy": oid})

    async def get(self, listing_id: str) -> dict:
        doc = await self._get_doc(listing_id)
        return (await populate_sellers(self.db, [doc]))[0]

    async def update(
        self,
        listing_id: str,
        form: ListingForm,
        image: Optional[UploadFile],
        seller: dict,
    ) -> dict:
        doc = await self._get_owned(listing_id, seller)

        changes = {}
        for field in ("title", "name", "authorName", "category"):
            value = getattr(form, field)
            if not _blank(value):
                changes[field] = value.strip()
        if not _blank(form.description):
            changes["description"] = form.description
        if not _blank(form.price):
            changes["price"] = parse_amount(form.price, "Price")
        if not _blank(form.originalPrice):
            changes["originalPrice"] = parse_amount(form.originalPrice, "Original price")
        changes.update(self._extra_fields(form))

        if has_file(image):
            changes["image"] = await self._store_image(image)

        changes["updatedAt"] = datetime.utcnow()
        updated = await self.collection.find_one_and_update(
            {"_id": doc["_id"]},
            {"$set": changes},
            return_document=ReturnDocument.AFTER,
        )
        if not updated:
            raise NotFound(f"{self.label} not found")

        logger.info("Seller %s updated %s %s", seller["_id"], self.kind, doc["_id"])
        return (await populate_sellers(self.db, [updated]))[0]

    async def delete(self, listing_id: str, seller: dict) -> None:
        doc = await self._get_owned(listing_id, seller)
        await self.collection.delete_one({"_id": doc["_id"]})
        logger.info("Seller %s deleted %s %s", seller["_id"], self.kind, doc["_id"])


class CourseService(ListingService):
    kind = "course"
    label = "Course"
    collection_name = COURSES
    model = Course

    def _extra_fields(self, form: ListingForm) -> dict:
        extra = {}
        if not _blank(form.duration):
            extra["duration"] = form.duration.strip()
        if not _blank(form.level):
            extra["level"] = parse_level(form.level)
        return extra

    def _filter_query(self, filters: ListingFilters) -> dict:
        query = super()._filter_query(filters)
        if not _blank(filters.level):
            query["level"] = filters.level.strip()
        return query

    async def enroll(self, course_id: str) -> dict:
        """Add one enrollment. Repeated calls keep counting."""
        oid = parse_object_id(course_id)
        course = None
        if oid is not None:
            course = await self.collection.find_one_and_update(
                {"_id": oid},
                {"$inc": {"enrolledStudents": 1}, "$set": {"updatedAt": datetime.utcnow()}},
                return_document=ReturnDocument.AFTER,
            )
        if not course:
            raise NotFound("Course not found")
        return (await populate_sellers(self.db, [course]))[0]


class ProductService(ListingService):
    kind = "product"
    label = "Product"
    collection_name = PRODUCTS
    model = Product
