# edumarket/models/listing.py
from datetime import datetime
from typing import Literal

from bson import ObjectId
from pydantic import BaseModel, ConfigDict, Field

COURSE_LEVELS = ("Beginner", "Intermediate", "Advanced")


class Listing(BaseModel):
    model_config = ConfigDict(arbitrary_types_allowed=True)

    title: str
    name: str
    authorName: str
    description: str
    price: float = Field(ge=0)
    originalPrice: float = Field(ge=0)
    category: str
    image: str
    createdBy: ObjectId
    createdAt: datetime = Field(default_factory=datetime.utcnow)
    updatedAt: datetime = Field(default_factory=datetime.utcnow)


class Course(Listing):
    type: Literal["course"] = "course"
    duration: str = "Self-paced"
    level: Literal["Beginner", "Intermediate", "Advanced"] = "Beginner"
    enrolledStudents: int = Field(default=0, ge=0)


class Product(Listing):
    type: Literal["product"] = "product"
