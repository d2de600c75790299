# edumarket/models/seller.py
from datetime import datetime

from pydantic import BaseModel, Field


class Seller(BaseModel):
    name: str
    email: str
    password: str
    phone: str
    institutionName: str
    address: str = ""
    profileImage: str = ""

    # Account flags are defaults only; no public endpoint changes them.
    isVerified: bool = False
    isActive: bool = True

    totalCourses: int = 0
    totalProducts: int = 0
    totalRevenue: float = 0
    createdAt: datetime = Field(default_factory=datetime.utcnow)
    updatedAt: datetime = Field(default_factory=datetime.utcnow)
