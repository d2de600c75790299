# edumarket/models/user.py
from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field


class User(BaseModel):
    name: str
    email: str
    password: str
    role: Literal["user", "admin"] = "user"
    createdAt: datetime = Field(default_factory=datetime.utcnow)
    updatedAt: datetime = Field(default_factory=datetime.utcnow)
