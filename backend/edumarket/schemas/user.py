# edumarket/schemas/user.py
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class RegisterSchema(BaseModel):
    # Missing fields are reported by the auth service, not by pydantic.
    name: Optional[str] = None
    email: Optional[EmailStr] = None
    password: Optional[str] = None


class LoginSchema(BaseModel):
    email: Optional[EmailStr] = None
    password: Optional[str] = None


class AuthResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., alias="_id")
    name: str
    email: str
    role: str
    token: str


class UserOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., alias="_id")
    name: str
    email: str
    role: str = "user"
    createdAt: Optional[datetime] = None
    updatedAt: Optional[datetime] = None
