# edumarket/schemas/seller.py
from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class SellerRegisterSchema(BaseModel):
    name: Optional[str] = None
    email: Optional[EmailStr] = None
    password: Optional[str] = None
    confirmPassword: Optional[str] = None
    phone: Optional[str] = None
    institutionName: Optional[str] = None
    address: Optional[str] = None


class SellerLoginSchema(BaseModel):
    email: Optional[EmailStr] = None
    password: Optional[str] = None


class SellerOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., alias="_id")
    name: str
    email: str
    phone: str
    institutionName: str
    address: Optional[str] = ""
    profileImage: Optional[str] = ""
    isVerified: bool
    isActive: bool


class SellerAuthData(BaseModel):
    token: str
    seller: SellerOut


class SellerAuthResponse(BaseModel):
    success: bool = True
    message: str
    data: SellerAuthData
