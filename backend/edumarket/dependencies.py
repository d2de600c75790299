# edumarket/dependencies.py
from fastapi import Depends, Request
from motor.motor_asyncio import AsyncIOMotorDatabase

from edumarket.core.config import Settings
from edumarket.db.database import get_db
from edumarket.services.admin_service import AdminService
from edumarket.services.auth_service import AuthService
from edumarket.services.listing_service import CourseService, ProductService
from edumarket.services.seller_service import SellerAuthService


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_auth_service(
    db: AsyncIOMotorDatabase = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
) -> AuthService:
    return AuthService(db, settings)


def get_seller_auth_service(
    db: AsyncIOMotorDatabase = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
) -> SellerAuthService:
    return SellerAuthService(db, settings)


def get_course_service(
    db: AsyncIOMotorDatabase = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
) -> CourseService:
    return CourseService(db, settings)


def get_product_service(
    db: AsyncIOMotorDatabase = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
) -> ProductService:
    return ProductService(db, settings)


def get_admin_service(db: AsyncIOMotorDatabase = Depends(get_db)) -> AdminService:
    return AdminService(db)
