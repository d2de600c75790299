# edumarket/routes/admin.py
from fastapi import APIRouter, Depends, Query

from edumarket.db.database import COURSES, PRODUCTS
from edumarket.dependencies import get_admin_service
from edumarket.middleware.rbac import is_admin
from edumarket.schemas.admin import (
    AccountListResponse,
    CourseListResponse,
    MessageResponse,
    ProductListResponse,
    StatsResponse,
)
from edumarket.services.admin_service import DEFAULT_LIMIT, AdminService

admin_router = APIRouter(tags=["Admin"])


@admin_router.get("/stats", response_model=StatsResponse)
async def get_stats(admin: dict = Depends(is_admin), service: AdminService = Depends(get_admin_service)):
    return await service.stats()


# ------------------------
# Accounts (users + sellers)
# ------------------------
@admin_router.get("/users", response_model=AccountListResponse)
async def list_users(
    page: str = Query("1"),
    limit: str = Query(str(DEFAULT_LIMIT)),
    admin: dict = Depends(is_admin),
    service: AdminService = Depends(get_admin_service),
):
    return await service.list_accounts(page, limit)


@admin_router.delete("/users/{user_id}", response_model=MessageResponse)
async def delete_user(
    user_id: str,
    admin: dict = Depends(is_admin),
    service: AdminService = Depends(get_admin_service),
):
    message = await service.delete_account(user_id, admin)
    return {"success": True, "message": message}


# ------------------------
# Listings
# ------------------------
@admin_router.get("/courses", response_model=CourseListResponse)
async def list_courses(
    page: str = Query("1"),
    limit: str = Query(str(DEFAULT_LIMIT)),
    admin: dict = Depends(is_admin),
    service: AdminService = Depends(get_admin_service),
):
    courses, pagination = await service.list_listings(COURSES, page, limit)
    return {"courses": courses, "pagination": pagination}


@admin_router.delete("/courses/{course_id}", response_model=MessageResponse)
async def delete_course(
    course_id: str,
    admin: dict = Depends(is_admin),
    service: AdminService = Depends(get_admin_service),
):
    await service.delete_listing(COURSES, course_id, admin)
    return {"success": True, "message": "Course deleted successfully"}


@admin_router.get("/products", response_model=ProductListResponse)
async def list_products(
    page: str = Query("1"),
    limit: str = Query(str(DEFAULT_LIMIT)),
    admin: dict = Depends(is_admin),
    service: AdminService = Depends(get_admin_service),
):
    products, pagination = await service.list_listings(PRODUCTS, page, limit)
    return {"products": products, "pagination": pagination}


@admin_router.delete("/products/{product_id}", response_model=MessageResponse)
async def delete_product(
    product_id: str,
    admin: dict = Depends(is_admin),
    service: AdminService = Depends(get_admin_service),
):
    await service.delete_listing(PRODUCTS, product_id, admin)
    return {"success": True, "message": "Product deleted successfully"}
