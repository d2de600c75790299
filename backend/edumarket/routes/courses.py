# edumarket/routes/courses.py
from typing import Optional

from fastapi import APIRouter, Depends, File, Query, UploadFile, status

from edumarket.dependencies import get_course_service
from edumarket.middleware.rbac import get_current_seller, get_current_user
from edumarket.schemas.admin import MessageResponse
from edumarket.schemas.listing import (
    ListingFilters,
    ListingForm,
    ListingListResponse,
    ListingResponse,
    listing_form,
)
from edumarket.services.listing_service import CourseService

course_router = APIRouter(tags=["Courses"])


# -----------------------------
# Create course
# -----------------------------
@course_router.post("", response_model=ListingResponse, status_code=status.HTTP_201_CREATED)
async def create_course(
    form: ListingForm = Depends(listing_form),
    image: Optional[UploadFile] = File(None),
    seller: dict = Depends(get_current_seller),
    service: CourseService = Depends(get_course_service),
):
    return {"success": True, "data": await service.create(form, image, seller)}


# -----------------------------
# Public listing
# -----------------------------
@course_router.get("", response_model=ListingListResponse)
async def list_courses(
    category: Optional[str] = Query(None),
    level: Optional[str] = Query(None),
    minPrice: Optional[float] = Query(None, ge=0),
    maxPrice: Optional[float] = Query(None, ge=0),
    search: Optional[str] = Query(None),
    service: CourseService = Depends(get_course_service),
):
    filters = ListingFilters(
        category=category, level=level, minPrice=minPrice, maxPrice=maxPrice, search=search
    )
    courses = await service.list_all(filters)
    return {"success": True, "count": len(courses), "data": courses}


@course_router.get("/seller/{seller_id}", response_model=ListingListResponse)
async def list_seller_courses(seller_id: str, service: CourseService = Depends(get_course_service)):
    courses = await service.list_by_seller(seller_id)
    return {"success": True, "count": len(courses), "data": courses}


@course_router.get("/{course_id}", response_model=ListingResponse)
async def get_course(course_id: str, service: CourseService = Depends(get_course_service)):
    return {"success": True, "data": await service.get(course_id)}


# -----------------------------
# Owner-only changes
# -----------------------------
@course_router.put("/{course_id}", response_model=ListingResponse)
async def update_course(
    course_id: str,
    form: ListingForm = Depends(listing_form),
    image: Optional[UploadFile] = File(None),
    seller: dict = Depends(get_current_seller),
    service: CourseService = Depends(get_course_service),
):
    return {"success": True, "data": await service.update(course_id, form, image, seller)}


@course_router.delete("/{course_id}", response_model=MessageResponse)
async def delete_course(
    course_id: str,
    seller: dict = Depends(get_current_seller),
    service: CourseService = Depends(get_course_service),
):
    await service.delete(course_id, seller)
    return {"success": True, "message": "Course deleted successfully"}


# -----------------------------
# Enrollment
# -----------------------------
@course_router.post("/{course_id}/enroll", response_model=ListingResponse)
async def enroll_course(
    course_id: str,
    user: dict = Depends(get_current_user),
    service: CourseService = Depends(get_course_service),
):
    return {"success": True, "data": await service.enroll(course_id)}
