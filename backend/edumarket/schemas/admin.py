# edumarket/schemas/admin.py
from typing import Any, Dict, List

from pydantic import BaseModel


class Pagination(BaseModel):
    total: int
    page: int
    pages: int


class DashboardStats(BaseModel):
    totalUsers: int
    totalSellers: int
    totalCourses: int
    totalProducts: int


class StatsResponse(BaseModel):
    stats: DashboardStats
    recentUsers: List[Dict[str, Any]]


class AccountListResponse(BaseModel):
    users: List[Dict[str, Any]]
    pagination: Pagination


class CourseListResponse(BaseModel):
    courses: List[Dict[str, Any]]
    pagination: Pagination


class ProductListResponse(BaseModel):
    products: List[Dict[str, Any]]
    pagination: Pagination


class MessageResponse(BaseModel):
    success: bool = True
    message: str
