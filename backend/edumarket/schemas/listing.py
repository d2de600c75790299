# edumarket/schemas/listing.py
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from fastapi import Form
from pydantic import BaseModel


@dataclass
class ListingForm:
    """Multipart form fields shared by course and product create/update."""

    title: Optional[str] = None
    name: Optional[str] = None
    authorName: Optional[str] = None
    description: Optional[str] = None
    price: Optional[str] = None
    originalPrice: Optional[str] = None
    category: Optional[str] = None
    # courses only
    duration: Optional[str] = None
    level: Optional[str] = None


@dataclass
class ListingFilters:
    category: Optional[str] = None
    level: Optional[str] = None
    minPrice: Optional[float] = None
    maxPrice: Optional[float] = None
    search: Optional[str] = None


class ListingResponse(BaseModel):
    success: bool = True
    data: Dict[str, Any]


class ListingListResponse(BaseModel):
    success: bool = True
    count: int
    data: List[Dict[str, Any]]


def listing_form(
    title: Optional[str] = Form(None),
    name: Optional[str] = Form(None),
    authorName: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    price: Optional[str] = Form(None),
    originalPrice: Optional[str] = Form(None),
    category: Optional[str] = Form(None),
    duration: Optional[str] = Form(None),
    level: Optional[str] = Form(None),
) -> ListingForm:
    return ListingForm(
        title=title,
        name=name,
        authorName=authorName,
        description=description,
        price=price,
        originalPrice=originalPrice,
        category=category,
        duration=duration,
        level=level,
    )
