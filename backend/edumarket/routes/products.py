# edumarket/routes/products.py
from typing import Optional

from fastapi import APIRouter, Depends, File, Query, UploadFile, status

from edumarket.dependencies import get_product_service
from edumarket.middleware.rbac import get_current_seller
from edumarket.schemas.admin import MessageResponse
from edumarket.schemas.listing import (
    ListingFilters,
    ListingForm,
    ListingListResponse,
    ListingResponse,
    listing_form,
)
from edumarket.services.listing_service import ProductService

product_router = APIRouter(tags=["Products"])


@product_router.post("", response_model=ListingResponse, status_code=status.HTTP_201_CREATED)
async def create_product(
    form: ListingForm = Depends(listing_form),
    image: Optional[UploadFile] = File(None),
    seller: dict = Depends(get_current_seller),
    service: ProductService = Depends(get_product_service),
):
    return {"success": True, "data": await service.create(form, image, seller)}


@product_router.get("", response_model=ListingListResponse)
async def list_products(
    category: Optional[str] = Query(None),
    minPrice: Optional[float] = Query(None, ge=0),
    maxPrice: Optional[float] = Query(None, ge=0),
    search: Optional[str] = Query(None),
    service: ProductService = Depends(get_product_service),
):
    filters = ListingFilters(category=category, minPrice=minPrice, maxPrice=maxPrice, search=search)
    products = await service.list_all(filters)
    return {"success": True, "count": len(products), "data": products}


@product_router.get("/seller/{seller_id}", response_model=ListingListResponse)
async def list_seller_products(seller_id: str, service: ProductService = Depends(get_product_service)):
    products = await service.list_by_seller(seller_id)
    return {"success": True, "count": len(products), "data": products}


@product_router.get("/{product_id}", response_model=ListingResponse)
async def get_product(product_id: str, service: ProductService = Depends(get_product_service)):
    return {"success": True, "data": await service.get(product_id)}


@product_router.put("/{product_id}", response_model=ListingResponse)
async def update_product(
    product_id: str,
    form: ListingForm = Depends(listing_form),
    image: Optional[UploadFile] = File(None),
    seller: dict = Depends(get_current_seller),
    service: ProductService = Depends(get_product_service),
):
    return {"success": True, "data": await service.update(product_id, form, image, seller)}


@product_router.delete("/{product_id}", response_model=MessageResponse)
async def delete_product(
    product_id: str,
    seller: dict = Depends(get_current_seller),
    service: ProductService = Depends(get_product_service),
):
    await service.delete(product_id, seller)
    return {"success": True, "message": "Product deleted successfully"}
