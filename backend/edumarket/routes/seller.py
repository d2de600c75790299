# edumarket/routes/seller.py
from fastapi import APIRouter, Depends, status

from edumarket.dependencies import get_seller_auth_service
from edumarket.middleware.rbac import get_current_seller
from edumarket.schemas.seller import SellerAuthResponse, SellerLoginSchema, SellerRegisterSchema
from edumarket.services.seller_service import SellerAuthService, seller_profile

seller_router = APIRouter(tags=["Seller"])


@seller_router.post("/register", response_model=SellerAuthResponse, status_code=status.HTTP_201_CREATED)
async def register_seller(
    data: SellerRegisterSchema,
    service: SellerAuthService = Depends(get_seller_auth_service),
):
    return {
        "success": True,
        "message": "Seller registered successfully",
        "data": await service.register_seller(data),
    }


@seller_router.post("/login", response_model=SellerAuthResponse)
async def login_seller(
    data: SellerLoginSchema,
    service: SellerAuthService = Depends(get_seller_auth_service),
):
    return {
        "success": True,
        "message": "Login successful",
        "data": await service.login_seller(data.email, data.password),
    }


@seller_router.get("/profile")
async def get_seller_profile(seller: dict = Depends(get_current_seller)):
    return {"success": True, "data": seller_profile(seller)}
