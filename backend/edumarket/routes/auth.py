# edumarket/routes/auth.py
from fastapi import APIRouter, Depends, status

from edumarket.dependencies import get_auth_service
from edumarket.middleware.rbac import get_current_user
from edumarket.schemas.user import AuthResponse, LoginSchema, RegisterSchema, UserOut
from edumarket.serialize import serialize_doc
from edumarket.services.auth_service import AuthService

auth_router = APIRouter(tags=["Auth"])


# ------------------------
# Register
# ------------------------
@auth_router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def register(data: RegisterSchema, service: AuthService = Depends(get_auth_service)):
    return await service.register_user(data.name, data.email, data.password)


# ------------------------
# Login (regular users only)
# ------------------------
@auth_router.post("/login", response_model=AuthResponse)
async def login(data: LoginSchema, service: AuthService = Depends(get_auth_service)):
    return await service.login_user(data.email, data.password)


# ------------------------
# Admin login
# ------------------------
@auth_router.post("/admin/login", response_model=AuthResponse)
async def admin_login(data: LoginSchema, service: AuthService = Depends(get_auth_service)):
    return await service.admin_login(data.email, data.password)


# ------------------------
# Get current user info
# ------------------------
@auth_router.get("/profile", response_model=UserOut)
async def get_profile(current_user: dict = Depends(get_current_user)):
    return serialize_doc(current_user)
