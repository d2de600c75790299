# edumarket/main.py
import logging
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from motor.motor_asyncio import AsyncIOMotorDatabase
from starlette.exceptions import HTTPException as StarletteHTTPException

from edumarket import __version__
from edumarket.core.config import Settings, get_settings
from edumarket.core.error_handlers import (
    generic_exception_handler,
    http_exception_handler,
    validation_exception_handler,
)
from edumarket.core.logging import setup_logging
from edumarket.db.database import check_connection, create_client, ensure_indexes

# Routers
from edumarket.routes.admin import admin_router
from edumarket.routes.auth import auth_router
from edumarket.routes.courses import course_router
from edumarket.routes.products import product_router
from edumarket.routes.seller import seller_router
from edumarket.utils.uploads import ensure_upload_dirs

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None, database: Optional[AsyncIOMotorDatabase] = None) -> FastAPI:
    settings = settings or get_settings()
    setup_logging(settings)

    # ------------------------
    # MongoDB lifecycle
    # ------------------------
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        client = None
        try:
            if database is None:
                client = create_client(settings)
                app.state.db = client[settings.MONGO_DB_NAME]
                # Refuse to serve requests without a reachable database.
                await check_connection(app.state.db)
            await ensure_indexes(app.state.db)
            yield
        finally:
            if client is not None:
                client.close()

    app = FastAPI(title="EduMarket API", version=__version__, lifespan=lifespan)
    app.state.settings = settings
    app.state.db = database

    # ------------------------
    # CORS
    # ------------------------
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ------------------------
    # Routes
    # ------------------------
    app.include_router(auth_router, prefix="/api/auth")
    app.include_router(admin_router, prefix="/api/admin")
    app.include_router(product_router, prefix="/api/products")
    app.include_router(course_router, prefix="/api/courses")
    app.include_router(seller_router, prefix="/api/seller")

    ensure_upload_dirs(settings)
    app.mount("/uploads", StaticFiles(directory=settings.UPLOAD_DIR), name="uploads")

    # ------------------------
    # Exception handlers
    # ------------------------
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, generic_exception_handler)

    # ------------------------
    # Health & root
    # ------------------------
    @app.get("/")
    async def root():
        return {
            "message": "API is running...",
            "endpoints": {
                "auth": "/api/auth",
                "admin": "/api/admin",
                "products": "/api/products",
                "courses": "/api/courses",
                "seller": "/api/seller",
            },
        }

    @app.get("/healthz")
    async def healthz():
        return {"status": "ok"}

    return app


def run():
    settings = get_settings()
    uvicorn.run("edumarket.main:create_app", factory=True, host="0.0.0.0", port=settings.PORT)


if __name__ == "__main__":
    run()
