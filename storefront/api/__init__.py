# storefront/api/__init__.py
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from storefront.api.routers import carts, health, products, users
from storefront.data.database import create_tables
from storefront.data.seed import seed
from storefront.services.auth_service import TokenService
from storefront.utils.settings import SEED_PRODUCTS, require_jwt_secret
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    # missing or malformed request fields are a plain bad request
    return JSONResponse(status_code=400, content={"detail": jsonable_encoder(exc.errors())})


def create_app(jwt_secret: str | None = None, init_db: bool = True) -> FastAPI:
    # fails fast when no signing secret is configured
    secret = require_jwt_secret(jwt_secret)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if init_db:
            create_tables()
            logger.info("Database tables ready")
            if SEED_PRODUCTS:
                seed()
        yield

    app = FastAPI(title="Storefront API", version="1.0.0", lifespan=lifespan)
    app.state.token_service = TokenService(secret)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)

    app.include_router(health.router)
    app.include_router(users.router)
    app.include_router(products.router)
    app.include_router(carts.router)

    return app
